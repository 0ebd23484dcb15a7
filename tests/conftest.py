"""
Shared fixtures: a deterministic word-list engine standing in for the statistical detectors.
"""
import io

import pytest

from langsniff.config import Configuration
from langsniff.language_detector import LanguageClassifier
from langsniff.models import LanguageDetectionEngine
from langsniff.registry import LanguageRegistry


VOCABULARY = {
    'en': {'hello', 'everyone', 'the', 'and', 'good', 'morning'},
    'fr': {'bonjour', 'à', 'tous', 'le', 'et', 'merci'},
    'de': {'hallo', 'alle', 'und', 'der', 'guten', 'morgen'},
    'es': {'hola', 'a', 'todos', 'el', 'y', 'gracias'},
    'nl': {'hallo', 'allemaal', 'en', 'de', 'goedemorgen'},
    'zh-cn': {'你好'},
}


class WordListEngine(LanguageDetectionEngine):
    """Scores languages by the share of known words; nothing known means undetermined."""

    name = 'wordlist'

    def __init__(self, vocabulary=None, floor=0.1):
        self.vocabulary = vocabulary or VOCABULARY
        self.floor = floor
        self.calls = []

    def supported_languages(self):
        return list(self.vocabulary) + ['zh-tw']

    def detect(self, text, candidates=frozenset()):
        self.calls.append((text, frozenset(candidates)))
        words = text.lower().replace(',', ' ').split()
        hits = {}
        for lang, known in self.vocabulary.items():
            if candidates and lang not in candidates:
                continue
            count = sum(1 for word in words if word in known)
            if count:
                hits[lang] = count
        total = sum(hits.values())
        ranking = sorted(((lang, count / total) for lang, count in hits.items()),
                         key=lambda item: (-item[1], item[0]))
        return [(lang, prob) for lang, prob in ranking if prob > self.floor]


class FailingEngine(WordListEngine):
    def __init__(self, fail_on='boom'):
        super().__init__()
        self.fail_on = fail_on

    def detect(self, text, candidates=frozenset()):
        if self.fail_on in text:
            raise RuntimeError('model exploded')
        return super().detect(text, candidates)


@pytest.fixture
def engine():
    return WordListEngine()


@pytest.fixture
def registry(engine):
    return LanguageRegistry(engine.supported_languages())


@pytest.fixture
def make_classifier(engine, registry):
    def factory(**options):
        return LanguageClassifier(engine, registry, Configuration(**options))
    return factory


@pytest.fixture
def stdin_bytes():
    def factory(text):
        data = text.encode('utf-8') if isinstance(text, str) else text
        return io.BytesIO(data)
    return factory

"""
Engine adapter tests. The langdetect tests run against the bundled profiles;
the fastText adapter is driven by a stand-in model object.
"""
from unittest.mock import MagicMock

import numpy as np
import pytest

from langsniff.errors import ClassificationFailure, EngineLoadFailure
from langsniff.models import FastTextEngine, LangdetectEngine, load_engine

FRENCH = "Bonjour à tous, je suis très heureux de vous retrouver aujourd'hui pour cette réunion."
GERMAN = "Guten Morgen, ich freue mich sehr, euch heute alle wiederzusehen."


@pytest.fixture(scope='module')
def langdetect_engine():
    return LangdetectEngine()


def test_langdetect_supports_bundled_profiles(langdetect_engine):
    languages = langdetect_engine.supported_languages()
    assert {'en', 'fr', 'de', 'zh-cn'} <= set(languages)


def test_langdetect_ranks_french_first(langdetect_engine):
    ranking = langdetect_engine.detect(FRENCH)
    assert ranking[0][0] == 'fr'
    assert 0.0 < ranking[0][1] <= 1.0


def test_langdetect_is_deterministic(langdetect_engine):
    assert langdetect_engine.detect(GERMAN) == langdetect_engine.detect(GERMAN)


def test_langdetect_restriction_excludes_other_languages(langdetect_engine):
    ranking = langdetect_engine.detect(FRENCH, frozenset({'de', 'en'}))
    assert ranking
    assert {lang for lang, _ in ranking} <= {'de', 'en'}


def test_langdetect_text_without_features_is_undetermined(langdetect_engine):
    assert langdetect_engine.detect('') == []
    assert langdetect_engine.detect('12 345 !!') == []


def fake_fasttext_model(labels, scores):
    model = MagicMock()
    model.get_labels.return_value = [f'__label__{label}' for label in labels]
    model.predict.return_value = (
        tuple(f'__label__{label}' for label in labels),
        np.array(scores)
    )
    return model


def test_fasttext_labels_are_stripped():
    engine = FastTextEngine(fake_fasttext_model(['en', 'fr', 'ceb'], [0.5, 0.3, 0.2]))
    assert engine.supported_languages() == ['en', 'fr', 'ceb']


def test_fasttext_ranking_applies_floor():
    engine = FastTextEngine(fake_fasttext_model(['fr', 'en', 'de'], [0.85, 0.09, 0.06]))
    assert engine.detect('bonjour') == [('fr', pytest.approx(0.85))]


def test_fasttext_predicts_on_single_line():
    model = fake_fasttext_model(['fr'], [1.0])
    FastTextEngine(model).detect('bonjour\nà tous\n')
    model.predict.assert_called_once_with('bonjour à tous', k=-1)


def test_fasttext_restriction_renormalizes_candidates():
    engine = FastTextEngine(fake_fasttext_model(['en', 'fr', 'de'], [0.6, 0.3, 0.1]))
    ranking = engine.detect('hello', frozenset({'fr', 'de'}))
    assert [lang for lang, _ in ranking] == ['fr', 'de']
    assert ranking[0][1] == pytest.approx(0.75)
    assert ranking[1][1] == pytest.approx(0.25)


def test_fasttext_blank_text_is_undetermined():
    model = fake_fasttext_model(['en'], [1.0])
    assert FastTextEngine(model).detect('   \n') == []
    model.predict.assert_not_called()


def test_fasttext_prediction_error_is_fatal():
    model = fake_fasttext_model(['en'], [1.0])
    model.predict.side_effect = ValueError('Unable to avoid copy')
    with pytest.raises(ClassificationFailure):
        FastTextEngine(model).detect('hello')


def test_missing_fasttext_model_fails_to_load(tmp_path):
    with pytest.raises(EngineLoadFailure, match='not found'):
        load_engine(str(tmp_path / 'lid.176.bin'))


def test_default_engine_is_langdetect():
    assert isinstance(load_engine(), LangdetectEngine)

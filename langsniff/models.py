"""
Detection engine adapters.

Each adapter wraps a statistical language identification library behind the
same two calls:

    supported_languages() -> list of engine identifiers
    detect(text, candidates) -> [(identifier, probability), ...] best first

An empty ranking means the engine found nothing above its confidence floor.
Adapters are built once per process and never mutated afterwards, so a single
instance may be shared between worker threads.
"""
import logging
import os
import re
from typing import AbstractSet, List, Optional, Tuple

import numpy as np
from langdetect import DetectorFactory, LangDetectException
from langdetect.detector_factory import PROFILES_DIRECTORY
from langdetect.lang_detect_exception import ErrorCode

from .errors import ClassificationFailure, EngineLoadFailure

logger = logging.getLogger(__name__)

# Fixed seed so that repeated runs over the same input agree
LANGDETECT_SEED = 0

# Same floor langdetect applies internally (Detector.PROB_THRESHOLD)
FASTTEXT_PROBABILITY_FLOOR = 0.1

FASTTEXT_LABEL_PREFIX = '__label__'

Ranking = List[Tuple[str, float]]


class LanguageDetectionEngine:
    """Interface shared by the detection adapters."""

    name = 'engine'

    def supported_languages(self) -> List[str]:
        raise NotImplementedError

    def detect(self, text: str, candidates: AbstractSet[str] = frozenset()) -> Ranking:
        raise NotImplementedError


class LangdetectEngine(LanguageDetectionEngine):
    """
    Adapter over langdetect's bundled n-gram profiles.

    The adapter owns its own DetectorFactory rather than langdetect's module
    global, and creates a fresh seeded Detector per call. Candidate restriction
    uses the detector's prior map: languages outside the map get a zero prior
    and can never be chosen.
    """

    name = 'langdetect'

    def __init__(self, profiles_directory: str = PROFILES_DIRECTORY, seed: int = LANGDETECT_SEED):
        self.factory = DetectorFactory()
        self.factory.seed = seed
        try:
            self.factory.load_profile(profiles_directory)
        except LangDetectException as e:
            raise EngineLoadFailure(f"Failed to load langdetect profiles: {e}") from e

        logger.info(f"Loaded {len(self.factory.get_lang_list())} langdetect profiles "
                    f"from {profiles_directory}")

    def supported_languages(self) -> List[str]:
        return list(self.factory.get_lang_list())

    def detect(self, text: str, candidates: AbstractSet[str] = frozenset()) -> Ranking:
        detector = self.factory.create()
        detector.append(text)
        if candidates:
            detector.set_prior_map({lang: 1.0 for lang in candidates})

        try:
            ranked = detector.get_probabilities()
        except LangDetectException as e:
            # Raised for text without any usable n-gram ("No features in text.")
            if e.get_code() == ErrorCode.CantDetectError:
                logger.debug(f"langdetect found no features in {text[:40]!r}")
                return []
            raise ClassificationFailure(f"langdetect failed: {e}") from e

        return [(item.lang, float(item.prob)) for item in ranked]


class FastTextEngine(LanguageDetectionEngine):
    """
    Adapter over a fastText language identification model (lid.176.bin/.ftz).

    Restriction keeps only the candidate labels and renormalizes their
    probabilities, so the winner's confidence never drops when the candidate
    set is narrowed around it.
    """

    name = 'fasttext'

    def __init__(self, model, probability_floor: float = FASTTEXT_PROBABILITY_FLOOR):
        self.model = model
        self.probability_floor = probability_floor
        self.labels = [label.replace(FASTTEXT_LABEL_PREFIX, '') for label in model.get_labels()]

    @classmethod
    def from_path(cls, model_path: str, **kwargs) -> 'FastTextEngine':
        """Load FastText language identification model."""
        if not os.path.exists(model_path):
            raise EngineLoadFailure(f"FastText model not found: {model_path}")

        try:
            import fasttext
        except ImportError as e:
            raise EngineLoadFailure(
                "The fasttext package is required for --model (pip install langsniff[fasttext])"
            ) from e

        try:
            model = fasttext.load_model(model_path)
        except ValueError as e:
            raise EngineLoadFailure(f"Failed to load FastText model: {e}") from e

        logger.info(f"Loaded FastText model from {model_path}")
        return cls(model, **kwargs)

    def supported_languages(self) -> List[str]:
        return list(self.labels)

    def detect(self, text: str, candidates: AbstractSet[str] = frozenset()) -> Ranking:
        # fastText predicts on a single line
        clean_text = re.sub(r'\s+', ' ', text.strip())
        if not clean_text:
            return []

        try:
            labels, scores = self.model.predict(clean_text, k=-1)
        except (ValueError, RuntimeError) as e:
            raise ClassificationFailure(f"FastText prediction failed: {e}") from e

        codes = [label.replace(FASTTEXT_LABEL_PREFIX, '') for label in labels]
        probs = np.asarray(scores, dtype=np.float64)

        if candidates:
            keep = np.array([code in candidates for code in codes], dtype=bool)
            codes = [code for code, kept in zip(codes, keep) if kept]
            probs = probs[keep]

        total = probs.sum()
        if not codes or total <= 0:
            return []
        probs = np.clip(probs / total, 0.0, 1.0)

        order = np.argsort(-probs, kind='stable')
        return [(codes[i], float(probs[i])) for i in order if probs[i] > self.probability_floor]


def load_engine(model_path: Optional[str] = None) -> LanguageDetectionEngine:
    """fastText engine when a model path is given, langdetect otherwise."""
    if model_path:
        return FastTextEngine.from_path(model_path)
    return LangdetectEngine()

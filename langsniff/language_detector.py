"""
Classification pipeline: one result per unit, optionally computed in parallel.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import Configuration
from .errors import ClassificationFailure
from .models import LanguageDetectionEngine
from .preprocessing import TextPreprocessor
from .registry import LanguageRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome for one unit. language_code is None when undetermined."""
    language_code: Optional[str]
    confidence: float
    source_text: str

    @property
    def is_undetermined(self) -> bool:
        return self.language_code is None

    @classmethod
    def undetermined(cls, source_text: str) -> 'ClassificationResult':
        return cls(language_code=None, confidence=0.0, source_text=source_text)


class LanguageClassifier:
    """
    Runs the detection engine over classification units.

    The engine, registry and configuration are shared read-only; every call
    to classify() is independent of every other, which is what allows
    classify_all() to fan units out to worker threads.
    """

    def __init__(self,
                 engine: LanguageDetectionEngine,
                 registry: LanguageRegistry,
                 config: Configuration):
        self.engine = engine
        self.registry = registry
        self.config = config
        self.preprocessor = TextPreprocessor()

    def classify(self, unit: str) -> ClassificationResult:
        """Classify one unit, honouring the minimum length and confidence threshold."""
        config = self.config

        if config.min_length is not None and self.preprocessor.count_letters(unit) < config.min_length:
            logger.debug(f"Unit shorter than {config.min_length} letters, not classified")
            return ClassificationResult.undetermined(unit)

        text = self.preprocessor.preprocess(unit)
        try:
            ranking = self.engine.detect(text, config.candidate_languages)
        except ClassificationFailure:
            raise
        except Exception as e:
            raise ClassificationFailure(f"{self.engine.name} failed to classify input: {e}") from e

        if not ranking:
            return ClassificationResult.undetermined(unit)

        identifier, probability = ranking[0]
        confidence = min(max(float(probability), 0.0), 1.0)

        if config.confidence_threshold is not None and confidence < config.confidence_threshold:
            logger.debug(f"Top result {identifier} ({confidence:.3f}) below threshold "
                         f"{config.confidence_threshold}")
            return ClassificationResult.undetermined(unit)

        return ClassificationResult(
            language_code=self.registry.code_for(identifier),
            confidence=confidence,
            source_text=unit
        )

    def classify_all(self, units: Sequence[str]) -> List[ClassificationResult]:
        """Classify every unit; results come back in input order."""
        if self.config.parallel and len(units) > 1:
            return self._classify_parallel(units)
        return [self.classify(unit) for unit in units]

    def _classify_parallel(self, units: Sequence[str]) -> List[ClassificationResult]:
        logger.info(f"Classifying {len(units)} units in parallel "
                    f"(workers: {self.config.workers or 'default'})")

        indexed: List[Tuple[int, ClassificationResult]] = []
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = {executor.submit(self.classify, unit): i for i, unit in enumerate(units)}
            for future in as_completed(futures):
                # First failure aborts the run; pending units are cancelled
                try:
                    indexed.append((futures[future], future.result()))
                except ClassificationFailure:
                    for pending in futures:
                        pending.cancel()
                    raise

        indexed.sort(key=lambda item: item[0])
        return [result for _, result in indexed]

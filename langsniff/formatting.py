"""
Tab-separated rendering of classification results.
"""
from typing import Iterable, List, Tuple

from .config import DEFAULT_DELIMITER
from .language_detector import ClassificationResult

CONFIDENCE_DECIMALS = 6


def format_confidence(confidence: float) -> str:
    """
    Fixed-point rendering of a confidence value.

    Never uses scientific notation; trailing zeros are trimmed but one decimal
    always remains, e.g. 0.0, 1.0, 0.857143.
    """
    confidence = min(max(confidence, 0.0), 1.0)
    rendered = f"{confidence:.{CONFIDENCE_DECIMALS}f}".rstrip('0')
    if rendered.endswith('.'):
        rendered += '0'
    return rendered


def format_record(result: ClassificationResult,
                  line_mode: bool,
                  delimiter: str = DEFAULT_DELIMITER) -> str:
    """One output record: code, confidence and, in line mode, the source line."""
    fields = [result.language_code or '', format_confidence(result.confidence)]
    if line_mode:
        fields.append(result.source_text)
    return delimiter.join(fields)


def format_listing(entries: Iterable[Tuple[str, str]]) -> List[str]:
    """Rows for the supported-language listing."""
    return [f"{code} - {name}" for code, name in entries]

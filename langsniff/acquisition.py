"""
Input acquisition: turns the configuration and standard input into classification units.
"""
import logging
from typing import BinaryIO, List, Optional

from .config import Configuration
from .errors import InputReadFailure

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    """
    Split text into one unit per line.

    Each line loses its own terminator ('\\n' or '\\r\\n') and nothing else.
    Empty lines in the middle are kept; trailing empty lines are dropped.
    """
    lines = text.split('\n')
    lines = [line[:-1] if line.endswith('\r') else line for line in lines]

    while lines and lines[-1] == '':
        lines.pop()

    return lines


def read_stream(stream: BinaryIO, encoding: str = 'utf-8') -> str:
    """Read a byte stream to end-of-stream and decode it."""
    try:
        data = stream.read()
    except OSError as e:
        raise InputReadFailure(f"failed to read standard input: {e}") from e

    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise InputReadFailure(f"standard input is not valid {encoding}: {e}") from e


def acquire(config: Configuration, stdin: Optional[BinaryIO] = None) -> List[str]:
    """
    Determine the classification units for a run.

    Args:
        config: Run configuration; inline text takes precedence over stdin
        stdin: Binary stream read when no inline text was given

    Returns:
        Units in input order: the whole text, or one per line in line mode
    """
    if config.inline_text is not None:
        text = config.inline_text
    else:
        if stdin is None:
            raise InputReadFailure("no text given and no input stream available")
        text = read_stream(stdin)
        logger.info(f"Read {len(text)} characters from standard input")

    if not config.line_mode:
        return [text]

    units = split_lines(text)
    logger.info(f"Split input into {len(units)} lines")
    return units

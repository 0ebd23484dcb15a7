"""
Preprocessing utilities applied to text before it reaches a detection engine.
"""
import unicodedata

import regex


class TextPreprocessor:
    """Cleans classification units and measures how much language they carry."""

    def __init__(self):
        self.alphabetic_pattern = regex.compile(r'\p{Alphabetic}')

    def normalize_text(self, text: str) -> str:
        """
        Remove control characters except common whitespace.

        No compatibility folding: full-width punctuation is left as is.
        """
        return ''.join(char for char in text if unicodedata.category(char)[0] != 'C' or char in '\t\n\r ')

    def count_letters(self, text: str) -> int:
        """Number of alphabetic characters; whitespace, punctuation and numerals do not count."""
        return len(self.alphabetic_pattern.findall(text))

    def preprocess(self, text: str) -> str:
        """Text as handed to the detection engine."""
        return self.normalize_text(text)

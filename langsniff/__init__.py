"""
Command-line text language classifier

Reports the most probable language of free-form text with a confidence score,
either for the whole input or line by line, as tab-separated records.
"""

__version__ = "1.0.0"

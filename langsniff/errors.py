"""
Error taxonomy for the classification pipeline.
"""


class LangsniffError(Exception):
    """Base class for fatal errors; carries the process exit code."""
    exit_code = 1


class InvalidArgument(LangsniffError, ValueError):
    """Malformed or conflicting command-line arguments."""
    exit_code = 2


class UnknownLanguageCode(LangsniffError, ValueError):
    """A code passed to -l is not known to the detection engine."""
    exit_code = 3

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"unknown language code: {code!r}")


class InputReadFailure(LangsniffError):
    """The input stream could not be read to completion."""
    exit_code = 4


class ClassificationFailure(LangsniffError, RuntimeError):
    """The detection engine failed on a unit."""
    exit_code = 1


class EngineLoadFailure(LangsniffError):
    """The detection engine or its model could not be initialized."""
    exit_code = 1

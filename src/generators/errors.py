"""
Errors raised while generating test data.

Any of these means the test setup failed, not the test itself.
"""

from typing import Optional


class GenerationError(Exception):
    """Base exception for test data generation failures."""
    pass


class ConstructionError(GenerationError):
    """Raised when an entity cannot be instantiated or a field cannot be written."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class SchemaMismatchError(GenerationError):
    """Raised when a field declaration and the value it receives disagree."""
    pass


class RecursionDepthError(GenerationError):
    """Raised when nested generation goes deeper than the configured limit."""
    pass

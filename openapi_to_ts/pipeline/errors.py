"""
Error taxonomy of the compilation pipeline.

Every error is fatal: the first one raised aborts the whole compilation
and nothing is written.
"""

from __future__ import annotations


class OpenApiCompileError(Exception):
    """Base class for all compilation failures."""

    pass


class FormatError(OpenApiCompileError):
    """Raised when a document does not follow the supported schema grammar.

    This can happen when:
    - A $ref does not point into /components/schemas/
    - An array has no items, or a oneOf has no discriminator
    - A type string is unknown or an object has no recognizable shape
    - A route template has unbalanced placeholder braces
    """

    pass


class ConsistencyError(OpenApiCompileError):
    """Raised when the documents are well-formed but contradict each other."""

    def __init__(self, message: str, unresolved: list[str] | None = None, duplicates: list[str] | None = None):
        super().__init__(message)
        self.unresolved = unresolved or []
        self.duplicates = duplicates or []


class NamingExhaustionError(OpenApiCompileError):
    """Raised when an inline enum cannot be given a unique name."""

    pass


class InternalInvariantError(OpenApiCompileError):
    """Raised when a bounded fixpoint loop exceeds its iteration cap."""

    pass

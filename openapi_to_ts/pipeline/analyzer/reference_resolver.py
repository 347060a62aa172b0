"""
Reference resolver for $ref canonicalization.

Turns a $ref written in some document into the canonical cross-file path
that identifies the referenced schema, whichever file refers to it.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from ..errors import FormatError
from .context import CompilationContext
from .ir_nodes import RefType

SCHEMA_PREFIX = "/components/schemas/"


@dataclass
class ResolvedRef:
    """A canonicalized $ref."""

    full_path: str = ""  # "<file>#/components/schemas/<name>"
    file_name: str = ""  # File that declares the target, relative to the base directory


def schema_path(file_name: str, schema_name: str) -> str:
    """Build the canonical path of a schema declared in `file_name`."""
    return f"{file_name}#{SCHEMA_PREFIX}{schema_name}"


class ReferenceResolver:
    """Canonicalizes $ref values and registers the ones not declared yet."""

    def __init__(self, context: CompilationContext):
        """
        Initialize the resolver.

        Args:
            context: Compilation state receiving pending references
        """
        self.context = context

    def canonicalize(self, ref_path: str, origin_file: str) -> ResolvedRef:
        """
        Resolve a $ref relative to the file it appears in.

        Args:
            ref_path: The raw $ref value, e.g. "../common.yaml#/components/schemas/Id"
            origin_file: The file containing the $ref

        Returns:
            ResolvedRef with the canonical path and declaring file

        Raises:
            FormatError: If the fragment does not point into /components/schemas/
        """
        ref_file, sep, fragment = ref_path.strip().partition("#")

        if not sep or not fragment.startswith(SCHEMA_PREFIX):
            raise FormatError(f'Invalid ref link: "{ref_path}", type should have prefix "{SCHEMA_PREFIX}"')

        if ref_file:
            file_name = posixpath.normpath(posixpath.join(posixpath.dirname(origin_file), ref_file))
        else:
            file_name = origin_file

        return ResolvedRef(full_path=f"{file_name}#{fragment}", file_name=file_name)

    def resolve(self, ref_path: str, origin_file: str) -> RefType:
        """Canonicalize a $ref and queue its target for loading if needed."""
        resolved = self.canonicalize(ref_path, origin_file)
        self.context.request_reference(resolved.full_path, resolved.file_name)
        return RefType(target=resolved.full_path)

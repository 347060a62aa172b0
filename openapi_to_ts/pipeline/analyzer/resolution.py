"""
Resolution driver.

Loads the entry document and every document it references, directly or
transitively, until each $ref is backed by a declaration.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import PurePosixPath
from typing import Any

from ...utils import normalize_name, upper_first
from ..errors import ConsistencyError, FormatError
from ..loader import DocumentLoader, parse_document
from ..schema_ast.parser import SchemaParser
from .api_parser import ApiParser
from .context import CompilationContext
from .converter import SchemaConverter
from .ir_nodes import ApiMethod, TypeDeclaration
from .reference_resolver import schema_path

logger = logging.getLogger(__name__)


class ResolutionDriver:
    """Drives file loading to a fixpoint and returns the closed type set."""

    def __init__(self, loader: DocumentLoader, context: CompilationContext | None = None):
        """
        Initialize the driver.

        Args:
            loader: Collaborator returning the text of a file name
            context: Compilation state; a fresh one is created when omitted
        """
        self.loader = loader
        self.context = context or CompilationContext()
        self.schema_parser = SchemaParser()
        self.converter = SchemaConverter(self.context)
        self.api_parser = ApiParser(self.context, self.converter, self.schema_parser)

    def resolve(self, entry_file: str) -> tuple[dict[str, TypeDeclaration], list[ApiMethod]]:
        """
        Compile the entry document and everything it references.

        Args:
            entry_file: File name of the entry document, as understood by the loader

        Returns:
            Declarations keyed by canonical path, and the entry document's operations

        Raises:
            FormatError: If a document is malformed
            ConsistencyError: If references stay unresolved or names collide
        """
        entry_file = str(PurePosixPath(entry_file))
        document = self._load_document(entry_file)

        self.register_schemas(document, entry_file)
        self.context.api_methods.extend(self.api_parser.parse_paths(document, entry_file))

        self.load_pending_files()
        self.check_unresolved()
        self.check_duplicate_names()

        return self.context.declarations, self.context.api_methods

    def register_schemas(self, document: dict[str, Any], file_name: str) -> None:
        """Convert and register every schema of `components.schemas`."""
        schemas = (document.get("components") or {}).get("schemas") or {}
        if not isinstance(schemas, dict):
            raise FormatError(f"components.schemas of {file_name} must be a mapping")

        for schema_name, schema in schemas.items():
            schema_name = str(schema_name)
            full_path = schema_path(file_name, schema_name)
            node = self.schema_parser.parse_schema(schema, full_path)

            self.context.register_declaration(
                TypeDeclaration(
                    name=upper_first(normalize_name(schema_name)),
                    full_path=full_path,
                    root=self.converter.convert(node, file_name),
                )
            )

        logger.debug("Registered %d schemas from %s", len(schemas), file_name)

    def load_pending_files(self) -> None:
        """Parse queued files until no file is left; each file is parsed at most once."""
        while True:
            file_name = self.context.pop_file_to_load()
            if file_name is None:
                break

            logger.debug("Loading referenced file %s", file_name)
            self.register_schemas(self._load_document(file_name), file_name)

    def check_unresolved(self) -> None:
        unresolved = sorted(self.context.pending_references)
        if unresolved:
            details = ", ".join(f'"{path}"' for path in unresolved)
            raise ConsistencyError(f"Schema can't be loaded: {details}", unresolved=unresolved)

    def check_duplicate_names(self) -> None:
        counts = Counter(declaration.name for declaration in self.context.declarations.values())
        duplicates = sorted(name for name, count in counts.items() if count > 1)
        if not duplicates:
            return

        for name in duplicates:
            paths = [d.full_path for d in self.context.declarations.values() if d.name == name]
            logger.error("Type [%s] already declared: %s", name, ", ".join(paths))

        raise ConsistencyError(f"Duplicate type names found: {', '.join(duplicates)}", duplicates=duplicates)

    def _load_document(self, file_name: str) -> dict[str, Any]:
        self.context.mark_loaded(file_name)
        try:
            text = self.loader.load_text(file_name)
        except FileNotFoundError as e:
            waiting = sorted(path for path in self.context.pending_references if path.startswith(f"{file_name}#"))
            details = ", ".join(f'"{path}"' for path in waiting) or file_name
            raise ConsistencyError(f"Schema can't be loaded: {details} (file not found)", unresolved=waiting) from e

        return parse_document(text, file_name)

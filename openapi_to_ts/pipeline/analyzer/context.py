"""
Compilation context shared by the converter and the resolution driver.

Holds every registry that grows while documents are loaded: the declared
types, the references not yet backed by a declaration, and the files that
still have to be parsed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .ir_nodes import ApiMethod, TypeDeclaration


@dataclass
class CompilationContext:
    """Mutable state of one compilation."""

    # Canonical path -> declaration, in registration order
    declarations: dict[str, TypeDeclaration] = field(default_factory=dict)

    # Canonical paths seen in a $ref but not declared yet
    pending_references: set[str] = field(default_factory=set)

    # Files referenced but not parsed yet, in discovery order
    files_to_load: list[str] = field(default_factory=list)

    loaded_files: set[str] = field(default_factory=set)

    api_methods: list[ApiMethod] = field(default_factory=list)

    def register_declaration(self, declaration: TypeDeclaration) -> None:
        """Add a declaration and clear its pending reference, if any."""
        self.declarations[declaration.full_path] = declaration
        self.pending_references.discard(declaration.full_path)

    def request_reference(self, full_path: str, file_name: str) -> None:
        """Record a reference, queueing its file when nothing declares it yet."""
        if full_path in self.declarations:
            return

        if file_name not in self.loaded_files and file_name not in self.files_to_load:
            self.files_to_load.append(file_name)

        self.pending_references.add(full_path)

    def mark_loaded(self, file_name: str) -> None:
        self.loaded_files.add(file_name)
        if file_name in self.files_to_load:
            self.files_to_load.remove(file_name)

    def pop_file_to_load(self) -> str | None:
        """Return the next file that has not been parsed yet, or None."""
        while self.files_to_load:
            file_name = self.files_to_load.pop(0)
            if file_name not in self.loaded_files:
                return file_name
        return None

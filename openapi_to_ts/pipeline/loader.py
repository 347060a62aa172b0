"""
Document loading collaborators.

The compiler never touches the file system itself: it asks a loader for
the text of a file name and hands that text to `parse_document`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import yaml

from .errors import FormatError


class DocumentLoader(Protocol):
    def load_text(self, file_name: str) -> str: ...


class FileLoader:
    """Reads documents relative to a base directory."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def load_text(self, file_name: str) -> str:
        """
        Read a document.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        return (self.base_dir / file_name).read_text(encoding="utf-8")


class MemoryLoader:
    """Serves documents from a mapping of file name to text."""

    def __init__(self, documents: dict[str, str]):
        self.documents = documents

    def load_text(self, file_name: str) -> str:
        if file_name not in self.documents:
            raise FileNotFoundError(file_name)
        return self.documents[file_name]


def parse_document(text: str, file_name: str = "<document>") -> dict[str, Any]:
    """Parse YAML or JSON text into a node tree.

    Raises:
        FormatError: If the text is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FormatError(f"Invalid YAML in {file_name}: {e}") from e

    if not isinstance(data, dict):
        raise FormatError(f"Document {file_name} is empty or not a mapping")

    return data

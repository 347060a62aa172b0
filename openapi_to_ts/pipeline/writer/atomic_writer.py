"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ..config import OutputConfig, OutputMode

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles output file writes.

    Atomic writes use a two-phase approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, config: OutputConfig | None = None):
        """Initialize the writer.

        Args:
            config: Output configuration (overwrite mode, atomicity)
        """
        self.config = config or OutputConfig()

    def check(self, paths: list[Path]) -> None:
        """Refuse the whole batch if the mode forbids overwriting any target.

        Raises:
            FileExistsError: If one of the files exists in error mode
        """
        if self.config.mode != OutputMode.ERROR_IF_EXISTS:
            return

        existing = [str(path) for path in paths if path.exists()]
        if existing:
            raise FileExistsError(f"Output file already exists: {', '.join(existing)}. Use force mode to overwrite.")

    def write(self, path: Path, content: str) -> None:
        """Write content to a file, honoring the output mode.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            FileExistsError: If the file exists and the mode forbids overwriting
            OSError: If file operations fail
        """
        self.check([path])

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        if not self.config.atomic_write:
            path.write_text(content, encoding="utf-8")
        else:
            self._write_atomic(path, content)

        logger.debug("Wrote %s (%d bytes)", path, len(content))

    def _write_atomic(self, path: Path, content: str) -> None:
        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)

        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

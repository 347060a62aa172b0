"""
Configuration for the code generator pipeline.

Only `use_enums` and `namespace` influence the compiled types; the other
options control which modules are produced and how they are written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        atomic_write: Whether to write through a temporary file
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Emit inline enums as named `export enum` declarations
    use_enums: bool = False

    # Prefix for type references in the API module (e.g. "Types")
    namespace: str | None = None

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    # Whether to generate the API interface module
    generate_api: bool = True

    # Output file names
    types_file_name: str = "types.ts"
    api_file_name: str = "api.ts"

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "use_enums": self.use_enums,
            "namespace": self.namespace,
            "add_generation_comment": self.add_generation_comment,
            "generate_api": self.generate_api,
            "types_file_name": self.types_file_name,
            "api_file_name": self.api_file_name,
            "output": {
                "mode": self.output.mode.value,
                "atomic_write": self.output.atomic_write,
            },
        }

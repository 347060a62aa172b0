"""OpenAPI to TypeScript Generator

A Python package for compiling OpenAPI documents, possibly spread over
several cross-referencing files, into TypeScript type declarations and a
typed API interface.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    ConsistencyError,
    FileLoader,
    FormatError,
    MemoryLoader,
    NamingExhaustionError,
    OpenApiCompileError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "OpenApiCompileError",
    "FormatError",
    "ConsistencyError",
    "NamingExhaustionError",
    "FileLoader",
    "MemoryLoader",
    "AtomicWriter",
]

"""
Pipeline - OpenAPI to TypeScript compiler.

This module provides a multi-phase architecture for generating TypeScript
declarations from OpenAPI documents spread over several files:

1. Phase 1 (Parser): Classify raw schema objects into the Schema AST
2. Phase 2 (Analyzer): Convert to IR, loading referenced files to a fixpoint
3. Phase 3 (Naming): Give every inline enum a unique name
4. Phase 4 (Backend): Render TypeScript declarations and the API interface
5. Phase 5 (Writer): Write the generated modules
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .errors import (
    ConsistencyError,
    FormatError,
    InternalInvariantError,
    NamingExhaustionError,
    OpenApiCompileError,
)
from .generator import CompiledSchema, GeneratedModules, PipelineGenerator
from .loader import FileLoader, MemoryLoader, parse_document
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "CompiledSchema",
    "GeneratedModules",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "OpenApiCompileError",
    "FormatError",
    "ConsistencyError",
    "NamingExhaustionError",
    "InternalInvariantError",
    "FileLoader",
    "MemoryLoader",
    "parse_document",
    "AtomicWriter",
]

"""
Analyzer module.

Contains reference resolution, schema conversion, file loading and enum
naming.
"""

from __future__ import annotations

from .context import CompilationContext
from .converter import SchemaConverter
from .ir_nodes import (
    ApiMethod,
    ArrayType,
    CompositionType,
    Discriminator,
    EmptyObjectType,
    EnumType,
    FieldDef,
    FreeFormMapType,
    MapType,
    ObjectType,
    Parameter,
    ParameterPlace,
    PrimitiveKind,
    PrimitiveType,
    RefType,
    TypeDeclaration,
    TypeNode,
    UnionType,
)
from .name_resolver import EnumNameResolver
from .resolution import ResolutionDriver

__all__ = [
    "TypeNode",
    "PrimitiveKind",
    "PrimitiveType",
    "EmptyObjectType",
    "FreeFormMapType",
    "ArrayType",
    "MapType",
    "FieldDef",
    "ObjectType",
    "CompositionType",
    "Discriminator",
    "UnionType",
    "EnumType",
    "RefType",
    "TypeDeclaration",
    "Parameter",
    "ParameterPlace",
    "ApiMethod",
    "CompilationContext",
    "SchemaConverter",
    "ResolutionDriver",
    "EnumNameResolver",
]

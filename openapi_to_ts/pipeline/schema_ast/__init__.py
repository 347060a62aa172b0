"""
Schema AST (Abstract Syntax Tree) module.

Contains the AST node definitions and parser for OpenAPI schema objects.
"""

from __future__ import annotations

from .nodes import (
    AllOfSchema,
    ArraySchema,
    DiscriminatorSchema,
    EmptyObjectSchema,
    FreeFormMapSchema,
    MapSchema,
    ObjectSchema,
    OneOfSchema,
    PrimitiveSchema,
    PropertySchema,
    RefSchema,
    SchemaNode,
)
from .parser import SchemaParser

__all__ = [
    "SchemaNode",
    "RefSchema",
    "PrimitiveSchema",
    "ArraySchema",
    "PropertySchema",
    "ObjectSchema",
    "AllOfSchema",
    "DiscriminatorSchema",
    "OneOfSchema",
    "MapSchema",
    "FreeFormMapSchema",
    "EmptyObjectSchema",
    "SchemaParser",
]

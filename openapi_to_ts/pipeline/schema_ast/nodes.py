"""
AST (Abstract Syntax Tree) node definitions for OpenAPI schema objects.

These nodes represent the closed subset of the schema grammar the compiler
consumes, before any reference resolution. Each raw mapping is classified
into exactly one node class by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Original source location in the document (for error messages)
    source_path: str = ""


@dataclass
class RefSchema(SchemaNode):
    """A `$ref` to another schema, as written in the document."""

    ref_path: str = ""  # e.g. "common.yaml#/components/schemas/User"


@dataclass
class PrimitiveSchema(SchemaNode):
    """A string, number, integer or boolean, optionally with enum values."""

    type_name: str = ""
    enum: list[str] | None = None


@dataclass
class ArraySchema(SchemaNode):
    items: SchemaNode | None = None


@dataclass
class PropertySchema(SchemaNode):
    """A property of an object schema."""

    name: str = ""  # Original property name
    type_node: SchemaNode | None = None
    is_required: bool = False


@dataclass
class ObjectSchema(SchemaNode):
    """An object with declared properties."""

    properties: list[PropertySchema] = field(default_factory=list)


@dataclass
class AllOfSchema(SchemaNode):
    """An allOf composition, with the properties declared beside it."""

    parts: list[SchemaNode] = field(default_factory=list)
    properties: ObjectSchema | None = None


@dataclass
class DiscriminatorSchema(SchemaNode):
    property_name: str = ""
    mapping: dict[str, str] | None = None  # discriminant value -> raw $ref


@dataclass
class OneOfSchema(SchemaNode):
    """A oneOf union; the discriminator is mandatory."""

    variants: list[SchemaNode] = field(default_factory=list)
    discriminator: DiscriminatorSchema | None = None
    properties: ObjectSchema | None = None


@dataclass
class MapSchema(SchemaNode):
    """An object whose additionalProperties is a schema."""

    values: SchemaNode | None = None


@dataclass
class FreeFormMapSchema(SchemaNode):
    """An object with `additionalProperties: true`."""

    pass


@dataclass
class EmptyObjectSchema(SchemaNode):
    """An object with no declared shape."""

    pass

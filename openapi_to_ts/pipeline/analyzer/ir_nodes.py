"""
IR (Intermediate Representation) node definitions.

These nodes represent the converted schemas, independent of the target
language. References are kept as canonical paths and resolved against the
declaration set at render time. The only mutable cell is
`EnumType.assigned_name`, filled in by the enum naming pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PrimitiveKind(Enum):
    """Kind of primitive type in the IR."""

    STRING = "string"
    NUMBER = "number"  # integer and number
    BOOLEAN = "boolean"
    VOID = "void"  # operation without a result


class ParameterPlace(Enum):
    """Where an API parameter travels."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass
class TypeNode:
    """Base class for all IR type nodes."""

    pass


@dataclass
class PrimitiveType(TypeNode):
    kind: PrimitiveKind = PrimitiveKind.STRING


@dataclass
class EmptyObjectType(TypeNode):
    """An object with no declared shape."""

    pass


@dataclass
class FreeFormMapType(TypeNode):
    """A map with unconstrained values."""

    pass


@dataclass
class ArrayType(TypeNode):
    element: TypeNode | None = None


@dataclass
class MapType(TypeNode):
    """A string-keyed map with typed values."""

    element: TypeNode | None = None


@dataclass
class FieldDef:
    """A field of an object type."""

    name: str = ""  # Sanitized property name
    type: TypeNode | None = None
    required: bool = False


@dataclass
class ObjectType(TypeNode):
    fields: list[FieldDef] = field(default_factory=list)


@dataclass
class CompositionType(TypeNode):
    """Logical AND of all parts (allOf)."""

    parts: list[TypeNode] = field(default_factory=list)


@dataclass
class Discriminator:
    property_name: str = ""
    mapping: dict[str, str] | None = None  # discriminant value -> canonical path


@dataclass
class UnionType(TypeNode):
    """A discriminated union (oneOf)."""

    fields_object: ObjectType | None = None
    variants: list[TypeNode] = field(default_factory=list)
    discriminator: Discriminator = field(default_factory=Discriminator)
    discriminator_type: TypeNode | None = None


@dataclass
class EnumType(TypeNode):
    values: list[str] = field(default_factory=list)
    assigned_name: str | None = None  # Set by the naming pass

    def footprint(self) -> str:
        """Identity of the value set: sorted values joined by '|'."""
        return enum_footprint(self.values)


@dataclass
class RefType(TypeNode):
    """Reference to a declaration by canonical path."""

    target: str = ""  # e.g. "common.yaml#/components/schemas/User"


@dataclass
class TypeDeclaration:
    """A named top-level schema."""

    name: str = ""  # Unique display name
    full_path: str = ""  # Canonical "<file>#/components/schemas/<schema>" key
    root: TypeNode | None = None


@dataclass
class Parameter:
    place: ParameterPlace = ParameterPlace.QUERY
    name: str = ""
    type: TypeNode | None = None
    required: bool = False


@dataclass
class ApiMethod:
    """One operation of the entry document."""

    http_method: str = ""  # Upper-case, e.g. "GET"
    route_path: str = ""  # Route template, e.g. "/users/{id}"
    parameters: list[Parameter] = field(default_factory=list)
    result_type: TypeNode = field(default_factory=lambda: PrimitiveType(kind=PrimitiveKind.VOID))

    # Request bodies that are not plain objects are not flattened
    flat_body_types: list[TypeNode] = field(default_factory=list)

    # camelCased operationId, or derived from the method and route when absent
    name: str = ""
    operation_id: str | None = None


def enum_footprint(values: list[str]) -> str:
    """Compare enums by their sorted value sets."""
    return "|".join(sorted(values))

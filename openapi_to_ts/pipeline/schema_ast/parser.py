"""
OpenAPI schema parser that builds an AST.

Phase 1 of the pipeline: classify every raw schema mapping into one of the
closed AST node classes, without resolving references. All errors about
the shape of a raw node are raised here, so later phases dispatch on the
node class only.
"""

from __future__ import annotations

from typing import Any

from ..errors import FormatError
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


class SchemaParser:
    """Parses raw OpenAPI schema objects into an AST."""

    PRIMITIVE_TYPES = {"string", "number", "integer", "boolean"}

    # Keys whose presence marks a schema without `type` as an object
    OBJECT_SHAPE_KEYS = ("properties", "additionalProperties", "allOf", "oneOf")

    # Documentation-only keywords, ignored when deciding if an object is empty
    ANNOTATION_KEYS = {
        "description",
        "title",
        "example",
        "examples",
        "default",
        "format",
        "nullable",
        "deprecated",
        "readOnly",
        "writeOnly",
    }

    def parse_schema(self, schema: Any, path: str) -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The raw schema mapping
            path: Current path in the document (for error messages)

        Returns:
            Appropriate SchemaNode subclass

        Raises:
            FormatError: If the node is outside the supported grammar
        """
        if not isinstance(schema, dict):
            raise FormatError(f"Schema at {path} must be a mapping, got {type(schema).__name__}")

        if "$ref" in schema:
            return RefSchema(ref_path=str(schema["$ref"]), source_path=path)

        type_name = schema.get("type")
        if type_name is None and any(key in schema for key in self.OBJECT_SHAPE_KEYS):
            type_name = "object"

        if type_name == "object":
            return self._parse_object(schema, path)

        if type_name == "array":
            return self._parse_array(schema, path)

        if type_name in self.PRIMITIVE_TYPES:
            return self._parse_primitive(schema, type_name, path)

        raise FormatError(f'Unknown field type: "{type_name}" at {path}')

    def _parse_primitive(self, schema: dict[str, Any], type_name: str, path: str) -> PrimitiveSchema:
        enum = None
        # Only string enums become enum types; other enums are plain primitives
        if type_name == "string" and schema.get("enum") is not None:
            values = schema["enum"]
            if not isinstance(values, list) or not values:
                raise FormatError(f"Enum at {path} must be a non-empty list")
            enum = [str(value) for value in values]

        return PrimitiveSchema(type_name=type_name, enum=enum, source_path=path)

    def _parse_array(self, schema: dict[str, Any], path: str) -> ArraySchema:
        items = schema.get("items")
        if not items:
            raise FormatError(f"Array without items specification at {path}")

        return ArraySchema(items=self.parse_schema(items, f"{path}/items"), source_path=path)

    def _is_shapeless(self, schema: dict[str, Any]) -> bool:
        """Check if the only structural key of an object schema is its type marker."""
        structural = [key for key in schema if key not in self.ANNOTATION_KEYS and not key.startswith("x-")]
        return structural == ["type"]

    def _parse_object(self, schema: dict[str, Any], path: str) -> SchemaNode:
        """Parse an object-shaped node into the matching AST class."""
        if self._is_shapeless(schema):
            return EmptyObjectSchema(source_path=path)

        properties = None
        if schema.get("properties") is not None:
            properties = self._parse_properties(schema, path)

        if "allOf" in schema:
            parts = schema["allOf"]
            if not isinstance(parts, list):
                raise FormatError(f"allOf at {path} must be a list")
            return AllOfSchema(
                parts=[self.parse_schema(part, f"{path}/allOf/{i}") for i, part in enumerate(parts)],
                properties=properties,
                source_path=path,
            )

        if "oneOf" in schema:
            return self._parse_one_of(schema, properties, path)

        if properties is not None:
            return properties

        if "additionalProperties" in schema:
            additional = schema["additionalProperties"]
            if additional is True:
                return FreeFormMapSchema(source_path=path)
            if isinstance(additional, dict):
                return MapSchema(
                    values=self.parse_schema(additional, f"{path}/additionalProperties"),
                    source_path=path,
                )

        raise FormatError(f"Invalid object notation at {path}")

    def _parse_properties(self, schema: dict[str, Any], path: str) -> ObjectSchema:
        raw_properties = schema["properties"]
        if not isinstance(raw_properties, dict):
            raise FormatError(f"Properties at {path} must be a mapping")

        required_fields = schema.get("required") or []

        properties = []
        for prop_name, prop_schema in raw_properties.items():
            prop_path = f"{path}/properties/{prop_name}"
            properties.append(
                PropertySchema(
                    name=str(prop_name),
                    type_node=self.parse_schema(prop_schema, prop_path),
                    is_required=prop_name in required_fields,
                    source_path=prop_path,
                )
            )

        return ObjectSchema(properties=properties, source_path=path)

    def _parse_one_of(self, schema: dict[str, Any], properties: ObjectSchema | None, path: str) -> OneOfSchema:
        raw_discriminator = schema.get("discriminator")
        if not isinstance(raw_discriminator, dict) or "propertyName" not in raw_discriminator:
            raise FormatError(f"Union type at {path} has to have a discriminator")

        variants = schema["oneOf"]
        if not isinstance(variants, list):
            raise FormatError(f"oneOf at {path} must be a list")

        mapping = raw_discriminator.get("mapping")
        discriminator = DiscriminatorSchema(
            property_name=str(raw_discriminator["propertyName"]),
            mapping={str(key): str(value) for key, value in mapping.items()} if mapping else None,
            source_path=f"{path}/discriminator",
        )

        return OneOfSchema(
            variants=[self.parse_schema(variant, f"{path}/oneOf/{i}") for i, variant in enumerate(variants)],
            discriminator=discriminator,
            properties=properties,
            source_path=path,
        )

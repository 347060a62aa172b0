"""
Schema converter that transforms schema AST nodes into IR.

Phase 2 of the pipeline: every AST node becomes exactly one IR node.
References are canonicalized and, when not declared yet, registered as
pending in the compilation context.
"""

from __future__ import annotations

from ...utils import normalize_name
from ..errors import FormatError
from ..schema_ast.nodes import (
    AllOfSchema,
    ArraySchema,
    EmptyObjectSchema,
    FreeFormMapSchema,
    MapSchema,
    ObjectSchema,
    OneOfSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
)
from .context import CompilationContext
from .ir_nodes import (
    ArrayType,
    CompositionType,
    Discriminator,
    EmptyObjectType,
    EnumType,
    FieldDef,
    FreeFormMapType,
    MapType,
    ObjectType,
    PrimitiveKind,
    PrimitiveType,
    RefType,
    TypeNode,
    UnionType,
)
from .reference_resolver import ReferenceResolver


class SchemaConverter:
    """Converts schema AST nodes into IR type nodes."""

    PRIMITIVE_KINDS = {
        "string": PrimitiveKind.STRING,
        "number": PrimitiveKind.NUMBER,
        "integer": PrimitiveKind.NUMBER,
        "boolean": PrimitiveKind.BOOLEAN,
    }

    def __init__(self, context: CompilationContext):
        self.context = context
        self.ref_resolver = ReferenceResolver(context)

    def convert(self, node: SchemaNode, origin_file: str) -> TypeNode:
        """
        Convert one AST node, recursively.

        Args:
            node: The parsed schema node
            origin_file: File the node was read from, used to resolve relative $refs

        Returns:
            The IR type node
        """
        if isinstance(node, RefSchema):
            return self.ref_resolver.resolve(node.ref_path, origin_file)

        if isinstance(node, PrimitiveSchema):
            return self._convert_primitive(node)

        if isinstance(node, ArraySchema):
            return ArrayType(element=self.convert(node.items, origin_file))

        if isinstance(node, ObjectSchema):
            return self._convert_object(node, origin_file)

        if isinstance(node, AllOfSchema):
            parts = [self.convert(part, origin_file) for part in node.parts]
            if node.properties is not None:
                parts.append(self._convert_object(node.properties, origin_file))
            return CompositionType(parts=parts)

        if isinstance(node, OneOfSchema):
            return self._convert_union(node, origin_file)

        if isinstance(node, MapSchema):
            return MapType(element=self.convert(node.values, origin_file))

        if isinstance(node, FreeFormMapSchema):
            return FreeFormMapType()

        if isinstance(node, EmptyObjectSchema):
            return EmptyObjectType()

        raise FormatError(f"Unsupported schema node {type(node).__name__} at {node.source_path}")

    def _convert_primitive(self, node: PrimitiveSchema) -> TypeNode:
        if node.enum is not None:
            return EnumType(values=list(node.enum))

        kind = self.PRIMITIVE_KINDS.get(node.type_name)
        if kind is None:
            raise FormatError(f'Unknown field type: "{node.type_name}" at {node.source_path}')
        return PrimitiveType(kind=kind)

    def _convert_object(self, node: ObjectSchema, origin_file: str) -> ObjectType:
        fields = []
        for prop in node.properties:
            fields.append(
                FieldDef(
                    name=normalize_name(prop.name),
                    type=self.convert(prop.type_node, origin_file),
                    required=prop.is_required,
                )
            )
        return ObjectType(fields=fields)

    def _convert_union(self, node: OneOfSchema, origin_file: str) -> UnionType:
        fields_object = None
        discriminator_type = None

        if node.properties is not None:
            fields_object = self._convert_object(node.properties, origin_file)
            for field_def in fields_object.fields:
                if field_def.name == node.discriminator.property_name and isinstance(field_def.type, RefType):
                    discriminator_type = field_def.type
                    break

        mapping = None
        if node.discriminator.mapping:
            mapping = {
                value: self.ref_resolver.canonicalize(ref_path, origin_file).full_path
                for value, ref_path in node.discriminator.mapping.items()
            }

        return UnionType(
            fields_object=fields_object,
            variants=[self.convert(variant, origin_file) for variant in node.variants],
            discriminator=Discriminator(property_name=node.discriminator.property_name, mapping=mapping),
            discriminator_type=discriminator_type,
        )

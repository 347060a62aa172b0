"""
TypeScript code generation backend.

Renders IR type nodes as TypeScript type expressions and the declaration
set as `export enum` / `export type` statements.
"""

from __future__ import annotations

from ...utils import enum_member_keys
from ..analyzer.ir_nodes import (
    ArrayType,
    CompositionType,
    EmptyObjectType,
    EnumType,
    FreeFormMapType,
    MapType,
    ObjectType,
    PrimitiveType,
    RefType,
    TypeDeclaration,
    TypeNode,
    UnionType,
)
from ..config import CodeGeneratorConfig
from ..errors import ConsistencyError
from .base import CodeBackend, quote_string

INDENT = "  "


class TypeScriptBackend(CodeBackend):
    """Renders the resolved type graph as TypeScript declarations."""

    def __init__(
        self,
        config: CodeGeneratorConfig,
        declarations: dict[str, TypeDeclaration],
        enums: dict[str, list[str]],
        namespace: str | None = None,
    ):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration (use_enums)
            declarations: Declarations keyed by canonical path
            enums: Named inline enums from the naming pass, in assignment order
            namespace: Prefix for every rendered reference, e.g. "Types"
        """
        super().__init__(config)
        self.types = declarations
        self.enums = enums
        self.namespace = namespace
        self.used_types: set[str] = set()

        self.enum_template = self.get_template("enum")
        self.declaration_template = self.get_template("declaration")
        self.module_template = self.get_template("types")

    def render(self, node: TypeNode | None, depth: int = 0) -> str:
        """
        Render a type expression.

        Args:
            node: The IR node
            depth: Nesting depth, used to indent object fields

        Returns:
            TypeScript type expression
        """
        if isinstance(node, PrimitiveType):
            return node.kind.value

        if isinstance(node, ObjectType):
            return self._render_object(node, depth)

        if isinstance(node, CompositionType):
            return " & ".join(self.render(part, depth) for part in node.parts)

        if isinstance(node, UnionType):
            variants = " | ".join(self.render(variant, depth) for variant in node.variants)
            if node.fields_object is not None:
                return f"{self.render(node.fields_object, depth)} & ({variants})"
            return variants

        if isinstance(node, MapType):
            return f"Record<string, {self.render(node.element, depth)}>"

        if isinstance(node, FreeFormMapType):
            return "Record<string, unknown>"

        if isinstance(node, EmptyObjectType):
            return "Record<string, never>"

        if isinstance(node, ArrayType):
            element = self.render(node.element, depth)
            if self._needs_parentheses(node.element):
                element = f"({element})"
            return f"{element}[]"

        if isinstance(node, EnumType):
            if self.config.use_enums and node.assigned_name:
                self.used_types.add(node.assigned_name)
                return self._qualify(node.assigned_name)
            return self.render_inline_enum(node)

        if isinstance(node, RefType):
            declaration = self.types.get(node.target)
            if declaration is None:
                raise ConsistencyError(f'Type "{node.target}" has not been found', unresolved=[node.target])

            self.used_types.add(declaration.name)
            return self._qualify(declaration.name)

        return "never"

    def render_inline_enum(self, node: EnumType) -> str:
        return " | ".join(quote_string(value) for value in node.values)

    def render_declaration(self, declaration: TypeDeclaration) -> str:
        """Render the right-hand side of a declaration."""
        # A declared enum is its own literal union, never a reference to itself
        if isinstance(declaration.root, EnumType):
            return self.render_inline_enum(declaration.root)
        return self.render(declaration.root)

    def _render_object(self, node: ObjectType, depth: int) -> str:
        if not node.fields:
            return "{}"

        gap = INDENT * depth
        inner_gap = INDENT * (depth + 1)

        lines = []
        for field_def in node.fields:
            optional = "" if field_def.required else "?"
            lines.append(f"{inner_gap}{field_def.name}{optional}: {self.render(field_def.type, depth + 1)};")

        return "{\n" + "\n".join(lines) + f"\n{gap}}}"

    def _needs_parentheses(self, node: TypeNode | None) -> bool:
        if isinstance(node, (CompositionType, UnionType)):
            return True
        if isinstance(node, EnumType):
            return not (self.config.use_enums and node.assigned_name) and len(node.values) > 1
        return False

    def _qualify(self, name: str) -> str:
        return f"{self.namespace}.{name}" if self.namespace else name

    def declarations(self) -> list[str]:
        """
        Render every declaration.

        Returns:
            Named enums first (when enabled, in assignment order), then the
            type declarations sorted by name
        """
        result = []

        if self.config.use_enums:
            for name, values in self.enums.items():
                members = list(zip(enum_member_keys(values), values))
                result.append(self.enum_template.render(name=name, members=members))

        for declaration in sorted(self.types.values(), key=lambda d: d.name):
            result.append(self.declaration_template.render(name=declaration.name, body=self.render_declaration(declaration)))

        return result

    def used_names(self) -> list[str]:
        """Declared and enum names referenced by at least one render, sorted."""
        names = {d.name for d in self.types.values()}
        if self.config.use_enums:
            names.update(self.enums)
        return sorted(name for name in names if name in self.used_types)

    def generate(self, generation_comment: str = "") -> str:
        """Generate the types module."""
        code = self.module_template.render(
            generation_comment=generation_comment,
            declarations=self.declarations(),
        )
        return code.strip() + "\n"

"""
API interface generation backend.

Renders the operations of the entry document as a TypeScript interface
whose methods take the operation parameters and resolve to the result
type. Types are referenced through the types module.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from ..analyzer.ir_nodes import ApiMethod, FieldDef, ObjectType
from ..config import CodeGeneratorConfig
from .base import CodeBackend
from .typescript_backend import TypeScriptBackend


@dataclass
class MethodSignature:
    """Template context for one interface method."""

    name: str = ""
    http_method: str = ""
    route_path: str = ""
    params: str = ""
    result: str = ""


class ApiBackend(CodeBackend):
    """Renders ApiMethods as an `Api` interface."""

    def __init__(self, config: CodeGeneratorConfig, type_backend: TypeScriptBackend, api_methods: list[ApiMethod]):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
            type_backend: Emitter used for every type expression; its
                namespace decides how the types module is imported
            api_methods: The operations to render
        """
        super().__init__(config)
        self.type_backend = type_backend
        self.api_methods = api_methods
        self.module_template = self.get_template("api")

    def render_method(self, api_method: ApiMethod) -> MethodSignature:
        fields = [FieldDef(name=p.name, type=p.type, required=p.required) for p in api_method.parameters]

        parts = []
        if fields:
            parts.append(self.type_backend.render(ObjectType(fields=fields), depth=1))
        parts.extend(self.type_backend.render(body, depth=1) for body in api_method.flat_body_types)

        params = ""
        if parts:
            optional = not api_method.flat_body_types and not any(f.required for f in fields)
            params = f"params{'?' if optional else ''}: {' & '.join(parts)}"

        return MethodSignature(
            name=api_method.name,
            http_method=api_method.http_method,
            route_path=api_method.route_path,
            params=params,
            result=self.type_backend.render(api_method.result_type, depth=1),
        )

    def generate(self, generation_comment: str = "") -> str:
        """Generate the API module."""
        methods = [self.render_method(api_method) for api_method in self.api_methods]

        code = self.module_template.render(
            generation_comment=generation_comment,
            namespace=self.type_backend.namespace,
            used_names=self.type_backend.used_names(),
            types_module=PurePosixPath(self.config.types_file_name).stem,
            methods=methods,
        )
        return code.strip() + "\n"

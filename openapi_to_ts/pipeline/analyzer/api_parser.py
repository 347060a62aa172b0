"""
API operation extraction.

Reads the `paths` section of the entry document and builds one ApiMethod
per operation, checking that route templates and declared path parameters
agree.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ...utils import normalize_name, to_camel_case
from ..errors import ConsistencyError, FormatError
from ..schema_ast.parser import SchemaParser
from .context import CompilationContext
from .converter import SchemaConverter
from .ir_nodes import ApiMethod, ObjectType, Parameter, ParameterPlace, PrimitiveKind, PrimitiveType, TypeNode

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

JSON_CONTENT_TYPE = "application/json"

_PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def extract_path_params(route_path: str) -> list[str]:
    """
    Extract the `{param}` placeholders of a route template, in order.

    Args:
        route_path: Route template, e.g. "/users/{id}/posts/{postId}"

    Returns:
        Placeholder names, e.g. ["id", "postId"]

    Raises:
        FormatError: If braces remain once every placeholder is removed
    """
    params = []
    remaining = route_path

    while True:
        match = _PLACEHOLDER_PATTERN.search(remaining)
        if not match:
            break
        params.append(match.group(1))
        remaining = remaining[: match.start()] + remaining[match.end() :]

    if "{" in remaining or "}" in remaining:
        raise FormatError(f'Url "{route_path}" has invalid parameter syntax')

    return params


def derive_method_name(http_method: str, route_path: str) -> str:
    """Build a method name from the route ("GET", "/users/{id}" -> "getUsersById")."""
    words = [http_method.lower()]
    for segment in route_path.split("/"):
        match = _PLACEHOLDER_PATTERN.fullmatch(segment)
        if match:
            words.append(f"by {match.group(1)}")
        elif segment:
            words.append(segment)
    return to_camel_case(" ".join(words))


class ApiParser:
    """Builds ApiMethods from the paths of the entry document."""

    def __init__(self, context: CompilationContext, converter: SchemaConverter, schema_parser: SchemaParser):
        self.context = context
        self.converter = converter
        self.schema_parser = schema_parser

    def parse_paths(self, document: dict[str, Any], file_name: str) -> list[ApiMethod]:
        """
        Parse every operation of a document.

        Args:
            document: The entry document
            file_name: Its canonical file name, used for body and response $refs

        Returns:
            The ApiMethods, in document order
        """
        methods = []
        names: set[str] = set()

        for route_path, path_item in (document.get("paths") or {}).items():
            route_path = str(route_path)
            path_params = extract_path_params(route_path)
            if not isinstance(path_item, dict):
                raise FormatError(f'Path item "{route_path}" must be a mapping')

            shared_parameters = path_item.get("parameters") or []

            for method_key, operation in path_item.items():
                if method_key not in HTTP_METHODS:
                    continue

                method = self._parse_operation(
                    method_key.upper(),
                    route_path,
                    set(path_params),
                    operation or {},
                    shared_parameters,
                    file_name,
                )

                if method.name in names:
                    raise ConsistencyError(f'Duplicate api method name "{method.name}" ({method.http_method} {route_path})')
                names.add(method.name)

                logger.debug("Parsed operation %s %s as %s", method.http_method, route_path, method.name)
                methods.append(method)

        return methods

    def _parse_operation(
        self,
        http_method: str,
        route_path: str,
        path_params: set[str],
        operation: dict[str, Any],
        shared_parameters: list[dict[str, Any]],
        file_name: str,
    ) -> ApiMethod:
        parameters = self._parse_parameters(route_path, path_params, shared_parameters, operation.get("parameters") or [])
        flat_body_types: list[TypeNode] = []

        if operation.get("requestBody"):
            if http_method == "GET":
                raise ConsistencyError(f'Requested body in GET request: "{route_path}"')

            body_type = self._parse_body(operation["requestBody"], route_path, file_name)
            if isinstance(body_type, ObjectType):
                for field_def in body_type.fields:
                    parameters.append(
                        Parameter(
                            place=ParameterPlace.BODY,
                            name=field_def.name,
                            type=field_def.type,
                            required=field_def.required,
                        )
                    )
            else:
                flat_body_types.append(body_type)

        operation_id = operation.get("operationId")
        name = to_camel_case(str(operation_id)) if operation_id else derive_method_name(http_method, route_path)

        return ApiMethod(
            http_method=http_method,
            route_path=route_path,
            parameters=parameters,
            result_type=self._parse_result(operation.get("responses"), http_method, route_path, file_name),
            flat_body_types=flat_body_types,
            name=name,
            operation_id=str(operation_id) if operation_id else None,
        )

    def _parse_parameters(
        self,
        route_path: str,
        path_params: set[str],
        shared_parameters: list[dict[str, Any]],
        operation_parameters: list[dict[str, Any]],
    ) -> list[Parameter]:
        # Operation-level parameters override path-level ones with the same location and name
        merged: dict[tuple[Any, Any], dict[str, Any]] = {}
        for raw in [*shared_parameters, *operation_parameters]:
            if not isinstance(raw, dict):
                raise FormatError(f'Parameter of "{route_path}" must be a mapping')
            merged[(raw.get("in"), raw.get("name"))] = raw

        parameters = []
        remaining = set(path_params)

        for raw in merged.values():
            place = raw.get("in")
            name = str(raw.get("name"))
            required = bool(raw.get("required"))

            if place == "path":
                if not required:
                    raise ConsistencyError(f'Non-required parameter "{name}" in path: "{route_path}"')
                if name not in remaining:
                    raise ConsistencyError(f'Api path "{route_path}" doesn\'t contain parameter {{{name}}}')
                remaining.discard(name)
                parameters.append(
                    Parameter(
                        place=ParameterPlace.PATH,
                        name=normalize_name(name),
                        type=PrimitiveType(kind=PrimitiveKind.STRING),
                        required=True,
                    )
                )
            elif place == "query":
                parameters.append(
                    Parameter(
                        place=ParameterPlace.QUERY,
                        name=normalize_name(name),
                        type=PrimitiveType(kind=PrimitiveKind.STRING),
                        required=required,
                    )
                )
            else:
                raise FormatError(f'Invalid \'in\' value: "{place}" for parameter "{name}" of "{route_path}"')

        if remaining:
            missing = ", ".join(sorted(remaining))
            raise ConsistencyError(f'Not all path parameters described in "{route_path}": {missing}')

        return parameters

    def _parse_body(self, request_body: dict[str, Any], route_path: str, file_name: str) -> TypeNode:
        content = request_body.get("content") or {}
        schema = (content.get(JSON_CONTENT_TYPE) or {}).get("schema")
        if not schema:
            raise FormatError(f'Body without data in api: "{route_path}"')

        node = self.schema_parser.parse_schema(schema, f"{route_path}/requestBody")
        return self.converter.convert(node, file_name)

    def _parse_result(self, responses: Any, http_method: str, route_path: str, file_name: str) -> TypeNode:
        responses = {str(code): response for code, response in (responses or {}).items()}
        success = responses.get("200")
        if success is None:
            raise ConsistencyError(f'Api without success result: {http_method} "{route_path}"')

        content = (success or {}).get("content") or {}
        schema = (content.get(JSON_CONTENT_TYPE) or {}).get("schema")
        if not schema:
            return PrimitiveType(kind=PrimitiveKind.VOID)

        node = self.schema_parser.parse_schema(schema, f"{route_path}/responses/200")
        return self.converter.convert(node, file_name)

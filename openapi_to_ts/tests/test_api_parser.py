"""Tests for API operation extraction."""

import textwrap
from unittest import TestCase

import pytest
import yaml

from openapi_to_ts.pipeline.analyzer import (
    CompilationContext,
    ObjectType,
    ParameterPlace,
    PrimitiveKind,
    PrimitiveType,
    RefType,
    SchemaConverter,
)
from openapi_to_ts.pipeline.analyzer.api_parser import ApiParser, derive_method_name, extract_path_params
from openapi_to_ts.pipeline.errors import ConsistencyError, FormatError
from openapi_to_ts.pipeline.schema_ast import SchemaParser


def test_extract_path_params():
    assert extract_path_params("/users/{id}/posts/{postId}") == ["id", "postId"]
    assert extract_path_params("/health") == []
    assert extract_path_params("/files/{name}.json") == ["name"]


@pytest.mark.parametrize("route", ["/users/{id", "/users/id}", "/users/{}", "/a/{{id}}"])
def test_extract_path_params_rejects_unbalanced_braces(route):
    with pytest.raises(FormatError, match="invalid parameter syntax"):
        extract_path_params(route)


@pytest.mark.parametrize(
    "method,route,expected",
    [
        ("GET", "/users", "getUsers"),
        ("GET", "/users/{id}", "getUsersById"),
        ("DELETE", "/users/{id}/posts/{postId}", "deleteUsersByIdPostsByPostId"),
        ("POST", "/", "post"),
    ],
)
def test_derive_method_name(method, route, expected):
    assert derive_method_name(method, route) == expected


class TestApiParser(TestCase):
    def setUp(self):
        self.context = CompilationContext()
        self.context.loaded_files.add("openapi.yaml")
        self.api_parser = ApiParser(self.context, SchemaConverter(self.context), SchemaParser())

    def _parse(self, text):
        return self.api_parser.parse_paths(yaml.safe_load(textwrap.dedent(text)), "openapi.yaml")

    def test_path_and_query_parameters(self):
        methods = self._parse(
            """
            paths:
              /users/{id}/posts/{postId}:
                get:
                  parameters:
                    - {in: path, name: id, required: true}
                    - {in: path, name: postId, required: true}
                    - {in: query, name: page_size}
                  responses:
                    '200':
                      content:
                        application/json:
                          schema:
                            $ref: '#/components/schemas/Post'
            """
        )

        self.assertEqual(len(methods), 1)
        method = methods[0]
        self.assertEqual(method.http_method, "GET")
        self.assertEqual(method.name, "getUsersByIdPostsByPostId")
        self.assertIsNone(method.operation_id)
        self.assertEqual(
            [(p.place, p.name, p.required) for p in method.parameters],
            [
                (ParameterPlace.PATH, "id", True),
                (ParameterPlace.PATH, "postId", True),
                (ParameterPlace.QUERY, "pagesize", False),
            ],
        )
        self.assertEqual(method.result_type, RefType(target="openapi.yaml#/components/schemas/Post"))
        self.assertIn("openapi.yaml#/components/schemas/Post", self.context.pending_references)

    def test_operation_id_is_camel_cased(self):
        methods = self._parse(
            """
            paths:
              /health:
                get:
                  operationId: Check_Health
                  responses:
                    200:
                      description: ok
            """
        )
        self.assertEqual(methods[0].name, "checkHealth")
        self.assertEqual(methods[0].operation_id, "Check_Health")
        self.assertEqual(methods[0].result_type, PrimitiveType(kind=PrimitiveKind.VOID))

    def test_path_level_parameters_are_shared(self):
        methods = self._parse(
            """
            paths:
              /users/{id}:
                parameters:
                  - {in: path, name: id, required: true}
                get:
                  responses: {'200': {}}
                delete:
                  responses: {'200': {}}
            """
        )
        self.assertEqual([m.name for m in methods], ["getUsersById", "deleteUsersById"])
        for method in methods:
            self.assertEqual([p.name for p in method.parameters], ["id"])

    def test_query_parameter_does_not_satisfy_path_placeholder(self):
        with self.assertRaisesRegex(ConsistencyError, "Not all path parameters described"):
            self._parse(
                """
                paths:
                  /users/{id}:
                    get:
                      parameters:
                        - {in: query, name: id}
                      responses: {'200': {}}
                """
            )

    def test_undeclared_path_parameter(self):
        with self.assertRaisesRegex(ConsistencyError, "doesn't contain parameter"):
            self._parse(
                """
                paths:
                  /users:
                    get:
                      parameters:
                        - {in: path, name: id, required: true}
                      responses: {'200': {}}
                """
            )

    def test_optional_path_parameter(self):
        with self.assertRaisesRegex(ConsistencyError, "Non-required parameter"):
            self._parse(
                """
                paths:
                  /users/{id}:
                    get:
                      parameters:
                        - {in: path, name: id}
                      responses: {'200': {}}
                """
            )

    def test_header_parameter(self):
        with self.assertRaisesRegex(FormatError, "Invalid 'in' value"):
            self._parse(
                """
                paths:
                  /users:
                    get:
                      parameters:
                        - {in: header, name: X-Token}
                      responses: {'200': {}}
                """
            )

    def test_get_with_body(self):
        with self.assertRaisesRegex(ConsistencyError, "Requested body in GET request"):
            self._parse(
                """
                paths:
                  /users:
                    get:
                      requestBody:
                        content:
                          application/json:
                            schema: {type: string}
                      responses: {'200': {}}
                """
            )

    def test_missing_success_response(self):
        with self.assertRaisesRegex(ConsistencyError, "Api without success result"):
            self._parse(
                """
                paths:
                  /users:
                    post:
                      responses:
                        '201': {}
                """
            )

    def test_object_body_is_flattened(self):
        methods = self._parse(
            """
            paths:
              /users:
                post:
                  requestBody:
                    content:
                      application/json:
                        schema:
                          type: object
                          required: [name]
                          properties:
                            name: {type: string}
                            tags: {type: array, items: {type: string}}
                  responses: {'200': {}}
            """
        )
        method = methods[0]
        self.assertEqual(
            [(p.place, p.name, p.required) for p in method.parameters],
            [(ParameterPlace.BODY, "name", True), (ParameterPlace.BODY, "tags", False)],
        )
        self.assertEqual(method.flat_body_types, [])

    def test_referenced_body_is_kept_whole(self):
        methods = self._parse(
            """
            paths:
              /users:
                put:
                  requestBody:
                    content:
                      application/json:
                        schema:
                          $ref: '#/components/schemas/User'
                  responses: {'200': {}}
            """
        )
        method = methods[0]
        self.assertEqual(method.parameters, [])
        self.assertEqual(method.flat_body_types, [RefType(target="openapi.yaml#/components/schemas/User")])
        self.assertNotIsInstance(method.flat_body_types[0], ObjectType)

    def test_body_without_json_schema(self):
        with self.assertRaisesRegex(FormatError, "Body without data"):
            self._parse(
                """
                paths:
                  /upload:
                    post:
                      requestBody:
                        content:
                          application/octet-stream:
                            schema: {type: string}
                      responses: {'200': {}}
                """
            )

    def test_duplicate_method_names(self):
        with self.assertRaisesRegex(ConsistencyError, "Duplicate api method name"):
            self._parse(
                """
                paths:
                  /a:
                    get:
                      operationId: fetch
                      responses: {'200': {}}
                  /b:
                    get:
                      operationId: fetch
                      responses: {'200': {}}
                """
            )

    def test_non_operation_keys_are_ignored(self):
        methods = self._parse(
            """
            paths:
              /users:
                summary: Users
                x-internal: true
                get:
                  responses: {'200': {}}
            """
        )
        self.assertEqual([m.http_method for m in methods], ["GET"])

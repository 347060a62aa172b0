"""Tests for inline enum naming."""

from unittest import TestCase

from openapi_to_ts.pipeline.analyzer import (
    ArrayType,
    CompositionType,
    EnumNameResolver,
    EnumType,
    FieldDef,
    MapType,
    ObjectType,
    PrimitiveKind,
    PrimitiveType,
    RefType,
    TypeDeclaration,
)
from openapi_to_ts.pipeline.errors import NamingExhaustionError


def declare(name, root):
    return TypeDeclaration(name=name, full_path=f"openapi.yaml#/components/schemas/{name}", root=root)


def obj(**fields):
    return ObjectType(fields=[FieldDef(name=name, type=node, required=True) for name, node in fields.items()])


def declarations(*items):
    return {d.full_path: d for d in items}


class TestEnumNameResolver(TestCase):
    def test_field_enum_is_named_after_its_field(self):
        role = EnumType(values=["admin", "user"])
        decls = declarations(declare("User", obj(name=PrimitiveType(kind=PrimitiveKind.STRING), role=role)))

        enums = EnumNameResolver(decls).resolve()

        self.assertEqual(enums, {"Role": ["admin", "user"]})
        self.assertEqual(role.assigned_name, "Role")

    def test_identical_enums_share_a_name(self):
        first = EnumType(values=["on", "off"])
        second = EnumType(values=["off", "on"])
        decls = declarations(declare("Lamp", obj(state=first)), declare("Switch", obj(state=second)))

        enums = EnumNameResolver(decls).resolve()

        self.assertEqual(list(enums), ["State"])
        self.assertEqual(first.assigned_name, "State")
        self.assertEqual(second.assigned_name, "State")

    def test_conflicting_enums_are_prefixed_with_their_owner(self):
        account = EnumType(values=["active", "closed"])
        order = EnumType(values=["pending", "shipped"])
        decls = declarations(declare("Account", obj(status=account)), declare("Order", obj(status=order)))

        enums = EnumNameResolver(decls).resolve()

        self.assertEqual(enums, {"AccountStatus": ["active", "closed"], "OrderStatus": ["pending", "shipped"]})
        self.assertEqual(account.assigned_name, "AccountStatus")
        self.assertEqual(order.assigned_name, "OrderStatus")

    def test_nested_conflicts_use_the_nearest_ancestor(self):
        address_kind = EnumType(values=["home", "work"])
        contact_kind = EnumType(values=["email", "phone"])
        decls = declarations(
            declare("User", obj(address=obj(kind=address_kind), contact=obj(kind=contact_kind))),
        )

        EnumNameResolver(decls).resolve()

        self.assertEqual(address_kind.assigned_name, "AddressKind")
        self.assertEqual(contact_kind.assigned_name, "ContactKind")

    def test_short_and_placeholder_names_are_escalated(self):
        short = EnumType(values=["a", "b"])
        placeholder = EnumType(values=["cat", "dog"])
        decls = declarations(declare("Pet", obj(id=short, type=placeholder)))

        enums = EnumNameResolver(decls).resolve()

        self.assertEqual(short.assigned_name, "PetId")
        self.assertEqual(placeholder.assigned_name, "PetType")
        self.assertEqual(list(enums), ["PetId", "PetType"])

    def test_declaration_names_are_never_reused(self):
        color = EnumType(values=["red", "green"])
        decls = declarations(
            declare("Color", PrimitiveType(kind=PrimitiveKind.STRING)),
            declare("Car", obj(color=color)),
        )

        EnumNameResolver(decls).resolve()

        self.assertEqual(color.assigned_name, "CarColor")

    def test_declared_enum_is_reused(self):
        declared = EnumType(values=["admin", "user"])
        inline = EnumType(values=["admin", "user"])
        decls = declarations(declare("Role", declared), declare("User", obj(role=inline)))

        enums = EnumNameResolver(decls).resolve()

        self.assertEqual(enums, {})
        self.assertEqual(declared.assigned_name, "Role")
        self.assertEqual(inline.assigned_name, "Role")

    def test_array_and_composition_members_are_named(self):
        tags = EnumType(values=["new", "hot"])
        level = EnumType(values=["low", "high"])
        decls = declarations(
            declare("Post", obj(tags=ArrayType(element=tags))),
            declare("Alert", CompositionType(parts=[RefType(target="x"), obj(level=level)])),
        )

        EnumNameResolver(decls).resolve()

        self.assertEqual(tags.assigned_name, "Tags")
        self.assertEqual(level.assigned_name, "Level")

    def test_exhausted_prefixes(self):
        decls = declarations(
            declare("Role", PrimitiveType(kind=PrimitiveKind.STRING)),
            declare("UserRole", PrimitiveType(kind=PrimitiveKind.STRING)),
            declare("User", obj(role=EnumType(values=["admin"]))),
        )

        with self.assertRaisesRegex(NamingExhaustionError, "Top level enums duplicates"):
            EnumNameResolver(decls).resolve()

    def test_naming_is_deterministic(self):
        def build():
            return declarations(
                declare("Account", obj(status=EnumType(values=["active", "closed"]))),
                declare("Order", obj(status=EnumType(values=["pending", "shipped"]))),
                declare("Invoice", obj(status=EnumType(values=["active", "closed"]))),
            )

        first = EnumNameResolver(build()).resolve()
        second = EnumNameResolver(build()).resolve()

        self.assertEqual(first, second)
        self.assertEqual(list(first), ["AccountStatus", "OrderStatus", "InvoiceStatus"])

    def test_enums_directly_under_a_declaration(self):
        permission = EnumType(values=["read", "write"])
        flag = EnumType(values=["on", "off"])
        nested = EnumType(values=["x", "y"])
        decls = declarations(
            declare("Permissions", ArrayType(element=permission)),
            declare("Flags", MapType(element=flag)),
            declare("Grid", ArrayType(element=ArrayType(element=nested))),
        )

        enums = EnumNameResolver(decls).resolve()

        self.assertEqual(list(enums), ["PermissionsItem", "FlagsValue", "GridItem"])
        self.assertEqual(permission.assigned_name, "PermissionsItem")
        self.assertEqual(flag.assigned_name, "FlagsValue")
        self.assertEqual(nested.assigned_name, "GridItem")

    def test_container_fields_keep_the_field_name(self):
        tags = EnumType(values=["new", "hot"])
        decls = declarations(declare("Post", obj(tags=MapType(element=tags))))

        EnumNameResolver(decls).resolve()

        self.assertEqual(tags.assigned_name, "Tags")

"""
Name resolver for inline enums.

Gives every anonymous enum a unique, deterministic name derived from the
field it appears in, and handles collisions with declarations and with
other enums by prefixing ancestor names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...utils import to_pascal_case
from ..errors import InternalInvariantError, NamingExhaustionError
from .ir_nodes import (
    ArrayType,
    CompositionType,
    EnumType,
    MapType,
    ObjectType,
    TypeDeclaration,
    TypeNode,
    UnionType,
    enum_footprint,
)

logger = logging.getLogger(__name__)

# Candidates this short, or equal to a placeholder, are always escalated
MIN_ENUM_NAME_LENGTH = 3
PLACEHOLDER_NAMES = {"Type"}


@dataclass
class EnumSite:
    """An inline enum together with where it was found."""

    name: str = ""  # Enclosing field name
    node: EnumType | None = None
    path: list[str] = field(default_factory=list)  # Ancestor names, outermost first


class EnumNameResolver:
    """Assigns names to inline enums and collects the named enum declarations."""

    def __init__(self, declarations: dict[str, TypeDeclaration]):
        """
        Initialize the resolver.

        Args:
            declarations: The complete, resolved declaration set
        """
        self.declarations = declarations
        self.declared_names = {d.name for d in declarations.values()}
        self.declared_enum_names = {d.name for d in declarations.values() if isinstance(d.root, EnumType)}

        # Allocated enum name -> values, in order of assignment
        self.enums: dict[str, list[str]] = {}
        self.duplicates: set[str] = set()

    def resolve(self) -> dict[str, list[str]]:
        """
        Name every enum, re-running until no new duplicate name is found.

        Blacklisting a name during one pass can leave an enum named earlier
        in the same pass with that name, so passes repeat until stable.

        Returns:
            Allocated enum names mapped to their values, in assignment order

        Raises:
            NamingExhaustionError: If an enum runs out of ancestor prefixes
        """
        sites = self.collect_sites()

        # Every non-final pass blacklists at least one new candidate name
        max_passes = sum(len(site.path) + 1 for site in sites) + 1

        for pass_number in range(1, max_passes + 1):
            known_duplicates = len(self.duplicates)
            self.enums = {}

            for site in sites:
                self._assign(site)

            logger.debug("Enum naming pass %d: %d names, %d duplicates", pass_number, len(self.enums), len(self.duplicates))

            if len(self.duplicates) == known_duplicates:
                return self.enums

        raise InternalInvariantError(f"Enum naming did not converge after {max_passes} passes")

    def collect_sites(self) -> list[EnumSite]:
        """Walk every declaration and list its inline enums in depth-first order."""
        sites: list[EnumSite] = []
        for declaration in self.declarations.values():
            if isinstance(declaration.root, EnumType):
                # A declared enum is named by its declaration
                declaration.root.assigned_name = declaration.name
                continue
            self._collect(declaration.name, declaration.root, [], sites)
        return sites

    def _collect(self, name: str, node: TypeNode | None, path: list[str], sites: list[EnumSite]) -> None:
        if isinstance(node, EnumType):
            sites.append(EnumSite(name=name, node=node, path=path))
        elif isinstance(node, ObjectType):
            for field_def in node.fields:
                self._collect(field_def.name, field_def.type, [*path, name], sites)
        elif isinstance(node, CompositionType):
            for part in node.parts:
                self._collect(self._member_name(name, path, part, "Value"), part, path, sites)
        elif isinstance(node, UnionType):
            if node.fields_object is not None:
                self._collect(name, node.fields_object, path, sites)
            for variant in node.variants:
                self._collect(self._member_name(name, path, variant, "Value"), variant, path, sites)
        elif isinstance(node, ArrayType):
            self._collect(self._member_name(name, path, node.element, "Item"), node.element, path, sites)
        elif isinstance(node, MapType):
            self._collect(self._member_name(name, path, node.element, "Value"), node.element, path, sites)

    @staticmethod
    def _member_name(name: str, path: list[str], member: TypeNode | None, suffix: str) -> str:
        # An enum directly under a declaration has no field to be named after
        if not path and isinstance(member, EnumType):
            return f"{name}{suffix}"
        return name

    def _assign(self, site: EnumSite) -> None:
        enum_name = to_pascal_case(site.name)

        # Reuse a declared enum of the same name
        if enum_name in self.declared_enum_names:
            site.node.assigned_name = enum_name
            return

        footprint = enum_footprint(site.node.values)
        path_index = len(site.path) - 1

        while self._is_conflict(enum_name, footprint):
            if path_index < 0:
                raise NamingExhaustionError(f"Top level enums duplicates: {site.name} ({enum_name})")
            enum_name = to_pascal_case(f"{site.path[path_index]}{enum_name}")
            path_index -= 1

        site.node.assigned_name = enum_name
        self.enums[enum_name] = site.node.values

    def _is_conflict(self, enum_name: str, footprint: str) -> bool:
        if enum_name in self.declared_names or enum_name in self.duplicates:
            return True

        existing = self.enums.get(enum_name)
        if existing is not None and enum_footprint(existing) != footprint:
            # Two different enums want this name: neither keeps it
            del self.enums[enum_name]
            self.duplicates.add(enum_name)
            logger.debug("Enum name %s is ambiguous, escalating", enum_name)
            return True

        return len(enum_name) < MIN_ENUM_NAME_LENGTH or enum_name in PLACEHOLDER_NAMES

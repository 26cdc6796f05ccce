"""Tests for hubgen.codegen.registry."""

from __future__ import annotations

import pytest

from hubgen.codegen import DeclaredTypeRegistry
from hubgen.errors import DuplicateDeclaration, TypeConflict
from hubgen.models import ClassType
from tests._fixtures.contracts import DOUBLE, color, coordinate


def test_seeded_names_are_known() -> None:
    registry = DeclaredTypeRegistry(["Coordinate", "Color"])

    assert "Coordinate" in registry
    assert "Route" not in registry
    assert len(registry) == 2
    assert registry.existing == {"Coordinate", "Color"}
    assert registry.declared_types == ()


def test_declare_records_pending_types_in_order(registry: DeclaredTypeRegistry) -> None:
    registry.declare(color())
    registry.declare(coordinate())

    assert [item.name for item in registry.declared_types] == ["Color", "Coordinate"]
    assert "Coordinate" in registry


def test_declaring_seeded_name_is_rejected() -> None:
    registry = DeclaredTypeRegistry(["Coordinate"])

    with pytest.raises(DuplicateDeclaration) as excinfo:
        registry.declare(coordinate())

    assert excinfo.value.type_name == "Coordinate"


def test_declaring_twice_is_rejected(registry: DeclaredTypeRegistry) -> None:
    registry.declare(coordinate())

    with pytest.raises(DuplicateDeclaration):
        registry.declare(coordinate())


def test_reserve_then_declare(registry: DeclaredTypeRegistry) -> None:
    descriptor = coordinate()
    registry.reserve(descriptor)

    assert "Coordinate" in registry
    assert registry.declared_types == ()

    registry.declare(descriptor)
    assert registry.declared_types == (descriptor,)


def test_reserve_of_known_name_is_rejected(registry: DeclaredTypeRegistry) -> None:
    registry.reserve(coordinate())

    with pytest.raises(DuplicateDeclaration):
        registry.reserve(coordinate())


def test_declare_after_reservation_with_other_shape_conflicts(registry: DeclaredTypeRegistry) -> None:
    registry.reserve(coordinate())

    with pytest.raises(TypeConflict):
        registry.declare(ClassType("Coordinate", [("z", DOUBLE)]))


def test_check_consistent_allows_equal_shapes(registry: DeclaredTypeRegistry) -> None:
    registry.declare(coordinate())

    registry.check_consistent(coordinate())


def test_check_consistent_ignores_seeded_names() -> None:
    registry = DeclaredTypeRegistry(["Coordinate"])

    registry.check_consistent(ClassType("Coordinate", [("z", DOUBLE)]))


def test_imports_keep_first_seen_order_without_duplicates(registry: DeclaredTypeRegistry) -> None:
    for namespace in ("System.Threading.Tasks", "System", None, "System.Threading.Tasks"):
        registry.require_import(namespace)

    assert registry.imports == ("System.Threading.Tasks", "System")


def test_registries_do_not_share_state() -> None:
    first = DeclaredTypeRegistry()
    second = DeclaredTypeRegistry()

    first.declare(color())

    assert "Color" not in second

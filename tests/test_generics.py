import pytest

from camlgen import (
    DEFAULT_PLACEHOLDERS, NameRegistry, NativeType, Placeholder, PlaceholderTable,
    UnknownPlaceholder, placeholder_names,
)


def test_default_table_has_three_slots():
    table = PlaceholderTable()
    assert len(table) == 3
    assert [table.placeholder(i).name for i in range(3)] == list(DEFAULT_PLACEHOLDERS)


def test_placeholder_renders_as_type_variable():
    assert PlaceholderTable().placeholder(1).type_var == "'t2"


def test_unregistered_slot_is_rejected():
    table = PlaceholderTable()
    with pytest.raises(UnknownPlaceholder):
        table.placeholder(5)
    with pytest.raises(UnknownPlaceholder):
        table.placeholder(-1)


def test_slots_beyond_table_are_rejected():
    table = PlaceholderTable()
    assert table.slots(2) == (table.placeholder(0), table.placeholder(1))
    assert table.slots(0) == ()
    with pytest.raises(UnknownPlaceholder):
        table.slots(4)
    with pytest.raises(UnknownPlaceholder):
        table.slots(-1)


def test_check_rejects_foreign_placeholder():
    table = PlaceholderTable()
    assert table.check(Placeholder(0, "T1")) == table.placeholder(0)
    with pytest.raises(UnknownPlaceholder):
        table.check(Placeholder(0, "X"))
    with pytest.raises(UnknownPlaceholder):
        table.check(Placeholder(5, "T6"))


def test_table_is_extensible():
    table = PlaceholderTable(placeholder_names(5))
    assert table.placeholder(4).name == "T5"


def test_duplicate_names_are_rejected():
    with pytest.raises(ValueError):
        PlaceholderTable(("T1", "T1"))


def test_placeholders_do_not_collide_with_types_named_alike():
    registry = NameRegistry()
    registry.declare_type(("M",), NativeType("T1"), "T1")
    assert PlaceholderTable().placeholder(0).name == "T1"
    assert ("M", "T1") in registry

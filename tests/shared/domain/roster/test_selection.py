import pytest

from stride.shared.core.errors import SelectionCapacityExceeded
from stride.shared.domain.roster import MAX_SELECTION, SelectionSet


def fill(selection: SelectionSet, count: int) -> None:
    for i in range(count):
        selection.select(f"id-{i}")


def test_default_limit_is_eleven():
    assert MAX_SELECTION == 11
    assert SelectionSet().limit == 11


def test_twelfth_distinct_select_is_rejected():
    selection = SelectionSet()
    fill(selection, 11)
    before = selection.all()

    with pytest.raises(SelectionCapacityExceeded) as exc_info:
        selection.select("id-11")

    assert exc_info.value.limit == 11
    assert selection.all() == before
    assert len(selection) == 11
    assert selection.is_full


def test_reselecting_member_when_full_is_accepted():
    selection = SelectionSet()
    fill(selection, 11)
    selection.select("id-3")
    assert len(selection) == 11


def test_select_is_idempotent():
    selection = SelectionSet()
    selection.select("a")
    selection.select("a")
    assert len(selection) == 1
    assert selection.contains("a")


def test_deselect_non_member_is_noop():
    selection = SelectionSet()
    selection.select("a")
    selection.deselect("b")
    assert selection.all() == frozenset({"a"})


def test_deselect_then_select_restores_membership():
    selection = SelectionSet()
    selection.select("a")
    selection.deselect("a")
    assert "a" not in selection
    selection.select("a")
    assert "a" in selection


def test_cap_counts_current_members_not_taps():
    selection = SelectionSet()
    for i in range(30):
        selection.select(f"id-{i % 5}")
        selection.deselect(f"id-{(i + 1) % 5}")
    fill(selection, 11)
    assert len(selection) == 11


def test_freed_slot_can_be_reused():
    selection = SelectionSet(limit=2)
    selection.select("a")
    selection.select("b")
    selection.deselect("a")
    selection.select("c")
    assert selection.all() == frozenset({"b", "c"})
    assert selection.remaining == 0


def test_unknown_identifier_is_ignored():
    selection = SelectionSet(is_known=lambda identifier: identifier.startswith("known"))
    selection.select("known-1")
    selection.select("stranger")
    assert selection.all() == frozenset({"known-1"})


def test_invalid_limit():
    with pytest.raises(ValueError):
        SelectionSet(limit=0)


def test_clear():
    selection = SelectionSet()
    fill(selection, 3)
    selection.clear()
    assert len(selection) == 0

import pytest
from pydantic import ValidationError

from domain.selection import SelectionMode, SelectionState, toggle

SINGLE = SelectionMode.SINGLE
MULTI = SelectionMode.MULTI


def _mk_state(mode: SelectionMode, *ids: str) -> SelectionState:
    return SelectionState(mode=mode, ids=ids)


def test_single_select_replaces_instead_of_accumulating() -> None:
    state = toggle(toggle(SelectionState.empty(SINGLE), "x"), "y")
    assert state.ids == ("y",)


def test_single_select_reclick_clears() -> None:
    state = toggle(_mk_state(SINGLE, "x"), "x")
    assert state.is_empty()
    assert state.first is None


def test_multi_select_accumulates_and_removes() -> None:
    state = SelectionState.empty(MULTI)
    for item_id in ("a", "b", "a"):
        state = toggle(state, item_id)
    assert state.ids == ("b",)


def test_multi_select_keeps_click_order_on_removal() -> None:
    state = toggle(_mk_state(MULTI, "c", "a", "b"), "a")
    assert state.ids == ("c", "b")
    assert toggle(state, "z").ids == ("c", "b", "z")


@pytest.mark.parametrize(
    "state, item_id",
    [
        (SelectionState.empty(SINGLE), "x"),
        (SelectionState(mode=SINGLE, ids=("x",)), "x"),
        (SelectionState.empty(MULTI), "x"),
        (SelectionState(mode=MULTI, ids=("a", "b")), "c"),
        (SelectionState(mode=MULTI, ids=("a", "b", "c")), "c"),
    ],
)
def test_toggle_twice_restores_state(state: SelectionState, item_id: str) -> None:
    assert toggle(toggle(state, item_id), item_id) == state


def test_multi_reclick_of_middle_id_moves_it_to_the_end() -> None:
    state = _mk_state(MULTI, "a", "b", "c")
    assert toggle(toggle(state, "b"), "b").ids == ("a", "c", "b")


def test_toggle_does_not_mutate_input() -> None:
    state = _mk_state(MULTI, "a")
    toggle(state, "b")
    assert state.ids == ("a",)


def test_unknown_ids_are_accepted() -> None:
    assert toggle(SelectionState.empty(SINGLE), "not-in-any-tree").ids == ("not-in-any-tree",)


def test_invariants_enforced_on_construction() -> None:
    with pytest.raises(ValidationError):
        SelectionState(mode=SINGLE, ids=("a", "b"))
    with pytest.raises(ValidationError):
        SelectionState(mode=MULTI, ids=("a", "a"))


def test_state_is_immutable() -> None:
    state = SelectionState.empty(MULTI)
    with pytest.raises(ValidationError):
        state.ids = ("a",)  # type: ignore[misc]

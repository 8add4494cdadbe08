"""Single- and multi-select state with pure toggle transitions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class SelectionMode(str, Enum):
    """How a selector accumulates ids."""

    SINGLE = "single"
    MULTI = "multi"


class SelectionState(BaseModel):
    """
    Ordered ids currently chosen in one selector.

    Insertion order is click order. Under SINGLE at most one id is held; under
    MULTI ids are distinct. Instances are immutable; `toggle` returns a new one.
    """

    model_config = ConfigDict(frozen=True)

    mode: SelectionMode
    ids: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _validate(self) -> "SelectionState":
        if self.mode is SelectionMode.SINGLE and len(self.ids) > 1:
            raise ValueError(f"single selection holds at most one id, got {list(self.ids)}")
        if len(set(self.ids)) != len(self.ids):
            raise ValueError(f"selection ids must be distinct, got {list(self.ids)}")
        return self

    @classmethod
    def empty(cls, mode: SelectionMode) -> "SelectionState":
        return cls(mode=mode)

    @property
    def first(self) -> str | None:
        return self.ids[0] if self.ids else None

    def is_empty(self) -> bool:
        return not self.ids

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.ids

    def __len__(self) -> int:
        return len(self.ids)


def toggle(state: SelectionState, item_id: str) -> SelectionState:
    """
    Toggle `item_id` and return the resulting state.

    SINGLE: re-selecting the held id clears the selection; any other id replaces it.
    MULTI: a held id is removed (others keep their order); a new id is appended.

    Ids unknown to the taxonomy are accepted; resolution to names happens later.
    """
    if state.mode is SelectionMode.SINGLE:
        ids: tuple[str, ...] = () if item_id in state.ids else (item_id,)
    elif item_id in state.ids:
        ids = tuple(i for i in state.ids if i != item_id)
    else:
        ids = (*state.ids, item_id)
    return SelectionState(mode=state.mode, ids=ids)

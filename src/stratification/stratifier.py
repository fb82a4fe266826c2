from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, List, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class Stratifier(Protocol):
    """One classification axis: an ordered, de-duplicated list of states."""

    def get_all_states(self) -> Sequence[Any]:
        ...


@dataclass(frozen=True)
class StateStratifier:
    name: str
    states: Tuple[Hashable, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "states", tuple(self.states))

    def get_all_states(self) -> Sequence[Hashable]:
        return self.states


def stratifier_name(strat: Any, index: int) -> str:
    name = getattr(strat, "name", None)
    return str(name) if name else f"strat{index}"


def validate_states(states: Sequence[Any], context: str = "stratifier") -> List[Any]:
    """Checks one axis and returns its states as a list.

    An axis must enumerate at least one state, every state must be hashable
    (it labels an edge of the tree) and no state may repeat.
    """
    out = list(states)
    if not out:
        raise ValueError(f"{context} has no states")
    seen = set()
    for s in out:
        try:
            dup = s in seen
        except TypeError as exc:
            raise ValueError(f"{context} has an unhashable state: {s!r}") from exc
        if dup:
            raise ValueError(f"{context} has a duplicate state: {s!r}")
        seen.add(s)
    return out

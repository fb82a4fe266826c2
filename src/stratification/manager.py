from __future__ import annotations

import copy
import operator
from typing import Any, Generic, Iterable, Iterator, List, Optional, Sequence, Set, Tuple, TypeVar

import numpy as np

from .combinatorics import combine_states as _combine_states
from .config import StratificationSpec
from .logger import EventLogger
from .node import StratNode, build_tree
from .stratifier import Stratifier, stratifier_name, validate_states

S = TypeVar("S", bound=Stratifier)
V = TypeVar("V")


class _Unset:
    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Unset":
        return self


UNSET: Any = _Unset()


def _is_state_tuple(states: Any) -> bool:
    if isinstance(states, (str, bytes)):
        return False
    return isinstance(states, (Sequence, np.ndarray))


class StratificationManager(Generic[S, V]):
    """Dense key space over every combination of one state per stratifier.

    The tree and the key assignment are fixed at construction: axis 0 varies
    slowest, the last axis fastest, so keys follow the lexicographic order of
    the tuples. Values live in a fixed-size array indexed by key.

    Once built, lookups only read immutable structures and may be shared
    between threads. ``set`` performs no locking: concurrent writers must not
    target the same key.
    """

    def __init__(
        self,
        stratifiers: Sequence[S],
        *,
        default: Any = UNSET,
        logger: Optional[EventLogger] = None,
    ) -> None:
        strats = list(stratifiers)
        if not strats:
            raise ValueError("At least one stratifier is required")
        state_lists = [
            validate_states(s.get_all_states(), context=f"stratifier {i} ({stratifier_name(s, i)})")
            for i, s in enumerate(strats)
        ]

        self._stratifiers: List[S] = strats
        self._root, states_by_key = build_tree(state_lists)
        self._states_by_key: Tuple[Tuple[Any, ...], ...] = tuple(states_by_key)
        self._values = np.empty(len(self._states_by_key), dtype=object)
        for i in range(len(self._values)):
            # each slot gets its own copy of a mutable default
            self._values[i] = copy.copy(default)

        if logger is not None:
            logger.log(
                "stratification_built",
                {
                    "stratifiers": [stratifier_name(s, i) for i, s in enumerate(strats)],
                    "sizes": [len(x) for x in state_lists],
                    "n_keys": self.size(),
                },
            )

    @classmethod
    def from_spec(
        cls,
        spec: StratificationSpec,
        *,
        default: Any = UNSET,
        logger: Optional[EventLogger] = None,
    ) -> "StratificationManager":
        return cls(spec.build_stratifiers(), default=default, logger=logger)

    # ------------------------------------------------------------------
    # structure

    @property
    def root(self) -> StratNode:
        return self._root

    @property
    def stratifiers(self) -> List[S]:
        return list(self._stratifiers)

    @property
    def n_stratifiers(self) -> int:
        return len(self._stratifiers)

    def size(self) -> int:
        return len(self._states_by_key)

    def __len__(self) -> int:
        return self.size()

    # ------------------------------------------------------------------
    # forward / reverse lookup

    def get_key(self, states: Sequence[Any]) -> int:
        """Key of a full tuple, or -1 if it does not name a leaf."""
        if not _is_state_tuple(states) or len(states) != self.n_stratifiers:
            return -1
        return self._root.find(states)

    def contains_key(self, states: Sequence[Any]) -> bool:
        return self.get_key(states) >= 0

    def __contains__(self, states: object) -> bool:
        return self.contains_key(states)

    def get_states_for_key(self, key: int) -> List[Any]:
        return list(self._states_by_key[self._check_key(key)])

    def get_strats_and_states_for_key(self, key: int) -> List[Tuple[S, Any]]:
        return list(zip(self._stratifiers, self._states_by_key[self._check_key(key)]))

    def states(self) -> Iterator[Tuple[Any, ...]]:
        return iter(self._states_by_key)

    # ------------------------------------------------------------------
    # value store

    def _check_key(self, key: int) -> int:
        if isinstance(key, (bool, np.bool_)):
            raise TypeError(f"Key must be an integer, not {type(key).__name__}")
        k = operator.index(key)
        n = self.size()
        if k < 0 or k >= n:
            raise IndexError(f"Key {k} out of range [0, {n})")
        return k

    def _resolve(self, key_or_states: Any) -> int:
        if isinstance(key_or_states, (int, np.integer, np.bool_)):
            return self._check_key(key_or_states)
        return self._check_key(self.get_key(key_or_states))

    def get(self, key_or_states: Any) -> V:
        """Value stored for a key or a full tuple.

        Raises ``IndexError`` for a key outside ``[0, size())``, which includes
        a tuple that does not resolve to a key.
        """
        return self._values[self._resolve(key_or_states)]

    def set(self, key_or_states: Any, value: V) -> None:
        self._values[self._resolve(key_or_states)] = value

    def __getitem__(self, key_or_states: Any) -> V:
        return self.get(key_or_states)

    def __setitem__(self, key_or_states: Any, value: V) -> None:
        self.set(key_or_states, value)

    def values(self) -> List[V]:
        return self._values.tolist()

    def items(self) -> Iterator[Tuple[Tuple[Any, ...], V]]:
        return zip(self._states_by_key, self._values.tolist())

    # ------------------------------------------------------------------
    # wildcard queries

    combine_states = staticmethod(_combine_states)

    def get_keys(self, partial_states: Sequence[Iterable[Any]]) -> Set[int]:
        """Keys of every tuple drawing one state per axis from ``partial_states``.

        ``partial_states[i]`` holds the allowed states of stratifier ``i``.
        States unknown to an axis are ignored. A list whose length differs from
        the number of stratifiers matches nothing.
        """
        if len(partial_states) != self.n_stratifiers:
            return set()
        allowed = [list(s) for s in partial_states]
        return self._root.find_keys(allowed)

    def get_keys_for_states(self, tuples: Iterable[Sequence[Any]]) -> Set[int]:
        keys = set()
        for t in tuples:
            k = self.get_key(t)
            if k >= 0:
                keys.add(k)
        return keys

    def __repr__(self) -> str:
        names = [stratifier_name(s, i) for i, s in enumerate(self._stratifiers)]
        return f"StratificationManager(stratifiers={names}, size={self.size()})"

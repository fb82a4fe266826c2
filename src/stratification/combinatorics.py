from __future__ import annotations

import itertools
import math
from typing import Any, Iterable, List, Sequence, Tuple


def _distinct(values: Iterable[Any]) -> List[Any]:
    out: List[Any] = []
    for v in values:
        if v not in out:
            out.append(v)
    return out


def n_combinations(state_lists: Sequence[Iterable[Any]]) -> int:
    """Number of tuples formed by picking one state per axis."""
    return math.prod(len(_distinct(states)) for states in state_lists)


def all_combinations(state_lists: Sequence[Iterable[Any]]) -> List[Tuple[Any, ...]]:
    """Cartesian product of the axes, first axis varying slowest.

    This is the enumeration order used for key assignment, so the i-th tuple
    returned here receives key i.
    """
    if not state_lists:
        return []
    return list(itertools.product(*(_distinct(states) for states in state_lists)))


def combine_states(a: Sequence[Any], b: Sequence[Any]) -> List[List[Any]]:
    """Per-axis union of two tuples: ``[a0]`` or ``[a0, b0]``, and so on."""
    if len(a) != len(b):
        raise ValueError(f"Cannot combine states of different lengths: {len(a)} != {len(b)}")
    return [[x] if x == y else [x, y] for x, y in zip(a, b)]

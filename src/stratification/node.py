from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple


class NodeKind(str, Enum):
    INTERNAL = "internal"
    LEAF = "leaf"


@dataclass(frozen=True, eq=False)
class StratNode:
    """Node of the stratification tree.

    A single record tagged by ``kind``: internal nodes map each state of the
    axis at their depth to a child, leaves carry the dense key of one tuple.
    """

    kind: NodeKind
    depth: int
    children: Mapping[Any, "StratNode"] = field(default_factory=dict)
    key: int = -1

    @classmethod
    def leaf(cls, depth: int, key: int) -> "StratNode":
        return cls(kind=NodeKind.LEAF, depth=depth, key=key)

    @classmethod
    def internal(cls, depth: int, children: Mapping[Any, "StratNode"]) -> "StratNode":
        return cls(kind=NodeKind.INTERNAL, depth=depth, children=children)

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    def child(self, state: Any) -> Optional["StratNode"]:
        try:
            return self.children.get(state)
        except TypeError:
            # unhashable state: matches no edge
            return None

    def find(self, states: Sequence[Any], offset: int = 0) -> int:
        node = self
        for i in range(offset, len(states)):
            if node.is_leaf:
                return -1
            node = node.child(states[i])
            if node is None:
                return -1
        return node.key if node.is_leaf else -1

    def find_keys(self, allowed: Sequence[Iterable[Any]], offset: int = 0, into: Optional[Set[int]] = None) -> Set[int]:
        """Collects the keys of every leaf reachable through allowed states only.

        ``allowed[i]`` lists the admissible states for the axis at depth
        ``offset + i``. Only the matching edges are followed, so the work is
        proportional to the number of keys reached.
        """
        keys: Set[int] = set() if into is None else into
        if self.is_leaf:
            if offset == len(allowed):
                keys.add(self.key)
            return keys
        if offset >= len(allowed):
            return keys
        for state in allowed[offset]:
            nxt = self.child(state)
            if nxt is not None:
                nxt.find_keys(allowed, offset + 1, keys)
        return keys

    def __iter__(self) -> Iterator["StratNode"]:
        # pre-order, children in axis state order
        stack: List[StratNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                stack.extend(reversed(list(node.children.values())))

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"StratNode(leaf, depth={self.depth}, key={self.key})"
        return f"StratNode(internal, depth={self.depth}, states={list(self.children)})"


def build_tree(state_lists: Sequence[Sequence[Any]]) -> Tuple[StratNode, List[Tuple[Any, ...]]]:
    """Builds the tree and assigns keys in one depth-first pass.

    Axis 0 is the slowest-varying digit: the leaf for the i-th tuple of the
    lexicographic enumeration gets key i. Returns the root and, indexed by
    key, the tuple of states leading to each leaf.
    """
    if not state_lists:
        raise ValueError("At least one stratifier is required")
    states_by_key: List[Tuple[Any, ...]] = []
    n_axes = len(state_lists)

    def _build(depth: int, path: Tuple[Any, ...]) -> StratNode:
        if depth == n_axes:
            states_by_key.append(path)
            return StratNode.leaf(depth, len(states_by_key) - 1)
        children: Dict[Any, StratNode] = {}
        for state in state_lists[depth]:
            if state in children:
                raise ValueError(f"Duplicate state {state!r} for stratifier {depth}")
            children[state] = _build(depth + 1, path + (state,))
        if not children:
            raise ValueError(f"Stratifier {depth} has no states")
        return StratNode.internal(depth, children)

    root = _build(0, ())
    return root, states_by_key

"""Immutable weighted digraph describing which bags directly contain which."""

from collections import deque
from graphlib import CycleError, TopologicalSorter
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

_EMPTY: Mapping[str, int] = MappingProxyType({})


class ContainmentGraph:
    """
    Directed graph of bag containment rules.

    An edge ``outer -> inner`` with weight ``n`` means one ``outer`` bag
    directly holds ``n`` ``inner`` bags. Both directions are indexed at
    construction time so reverse traversals need no second pass over the
    edges. Nodes keep the order in which they were first seen.

    Instances are read-only: every accessor returns a mapping proxy.
    """

    __slots__ = ("_forward", "_reverse")

    def __init__(self, nodes: List[str], edges: Mapping[Tuple[str, str], int]):
        forward: Dict[str, Dict[str, int]] = {node: {} for node in nodes}
        reverse: Dict[str, Dict[str, int]] = {node: {} for node in nodes}
        for (outer, inner), weight in edges.items():
            if weight < 1:
                raise ValueError(f"edge {outer!r} -> {inner!r} has non-positive weight {weight}")
            forward.setdefault(outer, {})[inner] = weight
            reverse.setdefault(outer, {})
            forward.setdefault(inner, {})
            reverse.setdefault(inner, {})[outer] = weight

        self._forward: Mapping[str, Mapping[str, int]] = MappingProxyType(
            {node: MappingProxyType(children) for node, children in forward.items()})
        self._reverse: Mapping[str, Mapping[str, int]] = MappingProxyType(
            {node: MappingProxyType(parents) for node, parents in reverse.items()})

    def __contains__(self, bag: object) -> bool:
        return bag in self._forward

    def __len__(self) -> int:
        return len(self._forward)

    def __repr__(self) -> str:
        return f"ContainmentGraph(nodes={len(self)}, edges={self.edge_count})"

    def nodes(self) -> List[str]:
        return list(self._forward)

    def successors(self, bag: str) -> Mapping[str, int]:
        """Bags directly inside ``bag``, mapped to how many of each."""
        return self._forward.get(bag, _EMPTY)

    def predecessors(self, bag: str) -> Mapping[str, int]:
        """Bags that directly hold ``bag``, mapped to how many they hold."""
        return self._reverse.get(bag, _EMPTY)

    def edge_weight(self, outer: str, inner: str) -> Optional[int]:
        return self.successors(outer).get(inner)

    def edges(self) -> Iterator[Tuple[str, str, int]]:
        for outer, children in self._forward.items():
            for inner, weight in children.items():
                yield outer, inner, weight

    @property
    def edge_count(self) -> int:
        return sum(len(children) for children in self._forward.values())

    def is_terminal(self, bag: str) -> bool:
        return not self.successors(bag)

    def has_cycle(self) -> bool:
        sorter = TopologicalSorter({node: list(children) for node, children in self._forward.items()})
        try:
            sorter.prepare()
        except CycleError:
            return True
        return False

    def find_cycle(self) -> Optional[List[str]]:
        """
        Return the shortest cycle in the graph, or None if it is acyclic.

        The cycle is listed from the earliest-seen bag on it, without
        repeating that bag at the end. Ties between cycles of the same length
        go to the one whose start was seen first.
        """
        if not self.has_cycle():
            return None

        shortest: Optional[List[str]] = None
        for start in self._forward:
            cycle = self._shortest_cycle_through(start, limit=len(shortest) if shortest else None)
            if cycle is not None and (shortest is None or len(cycle) < len(shortest)):
                shortest = cycle
                if len(shortest) == 1:
                    break
        return shortest

    def _shortest_cycle_through(self, start: str, limit: Optional[int]) -> Optional[List[str]]:
        """Breadth-first search from ``start`` back to itself."""
        parents: Dict[str, str] = {}
        depth = {start: 0}
        queue = deque([start])
        while queue:
            bag = queue.popleft()
            if limit is not None and depth[bag] + 1 >= limit:
                continue
            for inner in self._forward[bag]:
                if inner == start:
                    path = [bag]
                    while path[-1] != start:
                        path.append(parents[path[-1]])
                    return path[::-1]
                if inner not in depth:
                    depth[inner] = depth[bag] + 1
                    parents[inner] = bag
                    queue.append(inner)
        return None

"""Containment queries over a parsed rule set."""

from collections import deque
from typing import Deque, Iterator, Set, Tuple

from bag_rules.rules.graph import ContainmentGraph


class BagIterator:
    """
    Bags that can eventually contain ``bag``, in breadth-first order.

    Walks the reversed containment edges starting at ``bag`` and skips the
    start itself. Iterating again starts a fresh traversal.
    """

    def __init__(self, graph: ContainmentGraph, bag: str):
        self.graph = graph
        self.bag = bag

    def __iter__(self) -> Iterator[str]:
        if self.bag not in self.graph:
            return
        visited: Set[str] = {self.bag}
        queue: Deque[str] = deque([self.bag])
        while queue:
            current = queue.popleft()
            for outer in self.graph.predecessors(current):
                if outer not in visited:
                    visited.add(outer)
                    queue.append(outer)
                    yield outer

    def __repr__(self) -> str:
        return f"BagIterator(bag={self.bag!r})"


class BagRules:
    """
    A validated, immutable set of bag rules and the questions it can answer.

    Build one with ``BagRules.parse(text)`` or ``RuleParser().parse(text)``.
    Bag names passed to the queries must already be in singular form
    (``"shiny gold bag"``); unknown names give empty results.
    """

    def __init__(self, graph: ContainmentGraph):
        self.graph = graph

    @classmethod
    def parse(cls, rules: str) -> "BagRules":
        from bag_rules.rules.parser import RuleParser

        return RuleParser().parse(rules)

    def bags_eventually_containing(self, bag: str) -> BagIterator:
        return BagIterator(self.graph, bag)

    def unique_bags_containing(self, bag: str) -> int:
        return sum(1 for _ in self.bags_eventually_containing(bag))

    def individual_bags_contained_by(self, bag: str) -> int:
        """
        Count every bag nested inside one ``bag``, at any depth.

        Each queue entry carries how many copies of a bag are waiting to be
        opened, so ``n`` identical bags are expanded in one step instead of
        ``n``. The total is the same as expanding every copy separately.
        """
        total = 0
        queue: Deque[Tuple[str, int]] = deque([(bag, 1)])
        while queue:
            outer, copies = queue.popleft()
            for inner, count in self.graph.successors(outer).items():
                total += copies * count
                queue.append((inner, copies * count))
        return total

    def __repr__(self) -> str:
        return f"BagRules({self.graph!r})"

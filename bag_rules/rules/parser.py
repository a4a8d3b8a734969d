"""
Parser for bag containment rules.

Turns lines such as::

    light red bags contain 1 bright white bag, 2 muted yellow bags.
    faded blue bags contain no other bags.

into a validated ContainmentGraph wrapped in BagRules.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Tuple

from bag_rules.core.errors import InputFileError, InvalidRuleError, RulesCycleError
from bag_rules.rules.graph import ContainmentGraph
from bag_rules.rules.queries import BagRules

_LOGGER = logging.getLogger(__name__)

CONTAIN_SEPARATOR = " contain "
INNER_SEPARATOR = ", "
NO_OTHER_BAGS = "no other bag"


def singular(phrase: str) -> str:
    """Strip one trailing ``s`` so ``"shiny gold bags"`` becomes ``"shiny gold bag"``."""
    return phrase[:-1] if phrase.endswith("s") else phrase


def normalize_bag_name(name: str) -> str:
    """
    Normalize a user-supplied bag name to the form used as a graph node.

    Accepts ``"shiny gold"``, ``"shiny gold bag"`` and ``"shiny gold bags"``.
    """
    name = " ".join(name.split())
    if name.endswith(" bags") or name.endswith(" bag"):
        return singular(name)
    return f"{name} bag"


class RuleParser:
    """Parses bag rule text into BagRules."""

    OUTER_BAG_PATTERN = re.compile(r"^[a-z]+ [a-z]+ bags?$")
    INNER_BAG_PATTERN = re.compile(r"^([1-9][0-9]*) ([a-z]+ [a-z]+ bags?)$")

    def __init__(self):
        self.nodes: Dict[str, None] = {}
        self.edges: Dict[Tuple[str, str], int] = {}

    def parse(self, rules: str) -> BagRules:
        """
        Parse rule text.

        Args:
            rules: Rule text, one rule per line; blank lines are skipped

        Returns:
            BagRules over the parsed graph

        Raises:
            InvalidRuleError: on the first line that does not match the grammar
            RulesCycleError: if the finished graph contains a cycle
        """
        self._reset()

        parsed = 0
        for line_no, line in enumerate(rules.splitlines(), 1):
            if not line.strip():
                continue
            self._parse_rule(line, line_no)
            parsed += 1

        graph = ContainmentGraph(list(self.nodes), self.edges)
        _LOGGER.debug("Parsed %d rules into %d bags and %d edges", parsed, len(graph), graph.edge_count)

        cycle = graph.find_cycle()
        if cycle is not None:
            raise RulesCycleError(cycle)

        return BagRules(graph)

    def parse_file(self, rules_file: Path) -> BagRules:
        """Read and parse a rules file."""
        try:
            rules = Path(rules_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _LOGGER.debug("Could not read %s: %s", rules_file, e)
            raise InputFileError(rules_file) from e
        return self.parse(rules)

    def _reset(self):
        self.nodes = {}
        self.edges = {}

    def _parse_rule(self, line: str, line_no: int):
        """
        Parse a single rule line and record its nodes and edges.

        Example: dark olive bags contain 3 faded blue bags, 4 dotted black bags.
        """
        parts = line.split(CONTAIN_SEPARATOR)
        if len(parts) != 2:
            raise InvalidRuleError(line, line_no)
        outer_phrase, inner_phrase = parts

        if not self.OUTER_BAG_PATTERN.match(outer_phrase):
            raise InvalidRuleError(line, line_no)
        outer_bag = singular(outer_phrase)

        if not inner_phrase.endswith("."):
            raise InvalidRuleError(line, line_no, reason="The rule must end with a full stop.")
        inner_phrase = inner_phrase[:-1]

        self.nodes.setdefault(outer_bag)
        if singular(inner_phrase) == NO_OTHER_BAGS:
            return

        for count, inner_bag in self._parse_inner_bags(inner_phrase, line, line_no):
            if (outer_bag, inner_bag) in self.edges:
                raise InvalidRuleError(
                    line,
                    line_no,
                    reason=f'"{inner_bag}" is listed more than once for "{outer_bag}".',
                )
            self.nodes.setdefault(inner_bag)
            self.edges[(outer_bag, inner_bag)] = count

    def _parse_inner_bags(self, inner_phrase: str, line: str, line_no: int) -> List[Tuple[int, str]]:
        """
        Parse the comma-separated contents list.

        Example: 1 bright white bag, 2 muted yellow bags
        Returns: [(1, "bright white bag"), (2, "muted yellow bag")]
        """
        inner_bags = []
        for fragment in inner_phrase.split(INNER_SEPARATOR):
            match = self.INNER_BAG_PATTERN.match(fragment)
            if not match:
                raise InvalidRuleError(line, line_no, reason=f'Could not understand "{fragment}".')
            inner_bags.append((int(match.group(1)), singular(match.group(2))))
        return inner_bags

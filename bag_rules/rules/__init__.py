"""Bag rule parsing, the containment graph, and the queries over it."""

from bag_rules.rules.graph import ContainmentGraph
from bag_rules.rules.parser import RuleParser, normalize_bag_name
from bag_rules.rules.queries import BagIterator, BagRules

__all__ = ["BagIterator", "BagRules", "ContainmentGraph", "RuleParser", "normalize_bag_name"]

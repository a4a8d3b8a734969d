"""
bag-rules - Solver for the bag containment puzzle.

Parses rules like "light red bags contain 1 bright white bag, 2 muted yellow
bags." into a containment graph and answers which bags can hold a given bag
and how many bags it holds.
"""

__version__ = "0.1.0"

from bag_rules.core.config import Config
from bag_rules.core.errors import BagRulesError, InvalidRuleError, RulesCycleError
from bag_rules.rules import BagRules, ContainmentGraph, RuleParser

__all__ = [
    "BagRules",
    "BagRulesError",
    "Config",
    "ContainmentGraph",
    "InvalidRuleError",
    "RuleParser",
    "RulesCycleError",
    "__version__",
]

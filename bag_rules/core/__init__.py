"""Core data structures and utilities for bag_rules."""

from bag_rules.core.answer import Answer
from bag_rules.core.config import Config
from bag_rules.core.errors import (
    BagRulesError,
    ConfigError,
    InputFileError,
    InvalidRuleError,
    RulesCycleError,
)
from bag_rules.core.report import Reporter

__all__ = [
    "Answer",
    "BagRulesError",
    "Config",
    "ConfigError",
    "InputFileError",
    "InvalidRuleError",
    "Reporter",
    "RulesCycleError",
]

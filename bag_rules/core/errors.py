"""Exceptions raised while loading and parsing bag rules."""

from pathlib import Path
from typing import Optional, Sequence

RULE_FORMAT = "<adjective> <colour> bags contain <number> <adjective> <colour> (bag|bags)."


class BagRulesError(Exception):
    """Base class for errors whose message is meant for the user."""


class InvalidRuleError(BagRulesError):
    """
    A rule line does not follow the bag rule grammar.

    Attributes:
        rule: The offending line, verbatim
        line_number: 1-indexed line number within the input (None if unknown)
        expected: Description of the expected format
        reason: Optional extra detail (e.g. the fragment that failed)
    """

    def __init__(
        self,
        rule: str,
        line_number: Optional[int] = None,
        expected: str = RULE_FORMAT,
        reason: Optional[str] = None,
    ):
        self.rule = rule
        self.line_number = line_number
        self.expected = expected
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        where = f"The rule on line {self.line_number}:" if self.line_number else "The rule:"
        lines = [
            where,
            f'    "{self.rule}"',
            "does not have the format:",
            f'    "{self.expected}"',
        ]
        if self.reason:
            lines.append(self.reason)
        return "\n".join(lines)


class RulesCycleError(BagRulesError):
    """The rules describe a bag that eventually contains itself."""

    def __init__(self, cycle: Sequence[str]):
        self.cycle = list(cycle)
        super().__init__(f"The rules have a cycle: {self.describe(self.cycle)}")

    @staticmethod
    def describe(cycle: Sequence[str]) -> str:
        """Render ``[a, b]`` as ``"a bags contain b bags, b bags contain a bags"``."""
        closed = list(cycle) + list(cycle[:1])
        return ", ".join(f"{outer}s contain {inner}s" for outer, inner in zip(closed, closed[1:]))


class ConfigError(BagRulesError):
    """The configuration file holds an invalid value."""


class InputFileError(BagRulesError):
    """The rules file could not be read."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Failed to read file {path}.")

"""Data structure for a computed puzzle answer."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Answer:
    """
    The answer to one query over a rule set.

    Attributes:
        part: 1 for "how many bags can contain the target",
              2 for "how many bags does the target contain"
        bag: The target bag name, in singular form
        value: The computed count
        bags: The containing bags, sorted (part 1 only, when requested)
        source: The rules file the answer was computed from
    """
    part: int
    bag: str
    value: int
    bags: Optional[List[str]] = None
    source: Optional[str] = None

    def __str__(self) -> str:
        return str(self.value)

    @property
    def question(self) -> str:
        if self.part == 1:
            return f"How many bag colours can eventually contain at least one {self.bag}?"
        return f"How many individual bags are required inside a single {self.bag}?"

    def to_dict(self) -> dict:
        """Convert answer to dictionary for JSON serialization."""
        data = {
            "part": self.part,
            "bag": self.bag,
            "answer": self.value,
            "source": self.source,
        }
        if self.bags is not None:
            data["bags"] = list(self.bags)
        return data

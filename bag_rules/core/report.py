"""Report formatting and output for bag-rules answers."""

import json
import sys
from typing import TextIO

from bag_rules.core.answer import Answer


class Reporter:
    """Formats and outputs answers in various formats."""

    def __init__(self, output_format: str = "text"):
        self.output_format = output_format

    def report(self, answer: Answer, output: TextIO = sys.stdout):
        """Output the answer in the configured format."""
        if self.output_format == "json":
            self._report_json(answer, output)
        else:
            self._report_text(answer, output)

    def _report_text(self, answer: Answer, output: TextIO):
        """
        Report the answer as a bare number.

        When the containing bags were requested they follow, one per line,
        after the count.
        """
        output.write(f"{answer}\n")
        for bag in answer.bags or []:
            output.write(f"{bag}\n")

    def _report_json(self, answer: Answer, output: TextIO):
        """Report the answer in JSON format."""
        data = answer.to_dict()
        data["question"] = answer.question
        json.dump(data, output, indent=2)
        output.write("\n")

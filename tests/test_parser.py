"""Tests for the rule parser."""

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from bag_rules.core.errors import InputFileError, InvalidRuleError, RulesCycleError
from bag_rules.rules.parser import RuleParser, normalize_bag_name, singular

EXAMPLE_RULES = """\
light red bags contain 1 bright white bag, 2 muted yellow bags.
dark orange bags contain 3 bright white bags, 4 muted yellow bags.
bright white bags contain 1 shiny gold bag.
muted yellow bags contain 2 shiny gold bags, 9 faded blue bags.
shiny gold bags contain 1 dark olive bag, 2 vibrant plum bags.
dark olive bags contain 3 faded blue bags, 4 dotted black bags.
vibrant plum bags contain 5 faded blue bags, 6 dotted black bags.
faded blue bags contain no other bags.
dotted black bags contain no other bags.
"""


class TestRuleParser(unittest.TestCase):
    """Test building the containment graph from rule text."""

    def test_parse_single_rule(self):
        """Test that one rule yields both bags and a weighted edge."""
        rules = RuleParser().parse("bright white bags contain 1 shiny gold bag.")
        graph = rules.graph

        self.assertEqual(graph.nodes(), ["bright white bag", "shiny gold bag"])
        self.assertEqual(graph.edge_weight("bright white bag", "shiny gold bag"), 1)
        self.assertTrue(graph.is_terminal("shiny gold bag"))

    def test_parse_multiple_inner_bags(self):
        """Test a rule listing several inner bags."""
        rules = RuleParser().parse("muted yellow bags contain 2 shiny gold bags, 9 faded blue bags.")

        self.assertEqual(
            dict(rules.graph.successors("muted yellow bag")),
            {"shiny gold bag": 2, "faded blue bag": 9},
        )

    def test_plural_and_singular_address_same_bag(self):
        """Test that "2 x bags" and "1 x bag" refer to one node."""
        rules = RuleParser().parse("""\
bright white bags contain 1 shiny gold bag.
muted yellow bags contain 2 shiny gold bags.
""")
        graph = rules.graph

        self.assertEqual(len(graph), 3)
        self.assertEqual(
            dict(graph.predecessors("shiny gold bag")),
            {"bright white bag": 1, "muted yellow bag": 2},
        )

    def test_no_other_bags(self):
        """Test that an empty bag becomes a terminal node."""
        rules = RuleParser().parse("faded blue bags contain no other bags.")

        self.assertIn("faded blue bag", rules.graph)
        self.assertTrue(rules.graph.is_terminal("faded blue bag"))
        self.assertEqual(rules.graph.edge_count, 0)

    def test_no_other_bag_singular(self):
        """Test that the singular "no other bag" also marks a terminal bag."""
        rules = RuleParser().parse("""\
shiny gold bags contain 2 faded blue bags.
faded blue bags contain no other bag.
""")

        self.assertTrue(rules.graph.is_terminal("faded blue bag"))
        self.assertEqual(rules.individual_bags_contained_by("shiny gold bag"), 2)

    def test_blank_lines_are_ignored(self):
        """Test that blank and whitespace-only lines are skipped."""
        rules = RuleParser().parse("\n\nbright white bags contain 1 shiny gold bag.\n   \n")

        self.assertEqual(rules.graph.edge_count, 1)

    def test_windows_line_endings(self):
        """Test that CRLF input parses like LF input."""
        rules = RuleParser().parse(
            "light red bags contain 1 bright white bag.\r\nbright white bags contain no other bags.\r\n")

        self.assertEqual(rules.graph.edge_weight("light red bag", "bright white bag"), 1)

    def test_empty_input(self):
        """Test that empty input gives an empty graph."""
        rules = RuleParser().parse("")

        self.assertEqual(len(rules.graph), 0)

    def test_example_rules(self):
        """Test parsing the full example rule set."""
        graph = RuleParser().parse(EXAMPLE_RULES).graph

        self.assertEqual(len(graph), 9)
        self.assertEqual(graph.edge_count, 13)
        self.assertEqual(graph.edge_weight("dark orange bag", "muted yellow bag"), 4)

    def test_rules_for_same_outer_bag_are_merged(self):
        """Test that two lines for one outer bag add up their contents."""
        rules = RuleParser().parse("""\
light red bags contain 1 bright white bag.
light red bags contain 2 muted yellow bags.
""")

        self.assertEqual(
            dict(rules.graph.successors("light red bag")),
            {"bright white bag": 1, "muted yellow bag": 2},
        )

    def test_parser_is_reusable(self):
        """Test that state does not leak between parse calls."""
        parser = RuleParser()
        parser.parse("bright white bags contain 1 shiny gold bag.")
        rules = parser.parse("faded blue bags contain no other bags.")

        self.assertEqual(rules.graph.nodes(), ["faded blue bag"])

    def test_parse_file(self):
        """Test reading rules from a file."""
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "input.txt"
            path.write_text(EXAMPLE_RULES)

            rules = RuleParser().parse_file(path)

        self.assertEqual(len(rules.graph), 9)

    def test_parse_file_reads_utf8(self):
        """Test that files are decoded as UTF-8 whatever the locale."""
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "input.txt"
            path.write_bytes("café noir bags contain no other bags.\n".encode("utf-8"))

            with self.assertRaises(InvalidRuleError) as ctx:
                RuleParser().parse_file(path)

        self.assertEqual(ctx.exception.rule, "café noir bags contain no other bags.")

    def test_parse_missing_file(self):
        """Test that an unreadable file raises InputFileError."""
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.txt"

            with self.assertRaises(InputFileError) as ctx:
                RuleParser().parse_file(path)

        self.assertIn("Failed to read file", str(ctx.exception))


class TestInvalidRules(unittest.TestCase):
    """Test rejection of lines that do not follow the grammar."""

    def assertInvalid(self, rules: str) -> InvalidRuleError:
        with self.assertRaises(InvalidRuleError) as ctx:
            RuleParser().parse(rules)
        return ctx.exception

    def test_rule_without_contain(self):
        """Test a line that does not describe a bag containing another."""
        error = self.assertInvalid("loud purple bags play bagpipes.")

        self.assertEqual(error.rule, "loud purple bags play bagpipes.")
        self.assertEqual(error.line_number, 1)
        self.assertIn("loud purple bags play bagpipes.", str(error))
        self.assertIn(
            "<adjective> <colour> bags contain <number> <adjective> <colour> (bag|bags).",
            str(error),
        )

    def test_rule_with_two_contains(self):
        """Test that the separator must appear exactly once."""
        self.assertInvalid("loud purple bags contain 1 crazy maroon bag contain 2 dark red bags.")

    def test_outer_bag_missing_colour(self):
        self.assertInvalid("loud bags contain 1 crazy maroon bag.")

    def test_outer_bag_missing_bag_suffix(self):
        self.assertInvalid("loud purple contain 1 crazy maroon bag.")

    def test_inner_bag_missing_colour(self):
        error = self.assertInvalid("loud purple bags contain 1 crazy bag.")

        self.assertIn('"1 crazy bag"', str(error))

    def test_zero_count(self):
        self.assertInvalid("loud purple bags contain 0 crazy maroon bags.")

    def test_leading_zero_count(self):
        self.assertInvalid("loud purple bags contain 02 crazy maroon bags.")

    def test_missing_count(self):
        self.assertInvalid("loud purple bags contain crazy maroon bags.")

    def test_missing_full_stop(self):
        self.assertInvalid("loud purple bags contain 1 crazy maroon bag")

    def test_uppercase_is_rejected(self):
        self.assertInvalid("Loud purple bags contain 1 crazy maroon bag.")

    def test_error_reports_line_number(self):
        """Test that the offending line is identified within the input."""
        error = self.assertInvalid("""\
bright white bags contain 1 shiny gold bag.

dark orange bags contain many bags.
""")

        self.assertEqual(error.line_number, 3)
        self.assertIn("line 3", str(error))

    def test_duplicate_inner_bag_is_rejected(self):
        """Test that an inner bag may only be listed once per outer bag."""
        error = self.assertInvalid("loud purple bags contain 1 crazy maroon bag, 2 crazy maroon bags.")

        self.assertIn("more than once", str(error))

    def test_duplicate_edge_across_lines_is_rejected(self):
        self.assertInvalid("""\
loud purple bags contain 1 crazy maroon bag.
loud purple bags contain 2 crazy maroon bags.
""")


class TestRulesCycle(unittest.TestCase):
    """Test cycle detection after parsing."""

    def test_two_rules_referring_to_each_other(self):
        """Test that a two-bag cycle is reported with both bags."""
        with self.assertRaises(RulesCycleError) as ctx:
            RuleParser().parse("""\
loud purple bags contain 1 crazy maroon bag.
crazy maroon bags contain 1 loud purple bag.
""")

        message = str(ctx.exception)
        self.assertIn("cycle", message)
        self.assertRegex(message, "loud purple bag.+crazy maroon bag.+loud purple bag")
        self.assertEqual(ctx.exception.cycle, ["loud purple bag", "crazy maroon bag"])

    def test_shortest_cycle_is_reported(self):
        """Test that of two cycles only the shorter one is described."""
        with self.assertRaises(RulesCycleError) as ctx:
            RuleParser().parse("""\
loud purple bags contain 1 bold blue bag, 1 crazy maroon bag.
crazy maroon bags contain 1 loud purple bag.
bold blue bags contain 1 audacious orange bag.
audacious orange bags contain 1 loud purple bag.
""")

        message = str(ctx.exception)
        self.assertRegex(message, "loud purple bag.+crazy maroon bag.+loud purple bag")
        self.assertNotIn("bold blue bag", message)
        self.assertNotIn("audacious orange bag", message)

    def test_self_containing_bag(self):
        """Test that a bag directly containing itself is rejected."""
        with self.assertRaises(RulesCycleError) as ctx:
            RuleParser().parse("loud purple bags contain 2 loud purple bags.")

        self.assertEqual(
            str(ctx.exception),
            "The rules have a cycle: loud purple bags contain loud purple bags",
        )

    def test_indirect_cycle(self):
        """Test a cycle that passes through several bags."""
        with self.assertRaises(RulesCycleError) as ctx:
            RuleParser().parse("""\
light red bags contain 1 bright white bag.
bright white bags contain 1 shiny gold bag.
shiny gold bags contain 1 dark olive bag.
dark olive bags contain 1 bright white bag.
""")

        self.assertEqual(
            ctx.exception.cycle,
            ["bright white bag", "shiny gold bag", "dark olive bag"],
        )


class TestBagNames(unittest.TestCase):
    """Test bag name normalization helpers."""

    def test_singular(self):
        self.assertEqual(singular("shiny gold bags"), "shiny gold bag")
        self.assertEqual(singular("shiny gold bag"), "shiny gold bag")

    def test_normalize_bag_name(self):
        self.assertEqual(normalize_bag_name("shiny gold"), "shiny gold bag")
        self.assertEqual(normalize_bag_name("shiny gold bag"), "shiny gold bag")
        self.assertEqual(normalize_bag_name("shiny gold bags"), "shiny gold bag")
        self.assertEqual(normalize_bag_name("  shiny   gold  bags "), "shiny gold bag")


if __name__ == "__main__":
    unittest.main()

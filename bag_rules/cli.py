"""Command-line interface for bag_rules."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from click.core import ParameterSource

from bag_rules import __version__
from bag_rules.core.answer import Answer
from bag_rules.core.config import Config, OUTPUT_FORMATS
from bag_rules.core.errors import BagRulesError
from bag_rules.core.report import Reporter
from bag_rules.rules.parser import RuleParser, normalize_bag_name
from bag_rules.rules.queries import BagRules

_LOGGER = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__)
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "-p",
    "--part-2/--part-1",
    "part_2",
    default=None,
    help="Count the bags inside the target bag (part 2) or the bags that can contain it (part 1)",
)
@click.option(
    "-b",
    "--bag",
    help='Target bag, e.g. "shiny gold" or "shiny gold bags" (default: shiny gold bag)',
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS)),
    help="Output format",
)
@click.option(
    "--list-bags/--no-list-bags",
    default=None,
    help="For part 1, also print every bag that can contain the target",
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to config file (.bag_rules.toml)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log debug information to stderr",
)
def main(
    file: Path,
    part_2: Optional[bool],
    bag: Optional[str],
    output_format: Optional[str],
    list_bags: Optional[bool],
    config: Optional[Path],
    verbose: bool,
):
    """
    Solve the bag containment puzzle for the rules in FILE.

    By default prints how many bag colours can eventually contain at least
    one shiny gold bag.

    Examples:

        # How many bags can hold a shiny gold bag?
        bag-rules input.txt

        # How many bags does one shiny gold bag hold?
        bag-rules --part-2 input.txt

        # Ask about another bag, as JSON
        bag-rules --bag "faded blue" --format=json input.txt
    """
    try:
        cfg = Config.from_file(config)

        # Override config with CLI options
        if _given("part_2"):
            cfg.part = 2 if part_2 else 1
        if bag:
            cfg.target_bag = bag
        if output_format:
            cfg.output_format = output_format
        if _given("list_bags"):
            cfg.list_bags = bool(list_bags)
        cfg.validate()

        _configure_logging(logging.DEBUG if verbose else cfg.logging_level)

        rules = RuleParser().parse_file(file)
        answer = solve(rules, cfg, source=str(file))
    except BagRulesError as e:
        click.echo(click.style(str(e), fg="red"), err=True)
        sys.exit(1)

    Reporter(output_format=cfg.output_format).report(answer, sys.stdout)


def solve(rules: BagRules, config: Config, source: Optional[str] = None) -> Answer:
    """Answer the configured question over ``rules``."""
    target = normalize_bag_name(config.target_bag)
    if target not in rules.graph:
        _LOGGER.warning("No rule mentions %r", target)

    if config.part == 2:
        return Answer(part=2, bag=target, value=rules.individual_bags_contained_by(target), source=source)

    containing = list(rules.bags_eventually_containing(target))
    _LOGGER.debug("%d bags can eventually contain %r", len(containing), target)
    return Answer(
        part=1,
        bag=target,
        value=len(containing),
        bags=sorted(containing) if config.list_bags else None,
        source=source,
    )


def _given(name: str) -> bool:
    """Whether option ``name`` was passed on the command line."""
    source = click.get_current_context().get_parameter_source(name)
    return source == ParameterSource.COMMANDLINE


def _configure_logging(level: int):
    """Send log records to stderr so stdout only carries the answer."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


if __name__ == "__main__":
    main()

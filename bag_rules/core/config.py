"""Configuration management for bag_rules."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

from bag_rules.core.errors import ConfigError

CONFIG_FILENAME = ".bag_rules.toml"
DEFAULT_BAG = "shiny gold bag"
OUTPUT_FORMATS = ("text", "json")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class Config:
    """
    Configuration for a bag-rules run.

    Attributes:
        target_bag: Bag the query is about (singular or plural form)
        part: 1 to count bags that can contain the target, 2 to count bags inside it
        output_format: Output format (text, json)
        list_bags: Whether part 1 answers also list the containing bags
        log_level: Logging level name used when --verbose is not given
    """
    target_bag: str = DEFAULT_BAG
    part: int = 1
    output_format: str = "text"
    list_bags: bool = False
    log_level: str = "warning"

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from a TOML file.

        If config_path is None, searches for .bag_rules.toml in current directory
        and parent directories.
        """
        if config_path is None:
            config_path = cls._find_config_file()

        if config_path is None or not config_path.exists():
            return cls()

        try:
            with open(config_path, "r") as f:
                data = toml.load(f)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        # Parse query section
        if "query" in data:
            query = _section(data, "query")
            if "bag" in query:
                config.target_bag = str(query["bag"])
            if "part" in query:
                config.part = query["part"]

        # Parse output section
        if "output" in data:
            output = _section(data, "output")
            if "format" in output:
                config.output_format = output["format"]
            if "list_bags" in output:
                config.list_bags = bool(output["list_bags"])

        # Parse logging section
        if "logging" in data:
            logging_section = _section(data, "logging")
            if "level" in logging_section:
                config.log_level = str(logging_section["level"]).lower()

        config.validate()
        return config

    @staticmethod
    def _find_config_file() -> Optional[Path]:
        """Search for .bag_rules.toml in current and parent directories."""
        current = Path.cwd()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return config_path

            # Check if we've reached the root
            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    def validate(self):
        """Raise ConfigError if any field holds an unsupported value."""
        if self.part not in (1, 2) or isinstance(self.part, bool):
            raise ConfigError(f"query.part must be 1 or 2, not {self.part!r}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, not {self.output_format!r}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, not {self.log_level!r}")
        if not self.target_bag.strip():
            raise ConfigError("query.bag must not be empty")

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level.upper())


def _section(data: dict, name: str) -> dict:
    """Return config table ``name``, raising ConfigError if it is not a table."""
    section = data[name]
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section

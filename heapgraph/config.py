"""Configuration Management with Pydantic.

This module implements configuration models using Pydantic for parsing and
validation of YAML/JSON configuration files with environment variable overrides.
Every setting has a default, so a missing configuration file is not an error.
"""

import os
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator

from heapgraph.graph.min_heap import DEFAULT_INITIAL_CAPACITY

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILES = ("heapgraph.yaml", "heapgraph.yml", "heapgraph.json")
LARGE_HEAP_CAPACITY = 4096


class GraphSettings(BaseModel):
    """Graph construction settings.

    Attributes:
        heap_initial_capacity: Initial slot count of every adjacency heap
    """

    heap_initial_capacity: int = Field(
        default=DEFAULT_INITIAL_CAPACITY,
        ge=1,
        description="Initial capacity of each vertex's adjacency heap",
    )


class LoaderSettings(BaseModel):
    """Graph description file settings.

    Attributes:
        delimiter: Separator between source, destination and priority
    """

    delimiter: str = Field(
        default=",",
        min_length=1,
        description="Edge field separator",
    )

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Reject delimiters that collide with line or field whitespace.

        Raises:
            ValueError: If the delimiter is whitespace only
        """
        if not v.strip():
            msg = "Delimiter cannot be whitespace"
            raise ValueError(msg)
        return v


class OutputSettings(BaseModel):
    """Command line output settings.

    Attributes:
        format: How the sorted order is printed (lines, csv or json)
        validate_before_sort: Run the graph validator before sorting
    """

    format: str = Field(
        default="lines",
        description="Output format",
        pattern=r"^(lines|csv|json)$",
    )
    validate_before_sort: bool = Field(
        default=False,
        description="Validate graph structure before sorting",
    )


class AppConfig(BaseModel):
    """Main configuration combining all settings.

    Attributes:
        graph: Graph construction settings
        loader: Description file settings
        output: Command line output settings
        logging_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render logs as JSON instead of console lines
    """

    graph: GraphSettings = Field(default_factory=GraphSettings)
    loader: LoaderSettings = Field(default_factory=LoaderSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging_level: str = Field(
        default="WARNING",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AppConfig":
        """Load configuration from a YAML (or JSON) file.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed and validated AppConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If configuration is invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config_data = cls._apply_env_overrides(config_data)
        config = cls(**config_data)

        logger.info(
            "configuration_loaded",
            heap_initial_capacity=config.graph.heap_initial_capacity,
            logging_level=config.logging_level,
        )
        return config

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build configuration from defaults and environment overrides only."""
        return cls(**cls._apply_env_overrides({}))

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply environment variable overrides to configuration.

        Environment variables follow the pattern: HEAPGRAPH_<SECTION>_<KEY>
        Example: HEAPGRAPH_GRAPH_HEAP_INITIAL_CAPACITY, HEAPGRAPH_OUTPUT_FORMAT

        Args:
            config_data: Base configuration dictionary from file

        Returns:
            Configuration dictionary with environment overrides applied
        """
        env_overrides = {
            ("graph", "heap_initial_capacity"): "HEAPGRAPH_GRAPH_HEAP_INITIAL_CAPACITY",
            ("loader", "delimiter"): "HEAPGRAPH_LOADER_DELIMITER",
            ("output", "format"): "HEAPGRAPH_OUTPUT_FORMAT",
            ("output", "validate_before_sort"): "HEAPGRAPH_OUTPUT_VALIDATE_BEFORE_SORT",
            ("logging_level",): "HEAPGRAPH_LOGGING_LEVEL",
            ("json_logs",): "HEAPGRAPH_JSON_LOGS",
        }

        for path, env_var in env_overrides.items():
            value = os.environ.get(env_var)
            if value is not None:
                current = config_data
                for key in path[:-1]:
                    if not isinstance(current.get(key), dict):
                        current[key] = {}
                    current = current[key]

                if env_var.endswith("_CAPACITY"):
                    value = int(value)
                elif env_var.endswith(("_VALIDATE_BEFORE_SORT", "_JSON_LOGS")):
                    value = value.lower() in ("true", "1", "yes")

                current[path[-1]] = value
                logger.debug(
                    "env_override_applied",
                    env_var=env_var,
                    config_path=".".join(path),
                )

        return config_data

    def validate_config(self) -> list[str]:
        """Validate configuration and return list of warnings.

        Returns:
            List of validation warning messages (empty if no warnings)
        """
        warnings = []

        if self.graph.heap_initial_capacity > LARGE_HEAP_CAPACITY:
            warnings.append(
                f"Heap initial capacity is large ({self.graph.heap_initial_capacity}) - "
                "every vertex allocates this many slots",
            )

        if self.logging_level == "DEBUG" and self.json_logs is False:
            warnings.append("DEBUG console logging is verbose on large graphs")

        return warnings


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load configuration from file.

    Args:
        config_path: Path to configuration file. If None, looks for
            heapgraph.yaml, heapgraph.yml or heapgraph.json in the current
            directory and falls back to defaults when none exists.

    Returns:
        Loaded AppConfig instance

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ValueError: If the config file is invalid
    """
    if config_path is None:
        for default_name in DEFAULT_CONFIG_FILES:
            default_path = Path(default_name)
            if default_path.exists():
                config_path = default_path
                break
        else:
            logger.debug("no_configuration_file_found", searched=list(DEFAULT_CONFIG_FILES))
            return AppConfig.from_env()

    return AppConfig.from_yaml(config_path)


__all__ = [
    "AppConfig",
    "GraphSettings",
    "LoaderSettings",
    "OutputSettings",
    "load_config",
]

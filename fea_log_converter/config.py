"""Configuration loading from a YAML file validated against a JSON schema."""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

import jsonschema
import yaml

from fea_log_converter.errors import ConfigError

logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
SCHEMA_PATH = os.path.join(PACKAGE_DIR, "schemas", "config.schema.json")
DEFAULT_CONFIG_PATH = os.path.join(PACKAGE_DIR, "default_config.yml")
LOCAL_CONFIG_NAME = "config.yml"

BOUNDARY_GROUPS = ("timestamp", "level", "message")

DEFAULT_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S,%f",
    "%Y-%m-%d %H:%M:%S.%f",
    "%m/%d/%Y %H:%M:%S.%f",
    "%m/%d/%Y %H:%M:%S",
    "%d/%b/%Y:%H:%M:%S %z",
)

# (?<name>...) is .NET syntax; lookbehinds (?<= and (?<! are left alone
_NET_NAMED_GROUP = re.compile(r"\(\?<(?=[A-Za-z_])")


@dataclass(frozen=True)
class Patterns:
    fea: re.Pattern
    fea_central_logger: re.Pattern
    assimilation: re.Pattern
    native: re.Pattern


@dataclass(frozen=True)
class OutputNames:
    events_file: str = "log0.json"
    state_file: str = "log_state.json"
    audit_file: str = "Not Central Logger.log"
    archive_file: str = "FEA.CentralLogger.zip"


@dataclass(frozen=True)
class Config:
    patterns: Patterns
    log_levels: Mapping[str, tuple[str, ...]]
    timestamp_formats: tuple[str, ...] = DEFAULT_TIMESTAMP_FORMATS
    output: OutputNames = field(default_factory=OutputNames)


def resolve_config_path(cli_path: str | None = None) -> str:
    """Pick the config file: CLI flag, then CONFIG_PATH, then ./config.yml, then the bundled default."""
    if cli_path:
        return cli_path
    env_path = os.environ.get("CONFIG_PATH")
    if env_path:
        return env_path
    if os.path.isfile(LOCAL_CONFIG_NAME):
        return os.path.abspath(LOCAL_CONFIG_NAME)
    return DEFAULT_CONFIG_PATH


def load_yaml_config(path: str) -> dict:
    """Read *path* as YAML (JSON documents are accepted too)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file {path} not found") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")
    logger.info("Loaded config from %s", path)
    return data


def _load_schema() -> dict:
    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_config(data: dict, schema: dict | None = None) -> None:
    """Raise ConfigError listing every schema violation in *data*."""
    validator = jsonschema.Draft202012Validator(schema or _load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        details = "; ".join(
            f"{'/'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}"
            for e in errors
        )
        raise ConfigError(f"Configuration validation failed: {details}")


def compile_pattern(name: str, source: str, required_groups: tuple[str, ...] = ()) -> re.Pattern:
    """Compile a configured pattern, accepting .NET-style named groups."""
    try:
        pattern = re.compile(_NET_NAMED_GROUP.sub("(?P<", source))
    except re.error as e:
        raise ConfigError(f"Pattern '{name}' is not a valid regular expression: {e}") from e

    missing = [g for g in required_groups if g not in pattern.groupindex]
    if missing:
        raise ConfigError(f"Pattern '{name}' is missing named group(s): {', '.join(missing)}")
    return pattern


def build_config(data: dict[str, Any]) -> Config:
    """Validate raw config data and turn it into a Config."""
    validate_config(data)

    raw_patterns = data["patterns"]
    patterns = Patterns(
        fea=compile_pattern("fea", raw_patterns["fea"], BOUNDARY_GROUPS),
        fea_central_logger=compile_pattern("fea_central_logger", raw_patterns["fea_central_logger"]),
        assimilation=compile_pattern("assimilation", raw_patterns["assimilation"], BOUNDARY_GROUPS),
        native=compile_pattern("native", raw_patterns["native"], BOUNDARY_GROUPS),
    )

    log_levels = MappingProxyType({
        canonical: tuple(aliases) for canonical, aliases in data["log_levels"].items()
    })

    output_data = data.get("output", {})
    output = OutputNames(
        events_file=output_data.get("events_file", OutputNames.events_file),
        state_file=output_data.get("state_file", OutputNames.state_file),
        audit_file=output_data.get("audit_file", OutputNames.audit_file),
        archive_file=output_data.get("archive_file", OutputNames.archive_file),
    )

    return Config(
        patterns=patterns,
        log_levels=log_levels,
        timestamp_formats=tuple(data.get("timestamp_formats", DEFAULT_TIMESTAMP_FORMATS)),
        output=output,
    )


def load_config(path: str | None = None) -> Config:
    """Resolve, read, validate and compile the configuration."""
    return build_config(load_yaml_config(resolve_config_path(path)))

"""Shared pytest fixtures for the converter test suite."""

import re
from types import MappingProxyType

import pytest

from fea_log_converter.config import Config, DEFAULT_TIMESTAMP_FORMATS, Patterns
from fea_log_converter.levels import LevelAliasResolver

FEA_PATTERN = r"^\[(?P<timestamp>[^\]]+)\]\s+\[(?P<level>\w+)\]\s+(?P<message>.*)"
CENTRAL_PATTERN = r"\[CentralLogger\]"
ASSIMILATION_PATTERN = (
    r"^(?P<timestamp>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2},\d{3})\s+(?P<level>[A-Za-z]+)\s+(?P<message>.*)"
)
NATIVE_PATTERN = r"^(?P<timestamp>\d{4}-\d{2}-\d{2}T\S+)\s+(?P<level>\w+)\s+(?P<message>.*)"

LOG_LEVELS = {
    "Error": ("error", "err", "fatal"),
    "Warn": ("warn", "warning", "w"),
    "Info": ("info", "i"),
    "Debug": ("debug", "dbg"),
    "Verbose": ("verbose", "trace"),
}


@pytest.fixture()
def patterns() -> Patterns:
    return Patterns(
        fea=re.compile(FEA_PATTERN),
        fea_central_logger=re.compile(CENTRAL_PATTERN),
        assimilation=re.compile(ASSIMILATION_PATTERN),
        native=re.compile(NATIVE_PATTERN),
    )


@pytest.fixture()
def config(patterns) -> Config:
    return Config(
        patterns=patterns,
        log_levels=MappingProxyType(LOG_LEVELS),
        timestamp_formats=DEFAULT_TIMESTAMP_FORMATS,
    )


@pytest.fixture()
def resolver() -> LevelAliasResolver:
    return LevelAliasResolver(LOG_LEVELS)


@pytest.fixture()
def raw_config() -> dict:
    """Config document as it would be read from YAML."""
    return {
        "patterns": {
            "fea": FEA_PATTERN,
            "fea_central_logger": CENTRAL_PATTERN,
            "assimilation": ASSIMILATION_PATTERN,
            "native": NATIVE_PATTERN,
        },
        "log_levels": {k: list(v) for k, v in LOG_LEVELS.items()},
    }

"""Simulator configuration: loading and validating the JSON settings file."""

from __future__ import annotations

import enum
import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration file is malformed or incomplete."""


class TraceType(enum.Enum):
    """Kind of trace the simulator consumes."""

    MEMORY = "memory"
    CPU = "cpu"


_TRACE_ALIASES = {
    "memory": TraceType.MEMORY,
    "mem": TraceType.MEMORY,
    "cpu": TraceType.CPU,
    "processor": TraceType.CPU,
}


def parse_trace_type(value: str) -> TraceType:
    """Interpret a trace type name case-insensitively; unknown names mean memory."""
    return _TRACE_ALIASES.get(value.lower(), TraceType.MEMORY)


@dataclass
class Config:
    """Settings read from the simulator's JSON configuration file."""

    trace_type: str
    trace_path: str
    mem_spec_path: str
    cpu_spec_path: str
    address_mapping_string: str
    use_trace_plugin: bool
    trace_plugin_path: str
    queueing_policy: str
    scheduling_policy: str

    @property
    def trace_kind(self) -> TraceType:
        """The trace type as an enum member."""
        return parse_trace_type(self.trace_type)

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a configuration from decoded JSON, checking every field."""
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a JSON object")
        values = {}
        for field in fields(cls):
            if field.name not in data:
                raise ConfigError(f"missing field `{field.name}`")
            value = data[field.name]
            expected = bool if field.type in (bool, "bool") else str
            if not isinstance(value, expected):
                raise ConfigError(
                    f"field `{field.name}` must be of type {expected.__name__}"
                )
            values[field.name] = value
        return cls(**values)


def load_config(config_path: str | os.PathLike[str]) -> Config:
    """Read and validate the configuration file at ``config_path``."""
    logger.info("Current working directory: %s", Path.cwd())
    logger.info("Config path provided: %s", config_path)
    try:
        logger.info("Resolved absolute path: %s", Path(config_path).resolve(strict=True))
    except OSError:
        logger.info("Could not resolve absolute path.")

    text = Path(config_path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {config_path}: {exc}") from exc
    return Config.from_dict(data)
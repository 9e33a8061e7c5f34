"""Configuration helpers for Odin code generation."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_BASE_PACKAGE = "proto"
ENV_LOG_LEVEL = "PROTOC_GEN_ODIN_LOG_LEVEL"

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _parse_parameter_string(parameter: str | None) -> Dict[str, str]:
    if not parameter:
        return {}

    entries = parameter.replace(";", ",").split(",")
    result: Dict[str, str] = {}
    for entry in entries:
        piece = entry.strip()
        if not piece:
            continue
        if "=" in piece:
            key, value = piece.split("=", 1)
            result[key.strip().lower()] = value.strip()
        else:
            result[piece.lower()] = "true"
    return result


def _normalize_log_level(value: str | None, source: str) -> Optional[str]:
    if not value:
        return None
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"Unsupported log level '{value}' from {source}, "
            f"expected one of {', '.join(_LOG_LEVELS)}"
        )
    return level


@dataclass(slots=True)
class GeneratorConfig:
    """Runtime configuration for Odin generation."""

    base_package: str = DEFAULT_BASE_PACKAGE
    log_level: Optional[str] = None

    @classmethod
    def from_parameter_string(cls, parameter: str | None) -> "GeneratorConfig":
        overrides = _parse_parameter_string(parameter)

        base_package = overrides.get("base_package") or DEFAULT_BASE_PACKAGE
        if not _IDENTIFIER_PATTERN.match(base_package):
            raise ValueError(
                f"parameter base_package '{base_package}' is not a valid Odin identifier"
            )

        log_level = _normalize_log_level(overrides.get("log_level"), "parameter log_level")
        if log_level is None:
            log_level = _normalize_log_level(
                os.environ.get(ENV_LOG_LEVEL), f"environment variable {ENV_LOG_LEVEL}"
            )

        return cls(base_package=base_package, log_level=log_level)

    def apply_logging(self) -> None:
        """Apply ``log_level`` to the package logger."""

        if self.log_level is not None:
            logging.getLogger(__package__).setLevel(self.log_level)


__all__ = ["GeneratorConfig", "DEFAULT_BASE_PACKAGE", "ENV_LOG_LEVEL"]

from __future__ import annotations

import logging

import pytest

from protoc_gen_odin.config import DEFAULT_BASE_PACKAGE, ENV_LOG_LEVEL, GeneratorConfig


def test_generator_config_defaults(monkeypatch) -> None:
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)

    config = GeneratorConfig.from_parameter_string(None)

    assert config.base_package == DEFAULT_BASE_PACKAGE == "proto"
    assert config.log_level is None


def test_generator_config_parses_parameters(monkeypatch) -> None:
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)

    config = GeneratorConfig.from_parameter_string(" base_package=pb ; log_level=debug,unknown ")

    assert config.base_package == "pb"
    assert config.log_level == "DEBUG"


def test_generator_config_reads_log_level_from_environment(monkeypatch) -> None:
    monkeypatch.setenv(ENV_LOG_LEVEL, "info")

    assert GeneratorConfig.from_parameter_string("").log_level == "INFO"
    assert GeneratorConfig.from_parameter_string("log_level=error").log_level == "ERROR"


def test_generator_config_rejects_invalid_values(monkeypatch) -> None:
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)

    with pytest.raises(ValueError):
        GeneratorConfig.from_parameter_string("base_package=not-an-identifier")
    with pytest.raises(ValueError):
        GeneratorConfig.from_parameter_string("log_level=loud")


def test_generator_config_applies_log_level() -> None:
    package_logger = logging.getLogger("protoc_gen_odin")
    previous = package_logger.level
    try:
        GeneratorConfig(log_level="DEBUG").apply_logging()
        assert package_logger.level == logging.DEBUG
    finally:
        package_logger.setLevel(previous)


def test_generator_config_errors_name_their_source(monkeypatch) -> None:
    monkeypatch.setenv(ENV_LOG_LEVEL, "verbose")

    with pytest.raises(ValueError, match=f"from environment variable {ENV_LOG_LEVEL}"):
        GeneratorConfig.from_parameter_string("")
    with pytest.raises(ValueError, match="from parameter log_level"):
        GeneratorConfig.from_parameter_string("log_level=loud")

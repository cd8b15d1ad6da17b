import logging

from bootcs_schema.config import ValidatorConfig


def test_from_env_defaults(monkeypatch) -> None:
    for name in ("LOG_LEVEL", "PRINT_LEVEL", "VERBOSE", "CACHE_ENABLED"):
        monkeypatch.delenv(f"BOOTCS_SCHEMA_{name}", raising=False)

    config = ValidatorConfig.from_env()

    assert config == ValidatorConfig()


def test_from_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("BOOTCS_SCHEMA_LOG_LEVEL", "debug")
    monkeypatch.setenv("BOOTCS_SCHEMA_VERBOSE", "yes")
    monkeypatch.setenv("BOOTCS_SCHEMA_CACHE_ENABLED", "1")

    config = ValidatorConfig.from_env()

    assert config.log_level == "debug"
    assert config.verbose is True
    assert config.cache_enabled is True


def test_set_logging_splits_streams(capsys) -> None:
    logger = ValidatorConfig(log_level="INFO", print_level="WARNING").set_logging()

    logger.info("routine")
    logger.warning("attention")

    captured = capsys.readouterr()
    assert "routine" in captured.out
    assert "routine" not in captured.err
    assert "bootcs_schema - WARNING - attention" in captured.err
    assert logging.getLogger().level == logging.INFO

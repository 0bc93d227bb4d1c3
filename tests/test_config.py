import logging

from pomolog.core.config import AppConfig, Preset
from pomolog.core.logger import LOGGER_NAME, get_logger


def test_from_env_reads_overrides(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("POMOLOG_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("POMOLOG_LOG_LEVEL", "debug")
    monkeypatch.setenv("POMOLOG_CONSOLE_LOG", "yes")

    config = AppConfig.from_env()

    assert config.data_dir == tmp_path
    assert config.db_path == tmp_path / "pomolog.db"
    assert config.log_dir == tmp_path / "logs"
    assert config.log_level == logging.DEBUG
    assert config.console_log is True


def test_from_env_defaults(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("POMOLOG_DATA_DIR", raising=False)
    monkeypatch.delenv("POMOLOG_CONSOLE_LOG", raising=False)
    monkeypatch.setenv("POMOLOG_LOG_LEVEL", "nonsense")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))

    config = AppConfig.from_env()

    assert config.data_dir == tmp_path / "Pomolog"
    assert config.log_level == logging.INFO
    assert config.console_log is False


def test_preset_durations() -> None:
    assert Preset.POMODORO.seconds == 25 * 60
    assert Preset.SHORT_BREAK.seconds == 5 * 60
    assert Preset.LONG_BREAK.seconds == 10 * 60
    assert not Preset.POMODORO.auto_starts
    assert Preset.LONG_BREAK.auto_starts


def test_get_logger_does_not_stack_handlers(tmp_path) -> None:
    logger = get_logger(log_dir=tmp_path)
    count = len(logger.handlers)
    try:
        again = get_logger(log_dir=tmp_path)
        assert again is logger
        assert len(again.handlers) == count

        logging.getLogger(f"{LOGGER_NAME}.tests").warning("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in (tmp_path / "latest.log").read_text(encoding="utf-8")
        assert (tmp_path / "pomolog.log").exists()
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

"""Tests for loguru setup."""

from loguru import logger

from ignition.logging_config import setup_logging


def test_file_logging_opt_in(tmp_path, monkeypatch):
    monkeypatch.setenv("IGNITION_LOG_DIR", str(tmp_path / "logs"))

    setup_logging(level="INFO", suppress_console=True, enable_file_logging=True, force=True)
    logger.info("file sink check")
    logger.complete()

    log_file = tmp_path / "logs" / "ignition.log"
    assert log_file.exists()
    assert "file sink check" in log_file.read_text()


def test_configure_once_without_force(tmp_path, monkeypatch):
    monkeypatch.setenv("IGNITION_LOG_DIR", str(tmp_path / "logs"))

    setup_logging(suppress_console=True, enable_file_logging=False, force=True)
    # Already configured: this call must not add a file sink
    setup_logging(suppress_console=True, enable_file_logging=True)

    assert not (tmp_path / "logs").exists()

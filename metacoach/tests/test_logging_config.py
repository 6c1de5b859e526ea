from loguru import logger

from metacoach.config.settings import LoggingConfig
from metacoach.utils.logging_config import LoggerManager


def test_configure_adds_console_and_file_sinks(tmp_path):
    log_file = tmp_path / "metacoach.log"
    manager = LoggerManager()
    manager.configure(LoggingConfig(level="DEBUG", enable_file_logging=True, log_file=str(log_file)))

    assert manager.console_sink_id is not None
    assert manager.file_sink_id is not None

    logger.info("[Video Utils] Extracted 10 frames")
    logger.complete()
    manager.disable_console()
    logger.remove(manager.file_sink_id)

    assert "Extracted 10 frames" in log_file.read_text()


def test_enable_console_is_idempotent():
    manager = LoggerManager()
    manager.enable_console()
    sink_id = manager.console_sink_id
    manager.enable_console()
    assert manager.console_sink_id == sink_id
    manager.disable_console()
    assert manager.console_sink_id is None

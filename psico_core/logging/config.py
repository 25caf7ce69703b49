# =============================================================================
# psico_core/logging/config.py
# Logging Configuration for the PSICO dashboard
# =============================================================================

import logging
import sys
import time
from pathlib import Path
from datetime import datetime
from typing import Optional, Union


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_DIR = Path("logs")

# Third-party loggers kept at WARNING
NOISY_LOGGERS = ("urllib3", "requests", "watchdog", "streamlit.watcher")

_configured = False


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_to_file: bool = False,
    log_filename: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure application-wide logging.

    Streamlit re-executes page scripts on every interaction, so repeated
    calls are no-ops unless ``force`` is set.

    Args:
        level: Logging level as int or name (default: INFO)
        log_to_file: Whether to also log to a file under ``logs/``
        log_filename: Custom log filename (default: psico_YYYY-MM-DD.log)
        force: Reconfigure even if logging was already set up
    """
    global _configured
    if _configured and not force:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_to_file:
        LOG_DIR.mkdir(exist_ok=True)
        if log_filename is None:
            log_filename = f"psico_{datetime.now().strftime('%Y-%m-%d')}.log"
        handlers.append(logging.FileHandler(LOG_DIR / log_filename))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    logging.getLogger("psico_core").info("Logging initialized")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Usage:
        from psico_core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Fetching /alunos")
    """
    return logging.getLogger(name)


class LogContext:
    """
    Logs the start, duration and outcome of one operation.

    Usage:
        with LogContext(logger, "Saving paciente") as ctx:
            client.post("/pacientes", payload)
        ctx.elapsed  # seconds

    Exceptions are logged with their traceback and re-raised.
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.elapsed: Optional[float] = None
        self._started: Optional[float] = None

    def __enter__(self) -> "LogContext":
        self._started = time.perf_counter()
        self.logger.info(f"{self.operation}... started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.elapsed = time.perf_counter() - self._started
        if exc_type is None:
            self.logger.info(f"{self.operation}... completed ({self.elapsed:.2f}s)")
        else:
            self.logger.error(f"{self.operation}... failed ({self.elapsed:.2f}s): {exc_val}", exc_info=True)
        return False

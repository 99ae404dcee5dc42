import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import structlog

from config import LoggingConfig, config

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

# Chatty third-party loggers kept at WARNING regardless of the app level
_QUIET_LOGGERS = ("asyncio", "urllib3")

_is_configured = False


def _run_log_file(log_path: Path) -> Path:
    """answers.log -> answers_20240101_120000.log, one file per run."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return log_path.parent / f"{log_path.stem}_{timestamp}{log_path.suffix}"


def _build_handlers(logging_config: LoggingConfig) -> List[logging.Handler]:
    formatter = logging.Formatter(_LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    handlers: List[logging.Handler] = [console]

    if logging_config.log_file_path:
        log_path = Path(logging_config.log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(_run_log_file(log_path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def setup_logging(logging_config: Optional[LoggingConfig] = None) -> None:
    """
    Configure stdlib logging and route structlog events through it.

    Safe to call more than once: only the first call has an effect.
    """
    global _is_configured
    if _is_configured:
        return

    logging_config = logging_config or config.logging
    level = getattr(logging, logging_config.log_level.upper(), logging.INFO)

    # force=True drops handlers installed earlier (pytest, libraries)
    logging.basicConfig(level=level, handlers=_build_handlers(logging_config), force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _is_configured = True


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Event-style logger for `name`; key/value pairs end up as LogRecord attributes.

    Example:
        >>> logger = get_structured_logger(__name__)
        >>> logger.info("answer_persisted", category="binary", question="Relocate?")
    """
    return structlog.get_logger(name)


def bind_context(logger: structlog.stdlib.BoundLogger, **context) -> structlog.stdlib.BoundLogger:
    """Return `logger` with `context` attached to every subsequent event."""
    return logger.bind(**context)

"""
Centralized Logging Configuration.

All modules must use this logging setup. Do not create standalone loggers.
Defaults come from Settings (MIZBAN_LOG_LEVEL, MIZBAN_LOG_FORMAT,
MIZBAN_LOG_FILE); the root command flags override them.

Structured fields in every JSON log record:
    timestamp   - ISO 8601 UTC timestamp
    level       - Log level (debug, info, warning, error, critical)
    logger      - Module path (e.g., mizban.cli.client)
    event       - Log message
    func_name   - Function that emitted the log
    lineno      - Line number in source file
    source      - Origin context, set explicitly (cli, api, config)

Console output goes to stderr so that it never mixes with command output
(tables, JSON) written to stdout.

Usage:
    from mizban.core.logging import get_logger, setup_logging

    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    log_with_source(logger, "api", "debug", "API request", method="GET")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

VALID_SOURCES = frozenset({
    "cli",
    "api",
    "config",
})
"""
Recognized log source values.
Source is always set explicitly by the caller. Never guessed from logger names.
"""

_FILE_MAX_BYTES = 5 * 1024 * 1024
_FILE_BACKUP_COUNT = 3


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    log_file: Path | None = None,
) -> None:
    """
    Configure structured logging for the CLI.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Overrides settings.
        format_type: Output format ('json' or 'console'). Overrides settings.
        log_file: Also write JSON records to this file. Overrides settings.
    """
    from mizban.core.config import get_settings

    settings = get_settings()

    effective_level = level if level is not None else settings.log_level
    effective_format = format_type if format_type is not None else settings.log_format
    effective_file = log_file if log_file is not None else settings.log_file

    log_level = getattr(logging, effective_level.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if effective_format == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            foreign_pre_chain=shared_processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if effective_file is not None:
        log_path = Path(effective_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=_FILE_MAX_BYTES,
            backupCount=_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message with an explicit source.

    Args:
        logger: The logger instance
        source: Log source (cli, api, config)
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **kwargs: Additional context fields

    Raises:
        AttributeError: If level is not a valid log level

    Example:
        log_with_source(logger, "api", "debug", "API response", status_code=200)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)

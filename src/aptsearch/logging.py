"""Logging configuration for APT Search with structlog."""

import logging
import sys
import time
from pathlib import Path
from typing import Any

import structlog


def setup_logging(
    level: str | None = "WARNING",
    log_file: Path | None = None,
    show_timestamps: bool = True,
) -> None:
    """Configure structlog for console and optional file output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR), or None to use WARNING
        log_file: Optional file path to write logs
        show_timestamps: Include timestamps in console output
    """
    level = level or "WARNING"
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = []
    file_handler: logging.FileHandler | None = None

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]

    if show_timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False))

    if file_handler is not None:
        # File output: use JSON for parsing
        processors.extend(
            [
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ]
        )
        # Share the handler's stream so the file is opened once
        logger_factory = structlog.WriteLoggerFactory(file=file_handler.stream)
    else:
        processors.extend(
            [
                structlog.dev.set_exc_info,
                structlog.dev.ConsoleRenderer(colors=True),
            ]
        )
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger for a module.

    Args:
        name: Module name (e.g., "aptsearch.controller.search")

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class AsyncTimer:
    """Async context manager for timing operations.

    Usage:
        async with AsyncTimer("operation_name", logger) as timer:
            await async_operation()
        print(f"Took {timer.elapsed:.3f}s")
    """

    def __init__(self, name: str, logger: Any | None = None):
        """Initialize async timer.

        Args:
            name: Operation name for logging
            logger: Logger instance (uses default if None)
        """
        self.name = name
        self.logger = logger or get_logger("timer")
        self.start_time: float = 0
        self.elapsed: float = 0

    async def __aenter__(self) -> "AsyncTimer":
        """Start timing."""
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting: {self.name}")
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Stop timing and log result."""
        self.elapsed = time.perf_counter() - self.start_time
        self.logger.debug(f"Completed: {self.name}", elapsed_s=f"{self.elapsed:.3f}")

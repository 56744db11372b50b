"""Unified logging and debug infrastructure for rjy.

This module provides:
1. Centralized logging configuration
2. Debug mode via RJY_DEBUG env var or the CLI --debug flag
3. Log levels via RJY_LOG_LEVEL env var
4. Dual output: Rich console for CLI, file logging for debugging

Usage:
    from rjy.utils.logging import get_logger, set_debug_mode

    # In CLI entry point, after get_logger() has configured logging:
    set_debug_mode(debug)

    # In any module:
    logger = get_logger(__name__)
    logger.info("Starting operation")
    logger.debug("Detailed debug info")
    logger.error("Something failed", exc=exception)

Environment Variables:
    RJY_DEBUG=1           Enable debug mode (verbose output)
    RJY_LOG_LEVEL=DEBUG   Set log level (DEBUG, INFO, WARNING, ERROR)
    RJY_LOG_FILE=/path    Override log file location
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console

from rjy.core.errors import ConfigError

# Global state
_configured = False
_debug_mode = False
_log_file: Optional[Path] = None

# Shared Rich console instance
console = Console()

# Custom log level for success messages
SUCCESS_LEVEL = 25
logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")


def _get_log_file() -> Path:
    """Get the log file path."""
    global _log_file
    if _log_file:
        return _log_file

    env_log_file = os.environ.get("RJY_LOG_FILE")
    if env_log_file:
        _log_file = Path(env_log_file)
    else:
        from rjy.paths import HostPaths

        _log_file = HostPaths.log_dir() / "rjy.log"

    return _log_file


def is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return _debug_mode or os.environ.get("RJY_DEBUG", "").lower() in ("1", "true", "yes")


def set_debug_mode(enabled: bool) -> None:
    """Toggle debug mode after logging has been configured."""
    global _debug_mode
    _debug_mode = enabled
    if enabled:
        logging.getLogger("rjy").setLevel(logging.DEBUG)


def configure_logging(
    debug: bool = False,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> None:
    """Configure the logging system.

    Should be called once at application startup.

    Args:
        debug: Enable debug mode (verbose output, debug to console)
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Override log file path
    """
    global _configured, _debug_mode, _log_file

    if _configured:
        return

    _debug_mode = debug or is_debug_mode()

    if log_file:
        _log_file = log_file

    # Determine log level
    if log_level:
        level_name = log_level.upper()
    else:
        level_name = os.environ.get("RJY_LOG_LEVEL", "DEBUG" if _debug_mode else "INFO").upper()

    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger("rjy")
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # File handler with rotation (captures all logs)
    try:
        path = _get_log_file()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)
    except (OSError, ConfigError):
        # Can't write log file, continue without it
        pass

    _configured = True

    root_logger.debug(f"Logging configured: level={level_name}, debug={_debug_mode}")


class rjyLogger:
    """Logging with Rich console output.

    Provides:
    - Standard log levels (debug, info, warning, error)
    - Success level for green checkmark messages
    - File logging for debugging
    - Debug output to console when debug mode enabled
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.console = console

    def debug(self, message: str, console_output: bool = False) -> None:
        """Log debug message.

        Debug only goes to the log file unless console_output is set or
        debug mode is on.
        """
        self.logger.debug(message)
        if console_output or is_debug_mode():
            self.console.print(f"[dim][DEBUG] {message}[/dim]")

    def info(self, message: str, console_output: bool = True) -> None:
        """Log info message."""
        self.logger.info(message)
        if console_output:
            self.console.print(f"[blue]{message}[/blue]")

    def success(self, message: str, console_output: bool = True) -> None:
        """Log success message (green output)."""
        self.logger.log(SUCCESS_LEVEL, message)
        if console_output:
            self.console.print(f"[green]✓ {message}[/green]")

    def warning(self, message: str, console_output: bool = True) -> None:
        """Log warning message (yellow output)."""
        self.logger.warning(message)
        if console_output:
            self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def error(
        self,
        message: str,
        exc: Optional[Exception] = None,
        console_output: bool = True,
    ) -> None:
        """Log error message (red output).

        Args:
            message: Error message
            exc: Optional exception to include in log
            console_output: Output to console
        """
        if exc:
            self.logger.error(f"{message}: {exc}", exc_info=exc)
            error_msg = f"{message}: {exc}"
        else:
            self.logger.error(message)
            error_msg = message

        if console_output:
            self.console.print(f"[red]✗ {error_msg}[/red]")


def get_logger(name: str) -> rjyLogger:
    """Get or create a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        rjyLogger instance
    """
    if not _configured:
        configure_logging()

    # Ensure name is under rjy namespace
    if not name.startswith("rjy"):
        name = f"rjy.{name}"

    return rjyLogger(name)

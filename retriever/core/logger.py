# Path: retriever/core/logger.py
"""
Retriever Module Logger

Centralized logging configuration for the retriever module.

Architecture:
- Component-based logging (core, engine, cli, extraction)
- Rich console output on stderr, optional file output
- Configurable log levels
- IPO (Input-Process-Output) structured logging
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from retriever.core.config_loader import ConfigLoader
from retriever.constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_ACTIVITY_FILE,
    LOG_ERROR_FILE,
    DEFAULT_LOG_LEVEL,
    LOGGER_ROOT,
    LOGGER_CORE,
    LOGGER_ENGINE,
    LOGGER_CLI,
    LOGGER_EXTRACTION,
)

_COMPONENT_LOGGERS = {
    'core': LOGGER_CORE,
    'engine': LOGGER_ENGINE,
    'cli': LOGGER_CLI,
    'extraction': LOGGER_EXTRACTION,
}


class RetrieverLogger:
    """
    Centralized logger for retriever module.

    Provides component-specific loggers with unified configuration.

    Example:
        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Retrieving 3 query elements")
        logger.info("[PROCESS] Writing 120 files")
        logger.info("[OUTPUT] Exported to /work/src")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize retriever logger.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config
        self._configured = False

    def configure(self) -> None:
        """Configure logging system for retriever module."""
        if self._configured:
            return

        if self.config is None:
            self.config = ConfigLoader()

        log_dir = self.config.get('log_dir')
        log_level = getattr(
            logging,
            str(self.config.get('log_level', DEFAULT_LOG_LEVEL)).upper(),
            logging.WARNING,
        )
        console_output = self.config.get('log_console', True)

        logger = logging.getLogger(LOGGER_ROOT)
        logger.setLevel(log_level)
        logger.handlers.clear()

        if log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_dir / LOG_ACTIVITY_FILE)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            logger.addHandler(file_handler)

            error_handler = logging.FileHandler(log_dir / LOG_ERROR_FILE)
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            logger.addHandler(error_handler)

        if console_output:
            console_handler = RichHandler(
                console=Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(log_level)
            console_handler.setFormatter(logging.Formatter('%(message)s'))
            logger.addHandler(console_handler)

        self._configured = True

    def get_logger(self, name: str, component: str = 'core') -> logging.Logger:
        """
        Get logger for specific component.

        Args:
            name: Module name (typically __name__)
            component: Component type ('core', 'engine', 'cli', 'extraction')

        Returns:
            Configured logger instance
        """
        if not self._configured:
            self.configure()

        prefix = _COMPONENT_LOGGERS.get(component, LOGGER_ROOT)
        return logging.getLogger(f"{prefix}.{name}")


# Global logger instance
_retriever_logger = RetrieverLogger()


def get_logger(name: str, component: str = 'core') -> logging.Logger:
    """
    Get logger for retriever module component.

    Args:
        name: Module name (typically __name__)
        component: Component type ('core', 'engine', 'cli', 'extraction')

    Returns:
        Configured logger instance

    Example:
        from retriever.core.logger import get_logger

        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Processing fetch request")
    """
    return _retriever_logger.get_logger(name, component)


def configure_logging(config: Optional[ConfigLoader] = None) -> None:
    """
    Configure retriever logging system.

    Call this once at startup. Re-running with a new config replaces
    the installed handlers.

    Args:
        config: Optional ConfigLoader instance
    """
    global _retriever_logger

    if config:
        _retriever_logger = RetrieverLogger(config)

    _retriever_logger.configure()


__all__ = ['get_logger', 'configure_logging', 'RetrieverLogger']

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Logging helpers for ncsafe.

The library only logs lifecycle events at DEBUG level and never logs instead
of raising. Applications opt in to output with :func:`configure_logging`.
"""

import logging
from typing import IO, Optional, Union

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s'

PACKAGE_LOGGER_NAME = 'ncsafe'

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


class LoggingMixin:
    """
    Mixin providing standardized logger access.

    Ensures a logger is always available, defaulting to one named after the
    class if none is explicitly set.
    """

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        _logger = getattr(self, '_logger', None)
        if _logger is None:
            module = self.__class__.__module__
            name = self.__class__.__name__
            self._logger = logging.getLogger(f"{module}.{name}")
            return self._logger
        return _logger

    @logger.setter
    def logger(self, value: logging.Logger) -> None:
        """Set the logger instance."""
        self._logger = value


def configure_logging(
    level: Optional[Union[int, str]] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the ncsafe package logger.

    Calling it again replaces the handler it installed before, so the level
    can be changed at runtime without duplicating output.

    Args:
        level: Logging level; defaults to the configured ``log_level``
        stream: Output stream (stderr if None)

    Returns:
        The package logger
    """
    if level is None:
        from .config import get_config
        level = get_config().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if getattr(handler, '_ncsafe_handler', False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._ncsafe_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger


__all__ = ['LOG_FORMAT', 'LoggingMixin', 'configure_logging']

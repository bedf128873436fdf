# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Scoped acquisition of netCDF files.

Each helper acquires a handle, passes it to ``body``, and closes it on every
exit path::

    >>> counts = with_file_creating("new.nc", lambda f: f.summary().as_tuple())
    >>> counts
    (0, 0, 0)

Error precedence:
- acquisition fails: the error propagates and ``body`` is never called;
- ``body`` raises: its exception propagates, a close failure is discarded;
- ``body`` returns but close fails: the close error propagates and the
  result is discarded;
- otherwise the result of ``body`` is returned.
"""

import logging
from typing import Callable, Optional, TypeVar

from ..backends.base import NetCDFBackend
from .handle import NetCDFFile, PathLike
from .modes import CreationMode, FileFormat

logger = logging.getLogger(__name__)

T = TypeVar('T')


def run_scoped(ncfile: NetCDFFile, body: Callable[[NetCDFFile], T]) -> T:
    """
    Run ``body`` against an already acquired handle, then close it.

    Args:
        ncfile: Open handle; ownership passes to this function
        body: Callable receiving the handle

    Returns:
        The value returned by ``body``

    Raises:
        Whatever ``body`` raised; otherwise any NetCDFError from closing
    """
    try:
        result = body(ncfile)
    except BaseException:
        try:
            ncfile.close()
        except Exception as close_error:
            logger.debug("Discarded close failure for %s: %s", ncfile.path, close_error)
        raise

    ncfile.close()
    return result


def with_file_reading(
    path: PathLike,
    body: Callable[[NetCDFFile], T],
    *,
    backend: Optional[NetCDFBackend] = None,
) -> T:
    """Open ``path`` read-only, run ``body``, and close it."""
    return run_scoped(NetCDFFile.open_for_reading(path, backend=backend), body)


def with_file_writing(
    path: PathLike,
    body: Callable[[NetCDFFile], T],
    *,
    backend: Optional[NetCDFBackend] = None,
) -> T:
    """Open ``path`` for writing, run ``body``, and close it."""
    return run_scoped(NetCDFFile.open_for_writing(path, backend=backend), body)


def with_file_creating(
    path: PathLike,
    body: Callable[[NetCDFFile], T],
    mode: CreationMode = CreationMode.OVERWRITE,
    *,
    file_format: Optional[FileFormat] = None,
    backend: Optional[NetCDFBackend] = None,
) -> T:
    """Create ``path`` with ``mode``, run ``body``, and close it."""
    ncfile = NetCDFFile.create(path, mode, file_format=file_format, backend=backend)
    return run_scoped(ncfile, body)


__all__ = ['run_scoped', 'with_file_reading', 'with_file_writing', 'with_file_creating']

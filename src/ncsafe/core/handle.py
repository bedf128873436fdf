# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Owning handle for one open netCDF file.

Example:
    >>> # Create a new file
    >>> ncfile = NetCDFFile.create("out.nc")
    >>>
    >>> # Open an existing file for reading or writing
    >>> ncfile = NetCDFFile.open_for_reading("out.nc")
    >>> ncfile = NetCDFFile.open_for_writing("out.nc")
    >>>
    >>> # Open with an explicit mode
    >>> ncfile = NetCDFFile.open("out.nc", AccessMode.WRITE)
    >>>
    >>> # Query file information
    >>> with NetCDFFile.open_for_reading("out.nc") as ncfile:
    ...     print(ncfile.dimension_count, ncfile.variable_count)

A handle is not safe for concurrent use from several threads; give each
thread its own handle or serialize access externally.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from ..backends import get_backend
from ..backends.base import NetCDFBackend
from .classifier import raise_for_status
from .config import get_config
from .exceptions import FileNotOpenError
from .logging_utils import LoggingMixin
from .modes import (
    AccessMode,
    CreationMode,
    FileFormat,
    require_access_mode,
    require_creation_mode,
    require_file_format,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes, os.PathLike]


@dataclass(frozen=True)
class FileSummary:
    """Top-level object counts of a netCDF file."""
    dimensions: int
    variables: int
    attributes: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.dimensions, self.variables, self.attributes)


def _as_path(path: PathLike) -> str:
    return os.fsdecode(os.fspath(path))


class NetCDFFile(LoggingMixin):
    """
    Owning wrapper around one native netCDF id.

    Instances come only from :meth:`open`, :meth:`open_for_reading`,
    :meth:`open_for_writing` and :meth:`create`. The raw id never leaves the
    instance. Every operation other than :meth:`close` requires the handle to
    be open and raises :class:`FileNotOpenError` otherwise, without calling
    the backend.
    """

    def __init__(self, *args, **kwargs):
        raise TypeError(
            "NetCDFFile cannot be instantiated directly; use NetCDFFile.open(), "
            "open_for_reading(), open_for_writing() or create()"
        )

    @classmethod
    def _bind(
        cls,
        backend: NetCDFBackend,
        ncid: int,
        path: str,
        mode: Union[AccessMode, CreationMode],
    ) -> 'NetCDFFile':
        ncfile = cls.__new__(cls)
        ncfile._backend = backend
        ncfile._ncid = ncid
        ncfile._path = path
        ncfile._mode = mode
        ncfile._is_open = True
        return ncfile

    # -------------------------------------------------------------------------
    # Acquisition
    # -------------------------------------------------------------------------

    @classmethod
    def open(
        cls,
        path: PathLike,
        mode: AccessMode,
        *,
        backend: Optional[NetCDFBackend] = None,
    ) -> 'NetCDFFile':
        """
        Open an existing netCDF file with the given access mode.

        Args:
            path: File path (str, bytes or path-like)
            mode: AccessMode.READ or AccessMode.WRITE
            backend: Primitive layer to use; defaults to the configured one

        Returns:
            Open handle

        Raises:
            TypeError: If ``mode`` is not an AccessMode
            NetCDFError: If the file cannot be opened
        """
        mode = require_access_mode(mode)
        path = _as_path(path)
        backend = backend or get_backend()

        ncid, status = backend.open(path, mode.flags)
        raise_for_status(backend, status, context_path=path)

        logger.debug("Opened %s (%s) via %s", path, mode.name, backend.name)
        return cls._bind(backend, ncid, path, mode)

    @classmethod
    def open_for_reading(cls, path: PathLike, *, backend: Optional[NetCDFBackend] = None) -> 'NetCDFFile':
        """Open an existing file read-only."""
        return cls.open(path, AccessMode.READ, backend=backend)

    @classmethod
    def open_for_writing(cls, path: PathLike, *, backend: Optional[NetCDFBackend] = None) -> 'NetCDFFile':
        """Open an existing file for reading and writing."""
        return cls.open(path, AccessMode.WRITE, backend=backend)

    @classmethod
    def create(
        cls,
        path: PathLike,
        mode: CreationMode = CreationMode.OVERWRITE,
        *,
        file_format: Optional[FileFormat] = None,
        backend: Optional[NetCDFBackend] = None,
    ) -> 'NetCDFFile':
        """
        Create a new netCDF file.

        Args:
            path: File path (str, bytes or path-like)
            mode: OVERWRITE replaces an existing file, EXCLUSIVE fails on one
            file_format: On-disk format; defaults to the configured ``default_format``
            backend: Primitive layer to use; defaults to the configured one

        Returns:
            Open handle on the new file

        Raises:
            TypeError: If ``mode`` is not a CreationMode or ``file_format`` not a FileFormat
            NetCDFError: If the file cannot be created
        """
        mode = require_creation_mode(mode)
        if file_format is None:
            file_format = get_config().default_format
        file_format = require_file_format(file_format)
        path = _as_path(path)
        backend = backend or get_backend()

        ncid, status = backend.create(path, mode.flags | file_format.create_flags)
        raise_for_status(backend, status, context_path=path)

        logger.debug("Created %s (%s, %s) via %s", path, mode.name, file_format.name, backend.name)
        return cls._bind(backend, ncid, path, mode)

    # -------------------------------------------------------------------------
    # Release
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """
        Close the file.

        Safe to call repeatedly: once closed, further calls return at once.
        The handle counts as closed even when the native close fails, and the
        native close is never attempted twice.

        Raises:
            NetCDFError: If the native close fails
        """
        if not self._is_open:
            return

        self._is_open = False
        status = self._backend.close(self._ncid)
        raise_for_status(self._backend, status)
        self.logger.debug("Closed %s", self._path)

    def __enter__(self) -> 'NetCDFFile':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_type is None:
            self.close()
            return False

        # the with-block's exception takes precedence over a close failure
        try:
            self.close()
        except Exception as close_error:
            self.logger.debug("Discarded close failure for %s: %s", self._path, close_error)
        return False

    def __del__(self):
        if not getattr(self, '_is_open', False):
            return
        try:
            self.close()
        except Exception as close_error:
            logger.debug("Discarded close failure during release of %s: %s", self._path, close_error)

    # -------------------------------------------------------------------------
    # Inquiry
    # -------------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def path(self) -> str:
        return self._path

    @property
    def mode(self) -> Union[AccessMode, CreationMode]:
        """The mode the handle was acquired with."""
        return self._mode

    @property
    def backend_name(self) -> str:
        return self._backend.name

    @property
    def dimension_count(self) -> int:
        """Number of dimensions in the root group."""
        return self._inquire(self._backend.inquire_dimension_count)

    @property
    def variable_count(self) -> int:
        """Number of variables in the root group."""
        return self._inquire(self._backend.inquire_variable_count)

    @property
    def attribute_count(self) -> int:
        """Number of global attributes."""
        return self._inquire(self._backend.inquire_attribute_count)

    @property
    def unlimited_dimension_id(self) -> Optional[int]:
        """Id of the unlimited dimension, or None if the file has none."""
        dim_id = self._inquire(self._backend.inquire_unlimited_dimension)
        return None if dim_id < 0 else dim_id

    @property
    def file_format(self) -> FileFormat:
        return FileFormat(self._inquire(self._backend.inquire_format))

    def summary(self) -> FileSummary:
        """Dimension, variable and global attribute counts in one call."""
        return FileSummary(
            dimensions=self.dimension_count,
            variables=self.variable_count,
            attributes=self.attribute_count,
        )

    def _check_open(self) -> None:
        if not self._is_open:
            raise FileNotOpenError()

    def _inquire(self, primitive: Callable[[int], Tuple[int, int]]) -> int:
        self._check_open()
        value, status = primitive(self._ncid)
        raise_for_status(self._backend, status)
        return value

    def __repr__(self) -> str:
        state = 'open' if self._is_open else 'closed'
        return (
            f"<NetCDFFile path={self._path!r} mode={self._mode.name} "
            f"state={state} backend={self._backend.name!r}>"
        )


__all__ = ['FileSummary', 'NetCDFFile']

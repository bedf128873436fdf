# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Primitive layer built on netCDF4-python.

netCDF4-python raises instead of returning status codes and hands out
``Dataset`` objects instead of ids. This backend restores the C-level
contract: it keeps an id table of open datasets and converts the exceptions
back into the status codes they were raised for.

- ``OSError`` from open/create carries the native code in ``errno``.
- ``RuntimeError`` carries only the ``nc_strerror`` text, which is looked
  up in the catalog. Text outside the catalog gets a synthetic code below
  ``SYNTHETIC_STATUS_BASE`` so its message survives to the caller.
  Only the most recent ``MAX_SYNTHETIC_STATUSES`` such messages are kept.
"""

import itertools
from typing import Callable, Dict, Tuple

import netCDF4 as nc4

from ..core.constants import (
    NC_EBADID,
    NC_NOCLOBBER,
    NC_NOERR,
    NC_WRITE,
    describe_status,
    status_for_message,
)
from ..core.logging_utils import LoggingMixin
from ..core.modes import FileFormat
from .base import NetCDFBackend

FIRST_ID = 65536
"""First id issued; well clear of the small integers the C library uses."""

SYNTHETIC_STATUS_BASE = -10000

MAX_SYNTHETIC_STATUSES = 256
"""Distinct unknown messages remembered at once; the oldest is forgotten first."""


class NetCDF4Backend(LoggingMixin, NetCDFBackend):
    """netCDF4-python implementation of the primitive layer."""

    name = "netcdf4"

    def __init__(self):
        self._datasets: Dict[int, nc4.Dataset] = {}
        self._ids = itertools.count(FIRST_ID)
        self._synthetic_ids = itertools.count(SYNTHETIC_STATUS_BASE, -1)
        self._synthetic_messages: Dict[int, str] = {}
        self._synthetic_codes: Dict[str, int] = {}

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def open(self, path: str, mode: int) -> Tuple[int, int]:
        nc_mode = 'r+' if mode & NC_WRITE else 'r'
        try:
            dataset = nc4.Dataset(path, nc_mode)
        except (OSError, RuntimeError) as e:
            return -1, self._status_from_exception(e)
        return self._register(dataset), NC_NOERR

    def create(self, path: str, mode: int) -> Tuple[int, int]:
        file_format = FileFormat.from_create_flags(mode)
        clobber = not (mode & NC_NOCLOBBER)
        try:
            dataset = nc4.Dataset(path, 'w', clobber=clobber, format=file_format.data_model)
        except (OSError, RuntimeError) as e:
            return -1, self._status_from_exception(e)
        return self._register(dataset), NC_NOERR

    def close(self, ncid: int) -> int:
        dataset = self._datasets.pop(ncid, None)
        if dataset is None:
            return NC_EBADID
        try:
            dataset.close()
        except (OSError, RuntimeError) as e:
            return self._status_from_exception(e)
        return NC_NOERR

    # -------------------------------------------------------------------------
    # Inquiry
    # -------------------------------------------------------------------------

    def inquire_dimension_count(self, ncid: int) -> Tuple[int, int]:
        return self._inquire(ncid, lambda ds: len(ds.dimensions))

    def inquire_variable_count(self, ncid: int) -> Tuple[int, int]:
        return self._inquire(ncid, lambda ds: len(ds.variables))

    def inquire_attribute_count(self, ncid: int) -> Tuple[int, int]:
        return self._inquire(ncid, lambda ds: len(ds.ncattrs()))

    def inquire_unlimited_dimension(self, ncid: int) -> Tuple[int, int]:
        def first_unlimited(ds) -> int:
            # root-group dimension ids follow definition order
            for dim_id, dim in enumerate(ds.dimensions.values()):
                if dim.isunlimited():
                    return dim_id
            return -1

        return self._inquire(ncid, first_unlimited)

    def inquire_format(self, ncid: int) -> Tuple[int, int]:
        return self._inquire(ncid, lambda ds: FileFormat.from_name(ds.data_model).value)

    def describe_status(self, status: int) -> str:
        if status in self._synthetic_messages:
            return self._synthetic_messages[status]
        return describe_status(status)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _register(self, dataset: nc4.Dataset) -> int:
        ncid = next(self._ids)
        self._datasets[ncid] = dataset
        self.logger.debug("Registered %s as id %d", dataset.filepath(), ncid)
        return ncid

    def _inquire(self, ncid: int, query: Callable[[nc4.Dataset], int]) -> Tuple[int, int]:
        dataset = self._datasets.get(ncid)
        if dataset is None:
            return 0, NC_EBADID
        try:
            return query(dataset), NC_NOERR
        except (OSError, RuntimeError) as e:
            return 0, self._status_from_exception(e)

    def _status_from_exception(self, exc: Exception) -> int:
        code = getattr(exc, 'errno', None)
        if isinstance(code, int) and code != NC_NOERR:
            return code

        message = getattr(exc, 'strerror', None) or str(exc)
        code = status_for_message(message)
        if code is not None:
            return code
        return self._synthetic_status(message)

    def _synthetic_status(self, message: str) -> int:
        """
        Return the code standing for ``message``, issuing a new one if needed.

        Codes are never reused. At most ``MAX_SYNTHETIC_STATUSES`` messages are
        kept; once an old code is evicted ``describe_status`` reports it as
        unknown.
        """
        code = self._synthetic_codes.get(message)
        if code is None:
            code = next(self._synthetic_ids)
            self._synthetic_codes[message] = code
            self._synthetic_messages[code] = message
            if len(self._synthetic_codes) > MAX_SYNTHETIC_STATUSES:
                oldest = next(iter(self._synthetic_codes))
                del self._synthetic_messages[self._synthetic_codes.pop(oldest)]
        return code


__all__ = ['NetCDF4Backend']

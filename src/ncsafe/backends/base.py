# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Primitive operations required from a native netCDF implementation.

A backend speaks the C library's language: integer ids, integer mode flags,
and integer status codes returned instead of raised. Turning statuses into
exceptions is the job of :mod:`ncsafe.core.classifier`, not of the backend.

Backends are not thread-safe for concurrent calls on the same id; callers
serialize access per handle.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from ..core.constants import describe_status


class NetCDFBackend(ABC):
    """
    Abstract primitive layer.

    Every method returns the native status code as its last (or only) value;
    ``0`` means success. On failure the other returned values are undefined.
    """

    name: str = "abstract"
    """Registry name of the backend."""

    @abstractmethod
    def open(self, path: str, mode: int) -> Tuple[int, int]:
        """Open an existing file. Returns ``(ncid, status)``."""

    @abstractmethod
    def create(self, path: str, mode: int) -> Tuple[int, int]:
        """Create a file with creation and format flags. Returns ``(ncid, status)``."""

    @abstractmethod
    def close(self, ncid: int) -> int:
        """Release ``ncid``. Returns the status."""

    @abstractmethod
    def inquire_dimension_count(self, ncid: int) -> Tuple[int, int]:
        """Returns ``(ndims, status)``."""

    @abstractmethod
    def inquire_variable_count(self, ncid: int) -> Tuple[int, int]:
        """Returns ``(nvars, status)``."""

    @abstractmethod
    def inquire_attribute_count(self, ncid: int) -> Tuple[int, int]:
        """Returns ``(ngatts, status)`` for global attributes."""

    @abstractmethod
    def inquire_unlimited_dimension(self, ncid: int) -> Tuple[int, int]:
        """Returns ``(unlimdimid, status)``; ``-1`` when there is none."""

    @abstractmethod
    def inquire_format(self, ncid: int) -> Tuple[int, int]:
        """Returns ``(format_code, status)`` as ``nc_inq_format`` does."""

    def describe_status(self, status: int) -> str:
        """Diagnostic text for ``status``; defaults to the netCDF catalog."""
        return describe_status(status)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


__all__ = ['NetCDFBackend']

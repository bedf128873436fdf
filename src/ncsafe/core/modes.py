# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Access, creation and format modes for netCDF files.

``AccessMode`` and ``CreationMode`` are deliberately unrelated enumerations:
opening an existing file takes one, creating a file takes the other, and
neither converts into the other or into a plain integer. Entry points check
the type with :func:`require_access_mode` / :func:`require_creation_mode`
before the native library is called.
"""

from enum import Enum
from typing import Dict

from .constants import (
    NC_64BIT_DATA,
    NC_64BIT_OFFSET,
    NC_CLASSIC_MODEL,
    NC_CLOBBER,
    NC_FORMAT_64BIT_DATA,
    NC_FORMAT_64BIT_OFFSET,
    NC_FORMAT_CLASSIC,
    NC_FORMAT_NETCDF4,
    NC_FORMAT_NETCDF4_CLASSIC,
    NC_NETCDF4,
    NC_NOCLOBBER,
    NC_NOWRITE,
    NC_WRITE,
)
from .exceptions import ConfigurationError


class AccessMode(Enum):
    """Intent for opening an existing file."""

    READ = NC_NOWRITE
    """Open read-only."""

    WRITE = NC_WRITE
    """Open for reading and writing."""

    @property
    def flags(self) -> int:
        """Native ``nc_open`` mode flags."""
        return self.value


class CreationMode(Enum):
    """Intent for creating a new file."""

    OVERWRITE = NC_CLOBBER
    """Create the file, replacing any existing one."""

    EXCLUSIVE = NC_NOCLOBBER
    """Create the file, failing if it already exists."""

    @property
    def flags(self) -> int:
        """Native ``nc_create`` mode flags (without format bits)."""
        return self.value


class FileFormat(Enum):
    """On-disk format of a netCDF file, valued by its ``nc_inq_format`` code."""

    CLASSIC = NC_FORMAT_CLASSIC
    CLASSIC_64BIT_OFFSET = NC_FORMAT_64BIT_OFFSET
    NETCDF4 = NC_FORMAT_NETCDF4
    NETCDF4_CLASSIC = NC_FORMAT_NETCDF4_CLASSIC
    CLASSIC_64BIT_DATA = NC_FORMAT_64BIT_DATA

    @property
    def create_flags(self) -> int:
        """Format bits to OR into ``nc_create`` mode flags."""
        return _CREATE_FLAGS[self]

    @property
    def data_model(self) -> str:
        """Format name as used by netCDF4-python (``Dataset(format=...)``)."""
        return _DATA_MODELS[self]

    @classmethod
    def from_name(cls, name: str) -> 'FileFormat':
        """
        Resolve a format from its member name or netCDF4-python name.

        Args:
            name: e.g. ``"NETCDF4"``, ``"netcdf3_classic"``, ``"classic_64bit_offset"``

        Returns:
            Matching FileFormat

        Raises:
            ConfigurationError: If the name is not a known format
        """
        key = str(name).strip().upper()
        if key in cls.__members__:
            return cls[key]
        for fmt, data_model in _DATA_MODELS.items():
            if key == data_model:
                return fmt
        if key == 'NETCDF3_64BIT':
            return cls.CLASSIC_64BIT_OFFSET
        known = ', '.join(cls.__members__)
        raise ConfigurationError(f"Unknown netCDF file format '{name}'. Known formats: {known}")

    @classmethod
    def from_create_flags(cls, flags: int) -> 'FileFormat':
        """Decode the format selected by the format bits of ``nc_create`` flags."""
        if flags & NC_NETCDF4:
            return cls.NETCDF4_CLASSIC if flags & NC_CLASSIC_MODEL else cls.NETCDF4
        if flags & NC_64BIT_DATA:
            return cls.CLASSIC_64BIT_DATA
        if flags & NC_64BIT_OFFSET:
            return cls.CLASSIC_64BIT_OFFSET
        return cls.CLASSIC


_CREATE_FLAGS: Dict[FileFormat, int] = {
    FileFormat.CLASSIC: 0,
    FileFormat.CLASSIC_64BIT_OFFSET: NC_64BIT_OFFSET,
    FileFormat.CLASSIC_64BIT_DATA: NC_64BIT_DATA,
    FileFormat.NETCDF4: NC_NETCDF4,
    FileFormat.NETCDF4_CLASSIC: NC_NETCDF4 | NC_CLASSIC_MODEL,
}

_DATA_MODELS: Dict[FileFormat, str] = {
    FileFormat.CLASSIC: 'NETCDF3_CLASSIC',
    FileFormat.CLASSIC_64BIT_OFFSET: 'NETCDF3_64BIT_OFFSET',
    FileFormat.CLASSIC_64BIT_DATA: 'NETCDF3_64BIT_DATA',
    FileFormat.NETCDF4: 'NETCDF4',
    FileFormat.NETCDF4_CLASSIC: 'NETCDF4_CLASSIC',
}


def require_access_mode(mode: object) -> AccessMode:
    """Return ``mode`` if it is an AccessMode, otherwise raise TypeError."""
    if not isinstance(mode, AccessMode):
        raise TypeError(
            f"Opening an existing file requires an AccessMode, got {type(mode).__name__}: {mode!r}"
        )
    return mode


def require_creation_mode(mode: object) -> CreationMode:
    """Return ``mode`` if it is a CreationMode, otherwise raise TypeError."""
    if not isinstance(mode, CreationMode):
        raise TypeError(
            f"Creating a file requires a CreationMode, got {type(mode).__name__}: {mode!r}"
        )
    return mode


def require_file_format(file_format: object) -> FileFormat:
    """Return ``file_format`` if it is a FileFormat, otherwise raise TypeError."""
    if not isinstance(file_format, FileFormat):
        raise TypeError(
            f"Expected a FileFormat, got {type(file_format).__name__}: {file_format!r}"
        )
    return file_format


__all__ = [
    'AccessMode',
    'CreationMode',
    'FileFormat',
    'require_access_mode',
    'require_creation_mode',
    'require_file_format',
]

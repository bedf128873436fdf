# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Exception hierarchy for ncsafe.

Every failure reported by the native netCDF layer is translated into exactly
one subclass of :class:`NetCDFError`. The set is closed: anything outside the
named kinds becomes a :class:`NetCDFLibraryError` that keeps the original
status code and diagnostic text.

Errors compare by value, so callers and tests can match on payload::

    >>> NetCDFFileNotFoundError("/data/in.nc") == NetCDFFileNotFoundError("/data/in.nc")
    True
"""

from enum import Enum
from typing import Any, Tuple


class NcSafeError(Exception):
    """
    Base exception for all ncsafe-specific errors.

    Allows catching every ncsafe error with a single except clause.
    """
    pass


class ConfigurationError(NcSafeError):
    """
    Configuration-related errors.

    Raised when:
    - Configuration values are invalid
    - Configuration file cannot be loaded or parsed
    - An unknown backend or file format is requested
    """
    pass


class BackendUnavailableError(ConfigurationError):
    """
    The native library behind a backend cannot be imported or loaded.

    Raised when:
    - netCDF4-python is not installed
    - libnetcdf cannot be located or lacks a required symbol
    """
    pass


# =============================================================================
# netCDF Status Taxonomy
# =============================================================================

class ErrorKind(Enum):
    """Closed set of failure kinds produced by the classifier."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    INVALID_FORMAT = "invalid_format"
    INVALID_DIMENSION = "invalid_dimension"
    INVALID_VARIABLE = "invalid_variable"
    INVALID_ATTRIBUTE = "invalid_attribute"
    NOT_OPEN = "not_open"
    GENERIC = "generic"


class NetCDFError(NcSafeError):
    """
    Base class of the netCDF status taxonomy.

    Subclasses set :attr:`kind` and store their payload in ``args``; two
    errors are equal when they have the same class and the same payload.
    """

    kind: ErrorKind

    @property
    def payload(self) -> Tuple[Any, ...]:
        """Values identifying this failure (path, id, name, or code and message)."""
        return self.args

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetCDFError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))

    def __repr__(self) -> str:
        args = ", ".join(repr(arg) for arg in self.args)
        return f"{type(self).__name__}({args})"


class NetCDFFileNotFoundError(NetCDFError):
    """The file does not exist or a directory on its path is missing."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"NetCDF file not found: {self.path}"


class FileAlreadyExistsError(NetCDFError):
    """An exclusive create found an existing file."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"NetCDF file already exists: {self.path}"


class PermissionDeniedError(NetCDFError):
    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Permission denied: {self.path}"


class InvalidFormatError(NetCDFError):
    """The file exists but is not in a format the library can read."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Invalid NetCDF format: {self.path}"


class InvalidDimensionError(NetCDFError):
    kind = ErrorKind.INVALID_DIMENSION

    def __init__(self, dim_id: int):
        super().__init__(dim_id)
        self.dim_id = dim_id

    def __str__(self) -> str:
        return f"Invalid dimension ID: {self.dim_id}"


class InvalidVariableError(NetCDFError):
    kind = ErrorKind.INVALID_VARIABLE

    def __init__(self, var_id: int):
        super().__init__(var_id)
        self.var_id = var_id

    def __str__(self) -> str:
        return f"Invalid variable ID: {self.var_id}"


class InvalidAttributeError(NetCDFError):
    kind = ErrorKind.INVALID_ATTRIBUTE

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Invalid attribute: {self.name}"


class FileNotOpenError(NetCDFError):
    """
    An operation was attempted on a closed handle.

    Raised by the handle itself; the native layer is never called.
    """

    kind = ErrorKind.NOT_OPEN

    def __str__(self) -> str:
        return "NetCDF file is not open"


class NetCDFLibraryError(NetCDFError):
    """
    Any failure outside the named kinds.

    Keeps the raw status code and the library's diagnostic text.
    """

    kind = ErrorKind.GENERIC

    def __init__(self, code: int, message: str):
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"NetCDF error ({self.code}): {self.message}"


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Base
    'NcSafeError',
    # Ambient
    'ConfigurationError',
    'BackendUnavailableError',
    # netCDF taxonomy
    'ErrorKind',
    'NetCDFError',
    'NetCDFFileNotFoundError',
    'FileAlreadyExistsError',
    'PermissionDeniedError',
    'InvalidFormatError',
    'InvalidDimensionError',
    'InvalidVariableError',
    'InvalidAttributeError',
    'FileNotOpenError',
    'NetCDFLibraryError',
]

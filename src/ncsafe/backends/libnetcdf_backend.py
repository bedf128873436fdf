# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
ctypes bindings for the netCDF C library.

Calls ``nc_open``, ``nc_create``, ``nc_close``, the ``nc_inq_*`` family and
``nc_strerror`` directly, so ids and status codes are exactly the native
ones.

The shared library is located from, in order:

1. an explicit path (``NCSAFE_LIBRARY_PATH`` / ``library_path`` config)
2. ``ctypes.util.find_library("netcdf")``
3. common file names
4. the copy bundled in a netCDF4-python wheel
"""

import ctypes
import ctypes.util
import importlib.util
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from ..core.exceptions import BackendUnavailableError
from ..core.logging_utils import LoggingMixin
from .base import NetCDFBackend

LIBRARY_CANDIDATES = (
    "libnetcdf.so",
    "libnetcdf.so.22",
    "libnetcdf.so.19",
    "libnetcdf.so.18",
    "libnetcdf.so.15",
    "libnetcdf.dylib",
    "netcdf.dll",
)

_c_int_p = ctypes.POINTER(ctypes.c_int)

_SIGNATURES = {
    "nc_open": ([ctypes.c_char_p, ctypes.c_int, _c_int_p], ctypes.c_int),
    "nc_create": ([ctypes.c_char_p, ctypes.c_int, _c_int_p], ctypes.c_int),
    "nc_close": ([ctypes.c_int], ctypes.c_int),
    "nc_inq_ndims": ([ctypes.c_int, _c_int_p], ctypes.c_int),
    "nc_inq_nvars": ([ctypes.c_int, _c_int_p], ctypes.c_int),
    "nc_inq_natts": ([ctypes.c_int, _c_int_p], ctypes.c_int),
    "nc_inq_unlimdim": ([ctypes.c_int, _c_int_p], ctypes.c_int),
    "nc_inq_format": ([ctypes.c_int, _c_int_p], ctypes.c_int),
    "nc_strerror": ([ctypes.c_int], ctypes.c_char_p),
}


def _bundled_libraries() -> Iterator[Path]:
    """Yield libnetcdf copies shipped inside an installed netCDF4-python wheel."""
    spec = importlib.util.find_spec("netCDF4")
    if spec is None or not spec.submodule_search_locations:
        return
    package_dir = Path(next(iter(spec.submodule_search_locations)))
    # Current wheels ship "netcdf4.libs", older ones "netCDF4.libs"
    libs_dirs = sorted(
        p for p in package_dir.parent.glob("*.libs") if p.name.lower() == "netcdf4.libs"
    )
    libs_dirs.append(package_dir / ".dylibs")
    for libs_dir in libs_dirs:
        if libs_dir.is_dir():
            yield from sorted(libs_dir.glob("libnetcdf*"))


def load_libnetcdf(library_path: Optional[Union[str, Path]] = None) -> ctypes.CDLL:
    """
    Load the netCDF shared library.

    Args:
        library_path: Explicit library file; skips the search when given

    Returns:
        Loaded library handle

    Raises:
        BackendUnavailableError: If no usable library is found
    """
    if library_path:
        try:
            return ctypes.CDLL(str(library_path))
        except OSError as e:
            raise BackendUnavailableError(f"Cannot load netCDF library at {library_path}: {e}") from e

    candidates: List[str] = []
    found = ctypes.util.find_library("netcdf")
    if found:
        candidates.append(found)
    candidates.extend(LIBRARY_CANDIDATES)
    candidates.extend(str(p) for p in _bundled_libraries())

    for candidate in candidates:
        try:
            return ctypes.CDLL(candidate)
        except OSError:
            continue
    raise BackendUnavailableError(
        "Could not locate the netCDF C library. Set NCSAFE_LIBRARY_PATH to its explicit path."
    )


def _bind(lib: ctypes.CDLL) -> None:
    for symbol, (argtypes, restype) in _SIGNATURES.items():
        try:
            func = getattr(lib, symbol)
        except AttributeError as e:
            raise BackendUnavailableError(f"netCDF library lacks symbol {symbol}") from e
        func.argtypes = argtypes
        func.restype = restype


class LibNetCDFBackend(LoggingMixin, NetCDFBackend):
    """Direct ctypes binding of libnetcdf."""

    name = "libnetcdf"

    def __init__(self, library_path: Optional[Union[str, Path]] = None):
        self._lib = load_libnetcdf(library_path)
        _bind(self._lib)
        self.logger.debug("Loaded netCDF library %s", self._lib._name)

    def open(self, path: str, mode: int) -> Tuple[int, int]:
        ncid = ctypes.c_int(-1)
        status = self._lib.nc_open(_encode(path), mode, ctypes.byref(ncid))
        return ncid.value, status

    def create(self, path: str, mode: int) -> Tuple[int, int]:
        ncid = ctypes.c_int(-1)
        status = self._lib.nc_create(_encode(path), mode, ctypes.byref(ncid))
        return ncid.value, status

    def close(self, ncid: int) -> int:
        return self._lib.nc_close(ncid)

    def inquire_dimension_count(self, ncid: int) -> Tuple[int, int]:
        return self._inquire_int(self._lib.nc_inq_ndims, ncid)

    def inquire_variable_count(self, ncid: int) -> Tuple[int, int]:
        return self._inquire_int(self._lib.nc_inq_nvars, ncid)

    def inquire_attribute_count(self, ncid: int) -> Tuple[int, int]:
        return self._inquire_int(self._lib.nc_inq_natts, ncid)

    def inquire_unlimited_dimension(self, ncid: int) -> Tuple[int, int]:
        return self._inquire_int(self._lib.nc_inq_unlimdim, ncid)

    def inquire_format(self, ncid: int) -> Tuple[int, int]:
        return self._inquire_int(self._lib.nc_inq_format, ncid)

    def describe_status(self, status: int) -> str:
        raw = self._lib.nc_strerror(status)
        return raw.decode("utf-8", errors="replace") if raw else ""

    @staticmethod
    def _inquire_int(func, ncid: int) -> Tuple[int, int]:
        value = ctypes.c_int(0)
        status = func(ncid, ctypes.byref(value))
        return value.value, status


def _encode(path: str) -> bytes:
    # the C library takes paths in the filesystem encoding
    return os.fsencode(path)


__all__ = ['LibNetCDFBackend', 'load_libnetcdf']

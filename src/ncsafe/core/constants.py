# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Native netCDF constants used by the handle layer.

Centralizes the status codes, mode flags and format codes of the netCDF C
library together with its diagnostic message catalog, so that backends and
the error classifier share a single source of truth.
"""

import errno
import os
from typing import Dict, Optional

# =============================================================================
# Status Codes
# =============================================================================

NC_NOERR = 0
"""Success."""

NC_EBADID = -33
NC_ENFILE = -34
NC_EEXIST = -35
NC_EINVAL = -36
NC_EPERM = -37
NC_ENOTINDEFINE = -38
NC_EINDEFINE = -39
NC_EINVALCOORDS = -40
NC_EMAXDIMS = -41
NC_ENAMEINUSE = -42
NC_ENOTATT = -43
NC_EMAXATTS = -44
NC_EBADTYPE = -45
NC_EBADDIM = -46
NC_EUNLIMPOS = -47
NC_EMAXVARS = -48
NC_ENOTVAR = -49
NC_EGLOBAL = -50
NC_ENOTNC = -51
NC_ESTS = -52
NC_EMAXNAME = -53
NC_EUNLIMIT = -54
NC_ENORECVARS = -55
NC_ECHAR = -56
NC_EEDGE = -57
NC_ESTRIDE = -58
NC_EBADNAME = -59
NC_ERANGE = -60
NC_ENOMEM = -61
NC_EVARSIZE = -62
NC_EDIMSIZE = -63
NC_ETRUNC = -64
NC_EHDFERR = -101
NC_ECANTREAD = -102
NC_ECANTWRITE = -103
NC_ECANTCREATE = -104
NC_EFILEMETA = -105
NC_EATTEXISTS = -110
NC_ENOTNC4 = -111
NC_ENOTNC3 = -113
NC_EBADGRPID = -116
NC_ENOGRP = -125
NC_ENOTBUILT = -128
NC_EDISKLESS = -129

NC_MESSAGES: Dict[int, str] = {
    NC_NOERR: "No error",
    NC_EBADID: "NetCDF: Not a valid ID",
    NC_ENFILE: "NetCDF: Too many files open",
    NC_EEXIST: "NetCDF: File exists && NC_NOCLOBBER",
    NC_EINVAL: "NetCDF: Invalid argument",
    NC_EPERM: "NetCDF: Write to read only",
    NC_ENOTINDEFINE: "NetCDF: Operation not allowed in data mode",
    NC_EINDEFINE: "NetCDF: Operation not allowed in define mode",
    NC_EINVALCOORDS: "NetCDF: Index exceeds dimension bound",
    NC_EMAXDIMS: "NetCDF: NC_MAX_DIMS exceeded",
    NC_ENAMEINUSE: "NetCDF: String match to name in use",
    NC_ENOTATT: "NetCDF: Attribute not found",
    NC_EMAXATTS: "NetCDF: NC_MAX_ATTRS exceeded",
    NC_EBADTYPE: "NetCDF: Not a valid data type or _FillValue type mismatch",
    NC_EBADDIM: "NetCDF: Invalid dimension ID or name",
    NC_EUNLIMPOS: "NetCDF: NC_UNLIMITED in the wrong index",
    NC_EMAXVARS: "NetCDF: NC_MAX_VARS exceeded",
    NC_ENOTVAR: "NetCDF: Variable not found",
    NC_EGLOBAL: "NetCDF: Action prohibited on NC_GLOBAL varid",
    NC_ENOTNC: "NetCDF: Unknown file format",
    NC_ESTS: "NetCDF: In Fortran, string too short",
    NC_EMAXNAME: "NetCDF: NC_MAX_NAME exceeded",
    NC_EUNLIMIT: "NetCDF: NC_UNLIMITED size already in use",
    NC_ENORECVARS: "NetCDF: nc_rec op when there are no record vars",
    NC_ECHAR: "NetCDF: Attempt to convert between text & numbers",
    NC_EEDGE: "NetCDF: Start+count exceeds dimension bound",
    NC_ESTRIDE: "NetCDF: Illegal stride",
    NC_EBADNAME: "NetCDF: Name contains illegal characters",
    NC_ERANGE: "NetCDF: Numeric conversion not representable",
    NC_ENOMEM: "NetCDF: Memory allocation (malloc) failure",
    NC_EVARSIZE: "NetCDF: One or more variable sizes violate format constraints",
    NC_EDIMSIZE: "NetCDF: Invalid dimension size",
    NC_ETRUNC: "NetCDF: File likely truncated or possibly corrupted",
    NC_EHDFERR: "NetCDF: HDF error",
    NC_ECANTREAD: "NetCDF: Can't read file",
    NC_ECANTWRITE: "NetCDF: Can't write file",
    NC_ECANTCREATE: "NetCDF: Can't create file",
    NC_EFILEMETA: "NetCDF: Can't add HDF5 file metadata",
    NC_EATTEXISTS: "NetCDF: Attempt to create attribute that already exists",
    NC_ENOTNC4: "NetCDF: Attempting netcdf-4 operation on netcdf-3 file",
    NC_ENOTNC3: "NetCDF: Attempting netcdf-3 operation on netcdf-4 file",
    NC_EBADGRPID: "NetCDF: Bad group ID",
    NC_ENOGRP: "NetCDF: No group found.",
    NC_ENOTBUILT: "NetCDF: Attempt to use feature that was not turned on when netCDF was built.",
    NC_EDISKLESS: "NetCDF: Error in using diskless access",
}
"""Diagnostic text of the netCDF C library (``nc_strerror``) per status code."""

UNKNOWN_ERROR_MESSAGE = "Unknown Error"
"""Text ``nc_strerror`` returns for codes outside its catalog."""

# =============================================================================
# Mode Flags
# =============================================================================

NC_NOWRITE = 0x0000
NC_WRITE = 0x0001
NC_CLOBBER = 0x0000
NC_NOCLOBBER = 0x0004

NC_64BIT_DATA = 0x0020
NC_CLASSIC_MODEL = 0x0100
NC_64BIT_OFFSET = 0x0200
NC_NETCDF4 = 0x1000

# =============================================================================
# Format Codes (nc_inq_format)
# =============================================================================

NC_FORMAT_CLASSIC = 1
NC_FORMAT_64BIT_OFFSET = 2
NC_FORMAT_NETCDF4 = 3
NC_FORMAT_NETCDF4_CLASSIC = 4
NC_FORMAT_64BIT_DATA = 5

# =============================================================================
# System Error Codes
# =============================================================================

# The C library passes errno values through unchanged (positive codes).
SYSTEM_ENOENT = errno.ENOENT
SYSTEM_EEXIST = errno.EEXIST
SYSTEM_EACCES = errno.EACCES
SYSTEM_EPERM = errno.EPERM


def describe_status(status: int) -> str:
    """
    Return the diagnostic text for a status code, as ``nc_strerror`` does.

    Positive codes are system errors and are described by the operating
    system; negative codes come from the netCDF catalog.

    Args:
        status: Raw status code

    Returns:
        Human-readable diagnostic string
    """
    if status > 0:
        return os.strerror(status)
    return NC_MESSAGES.get(status, UNKNOWN_ERROR_MESSAGE)


def status_for_message(message: str) -> Optional[int]:
    """
    Reverse-look-up a netCDF diagnostic in the message catalog.

    Args:
        message: Diagnostic text, as produced by ``nc_strerror``

    Returns:
        The matching status code, or None if the text is not in the catalog
    """
    text = message.strip()
    for code, catalog_text in NC_MESSAGES.items():
        if code != NC_NOERR and catalog_text == text:
            return code
    return None

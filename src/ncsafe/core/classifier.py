# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Translation of native status codes into the ncsafe error taxonomy.

Classification order:

1. A static table keyed on the stable numeric codes of the netCDF catalog.
   A code in the table yields its kind when the context that kind needs (a
   path, a dimension or variable id, an attribute name) was supplied, and
   the generic error otherwise; its text is never matched.
2. Case-insensitive substring tests on the diagnostic text, for codes outside
   the table and only when a path is known: "no such file" / "not found",
   then "exists", then "permission" / "denied".
3. Everything else becomes :class:`NetCDFLibraryError` with the raw code and
   text.

Checked against the netCDF catalog, the only messages the substring rules
could misread are "Variable not found", "Attribute not found" and "Attempt to
create attribute that already exists"; all three codes are in the table.
"""

from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from .constants import (
    NC_EATTEXISTS,
    NC_EBADDIM,
    NC_EBADNAME,
    NC_EEXIST,
    NC_ENOTATT,
    NC_ENOTNC,
    NC_ENOTVAR,
    NC_EPERM,
    NC_NOERR,
    SYSTEM_EACCES,
    SYSTEM_EEXIST,
    SYSTEM_ENOENT,
    SYSTEM_EPERM,
)
from .exceptions import (
    ErrorKind,
    FileAlreadyExistsError,
    InvalidAttributeError,
    InvalidDimensionError,
    InvalidFormatError,
    InvalidVariableError,
    NetCDFError,
    NetCDFFileNotFoundError,
    NetCDFLibraryError,
    PermissionDeniedError,
)

if TYPE_CHECKING:
    from ncsafe.backends.base import NetCDFBackend


STATUS_KINDS: Dict[int, ErrorKind] = {
    SYSTEM_ENOENT: ErrorKind.NOT_FOUND,
    SYSTEM_EEXIST: ErrorKind.ALREADY_EXISTS,
    NC_EEXIST: ErrorKind.ALREADY_EXISTS,
    SYSTEM_EACCES: ErrorKind.PERMISSION_DENIED,
    SYSTEM_EPERM: ErrorKind.PERMISSION_DENIED,
    NC_EPERM: ErrorKind.PERMISSION_DENIED,
    NC_ENOTNC: ErrorKind.INVALID_FORMAT,
    NC_EBADDIM: ErrorKind.INVALID_DIMENSION,
    NC_ENOTVAR: ErrorKind.INVALID_VARIABLE,
    NC_ENOTATT: ErrorKind.INVALID_ATTRIBUTE,
    NC_EBADNAME: ErrorKind.INVALID_ATTRIBUTE,
    NC_EATTEXISTS: ErrorKind.INVALID_ATTRIBUTE,
}
"""Static code-to-kind table, consulted before any text matching."""

_SUBSTRING_RULES: Tuple[Tuple[Tuple[str, ...], ErrorKind], ...] = (
    (("no such file", "not found"), ErrorKind.NOT_FOUND),
    (("exists",), ErrorKind.ALREADY_EXISTS),
    (("permission", "denied"), ErrorKind.PERMISSION_DENIED),
)

_PATH_ERRORS: Dict[ErrorKind, Callable[[str], NetCDFError]] = {
    ErrorKind.NOT_FOUND: NetCDFFileNotFoundError,
    ErrorKind.ALREADY_EXISTS: FileAlreadyExistsError,
    ErrorKind.PERMISSION_DENIED: PermissionDeniedError,
    ErrorKind.INVALID_FORMAT: InvalidFormatError,
}


def _from_table(
    status: int,
    context_path: Optional[str],
    dim_id: Optional[int],
    var_id: Optional[int],
    att_name: Optional[str],
) -> Optional[NetCDFError]:
    kind = STATUS_KINDS.get(status)
    if kind is None:
        return None
    if kind in _PATH_ERRORS:
        return _PATH_ERRORS[kind](context_path) if context_path is not None else None
    if kind is ErrorKind.INVALID_DIMENSION and dim_id is not None:
        return InvalidDimensionError(dim_id)
    if kind is ErrorKind.INVALID_VARIABLE and var_id is not None:
        return InvalidVariableError(var_id)
    if kind is ErrorKind.INVALID_ATTRIBUTE and att_name is not None:
        return InvalidAttributeError(att_name)
    return None


def _from_message(message: str, context_path: str) -> Optional[NetCDFError]:
    lowered = message.lower()
    for needles, kind in _SUBSTRING_RULES:
        if any(needle in lowered for needle in needles):
            return _PATH_ERRORS[kind](context_path)
    return None


def classify(
    status: int,
    message: str,
    context_path: Optional[str] = None,
    *,
    dim_id: Optional[int] = None,
    var_id: Optional[int] = None,
    att_name: Optional[str] = None,
) -> Optional[NetCDFError]:
    """
    Classify a native status code into exactly one error.

    Pure and deterministic: the same inputs always give an equal result.

    Args:
        status: Raw status code returned by the native call
        message: Diagnostic text for ``status``
        context_path: Path the call operated on, if any
        dim_id: Dimension id the call operated on, if any
        var_id: Variable id the call operated on, if any
        att_name: Attribute name the call operated on, if any

    Returns:
        None on success, otherwise the error describing the failure

    Example:
        >>> classify(2, "No such file or directory", "/data/missing.nc")
        NetCDFFileNotFoundError('/data/missing.nc')
        >>> classify(-33, "NetCDF: Not a valid ID")
        NetCDFLibraryError(-33, 'NetCDF: Not a valid ID')
    """
    if status == NC_NOERR:
        return None

    error = None
    if status in STATUS_KINDS:
        error = _from_table(status, context_path, dim_id, var_id, att_name)
    elif context_path is not None:
        error = _from_message(message, context_path)
    if error is None:
        error = NetCDFLibraryError(status, message)
    return error


def classify_status(
    backend: 'NetCDFBackend',
    status: int,
    context_path: Optional[str] = None,
    **context,
) -> Optional[NetCDFError]:
    """
    Classify a status, obtaining its diagnostic text from the backend.

    The backend is only asked for the text when ``status`` is a failure.
    """
    if status == NC_NOERR:
        return None
    return classify(status, backend.describe_status(status), context_path, **context)


def raise_for_status(
    backend: 'NetCDFBackend',
    status: int,
    context_path: Optional[str] = None,
    **context,
) -> None:
    """
    Raise the classified error for a failed status; return quietly on success.

    Raises:
        NetCDFError: The subclass chosen by :func:`classify`
    """
    error = classify_status(backend, status, context_path, **context)
    if error is not None:
        raise error


__all__ = ['STATUS_KINDS', 'classify', 'classify_status', 'raise_for_status']

# src/ncsafe/__init__.py
try:
    from .ncsafe_version import __version__
except ImportError:
    try:
        from importlib.metadata import version, PackageNotFoundError
        __version__ = version("ncsafe")
    except (ImportError, PackageNotFoundError):
        __version__ = "0.0.0"

from .backends import available_backends, get_backend, register_backend
from .backends.base import NetCDFBackend
from .core import (
    AccessMode,
    BackendUnavailableError,
    ConfigurationError,
    CreationMode,
    ErrorKind,
    FileAlreadyExistsError,
    FileFormat,
    FileNotOpenError,
    InvalidAttributeError,
    InvalidDimensionError,
    InvalidFormatError,
    InvalidVariableError,
    NcSafeConfig,
    NcSafeError,
    NetCDFError,
    NetCDFFileNotFoundError,
    NetCDFLibraryError,
    PermissionDeniedError,
    classify,
    configure_logging,
    get_config,
    set_config,
)
from .core.handle import FileSummary, NetCDFFile
from .core.scoped import run_scoped, with_file_creating, with_file_reading, with_file_writing

__all__ = [
    "__version__",
    "NetCDFFile",
    "FileSummary",
    "AccessMode",
    "CreationMode",
    "FileFormat",
    "with_file_reading",
    "with_file_writing",
    "with_file_creating",
    "run_scoped",
    "classify",
    "NetCDFBackend",
    "get_backend",
    "register_backend",
    "available_backends",
    "NcSafeConfig",
    "get_config",
    "set_config",
    "configure_logging",
    "NcSafeError",
    "ConfigurationError",
    "BackendUnavailableError",
    "ErrorKind",
    "NetCDFError",
    "NetCDFFileNotFoundError",
    "FileAlreadyExistsError",
    "PermissionDeniedError",
    "InvalidFormatError",
    "InvalidDimensionError",
    "InvalidVariableError",
    "InvalidAttributeError",
    "FileNotOpenError",
    "NetCDFLibraryError",
]

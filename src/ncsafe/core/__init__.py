"""Core handle layer: modes, error taxonomy, classifier, configuration."""

from .classifier import classify, classify_status, raise_for_status
from .config import NcSafeConfig, get_config, set_config
from .exceptions import (
    BackendUnavailableError,
    ConfigurationError,
    ErrorKind,
    FileAlreadyExistsError,
    FileNotOpenError,
    InvalidAttributeError,
    InvalidDimensionError,
    InvalidFormatError,
    InvalidVariableError,
    NcSafeError,
    NetCDFError,
    NetCDFFileNotFoundError,
    NetCDFLibraryError,
    PermissionDeniedError,
)
from .logging_utils import LoggingMixin, configure_logging
from .modes import AccessMode, CreationMode, FileFormat

__all__ = [
    'AccessMode',
    'CreationMode',
    'FileFormat',
    'classify',
    'classify_status',
    'raise_for_status',
    'NcSafeConfig',
    'get_config',
    'set_config',
    'LoggingMixin',
    'configure_logging',
    'NcSafeError',
    'ConfigurationError',
    'BackendUnavailableError',
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

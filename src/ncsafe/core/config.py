# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Configuration for ncsafe.

``NcSafeConfig`` is a frozen pydantic model. Every field has an upper-case
``NCSAFE_*`` alias which is also its environment variable name.

Loading precedence (highest to lowest):
1. Programmatic overrides
2. Environment variables (NCSAFE_*)
3. Config file (YAML)
4. Field defaults
"""

import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .modes import FileFormat

ENV_PREFIX = 'NCSAFE_'

# Unknown keys, misspelt file keys included, fail validation
FROZEN_CONFIG = ConfigDict(extra='forbid', populate_by_name=True, frozen=True)


class NcSafeConfig(BaseModel):
    """Backend selection, creation defaults, native environment and logging."""
    model_config = FROZEN_CONFIG

    backend: str = Field(default='netcdf4', alias='NCSAFE_BACKEND')
    library_path: Optional[Path] = Field(default=None, alias='NCSAFE_LIBRARY_PATH')
    default_format: FileFormat = Field(default=FileFormat.NETCDF4, alias='NCSAFE_DEFAULT_FORMAT')
    disable_file_locking: bool = Field(default=False, alias='NCSAFE_DISABLE_FILE_LOCKING')
    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(
        default='WARNING', alias='NCSAFE_LOG_LEVEL'
    )

    @field_validator('backend', mode='before')
    @classmethod
    def normalize_backend(cls, v):
        """Backend names are case-insensitive."""
        return str(v).strip().lower()

    @field_validator('library_path', mode='before')
    @classmethod
    def expand_library_path(cls, v):
        if v is None or v == '':
            return None
        return Path(v).expanduser()

    @field_validator('default_format', mode='before')
    @classmethod
    def parse_default_format(cls, v):
        if isinstance(v, FileFormat):
            return v
        try:
            return FileFormat.from_name(v)
        except ConfigurationError as e:
            raise ValueError(str(e)) from e

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return str(v).strip().upper()

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'NcSafeConfig':
        """
        Build a configuration from ``NCSAFE_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls._validated(_load_env_overrides(environ))

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        overrides: Optional[Dict[str, Any]] = None,
        *,
        use_env: bool = True,
    ) -> 'NcSafeConfig':
        """
        Load configuration from a YAML file.

        Keys may be field names (``backend``) or aliases (``NCSAFE_BACKEND``).
        Any other key is rejected.

        Args:
            path: Path to configuration YAML file
            overrides: Programmatic overrides (highest priority)
            use_env: Whether to apply environment variables

        Raises:
            ConfigurationError: If the file is missing, unparsable, invalid or
                holds an unknown key
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r') as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse configuration file {path}: {e}") from e

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping, got {type(file_config).__name__}"
            )

        config_dict = {_normalize_key(k): v for k, v in file_config.items()}
        if use_env:
            config_dict.update(_load_env_overrides())
        if overrides:
            config_dict.update({_normalize_key(k): v for k, v in overrides.items()})

        return cls._validated(config_dict)

    @classmethod
    def _validated(cls, values: Dict[str, Any]) -> 'NcSafeConfig':
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid ncsafe configuration: {e}") from e


def _normalize_key(key: str) -> str:
    """Map a field name or alias onto its ``NCSAFE_*`` alias."""
    key = str(key).strip().upper()
    if not key.startswith(ENV_PREFIX):
        key = ENV_PREFIX + key
    return key


def _load_env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    aliases = {field.alias for field in NcSafeConfig.model_fields.values()}
    return {key: value for key, value in environ.items() if key in aliases}


# =============================================================================
# Active Configuration
# =============================================================================

_active_config: Optional[NcSafeConfig] = None


def get_config() -> NcSafeConfig:
    """Return the process-wide configuration, reading the environment on first use."""
    global _active_config
    if _active_config is None:
        _active_config = NcSafeConfig.from_env()
    return _active_config


def set_config(config: Optional[NcSafeConfig]) -> None:
    """Replace the process-wide configuration; None re-reads the environment on next use."""
    global _active_config
    _active_config = config


__all__ = ['NcSafeConfig', 'get_config', 'set_config']

# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Backend registry.

Backends are registered by name with a factory taking the active
configuration. Implementations are imported lazily, so a missing native
library only matters when that backend is requested::

    >>> backend = get_backend("netcdf4")
    >>> backend.name
    'netcdf4'

Instances are cached per name for the life of the process.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..core.config import NcSafeConfig, get_config
from ..core.environment import configure_library_environment
from ..core.exceptions import BackendUnavailableError, ConfigurationError
from .base import NetCDFBackend

logger = logging.getLogger(__name__)

BackendFactory = Callable[[NcSafeConfig], NetCDFBackend]

_FACTORIES: Dict[str, BackendFactory] = {}
_INSTANCES: Dict[str, NetCDFBackend] = {}


def register_backend(name: str, factory: BackendFactory, *, replace: bool = False) -> None:
    """
    Register a backend factory under ``name``.

    Args:
        name: Case-insensitive backend name
        factory: Callable building the backend from an NcSafeConfig
        replace: Allow overriding an existing registration

    Raises:
        ValueError: If the name is taken and ``replace`` is False
    """
    key = name.strip().lower()
    if key in _FACTORIES and not replace:
        raise ValueError(f"Backend '{key}' is already registered")
    _FACTORIES[key] = factory
    _INSTANCES.pop(key, None)


def available_backends() -> List[str]:
    """Names of all registered backends (available or not)."""
    return sorted(_FACTORIES)


def get_backend(name: Optional[str] = None, *, config: Optional[NcSafeConfig] = None) -> NetCDFBackend:
    """
    Return the cached backend instance for ``name``.

    Args:
        name: Backend name; defaults to the configured ``backend``
        config: Configuration to build with; defaults to the active one

    Raises:
        ConfigurationError: If no backend is registered under the name
        BackendUnavailableError: If the backend's native library cannot be loaded
    """
    config = config or get_config()
    key = (name or config.backend).strip().lower()

    backend = _INSTANCES.get(key)
    if backend is not None:
        return backend

    factory = _FACTORIES.get(key)
    if factory is None:
        raise ConfigurationError(
            f"Unknown netCDF backend '{key}'. Available: {', '.join(available_backends())}"
        )

    configure_library_environment(config)
    backend = factory(config)
    _INSTANCES[key] = backend
    logger.debug("Initialized netCDF backend %s", key)
    return backend


def reset_backends() -> None:
    """Drop cached backend instances; the next lookup builds fresh ones."""
    _INSTANCES.clear()


# =============================================================================
# Built-in Backends
# =============================================================================

def _netcdf4_factory(config: NcSafeConfig) -> NetCDFBackend:
    try:
        from .netcdf4_backend import NetCDF4Backend
    except ImportError as e:
        raise BackendUnavailableError(f"netCDF4-python is not importable: {e}") from e
    return NetCDF4Backend()


def _libnetcdf_factory(config: NcSafeConfig) -> NetCDFBackend:
    from .libnetcdf_backend import LibNetCDFBackend
    return LibNetCDFBackend(library_path=config.library_path)


register_backend('netcdf4', _netcdf4_factory)
register_backend('libnetcdf', _libnetcdf_factory)


__all__ = [
    'NetCDFBackend',
    'available_backends',
    'get_backend',
    'register_backend',
    'reset_backends',
]

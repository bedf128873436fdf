# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 ncsafe Team

"""
Native library environment for netCDF/HDF5.

The HDF5 library under netCDF-4 reads its file-locking settings when it is
loaded, so these variables must be in place before a backend first imports
netCDF4-python or loads libnetcdf. Locking on parallel filesystems
(Lustre/GPFS/BeeGFS) commonly fails, which is why it can be switched off.

This module only adjusts the environment; it never adds locking of its own.
"""

import logging
import os
from typing import Dict, MutableMapping, Optional

from .config import NcSafeConfig

logger = logging.getLogger(__name__)

FILE_LOCKING_ENV_VARS: Dict[str, str] = {
    'HDF5_USE_FILE_LOCKING': 'FALSE',
    'NETCDF_DISABLE_LOCKING': '1',
}
"""Environment variables disabling HDF5/netCDF file locking."""


def get_library_environment(config: NcSafeConfig) -> Dict[str, str]:
    """
    Get the environment variables the configuration asks for.

    Args:
        config: Active configuration

    Returns:
        Dictionary of environment variables to set (empty if none)
    """
    if config.disable_file_locking:
        return FILE_LOCKING_ENV_VARS.copy()
    return {}


def configure_library_environment(
    config: NcSafeConfig,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Apply the configured native-library environment.

    Locking variables are force-set rather than defaulted: a site module
    environment may already set them to a value that breaks on HPC storage.

    Args:
        config: Active configuration
        environ: Mapping to update instead of ``os.environ``

    Returns:
        The variables that were applied
    """
    environ = os.environ if environ is None else environ
    env_vars = get_library_environment(config)
    for key, value in env_vars.items():
        if environ.get(key) != value:
            logger.debug("Setting %s=%s for the native netCDF library", key, value)
        environ[key] = value
    return env_vars


__all__ = ['FILE_LOCKING_ENV_VARS', 'get_library_environment', 'configure_library_environment']

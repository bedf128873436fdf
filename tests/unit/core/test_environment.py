"""Tests for the native library environment setup."""

import os

import pytest

from ncsafe.core.config import NcSafeConfig
from ncsafe.core.environment import (
    FILE_LOCKING_ENV_VARS,
    configure_library_environment,
    get_library_environment,
)

pytestmark = [pytest.mark.unit]


class TestLibraryEnvironment:

    def test_nothing_by_default(self):
        assert get_library_environment(NcSafeConfig()) == {}

    def test_locking_variables_when_disabled(self):
        env = get_library_environment(NcSafeConfig(disable_file_locking=True))
        assert env == {'HDF5_USE_FILE_LOCKING': 'FALSE', 'NETCDF_DISABLE_LOCKING': '1'}

    def test_returned_mapping_is_a_copy(self):
        env = get_library_environment(NcSafeConfig(disable_file_locking=True))
        env['HDF5_USE_FILE_LOCKING'] = 'TRUE'
        assert FILE_LOCKING_ENV_VARS['HDF5_USE_FILE_LOCKING'] == 'FALSE'


class TestConfigureLibraryEnvironment:

    def test_force_sets_existing_values(self):
        environ = {'HDF5_USE_FILE_LOCKING': 'TRUE', 'PATH': '/usr/bin'}
        applied = configure_library_environment(NcSafeConfig(disable_file_locking=True), environ)

        assert applied == FILE_LOCKING_ENV_VARS
        assert environ['HDF5_USE_FILE_LOCKING'] == 'FALSE'
        assert environ['NETCDF_DISABLE_LOCKING'] == '1'
        assert environ['PATH'] == '/usr/bin'

    def test_leaves_environment_alone_by_default(self):
        environ = {'HDF5_USE_FILE_LOCKING': 'TRUE'}
        assert configure_library_environment(NcSafeConfig(), environ) == {}
        assert environ == {'HDF5_USE_FILE_LOCKING': 'TRUE'}

    def test_updates_process_environment(self, monkeypatch):
        monkeypatch.setenv('HDF5_USE_FILE_LOCKING', 'TRUE')
        monkeypatch.delenv('NETCDF_DISABLE_LOCKING', raising=False)

        configure_library_environment(NcSafeConfig(disable_file_locking=True))
        assert os.environ['HDF5_USE_FILE_LOCKING'] == 'FALSE'

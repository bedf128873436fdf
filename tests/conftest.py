"""
Root conftest.py - Shared setup for all ncsafe tests.

This file sets up the Python path so fixture modules under tests/fixtures/
can be loaded via pytest_plugins.
"""

from pathlib import Path
import sys

import pytest

# Add directories to path BEFORE importing local modules
NCSAFE_SRC_DIR = Path(__file__).parent.parent.resolve() / "src"
if str(NCSAFE_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(NCSAFE_SRC_DIR))
TESTS_DIR = Path(__file__).parent.resolve()
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Load additional fixtures from fixture modules
pytest_plugins = [
    "fixtures.backend_fixtures",
]


@pytest.fixture(scope="session")
def tests_dir():
    """Path to tests directory."""
    return TESTS_DIR


@pytest.fixture()
def nc_path(tmp_path):
    """Path for a netCDF file that does not exist yet."""
    return tmp_path / "sample.nc"

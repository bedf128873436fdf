"""Tests for access, creation and format modes."""

import pytest

from ncsafe.core.constants import (
    NC_64BIT_DATA,
    NC_64BIT_OFFSET,
    NC_CLASSIC_MODEL,
    NC_NETCDF4,
    NC_NOCLOBBER,
    NC_WRITE,
)
from ncsafe.core.exceptions import ConfigurationError
from ncsafe.core.modes import (
    AccessMode,
    CreationMode,
    FileFormat,
    require_access_mode,
    require_creation_mode,
    require_file_format,
)

pytestmark = [pytest.mark.unit]


# =============================================================================
# Access and creation modes
# =============================================================================

class TestModeFlags:
    """Modes map onto the native flag values."""

    def test_read_is_nowrite(self):
        assert AccessMode.READ.flags == 0

    def test_write_sets_write_bit(self):
        assert AccessMode.WRITE.flags == NC_WRITE

    def test_overwrite_is_clobber(self):
        assert CreationMode.OVERWRITE.flags == 0

    def test_exclusive_sets_noclobber(self):
        assert CreationMode.EXCLUSIVE.flags == NC_NOCLOBBER

    def test_modes_have_exactly_two_members(self):
        assert [m.name for m in AccessMode] == ['READ', 'WRITE']
        assert [m.name for m in CreationMode] == ['OVERWRITE', 'EXCLUSIVE']


class TestModesAreDistinctTypes:
    """An access mode is never accepted where a creation mode is expected."""

    def test_access_and_creation_modes_never_equal(self):
        # READ and OVERWRITE share the flag value 0
        assert AccessMode.READ != CreationMode.OVERWRITE

    def test_modes_are_not_integers(self):
        assert not isinstance(AccessMode.READ, int)
        assert not isinstance(CreationMode.EXCLUSIVE, int)

    @pytest.mark.parametrize("value", [CreationMode.OVERWRITE, 0, "r", None])
    def test_require_access_mode_rejects_other_types(self, value):
        with pytest.raises(TypeError, match="AccessMode"):
            require_access_mode(value)

    @pytest.mark.parametrize("value", [AccessMode.WRITE, 4, "w", None])
    def test_require_creation_mode_rejects_other_types(self, value):
        with pytest.raises(TypeError, match="CreationMode"):
            require_creation_mode(value)

    def test_require_helpers_return_valid_modes(self):
        assert require_access_mode(AccessMode.WRITE) is AccessMode.WRITE
        assert require_creation_mode(CreationMode.EXCLUSIVE) is CreationMode.EXCLUSIVE
        assert require_file_format(FileFormat.CLASSIC) is FileFormat.CLASSIC

    def test_require_file_format_rejects_names(self):
        with pytest.raises(TypeError):
            require_file_format("NETCDF4")


# =============================================================================
# File formats
# =============================================================================

class TestFileFormat:
    """Format codes, create flags and name resolution."""

    def test_values_are_inq_format_codes(self):
        assert FileFormat.CLASSIC.value == 1
        assert FileFormat.CLASSIC_64BIT_OFFSET.value == 2
        assert FileFormat.NETCDF4.value == 3
        assert FileFormat.NETCDF4_CLASSIC.value == 4
        assert FileFormat.CLASSIC_64BIT_DATA.value == 5

    @pytest.mark.parametrize("file_format,flags", [
        (FileFormat.CLASSIC, 0),
        (FileFormat.CLASSIC_64BIT_OFFSET, NC_64BIT_OFFSET),
        (FileFormat.CLASSIC_64BIT_DATA, NC_64BIT_DATA),
        (FileFormat.NETCDF4, NC_NETCDF4),
        (FileFormat.NETCDF4_CLASSIC, NC_NETCDF4 | NC_CLASSIC_MODEL),
    ])
    def test_create_flags(self, file_format, flags):
        assert file_format.create_flags == flags

    @pytest.mark.parametrize("file_format", list(FileFormat))
    def test_create_flags_decode_with_creation_bits(self, file_format):
        flags = CreationMode.EXCLUSIVE.flags | file_format.create_flags
        assert FileFormat.from_create_flags(flags) is file_format

    @pytest.mark.parametrize("name,expected", [
        ("NETCDF4", FileFormat.NETCDF4),
        ("netcdf4_classic", FileFormat.NETCDF4_CLASSIC),
        ("NETCDF3_CLASSIC", FileFormat.CLASSIC),
        ("classic_64bit_offset", FileFormat.CLASSIC_64BIT_OFFSET),
        ("NETCDF3_64BIT", FileFormat.CLASSIC_64BIT_OFFSET),
        (" NETCDF3_64BIT_DATA ", FileFormat.CLASSIC_64BIT_DATA),
    ])
    def test_from_name(self, name, expected):
        assert FileFormat.from_name(name) is expected

    def test_from_name_unknown_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="HDF4"):
            FileFormat.from_name("HDF4")

    def test_data_model_round_trips_through_from_name(self):
        for file_format in FileFormat:
            assert FileFormat.from_name(file_format.data_model) is file_format

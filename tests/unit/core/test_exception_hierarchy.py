"""Regression tests for the ncsafe exception hierarchy.

Validates structural correctness of the hierarchy and the value semantics
and messages of the netCDF error taxonomy.
"""

import pytest

from ncsafe.core.exceptions import (
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

pytestmark = [pytest.mark.unit]

TAXONOMY = [
    NetCDFFileNotFoundError,
    FileAlreadyExistsError,
    PermissionDeniedError,
    InvalidFormatError,
    InvalidDimensionError,
    InvalidVariableError,
    InvalidAttributeError,
    FileNotOpenError,
    NetCDFLibraryError,
]


class TestHierarchyRoots:
    """All custom exceptions must be rooted under NcSafeError."""

    @pytest.mark.parametrize("exc_cls", TAXONOMY + [ConfigurationError, BackendUnavailableError])
    def test_all_exceptions_subclass_ncsafe_error(self, exc_cls):
        assert issubclass(exc_cls, NcSafeError), (
            f"{exc_cls.__name__} is not a subclass of NcSafeError"
        )

    @pytest.mark.parametrize("exc_cls", TAXONOMY)
    def test_taxonomy_subclasses_netcdf_error(self, exc_cls):
        assert issubclass(exc_cls, NetCDFError)

    def test_backend_unavailable_under_configuration(self):
        assert issubclass(BackendUnavailableError, ConfigurationError)

    def test_configuration_error_outside_taxonomy(self):
        assert not issubclass(ConfigurationError, NetCDFError)

    def test_ncsafe_error_subclasses_exception(self):
        assert issubclass(NcSafeError, Exception)


class TestKinds:
    """Each taxonomy member carries a distinct kind."""

    def test_kinds_are_unique(self):
        kinds = [exc_cls.kind for exc_cls in TAXONOMY]
        assert len(set(kinds)) == len(kinds)

    def test_every_kind_is_covered(self):
        assert {exc_cls.kind for exc_cls in TAXONOMY} == set(ErrorKind)


class TestValueSemantics:
    """Errors compare by class and payload."""

    def test_equal_payloads_compare_equal(self):
        assert NetCDFFileNotFoundError("/a.nc") == NetCDFFileNotFoundError("/a.nc")
        assert NetCDFLibraryError(-33, "x") == NetCDFLibraryError(-33, "x")
        assert FileNotOpenError() == FileNotOpenError()

    def test_different_payloads_differ(self):
        assert NetCDFFileNotFoundError("/a.nc") != NetCDFFileNotFoundError("/b.nc")
        assert NetCDFLibraryError(-33, "x") != NetCDFLibraryError(-34, "x")

    def test_same_payload_different_kind_differs(self):
        assert NetCDFFileNotFoundError("/a.nc") != PermissionDeniedError("/a.nc")

    def test_hashable_by_value(self):
        errors = {InvalidDimensionError(3), InvalidDimensionError(3), InvalidVariableError(3)}
        assert len(errors) == 2

    def test_payload_attributes(self):
        assert NetCDFFileNotFoundError("/a.nc").path == "/a.nc"
        assert InvalidDimensionError(7).dim_id == 7
        assert InvalidVariableError(2).var_id == 2
        assert InvalidAttributeError("units").name == "units"
        error = NetCDFLibraryError(-51, "NetCDF: Unknown file format")
        assert (error.code, error.message) == (-51, "NetCDF: Unknown file format")
        assert error.payload == (-51, "NetCDF: Unknown file format")

    def test_repr_shows_payload(self):
        assert repr(NetCDFFileNotFoundError("/a.nc")) == "NetCDFFileNotFoundError('/a.nc')"


class TestMessages:
    """Human-readable descriptions name the kind and payload."""

    @pytest.mark.parametrize("error,expected", [
        (NetCDFFileNotFoundError("/d/x.nc"), "NetCDF file not found: /d/x.nc"),
        (FileAlreadyExistsError("/d/x.nc"), "NetCDF file already exists: /d/x.nc"),
        (PermissionDeniedError("/d/x.nc"), "Permission denied: /d/x.nc"),
        (InvalidFormatError("/d/x.nc"), "Invalid NetCDF format: /d/x.nc"),
        (InvalidDimensionError(4), "Invalid dimension ID: 4"),
        (InvalidVariableError(9), "Invalid variable ID: 9"),
        (InvalidAttributeError("units"), "Invalid attribute: units"),
        (FileNotOpenError(), "NetCDF file is not open"),
        (NetCDFLibraryError(-33, "NetCDF: Not a valid ID"), "NetCDF error (-33): NetCDF: Not a valid ID"),
    ])
    def test_str(self, error, expected):
        assert str(error) == expected

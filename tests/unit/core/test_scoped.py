"""Tests for scoped acquisition and its error-precedence rule."""

import logging
from unittest import mock

import pytest

from ncsafe.core.constants import NC_EHDFERR, NC_MESSAGES, NC_WRITE, SYSTEM_EACCES
from ncsafe.core.exceptions import (
    FileAlreadyExistsError,
    NetCDFFileNotFoundError,
    NetCDFLibraryError,
    PermissionDeniedError,
)
from ncsafe.core.handle import NetCDFFile
from ncsafe.core.modes import AccessMode, CreationMode, FileFormat
from ncsafe.core.scoped import run_scoped, with_file_creating, with_file_reading, with_file_writing

pytestmark = [pytest.mark.unit]

PATH = "/data/scoped.nc"


class BodyError(Exception):
    pass


# =============================================================================
# Success path
# =============================================================================

class TestScopedSuccess:

    def test_creating_returns_body_value(self, fake_backend):
        counts = with_file_creating(
            PATH, lambda f: f.summary().as_tuple(), backend=fake_backend
        )
        assert counts == (0, 0, 0)
        assert fake_backend.open_ids == {}

    def test_reading_returns_body_value(self, fake_backend):
        fake_backend.add_file(PATH, variables=4)
        assert with_file_reading(PATH, lambda f: f.variable_count, backend=fake_backend) == 4

    def test_writing_opens_with_write_mode(self, fake_backend):
        fake_backend.add_file(PATH)

        def body(ncfile):
            (_, mode), = fake_backend.open_ids.values()
            return ncfile.mode, bool(mode & NC_WRITE)

        assert with_file_writing(PATH, body, backend=fake_backend) == (AccessMode.WRITE, True)

    def test_body_receives_open_handle_and_it_is_closed_after(self, fake_backend):
        seen = []
        with_file_creating(PATH, seen.append, backend=fake_backend)

        ncfile, = seen
        assert isinstance(ncfile, NetCDFFile)
        assert not ncfile.is_open
        assert fake_backend.count('close') == 1

    def test_creating_passes_mode_and_format(self, fake_backend):
        fake_backend.add_file(PATH)
        with pytest.raises(FileAlreadyExistsError):
            with_file_creating(PATH, lambda f: None, CreationMode.EXCLUSIVE, backend=fake_backend)

        result = with_file_creating(
            "/data/other.nc", lambda f: f.file_format, file_format=FileFormat.CLASSIC, backend=fake_backend
        )
        assert result is FileFormat.CLASSIC

    def test_none_result_is_returned(self, fake_backend):
        assert with_file_creating(PATH, lambda f: None, backend=fake_backend) is None


# =============================================================================
# Error precedence
# =============================================================================

class TestScopedPrecedence:

    def test_acquisition_failure_never_calls_body(self, fake_backend):
        body = mock.Mock()
        with pytest.raises(NetCDFFileNotFoundError):
            with_file_reading(PATH, body, backend=fake_backend)
        body.assert_not_called()
        assert fake_backend.count('close') == 0

    def test_acquisition_permission_failure_never_calls_body(self, fake_backend):
        fake_backend.add_file(PATH)
        fake_backend.fail('open', SYSTEM_EACCES)
        body = mock.Mock()
        with pytest.raises(PermissionDeniedError):
            with_file_writing(PATH, body, backend=fake_backend)
        body.assert_not_called()

    def test_body_error_propagates_and_file_is_closed(self, fake_backend):
        def body(ncfile):
            raise BodyError("boom")

        with pytest.raises(BodyError, match="boom"):
            with_file_creating(PATH, body, backend=fake_backend)
        assert fake_backend.open_ids == {}

    def test_body_error_wins_over_close_error(self, fake_backend, caplog):
        def body(ncfile):
            fake_backend.fail('close', NC_EHDFERR)
            raise BodyError("boom")

        with caplog.at_level(logging.DEBUG, logger="ncsafe"):
            with pytest.raises(BodyError):
                with_file_creating(PATH, body, backend=fake_backend)

        assert fake_backend.count('close') == 1
        assert "Discarded close failure" in caplog.text

    def test_close_error_propagates_after_successful_body(self, fake_backend):
        def body(ncfile):
            fake_backend.fail('close', NC_EHDFERR)
            return 42

        with pytest.raises(NetCDFLibraryError) as exc_info:
            with_file_creating(PATH, body, backend=fake_backend)
        assert exc_info.value == NetCDFLibraryError(NC_EHDFERR, NC_MESSAGES[NC_EHDFERR])

    def test_body_netcdf_error_propagates_unchanged(self, fake_backend):
        fake_backend.add_file(PATH)
        fake_backend.fail('inquire_dimension_count', NC_EHDFERR)

        with pytest.raises(NetCDFLibraryError):
            with_file_reading(PATH, lambda f: f.dimension_count, backend=fake_backend)
        assert fake_backend.open_ids == {}

    def test_keyboard_interrupt_in_body_still_closes(self, fake_backend):
        def body(ncfile):
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            with_file_creating(PATH, body, backend=fake_backend)
        assert fake_backend.count('close') == 1

    def test_body_closing_handle_itself(self, fake_backend):
        def body(ncfile):
            ncfile.close()
            return "done"

        assert with_file_creating(PATH, body, backend=fake_backend) == "done"
        assert fake_backend.count('close') == 1


class TestRunScoped:

    def test_takes_ownership_of_handle(self, fake_backend):
        ncfile = NetCDFFile.create(PATH, backend=fake_backend)
        assert run_scoped(ncfile, lambda f: f.is_open) is True
        assert not ncfile.is_open

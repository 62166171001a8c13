"""Tests for custom exceptions."""

from src.mochawesome_merger.exceptions import (
    InputValidationError,
    ReportFetchError,
    ReportFormatError,
    ReportHTTPError,
    ReportMergeError,
    ReportTimeoutError,
    ValidationFailure,
)


class TestValidationFailure:
    """Tests for the validation failure enumeration."""

    def test_messages(self):
        assert (
            ValidationFailure.MISSING_SOURCES.message
            == "There are no specified reports to be merged."
        )
        assert (
            ValidationFailure.SOURCES_NOT_A_SEQUENCE.message
            == 'The "filenames" parameter should be of type [String].'
        )
        assert (
            ValidationFailure.EMPTY_SOURCE_LIST.message
            == "There should be at least one specified report file name."
        )
        assert (
            ValidationFailure.INVALID_SOURCE_ELEMENT_TYPE.message
            == "File names should be of type string."
        )
        assert (
            ValidationFailure.MISSING_DESTINATION.message
            == "Output file name should be specified."
        )
        assert (
            ValidationFailure.INVALID_DESTINATION_TYPE.message
            == "Output file name should be of type string."
        )

    def test_all_failures(self):
        assert len(ValidationFailure) == 6


class TestInputValidationError:
    """Tests for InputValidationError."""

    def test_inherits_from_base(self):
        assert issubclass(InputValidationError, ReportMergeError)

    def test_attributes(self):
        err = InputValidationError(ValidationFailure.EMPTY_SOURCE_LIST)
        assert err.failure is ValidationFailure.EMPTY_SOURCE_LIST
        assert str(err) == ValidationFailure.EMPTY_SOURCE_LIST.message


class TestReportFormatError:
    """Tests for ReportFormatError."""

    def test_message_without_source(self):
        err = ReportFormatError("stats.passes", "expected a number")
        assert err.field == "stats.passes"
        assert str(err) == "Invalid report field 'stats.passes': expected a number"

    def test_message_with_source(self):
        err = ReportFormatError("stats", "missing report statistics")
        err.source = "shard-1.json"
        assert str(err).startswith("shard-1.json: ")


class TestRemoteErrors:
    """Tests for errors raised while fetching remote reports."""

    def test_fetch_error(self):
        orig = ConnectionError("refused")
        err = ReportFetchError("https://ci.example.com/r.json", orig)
        assert err.original_error is orig
        assert "ci.example.com" in str(err)

    def test_timeout_error(self):
        err = ReportTimeoutError("https://ci.example.com/r.json", 30)
        assert err.timeout == 30
        assert "30 seconds" in str(err)

    def test_http_error_body_truncated(self):
        err = ReportHTTPError(500, "https://ci.example.com/r.json", "x" * 500)
        assert len(err.response_body) == 200

    def test_http_error_body_not_in_message(self):
        err = ReportHTTPError(403, "https://ci.example.com/r.json", "secret-token-here")
        assert "secret-token-here" not in str(err)
        assert "403" in str(err)

    def test_empty_response_body(self):
        err = ReportHTTPError(404, "https://ci.example.com/r.json", "")
        assert err.response_body == ""

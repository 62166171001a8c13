"""
Custom exceptions for the mochawesome report merger.
"""

from enum import Enum
from typing import Optional


class ReportMergeError(Exception):
    """Base exception for report merger errors."""

    pass


class ValidationFailure(Enum):
    """Ways the merge inputs can be rejected, in the order they are checked."""

    MISSING_SOURCES = "There are no specified reports to be merged."
    SOURCES_NOT_A_SEQUENCE = 'The "filenames" parameter should be of type [String].'
    EMPTY_SOURCE_LIST = "There should be at least one specified report file name."
    INVALID_SOURCE_ELEMENT_TYPE = "File names should be of type string."
    MISSING_DESTINATION = "Output file name should be specified."
    INVALID_DESTINATION_TYPE = "Output file name should be of type string."

    @property
    def message(self) -> str:
        return self.value


class InputValidationError(ReportMergeError):
    """Raised when the list of sources or the destination is malformed."""

    def __init__(self, failure: ValidationFailure):
        self.failure = failure
        super().__init__(failure.message)


class ReportFormatError(ReportMergeError):
    """Raised when a source document does not have the mochawesome shape."""

    def __init__(self, field: str, message: str, source: Optional[str] = None):
        self.field = field
        self.message = message
        self.source = source
        super().__init__(f"Invalid report field '{field}': {message}")

    def __str__(self) -> str:
        base = f"Invalid report field '{self.field}': {self.message}"
        return f"{self.source}: {base}" if self.source else base


class ReportFetchError(ReportMergeError):
    """Raised when a remote report cannot be retrieved."""

    def __init__(self, url: str, original_error: Exception):
        self.url = url
        self.original_error = original_error
        super().__init__(f"Failed to fetch report from {url}: {original_error}")


class ReportTimeoutError(ReportMergeError):
    """Raised when fetching a remote report times out."""

    def __init__(self, url: str, timeout: int):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Request to {url} timed out after {timeout} seconds")


class ReportHTTPError(ReportMergeError):
    """Raised when a report server answers with an HTTP error."""

    def __init__(self, status_code: int, url: str, response_body: str):
        self.status_code = status_code
        self.url = url
        # Truncated and kept out of the message
        self.response_body = response_body[:200] if response_body else ""
        super().__init__(f"Report server returned HTTP {status_code} for {url}")

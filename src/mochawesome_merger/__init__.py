"""
Merge mochawesome reports from parallel test runs into one report.
"""

from .exceptions import InputValidationError, ValidationFailure
from .merger import merge_report_documents, merge_reports

__version__ = "1.0.0"

__all__ = [
    "InputValidationError",
    "ValidationFailure",
    "merge_report_documents",
    "merge_reports",
]

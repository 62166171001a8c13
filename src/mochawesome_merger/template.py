"""
Fresh destination reports and identifiers.
"""

import copy
import uuid

from .models import Report

_DEFAULT_REPORT = {
    "stats": {
        "suites": 0,
        "tests": 0,
        "passes": 0,
        "pending": 0,
        "failures": 0,
        "start": None,
        "end": None,
        "duration": 0,
        "testsRegistered": 0,
        "passPercent": 0,
        "pendingPercent": 0,
        "skipped": 0,
        "passPercentClass": "danger",
        "pendingPercentClass": "danger",
    },
    "suites": {
        "title": "",
        "suites": [],
        "tests": [],
        "pending": [],
        "root": True,
        "_timeout": 2000,
        "uuid": "",
        "fullFile": "",
        "file": "",
        "duration": 0,
    },
}


def default_report() -> Report:
    """Return a new zero-valued report to merge into."""
    return Report.from_dict(copy.deepcopy(_DEFAULT_REPORT))


def new_uuid() -> str:
    """Return a new time-based identifier for a merged suite forest."""
    return str(uuid.uuid1())

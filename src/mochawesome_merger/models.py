"""
Data models for mochawesome reports.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import ReportFormatError


class TestState(Enum):
    """State of a single test execution."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    SKIPPED = "skipped"


class PercentClass(Enum):
    """Classification label for a derived percentage."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


def parse_timestamp(value: Any, path: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are read as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ReportFormatError(path, f"invalid timestamp: {value!r}")
    else:
        raise ReportFormatError(path, f"expected timestamp string, got {type(value).__name__}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format a timestamp the way JavaScript's Date.toJSON does."""
    if value is None:
        return None
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _number(data: Dict[str, Any], key: str, path: str, default: float = 0) -> float:
    value = data.get(key, default)
    # bool is an int subclass but never a valid counter
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ReportFormatError(f"{path}.{key}", f"expected a number, got {value!r}")
    return value


def _list(data: Dict[str, Any], key: str, path: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ReportFormatError(f"{path}.{key}", "expected a list")
    return value


def _mapping(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ReportFormatError(path, "expected an object")
    return value


def _json_percent(value: float) -> Optional[float]:
    return None if math.isnan(value) else value


def _extra(data: Dict[str, Any], known: tuple) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


@dataclass
class Test:
    """A single test execution record."""

    __test__ = False

    title: str = ""
    state: Optional[TestState] = None
    duration: float = 0
    timed_out: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = ("title", "state", "duration", "timedOut")

    @classmethod
    def from_dict(cls, data: Any, path: str = "test") -> "Test":
        data = _mapping(data, path)
        state = data.get("state")
        if state is not None:
            try:
                state = TestState(state)
            except ValueError:
                raise ReportFormatError(f"{path}.state", f"unknown test state: {state!r}")
        return cls(
            title=data.get("title") or "",
            state=state,
            duration=_number(data, "duration", path) if data.get("duration") is not None else 0,
            timed_out=bool(data.get("timedOut", False)),
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "duration": self.duration,
            "state": self.state.value if self.state else None,
            "timedOut": self.timed_out,
        }
        data.update(self.extra)
        return data


@dataclass
class Suite:
    """
    A group of tests.

    Nesting follows the mochawesome convention of at most one child suite,
    held in ``suite``.
    """

    uuid: Optional[str] = None
    title: str = ""
    file: Optional[str] = None
    full_file: Optional[str] = None
    duration: float = 0
    tests: List[Test] = field(default_factory=list)
    suite: Optional["Suite"] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = ("uuid", "title", "file", "fullFile", "duration", "tests", "suite")

    @classmethod
    def from_dict(cls, data: Any, path: str = "suite") -> "Suite":
        data = _mapping(data, path)
        tests = [
            Test.from_dict(t, f"{path}.tests[{i}]")
            for i, t in enumerate(_list(data, "tests", path))
        ]
        child = data.get("suite")
        return cls(
            uuid=data.get("uuid"),
            title=data.get("title") or "",
            file=data.get("file"),
            full_file=data.get("fullFile"),
            duration=_number(data, "duration", path) if data.get("duration") is not None else 0,
            tests=tests,
            # {} and [] mean no child
            suite=cls.from_dict(child, f"{path}.suite") if child else None,
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"title": self.title}
        if self.uuid is not None:
            data["uuid"] = self.uuid
        if self.file is not None:
            data["file"] = self.file
        if self.full_file is not None:
            data["fullFile"] = self.full_file
        data["duration"] = self.duration
        data["tests"] = [t.to_dict() for t in self.tests]
        if self.suite is not None:
            data["suite"] = self.suite.to_dict()
        data.update(self.extra)
        return data

    def chain(self) -> List["Suite"]:
        """Return this suite followed by every suite nested below it."""
        suites = []
        current: Optional[Suite] = self
        while current is not None:
            suites.append(current)
            current = current.suite
        return suites


@dataclass
class SuiteForest:
    """All top-level suites of one report."""

    uuid: Optional[str] = None
    suites: List[Suite] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = ("uuid", "suites")

    @classmethod
    def from_dict(cls, data: Any, path: str = "suites") -> "SuiteForest":
        data = _mapping(data, path)
        return cls(
            uuid=data.get("uuid"),
            suites=[
                Suite.from_dict(s, f"{path}.suites[{i}]")
                for i, s in enumerate(_list(data, "suites", path))
            ],
            extra=_extra(data, cls._KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "uuid": self.uuid,
            "suites": [s.to_dict() for s in self.suites],
        }
        data.update(self.extra)
        return data


@dataclass
class Statistics:
    """Aggregate counters and derived percentages for a report."""

    suites: int = 0
    tests: int = 0
    passes: int = 0
    pending: int = 0
    failures: int = 0
    skipped: int = 0
    duration: float = 0
    tests_registered: int = 0
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    pass_percent: float = 0.0
    pending_percent: float = 0.0
    pass_percent_class: PercentClass = PercentClass.DANGER
    pending_percent_class: PercentClass = PercentClass.DANGER
    extra: Dict[str, Any] = field(default_factory=dict)

    # (attribute, wire key) pairs summed across source reports
    SUMMED = (
        ("suites", "suites"),
        ("tests", "tests"),
        ("passes", "passes"),
        ("pending", "pending"),
        ("failures", "failures"),
        ("duration", "duration"),
        ("tests_registered", "testsRegistered"),
        ("skipped", "skipped"),
    )
    _KEYS = tuple(key for _, key in SUMMED) + (
        "start",
        "end",
        "passPercent",
        "pendingPercent",
        "passPercentClass",
        "pendingPercentClass",
    )

    @classmethod
    def from_dict(cls, data: Any, path: str = "stats") -> "Statistics":
        data = _mapping(data, path)
        values: Dict[str, Any] = {attr: _number(data, key, path) for attr, key in cls.SUMMED}
        for attr, key in (("pass_percent", "passPercent"), ("pending_percent", "pendingPercent")):
            raw = data.get(key)
            values[attr] = float("nan") if raw is None else _number(data, key, path)
        for attr, key in (
            ("pass_percent_class", "passPercentClass"),
            ("pending_percent_class", "pendingPercentClass"),
        ):
            try:
                values[attr] = PercentClass(data.get(key, PercentClass.DANGER.value))
            except ValueError:
                raise ReportFormatError(f"{path}.{key}", f"unknown class: {data.get(key)!r}")
        return cls(
            start=parse_timestamp(data.get("start"), f"{path}.start"),
            end=parse_timestamp(data.get("end"), f"{path}.end"),
            extra=_extra(data, cls._KEYS),
            **values,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {key: getattr(self, attr) for attr, key in self.SUMMED}
        data.update(
            {
                "start": format_timestamp(self.start),
                "end": format_timestamp(self.end),
                "passPercent": _json_percent(self.pass_percent),
                "pendingPercent": _json_percent(self.pending_percent),
                "passPercentClass": self.pass_percent_class.value,
                "pendingPercentClass": self.pending_percent_class.value,
            }
        )
        data.update(self.extra)
        return data


@dataclass
class Report:
    """A mochawesome report document."""

    stats: Statistics = field(default_factory=Statistics)
    suites: Optional[SuiteForest] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Report":
        """
        Build a Report from a parsed JSON document.

        Raises:
            ReportFormatError: If the document does not have the mochawesome shape
        """
        data = _mapping(data, "report")
        if "stats" not in data:
            raise ReportFormatError("stats", "missing report statistics")
        forest = data.get("suites")
        return cls(
            stats=Statistics.from_dict(data["stats"]),
            suites=SuiteForest.from_dict(forest) if forest is not None else None,
            extra=_extra(data, ("stats", "suites")),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "stats": self.stats.to_dict(),
            "suites": self.suites.to_dict() if self.suites is not None else None,
        }
        data.update(self.extra)
        return data

    def all_tests(self) -> List[Test]:
        """Return every test in the report, walking each suite chain."""
        if self.suites is None:
            return []
        return [t for top in self.suites.suites for s in top.chain() for t in s.tests]

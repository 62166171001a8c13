"""
Console summary of a merged report.
"""

import math
import os
import sys

from ..models import PercentClass, Report
from .base import ReportGenerator


def _supports_color() -> bool:
    """Return True if the output stream likely supports ANSI colours."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
        return False
    return True


def _format_percent(percent: float) -> str:
    return "n/a" if math.isnan(percent) else f"{percent:.2f}%"


class ConsoleReporter(ReportGenerator):
    """Generate a coloured summary of merged statistics."""

    def __init__(self) -> None:
        color = _supports_color()
        self.GREEN = "\033[92m" if color else ""
        self.RED = "\033[91m" if color else ""
        self.YELLOW = "\033[93m" if color else ""
        self.RESET = "\033[0m" if color else ""
        self.BOLD = "\033[1m" if color else ""

    def _color(self, percent_class: PercentClass) -> str:
        if percent_class == PercentClass.SUCCESS:
            return self.GREEN
        elif percent_class == PercentClass.WARNING:
            return self.YELLOW
        return self.RED

    def generate(self, report: Report) -> str:
        """Generate console summary."""
        stats = report.stats
        top_level = len(report.suites.suites) if report.suites is not None else 0
        lines = []

        lines.append(f"\n{self.BOLD}Merged Report{self.RESET}")
        lines.append("=" * 60)

        lines.append(f"\n{self.BOLD}Summary:{self.RESET}")
        lines.append(f"  Suites: {stats.suites} ({top_level} top-level)")
        lines.append(f"  Tests: {stats.tests} ({stats.tests_registered} registered)")
        lines.append(f"  {self.GREEN}Passed: {stats.passes}{self.RESET}")
        lines.append(f"  {self.RED}Failed: {stats.failures}{self.RESET}")
        lines.append(f"  {self.YELLOW}Pending: {stats.pending}{self.RESET}")
        lines.append(f"  {self.YELLOW}Skipped: {stats.skipped}{self.RESET}")
        lines.append(f"  Duration: {stats.duration / 1000:.2f}s")

        pass_color = self._color(stats.pass_percent_class)
        pending_color = self._color(stats.pending_percent_class)
        lines.append(
            f"  Pass rate: {pass_color}{_format_percent(stats.pass_percent)} "
            f"[{stats.pass_percent_class.value}]{self.RESET}"
        )
        lines.append(
            f"  Pending rate: {pending_color}{_format_percent(stats.pending_percent)} "
            f"[{stats.pending_percent_class.value}]{self.RESET}"
        )

        if stats.failures == 0:
            lines.append(f"\n{self.GREEN}{self.BOLD}✓ NO FAILURES{self.RESET}")
        else:
            lines.append(f"\n{self.RED}{self.BOLD}✗ {stats.failures} FAILED{self.RESET}")

        lines.append("")
        return "\n".join(lines)

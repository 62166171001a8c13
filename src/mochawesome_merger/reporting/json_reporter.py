"""
Mochawesome JSON output.
"""

import json
from typing import Optional

from ..models import Report
from .base import ReportGenerator


class JSONReporter(ReportGenerator):
    """Serialize a report in the mochawesome JSON format."""

    def __init__(self, indent: Optional[int] = None) -> None:
        self.indent = indent

    def generate(self, report: Report) -> str:
        """Generate JSON report."""
        return json.dumps(report.to_dict(), indent=self.indent)

"""
Base class for report generators.
"""

from abc import ABC, abstractmethod

from ..models import Report


class ReportGenerator(ABC):
    """Base class for rendering merged reports."""

    @abstractmethod
    def generate(self, report: Report) -> str:
        """
        Render a report.

        Args:
            report: Merged mochawesome report

        Returns:
            Report as a string
        """
        pass

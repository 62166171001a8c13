"""
JUnit XML output for merged reports.
"""

import xml.etree.ElementTree as ET

from ..models import Report, Suite, TestState
from .base import ReportGenerator


def _seconds(duration_ms: float) -> str:
    return f"{duration_ms / 1000:.3f}"


class JUnitReporter(ReportGenerator):
    """Generate JUnit XML so CI systems without mochawesome support can read the merge."""

    def generate(self, report: Report) -> str:
        """Generate JUnit XML report."""
        stats = report.stats
        testsuites = ET.Element("testsuites")
        testsuites.set("name", "Mochawesome Tests")
        testsuites.set("tests", str(stats.tests))
        testsuites.set("failures", str(stats.failures))
        testsuites.set("skipped", str(stats.pending + stats.skipped))
        testsuites.set("time", _seconds(stats.duration))

        if report.suites is not None:
            for top in report.suites.suites:
                for suite in top.chain():
                    self._add_suite(testsuites, suite)

        ET.indent(testsuites, space="  ")
        return ET.tostring(testsuites, encoding="unicode", xml_declaration=True)

    def _add_suite(self, parent: ET.Element, suite: Suite) -> None:
        testsuite = ET.SubElement(parent, "testsuite")
        testsuite.set("name", suite.title or suite.file or "Root Suite")
        if suite.file:
            testsuite.set("file", suite.file)
        testsuite.set("tests", str(len(suite.tests)))
        testsuite.set(
            "failures", str(sum(1 for t in suite.tests if t.state == TestState.FAILED))
        )
        testsuite.set(
            "skipped",
            str(
                sum(1 for t in suite.tests if t.state in (TestState.PENDING, TestState.SKIPPED))
            ),
        )
        testsuite.set("time", _seconds(suite.duration))

        for test in suite.tests:
            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("name", test.title)
            testcase.set("classname", suite.title)
            testcase.set("time", _seconds(test.duration))

            if test.state == TestState.FAILED:
                err = test.extra.get("err")
                if not isinstance(err, dict):
                    err = {}
                failure = ET.SubElement(testcase, "failure")
                failure.set("message", str(err.get("message", "")))
                failure.text = str(err.get("estack", ""))

            elif test.state in (TestState.PENDING, TestState.SKIPPED):
                ET.SubElement(testcase, "skipped")

"""
Merging several mochawesome reports into one.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from .models import Report
from .stats import reduce_stats
from .storage import ReportReader, ReportWriter
from .suites import merge_suites
from .template import default_report, new_uuid
from .validation import validate_inputs

logger = logging.getLogger(__name__)

Reader = Callable[[str], Report]
Writer = Callable[[Report, str], None]


def merge_report_documents(
    reports: Sequence[Report],
    template: Optional[Report] = None,
    id_generator: Optional[Callable[[], str]] = None,
) -> Report:
    """
    Merge already-parsed reports.

    Args:
        reports: Source reports, in source order
        template: Report to merge into (a fresh default report if omitted)
        id_generator: Identifier factory for the merged suite forest

    Returns:
        The merged report. Suites are moved out of ``reports``.
    """
    destination = template if template is not None else default_report()
    destination.stats = reduce_stats(destination.stats, [r.stats for r in reports])
    destination.suites = merge_suites(destination.suites, reports, id_generator or new_uuid)
    logger.info(
        "Merged %d reports: %d suites, %d tests, %d passes, %d failures",
        len(reports),
        len(destination.suites.suites),
        destination.stats.tests,
        destination.stats.passes,
        destination.stats.failures,
    )
    return destination


def merge_reports(
    sources: Any,
    destination: Any,
    reader: Optional[Reader] = None,
    writer: Optional[Writer] = None,
    template_provider: Optional[Callable[[], Report]] = None,
    id_generator: Optional[Callable[[], str]] = None,
) -> None:
    """
    Merge the reports named by ``sources`` and write the result to ``destination``.

    Inputs are validated before anything is read. Every source is loaded
    before merging begins; the first read failure aborts the merge and
    nothing is written.

    Args:
        sources: List of report file paths or http(s) URLs
        destination: Path of the merged report
        reader: Loads one source into a Report (defaults to ReportReader)
        writer: Persists the merged report (defaults to a JSON ReportWriter)
        template_provider: Returns the empty report to merge into
        id_generator: Identifier factory for the merged suite forest

    Raises:
        InputValidationError: If ``sources`` or ``destination`` is malformed
    """
    validate_inputs(sources, destination)
    logger.info("Merging %d reports into %s", len(sources), destination)

    if reader is None:
        with ReportReader() as default_reader:
            reports = _load_all(sources, default_reader)
    else:
        reports = _load_all(sources, reader)

    template = (template_provider or default_report)()
    merged = merge_report_documents(reports, template, id_generator)
    (writer or ReportWriter())(merged, destination)


def _load_all(sources: Sequence[str], reader: Reader) -> List[Report]:
    reports = []
    for source in sources:
        logger.debug("Loading report %s", source)
        reports.append(reader(source))
    return reports

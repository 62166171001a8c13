"""
Relocation of suite trees into the merged report.
"""

import dataclasses
import logging
from typing import Callable, Optional, Sequence

from .models import Report, Suite, SuiteForest

logger = logging.getLogger(__name__)


def reset_timed_out(suite: Suite) -> None:
    """Clear the ``timed_out`` flag of every test along the suite's nesting chain."""
    current: Optional[Suite] = suite
    while current is not None:
        for test in current.tests:
            test.timed_out = False
        current = current.suite


def merge_suites(
    forest: Optional[SuiteForest],
    reports: Sequence[Report],
    id_generator: Callable[[], str],
) -> SuiteForest:
    """
    Move the top-level suites of every report into one forest.

    Suites keep their source order and reports contribute in list order.
    The suite objects themselves are moved, not copied, so the caller must
    not reuse the source reports afterwards.

    Args:
        forest: Destination forest from the template (``None`` starts empty)
        reports: Source reports, in source order
        id_generator: Produces the identifier for the merged forest

    Returns:
        The destination forest with a fresh identifier and the merged suites
    """
    if forest is None:
        forest = SuiteForest()
    merged = dataclasses.replace(forest, uuid=id_generator(), suites=list(forest.suites))

    for index, report in enumerate(reports):
        if report.suites is None or not report.suites.suites:
            logger.debug("Report %d has no suites", index)
            continue
        for suite in report.suites.suites:
            reset_timed_out(suite)
            merged.suites.append(suite)

    return merged

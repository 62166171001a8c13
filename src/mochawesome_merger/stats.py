"""
Reduction of report statistics across merged reports.
"""

import dataclasses
import logging
import math
from datetime import datetime, timezone
from typing import Optional, Sequence

from .models import PercentClass, Statistics

logger = logging.getLogger(__name__)

EPOCH_FLOOR = datetime(1970, 1, 1, tzinfo=timezone.utc)

SUCCESS_THRESHOLD = 80
WARNING_THRESHOLD = 50


def classify_percent(percent: float) -> PercentClass:
    """
    Classify a percentage.

    Above 80 is success, above 50 up to 80 is warning, anything else
    (including NaN) is danger.
    """
    if percent > SUCCESS_THRESHOLD:
        return PercentClass.SUCCESS
    elif percent > WARNING_THRESHOLD:
        return PercentClass.WARNING
    else:
        return PercentClass.DANGER


def _percent(count: float, registered: float) -> float:
    if registered == 0:
        return math.nan
    return count * 100 / registered


def compute_percent(count: float, registered: float) -> float:
    """
    Return ``count`` as a percentage of ``registered``, rounded to 2 places.

    A zero denominator yields NaN rather than a substituted default.
    """
    return round(_percent(count, registered), 2)


def reduce_stats(
    initial: Statistics,
    sources: Sequence[Statistics],
    now: Optional[datetime] = None,
) -> Statistics:
    """
    Fold the statistics of several reports into one.

    Counters are summed onto ``initial``; ``start`` becomes the earliest source
    start and ``end`` the latest source end, then the pass and pending
    percentages and their classes are derived from the totals.

    Args:
        initial: Statistics to accumulate onto, usually the zero template
        sources: Statistics of each source report, in source order
        now: Starting point for the ``start`` minimum (defaults to the current time)

    Returns:
        A new Statistics; neither ``initial`` nor ``sources`` are modified
    """
    totals = {attr: getattr(initial, attr) for attr, _ in Statistics.SUMMED}
    start = now if now is not None else datetime.now(timezone.utc)
    end = EPOCH_FLOOR

    for stats in sources:
        for attr in totals:
            totals[attr] += getattr(stats, attr)
        if stats.start is not None and stats.start < start:
            start = stats.start
        if stats.end is not None and stats.end > end:
            end = stats.end

    # classes are derived from the unrounded values
    pass_percent = _percent(totals["passes"], totals["tests_registered"])
    pending_percent = _percent(totals["pending"], totals["tests_registered"])
    if math.isnan(pass_percent):
        logger.warning(
            "No registered tests across %d reports; percentages are undefined", len(sources)
        )

    return dataclasses.replace(
        initial,
        start=start,
        end=end,
        pass_percent=round(pass_percent, 2),
        pending_percent=round(pending_percent, 2),
        pass_percent_class=classify_percent(pass_percent),
        pending_percent_class=classify_percent(pending_percent),
        extra=dict(initial.extra),
        **totals,
    )

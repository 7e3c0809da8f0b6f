"""Calendar periods used for grouping and for the previous-period filter.

Every granularity is described by a scheme: a function turning a timestamp
into a comparable identifier tuple and a function rendering that tuple as a
folder name. Week and biweekly periods use the ISO week-year, so the last
days of December can belong to the next year (and the first days of January
to the previous one).
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Tuple

from .models import GroupBy

PeriodId = Tuple[int, ...]


def _check_month(month: int) -> None:
    assert 1 <= month <= 12, f"month must be between 1 and 12, got {month}"


def semester(month: int) -> int:
    """Half-year number (1 or 2) for a calendar month."""
    _check_month(month)
    return 1 if month <= 6 else 2


def trimester(month: int) -> int:
    """Three-month quarter number (1-4) for a calendar month."""
    _check_month(month)
    return (month - 1) // 3 + 1


def quadrimester(month: int) -> int:
    """Four-month period number (1-3) for a calendar month."""
    _check_month(month)
    return (month - 1) // 4 + 1


def biweekly(iso_week: int) -> int:
    """Two-week bucket (1-26) for an ISO week number.

    Weeks 51, 52 and 53 all land in bucket 26 so the last bucket never has
    a single week and 53-week years stay within 26 buckets.
    """
    assert 1 <= iso_week <= 53, f"iso_week must be between 1 and 53, got {iso_week}"
    if iso_week >= 51:
        return 26
    return (iso_week - 1) // 2 + 1


def _iso_week(moment: datetime) -> PeriodId:
    iso = moment.isocalendar()
    return (iso[0], iso[1])


def _iso_biweekly(moment: datetime) -> PeriodId:
    year, week = _iso_week(moment)
    return (year, biweekly(week))


@dataclass(frozen=True)
class PeriodScheme:
    identify: Callable[[datetime], PeriodId]
    label: Callable[[PeriodId], str]


SCHEMES: Dict[GroupBy, PeriodScheme] = {
    GroupBy.WEEK: PeriodScheme(
        _iso_week, lambda p: f"{p[0]}-W{p[1]:02d}"),
    GroupBy.BIWEEKLY: PeriodScheme(
        _iso_biweekly, lambda p: f"{p[0]}-BW{p[1]:02d}"),
    GroupBy.MONTH: PeriodScheme(
        lambda d: (d.year, d.month), lambda p: f"{p[0]}-{p[1]:02d}"),
    GroupBy.TRIMESTER: PeriodScheme(
        lambda d: (d.year, trimester(d.month)), lambda p: f"{p[0]}-Q{p[1]}"),
    GroupBy.QUADRIMESTER: PeriodScheme(
        lambda d: (d.year, quadrimester(d.month)), lambda p: f"{p[0]}-QD{p[1]}"),
    GroupBy.SEMESTER: PeriodScheme(
        lambda d: (d.year, semester(d.month)), lambda p: f"{p[0]}-H{p[1]}"),
    GroupBy.YEAR: PeriodScheme(
        lambda d: (d.year,), lambda p: f"{p[0]}"),
}


def identify(moment: datetime, group_by: GroupBy) -> PeriodId:
    return SCHEMES[group_by].identify(moment)


def is_before_current(moment: datetime, now: datetime, group_by: GroupBy) -> bool:
    """True if ``moment`` falls in a period strictly before the one holding ``now``."""
    return identify(moment, group_by) < identify(now, group_by)


def period_label(moment: datetime, group_by: GroupBy) -> str:
    """Folder name of the period containing ``moment`` (e.g. ``2025-W02``)."""
    scheme = SCHEMES[group_by]
    return scheme.label(scheme.identify(moment))

"""
Adherence Metrics
Pure computation of dashboard metrics from a date-ordered slice of daily logs
"""

from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, NamedTuple, Sequence, Union

from models import LogStatus


NOT_MARKED = "not marked"
WEEK_ENTRIES = 7


class LogEntry(NamedTuple):
    """Minimal (date, status) pair; ORM MedicationLog rows work as well"""
    date: Union[date, str]
    status: Union[LogStatus, str]


@dataclass(frozen=True)
class AdherenceMetrics:
    """Derived metrics shown on both dashboards"""
    adherence_rate: str
    streak: int
    today_status: str
    taken_in_week: int
    missed_in_month: int
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _is_taken(entry) -> bool:
    return entry.status == LogStatus.TAKEN


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def adherence_rate(logs: Sequence) -> str:
    """
    Percentage of taken entries, one decimal place, halves rounded up.
    "0.0" for an empty sequence.
    """
    if not logs:
        return "0.0"
    taken = sum(1 for entry in logs if _is_taken(entry))
    rate = Decimal(taken * 100) / Decimal(len(logs))
    return str(rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def current_streak(logs: Sequence) -> int:
    """Consecutive taken entries counted back from the most recent one"""
    streak = 0
    for entry in reversed(logs):
        if not _is_taken(entry):
            break
        streak += 1
    return streak


def status_on(logs: Sequence, day: date) -> str:
    """Status recorded for day, or "not marked" if there is no entry"""
    for entry in logs:
        if _as_date(entry.date) == day:
            return LogStatus(entry.status).value
    return NOT_MARKED


def compute_metrics(
    logs: Sequence,
    today: date,
    week_entries: int = WEEK_ENTRIES
) -> AdherenceMetrics:
    """
    Compute all dashboard metrics for logs ordered by ascending date.
    
    Args:
        logs: Entries with ``date`` and ``status`` attributes, oldest first
        today: Calendar day considered "today"
        week_entries: How many trailing entries make up the weekly rollup
        
    Returns:
        AdherenceMetrics
    """
    logs = list(logs)
    recent = logs[-week_entries:] if week_entries > 0 else []
    
    return AdherenceMetrics(
        adherence_rate=adherence_rate(logs),
        streak=current_streak(logs),
        today_status=status_on(logs, today),
        taken_in_week=sum(1 for entry in recent if _is_taken(entry)),
        missed_in_month=sum(1 for entry in logs if not _is_taken(entry)),
    )

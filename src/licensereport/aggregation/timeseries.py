"""Monthly and rolling daily status histograms for the report charts."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from pydantic import BaseModel

from licensereport.aggregation.models import ChartData, StackedSeries
from licensereport.core.config import DEFAULT_PALETTE, DEFAULT_TRACKED_STATUSES
from licensereport.core.paths import as_date
from licensereport.core.types import UNKNOWN_STATUS


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _status_key(status: str | None) -> str:
    text = (status or "").strip()
    return (text or UNKNOWN_STATUS).casefold()


class ReportWindow(BaseModel):
    """Optional start/end dates filtering the monthly histogram."""

    date_start: date | None = None
    date_end: date | None = None

    @classmethod
    def parse(cls, date_start: str | None = None, date_end: str | None = None) -> ReportWindow:
        """Build a window from loose strings; blank or unparseable bounds are dropped."""
        return cls(date_start=as_date(date_start), date_end=as_date(date_end))

    def accepts(self, moment: datetime) -> bool:
        """Coarse filter: same year as the start, month between start and end month.

        Only months are compared against the bounds, not full dates.
        """
        if self.date_start is not None:
            if moment.year != self.date_start.year or moment.month < self.date_start.month:
                return False
        if self.date_end is not None and moment.month > self.date_end.month:
            return False
        return True


class MonthlyStatusHistogram:
    """Status tallies keyed by (month, year) of each application's last update."""

    def __init__(self, window: ReportWindow | None = None) -> None:
        self._window = window or ReportWindow()
        self._counts: dict[tuple[int, int], dict[str, int]] = {}

    def add(self, updated_at: datetime | None, status: str | None) -> bool:
        """Tally one application. Returns False when it falls outside the window."""
        if updated_at is None:
            return False
        moment = _as_utc(updated_at)
        if not self._window.accepts(moment):
            return False
        bucket = self._counts.setdefault((moment.month, moment.year), {})
        key = _status_key(status)
        bucket[key] = bucket.get(key, 0) + 1
        return True

    def counts(self) -> dict[tuple[int, int], dict[str, int]]:
        return {key: dict(value) for key, value in self._counts.items()}

    def to_chart_data(
        self,
        palette: list[str] | None = None,
        region: str = "",
    ) -> list[ChartData]:
        """One chart point per month, ascending by (year, month).

        Colors are taken from *palette* in order and wrap around.
        """
        palette = palette or DEFAULT_PALETTE
        points: list[ChartData] = []
        ordered = sorted(self._counts.items(), key=lambda kv: (kv[0][1], kv[0][0]))
        for position, ((month, year), statuses) in enumerate(ordered):
            label = date(year, month, 1).strftime("%b %Y")
            if region.strip():
                label = f"{label} · {region.strip()}"
            color = palette[position % len(palette)]
            points.append(
                ChartData(
                    label=label,
                    value=sum(statuses.values()),
                    front_color=color,
                    gradient_color=color,
                )
            )
        return points


class DailyStatusWindow:
    """Per-day status tallies for the trailing window of UTC days ending today."""

    def __init__(self, today: date | None = None, days: int = 30) -> None:
        if days < 1:
            raise ValueError(f"Daily window must cover at least one day, got {days}")
        self.today = today or datetime.now(timezone.utc).date()
        self.days: list[date] = [self.today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
        self._counts: dict[date, dict[str, int]] = {}

    @property
    def first_day(self) -> date:
        return self.days[0]

    def add(self, updated_at: datetime | None, status: str | None) -> bool:
        if updated_at is None:
            return False
        day = _as_utc(updated_at).date()
        if not self.first_day <= day <= self.today:
            return False
        bucket = self._counts.setdefault(day, {})
        key = _status_key(status)
        bucket[key] = bucket.get(key, 0) + 1
        return True

    def count(self, day: date, status: str) -> int:
        return self._counts.get(day, {}).get(_status_key(status), 0)

    def to_series(self, statuses: list[str] | None = None) -> list[StackedSeries]:
        """One stacked series per tracked status, one raw count per day, oldest first."""
        statuses = statuses or DEFAULT_TRACKED_STATUSES
        return [
            StackedSeries(name=status, data=[float(self.count(day, status)) for day in self.days])
            for status in statuses
        ]

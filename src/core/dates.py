#!/usr/bin/python
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, date, timedelta, timezone
from typing import Optional

@dataclass(frozen=True)
class DatesConfig:
    # Fixed UTC offset (hours) of the reference zone where the puzzle day rolls over.
    # Never derived from the host's local zone.
    utc_offset_hours: int = -5
    # The reference-zone civil date that maps to base_number (Bossdle 001)
    epoch_date: date = date(2025, 10, 17)
    # The day index at the epoch_date
    base_number: int = 0

    @property
    def tz(self) -> timezone:
        return timezone(timedelta(hours=self.utc_offset_hours))

class GameDates:
    """
    Maps instants to daily puzzle indices in a fixed reference zone:
    - day_index(ts) = base_number + days between epoch_date and the reference civil date of ts
    - every instant of the same reference-zone day maps to the same index
    Instantiate with a different DatesConfig to move the epoch or the rollover zone.
    """
    def __init__(self, config: DatesConfig | None = None):
        self.config = config or DatesConfig()

    @property
    def tz(self) -> timezone:
        return self.config.tz

    def _to_reference_date(self, ts: Optional[datetime] = None) -> date:
        """
        Convert a timestamp to the civil date in the reference zone.
        If ts is None, use now(). Naive timestamps are taken as UTC.
        """
        if ts is None:
            ts = datetime.now(timezone.utc)
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return ts.astimezone(self.tz).date()

    def day_index(self, ts: Optional[datetime] = None, test_offset: int = 0) -> int:
        """
        Map a timestamp (or now if None) to a day index.
        test_offset is volatile session state and is simply added on top.
        """
        d = self._to_reference_date(ts)
        delta_days = (d - self.config.epoch_date).days
        return self.config.base_number + delta_days + test_offset

    def puzzle_number(self, day_index: int) -> int:
        """Human-facing ordinal: day index 0 is puzzle 001."""
        return day_index + 1

    def next_rollover(self, ts: Optional[datetime] = None) -> datetime:
        """The next reference-zone midnight strictly after ts, as an aware datetime."""
        d = self._to_reference_date(ts)
        return datetime(d.year, d.month, d.day, tzinfo=self.tz) + timedelta(days=1)

    def time_until_rollover(self, ts: Optional[datetime] = None) -> timedelta:
        if ts is None:
            ts = datetime.now(timezone.utc)
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return self.next_rollover(ts) - ts

# -----------------------------------------------------------------------------
# Module-level default
# -----------------------------------------------------------------------------
_DEFAULT_GAME_DATE: GameDates = GameDates()

def get_game_date() -> GameDates:
    return _DEFAULT_GAME_DATE

def format_countdown(delta: timedelta) -> str:
    """Render a timedelta as HH:MM:SS (negative deltas clamp to zero)."""
    total = max(0, int(delta.total_seconds()))
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

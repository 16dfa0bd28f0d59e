from __future__ import annotations

import logging

from .models import Stats
from .storage import Storage

logger = logging.getLogger(__name__)

STATS_KEY = "bossdle_stats_v1"


class StatsTracker:
    """Lifetime streak/wins/played counters, persisted under their own key."""

    def __init__(self, storage: Storage, key: str = STATS_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Stats:
        try:
            raw = self.storage.get(self.key)
        except Exception:
            logger.exception("StatsTracker.load: failed to read %s; using zeroed stats", self.key)
            return Stats()
        if raw is None:
            return Stats()
        try:
            values = {f: raw.get(f, 0) for f in ("streak", "wins", "played")}
            if any(isinstance(v, bool) or not isinstance(v, int) or v < 0 for v in values.values()):
                raise ValueError(values)
            return Stats(**values)
        except Exception:
            logger.warning("StatsTracker.load: corrupt record under %s ignored: %r", self.key, raw)
            return Stats()

    def record_outcome(self, won: bool, test_mode: bool = False) -> Stats:
        if test_mode:
            logger.debug("StatsTracker.record_outcome: test mode, stats untouched")
            return self.load()
        stats = self.load()
        stats.played += 1
        if won:
            stats.wins += 1
            stats.streak += 1
        else:
            stats.streak = 0
        self.storage.set(self.key, stats.to_dict())
        logger.info("StatsTracker.record_outcome: won=%s -> streak=%s wins=%s played=%s",
                    won, stats.streak, stats.wins, stats.played)
        return stats

"""Puzzle session: the win/loss state machine plus the surface the UI renders from."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from . import ledger as attempt_ledger
from .catalog import build_catalog
from .dates import GameDates, get_game_date
from .errors import InvalidCatalog, PuzzleAlreadyResolved, PuzzleNotResolved
from .evaluator import evaluate, find_by_name, normalize
from .models import CatalogEntry, DisplayRow, GuessResult, Ledger, Outcome, Stats
from .selector import select_target
from .share import EMPTY, FILLED, GAME_LABEL, encode, format_ordinal
from .stats import STATS_KEY, StatsTracker
from .storage import Storage

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class GameConfig:
    label: str = GAME_LABEL
    max_attempts: int = attempt_ledger.MAX_ATTEMPTS
    ledger_key: str = attempt_ledger.LEDGER_KEY
    stats_key: str = STATS_KEY
    filled_glyph: str = FILLED
    empty_glyph: str = EMPTY


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def outcome_of(ledger: Ledger, target: CatalogEntry, max_attempts: int = attempt_ledger.MAX_ATTEMPTS) -> Outcome:
    """
    Derive the outcome from the attempts alone.
    A match anywhere wins, even if the ledger is full.
    """
    wanted = normalize(target.name)
    if any(normalize(a.name) == wanted for a in ledger.attempts):
        return Outcome.WON
    if len(ledger.attempts) >= max_attempts:
        return Outcome.LOST
    if ledger.attempts:
        return Outcome.IN_PROGRESS
    return Outcome.NOT_STARTED


class PuzzleSession:
    """
    One player's view of the daily puzzle.

    Owns the catalog, the storage port and the clock. The ledger and target are
    reloaded whenever the reference day changes; the outcome is always recomputed.
    Stats are only scored by the submit_guess call that ends the puzzle.
    """

    def __init__(
        self,
        catalog: Iterable,
        storage: Storage,
        clock: Optional[Clock] = None,
        dates: Optional[GameDates] = None,
        config: Optional[GameConfig] = None,
    ):
        self.storage = storage
        self.clock: Clock = clock or _utc_now
        self.dates = dates or get_game_date()
        self.config = config or GameConfig()
        self.stats_tracker = StatsTracker(storage, key=self.config.stats_key)
        self.test_offset = 0
        self.catalog: tuple = ()
        self.day_index: int = 0
        self.target: Optional[CatalogEntry] = None
        self.ledger = Ledger(day_index=0)
        self.load_catalog(catalog)

    # ------------------------------------------------------------------
    # Day handling
    # ------------------------------------------------------------------
    @property
    def test_mode(self) -> bool:
        return self.test_offset != 0

    def _current_day_index(self) -> int:
        return self.dates.day_index(self.clock(), self.test_offset)

    def _load_day(self) -> None:
        self.day_index = self._current_day_index()
        self.target = select_target(self.day_index, self.catalog)
        self.ledger = attempt_ledger.load(
            self.storage, self.day_index, test_mode=self.test_mode,
            key=self.config.ledger_key, max_attempts=self.config.max_attempts,
        )
        logger.info("PuzzleSession: loaded %s %s (attempts=%s, outcome=%s%s)",
                    self.config.label, format_ordinal(self.puzzle_number), len(self.ledger.attempts),
                    self._outcome().value, ", test mode" if self.test_mode else "")

    def _sync_day(self) -> None:
        current = self._current_day_index()
        if current != self.day_index:
            logger.info("PuzzleSession: day rollover %s -> %s", self.day_index, current)
            self._load_day()

    def _outcome(self) -> Outcome:
        return outcome_of(self.ledger, self.target, self.config.max_attempts)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def load_catalog(self, entries: Iterable) -> None:
        catalog = build_catalog(entries)
        if not catalog:
            raise InvalidCatalog()
        self.catalog = catalog
        self._load_day()

    def submit_guess(self, raw_text: str) -> GuessResult:
        self._sync_day()
        if self._outcome().is_terminal:
            raise PuzzleAlreadyResolved()

        entry = find_by_name(raw_text, self.catalog)
        self.ledger = attempt_ledger.record(
            self.storage, self.ledger, entry, test_mode=self.test_mode,
            key=self.config.ledger_key, max_attempts=self.config.max_attempts,
        )
        outcome = self._outcome()
        logger.info("PuzzleSession.submit_guess: %r accepted (%s/%s) -> %s",
                    entry.name, len(self.ledger.attempts), self.config.max_attempts, outcome.value)

        if outcome.is_terminal:
            # The attempt is already persisted; a failed stats write must not undo it
            try:
                self.stats_tracker.record_outcome(outcome is Outcome.WON, test_mode=self.test_mode)
            except Exception:
                logger.exception("PuzzleSession.submit_guess: failed to record %s in stats", outcome.value)

        return GuessResult(
            row=DisplayRow(attempt=entry, feedback=evaluate(entry, self.target)),
            outcome=outcome,
            attempts_left=self.attempts_left,
        )

    def advance_test_day(self) -> int:
        """Jump one puzzle ahead without touching persisted state. Returns the puzzle number."""
        self.test_offset += 1
        logger.info("PuzzleSession: test mode, offset=%s", self.test_offset)
        self._load_day()
        return self.puzzle_number

    def reset_test_day(self) -> int:
        """Leave test mode and go back to the persisted real-day progress."""
        self.test_offset = 0
        logger.info("PuzzleSession: test mode off")
        self._load_day()
        return self.puzzle_number

    # ------------------------------------------------------------------
    # Render surface
    # ------------------------------------------------------------------
    @property
    def puzzle_number(self) -> int:
        return self.dates.puzzle_number(self.day_index)

    @property
    def attempts_left(self) -> int:
        if self._outcome().is_terminal:
            return 0
        return self.config.max_attempts - len(self.ledger.attempts)

    def get_display_rows(self) -> List[DisplayRow]:
        self._sync_day()
        return [DisplayRow(attempt=a, feedback=evaluate(a, self.target)) for a in self.ledger.attempts]

    def get_outcome(self) -> Outcome:
        self._sync_day()
        return self._outcome()

    def get_target(self) -> CatalogEntry:
        if not self.get_outcome().is_terminal:
            raise PuzzleNotResolved()
        return self.target

    def get_share_text(self) -> str:
        outcome = self.get_outcome()
        if not outcome.is_terminal:
            raise PuzzleNotResolved()
        return encode(
            self.day_index, self.ledger.attempts, self.target, outcome is Outcome.WON,
            label=self.config.label, max_attempts=self.config.max_attempts,
            filled=self.config.filled_glyph, empty=self.config.empty_glyph,
        )

    def get_stats(self) -> Stats:
        return self.stats_tracker.load()

    def time_until_next(self):
        return self.dates.time_until_rollover(self.clock())

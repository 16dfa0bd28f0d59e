from __future__ import annotations

import logging

from .errors import DuplicateGuess, LedgerFull
from .evaluator import normalize
from .models import CatalogEntry, Ledger
from .storage import Storage

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 6
LEDGER_KEY = "bossdle_attempts_v1"


def _parse(raw) -> Ledger:
    if not isinstance(raw, dict):
        raise ValueError(f"ledger record is not an object: {type(raw).__name__}")
    day_index = raw["day_index"]
    if isinstance(day_index, bool) or not isinstance(day_index, int):
        raise ValueError(f"bad day_index: {day_index!r}")
    attempts = tuple(CatalogEntry.from_dict(a) for a in raw.get("attempts", []))
    return Ledger(day_index=day_index, attempts=attempts)


def load(storage: Storage, day_index: int, test_mode: bool = False,
         key: str = LEDGER_KEY, max_attempts: int = MAX_ATTEMPTS) -> Ledger:
    """
    Load the attempts for day_index.
    A record for any other day is stale and is replaced by an empty ledger (daily reset).
    Test mode never reads storage.
    """
    empty = Ledger(day_index=day_index)
    if test_mode:
        logger.debug("ledger.load: test mode, empty ledger for day_index=%s", day_index)
        return empty

    try:
        raw = storage.get(key)
    except Exception:
        logger.exception("ledger.load: failed to read %s; starting empty", key)
        return empty
    if raw is None:
        return empty

    try:
        ledger = _parse(raw)
    except Exception:
        logger.warning("ledger.load: corrupt record under %s ignored: %r", key, raw)
        return empty

    if ledger.day_index != day_index:
        logger.info("ledger.load: daily reset (stored day_index=%s, current=%s)", ledger.day_index, day_index)
        return empty

    # Drop anything that breaks the uniqueness/cap invariants rather than refusing to play
    seen = set()
    kept = []
    for attempt in ledger.attempts:
        n = normalize(attempt.name)
        if n in seen or len(kept) >= max_attempts:
            logger.warning("ledger.load: dropping invalid stored attempt %r", attempt.name)
            continue
        seen.add(n)
        kept.append(attempt)
    return Ledger(day_index=day_index, attempts=tuple(kept))


def record(storage: Storage, ledger: Ledger, attempt: CatalogEntry, test_mode: bool = False,
           key: str = LEDGER_KEY, max_attempts: int = MAX_ATTEMPTS) -> Ledger:
    """Append attempt and flush it immediately (skipped in test mode)."""
    wanted = normalize(attempt.name)
    if any(normalize(a.name) == wanted for a in ledger.attempts):
        raise DuplicateGuess(attempt.name)
    if len(ledger.attempts) >= max_attempts:
        raise LedgerFull(max_attempts)

    updated = Ledger(day_index=ledger.day_index, attempts=ledger.attempts + (attempt,))
    if not test_mode:
        storage.set(key, updated.to_dict())
    logger.debug("ledger.record: day_index=%s attempt=%r (%s/%s)%s",
                 updated.day_index, attempt.name, len(updated.attempts), max_attempts,
                 " [test mode, not persisted]" if test_mode else "")
    return updated

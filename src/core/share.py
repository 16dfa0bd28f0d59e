from typing import Sequence

from .evaluator import evaluate
from .ledger import MAX_ATTEMPTS
from .models import ATTRIBUTES, CatalogEntry, Feedback

GAME_LABEL = "Bossdle"
FILLED = "🟩"
EMPTY = "⬛"


def glyph_row(attempt: CatalogEntry, target: CatalogEntry, filled: str = FILLED, empty: str = EMPTY) -> str:
    # PARTIAL renders empty: only exact equality counts in shared results
    feedback = evaluate(attempt, target)
    return "".join(filled if feedback[attr] is Feedback.MATCH else empty for attr in ATTRIBUTES)


def format_ordinal(puzzle_number: int) -> str:
    """Zero-pad to three digits; pre-epoch puzzles keep the sign in front (-004)."""
    if puzzle_number < 0:
        return f"-{-puzzle_number:03d}"
    return f"{puzzle_number:03d}"


def header(day_index: int, attempt_count: int, won: bool,
           label: str = GAME_LABEL, max_attempts: int = MAX_ATTEMPTS) -> str:
    score = attempt_count if won else "X"
    return f"{label} {format_ordinal(day_index + 1)} {score}/{max_attempts}"


def encode(day_index: int, attempts: Sequence[CatalogEntry], target: CatalogEntry, won: bool,
           label: str = GAME_LABEL, max_attempts: int = MAX_ATTEMPTS,
           filled: str = FILLED, empty: str = EMPTY) -> str:
    lines = [header(day_index, len(attempts), won, label=label, max_attempts=max_attempts)]
    lines.extend(glyph_row(a, target, filled=filled, empty=empty) for a in attempts)
    return "\n".join(lines)

import logging
import re
from typing import Dict, Sequence

from .errors import NotFound
from .models import ATTRIBUTES, TEXT_ATTRIBUTES, CatalogEntry, Feedback

logger = logging.getLogger(__name__)

# ASCII word characters only, so every client normalizes names the same way
NON_WORD_PATTERN = re.compile(r"[^A-Za-z0-9_\s]+")
WHITESPACE_RUN = re.compile(r"\s+")


def normalize(name: str) -> str:
    """
    Canonical guess form. Two names are the same guess iff these are equal.

    Steps:
    1) Trim and lower-case.
    2) Strip anything that is not a word character or whitespace.
    3) Collapse whitespace runs to a single space.
    """
    out = (name or "").strip().lower()
    out = NON_WORD_PATTERN.sub("", out)
    return WHITESPACE_RUN.sub(" ", out).strip()


def _text_feedback(guessed: str, expected: str) -> Feedback:
    if guessed == expected:
        return Feedback.MATCH
    # Case-only differences are a data-cleanliness signal, not a hit
    if guessed and expected and str(guessed).lower() == str(expected).lower():
        return Feedback.PARTIAL
    return Feedback.MISS


def evaluate(guess: CatalogEntry, target: CatalogEntry) -> Dict[str, Feedback]:
    feedback: Dict[str, Feedback] = {}
    for attr in ATTRIBUTES:
        guessed = getattr(guess, attr)
        expected = getattr(target, attr)
        if attr in TEXT_ATTRIBUTES:
            feedback[attr] = _text_feedback(guessed, expected)
        else:
            feedback[attr] = Feedback.MATCH if bool(guessed) == bool(expected) else Feedback.MISS
    return feedback


def is_same_guess(a: CatalogEntry, b: CatalogEntry) -> bool:
    return normalize(a.name) == normalize(b.name)


def find_by_name(query: str, catalog: Sequence[CatalogEntry]) -> CatalogEntry:
    """Look up a catalog entry by normalized name or short alias."""
    wanted = normalize(query)
    if not wanted:
        raise NotFound(query)
    for entry in catalog:
        if normalize(entry.name) == wanted:
            return entry
    for entry in catalog:
        if entry.alias and normalize(entry.alias) == wanted:
            return entry
    logger.debug("find_by_name: no catalog entry for %r", query)
    raise NotFound(query)


def suggest(prefix: str, catalog: Sequence[CatalogEntry], limit: int = 25) -> list:
    """Catalog names whose normalized form starts with the normalized prefix."""
    wanted = normalize(prefix)
    names = [e.name for e in catalog if normalize(e.name).startswith(wanted)]
    return sorted(names, key=str.casefold)[:limit]

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

# Fixed attribute order used for feedback, display rows and share glyphs.
ATTRIBUTES = ("name", "region", "type", "damage", "has_special_trait")
TEXT_ATTRIBUTES = ("name", "region", "type", "damage")


class Feedback(str, Enum):
    MATCH = "match"
    PARTIAL = "partial"
    MISS = "miss"


class Outcome(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (Outcome.WON, Outcome.LOST)


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    region: str
    type: str
    damage: str
    has_special_trait: bool
    alias: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "region": self.region,
            "type": self.type,
            "damage": self.damage,
            "has_special_trait": self.has_special_trait,
        }
        if self.alias:
            data["alias"] = self.alias
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        return cls(
            name=str(data["name"]),
            region=str(data.get("region", "")),
            type=str(data.get("type", "")),
            damage=str(data.get("damage", "")),
            has_special_trait=bool(data.get("has_special_trait", False)),
            alias=data.get("alias") or None,
        )


@dataclass(frozen=True)
class Ledger:
    day_index: int
    attempts: Tuple[CatalogEntry, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day_index": self.day_index,
            "attempts": [a.to_dict() for a in self.attempts],
        }


@dataclass
class Stats:
    streak: int = 0
    wins: int = 0
    played: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"streak": self.streak, "wins": self.wins, "played": self.played}


@dataclass(frozen=True)
class DisplayRow:
    attempt: CatalogEntry
    feedback: Dict[str, Feedback] = field(default_factory=dict)


@dataclass(frozen=True)
class GuessResult:
    row: DisplayRow
    outcome: Outcome
    attempts_left: int

from datetime import datetime, timedelta, timezone

import pytest

from src.core.models import CatalogEntry
from src.core.session import PuzzleSession
from src.core.storage import MemoryStorage

# Noon in the reference zone (UTC-5) on the epoch date: day index 0
EPOCH_NOON = datetime(2025, 10, 17, 17, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = EPOCH_NOON):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_entry(name, region="Limgrave", type="Demigod", damage="Physical", trait=False, alias=None):
    return CatalogEntry(name=name, region=region, type=type, damage=damage,
                        has_special_trait=trait, alias=alias)


@pytest.fixture
def catalog():
    return [
        make_entry("Margit, the Fell Omen", type="Legend", damage="Holy", alias="Margit"),
        make_entry("Godrick the Grafted", damage="Fire", trait=True, alias="Godrick"),
        make_entry("Rennala, Queen of the Full Moon", region="Liurnia", type="Legend", damage="Magic", trait=True),
        make_entry("Starscourge Radahn", region="Caelid", damage="Gravity", trait=True, alias="Radahn"),
        make_entry("Malenia, Blade of Miquella", region="Haligtree", damage="Scarlet Rot", trait=True, alias="Malenia"),
        make_entry("Tree Sentinel", type="Field Boss", damage="Holy"),
        make_entry("Fire Giant", region="Mountaintops", type="Great Enemy", damage="Fire", trait=True),
        make_entry("Elden Beast", region="Erdtree", type="Legend", damage="Holy", trait=True),
        make_entry("Godskin Duo", region="Farum Azula", type="Great Enemy", damage="Fire"),
    ]


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(catalog, storage, clock):
    return PuzzleSession(catalog, storage, clock=clock)


def wrong_guesses(session, count):
    """Names of `count` catalog entries that are not today's target."""
    names = [e.name for e in session.catalog if e.name != session.target.name]
    assert len(names) >= count
    return names[:count]

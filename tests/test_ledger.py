import pytest

from src.core import ledger
from src.core.errors import DuplicateGuess, LedgerFull
from src.core.models import Ledger
from src.core.storage import MemoryStorage

from conftest import make_entry


def test_load_empty_storage() -> None:
    assert ledger.load(MemoryStorage(), 4) == Ledger(day_index=4)


def test_record_persists_immediately(storage) -> None:
    l0 = ledger.load(storage, 2)
    l1 = ledger.record(storage, l0, make_entry("Godrick the Grafted"))
    assert [a.name for a in l1.attempts] == ["Godrick the Grafted"]
    assert storage.get(ledger.LEDGER_KEY)["day_index"] == 2
    assert ledger.load(storage, 2) == l1


def test_stale_day_is_discarded(storage) -> None:
    ledger.record(storage, Ledger(day_index=2), make_entry("Fire Giant"))
    assert ledger.load(storage, 3) == Ledger(day_index=3)


def test_duplicate_normalized_name_rejected(storage) -> None:
    l1 = ledger.record(storage, Ledger(day_index=0), make_entry("Margit, the Fell Omen"))
    with pytest.raises(DuplicateGuess):
        ledger.record(storage, l1, make_entry("margit the fell omen"))
    assert len(ledger.load(storage, 0).attempts) == 1


def test_cap_enforced(storage) -> None:
    current = Ledger(day_index=0)
    for i in range(ledger.MAX_ATTEMPTS):
        current = ledger.record(storage, current, make_entry(f"Boss {i}"))
    with pytest.raises(LedgerFull):
        ledger.record(storage, current, make_entry("One Too Many"))
    assert len(ledger.load(storage, 0).attempts) == ledger.MAX_ATTEMPTS


def test_test_mode_never_touches_storage(storage) -> None:
    ledger.record(storage, Ledger(day_index=1), make_entry("Fire Giant"))
    loaded = ledger.load(storage, 1, test_mode=True)
    assert loaded.attempts == ()
    ledger.record(storage, loaded, make_entry("Elden Beast"), test_mode=True)
    assert [a["name"] for a in storage.get(ledger.LEDGER_KEY)["attempts"]] == ["Fire Giant"]


@pytest.mark.parametrize("raw", ["not json", '{"attempts": []}', '{"day_index": "1"}', "[1, 2]",
                                 '{"day_index": 1, "attempts": [{"region": "x"}]}'])
def test_corrupt_record_falls_back_to_empty(raw) -> None:
    storage = MemoryStorage()
    storage.set_raw(ledger.LEDGER_KEY, raw)
    assert ledger.load(storage, 1) == Ledger(day_index=1)


def test_invalid_stored_attempts_are_dropped() -> None:
    names = ["A", "a", "B", "C", "D", "E", "F", "G"]
    storage = MemoryStorage({ledger.LEDGER_KEY: {
        "day_index": 0,
        "attempts": [make_entry(n).to_dict() for n in names],
    }})
    loaded = ledger.load(storage, 0)
    assert [a.name for a in loaded.attempts] == ["A", "B", "C", "D", "E", "F"]

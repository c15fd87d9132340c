from __future__ import annotations

import pytest

from wealthplan.storage.repository import InMemorySlotRepository, SqliteSlotRepository


@pytest.fixture(params=["memory", "sqlite"])
def repository(request, tmp_path):
    if request.param == "memory":
        return InMemorySlotRepository()
    return SqliteSlotRepository(tmp_path / "slots.db")


def test_missing_slot_loads_none(repository):
    assert repository.load("forecast-settings") is None


def test_save_then_load_and_overwrite(repository):
    repository.save("actuals", [{"yearIndex": 1, "endOfYearBalance": 115000}])
    repository.save("actuals", [{"yearIndex": 2, "endOfYearBalance": 140000}])

    assert repository.load("actuals") == [{"yearIndex": 2, "endOfYearBalance": 140000}]


def test_loaded_value_is_a_copy(repository):
    value = {"startYear": 2026}
    repository.save("settings", value)
    value["startYear"] = 1999

    loaded = repository.load("settings")
    loaded["startYear"] = 1
    assert repository.load("settings") == {"startYear": 2026}


@pytest.mark.parametrize("key", ["", "has space", "a/b", "x" * 65])
def test_bad_keys_rejected(repository, key):
    with pytest.raises(ValueError):
        repository.save(key, 1)


def test_sqlite_persists_across_instances(tmp_path):
    path = tmp_path / "slots.db"
    SqliteSlotRepository(path).save("settings", {"startYear": 2030})

    assert SqliteSlotRepository(path).load("settings") == {"startYear": 2030}

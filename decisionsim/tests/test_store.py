from __future__ import annotations

import pytest
from pydantic import ValidationError

from decisionsim.domain.store import ProfileRequiredError, RecordNotFoundError, RecordStore
from decisionsim.models import TravelDecision, UserProfile, parse_decision


@pytest.fixture()
def store(tmp_path) -> RecordStore:
    store = RecordStore(tmp_path / "nested" / "records.db")
    store.init_db()
    return store


def trip(name: str = "Trip"):
    return parse_decision({"name": name, "type": "travel", "data": {"totalCost": 4000}})


def test_profile_round_trip_and_overwrite(store):
    assert store.get_profile() is None
    with pytest.raises(ProfileRequiredError):
        store.require_profile()

    store.save_profile(UserProfile(currentSavings=1, monthlyIncome=2, monthlyExpenses=3))
    store.save_profile(UserProfile(currentSavings=10, monthlyIncome=20, monthlyExpenses=5, financialGoals=["travel"]))

    profile = store.require_profile()
    assert profile.currentSavings == 10
    assert profile.financialGoals == ["travel"]


def test_saved_decisions_get_ids_and_keep_insertion_order(store):
    first = store.save_decision(trip("First"))
    second = store.save_decision(trip("Second"))

    assert first.id != second.id
    assert first.createdAt and first.updatedAt is None
    assert [r.decision["name"] for r in store.list_decisions()] == ["First", "Second"]

    fetched = store.get_decision(second.id)
    assert isinstance(fetched.to_decision(), TravelDecision)


def test_update_merges_data_and_stamps_time(store):
    record = store.save_decision(trip())

    updated = store.update_decision(record.id, {"name": "Longer trip", "data": {"totalCost": 6000}})

    assert updated.updatedAt is not None
    assert updated.createdAt == record.createdAt
    assert updated.decision["name"] == "Longer trip"
    assert store.get_decision(record.id).decision["data"]["totalCost"] == 6000


def test_update_switching_type_replaces_data(store):
    record = store.save_decision(trip())

    updated = store.update_decision(record.id, {"type": "business", "data": {"initialInvestment": 900}})

    assert updated.decision["type"] == "business"
    assert updated.decision["data"]["initialInvestment"] == 900
    assert "totalCost" not in updated.decision["data"]


def test_invalid_update_leaves_record_unchanged(store):
    record = store.save_decision(trip())

    with pytest.raises(ValidationError):
        store.update_decision(record.id, {"data": {"totalCost": -5}})
    assert store.get_decision(record.id).decision == record.decision


def test_delete_and_missing_records(store):
    record = store.save_decision(trip())

    assert store.delete_decision(record.id) is True
    assert store.delete_decision(record.id) is False
    with pytest.raises(RecordNotFoundError):
        store.get_decision(record.id)
    with pytest.raises(RecordNotFoundError):
        store.update_decision("missing", {"name": "x"})


def test_comparisons_and_clear(store):
    store.save_profile(UserProfile(currentSavings=1, monthlyIncome=1, monthlyExpenses=1))
    store.save_decision(trip())
    saved = store.save_comparison({"difference": {"finalBalance": 12.5}})

    assert [c.id for c in store.list_comparisons()] == [saved.id]
    assert store.list_comparisons()[0].comparison["difference"]["finalBalance"] == 12.5

    store.clear()
    assert store.get_profile() is None
    assert store.list_decisions() == []
    assert store.list_comparisons() == []

from datetime import timedelta

import pytest
from bson import ObjectId

from conftest import make_prefs
from tripcraft.integrations.exceptions import (
    AuthenticationRequiredError,
    InvalidItineraryError,
    ItineraryNotFoundError,
    NotAuthorizedError,
)
from tripcraft.integrations.itinerary_store import ItineraryStore, utcnow
from tripcraft.models.itinerary import ActivitySlot, DayPlan, HotelRecommendation, ItineraryPlan, MealSlot


def _day(n: int) -> DayPlan:
    return DayPlan(
        day=n,
        morning=ActivitySlot(activity="Masmak Fortress"),
        lunch=MealSlot(restaurant="Najd Village"),
        afternoon=ActivitySlot(activity="Diriyah"),
        dinner=MealSlot(restaurant="Lusin"),
    )


def _plan(duration: int = 2) -> ItineraryPlan:
    return ItineraryPlan(
        hotel=HotelRecommendation(place="Olaya Suites"),
        days=[_day(i) for i in range(1, duration + 1)],
    )


def test_anonymous_itinerary_expires_after_ttl(db):
    store = ItineraryStore(db["itineraries"], ttl_hours=24)
    before = utcnow()
    itinerary = store.create(_plan(), make_prefs())

    assert itinerary.is_temporary is True
    expected = before + timedelta(hours=24)
    assert abs((itinerary.expires_at - expected).total_seconds()) < 5

    doc = db["itineraries"].find_one()
    assert doc["isTemporary"] is True
    assert doc["isAIGenerated"] is True
    assert doc["travelersType"] == "Solo"


def test_owned_itinerary_is_permanent(store):
    itinerary = store.create(_plan(), make_prefs(), user_id="u1")
    assert itinerary.is_temporary is False
    assert itinerary.expires_at is None
    assert itinerary.created_at is not None and itinerary.generated_at is not None


def test_get_unknown_or_malformed_id(store):
    with pytest.raises(ItineraryNotFoundError):
        store.get("not-an-object-id")
    with pytest.raises(ItineraryNotFoundError):
        store.get("0123456789abcdef01234567")


def test_unowned_itinerary_is_readable_by_anyone(store):
    itinerary = store.create(_plan(), make_prefs())
    assert store.get_for_reader(itinerary.id, None).id == itinerary.id
    assert store.get_for_reader(itinerary.id, "someone").id == itinerary.id


def test_owned_itinerary_read_rules(store):
    itinerary = store.create(_plan(), make_prefs(), user_id="owner")
    assert store.get_for_reader(itinerary.id, "owner").user == "owner"
    assert store.get_for_reader(itinerary.id, "admin-1", is_admin=True).user == "owner"
    with pytest.raises(AuthenticationRequiredError):
        store.get_for_reader(itinerary.id, None)
    with pytest.raises(NotAuthorizedError):
        store.get_for_reader(itinerary.id, "intruder")


def test_save_copy_creates_new_permanent_record_and_keeps_original(store):
    temp = store.create(_plan(), make_prefs())
    saved = store.save_copy(temp.id, "u1", name="My Riyadh weekend")

    assert saved.id != temp.id
    assert saved.user == "u1"
    assert saved.name == "My Riyadh weekend"
    assert saved.is_temporary is False
    assert saved.expires_at is None
    assert saved.days == temp.days

    original = store.get(temp.id)
    assert original.is_temporary is True
    assert original.user is None


def test_save_copy_keeps_name_when_none_given(store):
    temp = store.create(_plan(), make_prefs())
    assert store.save_copy(temp.id, "u1").name == "Riyadh Trip - 2 days"


def test_save_copy_requires_user_and_ownership(store):
    temp = store.create(_plan(), make_prefs())
    with pytest.raises(AuthenticationRequiredError):
        store.save_copy(temp.id, None)

    owned = store.create(_plan(), make_prefs(), user_id="owner")
    with pytest.raises(NotAuthorizedError):
        store.save_copy(owned.id, "intruder")


def test_list_for_user_newest_first(db, store):
    first = store.create(_plan(), make_prefs(city="Jeddah"), user_id="u1")
    second = store.save_copy(first.id, "u1", name="Copy")
    db["itineraries"].update_one(
        {"_id": ObjectId(first.id)}, {"$set": {"createdAt": utcnow() - timedelta(hours=1)}}
    )
    store.create(_plan(), make_prefs(), user_id="u2")

    listed = store.list_for_user("u1")
    assert [i.id for i in listed] == [second.id, first.id]


def test_update_name_and_days(store):
    itinerary = store.create(_plan(), make_prefs(), user_id="u1")
    new_days = [_day(1), _day(2)]
    new_days[0].notes = "Start early"

    updated = store.update(itinerary.id, "u1", name="Renamed", days=new_days)

    assert updated.name == "Renamed"
    assert updated.days[0].notes == "Start early"
    assert updated.last_updated >= itinerary.last_updated.replace(microsecond=0)


def test_update_rejects_bad_day_sequence_and_non_owner(store):
    itinerary = store.create(_plan(), make_prefs(), user_id="u1")
    with pytest.raises(InvalidItineraryError):
        store.update(itinerary.id, "u1", days=[_day(1)])
    with pytest.raises(InvalidItineraryError):
        store.update(itinerary.id, "u1", days=[_day(2), _day(1)])
    with pytest.raises(NotAuthorizedError):
        store.update(itinerary.id, "u2", name="Hijacked")

    anonymous = store.create(_plan(), make_prefs())
    with pytest.raises(NotAuthorizedError):
        store.update(anonymous.id, "u1", name="Mine now")


def test_delete_by_owner_or_admin(store):
    mine = store.create(_plan(), make_prefs(), user_id="u1")
    theirs = store.create(_plan(), make_prefs(), user_id="u2")

    with pytest.raises(NotAuthorizedError):
        store.delete(theirs.id, "u1")

    store.delete(mine.id, "u1")
    store.delete(theirs.id, "admin", is_admin=True)
    with pytest.raises(ItineraryNotFoundError):
        store.get(mine.id)
    with pytest.raises(ItineraryNotFoundError):
        store.get(theirs.id)


def test_sweep_removes_only_expired_temporary_records(db, store):
    col = db["itineraries"]
    expired = store.create(_plan(), make_prefs())
    fresh = store.create(_plan(), make_prefs())
    permanent = store.create(_plan(), make_prefs(), user_id="u1")
    col.update_one(
        {"_id": ObjectId(expired.id)},
        {"$set": {"expiresAt": utcnow() - timedelta(hours=1)}},
    )

    assert store.sweep_expired() == 1
    remaining = {str(d["_id"]) for d in col.find()}
    assert remaining == {fresh.id, permanent.id}
    assert store.sweep_expired() == 0


def test_sweep_at_future_instant_removes_all_temporary(store):
    store.create(_plan(), make_prefs())
    store.create(_plan(), make_prefs(), user_id="u1")
    assert store.sweep_expired(now=utcnow() + timedelta(days=2)) == 1
    assert len(store.list_for_user("u1")) == 1

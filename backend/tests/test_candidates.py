import pytest

from conftest import make_prefs
from tripcraft.graph.candidates import CandidateSelector, price_tiers_for
from tripcraft.integrations.exceptions import NoDestinationDataError


def names(items):
    return [i.name for i in items]


def test_price_tiers_by_budget():
    assert price_tiers_for("Low") == ["$", "$$"]
    assert price_tiers_for("Medium") == ["$$", "$$$"]
    assert price_tiers_for("Luxury") == ["$$$", "$$$$"]
    assert price_tiers_for("Unknown") is None


def test_activities_match_interest_by_type(catalog):
    selected = CandidateSelector(catalog).select_activities(make_prefs(interests=["Historical"]))
    assert sorted(names(selected)) == ["Diriyah", "Masmak Fortress"]


def test_activities_match_interest_by_category(catalog):
    selected = CandidateSelector(catalog).select_activities(make_prefs(interests=["Indoor"]))
    assert names(selected) == ["National Museum"]


def test_activities_relax_to_whole_city_when_nothing_matches(catalog):
    selected = CandidateSelector(catalog).select_activities(make_prefs(interests=["Concerts"]))
    assert len(selected) == 4
    assert all(a.city == "Riyadh" for a in selected)


def test_hotels_filtered_by_budget(catalog):
    selected = CandidateSelector(catalog).select_hotels(make_prefs(budget="Medium"))
    assert sorted(names(selected)) == ["Grand Riyadh", "Olaya Suites"]
    assert {h.price_tier for h in selected} <= {"$$", "$$$"}


def test_hotels_relax_to_any_tier_when_budget_has_none(catalog):
    selected = CandidateSelector(catalog).select_hotels(make_prefs(city="Taif", budget="Low"))
    assert names(selected) == ["Taif Hillside"]


def test_restaurants_without_food_preferences_returns_city_restaurants(catalog):
    selected = CandidateSelector(catalog).select_restaurants(make_prefs())
    assert len(selected) == 4


def test_restaurants_filtered_by_cuisine_alias_and_category(catalog):
    selector = CandidateSelector(catalog)
    by_cuisine = selector.select_restaurants(make_prefs(foodPreferences={"cuisines": ["saudi"]}))
    assert names(by_cuisine) == ["Najd Village"]

    by_both = selector.select_restaurants(
        make_prefs(foodPreferences={"cuisines": ["lebanese", "japanese"], "categories": ["fine_dining"]})
    )
    assert sorted(names(by_both)) == ["Lusin", "Sushi Yoshi"]


def test_unknown_food_codes_do_not_filter(catalog):
    selected = CandidateSelector(catalog).select_restaurants(
        make_prefs(foodPreferences={"cuisines": ["martian"]})
    )
    assert len(selected) == 4


def test_select_substitutes_placeholders_for_empty_city(catalog):
    candidates = CandidateSelector(catalog).select(make_prefs(city="Abha", budget="Luxury"))
    assert names(candidates.activities) == ["Explore the city"]
    assert names(candidates.hotels) == ["Recommended Hotel"]
    assert candidates.hotels[0].price_tier == "$$$"
    assert len(candidates.restaurants) == 5
    assert candidates.restaurants[0].name == "Abha Traditional Restaurant"
    assert candidates.restaurants[3].cuisine == "French"


def test_select_keeps_real_lists_and_fills_only_missing_ones(catalog):
    candidates = CandidateSelector(catalog).select(make_prefs(city="Jeddah"))
    assert names(candidates.activities) == ["Al-Balad"]
    assert names(candidates.hotels) == ["Recommended Hotel"]
    assert len(candidates.restaurants) == 5


def test_select_raises_when_nothing_is_available(catalog, monkeypatch):
    selector = CandidateSelector(catalog)
    for attr in ("placeholder_activities", "placeholder_hotels", "placeholder_restaurants"):
        monkeypatch.setattr(selector, attr, lambda prefs: [])
    with pytest.raises(NoDestinationDataError):
        selector.select(make_prefs(city="Abha"))


def test_catalog_documents_expose_coordinates_and_ids(catalog):
    masmak = next(a for a in catalog.activities_in_city("Riyadh", 10) if a.name == "Masmak Fortress")
    assert masmak.coordinates == [46.7135, 24.6312]
    assert isinstance(masmak.id, str) and masmak.id


def test_available_categories_sorted(catalog):
    assert catalog.available_categories("Riyadh") == ["Family-friendly", "Indoor", "Outdoor"]

import pytest

from foodcritic.discovery.models import Place
from foodcritic.geo.fence import BoundingBox
from foodcritic.storage.places import PlaceStore
from foodcritic.storage.ratings import RatingStore

DOWNTOWN = (32.7157, -117.1611)


def _ids(places):
    return [p.id for p in places]


def test_find_by_id_with_derived_rating(store):
    place = store.find_by_id("lajolla-1")
    assert place.name == "La Jolla Sushi"
    assert place.average_rating == pytest.approx(4.8)
    assert place.review_count == 5


def test_unrated_place_has_zero_aggregates(store):
    place = store.find_by_id("random-1")
    assert place.average_rating == 0.0
    assert place.review_count == 0


def test_find_by_id_missing(store):
    assert store.find_by_id("nope") is None


def test_region_listing_is_fenced_and_ordered_by_name(store):
    assert _ids(store.find_all_in_region()) == ["gaslamp-1", "lajolla-1", "northpark-1", "random-1"]


def test_region_listing_paged(store):
    page = store.find_all_in_region_paged(offset=2, size=3)
    assert page.total == 4
    assert _ids(page.items) == ["northpark-1", "random-1"]


def test_bounding_box_query(store):
    box = BoundingBox(32.70, 32.76, -117.17, -117.12)
    assert sorted(_ids(store.find_in_bounding_box(box))) == ["gaslamp-1", "northpark-1"]


def test_nearby_in_region_respects_radius_and_order(store):
    assert _ids(store.find_nearby_in_region(*DOWNTOWN, 6.0)) == ["gaslamp-1", "northpark-1"]
    assert _ids(store.find_nearby_in_region(*DOWNTOWN, 1.0)) == ["gaslamp-1"]


def test_within_radius_ignores_fence(store):
    assert _ids(store.find_within_radius(34.1, -118.33, 5.0)) == ["la-1"]
    assert store.find_nearby_in_region(34.1, -118.33, 5.0) == []


def test_distinct_cuisines_in_region(store):
    assert store.find_distinct_cuisines_in_region() == ["American", "Japanese", "Mexican"]


def test_distinct_neighborhoods_in_region(store):
    assert store.find_distinct_neighborhoods_in_region() == [
        "Gaslamp Quarter",
        "La Jolla",
        "North Park",
        "Other San Diego Areas",
    ]


def test_find_by_neighborhood(store):
    assert _ids(store.find_by_neighborhood_in_region("north park")) == ["northpark-1"]
    assert store.find_by_neighborhood_in_region("los angeles") == []


def test_ordered_by_rating_puts_unrated_last(store):
    ordered = _ids(store.find_all_ordered_by_rating())
    assert ordered[:3] == ["lajolla-1", "gaslamp-1", "northpark-1"]
    assert set(ordered[3:]) == {"random-1", "la-1", "stub-1"}


def test_save_upserts_by_id(store):
    store.save(Place(id="random-1", name="Random Diner II", cuisine="Diner"))
    assert store.find_by_id("random-1").name == "Random Diner II"
    assert len(store) == 6


def test_insert_if_absent_keeps_existing(store):
    place, created = store.insert_if_absent(Place(id="gaslamp-1", name="Impostor"))
    assert not created
    assert place.name == "Gaslamp Grill"

    place, created = store.insert_if_absent(Place(id="new-1", name="Newcomer"))
    assert created
    assert store.find_by_id("new-1").name == "Newcomer"


def test_empty_store_queries():
    store = PlaceStore()
    assert store.find_all_in_region() == []
    assert store.find_nearby_in_region(*DOWNTOWN, 5.0) == []
    assert store.find_distinct_cuisines_in_region() == []
    assert store.find_distinct_neighborhoods_in_region() == []


def test_csv_export_and_reload(store, tmp_path):
    path = store.to_csv(tmp_path / "restaurants.csv")
    reloaded = PlaceStore.from_csv(path)

    assert len(reloaded) == len(store)
    gaslamp = reloaded.find_by_id("gaslamp-1")
    assert gaslamp.price_level == 2
    assert gaslamp.open_now is True
    stub = reloaded.find_by_id("stub-1")
    assert stub.latitude is None and stub.longitude is None
    assert _ids(reloaded.find_all_in_region()) == _ids(store.find_all_in_region())


def test_place_requires_paired_coordinates():
    with pytest.raises(ValueError):
        Place(id="x", name="Half", latitude=32.7)


# ── Ratings ──────────────────────────────────────────────────────────────


def test_rating_upsert_one_per_reviewer():
    ratings = RatingStore()
    ratings.upsert("p1", "alice", 2)
    ratings.upsert("p1", "alice", 5, "changed my mind")
    ratings.upsert("p1", "bob", 3)

    assert len(ratings.find_by_place("p1")) == 2
    assert ratings.aggregates() == {"p1": (4.0, 2)}
    assert ratings.find_by_reviewer("alice")[0].comment == "changed my mind"


def test_rating_score_range():
    with pytest.raises(ValueError):
        RatingStore().upsert("p1", "alice", 6)


def test_recent_ratings_limit(store):
    assert len(store.ratings.find_recent(3)) == 3
    assert store.ratings.find_recent(0) == []


def test_csv_reload_keeps_digit_only_text_as_strings(tmp_path):
    path = tmp_path / "digits.csv"
    path.write_text(
        "id,name,cuisine,address,phone_number,website,latitude,longitude,"
        "price_level,open_now,user_ratings_total,created_at\n"
        "12345,7,Restaurant,,6192398176,,32.7157,-117.1611,,,,\n"
    )

    store = PlaceStore.from_csv(path)

    place = store.find_by_id("12345")
    assert place.phone_number == "6192398176"
    assert place.name == "7"
    assert place.address is None
    assert place.price_level is None

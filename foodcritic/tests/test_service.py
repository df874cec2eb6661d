from foodcritic.discovery.models import SearchCriteria, SortKey
from foodcritic.discovery.service import DiscoveryService
from foodcritic.geo.distance import distance_km

DOWNTOWN = (32.7157, -117.1611)


def _ids(places):
    return [p.id for p in places]


def test_list_in_region_ordered_by_name(store):
    assert _ids(DiscoveryService(store).list_in_region()) == [
        "gaslamp-1",
        "lajolla-1",
        "northpark-1",
        "random-1",
    ]


def test_search_min_rating(store):
    # averages: gaslamp 4.0, lajolla 4.8, northpark 3.5, random unrated
    results = DiscoveryService(store).search(SearchCriteria(min_rating=4.0))
    assert sorted(_ids(results)) == ["gaslamp-1", "lajolla-1"]


def test_search_filters_then_sorts(store):
    results = DiscoveryService(store).search(SearchCriteria(cuisine="american", sort_by=SortKey.rating))
    assert _ids(results) == ["gaslamp-1", "random-1"]


def test_search_never_leaves_region(store):
    assert DiscoveryService(store).search(SearchCriteria(name="pizza")) == []


def test_search_sort_by_distance(store):
    criteria = SearchCriteria(sort_by=SortKey.distance, latitude=DOWNTOWN[0], longitude=DOWNTOWN[1])
    assert _ids(DiscoveryService(store).search(criteria))[:2] == ["gaslamp-1", "northpark-1"]


def test_nearby_only_returns_places_within_radius(store):
    service = DiscoveryService(store)
    for radius in (0.5, 1.0, 6.0, 20.0, 50.0):
        results = service.nearby(*DOWNTOWN, radius)
        distances = [distance_km(*DOWNTOWN, p.latitude, p.longitude) for p in results]
        assert all(d <= radius for d in distances)
        assert distances == sorted(distances)


def test_nearby_outside_region_degrades_to_listing(store):
    service = DiscoveryService(store)
    assert service.nearby(34.0522, -118.2437, 5.0) == service.list_in_region()


def test_search_by_location_and_neighborhood(store):
    service = DiscoveryService(store)
    assert _ids(service.search_by_location(34.1, -118.33, 2.0)) == ["la-1"]
    assert _ids(service.search_by_neighborhood("gaslamp")) == ["gaslamp-1"]


def test_paged_listing(store):
    page = DiscoveryService(store).list_in_region_paged(page=1, size=3)
    assert page.total == 4
    assert _ids(page.items) == ["random-1"]


def test_autocomplete_delegates(store):
    suggestions = DiscoveryService(store).autocomplete("taco", 4)
    assert [s.id for s in suggestions] == ["northpark-1"]

"""Tests for ResolveRouteStopsUseCase."""

import pytest

from shuttle.application.use_cases.resolve_route_stops import ResolveRouteStopsUseCase
from shuttle.domain.errors import RouteNotFoundError
from shuttle.domain.value_objects.geo_point import GeoPoint

ABAYA = GeoPoint(latitude=43.24, longitude=76.93)
DOSTYK = GeoPoint(latitude=43.23, longitude=76.96)


@pytest.mark.asyncio
async def test_resolves_known_stops(store, fake_geocoder_cls):
    route = store.add_route(stops=["пр. Абая 10", "нигде", "пр. Достык 5"])
    geocoder = fake_geocoder_cls({"пр. Абая 10": ABAYA, "пр. Достык 5": DOSTYK})

    result = await ResolveRouteStopsUseCase(geocoder, store.route_repo).execute(route.id)

    assert result.stop_locations == [ABAYA, DOSTYK]
    assert store.routes[route.id].stop_locations == [ABAYA, DOSTYK]
    assert geocoder.queries == ["пр. Абая 10", "нигде", "пр. Достык 5"]


@pytest.mark.asyncio
async def test_unresolvable_stops_clear_locations(store, fake_geocoder_cls):
    route = store.add_route(stops=["нигде"], stop_locations=[ABAYA])

    result = await ResolveRouteStopsUseCase(fake_geocoder_cls(), store.route_repo).execute(route.id)

    assert result.stop_locations == []
    assert store.routes[route.id].stop_locations == []


@pytest.mark.asyncio
async def test_missing_route(store, fake_geocoder_cls):
    with pytest.raises(RouteNotFoundError):
        await ResolveRouteStopsUseCase(fake_geocoder_cls(), store.route_repo).execute(7)


def _editing_geocoder(base_cls, store, route_id, points, **changes):
    """Geocoder that edits the stored route on its first lookup, like a concurrent PUT."""

    class EditingGeocoder(base_cls):
        async def geocode(self, address):
            if not self.queries:
                for field, value in changes.items():
                    setattr(store.routes[route_id], field, value)
            return await super().geocode(address)

    return EditingGeocoder(points)


@pytest.mark.asyncio
async def test_stop_edit_during_geocoding_wins(store, fake_geocoder_cls):
    route = store.add_route(capacity=10, stops=["пр. Абая 10"])
    geocoder = _editing_geocoder(
        fake_geocoder_cls, store, route.id, {"пр. Абая 10": ABAYA},
        capacity=3, stops=["пр. Достык 5"], stop_locations=[],
    )

    result = await ResolveRouteStopsUseCase(geocoder, store.route_repo).execute(route.id)

    stored = store.routes[route.id]
    assert stored.capacity == 3
    assert stored.stops == ["пр. Достык 5"]
    assert stored.stop_locations == []
    assert result.stops == ["пр. Достык 5"]
    assert result.stop_locations == []


@pytest.mark.asyncio
async def test_capacity_edit_during_geocoding_survives(store, fake_geocoder_cls):
    route = store.add_route(capacity=10, stops=["пр. Абая 10"])
    geocoder = _editing_geocoder(
        fake_geocoder_cls, store, route.id, {"пр. Абая 10": ABAYA}, capacity=3,
    )

    result = await ResolveRouteStopsUseCase(geocoder, store.route_repo).execute(route.id)

    stored = store.routes[route.id]
    assert stored.capacity == 3
    assert stored.stop_locations == [ABAYA]
    assert result.capacity == 3
    assert store.route_repo.lock_requests == [route.id]

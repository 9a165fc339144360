"""ResolveRouteStopsUseCase — geocode route stop addresses for proximity scoring."""

from __future__ import annotations

import logging

from shuttle.application.ports.geocoder_port import GeocoderPort
from shuttle.application.ports.route_repo import RouteRepository
from shuttle.domain.entities.route import Route
from shuttle.domain.errors import RouteNotFoundError

logger = logging.getLogger(__name__)


class ResolveRouteStopsUseCase:
    def __init__(self, geocoder: GeocoderPort, route_repo: RouteRepository):
        self._geocoder = geocoder
        self._routes = route_repo

    async def execute(self, route_id: int) -> Route:
        """Geocode every stop of the route and store the coordinates that resolved.

        Stops that cannot be geocoded are left out; a route whose stops all fail
        keeps an empty ``stop_locations`` list and scores with the placeholder.
        Geocoding runs without a lock. The route is re-read under lock afterwards
        and the coordinates are written only if its stop list is unchanged.
        """
        route = await self._routes.get_by_id(route_id)
        if route is None:
            raise RouteNotFoundError(route_id)

        geocoded_stops = list(route.stops)
        locations = []
        for stop in geocoded_stops:
            point = await self._geocoder.geocode(stop)
            if point is None:
                logger.warning("Route %d: stop '%s' could not be geocoded", route_id, stop)
                continue
            locations.append(point)

        current = await self._routes.get_by_id(route_id, for_update=True)
        if current is None:
            raise RouteNotFoundError(route_id)
        if current.stops != geocoded_stops:
            logger.warning("Route %d: stops changed while geocoding, coordinates discarded", route_id)
            return current

        await self._routes.set_stop_locations(route_id, locations)
        current.stop_locations = locations
        logger.info(
            "Route %d: resolved %d/%d stops", route_id, len(locations), len(geocoded_stops)
        )
        return current

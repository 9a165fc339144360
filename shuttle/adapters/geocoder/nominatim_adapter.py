"""Nominatim geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import logging

import httpx

from shuttle.application.ports.geocoder_port import GeocoderPort
from shuttle.config import settings
from shuttle.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"

# City centroid fallback: cities the service operates in
CITY_CENTROIDS: dict[str, GeoPoint] = {
    "алматы": GeoPoint(latitude=43.238949, longitude=76.945465),
    "almaty": GeoPoint(latitude=43.238949, longitude=76.945465),
    "астана": GeoPoint(latitude=51.128207, longitude=71.430411),
    "astana": GeoPoint(latitude=51.128207, longitude=71.430411),
    "шымкент": GeoPoint(latitude=42.315514, longitude=69.596428),
    "караганда": GeoPoint(latitude=49.806406, longitude=73.085485),
    "қарағанды": GeoPoint(latitude=49.806406, longitude=73.085485),
    "актобе": GeoPoint(latitude=50.283935, longitude=57.166978),
    "ақтөбе": GeoPoint(latitude=50.283935, longitude=57.166978),
    "тараз": GeoPoint(latitude=42.901183, longitude=71.378309),
    "павлодар": GeoPoint(latitude=52.287430, longitude=76.967454),
    "нур-султан": GeoPoint(latitude=51.128207, longitude=71.430411),  # old name for Astana
}

# Street-type words stripped from the broader second query
_STREET_WORDS = ("ул.", "улица", "пр-т", "проспект", "пр.", "мкр.", "пл.", "көшесі", "даңғылы")


class NominatimAdapter(GeocoderPort):
    """Nominatim geocoding with city centroid fallback and caching."""

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float = 10.0,
        country_codes: str | None = None,
    ):
        self._user_agent = user_agent or settings.geocoder_user_agent
        self._timeout = timeout
        self._country_codes = country_codes if country_codes is not None else settings.geocoder_country_codes
        self._cache: dict[str, GeoPoint | None] = {}

    async def geocode(self, address: str) -> GeoPoint | None:
        """Geocode an address string to GeoPoint.

        Strategy:
        1. Check in-memory cache
        2. Try Nominatim API
        3. Fall back to city centroid lookup
        """
        cache_key = address.strip().lower()
        if not cache_key:
            return None

        if cache_key in self._cache:
            logger.debug("Cache hit for '%s'", address)
            return self._cache[cache_key]

        point = await self._nominatim_lookup(address)
        if point is None:
            point = self._city_centroid_lookup(address)

        self._cache[cache_key] = point
        return point

    async def _nominatim_lookup(self, address: str) -> GeoPoint | None:
        """Query Nominatim API."""
        params = {"format": "json", "limit": 1}
        if self._country_codes:
            params["countrycodes"] = self._country_codes
        try:
            async with httpx.AsyncClient() as client:
                for query in self._build_queries(address):
                    response = await client.get(
                        NOMINATIM_URL,
                        params={"q": query, **params},
                        headers={"User-Agent": self._user_agent},
                        timeout=self._timeout,
                    )
                    response.raise_for_status()
                    results = response.json()

                    if results:
                        lat = float(results[0]["lat"])
                        lon = float(results[0]["lon"])
                        logger.info("Nominatim resolved '%s' (q='%s') → (%f, %f)", address, query, lat, lon)
                        return GeoPoint(latitude=lat, longitude=lon)

                logger.info("Nominatim returned no results for '%s'", address)
                return None

        except httpx.HTTPError:
            logger.exception("Nominatim API error for '%s'", address)
            return None

    @staticmethod
    def _city_centroid_lookup(address: str) -> GeoPoint | None:
        """Try to match a city name in the address for centroid fallback."""
        address_lower = address.lower()
        for city, point in CITY_CENTROIDS.items():
            if city in address_lower:
                logger.info("City centroid fallback: '%s' → %s", address, city)
                return point
        logger.warning("No geocoding result for '%s'", address)
        return None

    @staticmethod
    def _build_queries(address: str) -> list[str]:
        """Build a few query variants for better hit rate.

        1) full address
        2) without house numbers and street-type words
        """
        q1 = address.strip()
        q2 = q1.lower()
        for word in _STREET_WORDS:
            q2 = q2.replace(word, "")
        q2 = " ".join(p for p in q2.replace(",", " ").split() if not any(ch.isdigit() for ch in p))
        queries = [q1]
        if q2 and q2 != q1.lower():
            queries.append(q2)
        return queries

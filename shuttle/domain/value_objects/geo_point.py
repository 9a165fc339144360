"""GeoPoint value object — immutable (lat, lon) pair."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def haversine_km(self, other: "GeoPoint") -> float:
        """Calculate distance in km between two points using the Haversine formula."""
        earth_radius_km = 6371.0

        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlat = math.radians(other.latitude - self.latitude)
        dlon = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return earth_radius_km * c

    def nearest_km(self, others: list["GeoPoint"]) -> float | None:
        """Distance to the closest of *others*, or None when the list is empty."""
        if not others:
            return None
        return min(self.haversine_km(o) for o in others)

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.latitude, "lng": self.longitude}

    @classmethod
    def from_dict(cls, raw: dict | None) -> "GeoPoint | None":
        """Build from a ``{"lat": .., "lng": ..}`` mapping (the stored JSON shape)."""
        if not raw:
            return None
        lat = raw.get("lat")
        lng = raw.get("lng")
        if lat is None or lng is None:
            return None
        return cls(latitude=float(lat), longitude=float(lng))

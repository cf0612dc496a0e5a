"""
Report data model.

Represents a single point cleanliness rating dropped on the map.
"""

import math
from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Report:
    """
    A point-based cleanliness rating.
    Append-only: once persisted a report is never mutated or deleted.
    """
    latitude: float  # Decimal degrees
    longitude: float  # Decimal degrees
    rating: int  # 0-10, not validated here
    radius: float  # Display radius in meters
    timestamp: Any = None  # datetime, store timestamp, epoch or string
    id: Optional[str] = None  # Assigned by the store
    user_id: Optional[str] = None
    user_name: Optional[str] = None

    def with_id(self, report_id: str) -> "Report":
        """Return a copy of this report carrying the store-assigned id."""
        return replace(self, id=report_id)

    @classmethod
    def from_dict(cls, data: dict) -> "Report":
        """
        Create Report from a store record.

        Accepts both camelCase (userId, userName) and snake_case keys.

        Raises:
            ValueError: If latitude, longitude or rating is missing, a
                coordinate is not finite, or rating/radius is not a number
        """
        missing = [k for k in ("latitude", "longitude", "rating") if data.get(k) is None]
        if missing:
            raise ValueError(f"Report record missing fields: {', '.join(missing)}")

        latitude = float(data["latitude"])
        longitude = float(data["longitude"])
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ValueError(f"Non-finite coordinates: ({latitude}, {longitude})")

        rating = data["rating"]
        radius = data.get("radius", 0)
        for name, value in (("rating", rating), ("radius", radius)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Non-numeric {name}: {value!r}")

        return cls(
            latitude=latitude,
            longitude=longitude,
            rating=rating,
            radius=radius,
            timestamp=data.get("timestamp"),
            id=data.get("id"),
            user_id=data.get("userId", data.get("user_id")),
            user_name=data.get("userName", data.get("user_name")),
        )

    def to_dict(self) -> dict:
        """Convert to a store record (camelCase keys, absent optionals dropped)."""
        record = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "rating": self.rating,
            "radius": self.radius,
            "timestamp": self.timestamp,
        }
        if self.id is not None:
            record["id"] = self.id
        if self.user_id is not None:
            record["userId"] = self.user_id
        if self.user_name is not None:
            record["userName"] = self.user_name
        return record

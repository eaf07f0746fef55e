"""
Weather data models.

Contains DTOs for provider time series and per-polygon results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class WeatherSeries:
    """Hourly samples of one field for one coordinate."""

    latitude: float
    longitude: float
    field: str
    time: List[str] = field(default_factory=list)
    values: List[Optional[float]] = field(default_factory=list)

    @classmethod
    def from_response(cls, payload: Dict[str, Any], field_name: str) -> "WeatherSeries":
        """
        Build a series from the provider's JSON body.

        Expected shape: {latitude, longitude, hourly: {time: [...], <field>: [...]}}

        Raises:
            ValueError: If the hourly block or the field is missing, or the
                        time and value lists differ in length
        """
        hourly = payload.get("hourly")
        if not isinstance(hourly, dict):
            raise ValueError("Response has no 'hourly' block")

        times = hourly.get("time") or []
        if field_name not in hourly:
            if times:
                raise ValueError(f"Response has no hourly field '{field_name}'")
            values: List[Optional[float]] = []
        else:
            values = list(hourly[field_name] or [])

        if len(times) != len(values):
            raise ValueError(
                f"Mismatched hourly arrays: {len(times)} timestamps, {len(values)} values"
            )

        return cls(
            latitude=payload.get("latitude"),
            longitude=payload.get("longitude"),
            field=field_name,
            time=list(times),
            values=values,
        )

    def __len__(self) -> int:
        return len(self.time)


@dataclass
class PolygonValue:
    """Resolved scalar for one polygon in one refresh cycle."""

    polygon_id: str
    value: float
    timestamp: datetime

"""
Polygon and data source models.

Contains DTOs for user-drawn regions and the rules used to color them.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..core import constants


OPERATORS = ("=", "<", ">", "<=", ">=")

Coordinate = Tuple[float, float]  # (latitude, longitude)


def generate_unique_id() -> str:
    """Generate a unique identifier for new polygons and rules."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ColorRule:
    """Single threshold condition mapping a value to a color."""

    id: str
    operator: str
    value: float
    color: str
    label: str = ""

    def __post_init__(self) -> None:
        if self.operator not in OPERATORS:
            raise ValueError(
                f"Unknown operator {self.operator!r}, expected one of {', '.join(OPERATORS)}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorRule":
        return cls(
            id=str(data.get("id") or generate_unique_id()),
            operator=data["operator"],
            value=float(data["value"]),
            color=data["color"],
            label=data.get("label", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "operator": self.operator,
            "value": self.value,
            "color": self.color,
            "label": self.label,
        }


@dataclass
class DataSource:
    """Measured field plus the rules used to color polygons referencing it."""

    id: str
    name: str
    field: str = constants.DEFAULT_HOURLY_FIELD
    color_rules: Tuple[ColorRule, ...] = ()

    def __post_init__(self) -> None:
        self.color_rules = tuple(self.color_rules)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataSource":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            field=data.get("field", constants.DEFAULT_HOURLY_FIELD),
            color_rules=tuple(
                ColorRule.from_dict(rule) for rule in data.get("color_rules", [])
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "field": self.field,
            "color_rules": [rule.to_dict() for rule in self.color_rules],
        }


@dataclass
class Polygon:
    """User-drawn region."""

    id: str
    name: str
    coordinates: Tuple[Coordinate, ...]
    data_source: str
    color: str = constants.NEW_POLYGON_COLOR
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        self.coordinates = tuple((float(lat), float(lon)) for lat, lon in self.coordinates)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Polygon":
        created_at = data.get("created_at")
        return cls(
            id=str(data.get("id") or generate_unique_id()),
            name=data["name"],
            coordinates=tuple(tuple(point) for point in data["coordinates"]),
            data_source=data.get("data_source", constants.DEFAULT_DATA_SOURCE_ID),
            color=data.get("color", constants.NEW_POLYGON_COLOR),
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "coordinates": [list(point) for point in self.coordinates],
            "data_source": self.data_source,
            "color": self.color,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class TimeRange:
    """Inclusive time interval. Callers keep start <= end."""

    start: datetime
    end: datetime


def default_data_source() -> DataSource:
    """Built-in hourly temperature source."""
    return DataSource(
        id=constants.DEFAULT_DATA_SOURCE_ID,
        name=constants.DEFAULT_DATA_SOURCE_NAME,
        field=constants.DEFAULT_HOURLY_FIELD,
        color_rules=tuple(ColorRule.from_dict(rule) for rule in constants.DEFAULT_COLOR_RULES),
    )


def initial_color(source: Optional[DataSource]) -> str:
    """Color for a freshly drawn polygon: the source's first rule color."""
    if source and source.color_rules:
        return source.color_rules[0].color
    return constants.NEW_POLYGON_COLOR

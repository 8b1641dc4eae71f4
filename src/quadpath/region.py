"""
Region and coordinate value types.

A Region is the lng/lat rectangle that every path is relative to. The
default Region is the whole globe; a tighter Region gives more effective
precision per path digit.
"""

from __future__ import annotations
from dataclasses import dataclass


class InvalidRegion(ValueError):
    """Raised when Region bounds are out of range or inverted."""


@dataclass(frozen=True)
class Coordinate:
    """A longitude/latitude pair in degrees. No range is enforced."""
    lng: float
    lat: float


@dataclass(frozen=True)
class BoundingBox:
    """
    An axis-aligned lng/lat rectangle.

    Bounds are inclusive on all four sides.
    """
    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float

    def __post_init__(self):
        if self.min_lng > self.max_lng or self.min_lat > self.max_lat:
            raise ValueError(
                f"Invalid bounding box: min_lng={self.min_lng}, min_lat={self.min_lat}, "
                f"max_lng={self.max_lng}, max_lat={self.max_lat}"
            )

    @property
    def center(self) -> Coordinate:
        """Center point of the box."""
        return Coordinate(
            (self.min_lng + self.max_lng) / 2,
            (self.min_lat + self.max_lat) / 2,
        )

    def contains(self, coordinate: Coordinate, tolerance: float = 0.0) -> bool:
        """Check if a coordinate lies within the box (inclusive)."""
        return (
            self.min_lng - tolerance <= coordinate.lng <= self.max_lng + tolerance
            and self.min_lat - tolerance <= coordinate.lat <= self.max_lat + tolerance
        )


@dataclass(frozen=True)
class Region:
    """
    The encoding universe.

    Invariants:
    - -180 <= min_lng <= max_lng <= 180
    - -90 <= min_lat <= max_lat <= 90
    """
    min_lng: float = -180.0
    min_lat: float = -90.0
    max_lng: float = 180.0
    max_lat: float = 90.0

    def __post_init__(self):
        if not -180.0 <= self.min_lng <= self.max_lng <= 180.0:
            raise InvalidRegion(
                f"Invalid longitude bounds: min_lng={self.min_lng}, max_lng={self.max_lng}"
            )
        if not -90.0 <= self.min_lat <= self.max_lat <= 90.0:
            raise InvalidRegion(
                f"Invalid latitude bounds: min_lat={self.min_lat}, max_lat={self.max_lat}"
            )

    @classmethod
    def whole_globe(cls) -> Region:
        return cls()

    @classmethod
    def parse(cls, text: str) -> Region:
        """
        Build a Region from "min_lng,min_lat,max_lng,max_lat".

        Args:
            text: Four comma-separated numbers

        Returns:
            Region with those bounds
        """
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 4:
            raise InvalidRegion(f"Expected 4 comma-separated bounds, got {text!r}")
        try:
            min_lng, min_lat, max_lng, max_lat = (float(p) for p in parts)
        except ValueError:
            raise InvalidRegion(f"Region bounds must be numbers, got {text!r}") from None
        return cls(min_lng, min_lat, max_lng, max_lat)

    @property
    def center(self) -> Coordinate:
        """Center of the Region; the origin of the first subdivision."""
        return Coordinate(
            (self.min_lng + self.max_lng) / 2,
            (self.min_lat + self.max_lat) / 2,
        )

    @property
    def half_extent(self) -> Coordinate:
        """Half-width and half-height of the Region."""
        return Coordinate(
            (self.max_lng - self.min_lng) / 2,
            (self.max_lat - self.min_lat) / 2,
        )

    def contains(self, coordinate: Coordinate) -> bool:
        """Check if a coordinate is inside the Region (inclusive)."""
        return (
            self.min_lng <= coordinate.lng <= self.max_lng
            and self.min_lat <= coordinate.lat <= self.max_lat
        )

    def as_bounding_box(self) -> BoundingBox:
        return BoundingBox(self.min_lng, self.min_lat, self.max_lng, self.max_lat)

"""
Quadrant-path encoding and decoding.

A path is a string over the alphabet "ABCD". Each digit records which
quadrant of the current cell a coordinate falls in, so a path of length p
names a cell after p recursive halvings of the Region.

Quadrant digits (fixed for consistency):
- A: north-east (lng >= origin.lng and lat >= origin.lat)
- B: north-west (lng <= origin.lng and lat >= origin.lat)
- C: south-west (lng <= origin.lng and lat <= origin.lat)
- D: south-east (everything else)

The tests run in A, B, C, D order, so a coordinate on a cell boundary
resolves toward the higher-lng/higher-lat side first.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .region import BoundingBox, Coordinate, Region


ALPHABET = "ABCD"

# Digit -> (lng sign, lat sign) applied to the origin shift
QUADRANT_SIGNS: Dict[str, Tuple[int, int]] = {
    "A": (1, 1),
    "B": (-1, 1),
    "C": (-1, -1),
    "D": (1, -1),
}

OFFSETS = (-1, 0, 1)


class InvalidPath(ValueError):
    """Raised when a path contains a symbol outside the quadrant alphabet."""


@dataclass(frozen=True)
class DecodedCell:
    """
    A decoded path: cell center plus half-extents.

    The cell is origin +/- error on each axis.
    """
    origin: Coordinate
    error: Coordinate

    @property
    def bounding_box(self) -> BoundingBox:
        return BoundingBox(
            self.origin.lng - self.error.lng,
            self.origin.lat - self.error.lat,
            self.origin.lng + self.error.lng,
            self.origin.lat + self.error.lat,
        )


def _quadrant_for(coordinate: Coordinate, origin_lng: float, origin_lat: float) -> str:
    lng, lat = coordinate.lng, coordinate.lat
    if lng >= origin_lng and lat >= origin_lat:
        return "A"
    elif lng <= origin_lng and lat >= origin_lat:
        return "B"
    elif lng <= origin_lng and lat <= origin_lat:
        return "C"
    else:
        return "D"


def check_integer(value, name: str) -> None:
    """Raise ValueError unless value is an int (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")


def validate_path(path: str) -> None:
    """
    Check that every symbol of a path is a quadrant digit.

    Raises:
        InvalidPath: On a non-string path or an unrecognized symbol
    """
    if not isinstance(path, str):
        raise InvalidPath(f"Path must be a string, got {type(path).__name__}")
    for i, symbol in enumerate(path):
        if symbol not in QUADRANT_SIGNS:
            raise InvalidPath(
                f"Unrecognized symbol {symbol!r} at index {i} in path {path!r}"
            )


class QuadCodec:
    """
    Encoder/decoder for quadrant paths relative to a Region.

    The codec holds nothing but its Region, so one instance can be shared
    freely between callers.
    """

    def __init__(self, region: Optional[Region] = None):
        """
        Args:
            region: Encoding universe (default: whole globe)
        """
        self.region = region if region is not None else Region.whole_globe()

    def __repr__(self) -> str:
        return f"QuadCodec({self.region!r})"

    def encode(self, coordinate: Coordinate, precision: int) -> str:
        """
        Encode a coordinate to a quadrant path.

        Args:
            coordinate: Point to encode (anything with lng/lat attributes)
            precision: Number of subdivisions (= path length)

        Returns:
            Path string of length `precision`

        Coordinates outside the Region still encode; they alias onto the
        nearest edge cells.
        """
        check_integer(precision, "precision")
        if precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")

        center = self.region.center
        half = self.region.half_extent
        origin_lng, origin_lat = center.lng, center.lat
        range_lng, range_lat = half.lng, half.lat

        digits: List[str] = []
        for _ in range(precision):
            range_lng /= 2
            range_lat /= 2

            quadrant = _quadrant_for(coordinate, origin_lng, origin_lat)
            sign_lng, sign_lat = QUADRANT_SIGNS[quadrant]
            origin_lng += sign_lng * range_lng
            origin_lat += sign_lat * range_lat
            digits.append(quadrant)

        return "".join(digits)

    def decode(self, path: str) -> DecodedCell:
        """
        Decode a path to its cell center and error range.

        Args:
            path: Quadrant path

        Returns:
            DecodedCell with origin (cell center) and error (half-extents)

        Raises:
            InvalidPath: If the path contains a symbol outside "ABCD"
        """
        validate_path(path)

        center = self.region.center
        half = self.region.half_extent
        origin_lng, origin_lat = center.lng, center.lat
        range_lng, range_lat = half.lng, half.lat

        for quadrant in path:
            range_lng /= 2
            range_lat /= 2

            sign_lng, sign_lat = QUADRANT_SIGNS[quadrant]
            origin_lng += sign_lng * range_lng
            origin_lat += sign_lat * range_lat

        return DecodedCell(
            origin=Coordinate(origin_lng, origin_lat),
            error=Coordinate(range_lng, range_lat),
        )

    def neighbor(self, path: str, east: int, north: int) -> Optional[str]:
        """
        Find the adjacent cell at the same precision.

        Shifting the cell center by one full cell width lands inside the
        adjacent cell at any depth, so the neighbor is found by re-encoding
        that shifted point.

        Args:
            path: Quadrant path
            east: East offset (-1, 0, 1)
            north: North offset (-1, 0, 1)

        Returns:
            Neighbor path, or None if the neighbor lies outside the Region
        """
        if east not in OFFSETS or north not in OFFSETS:
            raise ValueError(
                f"Offsets must be -1, 0 or 1, got east={east}, north={north}"
            )

        decoded = self.decode(path)
        if east == 0 and north == 0:
            return path

        candidate = Coordinate(
            decoded.origin.lng + decoded.error.lng * east * 2,
            decoded.origin.lat + decoded.error.lat * north * 2,
        )
        if not self.region.contains(candidate):
            return None
        return self.encode(candidate, len(path))

    def neighbors(self, path: str) -> Dict[Tuple[int, int], Optional[str]]:
        """
        Find all eight adjacent cells.

        Returns:
            Dictionary mapping (east, north) -> neighbor path or None
        """
        result: Dict[Tuple[int, int], Optional[str]] = {}
        for north in (1, 0, -1):
            for east in (-1, 0, 1):
                if east == 0 and north == 0:
                    continue
                result[(east, north)] = self.neighbor(path, east, north)
        return result

    def bounding_box(self, path: str) -> BoundingBox:
        """Bounding box of the cell named by a path."""
        return self.decode(path).bounding_box

    def envelope(self, bbox: BoundingBox, precision: int) -> List[str]:
        """
        Paths of all cells at `precision` covering a bounding box.

        See quadpath.envelope.envelope for the scan order.
        """
        from .envelope import envelope
        return envelope(self, bbox, precision)

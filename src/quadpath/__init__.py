"""
quadpath: quadrant-path spatial encoding and prefix-accelerated proximity search.

This package encodes (lng, lat) coordinates as variable-precision quadrant
path strings relative to a lng/lat Region, decodes them back to a cell
center and error bound, derives neighbors, bounding boxes and covering
envelopes, and uses shared path prefixes to speed up approximate
k-nearest-neighbor search.
"""

__version__ = "0.1.0"

from .region import Region, Coordinate, BoundingBox, InvalidRegion
from .codec import QuadCodec, DecodedCell, InvalidPath, ALPHABET
from .distance import distance, EARTH_RADIUS_M
from .search import (
    AnnotatedPoint,
    Match,
    SearchConfig,
    SearchStats,
    ProximitySearcher,
    k_nearest,
    sort_by_distance,
    prefix_match_length,
)
from .duckdb_points import DuckDBPointSource

__all__ = [
    "Region",
    "Coordinate",
    "BoundingBox",
    "InvalidRegion",
    "QuadCodec",
    "DecodedCell",
    "InvalidPath",
    "ALPHABET",
    "distance",
    "EARTH_RADIUS_M",
    "AnnotatedPoint",
    "Match",
    "SearchConfig",
    "SearchStats",
    "ProximitySearcher",
    "k_nearest",
    "sort_by_distance",
    "prefix_match_length",
    "DuckDBPointSource",
]

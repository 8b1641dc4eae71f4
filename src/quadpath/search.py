"""
Approximate k-nearest-neighbor search over pre-encoded points.

Points sharing a longer path prefix with the target share a deeper
ancestor cell, so the prefix match length is a cheap proxy for proximity.
The search buckets points by prefix match, collects candidates from the
deepest buckets until it has at least k, overscans a fixed number of
shallower buckets, and only then computes exact Haversine distances.

The overscan picks up points just across a cell boundary from the target
that share a short prefix but are geometrically close. It does not bound
the miss rate for every point distribution: a true nearest neighbor whose
prefix match is more than `overscan` buckets below the richest bucket can
be missed.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from .codec import check_integer
from .distance import distance
from .region import Coordinate


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnotatedPoint:
    """
    A point carrying a pre-computed path.

    The search never encodes; `path` is treated as an opaque key computed
    by the caller at the search precision.
    """
    lng: float
    lat: float
    path: str
    data: Any = field(default=None, compare=False)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lng, self.lat)


@dataclass(frozen=True)
class Match:
    """A search result: the point, its distance to the target in meters, and its prefix match."""
    point: AnnotatedPoint
    distance: float
    prefix_match: int


@dataclass
class SearchConfig:
    """Configuration for proximity search."""

    precision: int
    """Path length of the target and every point."""

    k: int = 1
    """Number of nearest points wanted."""

    overscan: int = 1
    """Extra shallower buckets to scan once k candidates are collected."""

    def __post_init__(self):
        check_integer(self.precision, "precision")
        check_integer(self.k, "k")
        check_integer(self.overscan, "overscan")
        if self.precision < 0:
            raise ValueError("precision must be non-negative")
        if self.k < 1:
            raise ValueError("k must be at least 1")
        if self.overscan < 0:
            raise ValueError("overscan must be non-negative")


@dataclass
class SearchStats:
    """Statistics collected during the last search."""

    points_seen: int = 0
    candidates: int = 0
    buckets_visited: int = 0
    distance_evaluations: int = 0


def prefix_match_length(a: str, b: str) -> int:
    """Length of the common leading run of two paths."""
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


def sort_by_distance(target, points: Sequence[AnnotatedPoint]) -> List[Match]:
    """
    Rank every point by exact distance to the target.

    This is the full-scan baseline: one distance evaluation per point,
    no prefix filtering.
    """
    target_path = getattr(target, "path", "")
    matches = [
        Match(point, distance(target, point), prefix_match_length(target_path, point.path))
        for point in points
    ]
    matches.sort(key=lambda m: m.distance)
    return matches


class ProximitySearcher:
    """
    Prefix-bucketed approximate k-NN search.

    The searcher:
    1. Buckets points by prefix match length with the target
    2. Collects buckets from `precision` down to 0 until it has at least k
       candidates, then visits `overscan` more buckets
    3. Computes exact distances for the candidates only and keeps the k closest
    """

    def __init__(self, config: SearchConfig):
        """
        Args:
            config: Search configuration
        """
        self.config = config
        self.stats = SearchStats()

    def _check_path(self, point: AnnotatedPoint, role: str) -> None:
        if len(point.path) != self.config.precision:
            raise ValueError(
                f"{role} path {point.path!r} has length {len(point.path)}, "
                f"expected precision {self.config.precision}"
            )

    def _bucket_points(
        self, target: AnnotatedPoint, points: Sequence[AnnotatedPoint]
    ) -> Dict[int, List[AnnotatedPoint]]:
        """
        Group points by prefix match length with the target.

        Returns:
            Dictionary mapping prefix match (0..precision) -> points
        """
        buckets: Dict[int, List[AnnotatedPoint]] = {
            level: [] for level in range(self.config.precision + 1)
        }
        for point in points:
            self._check_path(point, "Point")
            buckets[prefix_match_length(target.path, point.path)].append(point)
        return buckets

    def search(
        self, target: AnnotatedPoint, points: Sequence[AnnotatedPoint]
    ) -> List[Match]:
        """
        Find the (approximately) k nearest points to the target.

        Args:
            target: Query point with a path at the search precision
            points: Candidate points with paths at the same precision

        Returns:
            Up to k matches sorted by increasing distance
        """
        self.stats = SearchStats()  # Reset stats
        self._check_path(target, "Target")

        if not points:
            return []

        precision = self.config.precision
        k = self.config.k
        self.stats.points_seen = len(points)

        buckets = self._bucket_points(target, points)

        candidates: List[AnnotatedPoint] = []
        # Buckets still to visit once k candidates are in hand
        remaining = None
        for level in range(precision, -1, -1):
            candidates.extend(buckets[level])
            self.stats.buckets_visited += 1

            if remaining is None and len(candidates) >= k:
                remaining = self.config.overscan
            elif remaining is not None:
                remaining -= 1

            if remaining == 0:
                break

        self.stats.candidates = len(candidates)

        matches = []
        for point in candidates:
            matches.append(
                Match(point, distance(target, point), prefix_match_length(target.path, point.path))
            )
        self.stats.distance_evaluations = len(matches)

        matches.sort(key=lambda m: m.distance)

        logger.debug(
            "Searched %d points: %d candidates from %d buckets, k=%d",
            self.stats.points_seen,
            self.stats.candidates,
            self.stats.buckets_visited,
            k,
        )
        return matches[:k]


def k_nearest(
    target: AnnotatedPoint,
    points: Sequence[AnnotatedPoint],
    precision: int,
    k: int,
    overscan: int = 1,
) -> List[Match]:
    """
    Convenience function for a single approximate k-NN search.

    Args:
        target: Query point with a path of length `precision`
        points: Candidate points with paths of length `precision`
        precision: Search precision
        k: Number of nearest points wanted
        overscan: Extra buckets to visit after k candidates are collected

    Returns:
        Up to k matches sorted by increasing distance
    """
    config = SearchConfig(precision=precision, k=k, overscan=overscan)
    return ProximitySearcher(config).search(target, points)

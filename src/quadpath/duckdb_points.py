"""
DuckDB-backed point source for proximity search.

This module reads point tables from CSV or Parquet files with DuckDB and
turns each row into an AnnotatedPoint encoded at a chosen precision.
"""

from pathlib import Path
from typing import List, Optional
import logging

import duckdb

from .codec import QuadCodec
from .region import BoundingBox, Coordinate
from .search import AnnotatedPoint


logger = logging.getLogger(__name__)

# File suffix -> DuckDB table function
READERS = {
    ".csv": "read_csv_auto",
    ".parquet": "read_parquet",
}


class DuckDBPointSource:
    """
    Point table loaded through DuckDB.

    The file is exposed as a view so every query reads it in a single
    pass; rectangle filters run inside DuckDB rather than in Python.
    """

    def __init__(
        self,
        path: Path,
        lng_column: str = "lng",
        lat_column: str = "lat",
        data_column: Optional[str] = None,
    ):
        """
        Initialize the point source.

        Args:
            path: CSV or Parquet file with one point per row
            lng_column: Name of the longitude column
            lat_column: Name of the latitude column
            data_column: Optional column carried through as AnnotatedPoint.data
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Could not find point file {path}")

        reader = READERS.get(path.suffix.lower())
        if reader is None:
            raise ValueError(
                f"Unsupported point file {path.name}; expected one of {sorted(READERS)}"
            )

        self.path = path
        self.lng_column = lng_column
        self.lat_column = lat_column
        self.data_column = data_column

        self._con = duckdb.connect(":memory:")
        self._con.execute(f"""
            CREATE VIEW points AS
            SELECT * FROM {reader}('{path.as_posix()}')
        """)

    def _select_columns(self) -> str:
        columns = f'"{self.lng_column}", "{self.lat_column}"'
        if self.data_column:
            columns += f', "{self.data_column}"'
        return columns

    def _to_points(self, rows, codec: QuadCodec, precision: int) -> List[AnnotatedPoint]:
        points = []
        for row in rows:
            lng, lat = float(row[0]), float(row[1])
            data = row[2] if self.data_column else None
            path = codec.encode(Coordinate(lng, lat), precision)
            points.append(AnnotatedPoint(lng, lat, path, data))
        return points

    def count(self) -> int:
        """Number of rows with both coordinates present."""
        result = self._con.execute(f"""
            SELECT COUNT(*)
            FROM points
            WHERE "{self.lng_column}" IS NOT NULL AND "{self.lat_column}" IS NOT NULL
        """).fetchone()
        return result[0]

    def load_points(self, codec: QuadCodec, precision: int) -> List[AnnotatedPoint]:
        """
        Load and encode every point.

        Args:
            codec: Codec used to compute each point's path
            precision: Path length

        Returns:
            List of AnnotatedPoint in file order
        """
        rows = self._con.execute(f"""
            SELECT {self._select_columns()}
            FROM points
            WHERE "{self.lng_column}" IS NOT NULL AND "{self.lat_column}" IS NOT NULL
        """).fetchall()

        points = self._to_points(rows, codec, precision)
        logger.info("Loaded %d points from %s at precision %d", len(points), self.path, precision)
        return points

    def points_in_box(
        self, codec: QuadCodec, bbox: BoundingBox, precision: int
    ) -> List[AnnotatedPoint]:
        """
        Load and encode the points inside a bounding box (inclusive).

        Args:
            codec: Codec used to compute each point's path
            bbox: Rectangle to filter by
            precision: Path length

        Returns:
            List of AnnotatedPoint inside the box
        """
        rows = self._con.execute(f"""
            SELECT {self._select_columns()}
            FROM points
            WHERE "{self.lng_column}" BETWEEN ? AND ?
              AND "{self.lat_column}" BETWEEN ? AND ?
        """, [bbox.min_lng, bbox.max_lng, bbox.min_lat, bbox.max_lat]).fetchall()

        points = self._to_points(rows, codec, precision)
        logger.debug("Found %d points inside %s", len(points), bbox)
        return points

    def close(self) -> None:
        """Close the database connection."""
        if self._con:
            self._con.close()
            self._con = None

    def __del__(self):
        """Cleanup on garbage collection."""
        if getattr(self, "_con", None) is not None:
            self.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

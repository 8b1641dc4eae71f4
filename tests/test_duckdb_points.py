"""Tests for the DuckDB point source."""

import duckdb
import pytest

from quadpath.codec import QuadCodec
from quadpath.duckdb_points import DuckDBPointSource
from quadpath.region import BoundingBox, Coordinate
from quadpath.search import AnnotatedPoint, k_nearest


CITIES = [
    ("Paris", 2.3522, 48.8566),
    ("London", -0.1276, 51.5072),
    ("Berlin", 13.4050, 52.5200),
    ("Madrid", -3.7038, 40.4168),
    ("Rome", 12.4964, 41.9028),
    ("Tokyo", 139.6503, 35.6762),
    ("New York", -74.0060, 40.7128),
]


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "cities.csv"
    lines = ["name,lng,lat"]
    lines += [f"{name},{lng},{lat}" for name, lng, lat in CITIES]
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def source(csv_path):
    source = DuckDBPointSource(csv_path, data_column="name")
    yield source
    source.close()


@pytest.fixture
def codec():
    return QuadCodec()


class TestDuckDBPointSource:
    """Tests for DuckDBPointSource class."""

    def test_count(self, source):
        """Test that every row is counted."""
        assert source.count() == len(CITIES)

    def test_load_points(self, source, codec):
        """Test that rows become encoded AnnotatedPoints."""
        points = source.load_points(codec, 12)
        assert len(points) == len(CITIES)

        by_name = {p.data: p for p in points}
        paris = by_name["Paris"]
        assert paris.lng == pytest.approx(2.3522)
        assert paris.lat == pytest.approx(48.8566)
        assert paris.path == codec.encode(Coordinate(paris.lng, paris.lat), 12)

    def test_load_without_data_column(self, csv_path, codec):
        """Test that data is None without a data column."""
        with DuckDBPointSource(csv_path) as source:
            points = source.load_points(codec, 4)
        assert all(p.data is None for p in points)
        assert all(len(p.path) == 4 for p in points)

    def test_custom_column_names(self, tmp_path, codec):
        """Test reading differently named coordinate columns."""
        path = tmp_path / "stops.csv"
        path.write_text("stop_id,x,y\n1,10.5,20.5\n2,-10.5,-20.5\n")
        with DuckDBPointSource(path, lng_column="x", lat_column="y", data_column="stop_id") as source:
            points = source.load_points(codec, 6)
        assert [p.data for p in points] == [1, 2]
        assert points[0].path == codec.encode(Coordinate(10.5, 20.5), 6)

    def test_skips_missing_coordinates(self, tmp_path, codec):
        """Test that rows without coordinates are skipped."""
        path = tmp_path / "partial.csv"
        path.write_text("name,lng,lat\na,1.0,2.0\nb,,3.0\nc,4.0,5.0\n")
        with DuckDBPointSource(path, data_column="name") as source:
            assert source.count() == 2
            points = source.load_points(codec, 6)
        assert [p.data for p in points] == ["a", "c"]

    def test_points_in_box(self, source, codec):
        """Test filtering by a bounding box."""
        europe = BoundingBox(-10, 35, 20, 60)
        points = source.points_in_box(codec, europe, 8)
        names = {p.data for p in points}
        assert names == {"Paris", "London", "Berlin", "Madrid", "Rome"}

    def test_parquet(self, tmp_path, codec):
        """Test reading a Parquet file."""
        path = tmp_path / "points.parquet"
        con = duckdb.connect(":memory:")
        con.execute(f"""
            COPY (
                SELECT * FROM (VALUES (1.5, 2.5), (3.5, 4.5)) AS t(lng, lat)
            ) TO '{path.as_posix()}' (FORMAT PARQUET)
        """)
        con.close()

        with DuckDBPointSource(path) as source:
            assert source.count() == 2
            points = source.load_points(codec, 5)
        assert points[0].path == codec.encode(Coordinate(1.5, 2.5), 5)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            DuckDBPointSource(tmp_path / "nope.csv")

    def test_unsupported_suffix(self, tmp_path):
        """Test that unknown file types raise ValueError."""
        path = tmp_path / "points.txt"
        path.write_text("lng,lat\n1,2\n")
        with pytest.raises(ValueError):
            DuckDBPointSource(path)

    def test_context_manager_closes(self, csv_path):
        """Test that leaving the context closes the connection."""
        with DuckDBPointSource(csv_path) as source:
            assert source.count() == len(CITIES)
        assert source._con is None

    def test_nearest_from_file(self, source, codec):
        """Test an end-to-end search over loaded points."""
        points = source.load_points(codec, 10)
        brussels = Coordinate(4.3517, 50.8503)
        target_path = codec.encode(brussels, 10)
        target =AnnotatedPoint(brussels.lng, brussels.lat, target_path)

        matches = k_nearest(target, points, precision=10, k=2)
        assert len(matches) == 2
        assert matches[0].point.data == "Paris"

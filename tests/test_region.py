"""Tests for region and coordinate types."""

import pytest
from quadpath.region import (
    BoundingBox,
    Coordinate,
    InvalidRegion,
    Region,
)


class TestRegion:
    """Tests for Region class."""

    def test_default_is_whole_globe(self):
        """Test that the default region covers the globe."""
        r = Region()
        assert r.min_lng == -180.0
        assert r.min_lat == -90.0
        assert r.max_lng == 180.0
        assert r.max_lat == 90.0
        assert Region.whole_globe() == r

    def test_custom_region(self):
        """Test custom region creation."""
        r = Region(0, 0, 100, 50)
        assert r.center == Coordinate(50, 25)
        assert r.half_extent == Coordinate(50, 25)

    def test_degenerate_region_allowed(self):
        """Test that min == max is a valid (zero-size) region."""
        r = Region(10, 10, 10, 10)
        assert r.half_extent == Coordinate(0, 0)

    def test_inverted_bounds(self):
        """Test that inverted bounds raise InvalidRegion."""
        with pytest.raises(InvalidRegion):
            Region(10, 0, 0, 10)  # min_lng > max_lng

        with pytest.raises(InvalidRegion):
            Region(0, 10, 10, 0)  # min_lat > max_lat

    def test_out_of_range_bounds(self):
        """Test that bounds beyond the globe raise InvalidRegion."""
        with pytest.raises(InvalidRegion):
            Region(-181, -90, 180, 90)

        with pytest.raises(InvalidRegion):
            Region(-180, -90, 180, 90.5)

    def test_invalid_region_is_value_error(self):
        """Test that InvalidRegion can be caught as ValueError."""
        with pytest.raises(ValueError):
            Region(0, 0, -10, 0)

    def test_immutable(self):
        """Test that regions cannot be modified."""
        r = Region()
        with pytest.raises(AttributeError):
            r.min_lng = 0

    def test_contains(self):
        """Test inclusive containment."""
        r = Region(0, 0, 10, 10)
        assert r.contains(Coordinate(5, 5))
        assert r.contains(Coordinate(0, 0))
        assert r.contains(Coordinate(10, 10))
        assert not r.contains(Coordinate(10.001, 5))
        assert not r.contains(Coordinate(5, -0.001))

    def test_parse(self):
        """Test parsing region text."""
        r = Region.parse("0, 0, 100, 100")
        assert r == Region(0, 0, 100, 100)

    def test_parse_errors(self):
        """Test that malformed region text raises InvalidRegion."""
        with pytest.raises(InvalidRegion):
            Region.parse("0,0,100")

        with pytest.raises(InvalidRegion):
            Region.parse("a,b,c,d")

        with pytest.raises(InvalidRegion):
            Region.parse("0,0,200,10")


class TestBoundingBox:
    """Tests for BoundingBox class."""

    def test_basic_creation(self):
        """Test basic bounding box creation."""
        b = BoundingBox(-10, -5, 10, 5)
        assert b.center == Coordinate(0, 0)

    def test_invalid_box(self):
        """Test that inverted boxes raise errors."""
        with pytest.raises(ValueError):
            BoundingBox(10, 0, 0, 10)

        with pytest.raises(ValueError):
            BoundingBox(0, 10, 10, 0)

    def test_contains(self):
        """Test inclusive containment with tolerance."""
        b = BoundingBox(0, 0, 10, 10)
        assert b.contains(Coordinate(0, 10))
        assert not b.contains(Coordinate(10 + 1e-6, 5))
        assert b.contains(Coordinate(10 + 1e-6, 5), tolerance=1e-5)

    def test_region_as_bounding_box(self):
        """Test converting a region to its bounding box."""
        assert Region().as_bounding_box() == BoundingBox(-180, -90, 180, 90)

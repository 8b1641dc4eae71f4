"""
Cell enumeration over a bounding box.

The envelope of a rectangle is every fixed-precision cell that covers it.
Cells are found by walking neighbors row by row from the south-west corner
cell, so nothing beyond encode/neighbor is needed.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List

from .region import BoundingBox, Coordinate

if TYPE_CHECKING:
    from .codec import QuadCodec


logger = logging.getLogger(__name__)


def _step(codec: QuadCodec, path: str, east: int, north: int) -> str:
    """Move one cell, staying put at the Region edge."""
    moved = codec.neighbor(path, east, north)
    return path if moved is None else moved


def envelope(codec: QuadCodec, bbox: BoundingBox, precision: int) -> List[str]:
    """
    Enumerate the cells of a given precision that cover a bounding box.

    Rows are scanned south to north and each row west to east:
    1. Encode the south-west and north-east corner cells, stepping a corner
       that lies on the far edge of its cell back into the box, and derive
       the south-east cell from them
    2. Walk east from the row start until reaching the row end cell
    3. Step the row start and row end north and repeat until the row end
       is the north-east cell

    A neighbor outside the Region ends the current row walk (or the whole
    scan when stepping north), so a box touching the Region edge cannot
    loop forever.

    Args:
        codec: Codec holding the Region
        bbox: Rectangle to cover
        precision: Cell precision (path length)

    Returns:
        Distinct paths in scan order
    """
    south_west = codec.encode(Coordinate(bbox.min_lng, bbox.min_lat), precision)
    north_east = codec.encode(Coordinate(bbox.max_lng, bbox.max_lat), precision)

    # Corner cells are half-open: a corner lying exactly on a cell edge only
    # touches the cell beyond it, so pull the corner cell back inside the box.
    has_width = bbox.max_lng > bbox.min_lng
    has_height = bbox.max_lat > bbox.min_lat
    if has_width and codec.bounding_box(south_west).max_lng == bbox.min_lng:
        south_west = _step(codec, south_west, 1, 0)
    if has_height and codec.bounding_box(south_west).max_lat == bbox.min_lat:
        south_west = _step(codec, south_west, 0, 1)
    if has_width and codec.bounding_box(north_east).min_lng == bbox.max_lng:
        north_east = _step(codec, north_east, -1, 0)
    if has_height and codec.bounding_box(north_east).min_lat == bbox.max_lat:
        north_east = _step(codec, north_east, 0, -1)

    # Cell centers never sit on an edge, so this lands in the north-east
    # column and the south-west row regardless of tie-breaking.
    south_east = codec.encode(
        Coordinate(codec.decode(north_east).origin.lng, codec.decode(south_west).origin.lat),
        precision,
    )

    paths: List[str] = []
    seen = set()

    row_start, row_end = south_west, south_east
    rows = 0
    while True:
        rows += 1
        cell = row_start
        while cell is not None:
            if cell not in seen:
                seen.add(cell)
                paths.append(cell)
            if cell == row_end:
                break
            cell = codec.neighbor(cell, 1, 0)

        if row_end == north_east:
            break

        row_start = codec.neighbor(row_start, 0, 1)
        row_end = codec.neighbor(row_end, 0, 1)
        if row_start is None or row_end is None:
            logger.debug("Envelope scan reached the Region's northern edge")
            break

    logger.debug(
        "Envelope at precision %d: %d cells in %d rows", precision, len(paths), rows
    )
    return paths

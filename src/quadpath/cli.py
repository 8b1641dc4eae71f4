"""
Command-line interface for quadpath.

Provides commands for encoding, decoding and searching quadrant paths.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .codec import QuadCodec
from .distance import distance
from .duckdb_points import DuckDBPointSource
from .region import BoundingBox, Coordinate, Region
from .search import AnnotatedPoint, k_nearest


def _add_region_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--region",
        type=str,
        default=None,
        help="Encoding region as min_lng,min_lat,max_lng,max_lat (default: whole globe)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="quadpath",
        description="Encode coordinates as quadrant paths and search them",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Encode command
    encode_parser = subparsers.add_parser("encode", help="Encode a coordinate")
    encode_parser.add_argument("lng", type=float, help="Longitude in degrees")
    encode_parser.add_argument("lat", type=float, help="Latitude in degrees")
    encode_parser.add_argument(
        "-p", "--precision",
        type=int,
        default=12,
        help="Path length (default: 12)",
    )
    _add_region_argument(encode_parser)

    # Decode command
    decode_parser = subparsers.add_parser("decode", help="Decode a path")
    decode_parser.add_argument("path", type=str, help="Quadrant path")
    _add_region_argument(decode_parser)

    # Neighbor command
    neighbor_parser = subparsers.add_parser("neighbor", help="Find an adjacent cell")
    neighbor_parser.add_argument("path", type=str, help="Quadrant path")
    neighbor_parser.add_argument("east", type=int, choices=[-1, 0, 1], help="East offset")
    neighbor_parser.add_argument("north", type=int, choices=[-1, 0, 1], help="North offset")
    _add_region_argument(neighbor_parser)

    # Bounding box command
    bbox_parser = subparsers.add_parser("bbox", help="Bounding box of a path")
    bbox_parser.add_argument("path", type=str, help="Quadrant path")
    _add_region_argument(bbox_parser)

    # Envelope command
    envelope_parser = subparsers.add_parser(
        "envelope",
        help="Cells covering a bounding box",
    )
    envelope_parser.add_argument("min_lng", type=float)
    envelope_parser.add_argument("min_lat", type=float)
    envelope_parser.add_argument("max_lng", type=float)
    envelope_parser.add_argument("max_lat", type=float)
    envelope_parser.add_argument(
        "-p", "--precision",
        type=int,
        default=4,
        help="Cell precision (default: 4)",
    )
    _add_region_argument(envelope_parser)

    # Distance command
    distance_parser = subparsers.add_parser(
        "distance",
        help="Haversine distance in meters",
    )
    distance_parser.add_argument("lng1", type=float)
    distance_parser.add_argument("lat1", type=float)
    distance_parser.add_argument("lng2", type=float)
    distance_parser.add_argument("lat2", type=float)

    # Nearest command
    nearest_parser = subparsers.add_parser(
        "nearest",
        help="Approximate k nearest points from a CSV or Parquet file",
    )
    nearest_parser.add_argument("points", type=Path, help="CSV or Parquet point file")
    nearest_parser.add_argument("lng", type=float, help="Target longitude")
    nearest_parser.add_argument("lat", type=float, help="Target latitude")
    nearest_parser.add_argument(
        "-k",
        type=int,
        default=5,
        help="Number of nearest points (default: 5)",
    )
    nearest_parser.add_argument(
        "-p", "--precision",
        type=int,
        default=12,
        help="Search precision (default: 12)",
    )
    nearest_parser.add_argument(
        "--overscan",
        type=int,
        default=1,
        help="Extra prefix buckets to scan after k candidates (default: 1)",
    )
    nearest_parser.add_argument("--lng-column", type=str, default="lng")
    nearest_parser.add_argument("--lat-column", type=str, default="lat")
    nearest_parser.add_argument(
        "--data-column",
        type=str,
        default=None,
        help="Column to print alongside each result",
    )
    _add_region_argument(nearest_parser)

    return parser


def _codec(args: argparse.Namespace) -> QuadCodec:
    region = Region.parse(args.region) if args.region else Region.whole_globe()
    return QuadCodec(region)


def cmd_encode(args: argparse.Namespace) -> int:
    """Handle the encode command."""
    codec = _codec(args)
    print(codec.encode(Coordinate(args.lng, args.lat), args.precision))
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Handle the decode command."""
    decoded = _codec(args).decode(args.path)
    print(f"origin: lng={decoded.origin.lng} lat={decoded.origin.lat}")
    print(f"error:  lng={decoded.error.lng} lat={decoded.error.lat}")
    return 0


def cmd_neighbor(args: argparse.Namespace) -> int:
    """Handle the neighbor command."""
    result = _codec(args).neighbor(args.path, args.east, args.north)
    if result is None:
        # Reaching the region edge is an expected answer, not a failure
        print("Neighbor is outside the region")
        return 0
    print(result)
    return 0


def cmd_bbox(args: argparse.Namespace) -> int:
    """Handle the bbox command."""
    bbox = _codec(args).bounding_box(args.path)
    print(f"{bbox.min_lng},{bbox.min_lat},{bbox.max_lng},{bbox.max_lat}")
    return 0


def cmd_envelope(args: argparse.Namespace) -> int:
    """Handle the envelope command."""
    bbox = BoundingBox(args.min_lng, args.min_lat, args.max_lng, args.max_lat)
    for path in _codec(args).envelope(bbox, args.precision):
        print(path)
    return 0


def cmd_distance(args: argparse.Namespace) -> int:
    """Handle the distance command."""
    meters = distance(Coordinate(args.lng1, args.lat1), Coordinate(args.lng2, args.lat2))
    print(f"{meters:.3f}")
    return 0


def cmd_nearest(args: argparse.Namespace) -> int:
    """Handle the nearest command."""
    codec = _codec(args)

    with DuckDBPointSource(
        args.points,
        lng_column=args.lng_column,
        lat_column=args.lat_column,
        data_column=args.data_column,
    ) as source:
        points = source.load_points(codec, args.precision)

    target_path = codec.encode(Coordinate(args.lng, args.lat), args.precision)
    target = AnnotatedPoint(args.lng, args.lat, target_path)

    matches = k_nearest(target, points, args.precision, args.k, overscan=args.overscan)
    for match in matches:
        line = f"{match.point.lng},{match.point.lat},{match.distance:.3f}"
        if match.point.data is not None:
            line += f",{match.point.data}"
        print(line)
    return 0


COMMANDS = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "neighbor": cmd_neighbor,
    "bbox": cmd_bbox,
    "envelope": cmd_envelope,
    "distance": cmd_distance,
    "nearest": cmd_nearest,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

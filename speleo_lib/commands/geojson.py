# -*- coding: utf-8 -*-
"""GeoJSON export command for cave JSON files.

This command reconstructs a geo-referenced cave and exports its
stations and shots in WGS84 coordinates.
"""

import argparse
import logging
from pathlib import Path

from speleo_lib.enums import FileExtension
from speleo_lib.geojson import convert_cave_to_geojson

logger = logging.getLogger(__name__)


def geojson(args: list[str]) -> int:
    """Entry point for the geojson command."""
    parser = argparse.ArgumentParser(
        prog="speleo geojson",
        description="Convert a cave JSON file to GeoJSON format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  speleo geojson -i cave.json                    # Output to stdout
  speleo geojson -i cave.json -o cave.geojson    # Output to file
  speleo geojson -i cave.json --minify           # Compact output

Output:
  The GeoJSON FeatureCollection includes:
  - Point features for stations with a geographic coordinate
  - LineString features for center and auxiliary shots

Notes:
  - Station coordinates are reconstructed from the first survey
  - Only caves with a fix point matching the first survey's start
    station are geo-referenced; otherwise the collection is empty
""",
    )

    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        required=True,
        help="Input cave JSON file path",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        default=None,
        help="Output GeoJSON file path (prints to stdout if not specified)",
    )
    parser.add_argument(
        "--minify",
        action="store_true",
        help="Omit indentation for compact output",
    )

    parsed_args = parser.parse_args(args)

    # Validate input
    if not parsed_args.input_file.exists():
        logger.error("Error: Input file not found: %s", parsed_args.input_file)
        return 1

    if parsed_args.input_file.suffix.lower() != FileExtension.JSON.value:
        logger.error(
            "Error: Input file must be a .json file: %s", parsed_args.input_file
        )
        return 1

    try:
        result = convert_cave_to_geojson(
            parsed_args.input_file,
            output_path=parsed_args.output_file,
            minify=parsed_args.minify,
        )

        if parsed_args.output_file is None:
            # Print to stdout
            print(result)  # noqa: T201

        else:
            logger.info(
                "Converted %s -> %s", parsed_args.input_file, parsed_args.output_file
            )

    except FileNotFoundError:
        logger.exception("FileNotFoundError")
        return 1

    except Exception:
        logger.exception("Unknown Problem ...")
        return 1

    return 0

# -*- coding: utf-8 -*-
"""Reconstruct command for cave JSON files.

Rebuilds the station map of a cave, prints its statistics and the
diagnostics of every survey, and optionally writes the updated cave.
"""

import argparse
import logging
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from speleo_lib.cave.models import Cave
from speleo_lib.constants import JSON_ENCODING
from speleo_lib.enums import FileExtension
from speleo_lib.errors import ConflictingShotError
from speleo_lib.io import load_cave
from speleo_lib.io import save_cave

logger = logging.getLogger(__name__)


def build_report(cave: Cave) -> dict[str, Any]:
    """Statistics and per survey diagnostics of a reconstructed cave."""
    return {
        "cave": cave.name,
        "stats": cave.get_stats().to_export(),
        "surveys": [
            {
                "name": survey.name,
                "start": survey.start,
                "isolated": survey.isolated,
                "orphanShotIds": sorted(survey.orphan_shot_ids),
                "duplicateShotIds": sorted(survey.duplicate_shot_ids),
                "invalidShotIds": sorted(survey.invalid_shot_ids),
            }
            for survey in cave.surveys
        ],
    }


def reconstruct(args: list[str]) -> int:
    """Entry point for the reconstruct command."""
    parser = argparse.ArgumentParser(
        prog="speleo reconstruct",
        description="Reconstruct station positions of a cave JSON file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  speleo reconstruct -i cave.json                         # Report to stdout
  speleo reconstruct -i cave.json -o out.json             # Also save the cave
  speleo reconstruct -i cave.json -o out.json --include-stations

Output:
  The report lists the cave statistics and, for every survey, its start
  station and the ids of orphan, duplicate and invalid shots.
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
        help="Output cave JSON file path (nothing is written if not specified)",
    )
    parser.add_argument(
        "--include-stations",
        action="store_true",
        help="Write the reconstructed station map to the output file",
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
        cave = load_cave(parsed_args.input_file)

        report = orjson.dumps(build_report(cave), option=orjson.OPT_INDENT_2)
        print(report.decode(JSON_ENCODING))  # noqa: T201

        if parsed_args.output_file is not None:
            save_cave(
                cave,
                parsed_args.output_file,
                include_stations=parsed_args.include_stations,
            )
            logger.info(
                "Reconstructed %s -> %s",
                parsed_args.input_file,
                parsed_args.output_file,
            )

    except ValidationError:
        logger.exception("Invalid cave file: %s", parsed_args.input_file)
        return 1

    except ConflictingShotError:
        logger.exception("Reconstruction aborted")
        return 1

    except Exception:
        logger.exception("Unknown Problem ...")
        return 1

    return 0

# -*- coding: utf-8 -*-
"""Unified interface for cave file I/O.

Persistence follows a plain-data round trip:

1. ``Cave.to_export()`` produces JSON compatible dictionaries
2. ``orjson`` writes them to disk
3. Loading parses the bytes back to dictionaries
4. ``Cave.from_pure()`` validates them into models

Stations are derived data: they are only written on request and are
rebuilt by :func:`speleo_lib.network.recalculate_cave` after loading.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson

from speleo_lib.cave.models import Cave
from speleo_lib.network.reconstruction import recalculate_cave

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class SpeleoInterface:
    """Unified interface for cave file I/O.

    Example:
        cave = SpeleoInterface.load_json(Path("cave.json"))
        print(cave.get_stats())

        SpeleoInterface.save_json(cave, Path("out.json"), include_stations=True)
    """

    # -------------------------------------------------------------------------
    # Loading Methods (File -> Model)
    # -------------------------------------------------------------------------

    @classmethod
    def load_json(cls, path: Path, *, reconstruct: bool = True) -> Cave:
        """Load a cave from JSON.

        Args:
            path: Path to the JSON file
            reconstruct: Rebuild the station map and survey diagnostics

        Returns:
            The loaded cave

        Raises:
            FileNotFoundError: If the file doesn't exist
            pydantic.ValidationError: If the content is not a valid cave
        """
        if not path.exists():
            raise FileNotFoundError(f"Cave file not found: {path}")

        logger.debug("Reading %s", path)
        cave = Cave.from_pure(orjson.loads(path.read_bytes()))

        if reconstruct:
            recalculate_cave(cave)
        return cave

    @classmethod
    def loads_json(cls, data: str | bytes, *, reconstruct: bool = True) -> Cave:
        """Load a cave from a JSON document held in memory."""
        cave = Cave.from_pure(orjson.loads(data))
        if reconstruct:
            recalculate_cave(cave)
        return cave

    # -------------------------------------------------------------------------
    # Saving Methods (Model -> File)
    # -------------------------------------------------------------------------

    @classmethod
    def dumps_json(
        cls,
        cave: Cave,
        *,
        include_stations: bool = False,
        minify: bool = False,
    ) -> bytes:
        opts = 0 if minify else orjson.OPT_INDENT_2
        return orjson.dumps(
            cave.to_export(include_stations=include_stations), option=opts
        )

    @classmethod
    def save_json(
        cls,
        cave: Cave,
        path: Path,
        *,
        include_stations: bool = False,
        minify: bool = False,
    ) -> None:
        """Save a cave as JSON.

        Args:
            cave: Cave to serialize
            path: Path to write the JSON file
            include_stations: Also write the reconstructed station map
            minify: Omit indentation for compact output
        """
        path.write_bytes(
            cls.dumps_json(cave, include_stations=include_stations, minify=minify)
        )
        logger.debug("Wrote %s", path)

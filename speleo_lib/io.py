# -*- coding: utf-8 -*-
"""File I/O operations for cave files.

Thin wrappers around :class:`speleo_lib.interface.SpeleoInterface`:

    from speleo_lib.io import load_cave, save_cave

    cave = load_cave(Path("cave.json"))
    save_cave(cave, Path("cave-with-stations.json"), include_stations=True)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from speleo_lib.interface import SpeleoInterface

if TYPE_CHECKING:
    from pathlib import Path

    from speleo_lib.cave.models import Cave

__all__ = [
    "load_cave",
    "save_cave",
]


def load_cave(path: Path, *, reconstruct: bool = True) -> Cave:
    """Read a cave JSON file, reconstructing its stations by default."""
    return SpeleoInterface.load_json(path, reconstruct=reconstruct)


def save_cave(
    cave: Cave,
    path: Path,
    *,
    include_stations: bool = False,
) -> None:
    """Write a cave JSON file."""
    SpeleoInterface.save_json(cave, path, include_stations=include_stations)

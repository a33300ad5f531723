# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides shared factories for shots, surveys and caves, and
a few ready made networks used across the test modules.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from speleo_lib.cave.models import Cave
from speleo_lib.enums import ShotType
from speleo_lib.models import GeoData
from speleo_lib.survey.models import Shot
from speleo_lib.survey.models import Survey
from speleo_lib.survey.models import SurveyMetadata

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Factories
# =============================================================================


def make_shot(  # noqa: PLR0913
    shot_id: int,
    from_name: str,
    to_name: str | None,
    length: float = 10.0,
    azimuth: float = 0.0,
    clino: float = 0.0,
    shot_type: ShotType = ShotType.CENTER,
) -> Shot:
    return Shot(
        id=shot_id,
        type=shot_type,
        from_name=from_name,
        to_name=to_name,
        length=length,
        azimuth=azimuth,
        clino=clino,
    )


def make_splay(shot_id: int, from_name: str, **kwargs: Any) -> Shot:
    return make_shot(shot_id, from_name, None, shot_type=ShotType.SPLAY, **kwargs)


def make_survey(
    name: str,
    shots: list[Shot],
    *,
    start: str | None = None,
    declination: float | None = None,
    convergence: float | None = None,
) -> Survey:
    metadata = None
    if declination is not None or convergence is not None:
        metadata = SurveyMetadata(declination=declination, convergence=convergence)
    return Survey(name=name, shots=shots, start=start, metadata=metadata)


# =============================================================================
# Geo fixtures
# =============================================================================

#: A fix point in central Hungary (EOV meters)
EOV_FIX_POINT = {"type": "eov", "y": 650_000.0, "x": 240_000.0, "elevation": 300.0}

#: A fix point in UTM zone 34N, same region
UTM_FIX_POINT = {
    "type": "utm",
    "easting": 350_000.0,
    "northing": 5_270_000.0,
    "elevation": 300.0,
}


@pytest.fixture
def eov_geo_data() -> GeoData:
    return GeoData.model_validate(
        {
            "coordinateSystem": {"type": "eov"},
            "coordinates": [{"name": "A", "coordinate": EOV_FIX_POINT}],
        }
    )


@pytest.fixture
def utm_geo_data() -> GeoData:
    return GeoData.model_validate(
        {
            "coordinateSystem": {"type": "utm", "zoneNum": 34, "northern": True},
            "coordinates": [{"name": "A", "coordinate": UTM_FIX_POINT}],
        }
    )


# =============================================================================
# Network fixtures
# =============================================================================


@pytest.fixture
def line_survey() -> Survey:
    """A -> B -> C heading north, then a splay from C."""
    return make_survey(
        "line",
        [
            make_shot(0, "A", "B", 10, 0, 0),
            make_shot(1, "B", "C", 10, 0, 0),
            make_splay(2, "C", length=2, azimuth=90, clino=0),
        ],
    )


@pytest.fixture
def tree_cave() -> Cave:
    """A branching network without loops, split over two surveys.

    The second survey is anchored by ``D`` placed by the first one and
    contains one shot measured backwards (``H -> G``).
    """
    first = make_survey(
        "main",
        [
            make_shot(0, "A", "B", 12.5, 15, -5),
            make_shot(1, "B", "C", 8.0, 95, 10),
            make_shot(2, "B", "D", 6.2, 200, -30),
            make_shot(3, "C", "E", 4.1, 310, 0),
            make_splay(4, "C", length=1.5, azimuth=45, clino=20),
        ],
        start="A",
        declination=4.5,
        convergence=-1.2,
    )
    second = make_survey(
        "branch",
        [
            make_shot(0, "D", "F", 7.7, 120, -12),
            make_shot(1, "F", "G", 3.3, 80, 45),
            make_shot(2, "H", "G", 5.0, 10, 0),
            make_splay(3, "G", length=0.8, azimuth=180, clino=-10),
        ],
        declination=4.5,
    )
    return Cave(name="tree", surveys=[first, second])


@pytest.fixture
def vertical_cave() -> Cave:
    """A 10 m shaft (A -> B) followed by a 10 m horizontal passage (B -> C)."""
    survey = make_survey(
        "shaft",
        [
            make_shot(0, "A", "B", 10, 0, -90),
            make_shot(1, "B", "C", 10, 90, 0),
            make_splay(2, "C", length=2, azimuth=0, clino=90),
            make_shot(3, "C", "X", 4, 0, 0, shot_type=ShotType.AUXILIARY),
        ],
    )
    return Cave(name="shaft-cave", surveys=[survey])

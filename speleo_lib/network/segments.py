# -*- coding: utf-8 -*-
"""Line segments of a reconstructed survey, grouped by shot type."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import NamedTuple

from speleo_lib.enums import ShotType
from speleo_lib.errors import UnknownShotTypeError

if TYPE_CHECKING:
    from speleo_lib.survey.models import Survey
    from speleo_lib.survey.models import SurveyStation


class Segments(NamedTuple):
    """Flat ``x1, y1, z1, x2, y2, z2`` sequences, one sextuple per shot."""

    center: list[float]
    splay: list[float]
    auxiliary: list[float]


def get_segments(survey: Survey, stations: dict[str, SurveyStation]) -> Segments:
    """Collect the segments of every valid shot whose endpoints are placed.

    Raises:
        UnknownShotTypeError: If a shot carries a type outside ``ShotType``
    """
    segments = Segments(center=[], splay=[], auxiliary=[])

    for shot in survey.valid_shots:
        from_station = stations.get(survey.get_from_station_name(shot))
        to_station = stations.get(survey.get_to_station_name(shot))
        if from_station is None or to_station is None:
            continue

        match shot.type:
            case ShotType.CENTER:
                target = segments.center
            case ShotType.SPLAY:
                target = segments.splay
            case ShotType.AUXILIARY:
                target = segments.auxiliary
            case _:
                raise UnknownShotTypeError(f"Undefined segment type `{shot.type}`")

        target.extend((*from_station.position, *to_station.position))

    return segments

# -*- coding: utf-8 -*-
"""GeoJSON export of a reconstructed cave.

Only geo-referenced data is exported: stations carrying a WGS84
coordinate become Point features and center/auxiliary shots whose both
endpoints carry one become LineString features.  Positions are
``(longitude, latitude, elevation)`` as required by RFC 7946.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

import orjson
from geojson import Feature
from geojson import FeatureCollection
from geojson import LineString
from geojson import Point

from speleo_lib.constants import JSON_ENCODING
from speleo_lib.constants import WGS84_COORDINATE_PRECISION
from speleo_lib.io import load_cave

if TYPE_CHECKING:
    from pathlib import Path

    from speleo_lib.cave.models import Cave
    from speleo_lib.survey.models import Shot
    from speleo_lib.survey.models import Survey
    from speleo_lib.survey.models import SurveyStation

logger = logging.getLogger(__name__)

#: Decimal precision of elevations (centimeters)
ELEVATION_PRECISION: int = 2


def _position(station: SurveyStation) -> tuple[float, float, float] | None:
    coordinates = station.coordinates
    if coordinates.wgs is None or coordinates.projected is None:
        return None
    lon, lat = coordinates.wgs.as_tuple()
    return (lon, lat, round(coordinates.projected.elevation, ELEVATION_PRECISION))


def station_to_feature(name: str, station: SurveyStation) -> Feature | None:
    """Point feature of a geo-referenced station."""
    position = _position(station)
    if position is None:
        return None

    return Feature(
        geometry=Point(position, precision=WGS84_COORDINATE_PRECISION),
        properties={
            "type": "station",
            "name": name,
            "survey": station.survey_name,
            "shotType": station.type.value,
        },
    )


def shot_to_feature(
    survey: Survey,
    shot: Shot,
    stations: dict[str, SurveyStation],
) -> Feature | None:
    """LineString feature of a shot whose both endpoints are geo-referenced."""
    from_name = survey.get_from_station_name(shot)
    to_name = survey.get_to_station_name(shot)
    from_station = stations.get(from_name)
    to_station = stations.get(to_name)
    if from_station is None or to_station is None:
        return None

    from_position = _position(from_station)
    to_position = _position(to_station)
    if from_position is None or to_position is None:
        return None

    properties: dict[str, Any] = {
        "type": "shot",
        "survey": survey.name,
        "id": shot.id,
        "shotType": shot.type.value,
        "from": from_name,
        "to": to_name,
        "length": shot.length,
    }
    if shot.comment:
        properties["comment"] = shot.comment

    return Feature(
        geometry=LineString(
            [from_position, to_position], precision=WGS84_COORDINATE_PRECISION
        ),
        properties=properties,
    )


def cave_to_geojson(cave: Cave) -> FeatureCollection:
    """Convert a reconstructed cave to a GeoJSON FeatureCollection."""
    features: list[Feature] = []

    for name, station in cave.stations.items():
        feature = station_to_feature(name, station)
        if feature is not None:
            features.append(feature)

    for survey in cave.surveys:
        for shot in survey.valid_shots:
            if shot.is_splay():
                continue
            feature = shot_to_feature(survey, shot, cave.stations)
            if feature is not None:
                features.append(feature)

    if not features:
        logger.warning("Cave `%s` has no geo-referenced stations", cave.name)
    else:
        logger.info("Exported %d GeoJSON feature(s) of `%s`", len(features), cave.name)

    return FeatureCollection(features)


def convert_cave_to_geojson(
    input_path: Path,
    output_path: Path | None = None,
    *,
    minify: bool = False,
) -> str:
    """Convert a cave JSON file to GeoJSON.

    Args:
        input_path: Path to the cave JSON file
        output_path: Optional output path (returns string if None)
        minify: Omit indentation for compact output

    Returns:
        GeoJSON string
    """
    cave = load_cave(input_path)
    geojson = cave_to_geojson(cave)

    opts = 0 if minify else orjson.OPT_INDENT_2
    json_str = orjson.dumps(geojson, option=opts).decode(JSON_ENCODING)

    if output_path:
        output_path.write_text(json_str, encoding=JSON_ENCODING)

    return json_str

# -*- coding: utf-8 -*-
"""Survey network reconstruction.

Stations are placed with a fixed-point worklist: the valid shots of a
survey are scanned repeatedly and every shot with exactly one placed
endpoint places the other one, until a full pass makes no progress.
Stations already placed by earlier surveys of the cave (and stations
reachable through aliases) anchor the shots of later surveys, so the
surveys of a cave must be recalculated in list order.

Each call fully recomputes the survey diagnostics:

* ``orphan_shot_ids``: shots (invalid ones included) that were never
  processed
* ``duplicate_shot_ids``: shots whose both endpoints were already placed
  by shots joining a different pair of stations
* ``isolated``: no shot of the survey could be processed

Only a genuine internal conflict (placing a station name twice) raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from speleo_lib.enums import ShotType
from speleo_lib.errors import ConflictingShotError
from speleo_lib.errors import InvalidCoordinateError
from speleo_lib.geo_utils import to_lat_lon
from speleo_lib.geometry import ZERO
from speleo_lib.geometry import Vector3D
from speleo_lib.geometry import degrees_to_rads
from speleo_lib.geometry import from_polar
from speleo_lib.models import StationCoordinates
from speleo_lib.survey.models import ShotRef
from speleo_lib.survey.models import SurveyStation

if TYPE_CHECKING:
    from collections.abc import Callable
    from collections.abc import Iterable
    from collections.abc import Sequence

    from speleo_lib.cave.models import Cave
    from speleo_lib.models import CoordinateSystem
    from speleo_lib.models import EOVCoordinate
    from speleo_lib.models import GeoData
    from speleo_lib.models import UTMCoordinate
    from speleo_lib.models import WGS84Coordinate
    from speleo_lib.survey.models import Shot
    from speleo_lib.survey.models import Survey
    from speleo_lib.survey.models import SurveyAlias

logger = logging.getLogger(__name__)

StationPair = frozenset[str]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def compute_shot_displacement(
    shot: Shot,
    declination: float = 0.0,
    convergence: float = 0.0,
) -> Vector3D:
    """Displacement from the ``from`` to the ``to`` station of a shot.

    The bearing is corrected to grid north: ``azimuth + declination -
    convergence``.
    """
    return from_polar(
        shot.length,
        degrees_to_rads(shot.azimuth + declination - convergence),
        degrees_to_rads(shot.clino),
    )


def _can_anchor(station: SurveyStation, shot: Shot) -> bool:
    # auxiliary stations only anchor auxiliary shots
    return not (station.is_auxiliary() and (shot.is_center() or shot.is_splay()))


def _geographic(
    projected: EOVCoordinate | UTMCoordinate,
    coordinate_system: CoordinateSystem | None,
) -> WGS84Coordinate | None:
    if coordinate_system is None:
        return None
    try:
        return to_lat_lon(projected, coordinate_system)
    except InvalidCoordinateError:
        logger.warning(
            "Cannot convert %s coordinate %s to WGS84",
            coordinate_system,
            projected.to_vector(),
            exc_info=True,
        )
        return None


def _derive_station(
    shot: Shot,
    survey: Survey,
    anchor: SurveyStation,
    diff: Vector3D,
    coordinate_system: CoordinateSystem | None,
) -> SurveyStation:
    projected = None
    wgs = None
    if anchor.coordinates.projected is not None:
        projected = anchor.coordinates.projected.add_vector(diff)
        wgs = _geographic(projected, coordinate_system)

    return SurveyStation(
        type=shot.type,
        position=anchor.position + diff,
        coordinates=StationCoordinates(
            local=anchor.coordinates.local + diff,
            projected=projected,
            wgs=wgs,
        ),
        survey_name=survey.name,
    )


def _processed_pairs(surveys: Iterable[Survey]) -> set[StationPair]:
    """Resolved station pairs of the shots processed by earlier surveys."""
    pairs: set[StationPair] = set()
    for survey in surveys:
        for shot in survey.valid_shots:
            if shot.id in survey.orphan_shot_ids:
                continue
            pairs.add(
                frozenset(
                    (
                        survey.get_from_station_name(shot),
                        survey.get_to_station_name(shot),
                    )
                )
            )
    return pairs


def _lookup_to_name(shot: Shot) -> str | None:
    # splays never end at a named station
    return None if shot.is_splay() else shot.to_name


def _has_far_end(shot: Shot) -> bool:
    # center and auxiliary shots need a named ``to`` station
    return shot.is_splay() or bool(shot.to_name)


# -----------------------------------------------------------------------------
# Engine
# -----------------------------------------------------------------------------


def calculate_survey_stations(  # noqa: PLR0912, PLR0915
    survey: Survey,
    stations: dict[str, SurveyStation],
    aliases: Sequence[SurveyAlias],
    start_name: str | None = None,
    start_position: Vector3D | None = None,
    start_coordinate: EOVCoordinate | UTMCoordinate | None = None,
    coordinate_system: CoordinateSystem | None = None,
    previous_surveys: Sequence[Survey] = (),
) -> None:
    """Place the stations of ``survey`` into the shared ``stations`` map.

    Args:
        survey: The survey to reconstruct, its diagnostics and ``start``
            are updated in place
        stations: Cave-wide station map, new stations are added to it
        aliases: Station name equivalences between surveys
        start_name: Explicit start station (defaults to the survey start
            or the ``from`` of the first shot)
        start_position: Seed position of the start station, only given
            for the first survey of a cave
        start_coordinate: Projected coordinate of the seed (fix point)
        coordinate_system: Coordinate system of ``start_coordinate``
        previous_surveys: Surveys reconstructed before this one, used to
            recognise repeated measurements of the same leg

    Raises:
        ConflictingShotError: If a station name would be placed twice
    """
    valid_shots = survey.valid_shots
    for shot in survey.shots:
        shot.reset_aliases()

    if not valid_shots:
        logger.info("Survey `%s` has no valid shots, nothing to place", survey.name)
        survey.orphan_shot_ids = survey.shot_ids
        survey.duplicate_shot_ids = set()
        survey.isolated = True
        return

    start = start_name or survey.get_start_station_name()
    survey.start = start

    if start_position is not None:
        wgs = None
        if start_coordinate is not None:
            wgs = _geographic(start_coordinate, coordinate_system)
        stations[start] = SurveyStation(
            type=ShotType.CENTER,
            position=start_position,
            coordinates=StationCoordinates(
                local=ZERO, projected=start_coordinate, wgs=wgs
            ),
            survey_name=survey.name,
        )
        logger.debug("Seeded `%s` at %s", start, start_position)

    declination = survey.declination
    convergence = survey.convergence

    processed = [False] * len(valid_shots)
    known_pairs = _processed_pairs(previous_surveys)
    duplicate_shot_ids: set[int] = set()

    def place(name: str, station: SurveyStation, shot: Shot) -> None:
        if name in stations:
            raise ConflictingShotError(shot.from_name, shot.to_name)
        stations[name] = station

    def link(shot: Shot, *names: str) -> None:
        ref = ShotRef(survey.name, shot.id)
        for name in names:
            stations[name].shots.append(ref)

    def finish(idx: int, shot: Shot) -> None:
        processed[idx] = True
        known_pairs.add(
            frozenset(
                (survey.get_from_station_name(shot), survey.get_to_station_name(shot))
            )
        )

    passes = 0
    progress = True
    while progress:
        progress = False
        passes += 1

        for idx, shot in enumerate(valid_shots):
            if processed[idx] or not _has_far_end(shot):
                continue

            from_station = stations.get(shot.from_name)
            to_station = stations.get(_lookup_to_name(shot))
            diff = compute_shot_displacement(shot, declination, convergence)

            if from_station is not None:
                if not _can_anchor(from_station, shot):
                    continue

                if to_station is None:
                    # from placed, to unplaced
                    to_name = survey.get_to_station_name(shot)
                    place(
                        to_name,
                        _derive_station(
                            shot, survey, from_station, diff, coordinate_system
                        ),
                        shot,
                    )
                    link(shot, shot.from_name, to_name)
                else:
                    # both placed
                    pair = frozenset((shot.from_name, shot.to_name))
                    if pair not in known_pairs:
                        duplicate_shot_ids.add(shot.id)
                    link(shot, shot.from_name, shot.to_name)

                finish(idx, shot)
                progress = True

            elif to_station is not None:
                # from unplaced, to placed
                if not _can_anchor(to_station, shot):
                    continue

                place(
                    shot.from_name,
                    _derive_station(
                        shot, survey, to_station, -diff, coordinate_system
                    ),
                    shot,
                )
                link(shot, shot.from_name, shot.to_name)
                finish(idx, shot)
                progress = True

            elif _place_through_alias(
                shot, survey, stations, aliases, diff, coordinate_system, place
            ):
                link(
                    shot,
                    survey.get_from_station_name(shot),
                    survey.get_to_station_name(shot),
                )
                finish(idx, shot)
                progress = True

        logger.debug(
            "Survey `%s` pass %d: %d/%d shots processed",
            survey.name,
            passes,
            sum(processed),
            len(valid_shots),
        )

    processed_ids = {
        shot.id for idx, shot in enumerate(valid_shots) if processed[idx]
    }
    survey.orphan_shot_ids = survey.invalid_shot_ids | {
        shot.id for idx, shot in enumerate(valid_shots) if not processed[idx]
    }
    survey.duplicate_shot_ids = duplicate_shot_ids
    survey.isolated = not processed_ids

    logger.info(
        "Survey `%s`: %d shot(s) processed, %d orphan, %d duplicate%s",
        survey.name,
        len(processed_ids),
        len(survey.orphan_shot_ids),
        len(duplicate_shot_ids),
        " (isolated)" if survey.isolated else "",
    )


def _place_through_alias(  # noqa: PLR0913
    shot: Shot,
    survey: Survey,
    stations: dict[str, SurveyStation],
    aliases: Sequence[SurveyAlias],
    diff: Vector3D,
    coordinate_system: CoordinateSystem | None,
    place: Callable[[str, SurveyStation, Shot], None],
) -> bool:
    """Resolve a shot with no placed endpoint through the alias list.

    The ``from`` alias is tried first, the ``to`` alias only when the
    former did not place anything.  Returns True when a station was
    placed.
    """
    from_alias = next((a for a in aliases if a.contains(shot.from_name)), None)
    if from_alias is not None:
        pair_name = from_alias.get_pair(shot.from_name)
        anchor = stations.get(pair_name)
        if anchor is not None and _can_anchor(anchor, shot):
            shot.from_alias = pair_name
            place(
                survey.get_to_station_name(shot),
                _derive_station(shot, survey, anchor, diff, coordinate_system),
                shot,
            )
            return True

    to_name = _lookup_to_name(shot)
    to_alias = next((a for a in aliases if a.contains(to_name)), None)
    if to_alias is not None:
        pair_name = to_alias.get_pair(to_name)
        anchor = stations.get(pair_name)
        if anchor is not None and _can_anchor(anchor, shot):
            shot.to_alias = pair_name
            place(
                shot.from_name,
                _derive_station(shot, survey, anchor, -diff, coordinate_system),
                shot,
            )
            return True

    return False


# -----------------------------------------------------------------------------
# Cave-wide entry points
# -----------------------------------------------------------------------------


def recalculate_survey(
    index: int,
    survey: Survey,
    stations: dict[str, SurveyStation],
    aliases: Sequence[SurveyAlias],
    geo_data: GeoData | None = None,
    previous_surveys: Sequence[Survey] = (),
) -> Survey:
    """Reconstruct the survey at position ``index`` of its cave.

    The first survey is seeded: at the fix point matching its start
    station when ``geo_data`` has one, at the origin otherwise.  Later
    surveys are anchored by the stations already in ``stations``.
    """
    if not survey.valid_shots:
        logger.debug("Skipping survey `%s`: no valid shots", survey.name)
        return survey

    start_name = survey.get_start_station_name()
    start_position = None
    start_coordinate = None
    coordinate_system = geo_data.coordinate_system if geo_data is not None else None

    if index == 0:
        if geo_data is not None and start_name is not None:
            start_coordinate = geo_data.get_fix_point(start_name)

        if start_coordinate is not None:
            start_position = start_coordinate.to_vector()
            logger.debug(
                "Survey `%s` starts at fix point `%s` (%s)",
                survey.name,
                start_name,
                coordinate_system,
            )
        else:
            start_position = ZERO

    calculate_survey_stations(
        survey,
        stations,
        aliases,
        start_name=start_name,
        start_position=start_position,
        start_coordinate=start_coordinate,
        coordinate_system=coordinate_system,
        previous_surveys=previous_surveys,
    )
    return survey


def recalculate_cave(cave: Cave) -> Cave:
    """Rebuild the station map of ``cave`` from scratch, survey by survey."""
    cave.stations.clear()
    for index, survey in enumerate(cave.surveys):
        recalculate_survey(
            index,
            survey,
            cave.stations,
            cave.aliases,
            cave.geo_data,
            previous_surveys=cave.surveys[:index],
        )

    logger.info(
        "Cave `%s` reconstructed: %d station(s) from %d survey(s)",
        cave.name,
        len(cave.stations),
        len(cave.surveys),
    )
    return cave

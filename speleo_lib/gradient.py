# -*- coding: utf-8 -*-
"""Colour gradients for rendering consumers.

Every segment gets one colour per endpoint, picked from a multi-stop
gradient by the relative (0-100) depth or traversed distance of the
endpoint.  Colours are returned as flat ``r, g, b, r, g, b`` sequences
in the same order as :func:`speleo_lib.network.get_segments`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING
from typing import Any
from typing import NamedTuple

from pydantic import field_validator

from speleo_lib.enums import ColorMode
from speleo_lib.enums import ShotType
from speleo_lib.errors import GradientConfigurationError
from speleo_lib.geometry import Color
from speleo_lib.models import SpeleoBaseModel
from speleo_lib.network.graph import build_station_graph

if TYPE_CHECKING:
    from collections.abc import Callable
    from collections.abc import Sequence

    from speleo_lib.cave.models import Cave
    from speleo_lib.survey.models import Survey

logger = logging.getLogger(__name__)


class GradientColor(SpeleoBaseModel):
    """A gradient stop: ``color`` at relative ``depth`` (0-100).

    The same stops serve the distance gradient, where ``depth`` is read
    as the relative traversed distance.
    """

    depth: float
    color: str

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        Color.from_hex(value)
        return value


class SegmentColors(NamedTuple):
    center: list[float]
    splays: list[float]
    auxiliary: list[float]


def _threshold(breakpoint_: GradientColor | Mapping[str, Any], key: str) -> float:
    if isinstance(breakpoint_, Mapping):
        return breakpoint_[key]
    return getattr(breakpoint_, key)


def _color(breakpoint_: GradientColor | Mapping[str, Any]) -> Color:
    if isinstance(breakpoint_, Mapping):
        return Color.from_hex(breakpoint_["color"])
    return Color.from_hex(breakpoint_.color)


def interpolate_color_by_value(
    value: float,
    breakpoints: Sequence[GradientColor | Mapping[str, Any]],
    key: str = "depth",
) -> Color:
    """Linear interpolation between the two stops bracketing ``value``.

    Args:
        value: Relative value, usually in 0-100
        breakpoints: Gradient stops sorted ascending by ``key``
        key: Name of the threshold attribute of the stops

    Returns:
        The interpolated colour, or the colour of the nearest end stop
        when ``value`` is outside the gradient

    Raises:
        GradientConfigurationError: If fewer than two stops are given
    """
    if len(breakpoints) < 2:  # noqa: PLR2004
        raise GradientConfigurationError("At least 2 gradient colors are required")

    lower = breakpoints[0]
    upper = breakpoints[-1]

    if value <= _threshold(lower, key):
        return _color(lower)
    if value >= _threshold(upper, key):
        return _color(upper)

    for current, following in zip(breakpoints, breakpoints[1:], strict=False):
        if _threshold(current, key) <= value <= _threshold(following, key):
            lower, upper = current, following
            break

    span = _threshold(upper, key) - _threshold(lower, key)
    factor = 0.0 if span == 0 else (value - _threshold(lower, key)) / span

    start = _color(lower)
    return start.add(_color(upper).sub(start).mul(factor))


def _segment_colors(
    survey: Survey,
    relative_value: Callable[[str], float | None],
    breakpoints: Sequence[GradientColor | Mapping[str, Any]],
) -> SegmentColors:
    colors = SegmentColors(center=[], splays=[], auxiliary=[])

    for shot in survey.valid_shots:
        from_value = relative_value(survey.get_from_station_name(shot))
        to_value = relative_value(survey.get_to_station_name(shot))
        if from_value is None or to_value is None:
            continue

        from_color = interpolate_color_by_value(from_value, breakpoints)
        to_color = interpolate_color_by_value(to_value, breakpoints)

        match shot.type:
            case ShotType.CENTER:
                target = colors.center
            case ShotType.SPLAY:
                target = colors.splays
            case _:
                target = colors.auxiliary

        target.extend((*from_color.as_tuple(), *to_color.as_tuple()))

    return colors


def get_color_gradients_by_depth(
    caves: Sequence[Cave],
    breakpoints: Sequence[GradientColor],
) -> dict[str, dict[str, SegmentColors]]:
    """Per cave, per survey colours by relative depth.

    Depth 0 is the highest station of all visible caves and 100 the
    lowest one, so several caves share one colour scale.
    """
    stops = sorted(breakpoints, key=lambda bp: bp.depth)
    z_coords = [
        station.position.z
        for cave in caves
        if cave.visible
        for station in cave.stations.values()
    ]
    max_z = max(z_coords, default=0.0)
    diff_z = max_z - min(z_coords, default=0.0)

    gradients: dict[str, dict[str, SegmentColors]] = {}
    for cave in caves:

        def relative_depth(name: str, stations=cave.stations) -> float | None:
            station = stations.get(name)
            if station is None:
                return None
            if diff_z == 0:
                return 0.0
            return (max_z - station.position.z) / diff_z * 100

        gradients[cave.name] = {
            survey.name: _segment_colors(survey, relative_depth, stops)
            for survey in cave.surveys
        }

    return gradients


def get_color_gradients_by_distance(
    cave: Cave,
    breakpoints: Sequence[GradientColor],
) -> dict[str, SegmentColors]:
    """Per survey colours by relative distance from the first station.

    Distances are measured along the shots from the start station of the
    first survey; stations it cannot reach are not coloured.
    """
    start = cave.get_first_station_name()
    if start is None:
        return {}

    traversal = build_station_graph(cave).traverse(start)
    max_distance = max(traversal.distances.values(), default=0.0)
    logger.debug(
        "Distance gradient of `%s`: %d station(s) reached, max %.2f m",
        cave.name,
        len(traversal.distances),
        max_distance,
    )

    def relative_distance(name: str) -> float | None:
        distance = traversal.distances.get(name)
        if distance is None:
            return None
        if max_distance == 0:
            return 0.0
        return distance / max_distance * 100

    stops = sorted(breakpoints, key=lambda bp: bp.depth)
    return {
        survey.name: _segment_colors(survey, relative_distance, stops)
        for survey in cave.surveys
    }


def get_color_gradients(
    cave: Cave,
    mode: ColorMode,
    breakpoints: Sequence[GradientColor],
) -> dict[str, SegmentColors]:
    """Colours of one cave in the given gradient ``mode``."""
    match mode:
        case ColorMode.GRADIENT_BY_DEPTH:
            return get_color_gradients_by_depth([cave], breakpoints)[cave.name]
        case ColorMode.GRADIENT_BY_DISTANCE:
            return get_color_gradients_by_distance(cave, breakpoints)
        case _:
            return {}

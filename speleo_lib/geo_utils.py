# -*- coding: utf-8 -*-
"""Geodetic helpers: projected <-> geographic conversion and north corrections.

The reconstruction engine only relies on :func:`to_lat_lon`; meridian
convergence and IGRF declination are offered to callers that fill in
survey metadata.
"""

from __future__ import annotations

import datetime
import logging
import math

import pyIGRF14 as pyIGRF
import utm
from pyproj import Transformer

from speleo_lib.constants import EOV_EARTH_RADIUS
from speleo_lib.constants import EOV_EPSG
from speleo_lib.constants import WGS84_EPSG
from speleo_lib.enums import CoordinateSystemType
from speleo_lib.errors import InvalidCoordinateError
from speleo_lib.geometry import degrees_to_rads
from speleo_lib.geometry import rads_to_degrees
from speleo_lib.models import CoordinateSystem
from speleo_lib.models import EOVCoordinate
from speleo_lib.models import UTMCoordinate
from speleo_lib.models import WGS84Coordinate

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Projected -> WGS84
# -----------------------------------------------------------------------------

# Cache for pyproj transformers (source CRS -> transformer)
_transformer_cache: dict[str, Transformer] = {}


def _get_transformer(source_epsg: str) -> Transformer:
    """Get or create a cached transformer from ``source_epsg`` to WGS84."""
    if source_epsg not in _transformer_cache:
        _transformer_cache[source_epsg] = Transformer.from_crs(
            source_epsg,
            WGS84_EPSG,
            always_xy=True,
        )
    return _transformer_cache[source_epsg]


def eov_to_wgs84(y: float, x: float) -> tuple[float, float]:
    """Convert an EOV coordinate to WGS84 (latitude, longitude).

    Args:
        y: EOV easting in meters (~400 000 - 950 000)
        x: EOV northing in meters (~0 - 400 000)

    Returns:
        Tuple of (latitude, longitude) in degrees

    Raises:
        InvalidCoordinateError: If conversion fails
    """
    try:
        lon, lat = _get_transformer(EOV_EPSG).transform(y, x)
    except Exception as e:
        raise InvalidCoordinateError(
            f"Failed to convert EOV ({y}, {x}): {e}"
        ) from e

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinateError(f"EOV ({y}, {x}) is outside of the projection")
    return float(lat), float(lon)


def utm_to_wgs84(
    easting: float,
    northing: float,
    zone: int,
    northern: bool,
) -> tuple[float, float]:
    """Convert UTM coordinates to WGS84 (latitude, longitude).

    Args:
        easting: UTM easting in meters
        northing: UTM northing in meters
        zone: UTM zone number (1-60)
        northern: True if northern hemisphere

    Returns:
        Tuple of (latitude, longitude) in degrees

    Raises:
        InvalidCoordinateError: If conversion fails
    """
    try:
        lat, lon = utm.to_latlon(easting, northing, zone, northern=northern)
    except Exception as e:
        raise InvalidCoordinateError(
            f"Failed to convert UTM ({easting}, {northing}) zone {zone} "
            f"northern={northern}: {e}"
        ) from e
    return float(lat), float(lon)


def to_lat_lon(
    coordinate: EOVCoordinate | UTMCoordinate,
    coordinate_system: CoordinateSystem,
) -> WGS84Coordinate:
    """Convert a projected coordinate to a geographic one.

    Pure function: no caching of results, no side effects besides the
    transformer cache.

    Raises:
        InvalidCoordinateError: On an unsupported coordinate system, a
            coordinate of the wrong kind, or a failed conversion
    """
    match coordinate_system.type:
        case CoordinateSystemType.EOV:
            if not isinstance(coordinate, EOVCoordinate):
                raise InvalidCoordinateError(
                    f"Expected an EOV coordinate, got {type(coordinate).__name__}"
                )
            lat, lon = eov_to_wgs84(coordinate.y, coordinate.x)

        case CoordinateSystemType.UTM:
            if not isinstance(coordinate, UTMCoordinate):
                raise InvalidCoordinateError(
                    f"Expected a UTM coordinate, got {type(coordinate).__name__}"
                )
            lat, lon = utm_to_wgs84(
                coordinate.easting,
                coordinate.northing,
                coordinate_system.zone_num,
                northern=bool(coordinate_system.northern),
            )

        case _:
            raise InvalidCoordinateError(
                f"Unsupported coordinate system: `{coordinate_system.type}`"
            )

    try:
        return WGS84Coordinate(latitude=lat, longitude=lon)
    except ValueError as e:
        raise InvalidCoordinateError(
            f"Conversion produced an invalid location ({lat}, {lon})"
        ) from e


# -----------------------------------------------------------------------------
# Meridian Convergence
# -----------------------------------------------------------------------------


def eov_convergence(y: float, x: float) -> float:
    """Meridian convergence (degrees) at an EOV coordinate.

    Angle between grid north and true north on the oblique cylindrical
    EOV projection.
    """
    dx = (x - 200_000) / EOV_EARTH_RADIUS
    dy = (y - 650_000) / EOV_EARTH_RADIUS
    gamma = math.atan(
        (math.cosh(dx) * math.sin(dy))
        / (1 / math.tan(0.82205) - math.sinh(dx) * math.cos(dy))
    )
    return rads_to_degrees(gamma)


def central_meridian(zone: int) -> float:
    return 6 * zone - 183


def utm_convergence(
    easting: float,
    northing: float,
    zone: int,
    northern: bool = True,
) -> float:
    """Meridian convergence (degrees) at a UTM coordinate.

    Spherical approximation ``atan(tan(dlon) * sin(lat))``; positive east
    of true north.
    """
    lat, lon = utm_to_wgs84(easting, northing, zone, northern=northern)
    phi = degrees_to_rads(lat)
    dlam = degrees_to_rads(lon) - degrees_to_rads(central_meridian(zone))
    return rads_to_degrees(math.atan(math.tan(dlam) * math.sin(phi)))


def convergence_at(
    coordinate: EOVCoordinate | UTMCoordinate,
    coordinate_system: CoordinateSystem,
) -> float:
    """Meridian convergence at a fix point of the given coordinate system."""
    if isinstance(coordinate, EOVCoordinate):
        return eov_convergence(coordinate.y, coordinate.x)
    return utm_convergence(
        coordinate.easting,
        coordinate.northing,
        coordinate_system.zone_num,
        northern=bool(coordinate_system.northern),
    )


# -----------------------------------------------------------------------------
# Magnetic Declination (offline model)
# -----------------------------------------------------------------------------


def decimal_year(dt: datetime.datetime) -> float:
    dt_start = datetime.datetime(  # noqa: DTZ001
        year=dt.year, month=1, day=1, hour=0, minute=0, second=0
    )
    dt_end = datetime.datetime(  # noqa: DTZ001
        year=dt.year + 1, month=1, day=1, hour=0, minute=0, second=0
    )
    return round(
        dt.year + (dt - dt_start).total_seconds() / (dt_end - dt_start).total_seconds(),
        ndigits=2,
    )


def get_igrf_declination(location: WGS84Coordinate, dt: datetime.datetime) -> float:
    """Magnetic declination (degrees, positive east) from the IGRF model."""
    declination, _, _, _, _, _, _ = pyIGRF.igrf_value(
        location.latitude,
        location.longitude,
        alt=0.0,
        year=decimal_year(dt.replace(tzinfo=None)),
    )
    return round(declination, 2)

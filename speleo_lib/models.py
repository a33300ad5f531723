# -*- coding: utf-8 -*-
"""Coordinate models used for geo-referencing caves.

A cave is geo-referenced by a :class:`GeoData` object: a projected
coordinate system (EOV or UTM) plus a list of fix points, i.e. stations
with a known projected coordinate.  Every reconstructed station carries
its coordinates in up to three frames (see :class:`StationCoordinates`).
"""

from __future__ import annotations

import datetime
from typing import Annotated
from typing import Any
from typing import Literal
from typing import Self

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator
from pydantic_extra_types.coordinate import Latitude  # noqa: TC002
from pydantic_extra_types.coordinate import Longitude  # noqa: TC002

from speleo_lib.constants import ELEVATION_RANGE
from speleo_lib.constants import EOV_X_RANGE
from speleo_lib.constants import EOV_Y_MIN
from speleo_lib.constants import WGS84_COORDINATE_PRECISION
from speleo_lib.enums import CoordinateSystemType
from speleo_lib.geometry import Vector3D
from speleo_lib.validation import is_valid_float


class SpeleoBaseModel(BaseModel):
    """Base model with the plain-data export/import pair used for persistence.

    ``to_export`` produces JSON-compatible dicts (camelCase aliases,
    datetimes as epoch milliseconds) and ``from_pure`` is its inverse.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_export(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_pure(cls, pure: dict[str, Any]) -> Self:
        return cls.model_validate(pure)


def to_epoch_millis(value: datetime.datetime | None) -> int | None:
    """Serialize a datetime as milliseconds since the Unix epoch (naive is UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.UTC)
    return round(value.timestamp() * 1000)


def from_epoch_millis(value: Any) -> Any:
    """Before-validator counterpart of :func:`to_epoch_millis`."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.datetime.fromtimestamp(value / 1000, tz=datetime.UTC)
    return value


def _validate_elevation(elevation: float) -> list[str]:
    low, high = ELEVATION_RANGE
    if is_valid_float(elevation) and not low <= elevation <= high:
        return [f"Elevation '{elevation}' is out of bounds"]
    return []


class EOVCoordinate(SpeleoBaseModel):
    """Hungarian National Grid coordinate with elevation.

    EOV names its easting ``y`` and its northing ``x``; ``to_vector``
    maps them onto the east/north axes of :class:`Vector3D`.
    """

    type: Literal["eov"] = "eov"
    y: float
    x: float
    elevation: float

    def to_vector(self) -> Vector3D:
        return Vector3D(self.y, self.x, self.elevation)

    def add_vector(self, v: Vector3D) -> EOVCoordinate:
        return EOVCoordinate(
            y=self.y + v.x, x=self.x + v.y, elevation=self.elevation + v.z
        )

    def validate_fields(self) -> list[str]:
        errors = [
            f"Coordinate '{coord}' is not a valid float number"
            for coord in (self.x, self.y, self.elevation)
            if not is_valid_float(coord)
        ]
        low, high = EOV_X_RANGE
        if is_valid_float(self.x) and not low <= self.x <= high:
            errors.append(f"X coordinate '{self.x}' is out of bounds")
        if is_valid_float(self.y) and self.y < EOV_Y_MIN:
            errors.append(f"Y coordinate '{self.y}' is out of bounds")
        errors.extend(_validate_elevation(self.elevation))
        return errors

    def is_valid(self) -> bool:
        return not self.validate_fields()


class UTMCoordinate(SpeleoBaseModel):
    """UTM coordinate with elevation (zone and hemisphere live on the system)."""

    type: Literal["utm"] = "utm"
    easting: float
    northing: float
    elevation: float

    def to_vector(self) -> Vector3D:
        return Vector3D(self.easting, self.northing, self.elevation)

    def add_vector(self, v: Vector3D) -> UTMCoordinate:
        return UTMCoordinate(
            easting=self.easting + v.x,
            northing=self.northing + v.y,
            elevation=self.elevation + v.z,
        )

    def validate_fields(self) -> list[str]:
        errors = [
            f"Coordinate '{coord}' is not a valid float number"
            for coord in (self.easting, self.northing, self.elevation)
            if not is_valid_float(coord)
        ]
        if is_valid_float(self.easting) and not 100_000 <= self.easting < 1_000_000:
            errors.append(f"Easting '{self.easting}' is out of bounds")
        if is_valid_float(self.northing) and not 0 <= self.northing <= 10_000_000:
            errors.append(f"Northing '{self.northing}' is out of bounds")
        errors.extend(_validate_elevation(self.elevation))
        return errors

    def is_valid(self) -> bool:
        return not self.validate_fields()


ProjectedCoordinate = Annotated[
    EOVCoordinate | UTMCoordinate, Field(discriminator="type")
]


class WGS84Coordinate(SpeleoBaseModel):
    latitude: Latitude
    longitude: Longitude

    def as_tuple(self) -> tuple[float, float]:
        """Return the longitude and latitude as a tuple.
        # RFC 7946: (longitude, latitude)
        """
        return (
            round(self.longitude, WGS84_COORDINATE_PRECISION),
            round(self.latitude, WGS84_COORDINATE_PRECISION),
        )


class CoordinateSystem(SpeleoBaseModel):
    """Projected coordinate system of a cave.

    Attributes:
        type: EOV or UTM
        zone_num: UTM zone number (1-60), UTM only
        northern: UTM hemisphere, UTM only
    """

    type: CoordinateSystemType
    zone_num: int | None = Field(default=None, alias="zoneNum")
    northern: bool | None = None

    @model_validator(mode="after")
    def validate_utm_zone(self) -> CoordinateSystem:
        if self.type != CoordinateSystemType.UTM:
            return self
        if self.zone_num is None or not 1 <= self.zone_num <= 60:  # noqa: PLR2004
            raise ValueError(
                f"UTM zone must be between 1 and 60, got {self.zone_num}"
            )
        if self.northern is None:
            raise ValueError("UTM coordinate system requires a hemisphere")
        return self

    def __str__(self) -> str:
        if self.type == CoordinateSystemType.UTM:
            hemisphere = "N" if self.northern else "S"
            return f"UTM {self.zone_num}{hemisphere}"
        return "EOV"


class StationWithCoordinate(SpeleoBaseModel):
    """A fix point: a station name bound to a known projected coordinate."""

    name: str
    coordinate: ProjectedCoordinate


class GeoData(SpeleoBaseModel):
    """Geo-referencing information of a cave."""

    coordinate_system: CoordinateSystem = Field(alias="coordinateSystem")
    coordinates: list[StationWithCoordinate] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_coordinate_kinds(self) -> GeoData:
        for fix_point in self.coordinates:
            if fix_point.coordinate.type != self.coordinate_system.type:
                raise ValueError(
                    f"Fix point '{fix_point.name}' is a "
                    f"{fix_point.coordinate.type} coordinate in a "
                    f"{self.coordinate_system.type.value} coordinate system"
                )
        return self

    def get_fix_point(self, name: str) -> EOVCoordinate | UTMCoordinate | None:
        return next(
            (c.coordinate for c in self.coordinates if c.name == name), None
        )


class StationCoordinates(SpeleoBaseModel):
    """Coordinates of a reconstructed station.

    Attributes:
        local: Position relative to the first fix point (or start station)
        projected: EOV/UTM coordinate, only when a fix point is an ancestor
        wgs: Geographic coordinate derived from ``projected``
    """

    local: Vector3D
    projected: ProjectedCoordinate | None = None
    wgs: WGS84Coordinate | None = None

    @property
    def is_georeferenced(self) -> bool:
        return self.projected is not None

# -*- coding: utf-8 -*-
"""Survey data models.

This module contains Pydantic models for representing survey data:
- Shot: A single measured leg (length, azimuth, inclination)
- SurveyMetadata: Date, north corrections, team and instruments
- Survey: An ordered list of shots sharing one reference frame
- SurveyAlias: Two differently named stations that are the same point
- SurveyStation: A station placed in 3-D by the reconstruction engine

Lengths are in meters and angles in degrees.
"""

from __future__ import annotations

import datetime  # noqa: TC003
from typing import Any
from typing import NamedTuple

from pydantic import Field
from pydantic import field_serializer
from pydantic import field_validator

from speleo_lib.constants import AZIMUTH_RANGE
from speleo_lib.constants import CLINO_RANGE
from speleo_lib.constants import SPLAY_STATION_NAME_TEMPLATE
from speleo_lib.enums import ShotType
from speleo_lib.geometry import Vector3D  # noqa: TC001
from speleo_lib.models import SpeleoBaseModel
from speleo_lib.models import StationCoordinates  # noqa: TC001
from speleo_lib.models import from_epoch_millis
from speleo_lib.models import to_epoch_millis
from speleo_lib.validation import is_valid_float
from speleo_lib.validation import is_valid_station_name

#: Fields that must be present for a shot to be complete (``to`` is optional)
REQUIRED_SHOT_FIELDS: tuple[str, ...] = (
    "id",
    "type",
    "from_name",
    "length",
    "azimuth",
    "clino",
)


class Shot(SpeleoBaseModel):
    """A single survey shot.

    Validation is relaxed so that rows being edited (missing or
    out-of-range values) can be stored; :meth:`validate_fields` reports
    the problems and the reconstruction engine only uses valid shots.

    ``from_alias`` / ``to_alias`` record which alias substitution the
    last reconstruction used for this shot.  They are output of the
    engine and are never exported.
    """

    id: int | None = None
    type: ShotType | None = None
    from_name: str | None = Field(default=None, alias="from")
    to_name: str | None = Field(default=None, alias="to")
    length: float | None = None
    azimuth: float | None = None
    clino: float | None = None
    comment: str | None = None

    from_alias: str | None = Field(default=None, exclude=True)
    to_alias: str | None = Field(default=None, exclude=True)

    def is_center(self) -> bool:
        return self.type == ShotType.CENTER

    def is_splay(self) -> bool:
        return self.type == ShotType.SPLAY

    def is_auxiliary(self) -> bool:
        return self.type == ShotType.AUXILIARY

    def get_empty_fields(self) -> list[str]:
        return [f for f in REQUIRED_SHOT_FIELDS if getattr(self, f) is None]

    def is_complete(self) -> bool:
        return not self.get_empty_fields()

    def validate_fields(self) -> list[str]:
        """Return human-readable problems of this shot (empty when valid)."""
        errors: list[str] = []

        if not isinstance(self.id, int):
            errors.append(f"Id ({self.id}) is not a valid integer number")

        if not isinstance(self.type, ShotType):
            errors.append(
                f"Type ({self.type}) is not one of "
                f"{', '.join(t.value for t in ShotType)}"
            )

        if not is_valid_station_name(self.from_name):
            errors.append(f"From ({self.from_name!r}) is not a station name")
        elif self.to_name and self.from_name == self.to_name:
            errors.append(
                f"From ({self.from_name}) and to ({self.to_name}) cannot be the same"
            )

        for field_name in ("length", "azimuth", "clino"):
            value = getattr(self, field_name)
            if not is_valid_float(value):
                errors.append(f"{field_name} ({value}) is not a valid decimal number")

        if is_valid_float(self.length) and self.length <= 0:
            errors.append("Length must be greater than 0")

        low, high = CLINO_RANGE
        if is_valid_float(self.clino) and not low <= self.clino <= high:
            errors.append(f"Clino should be between {low:g} and {high:g}")

        low, high = AZIMUTH_RANGE
        if is_valid_float(self.azimuth) and not low <= self.azimuth <= high:
            errors.append(f"Azimuth should be between {low:g} and {high:g}")

        return errors

    def is_valid(self) -> bool:
        return not self.validate_fields()

    def reset_aliases(self) -> None:
        self.from_alias = None
        self.to_alias = None


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class SurveyTeamMember(SpeleoBaseModel):
    name: str
    role: str | None = None


class SurveyTeam(SpeleoBaseModel):
    name: str
    members: list[SurveyTeamMember] = Field(default_factory=list)


class SurveyInstrument(SpeleoBaseModel):
    name: str
    value: str | None = None


class SurveyMetadata(SpeleoBaseModel):
    """Metadata of a survey.

    ``declination`` corrects magnetic bearings to true north and
    ``convergence`` corrects true north to grid north; both are in
    degrees and are treated as 0 when absent.
    """

    date: datetime.datetime | None = None
    declination: float | None = None
    convergence: float | None = None
    team: SurveyTeam | None = None
    instruments: list[SurveyInstrument] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def parse_epoch_millis(cls, value: Any) -> Any:
        return from_epoch_millis(value)

    @field_serializer("date")
    def serialize_epoch_millis(self, value: datetime.datetime | None) -> int | None:
        return to_epoch_millis(value)


# ---------------------------------------------------------------------------
# Survey
# ---------------------------------------------------------------------------


class Survey(SpeleoBaseModel):
    """An ordered set of shots sharing one reference frame.

    ``orphan_shot_ids``, ``duplicate_shot_ids`` and ``isolated`` are the
    diagnostics of the last reconstruction; they are fully recomputed on
    every reconstruction.
    """

    name: str
    visible: bool = True
    metadata: SurveyMetadata | None = None
    start: str | None = None
    shots: list[Shot] = Field(default_factory=list)

    orphan_shot_ids: set[int] = Field(default_factory=set, alias="orphanShotIds")
    duplicate_shot_ids: set[int] = Field(
        default_factory=set, alias="duplicateShotIds"
    )
    isolated: bool = False

    @field_serializer("orphan_shot_ids", "duplicate_shot_ids")
    def serialize_id_set(self, value: set[int]) -> list[int]:
        return sorted(value)

    # -- derived shot collections -------------------------------------------

    @property
    def valid_shots(self) -> list[Shot]:
        return [sh for sh in self.shots if sh.is_complete() and sh.is_valid()]

    @property
    def invalid_shot_ids(self) -> set[int]:
        return {
            sh.id
            for sh in self.shots
            if (not sh.is_complete() or not sh.is_valid()) and sh.id is not None
        }

    @property
    def shot_ids(self) -> set[int]:
        return {sh.id for sh in self.shots if sh.id is not None}

    def update_shots(self, shots: list[Shot]) -> None:
        self.shots = shots

    # -- north corrections --------------------------------------------------

    @property
    def declination(self) -> float:
        if self.metadata is None or self.metadata.declination is None:
            return 0.0
        return self.metadata.declination

    @property
    def convergence(self) -> float:
        if self.metadata is None or self.metadata.convergence is None:
            return 0.0
        return self.metadata.convergence

    # -- station naming -----------------------------------------------------

    def get_splay_station_name(self, shot_id: int | None) -> str:
        return SPLAY_STATION_NAME_TEMPLATE.format(
            shot_id=shot_id, survey_name=self.name
        )

    def get_from_station_name(self, shot: Shot) -> str | None:
        return shot.from_alias if shot.from_alias is not None else shot.from_name

    def get_to_station_name(self, shot: Shot) -> str | None:
        if shot.is_splay():
            return self.get_splay_station_name(shot.id)
        if shot.to_alias is not None:
            return shot.to_alias
        return shot.to_name

    def get_start_station_name(self) -> str | None:
        """Explicit start if set and non-empty, else the first shot's ``from``."""
        if self.start:
            return self.start
        return next((sh.from_name for sh in self.shots if sh.from_name), None)


class SurveyAlias(SpeleoBaseModel):
    """Declares two differently named stations to be the same point."""

    from_name: str = Field(alias="from")
    to_name: str = Field(alias="to")

    def contains(self, name: str | None) -> bool:
        return name is not None and name in (self.from_name, self.to_name)

    def get_pair(self, name: str | None) -> str | None:
        if name == self.from_name:
            return self.to_name
        if name == self.to_name:
            return self.from_name
        return None


# ---------------------------------------------------------------------------
# Reconstructed stations
# ---------------------------------------------------------------------------


class ShotRef(NamedTuple):
    """Key of a shot within a cave: (survey name, shot id)."""

    survey_name: str
    shot_id: int


class SurveyStation(SpeleoBaseModel):
    """A station placed by the reconstruction engine.

    Attributes:
        type: Type of the shot that placed the station (CENTER for seeds)
        position: Absolute position in the shared local frame of the cave
        coordinates: Local / projected / geographic coordinates
        survey_name: Name of the survey that placed the station
        shots: Keys of the shots connecting at this station
    """

    type: ShotType
    position: Vector3D
    coordinates: StationCoordinates
    survey_name: str | None = Field(default=None, alias="survey")
    shots: list[ShotRef] = Field(default_factory=list)

    def is_center(self) -> bool:
        return self.type == ShotType.CENTER

    def is_splay(self) -> bool:
        return self.type == ShotType.SPLAY

    def is_auxiliary(self) -> bool:
        return self.type == ShotType.AUXILIARY

# -*- coding: utf-8 -*-
"""Cave aggregate: surveys, aliases, geo-referencing and the station map."""

from __future__ import annotations

import datetime  # noqa: TC003
from typing import Any

from pydantic import Field
from pydantic import field_serializer
from pydantic import field_validator

from speleo_lib.models import GeoData  # noqa: TC001
from speleo_lib.models import SpeleoBaseModel
from speleo_lib.models import from_epoch_millis
from speleo_lib.models import to_epoch_millis
from speleo_lib.survey.models import Survey  # noqa: TC001
from speleo_lib.survey.models import SurveyAlias  # noqa: TC001
from speleo_lib.survey.models import SurveyStation  # noqa: TC001
from speleo_lib.validation import is_valid_float


class CaveMetadata(SpeleoBaseModel):
    country: str | None = None
    region: str | None = None
    settlement: str | None = None
    cataster_code: str | None = Field(default=None, alias="catasterCode")
    date: datetime.datetime | None = None
    creator: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_epoch_millis(cls, value: Any) -> Any:
        return from_epoch_millis(value)

    @field_serializer("date")
    def serialize_epoch_millis(self, value: datetime.datetime | None) -> int | None:
        return to_epoch_millis(value)


class CaveStats(SpeleoBaseModel):
    """Summary figures of a reconstructed cave (lengths and heights in meters).

    ``depth`` and ``height`` are measured from the first station of the
    first survey; vertical extents only consider center stations unless
    the splays are explicitly included.
    """

    stations: int = 0
    surveys: int = 0
    isolated: int = 0
    splays: int = 0
    length: float = 0.0
    orphan_length: float = Field(default=0.0, alias="orphanLength")
    invalid_length: float = Field(default=0.0, alias="invalidLength")
    auxiliary_length: float = Field(default=0.0, alias="auxiliaryLength")
    depth: float = 0.0
    height: float = 0.0
    vertical: float = 0.0
    vertical_with_splays: float = Field(default=0.0, alias="verticalWithSplays")
    min_z: float = Field(default=0.0, alias="minZ")
    max_z: float = Field(default=0.0, alias="maxZ")


class Cave(SpeleoBaseModel):
    """A cave: the ordered surveys and the shared station map they populate.

    ``stations`` is owned by the cave and rebuilt from scratch by
    :func:`speleo_lib.network.recalculate_cave`; it is not part of the
    default export.
    """

    name: str
    visible: bool = True
    metadata: CaveMetadata | None = None
    geo_data: GeoData | None = Field(default=None, alias="geoData")
    surveys: list[Survey] = Field(default_factory=list)
    aliases: list[SurveyAlias] = Field(default_factory=list)
    stations: dict[str, SurveyStation] = Field(default_factory=dict)

    @field_validator("surveys")
    @classmethod
    def validate_unique_survey_names(cls, surveys: list[Survey]) -> list[Survey]:
        seen: set[str] = set()
        for survey in surveys:
            if survey.name in seen:
                raise ValueError(f"Duplicate survey name: `{survey.name}`")
            seen.add(survey.name)
        return surveys

    def to_export(  # type: ignore[override]
        self, *, include_stations: bool = False
    ) -> dict[str, Any]:
        exclude = None if include_stations else {"stations"}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)

    def get_survey(self, name: str) -> Survey | None:
        return next((s for s in self.surveys if s.name == name), None)

    def get_first_station_name(self) -> str | None:
        if not self.surveys:
            return None
        return self.surveys[0].get_start_station_name()

    def get_first_station(self) -> SurveyStation | None:
        name = self.get_first_station_name()
        if name is None:
            return None
        return self.stations.get(name)

    def get_stats(self) -> CaveStats:
        stats = CaveStats(surveys=len(self.surveys))

        for survey in self.surveys:
            if survey.isolated:
                stats.isolated += 1

            invalid_ids = survey.invalid_shot_ids
            for shot in survey.shots:
                if shot.is_splay():
                    stats.splays += 1

                if not is_valid_float(shot.length):
                    continue

                if shot.id in survey.orphan_shot_ids:
                    stats.orphan_length += shot.length
                if shot.id in invalid_ids:
                    stats.invalid_length += shot.length

                if shot.is_auxiliary():
                    stats.auxiliary_length += shot.length
                elif shot.is_center():
                    stats.length += shot.length

        center_z = [st.position.z for st in self.stations.values() if st.is_center()]
        splay_z = [st.position.z for st in self.stations.values() if st.is_splay()]
        stats.stations = len(center_z)

        if not center_z:
            return stats

        stats.min_z = min(center_z)
        stats.max_z = max(center_z)
        stats.vertical = stats.max_z - stats.min_z

        all_z = center_z + splay_z
        stats.vertical_with_splays = max(all_z) - min(all_z)

        first_station = self.get_first_station()
        if first_station is not None:
            stats.depth = first_station.position.z - stats.min_z
            stats.height = stats.max_z - first_station.position.z

        return stats

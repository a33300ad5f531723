# -*- coding: utf-8 -*-
"""Tests for the survey, cave and coordinate models."""

import datetime

import pytest
from pydantic import ValidationError

from speleo_lib.cave.models import Cave
from speleo_lib.cave.models import CaveMetadata
from speleo_lib.enums import CoordinateSystemType
from speleo_lib.geometry import Vector3D
from speleo_lib.models import CoordinateSystem
from speleo_lib.models import EOVCoordinate
from speleo_lib.models import GeoData
from speleo_lib.models import UTMCoordinate
from speleo_lib.network.reconstruction import recalculate_cave
from speleo_lib.survey.models import Shot
from speleo_lib.survey.models import Survey
from speleo_lib.survey.models import SurveyAlias
from speleo_lib.survey.models import SurveyMetadata
from tests.conftest import make_shot
from tests.conftest import make_splay
from tests.conftest import make_survey

#: 2024-05-01T00:00:00Z
MAY_DAY_MILLIS = 1_714_521_600_000


class TestShot:
    """Test shot validation."""

    def test_valid_shot(self):
        shot = make_shot(0, "A", "B", 10, 45, -10)
        assert shot.is_complete()
        assert shot.validate_fields() == []
        assert shot.is_valid()
        assert shot.is_center()

    def test_empty_fields(self):
        shot = Shot(id=1, from_name="A")
        assert shot.get_empty_fields() == ["type", "length", "azimuth", "clino"]
        assert not shot.is_complete()

    def test_to_is_optional(self):
        assert make_splay(0, "A").is_complete()

    @pytest.mark.parametrize(
        ("changes", "message"),
        [
            ({"length": 0}, "Length must be greater than 0"),
            ({"length": -3}, "Length must be greater than 0"),
            ({"clino": 91}, "Clino should be between -90 and 90"),
            ({"azimuth": 361}, "Azimuth should be between -360 and 360"),
            ({"to_name": "A"}, "From (A) and to (A) cannot be the same"),
            ({"from_name": " A"}, "is not a station name"),
            ({"length": float("nan")}, "length (nan) is not a valid decimal number"),
        ],
    )
    def test_invalid_values(self, changes, message):
        shot = make_shot(0, "A", "B").model_copy(update=changes)
        errors = shot.validate_fields()
        assert any(message in e for e in errors), errors
        assert not shot.is_valid()

    def test_export_uses_aliases(self):
        shot = make_shot(3, "A", "B", 5, 10, 20)
        shot.to_alias = "X"
        exported = shot.to_export()

        assert exported["from"] == "A"
        assert exported["to"] == "B"
        assert exported["type"] == "center"
        assert "to_alias" not in exported
        assert "toAlias" not in exported

    def test_load_from_pure(self):
        shot = Shot.from_pure(
            {"id": 2, "type": "splay", "from": "C", "length": 1.5, "azimuth": 0, "clino": 5}
        )
        assert shot.is_splay()
        assert shot.from_name == "C"
        assert shot.to_name is None


class TestSurvey:
    """Test survey helpers."""

    def test_valid_and_invalid_shots(self):
        survey = make_survey(
            "s",
            [make_shot(0, "A", "B"), make_shot(1, "B", "C", length=-1), Shot(id=2)],
        )
        assert [sh.id for sh in survey.valid_shots] == [0]
        assert survey.invalid_shot_ids == {1, 2}
        assert survey.shot_ids == {0, 1, 2}

    def test_splay_station_name(self):
        survey = make_survey("Entrance", [make_splay(7, "A")])
        shot = survey.shots[0]
        assert survey.get_to_station_name(shot) == "splay-7@Entrance"

    def test_aliased_station_names(self):
        survey = make_survey("s", [make_shot(0, "A", "B")])
        shot = survey.shots[0]
        shot.from_alias = "X"
        shot.to_alias = "Y"
        assert survey.get_from_station_name(shot) == "X"
        assert survey.get_to_station_name(shot) == "Y"
        shot.reset_aliases()
        assert survey.get_from_station_name(shot) == "A"
        assert survey.get_to_station_name(shot) == "B"

    def test_start_station_name(self):
        survey = make_survey("s", [Shot(id=0), make_shot(1, "K", "L")])
        assert survey.get_start_station_name() == "K"
        survey.start = "L"
        assert survey.get_start_station_name() == "L"
        assert make_survey("empty", []).get_start_station_name() is None

    def test_corrections_default_to_zero(self):
        survey = make_survey("s", [])
        assert survey.declination == 0.0
        assert survey.convergence == 0.0
        survey.metadata = SurveyMetadata(declination=3.5)
        assert survey.declination == 3.5
        assert survey.convergence == 0.0

    def test_diagnostics_export(self):
        survey = make_survey("s", [])
        survey.orphan_shot_ids = {5, 1, 3}
        exported = survey.to_export()
        assert exported["orphanShotIds"] == [1, 3, 5]
        assert exported["duplicateShotIds"] == []
        assert exported["isolated"] is False


class TestSurveyMetadata:
    """Test epoch millisecond dates."""

    def test_date_from_millis(self):
        metadata = SurveyMetadata.from_pure({"date": MAY_DAY_MILLIS})
        assert metadata.date == datetime.datetime(2024, 5, 1, tzinfo=datetime.UTC)

    def test_date_to_millis(self):
        metadata = SurveyMetadata(date=datetime.datetime(2024, 5, 1))  # noqa: DTZ001
        assert metadata.to_export()["date"] == MAY_DAY_MILLIS

    def test_cave_metadata_round_trip(self):
        metadata = CaveMetadata.from_pure(
            {"country": "Hungary", "catasterCode": "4420-1", "date": MAY_DAY_MILLIS}
        )
        assert metadata.cataster_code == "4420-1"
        assert metadata.to_export()["date"] == MAY_DAY_MILLIS
        assert metadata.to_export()["catasterCode"] == "4420-1"


class TestSurveyAlias:
    """Test station aliases."""

    def test_contains_and_pair(self):
        alias = SurveyAlias.from_pure({"from": "A1", "to": "B7"})
        assert alias.contains("A1")
        assert alias.contains("B7")
        assert not alias.contains("C")
        assert not alias.contains(None)
        assert alias.get_pair("A1") == "B7"
        assert alias.get_pair("B7") == "A1"
        assert alias.get_pair("C") is None


class TestCoordinates:
    """Test projected coordinates and coordinate systems."""

    def test_eov_vector_axes(self):
        coord = EOVCoordinate(y=650_000, x=240_000, elevation=300)
        assert coord.to_vector() == Vector3D(650_000, 240_000, 300)
        moved = coord.add_vector(Vector3D(1, 2, 3))
        assert (moved.y, moved.x, moved.elevation) == (650_001, 240_002, 303)

    def test_eov_bounds(self):
        assert EOVCoordinate(y=650_000, x=240_000, elevation=300).is_valid()
        errors = EOVCoordinate(y=100_000, x=500_000, elevation=300).validate_fields()
        assert len(errors) == 2

    def test_utm_bounds(self):
        assert UTMCoordinate(easting=350_000, northing=5_270_000, elevation=0).is_valid()
        assert not UTMCoordinate(easting=50_000, northing=5_270_000, elevation=0).is_valid()

    def test_utm_requires_zone(self):
        with pytest.raises(ValidationError, match="UTM zone"):
            CoordinateSystem(type=CoordinateSystemType.UTM, northern=True)

    def test_utm_requires_hemisphere(self):
        with pytest.raises(ValidationError, match="hemisphere"):
            CoordinateSystem.from_pure({"type": "utm", "zoneNum": 34})

    def test_str(self):
        assert str(CoordinateSystem(type=CoordinateSystemType.EOV)) == "EOV"
        utm = CoordinateSystem.from_pure({"type": "utm", "zoneNum": 33, "northern": False})
        assert str(utm) == "UTM 33S"

    def test_mismatched_fix_point(self):
        with pytest.raises(ValidationError, match="Fix point 'A'"):
            GeoData.from_pure(
                {
                    "coordinateSystem": {"type": "eov"},
                    "coordinates": [
                        {
                            "name": "A",
                            "coordinate": {
                                "type": "utm",
                                "easting": 350_000,
                                "northing": 5_270_000,
                                "elevation": 0,
                            },
                        }
                    ],
                }
            )

    def test_get_fix_point(self, eov_geo_data):
        assert isinstance(eov_geo_data.get_fix_point("A"), EOVCoordinate)
        assert eov_geo_data.get_fix_point("Z") is None


class TestCave:
    """Test the cave aggregate."""

    def test_duplicate_survey_names(self):
        with pytest.raises(ValidationError, match="Duplicate survey name"):
            Cave(name="c", surveys=[make_survey("s", []), make_survey("s", [])])

    def test_get_survey(self, tree_cave):
        assert tree_cave.get_survey("branch").name == "branch"
        assert tree_cave.get_survey("missing") is None

    def test_export_excludes_stations(self, tree_cave):
        recalculate_cave(tree_cave)

        assert "stations" not in tree_cave.to_export()
        exported = tree_cave.to_export(include_stations=True)
        assert exported["stations"]["B"]["survey"] == "main"
        assert exported["stations"]["B"]["type"] == "center"

    def test_round_trip_with_stations(self, tree_cave):
        recalculate_cave(tree_cave)

        loaded = Cave.from_pure(tree_cave.to_export(include_stations=True))

        assert loaded.stations.keys() == tree_cave.stations.keys()
        assert loaded.stations["C"].position == tree_cave.stations["C"].position
        assert loaded.stations["C"].shots == tree_cave.stations["C"].shots

    def test_first_station(self, tree_cave):
        assert tree_cave.get_first_station_name() == "A"
        assert tree_cave.get_first_station() is None
        recalculate_cave(tree_cave)
        assert tree_cave.get_first_station().position == Vector3D(0, 0, 0)
        assert Cave(name="empty").get_first_station_name() is None


class TestCaveStats:
    """Test cave statistics."""

    def test_vertical_cave(self, vertical_cave):
        recalculate_cave(vertical_cave)
        stats = vertical_cave.get_stats()

        assert stats.surveys == 1
        assert stats.stations == 3
        assert stats.splays == 1
        assert stats.isolated == 0
        assert stats.length == pytest.approx(20)
        assert stats.auxiliary_length == pytest.approx(4)
        assert stats.orphan_length == 0
        assert stats.min_z == pytest.approx(-10)
        assert stats.max_z == pytest.approx(0)
        assert stats.depth == pytest.approx(10)
        assert stats.height == pytest.approx(0)
        assert stats.vertical == pytest.approx(10)
        assert stats.vertical_with_splays == pytest.approx(10)

    def test_orphan_and_invalid_lengths(self):
        cave = Cave(
            name="c",
            surveys=[
                make_survey(
                    "s",
                    [
                        make_shot(0, "A", "B", 10),
                        make_shot(1, "P", "Q", 3),
                        make_shot(2, "B", "C", 7, clino=120),
                    ],
                )
            ],
        )
        recalculate_cave(cave)
        stats = cave.get_stats()

        assert stats.length == pytest.approx(20)
        assert stats.orphan_length == pytest.approx(10)
        assert stats.invalid_length == pytest.approx(7)

    def test_stats_export_aliases(self, vertical_cave):
        recalculate_cave(vertical_cave)
        exported = vertical_cave.get_stats().to_export()
        assert exported["verticalWithSplays"] == pytest.approx(10)
        assert exported["minZ"] == pytest.approx(-10)

    def test_empty_cave(self):
        stats = Cave(name="c").get_stats()
        assert stats.stations == 0
        assert stats.depth == 0.0

# -*- coding: utf-8 -*-
"""Tests for cave file I/O."""

import orjson
import pytest
from pydantic import ValidationError

from speleo_lib.cave.models import Cave
from speleo_lib.geometry import Vector3D
from speleo_lib.interface import SpeleoInterface
from speleo_lib.io import load_cave
from speleo_lib.io import save_cave
from speleo_lib.survey.models import ShotRef

CAVE_JSON = {
    "name": "Mátyás-hegyi-barlang",
    "metadata": {"country": "Hungary", "date": 1_714_521_600_000},
    "surveys": [
        {
            "name": "entrance",
            "metadata": {"declination": 0.0, "convergence": 0.0},
            "shots": [
                {"id": 0, "type": "center", "from": "A", "to": "B",
                 "length": 10, "azimuth": 0, "clino": 0},
                {"id": 1, "type": "splay", "from": "B",
                 "length": 2, "azimuth": 90, "clino": 0},
                {"id": 2, "type": "center", "from": "P", "to": "Q",
                 "length": 4, "azimuth": 0, "clino": 0},
            ],
        },
        {
            "name": "lower",
            "shots": [
                {"id": 0, "type": "center", "from": "X", "to": "C",
                 "length": 5, "azimuth": 90, "clino": 0},
            ],
        },
    ],
    "aliases": [{"from": "B", "to": "X"}],
}


@pytest.fixture
def cave_file(tmp_path):
    path = tmp_path / "cave.json"
    path.write_bytes(orjson.dumps(CAVE_JSON))
    return path


class TestLoad:
    """Test loading caves."""

    def test_load_reconstructs(self, cave_file):
        cave = SpeleoInterface.load_json(cave_file)

        assert cave.name == "Mátyás-hegyi-barlang"
        assert cave.stations["B"].position == pytest.approx((0, 10, 0))
        assert cave.stations["C"].position == pytest.approx((5, 10, 0))
        assert cave.surveys[0].orphan_shot_ids == {2}
        assert cave.surveys[1].shots[0].from_alias == "B"
        assert cave.surveys[1].isolated is False

    def test_load_without_reconstruction(self, cave_file):
        cave = load_cave(cave_file, reconstruct=False)
        assert cave.stations == {}
        assert cave.surveys[0].orphan_shot_ids == set()

    def test_loads_json(self):
        cave = SpeleoInterface.loads_json(orjson.dumps(CAVE_JSON))
        assert "splay-1@entrance" in cave.stations

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Cave file not found"):
            load_cave(tmp_path / "missing.json")

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_bytes(orjson.dumps({"surveys": []}))
        with pytest.raises(ValidationError):
            load_cave(path)


class TestSave:
    """Test writing caves."""

    def test_round_trip(self, cave_file, tmp_path):
        cave = load_cave(cave_file)
        out = tmp_path / "out.json"

        save_cave(cave, out)
        data = orjson.loads(out.read_bytes())

        assert "stations" not in data
        assert data["surveys"][0]["orphanShotIds"] == [2]
        assert data["metadata"]["date"] == 1_714_521_600_000
        assert data["aliases"] == [{"from": "B", "to": "X"}]

        reloaded = load_cave(out)
        assert reloaded.stations.keys() == cave.stations.keys()

    def test_include_stations(self, cave_file, tmp_path):
        cave = load_cave(cave_file)
        out = tmp_path / "out.json"

        save_cave(cave, out, include_stations=True)
        reloaded = load_cave(out, reconstruct=False)

        assert reloaded.stations["C"].position == cave.stations["C"].position
        assert isinstance(reloaded.stations["C"].position, Vector3D)
        assert reloaded.stations["B"].shots == [
            ShotRef("entrance", 0),
            ShotRef("entrance", 1),
            ShotRef("lower", 0),
        ]

    def test_minify(self, cave_file):
        cave = load_cave(cave_file)
        assert b"\n" not in SpeleoInterface.dumps_json(cave, minify=True)
        assert b"\n" in SpeleoInterface.dumps_json(cave)

    def test_empty_cave(self):
        dumped = SpeleoInterface.dumps_json(Cave(name="c"), minify=True)
        assert orjson.loads(dumped)["surveys"] == []

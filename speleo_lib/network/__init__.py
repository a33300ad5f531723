# -*- coding: utf-8 -*-
"""Survey network reconstruction and the algorithms built on its output."""

from speleo_lib.network.graph import Section
from speleo_lib.network.graph import StationGraph
from speleo_lib.network.graph import Traversal
from speleo_lib.network.graph import build_station_graph
from speleo_lib.network.reconstruction import calculate_survey_stations
from speleo_lib.network.reconstruction import compute_shot_displacement
from speleo_lib.network.reconstruction import recalculate_cave
from speleo_lib.network.reconstruction import recalculate_survey
from speleo_lib.network.segments import Segments
from speleo_lib.network.segments import get_segments

__all__ = [
    "Section",
    "Segments",
    "StationGraph",
    "Traversal",
    "build_station_graph",
    "calculate_survey_stations",
    "compute_shot_displacement",
    "get_segments",
    "recalculate_cave",
    "recalculate_survey",
]

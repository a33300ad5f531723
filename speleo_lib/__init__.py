# -*- coding: utf-8 -*-
"""Cave Survey Network Library.

A Python library reconstructing cave survey networks: polar shots
(length, azimuth, inclination) grouped into surveys are turned into 3-D
station positions, with orphan / duplicate / isolated diagnostics and
projected (EOV, UTM) and geographic (WGS84) coordinates propagated from
fix points.

Usage:
    # Load a cave and rebuild its station map
    from speleo_lib import load_cave
    cave = load_cave(Path("cave.json"))

    for survey in cave.surveys:
        print(f"Survey: {survey.name}")
        print(f"  orphan shots: {sorted(survey.orphan_shot_ids)}")

    # Or reconstruct a single survey by hand
    from speleo_lib import calculate_survey_stations, Vector3D
    stations = {}
    calculate_survey_stations(survey, stations, [], start_position=Vector3D(0, 0, 0))
"""

__version__ = "0.1.0"

# Models
from speleo_lib.cave.models import Cave
from speleo_lib.cave.models import CaveMetadata
from speleo_lib.cave.models import CaveStats

# Constants
from speleo_lib.constants import JSON_ENCODING
from speleo_lib.constants import SPLAY_STATION_NAME_TEMPLATE

# Enums
from speleo_lib.enums import ColorMode
from speleo_lib.enums import CoordinateSystemType
from speleo_lib.enums import ShotType

# Errors
from speleo_lib.errors import ConflictingShotError
from speleo_lib.errors import DeclinationLookupError
from speleo_lib.errors import GradientConfigurationError
from speleo_lib.errors import InvalidCoordinateError
from speleo_lib.errors import SpeleoError
from speleo_lib.errors import UnknownShotTypeError
from speleo_lib.geo_utils import to_lat_lon
from speleo_lib.geometry import Color
from speleo_lib.geometry import Vector3D
from speleo_lib.geometry import from_polar
from speleo_lib.gradient import GradientColor
from speleo_lib.gradient import SegmentColors
from speleo_lib.gradient import interpolate_color_by_value
from speleo_lib.interface import SpeleoInterface
from speleo_lib.io import load_cave
from speleo_lib.io import save_cave
from speleo_lib.models import CoordinateSystem
from speleo_lib.models import EOVCoordinate
from speleo_lib.models import GeoData
from speleo_lib.models import StationCoordinates
from speleo_lib.models import StationWithCoordinate
from speleo_lib.models import UTMCoordinate
from speleo_lib.models import WGS84Coordinate
from speleo_lib.network import StationGraph
from speleo_lib.network import build_station_graph
from speleo_lib.network import calculate_survey_stations
from speleo_lib.network import get_segments
from speleo_lib.network import recalculate_cave
from speleo_lib.network import recalculate_survey
from speleo_lib.survey.models import Shot
from speleo_lib.survey.models import Survey
from speleo_lib.survey.models import SurveyAlias
from speleo_lib.survey.models import SurveyMetadata
from speleo_lib.survey.models import SurveyStation
from speleo_lib.validation import is_valid_station_name
from speleo_lib.validation import validate_station_name

__all__ = [
    # Constants
    "JSON_ENCODING",
    "SPLAY_STATION_NAME_TEMPLATE",
    # Models
    "Cave",
    "CaveMetadata",
    "CaveStats",
    # Geometry
    "Color",
    # Enums
    "ColorMode",
    # Errors
    "ConflictingShotError",
    "CoordinateSystem",
    "CoordinateSystemType",
    "DeclinationLookupError",
    "EOVCoordinate",
    "GeoData",
    # Gradients
    "GradientColor",
    "GradientConfigurationError",
    "InvalidCoordinateError",
    "SegmentColors",
    "Shot",
    "ShotType",
    # I/O
    "SpeleoError",
    "SpeleoInterface",
    "StationCoordinates",
    # Network
    "StationGraph",
    "StationWithCoordinate",
    "Survey",
    "SurveyAlias",
    "SurveyMetadata",
    "SurveyStation",
    "UTMCoordinate",
    "UnknownShotTypeError",
    "Vector3D",
    "WGS84Coordinate",
    "build_station_graph",
    "calculate_survey_stations",
    "from_polar",
    "get_segments",
    "interpolate_color_by_value",
    # Validation
    "is_valid_station_name",
    "load_cave",
    "recalculate_cave",
    "recalculate_survey",
    "save_cave",
    "to_lat_lon",
    "validate_station_name",
]

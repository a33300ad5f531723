# -*- coding: utf-8 -*-
"""Enumerations for cave survey data."""

from enum import Enum


class ShotType(str, Enum):
    """Kind of a survey shot.

    Attributes:
        CENTER: Backbone (centerline) leg between two named stations
        SPLAY: Leg from a station to an unnamed wall point
        AUXILIARY: Supplementary leg; its stations cannot anchor
            center or splay shots
    """

    CENTER = "center"
    SPLAY = "splay"
    AUXILIARY = "auxiliary"


class CoordinateSystemType(str, Enum):
    """Projected coordinate systems a cave can be geo-referenced in.

    Attributes:
        EOV: Hungarian National Grid (Egységes Országos Vetület)
        UTM: Universal Transverse Mercator
    """

    EOV = "eov"
    UTM = "utm"


class ColorMode(str, Enum):
    """Per-vertex colouring modes offered to rendering consumers."""

    GRADIENT_BY_DEPTH = "gradientByZ"
    GRADIENT_BY_DISTANCE = "gradientByDistance"


class FileExtension(str, Enum):
    """File extensions (with dot) understood by the command line tools."""

    JSON = ".json"
    GEOJSON = ".geojson"

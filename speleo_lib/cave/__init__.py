# -*- coding: utf-8 -*-
"""Cave aggregate models."""

from speleo_lib.cave.models import Cave
from speleo_lib.cave.models import CaveMetadata
from speleo_lib.cave.models import CaveStats

__all__ = [
    "Cave",
    "CaveMetadata",
    "CaveStats",
]

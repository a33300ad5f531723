# -*- coding: utf-8 -*-
"""Constants used throughout the speleo_lib library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers/strings scattered across the codebase.
"""

# -----------------------------------------------------------------------------
# File Encodings
# -----------------------------------------------------------------------------

#: Encoding used for JSON files
JSON_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# Station Naming
# -----------------------------------------------------------------------------

#: Synthesized name of the far end of a splay shot (shot id, survey name)
SPLAY_STATION_NAME_TEMPLATE = "splay-{shot_id}@{survey_name}"

# -----------------------------------------------------------------------------
# Shot Validation Ranges
# -----------------------------------------------------------------------------

#: Inclusive azimuth bounds accepted by validation (degrees)
AZIMUTH_RANGE: tuple[float, float] = (-360.0, 360.0)

#: Inclusive inclination bounds accepted by validation (degrees)
CLINO_RANGE: tuple[float, float] = (-90.0, 90.0)

# -----------------------------------------------------------------------------
# Coordinate Systems
# -----------------------------------------------------------------------------

#: EPSG code of the Hungarian National Grid (HD72 / EOV)
EOV_EPSG = "EPSG:23700"

#: EPSG code of WGS84 geographic coordinates
WGS84_EPSG = "EPSG:4326"

#: Valid EOV X (northing) range in meters
EOV_X_RANGE: tuple[float, float] = (0.0, 400_000.0)

#: Minimum valid EOV Y (easting) in meters
EOV_Y_MIN: float = 400_000.0

#: Valid elevation range for fix points in meters
ELEVATION_RANGE: tuple[float, float] = (-3_000.0, 5_000.0)

#: Earth radius used by the EOV meridian convergence formula (meters)
EOV_EARTH_RADIUS: float = 6_379_296.41898993

#: Decimal precision for WGS84 coordinates
WGS84_COORDINATE_PRECISION: int = 7

# -----------------------------------------------------------------------------
# Magnetic Declination
# -----------------------------------------------------------------------------

#: NOAA geomagnetic web calculator endpoint
NOAA_DECLINATION_URL = (
    "https://www.ngdc.noaa.gov/geomag-web/calculators/calculateDeclination"
)

#: Public API key of the NOAA calculator
NOAA_DECLINATION_KEY = "zNEw7"

#: Timeout of a single declination lookup (seconds). Lookups are not retried.
DECLINATION_TIMEOUT_SECONDS: float = 3.0

#: Lat/lon rounding of declination cache keys (2 decimals is roughly 1 km)
DECLINATION_CACHE_PRECISION: int = 2

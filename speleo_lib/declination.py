# -*- coding: utf-8 -*-
"""Magnetic declination lookup backed by the NOAA web calculator.

The lookup is best effort: cache and network failures are logged and
reported as ``None`` so that callers (survey editors, importers) can
fall back to a manually entered value.  The reconstruction engine never
depends on this module.
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path  # noqa: TC003
from typing import Any

import orjson
import requests

from speleo_lib.constants import DECLINATION_CACHE_PRECISION
from speleo_lib.constants import DECLINATION_TIMEOUT_SECONDS
from speleo_lib.constants import NOAA_DECLINATION_KEY
from speleo_lib.constants import NOAA_DECLINATION_URL
from speleo_lib.errors import DeclinationLookupError

logger = logging.getLogger(__name__)


class DeclinationCache:
    """JSON file cache of declination values.

    Keys group nearby locations (lat/lon rounded to ~1 km) and dates of
    the same month, declination changes slowly enough for both.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._entries: dict[str, dict[str, Any]] | None = None

    @staticmethod
    def generate_key(lat: float, lon: float, date: datetime.date) -> str:
        rounded_lat = round(lat, DECLINATION_CACHE_PRECISION)
        rounded_lon = round(lon, DECLINATION_CACHE_PRECISION)
        return f"{rounded_lat},{rounded_lon},{date.year}-{date.month}"

    def _load(self) -> dict[str, dict[str, Any]]:
        if self._entries is None:
            if self.path.exists():
                self._entries = orjson.loads(self.path.read_bytes())
            else:
                self._entries = {}
        return self._entries

    def get(self, lat: float, lon: float, date: datetime.date) -> float | None:
        key = self.generate_key(lat, lon, date)
        entry = self._load().get(key)
        if entry is None:
            logger.debug("Declination cache miss for %s", key)
            return None
        logger.debug("Declination cache hit for %s: %s", key, entry["declination"])
        return float(entry["declination"])

    def set(
        self, lat: float, lon: float, date: datetime.date, declination: float
    ) -> None:
        key = self.generate_key(lat, lon, date)
        entries = self._load()
        entries[key] = {
            "lat": lat,
            "lon": lon,
            "date": date.isoformat(),
            "declination": declination,
            "cachedAt": datetime.datetime.now(tz=datetime.UTC).isoformat(),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(orjson.dumps(entries, option=orjson.OPT_INDENT_2))


def fetch_declination(
    lat: float,
    lon: float,
    date: datetime.date,
    *,
    timeout: float = DECLINATION_TIMEOUT_SECONDS,
    session: requests.Session | None = None,
) -> float:
    """Query the NOAA calculator (IGRF model) once, without retries.

    Raises:
        DeclinationLookupError: On network errors, timeouts, non-2xx
            responses or an unexpected payload
    """
    params = {
        "lat1": lat,
        "lon1": lon,
        "resultFormat": "json",
        "startMonth": date.month,
        "startDay": date.day,
        "startYear": date.year,
        "model": "IGRF",
        "key": NOAA_DECLINATION_KEY,
    }
    http = session if session is not None else requests
    logger.info("Fetching NOAA declination for (%.4f, %.4f) on %s", lat, lon, date)
    try:
        response = http.get(NOAA_DECLINATION_URL, params=params, timeout=timeout)
        response.raise_for_status()
        return float(response.json()["result"][0]["declination"])
    except requests.RequestException as e:
        raise DeclinationLookupError(f"NOAA declination request failed: {e}") from e
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise DeclinationLookupError(f"Unexpected NOAA response: {e}") from e


class DeclinationService:
    """Cached, failure-tolerant declination lookup.

    Example::

        service = DeclinationService(cache_path=Path("~/.speleo/decl.json"))
        declination = service.get_declination(47.64, 18.97, date(2024, 5, 1))
        if declination is None:
            ...  # ask the user
    """

    def __init__(
        self,
        cache_path: Path | None = None,
        *,
        timeout: float = DECLINATION_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.cache = DeclinationCache(cache_path) if cache_path is not None else None
        self.timeout = timeout
        self.session = session

    def get_declination(
        self, lat: float, lon: float, date: datetime.date
    ) -> float | None:
        """Return the declination in degrees, or ``None`` when unavailable."""
        if self.cache is not None:
            try:
                cached = self.cache.get(lat, lon, date)
            except (OSError, orjson.JSONDecodeError, KeyError, TypeError, ValueError):
                logger.warning("Failed to read from declination cache", exc_info=True)
            else:
                if cached is not None:
                    return cached

        try:
            declination = fetch_declination(
                lat, lon, date, timeout=self.timeout, session=self.session
            )
        except DeclinationLookupError:
            logger.warning(
                "Declination unavailable for (%.4f, %.4f) on %s",
                lat,
                lon,
                date,
                exc_info=True,
            )
            return None

        if self.cache is not None:
            try:
                self.cache.set(lat, lon, date, declination)
            except (OSError, ValueError):
                logger.warning("Failed to cache declination value", exc_info=True)

        return declination

# -*- coding: utf-8 -*-
"""Tests for the NOAA declination lookup (network is mocked)."""

import datetime
from unittest.mock import MagicMock

import orjson
import pytest
import requests

from speleo_lib.constants import DECLINATION_TIMEOUT_SECONDS
from speleo_lib.constants import NOAA_DECLINATION_URL
from speleo_lib.declination import DeclinationCache
from speleo_lib.declination import DeclinationService
from speleo_lib.declination import fetch_declination
from speleo_lib.errors import DeclinationLookupError

DAY = datetime.date(2024, 5, 1)


def _session(payload=None, exc=None) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    if exc is not None:
        session.get.side_effect = exc
    else:
        response = MagicMock()
        response.json.return_value = payload
        session.get.return_value = response
    return session


class TestFetchDeclination:
    """Test a single NOAA request."""

    def test_success(self):
        session = _session({"result": [{"declination": 5.12}]})

        assert fetch_declination(47.5, 19.0, DAY, session=session) == 5.12

        args, kwargs = session.get.call_args
        assert args == (NOAA_DECLINATION_URL,)
        assert kwargs["timeout"] == DECLINATION_TIMEOUT_SECONDS
        assert kwargs["params"]["startYear"] == 2024
        assert kwargs["params"]["resultFormat"] == "json"

    def test_timeout(self):
        session = _session(exc=requests.Timeout("slow"))
        with pytest.raises(DeclinationLookupError, match="request failed"):
            fetch_declination(47.5, 19.0, DAY, session=session)

    def test_http_error(self):
        session = _session({})
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError(
            "500"
        )
        with pytest.raises(DeclinationLookupError, match="request failed"):
            fetch_declination(47.5, 19.0, DAY, session=session)

    def test_bad_payload(self):
        session = _session({"result": []})
        with pytest.raises(DeclinationLookupError, match="Unexpected NOAA response"):
            fetch_declination(47.5, 19.0, DAY, session=session)


class TestDeclinationCache:
    """Test the JSON file cache."""

    def test_key_rounding(self):
        key = DeclinationCache.generate_key(47.123456, 19.987654, DAY)
        assert key == "47.12,19.99,2024-5"

    def test_set_and_get(self, tmp_path):
        path = tmp_path / "cache" / "declination.json"
        DeclinationCache(path).set(47.5, 19.0, DAY, 5.3)

        assert path.exists()
        fresh = DeclinationCache(path)
        assert fresh.get(47.501, 19.001, datetime.date(2024, 5, 28)) == 5.3
        assert fresh.get(47.5, 19.0, datetime.date(2024, 6, 1)) is None


class TestDeclinationService:
    """Test the failure tolerant service."""

    def test_cache_hit_skips_network(self, tmp_path):
        path = tmp_path / "declination.json"
        DeclinationCache(path).set(47.5, 19.0, DAY, 5.3)
        session = _session({"result": [{"declination": 9.9}]})

        service = DeclinationService(path, session=session)

        assert service.get_declination(47.5, 19.0, DAY) == 5.3
        session.get.assert_not_called()

    def test_cache_miss_stores_value(self, tmp_path):
        path = tmp_path / "declination.json"
        session = _session({"result": [{"declination": 4.4}]})
        service = DeclinationService(path, session=session)

        assert service.get_declination(47.5, 19.0, DAY) == 4.4
        assert DeclinationCache(path).get(47.5, 19.0, DAY) == 4.4

    def test_network_failure_returns_none(self, caplog):
        service = DeclinationService(session=_session(exc=requests.ConnectionError()))
        assert service.get_declination(47.5, 19.0, DAY) is None
        assert "Declination unavailable" in caplog.text

    def test_corrupt_cache_falls_back_to_network(self, tmp_path, caplog):
        path = tmp_path / "declination.json"
        path.write_bytes(b"{not json")
        session = _session({"result": [{"declination": 4.4}]})
        service = DeclinationService(path, session=session)

        assert service.get_declination(47.5, 19.0, DAY) == 4.4
        assert "Failed to read from declination cache" in caplog.text

    def test_custom_timeout(self):
        session = _session({"result": [{"declination": 1.0}]})
        DeclinationService(timeout=1.5, session=session).get_declination(0, 0, DAY)
        assert session.get.call_args.kwargs["timeout"] == 1.5

    def test_stored_payload(self, tmp_path):
        path = tmp_path / "declination.json"
        DeclinationCache(path).set(47.5, 19.0, DAY, 5.3)
        entry = orjson.loads(path.read_bytes())["47.5,19.0,2024-5"]
        assert entry["declination"] == 5.3
        assert entry["date"] == "2024-05-01"

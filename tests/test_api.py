"""
Tests for the Open-Meteo API client.

The HTTP session is mocked; no network access is needed.
"""

import unittest
from datetime import datetime, timedelta
from unittest.mock import Mock, patch

import pytest  # type: ignore
import pytz
import requests  # type: ignore

from src.zero_hydro.api import OpenMeteoClient
from src.zero_hydro.api.helpers import parse_hourly_payload
from src.zero_hydro.core.exceptions import UpstreamDataUnavailable
from src.zero_hydro.models import BasinType, WaterBodyProfile
from src.zero_hydro.processing import SampleSanitizer
from src.zero_hydro.simulator import Simulator


class TestParseHourlyPayload:
    """Test cases for payload parsing."""

    def test_parses_columns(self, hourly_payload):
        """Each time step becomes one sample."""
        samples = parse_hourly_payload(hourly_payload)

        assert len(samples) == 4
        first = samples[0]
        assert first.timestamp == pytz.UTC.localize(datetime(2024, 6, 10, 0, 0))
        assert first.air_temperature == 14.2
        assert first.pressure == 1008.4
        assert first.wind_speed == 6.1
        assert first.wind_direction == 210
        assert first.precipitation == 0.0
        assert first.cloud_cover == 80
        assert first.weather_code == 3

    def test_null_cells_kept(self, hourly_payload):
        """Null values are left for the sanitizer."""
        samples = parse_hourly_payload(hourly_payload)

        assert samples[2].air_temperature is None

    def test_missing_variable(self, hourly_payload):
        """A missing variable column yields None for every hour."""
        del hourly_payload["hourly"]["cloud_cover"]

        samples = parse_hourly_payload(hourly_payload)

        assert all(s.cloud_cover is None for s in samples)

    def test_offset_timestamps_normalized(self, hourly_payload):
        """Timestamps carrying an offset are converted to UTC."""
        hourly_payload["hourly"]["time"][0] = "2024-06-10T02:00+02:00"

        samples = parse_hourly_payload(hourly_payload)

        assert samples[0].timestamp == pytz.UTC.localize(datetime(2024, 6, 10, 0, 0))

    @pytest.mark.parametrize("start", [
        datetime(2024, 3, 30, 12, 0),
        datetime(2024, 10, 26, 12, 0),
    ])
    def test_series_across_dst_is_usable(self, start):
        """A GMT series crossing a DST change sanitizes and simulates hour by hour."""
        times = [(start + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(48)]
        payload = {
            "hourly": {
                "time": times,
                "temperature_2m": [12.0] * 48,
                "surface_pressure": [1012.0] * 48,
            }
        }

        samples = parse_hourly_payload(payload)
        clean, _ = SampleSanitizer().sanitize(samples)
        result = Simulator(timezone="Europe/Paris").run(
            WaterBodyProfile(basin=BasinType.POND), samples, now=samples[0].timestamp
        )

        assert len(clean) == 48
        assert len(result.points) == 48
        instants = [point.timestamp for point in result.points]
        assert all(later > earlier for earlier, later in zip(instants, instants[1:]))
        offsets = {point.timestamp.utcoffset() for point in result.points}
        assert offsets == {timedelta(hours=1), timedelta(hours=2)}

    @pytest.mark.parametrize("payload", [
        None,
        {},
        {"hourly": {}},
        {"hourly": {"time": []}},
        {"hourly": {"time": ["not a date"]}},
    ])
    def test_unusable_payload(self, payload):
        """Payloads without a time axis are rejected."""
        with pytest.raises(UpstreamDataUnavailable):
            parse_hourly_payload(payload)


class TestOpenMeteoClient(unittest.TestCase):
    """Test Open-Meteo client."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = OpenMeteoClient(
            base_url="https://api.example.test/",
            logger=Mock()
        )
        self.payload = {
            "hourly": {
                "time": ["2024-06-10T00:00", "2024-06-10T01:00"],
                "temperature_2m": [12.0, 11.5],
                "surface_pressure": [1010.0, 1009.5],
                "wind_speed_10m": [3.0, 4.0],
                "wind_direction_10m": [90, 95],
                "precipitation": [0.0, 0.2],
                "cloud_cover": [20, 30],
                "weather_code": [1, 2],
            }
        }

    def tearDown(self):
        """Close the session."""
        self.client.close()

    def test_fetch_hourly(self):
        """Request parameters and parsed samples."""
        response = Mock()
        response.json.return_value = self.payload
        response.raise_for_status.return_value = None

        with patch.object(self.client.session, "request", return_value=response) as request:
            samples = self.client.fetch_hourly(48.5, 4.7, past_hours=25, forecast_days=3)

        self.assertEqual(len(samples), 2)
        self.assertEqual(samples[1].precipitation, 0.2)

        kwargs = request.call_args.kwargs
        self.assertEqual(kwargs["method"], "GET")
        self.assertEqual(kwargs["url"], "https://api.example.test/v1/forecast")
        params = kwargs["params"]
        self.assertEqual(params["past_days"], 2)
        self.assertEqual(params["forecast_days"], 3)
        self.assertEqual(params["timezone"], "GMT")
        self.assertIn("surface_pressure", params["hourly"])
        self.assertIn("weather_code", params["hourly"])

    def test_no_history_requested(self):
        """Zero past hours requests zero past days."""
        response = Mock()
        response.json.return_value = self.payload

        with patch.object(self.client.session, "request", return_value=response) as request:
            self.client.fetch_hourly(48.5, 4.7)

        self.assertEqual(request.call_args.kwargs["params"]["past_days"], 0)

    def test_connection_error(self):
        """Transport failures become UpstreamDataUnavailable."""
        with patch.object(
            self.client.session,
            "request",
            side_effect=requests.exceptions.ConnectionError("refused")
        ):
            with self.assertRaises(UpstreamDataUnavailable):
                self.client.fetch_hourly(48.5, 4.7, past_hours=24)

    def test_http_error(self):
        """HTTP error statuses become UpstreamDataUnavailable."""
        response = Mock()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("400")

        with patch.object(self.client.session, "request", return_value=response):
            with self.assertRaises(UpstreamDataUnavailable):
                self.client.fetch_hourly(48.5, 4.7)

    def test_invalid_json(self):
        """Non-JSON responses become UpstreamDataUnavailable."""
        response = Mock()
        response.json.side_effect = ValueError("not json")

        with patch.object(self.client.session, "request", return_value=response):
            with self.assertRaises(UpstreamDataUnavailable):
                self.client.fetch_hourly(48.5, 4.7)


if __name__ == "__main__":
    unittest.main()

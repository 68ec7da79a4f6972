"""
Pytest configuration and shared fixtures.

Provides reading/position factories and a synthetic survey batch for unit and
integration tests.
"""

from datetime import datetime, timedelta, timezone
from math import cos, radians
from typing import Callable, List

import pytest

from magscan.anomaly.schema import (
    GeoCoordinate,
    MagneticAnomaly,
    MagnetometerReading,
    PositionedReading,
)
from magscan.core.config import Config

BASE_TIME = datetime(2025, 6, 1, 9, 0, 0, tzinfo=timezone.utc)
ORIGIN = GeoCoordinate(latitude=51.5, longitude=-0.12, altitude=12.0, accuracy=3.0)

METERS_PER_DEGREE_LAT = 6_371_000.0 * 3.141592653589793 / 180.0


def reading_with_magnitude(magnitude: float, seconds: float = 0.0) -> MagnetometerReading:
    """Reading whose field lies on the z axis, so magnitude == |z|."""
    return MagnetometerReading(
        timestamp=BASE_TIME + timedelta(seconds=seconds), x=0.0, y=0.0, z=magnitude
    )


def offset_position(
    origin: GeoCoordinate, north_m: float = 0.0, east_m: float = 0.0
) -> GeoCoordinate:
    """Approximate position `north_m` / `east_m` meters from origin."""
    dlat = north_m / METERS_PER_DEGREE_LAT
    dlon = east_m / (METERS_PER_DEGREE_LAT * cos(radians(origin.latitude)))
    return GeoCoordinate(
        latitude=origin.latitude + dlat,
        longitude=origin.longitude + dlon,
        altitude=origin.altitude,
        accuracy=origin.accuracy,
    )


def positioned_batch(magnitudes: List[float], spacing_m: float = 1.0) -> List[PositionedReading]:
    """One reading per second, walking east `spacing_m` meters per sample."""
    return [
        PositionedReading(
            reading=reading_with_magnitude(m, seconds=i),
            position=offset_position(ORIGIN, east_m=i * spacing_m),
        )
        for i, m in enumerate(magnitudes)
    ]


@pytest.fixture
def default_config() -> Config:
    """
    Fixture providing configuration with explicit default values.

    Ensures logging tests run consistently regardless of MAGSCAN_* environment or .env.
    """
    return Config(log_level="WARNING", log_file=None)


@pytest.fixture
def make_reading() -> Callable[..., MagnetometerReading]:
    return reading_with_magnitude


@pytest.fixture
def make_batch() -> Callable[..., List[PositionedReading]]:
    return positioned_batch


@pytest.fixture
def make_position() -> Callable[..., GeoCoordinate]:
    def _make(north_m: float = 0.0, east_m: float = 0.0) -> GeoCoordinate:
        return offset_position(ORIGIN, north_m=north_m, east_m=east_m)

    return _make


@pytest.fixture
def make_anomaly() -> Callable[..., MagneticAnomaly]:
    def _make(
        anomaly_id: str,
        intensity: float,
        north_m: float = 0.0,
        east_m: float = 0.0,
    ) -> MagneticAnomaly:
        return MagneticAnomaly(
            id=anomaly_id,
            position=offset_position(ORIGIN, north_m=north_m, east_m=east_m),
            intensity=intensity,
        )

    return _make


@pytest.fixture
def survey_batch() -> List[PositionedReading]:
    """
    Walk of 20 samples, 1 m apart, over a ~40 uT ambient field.

    Two adjacent spikes at indices 5-6 (one buried object) and one isolated
    spike at index 15. The last 10 samples are ambient except index 15.
    """
    magnitudes = [40.0, 41.0, 39.0, 40.5, 39.5, 95.0, 80.0, 40.0, 41.0, 39.0,
                  40.0, 40.5, 39.5, 40.0, 41.0, 62.0, 39.0, 40.0, 40.5, 39.5]
    return positioned_batch(magnitudes)


def pytest_configure(config):
    """
    Pytest hook for custom configuration.
    
    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )

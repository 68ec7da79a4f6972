"""
Baseline estimation for magnetometer batches.

The baseline is the mean magnitude over the most recent readings (a suffix
window), which smooths single-sample noise spikes and ignores stale history.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from magscan.core.exceptions import EmptyInputError

from .schema import BaselineResult, MagnetometerReading

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 10


def _check_window_size(window_size: int) -> None:
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")


def calculate_baseline(
    readings: Sequence[MagnetometerReading],
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> BaselineResult:
    """
    Mean magnitude of the last min(window_size, len(readings)) readings.

    Args:
        readings: Readings in capture order (most recent last)
        window_size: Number of most recent readings to average

    Returns:
        BaselineResult with the baseline and the number of readings used

    Raises:
        EmptyInputError: If readings is empty
        ValueError: If window_size < 1
    """
    if not readings:
        raise EmptyInputError("Cannot calculate baseline: no readings provided")
    _check_window_size(window_size)

    recent = readings[-min(window_size, len(readings)):]
    baseline = sum(r.magnitude for r in recent) / len(recent)

    logger.debug("Baseline %.3f uT from %d readings", baseline, len(recent))
    return BaselineResult(baseline=baseline, readings_used=len(recent))


def calculate_rolling_averages(
    readings: Sequence[MagnetometerReading],
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> List[float]:
    """
    Rolling mean magnitude at every reading, for drift diagnostics.

    averages[i] is the mean of readings[max(0, i - window_size + 1) .. i].
    An empty batch yields an empty list.
    """
    if not readings:
        return []
    _check_window_size(window_size)

    magnitudes = [r.magnitude for r in readings]
    averages: List[float] = []
    for i in range(len(magnitudes)):
        window = magnitudes[max(0, i - window_size + 1): i + 1]
        averages.append(sum(window) / len(window))
    return averages

"""
Threshold detector for magnetic disturbances.

A reading is anomalous when its magnitude is strictly greater than
baseline + threshold_delta. One baseline is computed per batch.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from magscan.core.config import DetectionConfig

from .baselines import calculate_baseline
from .schema import (
    AnomalyClassification,
    AnomalyDetectionResult,
    DetectedAnomaly,
    GeoCoordinate,
    MagneticAnomaly,
    PositionedReading,
)

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _epoch_millis(ts: datetime) -> int:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return (ts - _EPOCH) // timedelta(milliseconds=1)


def anomaly_id(position: GeoCoordinate, timestamp: datetime) -> str:
    """
    Deterministic anomaly id from a 6-decimal position and the timestamp.

    Naive timestamps are treated as UTC. Adding 0.0 folds -0.0 into 0.0.
    """
    return (
        f"anomaly-{position.latitude + 0.0:.6f}-{position.longitude + 0.0:.6f}"
        f"-{_epoch_millis(timestamp)}"
    )


def _resolve(config: Optional[DetectionConfig]) -> DetectionConfig:
    return config if config is not None else DetectionConfig()


def _flag(
    positioned_readings: Sequence[PositionedReading],
    baseline: float,
    threshold_delta: float,
) -> List[DetectedAnomaly]:
    threshold = baseline + threshold_delta
    anomalies: List[DetectedAnomaly] = []

    for pr in positioned_readings:
        magnitude = pr.reading.magnitude
        if magnitude > threshold:
            anomalies.append(
                DetectedAnomaly(
                    id=anomaly_id(pr.position, pr.reading.timestamp),
                    position=pr.position,
                    intensity=magnitude - baseline,
                    reading=pr.reading,
                )
            )
    return anomalies


def detect_anomalies(
    positioned_readings: Sequence[PositionedReading],
    config: Optional[DetectionConfig] = None,
) -> List[DetectedAnomaly]:
    """
    Flag readings whose magnitude exceeds baseline + threshold_delta.

    Args:
        positioned_readings: Batch in capture order
        config: Detection parameters; defaults to DetectionConfig()

    Returns:
        Detected anomalies in input order (empty for an empty batch)
    """
    if not positioned_readings:
        return []

    cfg = _resolve(config)
    readings = [pr.reading for pr in positioned_readings]
    baseline = calculate_baseline(readings, cfg.baseline_window_size).baseline
    anomalies = _flag(positioned_readings, baseline, cfg.threshold_delta)

    logger.debug(
        "Flagged %d of %d readings (baseline=%.3f, delta=%.3f)",
        len(anomalies),
        len(positioned_readings),
        baseline,
        cfg.threshold_delta,
    )
    return anomalies


def to_magnetic_anomaly(
    detected: DetectedAnomaly,
    classification: AnomalyClassification = AnomalyClassification.UNKNOWN,
) -> MagneticAnomaly:
    return MagneticAnomaly(
        id=detected.id,
        position=detected.position,
        intensity=detected.intensity,
        classification=classification,
    )


def detect_anomalies_with_metadata(
    positioned_readings: Sequence[PositionedReading],
    config: Optional[DetectionConfig] = None,
) -> AnomalyDetectionResult:
    """
    Detect anomalies and report the baseline, threshold delta, and duration.

    Unlike calculate_baseline, an empty batch is reported as a zero-valued
    summary instead of raising.
    """
    start = time.perf_counter()
    cfg = _resolve(config)

    if not positioned_readings:
        return AnomalyDetectionResult(
            anomalies=[],
            baseline_magnitude=0.0,
            threshold=cfg.threshold_delta,
            scan_duration=0.0,
        )

    readings = [pr.reading for pr in positioned_readings]
    baseline = calculate_baseline(readings, cfg.baseline_window_size).baseline
    detected = _flag(positioned_readings, baseline, cfg.threshold_delta)

    return AnomalyDetectionResult(
        anomalies=[to_magnetic_anomaly(d) for d in detected],
        baseline_magnitude=baseline,
        threshold=cfg.threshold_delta,
        scan_duration=time.perf_counter() - start,
    )

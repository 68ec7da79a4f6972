"""
Scan analysis engine.

Runs one captured batch through detection, classification, and proximity
grouping. The engine keeps configuration only; it holds no state between
calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from magscan.core.config import ClassificationThresholds, DetectionConfig, GroupingConfig

from .classifier import SpatialHint, classify_anomalies
from .detectors import detect_anomalies_with_metadata
from .grouping import group_anomalies_by_proximity
from .schema import PositionedReading, ScanAnalysis

logger = logging.getLogger(__name__)


@dataclass
class AnomalyEngine:
    """
    Deterministic detection -> classification -> grouping pipeline.

    Notes:
    - Unset configs fall back to the documented model defaults.
    - Spatial hints are keyed by anomaly id; anomalies without a hint are
      classified as small point objects.
    """

    detection: Optional[DetectionConfig] = None
    classification: Optional[ClassificationThresholds] = None
    grouping: Optional[GroupingConfig] = None

    def __post_init__(self) -> None:
        self.detection = self.detection or DetectionConfig()
        self.classification = self.classification or ClassificationThresholds()
        self.grouping = self.grouping or GroupingConfig()

    def analyze(
        self,
        positioned_readings: Sequence[PositionedReading],
        spatial_hints: Optional[Mapping[str, SpatialHint]] = None,
    ) -> ScanAnalysis:
        result = detect_anomalies_with_metadata(positioned_readings, self.detection)
        classified = classify_anomalies(result.anomalies, spatial_hints, self.classification)
        groups = group_anomalies_by_proximity(classified, self.grouping)

        logger.info(
            "Scan of %d readings: %d anomalies in %d groups (baseline=%.2f uT)",
            len(positioned_readings),
            len(classified),
            len(groups),
            result.baseline_magnitude,
        )
        return ScanAnalysis(
            detection=result.model_copy(update={"anomalies": classified}),
            groups=groups,
        )

"""
Anomaly module: magnetic anomaly detection, classification, and grouping.

Pipeline:

    PositionedReading[]
        ↓
    Baseline + threshold detection (baselines.py, detectors.py)
        ↓
    Rule-ladder classification (classifier.py) → MagneticAnomaly
        ↓
    Proximity grouping (grouping.py) → AnomalyGroup
"""

from .baselines import calculate_baseline, calculate_rolling_averages
from .classifier import (
    CLASSIFICATION_RULES,
    ClassificationRule,
    classify_anomalies,
    classify_anomaly,
    classify_detected_anomaly,
    matching_rule,
)
from .detectors import (
    anomaly_id,
    detect_anomalies,
    detect_anomalies_with_metadata,
    to_magnetic_anomaly,
)
from .engine import AnomalyEngine
from .grouping import (
    DisjointSet,
    calculate_centroid,
    calculate_distance_meters,
    group_anomalies_by_proximity,
)
from .schema import (
    AnomalyClassification,
    AnomalyDetectionResult,
    AnomalyGroup,
    AnomalyShape,
    BaselineResult,
    ClassificationInput,
    DetectedAnomaly,
    GeoCoordinate,
    MagneticAnomaly,
    MagnetometerReading,
    PositionedReading,
    ScanAnalysis,
    SpatialCharacteristics,
)

__all__ = [
	# Schema
	"AnomalyClassification",
	"AnomalyDetectionResult",
	"AnomalyGroup",
	"AnomalyShape",
	"BaselineResult",
	"ClassificationInput",
	"DetectedAnomaly",
	"GeoCoordinate",
	"MagneticAnomaly",
	"MagnetometerReading",
	"PositionedReading",
	"ScanAnalysis",
	"SpatialCharacteristics",
	# Baselines
	"calculate_baseline",
	"calculate_rolling_averages",
	# Detection
	"anomaly_id",
	"detect_anomalies",
	"detect_anomalies_with_metadata",
	"to_magnetic_anomaly",
	# Classification
	"CLASSIFICATION_RULES",
	"ClassificationRule",
	"classify_anomaly",
	"classify_detected_anomaly",
	"classify_anomalies",
	"matching_rule",
	# Grouping
	"DisjointSet",
	"calculate_centroid",
	"calculate_distance_meters",
	"group_anomalies_by_proximity",
	# Engine
	"AnomalyEngine",
]

"""
Schema definitions for magnetic anomaly detection.

All entities are created fresh per scan batch and never mutated in place:
models are frozen, and every transform returns new values.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from math import sqrt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class AnomalyClassification(str, Enum):
    """Semantic labels assigned by the classifier."""

    FOUNDATION = "foundation"
    PIPE = "pipe"
    METAL_DEBRIS = "metal_debris"
    UNKNOWN = "unknown"


class AnomalyShape(str, Enum):
    """Inferred footprint shape of an anomaly."""

    LINEAR = "linear"
    RECTANGULAR = "rectangular"
    IRREGULAR = "irregular"
    POINT = "point"


class MagnetometerReading(BaseModel):
    """
    A single magnetometer sample.

    Fields:
    - timestamp: when the sample was taken
    - x, y, z: field components in microtesla
    - magnitude: Euclidean norm of (x, y, z), always derived
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    x: float
    y: float
    z: float

    @computed_field  # type: ignore[misc]
    @property
    def magnitude(self) -> float:
        return sqrt(self.x**2 + self.y**2 + self.z**2)


class GeoCoordinate(BaseModel):
    """WGS84 position with altitude and horizontal accuracy (meters)."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    altitude: float = 0.0
    accuracy: float = Field(0.0, ge=0.0)


class PositionedReading(BaseModel):
    """A magnetometer sample paired with where it was taken."""

    model_config = ConfigDict(frozen=True)

    reading: MagnetometerReading
    position: GeoCoordinate


class BaselineResult(BaseModel):
    """
    Baseline estimate for a batch.

    Fields:
    - baseline: mean magnitude over the suffix window
    - readings_used: number of readings in that window
    """

    model_config = ConfigDict(frozen=True)

    baseline: float
    readings_used: int = Field(ge=1)


class DetectedAnomaly(BaseModel):
    """
    A reading whose magnitude exceeded baseline + threshold delta.

    intensity is magnitude - baseline and therefore strictly positive.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    position: GeoCoordinate
    intensity: float = Field(gt=0.0)
    reading: MagnetometerReading


class SpatialCharacteristics(BaseModel):
    """
    Inferred physical footprint of an anomaly, in meters.

    Supplied by a shape-inference collaborator when available. The defaults
    describe a small point-like object.
    """

    model_config = ConfigDict(frozen=True)

    width: float = Field(0.1, ge=0.0)
    length: float = Field(0.1, ge=0.0)
    depth: Optional[float] = Field(None, ge=0.0)
    shape: AnomalyShape = AnomalyShape.POINT


class ClassificationInput(BaseModel):
    """Intensity and footprint used to classify an anomaly."""

    model_config = ConfigDict(frozen=True)

    intensity: float
    spatial: SpatialCharacteristics = Field(default_factory=SpatialCharacteristics)


class MagneticAnomaly(BaseModel):
    """The classified anomaly consumed by the overlay and rendering layers."""

    model_config = ConfigDict(frozen=True)

    id: str
    position: GeoCoordinate
    intensity: float
    classification: AnomalyClassification = AnomalyClassification.UNKNOWN


class AnomalyDetectionResult(BaseModel):
    """
    Detection output with batch metadata.

    Fields:
    - anomalies: detected anomalies, classification "unknown"
    - baseline_magnitude: baseline used (0 for an empty batch)
    - threshold: configured threshold delta in microtesla
    - scan_duration: wall-clock seconds spent in detection
    """

    model_config = ConfigDict(frozen=True)

    anomalies: List[MagneticAnomaly] = Field(default_factory=list)
    baseline_magnitude: float = 0.0
    threshold: float = 0.0
    scan_duration: float = Field(0.0, ge=0.0)


class AnomalyGroup(BaseModel):
    """
    Anomalies merged into one highlighted region.

    Fields:
    - id: "group-" prefix plus sorted, joined member ids (truncated)
    - anomalies: members in input order
    - centroid: component-wise mean of member positions
    - combined_intensity: max member intensity
    """

    model_config = ConfigDict(frozen=True)

    id: str
    anomalies: List[MagneticAnomaly]
    centroid: GeoCoordinate
    combined_intensity: float


class ScanAnalysis(BaseModel):
    """Classified detection result together with its proximity groups."""

    model_config = ConfigDict(frozen=True)

    detection: AnomalyDetectionResult
    groups: List[AnomalyGroup] = Field(default_factory=list)

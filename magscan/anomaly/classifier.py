"""
Rule-based classification of magnetic anomalies.

Classification is an ordered rule ladder: rules are evaluated top to bottom
and the first match wins. Rules overlap on purpose, so their order is part
of the contract:

1. linear shape or elongated footprint          -> pipe
2. high intensity, rectangular-ish, large area  -> foundation
3. medium intensity, rectangular, moderate area -> foundation
4. below high intensity, small or point-like    -> metal_debris
5. very low intensity                           -> metal_debris
6. anything else                                -> unknown
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from magscan.core.config import ClassificationThresholds

from .schema import (
    AnomalyClassification,
    AnomalyShape,
    ClassificationInput,
    DetectedAnomaly,
    MagneticAnomaly,
    SpatialCharacteristics,
)

logger = logging.getLogger(__name__)

SpatialHint = Union[SpatialCharacteristics, Mapping[str, Any]]


@dataclass(frozen=True)
class ShapeMetrics:
    """
    Derived quantities the rules are evaluated against.

    aspect_ratio floors its denominator so zero-width footprints stay finite.
    """

    intensity: float
    shape: AnomalyShape
    area: float
    aspect_ratio: float

    @classmethod
    def from_input(
        cls, data: ClassificationInput, thresholds: ClassificationThresholds
    ) -> "ShapeMetrics":
        width = data.spatial.width
        length = data.spatial.length
        longer = max(width, length)
        shorter = max(min(width, length), thresholds.min_dimension)
        return cls(
            intensity=data.intensity,
            shape=data.spatial.shape,
            area=width * length,
            aspect_ratio=longer / shorter,
        )


Predicate = Callable[[ShapeMetrics, ClassificationThresholds], bool]


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    predicate: Predicate
    result: AnomalyClassification

    def matches(self, metrics: ShapeMetrics, thresholds: ClassificationThresholds) -> bool:
        return self.predicate(metrics, thresholds)


def _is_pipe(m: ShapeMetrics, t: ClassificationThresholds) -> bool:
    return m.shape == AnomalyShape.LINEAR or m.aspect_ratio >= t.aspect_ratio_linear


def _is_large_foundation(m: ShapeMetrics, t: ClassificationThresholds) -> bool:
    rectangular_ish = (
        m.shape == AnomalyShape.RECTANGULAR or m.aspect_ratio >= t.aspect_ratio_rectangular
    )
    return m.intensity >= t.intensity_high and rectangular_ish and m.area >= t.foundation_min_area


def _is_small_foundation(m: ShapeMetrics, t: ClassificationThresholds) -> bool:
    return (
        m.intensity >= t.intensity_medium
        and m.shape == AnomalyShape.RECTANGULAR
        and m.area >= t.small_area
    )


def _is_compact_debris(m: ShapeMetrics, t: ClassificationThresholds) -> bool:
    compact = m.shape in (AnomalyShape.IRREGULAR, AnomalyShape.POINT) or m.area < t.small_area
    return m.intensity < t.intensity_high and compact


def _is_faint_debris(m: ShapeMetrics, t: ClassificationThresholds) -> bool:
    return m.intensity < t.intensity_low


def _always(m: ShapeMetrics, t: ClassificationThresholds) -> bool:
    return True


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule("linear_pipe", _is_pipe, AnomalyClassification.PIPE),
    ClassificationRule("large_foundation", _is_large_foundation, AnomalyClassification.FOUNDATION),
    ClassificationRule("small_foundation", _is_small_foundation, AnomalyClassification.FOUNDATION),
    ClassificationRule("compact_debris", _is_compact_debris, AnomalyClassification.METAL_DEBRIS),
    ClassificationRule("faint_debris", _is_faint_debris, AnomalyClassification.METAL_DEBRIS),
    ClassificationRule("fallback", _always, AnomalyClassification.UNKNOWN),
)


def matching_rule(
    data: ClassificationInput,
    thresholds: Optional[ClassificationThresholds] = None,
) -> ClassificationRule:
    """Return the first rule in CLASSIFICATION_RULES that matches."""
    thresholds = thresholds or ClassificationThresholds()
    metrics = ShapeMetrics.from_input(data, thresholds)
    # The last rule always matches.
    return next(rule for rule in CLASSIFICATION_RULES if rule.matches(metrics, thresholds))


def classify_anomaly(
    data: ClassificationInput,
    thresholds: Optional[ClassificationThresholds] = None,
) -> AnomalyClassification:
    """
    Classify an anomaly from its intensity and spatial footprint.

    Deterministic and total: the same input always yields the same label.
    """
    return matching_rule(data, thresholds).result


def _merge_hint(spatial_hint: Optional[SpatialHint]) -> SpatialCharacteristics:
    if spatial_hint is None:
        return SpatialCharacteristics()
    if isinstance(spatial_hint, SpatialCharacteristics):
        overrides: Dict[str, Any] = spatial_hint.model_dump(exclude_unset=True)
    else:
        overrides = dict(spatial_hint)
    merged = SpatialCharacteristics().model_dump()
    merged.update(overrides)
    return SpatialCharacteristics.model_validate(merged)


def classify_detected_anomaly(
    anomaly: Union[DetectedAnomaly, MagneticAnomaly],
    spatial_hint: Optional[SpatialHint] = None,
    thresholds: Optional[ClassificationThresholds] = None,
) -> AnomalyClassification:
    """
    Classify a detected anomaly, filling missing footprint fields with the
    default 0.1 m x 0.1 m point.
    """
    spatial = _merge_hint(spatial_hint)
    return classify_anomaly(
        ClassificationInput(intensity=anomaly.intensity, spatial=spatial),
        thresholds,
    )


def classify_anomalies(
    anomalies: Sequence[MagneticAnomaly],
    spatial_hints: Optional[Mapping[str, SpatialHint]] = None,
    thresholds: Optional[ClassificationThresholds] = None,
) -> List[MagneticAnomaly]:
    """
    Return classified copies of anomalies, in input order.

    spatial_hints maps anomaly id to a (partial) footprint.
    """
    spatial_hints = spatial_hints or {}
    classified: List[MagneticAnomaly] = []
    for anomaly in anomalies:
        label = classify_detected_anomaly(anomaly, spatial_hints.get(anomaly.id), thresholds)
        classified.append(anomaly.model_copy(update={"classification": label}))

    logger.debug("Classified %d anomalies", len(classified))
    return classified

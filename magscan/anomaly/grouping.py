"""
Proximity grouping of anomalies into highlighted regions.

Anomalies whose pairwise Haversine distance is within the threshold are
linked, and groups are the transitive closure of those links (A-B and B-C
puts A, B, and C together even if A and C are far apart). Pairwise checks
are O(n^2), so callers bound the batch size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from math import atan2, cos, radians, sin, sqrt
from typing import Dict, List, Optional, Sequence

from magscan.core.config import GroupingConfig
from magscan.core.exceptions import EmptyInputError

from .schema import AnomalyGroup, GeoCoordinate, MagneticAnomaly

logger = logging.getLogger(__name__)

EARTH_RADIUS_METERS = 6_371_000.0
GROUP_ID_MAX_LENGTH = 32


def calculate_distance_meters(coord1: GeoCoordinate, coord2: GeoCoordinate) -> float:
    """Great-circle (Haversine) distance in meters."""
    lat1 = radians(coord1.latitude)
    lat2 = radians(coord2.latitude)
    delta_lat = radians(coord2.latitude - coord1.latitude)
    delta_lon = radians(coord2.longitude - coord1.longitude)

    a = sin(delta_lat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(delta_lon / 2) ** 2
    a = min(a, 1.0)  # rounding near antipodal points
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def calculate_centroid(coords: Sequence[GeoCoordinate]) -> GeoCoordinate:
    """
    Component-wise mean of latitude, longitude, altitude, and accuracy.

    A single coordinate is returned unchanged so its centroid is exact.

    Raises:
        EmptyInputError: If coords is empty
    """
    if not coords:
        raise EmptyInputError("Cannot calculate centroid of an empty coordinate list")
    if len(coords) == 1:
        return coords[0].model_copy()

    n = len(coords)
    return GeoCoordinate(
        latitude=sum(c.latitude for c in coords) / n,
        longitude=sum(c.longitude for c in coords) / n,
        altitude=sum(c.altitude for c in coords) / n,
        accuracy=sum(c.accuracy for c in coords) / n,
    )


@dataclass
class DisjointSet:
    """
    Union-find over indices 0..size-1, stored as a flat parent list.

    find() compresses paths so repeated lookups stay near constant time.
    """

    size: int
    _parent: List[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._parent = list(range(self.size))

    def find(self, i: int) -> int:
        root = i
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[i] != root:
            self._parent[i], i = root, self._parent[i]
        return root

    def union(self, i: int, j: int) -> None:
        root_i = self.find(i)
        root_j = self.find(j)
        if root_i != root_j:
            self._parent[root_i] = root_j


def group_id(anomalies: Sequence[MagneticAnomaly]) -> str:
    joined = "-".join(sorted(a.id for a in anomalies))
    return f"group-{joined[:GROUP_ID_MAX_LENGTH]}"


def _build_group(members: List[MagneticAnomaly]) -> AnomalyGroup:
    return AnomalyGroup(
        id=group_id(members),
        anomalies=members,
        centroid=calculate_centroid([a.position for a in members]),
        combined_intensity=max(a.intensity for a in members),
    )


def group_anomalies_by_proximity(
    anomalies: Sequence[MagneticAnomaly],
    config: Optional[GroupingConfig] = None,
) -> List[AnomalyGroup]:
    """
    Merge anomalies within threshold_meters of each other (transitively).

    Args:
        anomalies: Classified anomalies from one scan
        config: Grouping parameters; defaults to GroupingConfig()

    Returns:
        One group per connected component, ordered by the input index of its
        first member. Members keep their input order.
    """
    if not anomalies:
        return []

    cfg = config if config is not None else GroupingConfig()
    sets = DisjointSet(len(anomalies))

    for i in range(len(anomalies)):
        for j in range(i + 1, len(anomalies)):
            distance = calculate_distance_meters(anomalies[i].position, anomalies[j].position)
            if distance <= cfg.threshold_meters:
                sets.union(i, j)

    # dicts keep insertion order, so groups follow first-member order
    members_by_root: Dict[int, List[MagneticAnomaly]] = {}
    for i, anomaly in enumerate(anomalies):
        members_by_root.setdefault(sets.find(i), []).append(anomaly)

    groups = [_build_group(members) for members in members_by_root.values()]
    logger.debug(
        "Grouped %d anomalies into %d groups (threshold=%.2fm)",
        len(anomalies),
        len(groups),
        cfg.threshold_meters,
    )
    return groups

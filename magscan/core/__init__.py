"""
Core module: Configuration, logging, and exception handling.
"""

from .config import (
    ClassificationThresholds,
    Config,
    DetectionConfig,
    GroupingConfig,
    config,
)
from .exceptions import AnomalyDetectionError, EmptyInputError
from .logging_config import setup_logging

__all__ = [
    "ClassificationThresholds",
    "Config",
    "DetectionConfig",
    "GroupingConfig",
    "config",
    "AnomalyDetectionError",
    "EmptyInputError",
    "setup_logging",
]

"""
Engine configuration for magnetic anomaly detection.

Detection, classification, and grouping thresholds live here as plain models
whose defaults are the documented ones; they are never read from the
environment. Logging settings are environment-aware.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectionConfig(BaseModel):
	"""
	Configuration for threshold-based anomaly detection.

	Notes:
	- threshold_delta: excess over baseline (microtesla) required to flag a reading.
	- baseline_window_size: number of most recent readings averaged into the baseline.
	"""

	threshold_delta: float = Field(10.0, ge=0.0, description="Excess over baseline in uT")
	baseline_window_size: int = Field(10, ge=1)


class GroupingConfig(BaseModel):
	"""
	Configuration for proximity grouping.
	"""

	threshold_meters: float = Field(
		2.0, ge=0.0, description="Maximum pairwise distance for linking two anomalies"
	)


class ClassificationThresholds(BaseModel):
	"""
	Thresholds for the classification rule ladder.

	Rationale:
	- High intensity usually means large structures such as foundations.
	- Medium intensity covers smaller structural elements.
	- Long, narrow footprints (high aspect ratio) read as pipes.
	"""

	intensity_high: float = Field(50.0, ge=0.0, description="Foundation-grade intensity")
	intensity_medium: float = Field(20.0, ge=0.0, description="Small structure intensity")
	intensity_low: float = Field(5.0, ge=0.0, description="Below this, always debris")

	aspect_ratio_linear: float = Field(3.0, ge=1.0, description="Pipe-like elongation")
	aspect_ratio_rectangular: float = Field(
		1.5, ge=1.0, description="Rectangular-ish elongation"
	)

	foundation_min_area: float = Field(1.0, ge=0.0, description="Square meters")
	small_area: float = Field(0.5, ge=0.0, description="Square meters")
	min_dimension: float = Field(
		0.01, gt=0.0, description="Floor for the aspect ratio denominator"
	)


class Config(BaseSettings):
	"""
	Application settings with environment overrides (MAGSCAN_ prefix).

	Only logging is environment-aware. Algorithm parameters are passed in
	explicitly and otherwise use the model defaults above.
	"""

	model_config = SettingsConfigDict(
		env_prefix="MAGSCAN_",
		env_file=".env",
		extra="ignore",
	)

	log_level: str = Field("INFO", description="Default logging level")
	log_file: Optional[Path] = Field(None, description="Optional rotating log file")


config = Config()

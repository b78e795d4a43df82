"""Application configuration.

Configuration is a small pydantic model that can be read from JSON or
YAML files. Values not given in the file keep their defaults.
"""

import json
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .aggregator import RiskAggregator, LOW_RISK_THRESHOLD, HIGH_RISK_THRESHOLD
from .exceptions import ConfigurationError


class RiskCheckConfig(BaseModel):
    """riskcheck configuration."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field("INFO", description="Logging level")
    currency_symbol: str = Field("$", description="Symbol shown in front of amounts")
    low_threshold: float = Field(
        LOW_RISK_THRESHOLD, ge=0, description="CV below which risk is low"
    )
    high_threshold: float = Field(
        HIGH_RISK_THRESHOLD, ge=0, description="CV from which risk is high"
    )
    seed_defaults: bool = Field(True, description="Start with the example events")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level {v}")
        return level

    @model_validator(mode="after")
    def validate_thresholds(self):
        if self.high_threshold <= self.low_threshold:
            raise ValueError(
                f"high_threshold {self.high_threshold} must exceed "
                f"low_threshold {self.low_threshold}"
            )
        return self

    def create_aggregator(self) -> RiskAggregator:
        """Build an aggregator using these thresholds."""
        return RiskAggregator(
            events=None if self.seed_defaults else [],
            low_threshold=self.low_threshold,
            high_threshold=self.high_threshold,
        )


def load_config(file_path: Optional[Union[str, Path]] = None) -> RiskCheckConfig:
    """Load configuration from a JSON or YAML file.

    Args:
        file_path: Path to the configuration file. Defaults are used if None.

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if file_path is None:
        return RiskCheckConfig()

    path = Path(file_path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}", config_key="path",
                                 config_value=str(path))

    suffix = path.suffix.lower()
    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            elif suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported config file format: {path.suffix}",
                    config_key="path",
                    config_value=str(path),
                )
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Error reading configuration from {path}: {e}", cause=e)

    try:
        return RiskCheckConfig(**(data or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}", cause=e)
    except TypeError as e:
        raise ConfigurationError(
            f"Configuration in {path} must be a mapping", config_value=data, cause=e
        )

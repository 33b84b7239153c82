"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.day_splitter import DaySplitter
from .domain.overlap_ranker import DEFAULT_MAX_RESULTS, OverlapRanker, ScoringStrategy

CONFIG_FILE_NAME = "timebrackets.yaml"


class RankingConfig(BaseModel):
    """Settings for the overlap ranker."""
    max_results: Optional[int] = DEFAULT_MAX_RESULTS  # None keeps every bracket
    strategy: ScoringStrategy = ScoringStrategy.PAIRWISE

    @field_validator("max_results")
    @classmethod
    def validate_max_results(cls, value: Optional[int]) -> Optional[int]:
        """Ensure the short-list size is positive."""
        if value is not None and value < 1:
            raise ValueError(f"max_results must be at least 1, got {value}")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "UTC"
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    log_level: str = "WARNING"

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the log level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def build_ranker(self, max_results: Optional[int] = None) -> OverlapRanker:
        """Create an OverlapRanker, optionally overriding the short-list size."""
        return OverlapRanker(
            max_results=max_results if max_results is not None else self.ranking.max_results,
            strategy=self.ranking.strategy,
        )

    def build_splitter(self) -> DaySplitter:
        return DaySplitter()

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a {CONFIG_FILE_NAME} file. See {CONFIG_FILE_NAME}.example for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for the config in the current directory
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / CONFIG_FILE_NAME

    return config_path

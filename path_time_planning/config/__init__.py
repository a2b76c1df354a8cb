"""Configuration management module."""

import yaml
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, asdict
from loguru import logger


@dataclass
class NeighborhoodConfig:
    """Parameters of the path-time neighborhood.

    Fixed per deployment; passed to the builder so that horizon and resolution
    can vary between runs.

    Attributes:
        planned_trajectory_time: Sampling horizon [s]
        trajectory_time_resolution: Sampling step [s]
        planned_trajectory_horizon: Longitudinal lookahead beyond the ego position [m]
        lateral_enter_lane_thred: Lateral offset beyond which an edge is outside the lane [m]
        reference_line_resolution: Spacing of discretized reference points [m]
    """
    planned_trajectory_time: float = 8.0
    trajectory_time_resolution: float = 0.1
    planned_trajectory_horizon: float = 100.0
    lateral_enter_lane_thred: float = 2.0
    reference_line_resolution: float = 0.5

    # Internal: loaded from
    config_path: Optional[str] = None

    @property
    def num_time_samples(self) -> int:
        """Number of samples t = k * resolution with t < planned_trajectory_time."""
        ratio = self.planned_trajectory_time / self.trajectory_time_resolution
        # Absorb float noise such as 0.3 / 0.1 = 2.9999999999999996
        nearest = round(ratio)
        if abs(ratio - nearest) < 1e-9:
            return int(nearest)
        return int(ratio) + 1


class ConfigValidationError(ValueError):
    """Raised when configuration validation fails."""
    pass


def validate_config(config: NeighborhoodConfig) -> None:
    """Validate configuration values for consistency and correctness.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    errors: List[str] = []

    # Time parameters
    if config.planned_trajectory_time <= 0:
        errors.append(f"planned_trajectory_time must be positive, got {config.planned_trajectory_time}")
    if config.trajectory_time_resolution <= 0:
        errors.append(f"trajectory_time_resolution must be positive, got {config.trajectory_time_resolution}")
    if config.trajectory_time_resolution > config.planned_trajectory_time:
        errors.append(
            f"trajectory_time_resolution ({config.trajectory_time_resolution}) must be <= "
            f"planned_trajectory_time ({config.planned_trajectory_time})"
        )

    # Spatial parameters
    if config.planned_trajectory_horizon <= 0:
        errors.append(f"planned_trajectory_horizon must be positive, got {config.planned_trajectory_horizon}")
    if config.lateral_enter_lane_thred < 0:
        errors.append(f"lateral_enter_lane_thred must be non-negative, got {config.lateral_enter_lane_thred}")
    if config.reference_line_resolution <= 0:
        errors.append(f"reference_line_resolution must be positive, got {config.reference_line_resolution}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigValidationError(error_msg)


def config_from_dict(config_dict: dict) -> NeighborhoodConfig:
    """Build and validate a configuration from a plain dictionary."""
    try:
        config = NeighborhoodConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid configuration structure: {e}") from e
    validate_config(config)
    return config


def load_config(config_path: str) -> NeighborhoodConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Loaded configuration
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {config_path}: {e}") from e

    if config_dict is None:
        raise ValueError(f"YAML file {config_path} is empty or contains no valid content")

    try:
        config = NeighborhoodConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid configuration structure in {config_path}: {e}") from e

    config.config_path = str(config_path)

    try:
        validate_config(config)
    except ConfigValidationError:
        logger.error(f"Configuration validation failed for {config_path}")
        raise

    logger.info(f"Configuration loaded and validated from {config_path}")

    return config


def save_config(config: NeighborhoodConfig, config_path: str):
    """Save configuration to YAML file.

    Args:
        config: Configuration to save
        config_path: Path to save YAML file
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = asdict(config)
    config_dict.pop('config_path')

    with open(config_path, 'w') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)

    logger.info(f"Configuration saved to {config_path}")


__all__ = [
    'NeighborhoodConfig',
    'ConfigValidationError',
    'validate_config',
    'config_from_dict',
    'load_config',
    'save_config',
]

"""Configuration loader with validation."""

import logging
import yaml
from pathlib import Path

from pydantic import ValidationError
from tilt_calculator import AllocationPolicy, ConfigError, validate_policy

from .models import AppConfig

logger = logging.getLogger(__name__)


def load_config(config_path: str | Path) -> AppConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to config.yaml file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If the YAML is malformed or fails validation
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from: {config_path}")

    with open(config_path, 'r') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Configuration is not valid YAML: {e}")
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid configuration: top level of {config_path} must be a mapping")

    try:
        config = AppConfig(**raw_config)
    except ValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise ConfigError(f"Invalid configuration: {e}") from e

    # Log loaded configuration for audit trail
    logger.info("Configuration loaded successfully:")
    for stock in config.stocks:
        aliases = f" (alternatives: {', '.join(stock.alternatives)})" if stock.alternatives else ""
        logger.info(f"  {stock.symbol}: {stock.target_percentage}%{aliases}")
    logger.info(f"  Holdings columns: {config.holdings_csv.symbol_column!r}, "
                f"{config.holdings_csv.amount_column!r}")

    return config


def build_policy(config: AppConfig) -> AllocationPolicy:
    """
    Convert the configured stocks into a validated allocation policy.

    Percentages are moved to the 0-1 policy scale before validation, so
    AllocationSumError and DuplicateSymbolError surface unchanged.
    """
    return validate_policy(
        {
            "symbol": stock.symbol,
            "target_fraction": stock.target_fraction,
            "description": stock.description,
            "aliases": tuple(stock.alternatives),
        }
        for stock in config.stocks
    )

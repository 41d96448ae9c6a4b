"""
Configuration loader for the storefront catalogue
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent


class CatalogConfig(BaseModel):
    """Catalogue store configuration"""

    seed_path: str = "data/sample_products.json"
    default_limit: int = Field(default=20, ge=1, le=200)

    def resolved_seed_path(self) -> Path:
        path = Path(self.seed_path)
        return path if path.is_absolute() else PROJECT_ROOT / path


class CacheConfig(BaseModel):
    """Client query cache and server response cache configuration"""

    freshness_seconds: float = Field(default=300.0, gt=0)
    response_ttl_seconds: int = Field(default=300, ge=1)


class RateLimitConfig(BaseModel):
    """Rate limiting configuration"""

    enabled: bool = True
    requests_per_minute: int = Field(default=60, ge=1, le=10000)
    window_seconds: float = Field(default=60.0, gt=0)


class ClientConfig(BaseModel):
    """Catalogue HTTP client configuration"""

    base_url: str = "http://localhost:8000"
    timeout_seconds: float = Field(default=10.0, gt=0)


class StorefrontConfig(BaseModel):
    """Complete storefront configuration"""

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)


def load_storefront_config(config_path: Optional[Path] = None) -> StorefrontConfig:
    """
    Load and validate storefront configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to $STOREFRONT_CONFIG,
            then config/storefront.yml

    Returns:
        Validated StorefrontConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        env_path = os.getenv("STOREFRONT_CONFIG")
        config_path = Path(env_path) if env_path else PROJECT_ROOT / "config" / "storefront.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    try:
        config = StorefrontConfig(**config_data)
        logger.info("Successfully loaded config from %s", config_path)
        return config
    except ValidationError as e:
        logger.error("Config validation failed: %s", e)
        raise

"""
Utility modules for the storefront catalogue
"""
from .config_loader import load_storefront_config, StorefrontConfig
from .rate_limiter import RateLimiter, RateLimitResult

__all__ = [
    'load_storefront_config',
    'StorefrontConfig',
    'RateLimiter',
    'RateLimitResult',
]

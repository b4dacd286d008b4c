"""Configuration loading for fieldguard.

Usage:
    from fieldguard.config import get_settings

    settings = get_settings()
    ttl = settings.workflow.request_ttl_days
"""

from functools import lru_cache

from fieldguard.config.loader import load_config
from fieldguard.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance.

    Call `get_settings.cache_clear()` (or reload_settings()) to pick up
    changed files or environment variables.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]

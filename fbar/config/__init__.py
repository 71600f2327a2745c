"""Configuration package."""

from fbar.config.settings import FbarSettings, get_settings

__all__ = ["FbarSettings", "get_settings"]

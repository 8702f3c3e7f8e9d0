"""Configuration module."""
from .settings import AppSettings
from .manager import Config, ConfigManager

__all__ = ["AppSettings", "Config", "ConfigManager"]

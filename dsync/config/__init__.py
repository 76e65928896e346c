"""Configuration module for the directory sync service."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]

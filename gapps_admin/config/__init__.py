"""Configuration module for the Google Apps admin client."""
from .settings import ClientConfig, load_settings

__all__ = ["ClientConfig", "load_settings"]

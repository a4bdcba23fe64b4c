"""Configuration module -- exports Settings and load_config."""

from docbench.config.loader import load_config
from docbench.config.settings import Settings

__all__ = ["Settings", "load_config"]

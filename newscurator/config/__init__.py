"""Configuration management for the news curator."""

from .catalog import SourceCatalog
from .loader import Config, load_config, load_sources, save_config, save_sources
from .models import ConfigModel, PostgresConfig, ScrapingConfig, SourceConfig

__all__ = [
    "Config",
    "ConfigModel",
    "PostgresConfig",
    "ScrapingConfig",
    "SourceCatalog",
    "SourceConfig",
    "load_config",
    "load_sources",
    "save_config",
    "save_sources",
]

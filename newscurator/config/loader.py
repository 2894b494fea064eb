"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError
from rich.console import Console

from .catalog import SourceCatalog
from .models import ConfigModel, SourceConfig

console = Console()

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "newscurator"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_DIR / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def sources_path(self) -> Path:
        """sources.yaml lives next to config.yaml."""
        return self.config_path.parent / "sources.yaml"

    @property
    def workspace_root(self) -> Path:
        """Get workspace root path."""
        path = Path(self.config.workspace_root).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def cache_path(self) -> Path:
        """Scrape cache file location."""
        return self.workspace_root / self.config.cache_file

    def load_sources(self) -> SourceCatalog:
        """Read the source catalog; called once per scan."""
        return load_sources(self.sources_path)

    def get_db_config(self) -> Dict[str, Any]:
        """Postgres settings with the password resolved from ``password_env``."""
        db_config = self.config.postgres.model_dump()
        env_name = db_config.get("password_env")
        if env_name and os.environ.get(env_name):
            db_config["password"] = os.environ[env_name]
        return db_config


def load_config(config_path: Path) -> ConfigModel:
    """Read config.yaml; an empty file yields the defaults."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            return ConfigModel(**(yaml.safe_load(f) or {}))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_sources(sources_path: Path) -> SourceCatalog:
    """
    Load the category -> sources mapping from YAML.

    Category and source order are kept exactly as written; invalid source
    entries are skipped with a warning.
    """
    if not sources_path.exists():
        raise FileNotFoundError(f"Sources file not found: {sources_path}")

    try:
        with open(sources_path) as f:
            sources_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in sources file: {e}")

    if not sources_data:
        return SourceCatalog()
    if not isinstance(sources_data, dict):
        raise ValueError("Sources file must map category names to source lists")

    categories: Dict[str, List[SourceConfig]] = {}
    for category_name, entries in sources_data.items():
        sources = []
        for source_data in entries or []:
            try:
                sources.append(SourceConfig(**source_data))
            except (TypeError, ValidationError) as e:
                name = source_data.get("name", "unknown") if isinstance(source_data, dict) else "unknown"
                console.print(f"[yellow]Skipping invalid source {name}: {e}[/yellow]")
        categories[str(category_name)] = sources

    return SourceCatalog(categories)


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def save_sources(catalog: SourceCatalog, sources_path: Path) -> None:
    """Save the source catalog to YAML, keeping category and source order."""
    sources_path.parent.mkdir(parents=True, exist_ok=True)

    sources_data = {
        name: [s.model_dump(by_alias=True, exclude_none=True) for s in sources]
        for name, sources in catalog.as_dict().items()
    }

    with open(sources_path, "w") as f:
        yaml.dump(sources_data, f, default_flow_style=False, sort_keys=False)

"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load settings from YAML file."""
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested structure to match Settings field names
        flattened = {}
        if 'server' in data:
            flattened['host'] = data['server'].get('host')
            flattened['port'] = data['server'].get('port')
        if 'database' in data:
            flattened['database_url'] = data['database'].get('url')
            flattened['seed_content'] = data['database'].get('seed_content')
        if 'sessions' in data:
            flattened['session_ttl_hours'] = data['sessions'].get('ttl_hours')
        if 'progress' in data:
            progress = data['progress']
            flattened['minutes_per_item'] = progress.get('minutes_per_item')
            flattened['daily_minutes_cap'] = progress.get('daily_minutes_cap')
            flattened['default_total_items'] = progress.get('default_total_items')
            flattened['fallback_total_items'] = progress.get('fallback_total_items')
        if 'dashboard' in data:
            flattened['dashboard_levels'] = data['dashboard'].get('levels')

        # Remove None values
        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Authentication (optional: None disables the shared-secret check)
    app_secret: str | None = Field(default=None)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    allowed_origins: str = Field(default="http://localhost:5173,http://127.0.0.1:5173")

    # Database (None means a SQLite file under data/)
    database_url: str | None = Field(default=None)
    seed_content: bool = Field(default=True)

    # Learner sessions
    session_ttl_hours: float = Field(default=24 * 30)

    # Progress estimates
    minutes_per_item: float = Field(default=2.5)
    daily_minutes_cap: float = Field(default=60.0)
    default_total_items: dict[str, int] = Field(
        default_factory=lambda: {"reading": 12, "math": 10}
    )
    fallback_total_items: int = Field(default=10)

    # Parent dashboard
    dashboard_levels: int = Field(default=6)

    # Paths
    project_root: Path = Field(default_factory=_find_project_root)

    @property
    def data_dir(self) -> Path:
        d = self.project_root / "data"
        d.mkdir(parents=True, exist_ok=True)
        return d

    @property
    def content_dir(self) -> Path:
        return self.project_root / "config" / "content"

    @property
    def resolved_database_url(self) -> str:
        """SQLAlchemy URL, falling back to a SQLite file in the data directory."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'little_learners.db'}"

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def total_items_for(self, activity_type: str) -> int:
        """Fixed item count given to a progress record when it is first created."""
        return self.default_total_items.get(activity_type, self.fallback_total_items)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()


def load_reading_words(content_dir: Path | None = None) -> list[dict]:
    """Load the seed reading word catalog from YAML."""
    content_dir = content_dir or _find_project_root() / "config" / "content"
    words_path = content_dir / "reading_words.yaml"
    if not words_path.exists():
        raise FileNotFoundError(f"Reading word catalog not found: {words_path}")
    with open(words_path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    words = []
    for level, entries in (data.get('levels') or {}).items():
        for entry in entries:
            words.append({"word": entry["word"], "image_url": entry["image_url"], "level": int(level)})
    return words


def load_math_activities(content_dir: Path | None = None) -> list[dict]:
    """Load the seed math activity catalog from YAML."""
    content_dir = content_dir or _find_project_root() / "config" / "content"
    activities_path = content_dir / "math_activities.yaml"
    if not activities_path.exists():
        raise FileNotFoundError(f"Math activity catalog not found: {activities_path}")
    with open(activities_path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    return data.get('activities', [])

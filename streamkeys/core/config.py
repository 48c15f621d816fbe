"""Application configuration loaded from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

from streamkeys.core.models import KeyFormat


class Settings(BaseSettings):
    # Counters
    default_width: int = 8
    default_key_format: KeyFormat = KeyFormat.TIMESTAMPED

    # Keyspaces (relative to project root)
    keyspaces_dir: str = "keyspaces"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 9200
    max_range_limit: int = 1000

    log_level: str = "INFO"

    @property
    def project_root(self) -> Path:
        return Path(__file__).parent.parent.parent

    model_config = {"env_file": ".env", "env_prefix": "STREAMKEYS_", "extra": "ignore"}


settings = Settings()

"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ServerConfig(BaseModel):
    """HTTP server parameters."""

    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "info"
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )


class StakeConfig(BaseModel):
    """Wager redistribution parameters."""

    stake_rate: float = 0.07  # 7% of points staked per player
    draw_split: int = 4       # Pool divisor on a draw, always 4 in the domain
    pod_size: int = 4         # Players required by the simulation endpoint


class TopdeckSection(BaseModel):
    """Upstream Topdeck.gg API parameters."""

    base_url: str = "https://api.topdeck.gg/v2"
    timeout_seconds: float = 30.0
    max_retries: int = 1


class Settings(BaseSettings):
    """Main configuration class."""

    # Paths
    data_dir: Path = Path("data")

    # API Keys
    topdeck_api_key: str = ""
    logfire_token: str = ""

    # Nested configuration sections
    server: ServerConfig = Field(default_factory=ServerConfig)
    stakes: StakeConfig = Field(default_factory=StakeConfig)
    topdeck: TopdeckSection = Field(default_factory=TopdeckSection)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("data_dir", mode="after")
    @classmethod
    def resolve_data_dir(cls, v: Path) -> Path:
        """Resolve data directory to absolute path."""
        return v.resolve()

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration."""
        config_path = self.data_dir / "config.yaml"

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in ["server", "stakes", "topdeck"]:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    yaml_section = yaml_config[section_name] or {}

                    section_dict = section.model_dump()
                    section_dict.update(yaml_section)

                    new_section = section.__class__(**section_dict)
                    setattr(self, section_name, new_section)

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings

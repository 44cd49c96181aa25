"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
DEFAULT_CATEGORIES = ["developers", "architects", "devops", "performance", "qa-testing"]


class Settings(BaseModel):
    content_dir: str = Field(default="content", description="Directory holding .md/.mdx guides")
    output_dir:  str = Field(default="dist",    description="Directory for exported JSON metadata")
    db_url:      str = "sqlite:///guidepub.db"
    categories:  list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES),
                                   description="Allowed editorial categories; empty list accepts any")
    workers:          int = Field(default=1,   ge=1, description="Parallel parse threads")
    words_per_minute: int = Field(default=200, ge=1, description="Reading speed for reading time")
    strict_links:    bool = Field(default=False,     description="Fail builds with unresolved related guides")
    log_level:        str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("categories", mode="before")
    @classmethod
    def _split_categories(cls, v: Any) -> Any:
        """Env vars arrive as 'a,b,c'."""
        if isinstance(v, str):
            return [c.strip() for c in v.split(",") if c.strip()]
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then GUIDEPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"GUIDEPUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

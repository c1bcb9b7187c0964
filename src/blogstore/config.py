"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "BLOGSTORE_"


class Settings(BaseModel):
    app_name:      str = "blogstore"
    content_dir:   str = Field(default=".",       description="Root directory of the blog content")
    posts_dir:     str = Field(default="_posts",  description="Directory name whose files are dated posts")
    markdown_extensions: list[str] = Field(default=[".md", ".markdown"], description="Suffixes treated as documents")
    exclude:       list[str] = Field(default=["README.md", "node_modules", "vendor"],
                                     description="File or directory names never loaded")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    output_dir:    str = Field(default="dist",     description="Directory for exported documents")
    log_level:     str = Field(default="WARNING",  pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def _env_value(name: str, raw: str) -> Any:
    """Split comma-separated env values for list fields; pass scalars through for pydantic to coerce."""
    if Settings.model_fields[name].annotation == list[str]:
        return [part.strip() for part in raw.split(",") if part.strip()]
    return raw


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOGSTORE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = _env_value(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

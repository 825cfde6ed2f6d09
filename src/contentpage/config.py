"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "CONTENTPAGE_"


class Settings(BaseModel):
    app_name:       str  = "contentpage"
    output_dir:     str  = Field(default="public",   description="Directory for rendered pages and the navigation index")
    output_format:  str  = Field(default="html", pattern="^(html|md|json)$", description="html, md or json")
    parser_config:  str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    include_drafts: bool = Field(default=False,      description="Render pages whose front matter sets draft: true")
    standalone:     bool = Field(default=True,       description="Wrap HTML fragments in a full HTML document")
    log_level:      str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then CONTENTPAGE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

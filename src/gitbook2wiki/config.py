"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "GITBOOK2WIKI_"


class Settings(BaseModel):
    src_dir:    str  = Field(default="./_testfiles",       description="GitBook source directory")
    dest_dir:   str  = Field(default="./_testoutput.wiki", description="Wiki destination directory")
    wiki_repo:  str  = Field(default="/kataras/iris/wiki", description="GitHub wiki page base for asset links")
    verbose:    bool = Field(default=False, description="Log per-file diagnostics")
    keep_links: bool = Field(default=False, description="Keep file names and links as they are")
    chunk_size: int  = Field(default=4096, ge=1, description="Max bytes per physical read of a line")

    @field_validator("src_dir", "dest_dir")
    @classmethod
    def _expand_user(cls, v: str) -> str:
        return os.path.expanduser(v)

    @model_validator(mode="after")
    def _distinct_dirs(self) -> "Settings":
        # Output files are truncated before their source is read.
        if Path(self.src_dir).resolve() == Path(self.dest_dir).resolve():
            raise ValueError(f"dest_dir must differ from src_dir: {self.src_dir}")
        return self


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then GITBOOK2WIKI_<FIELD> env vars, then non-None CLI overrides.

    ``~`` in src_dir/dest_dir is expanded; relative paths stay relative to the
    working directory, which is also where config.yaml is looked up. A
    destination equal to the source tree is rejected with ValueError.
    """
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

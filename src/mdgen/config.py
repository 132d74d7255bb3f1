"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDGEN_"


class Settings(BaseModel):
    app_name:       str = "mdgen"
    markdown_roots: list[str] = Field(
        default_factory=lambda: ["src/jsMain/resources/markdown"],
        description="Ordered author content roots searched for markdown",
    )
    generated_dir:  str = Field(default="build/generated/markdown", description="Root holding markdown generated by a prior step")
    output_dir:     str = Field(default="build/generated/kotlin",   description="Directory owned by the converter; cleared each run")
    group:          str = Field(default="com.example", min_length=1, description="Project group used to expand '.' package shortcuts")
    pages_package:  str = Field(default=".pages",      min_length=1, description="Package that generated pages live under")
    default_root:   str = Field(default="",            description="Root layout composable wrapping each page; blank = none")
    imports:        list[str] = Field(default_factory=list, description="Imports seeded into every generated file")
    depends_on_markdown_artifact: bool = Field(default=True, description="Emit markdown-context imports and wrapper")
    parser_config:  str = Field(default="gfm-like",    description="MarkdownIt parser preset name")
    handlers:       dict[str, str] = Field(default_factory=dict, description="Node kind -> 'module:attr' handler overrides")

    def roots(self) -> list[Path]:
        """Author roots first, generated root last."""
        roots = [Path(r) for r in self.markdown_roots]
        if self.generated_dir:
            roots.append(Path(self.generated_dir))
        return roots


def _env_value(name: str, raw: str) -> Any:
    """Coerce an env var string for list/dict fields; scalars are left to pydantic."""
    default = Settings.model_fields[name].get_default(call_default_factory=True)
    if not isinstance(default, (list, dict)):
        return raw
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {ENV_PREFIX}{name.upper()}: {e}") from e
    if isinstance(default, list) and isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDGEN_<FIELD> env vars, then non-None CLI overrides."""
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

"""
Configuration for pattern catalog loading and pattern instantiation.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, Field, field_validator

RESOURCES_DIR = Path(__file__).parent / "resources"
DEFAULT_CATALOG_PATH = RESOURCES_DIR / "modl_index.ttl"
DEFAULT_FRAGMENT_DIR = RESOURCES_DIR / "patterns"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class PatternConfig(BaseModel):
    """Settings for the pattern library and instantiator."""

    use_target_namespace: bool = Field(True, description="Rename pattern entities into the target namespace")
    entity_separator: str = Field("#", description="Separator between target namespace and entity short name")
    max_rename_attempts: int = Field(1000, description="Maximum '-1' suffixes tried when a property name collides")
    catalog_path: Optional[Path] = Field(None, description="Pattern catalog document; bundled catalog if None")
    fragment_dir: Optional[Path] = Field(None, description="Directory of pattern fragments; bundled fragments if None")

    @field_validator("max_rename_attempts")
    @classmethod
    def validate_max_rename_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_rename_attempts must be at least 1")
        return v

    @field_validator("entity_separator")
    @classmethod
    def validate_entity_separator(cls, v: str) -> str:
        if not v or any(c.isspace() for c in v):
            raise ValueError(f"Invalid entity separator: {v!r}")
        return v

    @property
    def resolved_catalog_path(self) -> Path:
        return self.catalog_path or DEFAULT_CATALOG_PATH

    @property
    def resolved_fragment_dir(self) -> Path:
        return self.fragment_dir or DEFAULT_FRAGMENT_DIR

    @classmethod
    def from_env(cls) -> "PatternConfig":
        """Create a configuration from PATTERNS_* environment variables.

        A .env file in the working directory (or a parent) supplies values that
        are not set in the environment.
        """
        env = {**dotenv_values(find_dotenv(usecwd=True)), **os.environ}

        values = {}
        use_target_namespace = env.get("PATTERNS_USE_TARGET_NAMESPACE")
        if use_target_namespace is not None:
            values["use_target_namespace"] = use_target_namespace.strip().lower() in _TRUE_VALUES
        separator = env.get("PATTERNS_ENTITY_SEPARATOR")
        if separator:
            values["entity_separator"] = separator
        max_attempts = env.get("PATTERNS_MAX_RENAME_ATTEMPTS")
        if max_attempts:
            values["max_rename_attempts"] = int(max_attempts)
        catalog_path = env.get("PATTERNS_CATALOG_PATH")
        if catalog_path:
            values["catalog_path"] = Path(catalog_path)
        fragment_dir = env.get("PATTERNS_FRAGMENT_DIR")
        if fragment_dir:
            values["fragment_dir"] = Path(fragment_dir)

        return cls(**values)

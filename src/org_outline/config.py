"""Parser settings loaded from YAML with environment variable overrides.

Settings are read from ~/.config/org-outline/config.yaml when it exists.
Environment variables take precedence:

- ORG_OUTLINE_STRICT: Enable strict block/drawer pairing checks ("1", "true", "yes")
- ORG_OUTLINE_ENCODING: Text encoding for files and URL bodies
- ORG_OUTLINE_URL_TIMEOUT: Timeout in seconds for URL sources
"""

import codecs
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from org_outline.utils.logging import get_logger

logger = get_logger(__name__)

ENV_OVERRIDES = {
    "ORG_OUTLINE_STRICT": "strict",
    "ORG_OUTLINE_ENCODING": "encoding",
    "ORG_OUTLINE_URL_TIMEOUT": "url_timeout",
}


def default_config_path() -> Path:
    return Path.home() / ".config" / "org-outline" / "config.yaml"


class ParserSettings(BaseModel):
    """Settings for reading and parsing outline documents."""

    strict: bool = Field(
        default=False,
        description="Reject mismatched, stray or unterminated blocks and drawers"
    )

    encoding: str = Field(
        default="utf-8",
        description="Text encoding used for files, byte streams and URL bodies"
    )

    url_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds when fetching URL sources"
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding is known to Python's codec registry."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown text encoding: {v}")
        return v

    model_config = {"frozen": True}


def load_settings(config_path: Optional[Path] = None) -> ParserSettings:
    """Load parser settings from YAML with environment variable overrides.

    Args:
        config_path: Path to config file. If None, uses ~/.config/org-outline/config.yaml
                     and silently falls back to defaults when it does not exist.

    Returns:
        Validated ParserSettings

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValueError: If the file is not a YAML mapping
        pydantic.ValidationError: If a setting has an invalid value
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = default_config_path()

    if config_path.exists():
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")
        logger.debug("config_file_loaded", path=str(config_path))
    elif explicit:
        raise FileNotFoundError(f"Configuration file not found at {config_path}")
    else:
        data = {}

    data = _apply_env_overrides(data)
    return ParserSettings(**data)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply ORG_OUTLINE_* environment overrides on top of file settings.

    Values are passed through as strings; pydantic coerces them
    ("true"/"1"/"yes" for booleans, numeric strings for floats).
    """
    data = dict(data)
    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[key] = value
    return data

"""
Configuration models and JSON loading.

Settings are pydantic models so a hand-edited JSON file is validated the
moment it is read, not the first time a bad value is used.

Usage:
    config = load_model("battle.json", BattleConfig)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from battlekit.core.errors import ConfigError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class WindowConfig(BaseModel):
    """Configuration for the display window."""

    model_config = ConfigDict(extra='forbid')

    title: str = "Monster Battle"
    width: int = Field(default=1000, ge=640)
    height: int = Field(default=750, ge=480)
    fps: int = Field(default=60, ge=1)
    font_name: str | None = None


def load_model(path: Path | str, model: type[M]) -> M:
    """
    Load and validate a JSON configuration file.

    Args:
        path: JSON file to read
        model: pydantic model class to validate against

    Returns:
        The validated model instance

    Raises:
        ConfigError: if the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    try:
        config = model.model_validate_json(text)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}:\n{e}") from e

    logger.info(f"Loaded {model.__name__} from {path}")
    return config

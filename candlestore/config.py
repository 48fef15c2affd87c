"""Configuration loading for candlestore.

Settings are read from ``~/.config/candlestore/config.toml``::

    [candles]
    strict_volume = false

Series never read this file themselves. Callers that want a machine-wide
default pass it on explicitly::

    Candles.empty("BTCUSDT", strict_volume=get_settings().strict_volume)
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "candlestore" / "config.toml"


class Settings(BaseModel):
    """Default behaviour switches for candle stores."""

    strict_volume: bool = Field(
        default=True,
        description="Reject volume pushed into a series that does not track volume",
    )

    model_config = {"frozen": True}


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load the raw configuration file.

    Args:
        config_path: File to read. Defaults to ``CONFIG_PATH``.

    Returns:
        Parsed TOML as a dict, or an empty dict if the file is missing
        or cannot be read or parsed.
    """
    path = config_path or CONFIG_PATH

    if not path.exists():
        return {}

    try:
        config = toml.load(path)
    except (toml.TomlDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings, loading them on first use.

    An invalid ``[candles]`` section is reported and replaced by defaults.
    """
    section = load_config().get("candles", {})
    try:
        return Settings.model_validate(section)
    except ValidationError as e:
        logger.warning("Ignoring invalid [candles] settings: %s", e)
        return Settings()

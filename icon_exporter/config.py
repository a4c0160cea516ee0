"""
Exporter configuration.

Resolution order (later wins):
1. Defaults from rules.py
2. JSON file (explicit path, or ICON_EXPORTER_CONFIG)
3. ICON_EXPORTER_<FIELD> environment variables
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .rules import ASSET_DIR, BASE_CODEPOINT, CATEGORY_PREFIX

logger = logging.getLogger(__name__)

ENV_PREFIX = "ICON_EXPORTER_"
CONFIG_PATH_ENV = "ICON_EXPORTER_CONFIG"


class ExporterConfiguration(BaseModel):
    category_prefix: str = CATEGORY_PREFIX
    base_codepoint: int = Field(default=BASE_CODEPOINT, ge=0, le=0x10FFFF)
    asset_dir: str = ASSET_DIR
    font_name: str = "Icons"
    class_name: str = "Icons"
    source_url: Optional[str] = None
    source_token: Optional[str] = None

    @field_validator("base_codepoint", mode="before")
    @classmethod
    def _parse_codepoint(cls, value: Any) -> Any:
        # accept "0xE900" as well as 59648
        if isinstance(value, str):
            return int(value.strip(), 0)
        return value


def _read_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {path}: expected a JSON object")
        return {}
    return data


def _read_env() -> Dict[str, str]:
    values = {}
    for name in ExporterConfiguration.model_fields:
        env_value = os.environ.get(ENV_PREFIX + name.upper())
        if env_value:
            values[name] = env_value
    return values


def load_config(path: Union[str, Path, None] = None) -> ExporterConfiguration:
    """Load the exporter configuration. Raises ValidationError on bad values."""
    if path is None:
        path = os.environ.get(CONFIG_PATH_ENV)

    values: Dict[str, Any] = {}
    if path:
        values.update(_read_file(Path(path)))
    values.update(_read_env())

    return ExporterConfiguration(**values)

"""Scan toggle storage: six named booleans kept in a JSON file, default true."""

import json
import logging
import os
from typing import Dict, Optional

from dawgscan.config import settings
from dawgscan.exceptions import PreferenceError
from dawgscan.models import ScanConfiguration

logger = logging.getLogger(__name__)

PREFERENCE_NAMES = tuple(ScanConfiguration.model_fields)


def _preferences_file(data_dir: Optional[str] = None) -> str:
    return os.path.join(data_dir or settings.data_dir, "preferences.json")


def _load(path: str) -> Dict[str, bool]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            stored = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("unreadable preferences file %s, using defaults: %s", path, e)
        return {}
    if not isinstance(stored, dict):
        logger.warning("preferences file %s is not a JSON object, using defaults", path)
        return {}
    return {name: bool(stored[name]) for name in PREFERENCE_NAMES if name in stored}


def _save(path: str, values: Dict[str, bool]):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        json.dump(values, f, indent=2)


def load_preferences(data_dir: Optional[str] = None) -> ScanConfiguration:
    return ScanConfiguration(**_load(_preferences_file(data_dir)))


def set_preference(name: str, enabled: bool, data_dir: Optional[str] = None) -> ScanConfiguration:
    if name not in PREFERENCE_NAMES:
        raise PreferenceError(name)
    path = _preferences_file(data_dir)
    values = _load(path)
    values[name] = bool(enabled)
    _save(path, values)
    return ScanConfiguration(**values)


def reset_preferences(data_dir: Optional[str] = None) -> ScanConfiguration:
    path = _preferences_file(data_dir)
    if os.path.exists(path):
        os.remove(path)
    return ScanConfiguration()

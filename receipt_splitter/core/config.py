"""
Settings for charges, validation thresholds and OCR.
"""

import json
import os
from pathlib import Path
from typing import Dict, Optional

from .models import ChargeConfig
from .utils import MAX_PEOPLE
from .validation import DEFAULT_CONFIDENCE_THRESHOLD, DEFAULT_MAX_PROCESSING_SECONDS

DEFAULT_SETTINGS = {
    "tax_percent": 8.5,
    "service_percent": 0.0,
    "tip_percent": 15.0,
    "tax_distribution": "proportional",
    "tip_distribution": "proportional",
    "confidence_threshold": DEFAULT_CONFIDENCE_THRESHOLD,
    "max_processing_seconds": DEFAULT_MAX_PROCESSING_SECONDS,
    "max_people": MAX_PEOPLE,
    "tesseract_cmd": None,
}

# Environment variable -> settings key
ENV_OVERRIDES = {
    "SPLIT_TAX_PERCENT": "tax_percent",
    "SPLIT_SERVICE_PERCENT": "service_percent",
    "SPLIT_TIP_PERCENT": "tip_percent",
    "TESSERACT_CMD": "tesseract_cmd",
}

_NUMERIC_KEYS = {"tax_percent", "service_percent", "tip_percent",
                 "confidence_threshold", "max_processing_seconds"}


def load_settings(path: Optional[Path] = None, env: Optional[Dict[str, str]] = None) -> Dict:
    """
    Load settings from a JSON file, then apply environment overrides.

    A missing file yields the defaults. Example file:
        {
          "tax_percent": 8.875,
          "tip_percent": 18,
          "tip_distribution": "equal"
        }
    """
    settings = dict(DEFAULT_SETTINGS)
    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError(f"Settings file {path} must contain a JSON object")
        unknown = set(loaded) - set(DEFAULT_SETTINGS)
        if unknown:
            raise ValueError(f"Unknown setting(s) in {path}: {', '.join(sorted(unknown))}")
        settings.update(loaded)

    env = os.environ if env is None else env
    for var, key in ENV_OVERRIDES.items():
        if env.get(var):
            settings[key] = env[var]

    for key in _NUMERIC_KEYS:
        try:
            settings[key] = float(settings[key])
        except (TypeError, ValueError):
            raise ValueError(f"Setting {key} must be a number, got {settings[key]!r}")
    settings["max_people"] = int(settings["max_people"])
    return settings


def charge_config_from_settings(settings: Dict, **overrides) -> ChargeConfig:
    """Build a ChargeConfig from settings; non-None keyword overrides win."""
    values = {k: settings[k] for k in ("tax_percent", "service_percent", "tip_percent",
                                       "tax_distribution", "tip_distribution")}
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ChargeConfig(**values)

# src/nonblocking/gui/app_config.py
"""
App-wide config for the nonblocking GUI (platformdirs + JSON).

Persisted items (schema v1):
- text_size: str           (font size for UI controls)
- poll_interval_s: float   (owner loop period: how often the UI timer drains posted calls)
- max_per_tick: int        (cap on posted calls applied per owner loop tick)
- step_delay_s: float      (pause after each worker step; 0 runs the loop flat out)

Behavior:
- If config file missing or unreadable -> defaults are used
- If schema_version mismatches -> defaults are used
- Out-of-range numbers fall back to their defaults

Design:
- AppConfigData dataclass holds JSON-friendly data (dot access)
- AppConfig manager provides explicit API for load/save and attribute access
- Field metadata carries widget hints (read by OptionsView) and validation bounds
"""

from __future__ import annotations

import json
from dataclasses import Field, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from platformdirs import user_config_dir

from nonblocking.core.utils.logging import get_logger

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

TEXT_SIZE_OPTIONS = ["text-xs", "text-sm", "text-base", "text-lg"]

# Defaults
DEFAULT_TEXT_SIZE: str = "text-sm"
DEFAULT_POLL_INTERVAL_S: float = 0.05
DEFAULT_MAX_PER_TICK: int = 2000
DEFAULT_STEP_DELAY_S: float = 0.0


@dataclass
class AppConfigData:
    """
    JSON-serializable config payload.

    Keep fields JSON-friendly; field metadata is used for validation.
    """
    schema_version: int = SCHEMA_VERSION

    text_size: str = field(
        default=DEFAULT_TEXT_SIZE,
        metadata={
            "widget_type": "select",
            "label": "Text Size",
            "options": TEXT_SIZE_OPTIONS,
        },
    )

    poll_interval_s: float = field(
        default=DEFAULT_POLL_INTERVAL_S,
        metadata={
            "widget_type": "number",
            "label": "UI Poll Interval (s)",
            "min": 0.005,
            "max": 1.0,
            "step": 0.005,
        },
    )

    max_per_tick: int = field(
        default=DEFAULT_MAX_PER_TICK,
        metadata={
            "widget_type": "number",
            "label": "Updates Per Tick",
            "min": 1,
            "max": 100_000,
        },
    )

    step_delay_s: float = field(
        default=DEFAULT_STEP_DELAY_S,
        metadata={
            "widget_type": "number",
            "label": "Worker Step Delay (s)",
            "min": 0.0,
            "max": 0.01,
            "step": 0.001,
        },
    )

    def to_json_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "AppConfigData":
        """
        Tolerant loader:
        - ignores unknown keys
        - tolerates partially missing values
        - out-of-range numbers fall back to defaults (see AppConfig._normalize_loaded_data)
        """
        schema_version = int(d.get("schema_version", -1))

        text_size_raw = d.get("text_size", DEFAULT_TEXT_SIZE)
        text_size = DEFAULT_TEXT_SIZE
        if isinstance(text_size_raw, str):
            if text_size_raw in TEXT_SIZE_OPTIONS:
                text_size = text_size_raw
            else:
                logger.warning(f"Invalid text_size '{text_size_raw}', using default '{DEFAULT_TEXT_SIZE}'")

        return cls(
            schema_version=schema_version,
            text_size=text_size,
            poll_interval_s=_as_float(d.get("poll_interval_s"), DEFAULT_POLL_INTERVAL_S),
            max_per_tick=_as_int(d.get("max_per_tick"), DEFAULT_MAX_PER_TICK),
            step_delay_s=_as_float(d.get("step_delay_s"), DEFAULT_STEP_DELAY_S),
        )


def _as_float(raw: Any, default: float) -> float:
    # bool is an int subclass; treat it as invalid here
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return default
    return float(raw)


def _as_int(raw: Any, default: int) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return default
    return int(raw)


class AppConfig:
    """
    Manager for loading/saving AppConfigData to disk.
    """

    def __init__(self, *, path: Path, data: Optional[AppConfigData] = None):
        self.path = path
        self.data = data if data is not None else AppConfigData()

    # -----------------------------
    # Construction / persistence
    # -----------------------------
    @staticmethod
    def default_config_path(
        app_name: str = "nonblocking",
        filename: str = "app_config.json",
    ) -> Path:
        """
        Determine OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/nonblocking/app_config.json
        Linux:   ~/.config/nonblocking/app_config.json
        Windows: %APPDATA%\\nonblocking\\app_config.json
        """
        d = Path(user_config_dir(app_name))
        d.mkdir(parents=True, exist_ok=True)
        return d / filename

    @classmethod
    def load(cls, *, config_path: Optional[Path] = None) -> "AppConfig":
        """
        Load config from disk.

        Missing, unreadable or wrong-schema files -> defaults. Nothing is
        written until save() is called.
        """
        path = config_path or cls.default_config_path()
        default_data = AppConfigData()

        try:
            raw = path.read_text(encoding="utf-8")
            parsed = json.loads(raw)
            if not isinstance(parsed, dict):
                logger.warning(f"App config file at {path} does not contain a dict, using defaults")
                return cls(path=path, data=default_data)

            loaded = AppConfigData.from_json_dict(parsed)

            if loaded.schema_version != SCHEMA_VERSION:
                logger.warning(
                    f"App config schema version mismatch: loaded={loaded.schema_version}, "
                    f"expected={SCHEMA_VERSION}, resetting to defaults"
                )
                return cls(path=path, data=default_data)

            cls._normalize_loaded_data(loaded)
            return cls(path=path, data=loaded)

        except FileNotFoundError:
            logger.info(f"App config file not found at {path}, using defaults")
            return cls(path=path, data=default_data)
        except Exception as e:
            logger.error(f"Failed to load app config from {path}: {e}", exc_info=True)
            logger.info("Using default app config")
            return cls(path=path, data=default_data)

    @staticmethod
    def _normalize_loaded_data(data: AppConfigData) -> None:
        """Reset any numeric field outside its metadata bounds to its default."""
        for f in fields(data):
            lo = f.metadata.get("min")
            hi = f.metadata.get("max")
            if lo is None and hi is None:
                continue
            value = getattr(data, f.name)
            if (lo is not None and value < lo) or (hi is not None and value > hi):
                logger.warning(f"{f.name}={value!r} outside [{lo}, {hi}], using default {f.default!r}")
                setattr(data, f.name, f.default)

    def save(self) -> None:
        """Write config to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = self.data.to_json_dict()
        logger.info(f"saving app_config to {self.path}")
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    # -----------------------------
    # Public API: attribute access
    # -----------------------------
    def field_names(self) -> List[str]:
        """Editable fields, in declaration order (schema_version excluded)."""
        return [f.name for f in fields(self.data) if f.name != "schema_version"]

    def get_attribute(self, key: str) -> Any:
        """
        Get attribute value by key.

        Raises:
            AttributeError: If key doesn't exist
        """
        if not hasattr(self.data, key):
            raise AttributeError(f"AppConfigData has no attribute '{key}'")
        return getattr(self.data, key)

    def set_attribute(self, key: str, value: Any) -> None:
        """
        Set attribute value by key with validation.

        Args:
            key: Attribute name (e.g., 'poll_interval_s')
            value: New value to set

        Raises:
            AttributeError: If key doesn't exist
            ValueError: If value is invalid for the attribute
        """
        field_info = self._field(key)
        current_value = getattr(self.data, key)

        # bool is an int subclass; never accept it for a numeric field
        if isinstance(value, bool):
            raise ValueError(f"Invalid value type for '{key}': bool")

        if not isinstance(value, type(current_value)):
            try:
                if isinstance(current_value, str):
                    value = str(value)
                elif isinstance(current_value, int):
                    if isinstance(value, float) and not value.is_integer():
                        raise ValueError(f"{value!r} is not a whole number")
                    value = int(value)
                elif isinstance(current_value, float):
                    value = float(value)
                else:
                    raise ValueError(f"Cannot convert {type(value)} to {type(current_value)}")
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid value type for '{key}': {e}")

        metadata = field_info.metadata
        widget_type = metadata.get("widget_type")

        if widget_type == "select":
            options = metadata.get("options")
            if options and value not in options:
                raise ValueError(f"Value '{value}' not in allowed options: {options}")

        elif widget_type == "number":
            min_val = metadata.get("min")
            max_val = metadata.get("max")
            if min_val is not None and value < min_val:
                raise ValueError(f"Value '{value}' is less than minimum '{min_val}'")
            if max_val is not None and value > max_val:
                raise ValueError(f"Value '{value}' is greater than maximum '{max_val}'")

        setattr(self.data, key, value)
        logger.debug(f"Set app_config.{key} = {value}")

    def get_field_metadata(self, key: str) -> Dict[str, Any]:
        """
        Get metadata for a field.

        Raises:
            AttributeError: If key doesn't exist
        """
        return dict(self._field(key).metadata)

    def _field(self, key: str) -> Field:
        for f in fields(self.data):
            if f.name == key:
                return f
        raise AttributeError(f"AppConfigData has no attribute '{key}'")

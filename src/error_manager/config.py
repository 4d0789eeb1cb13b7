from __future__ import annotations

import codecs
import dataclasses
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_FILE_ENV = "ERROR_MANAGER_SETTINGS_FILE"
TOML_SECTION = "error_manager"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey values into a bool.

    Accepts: True/False, 1/0, "true"/"false", "yes"/"no", "on"/"off" (case-insensitive).
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off"}:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


def _as_optional_path(value: Any) -> Optional[Path]:
    if value is None or value == "":
        return None
    return Path(value).expanduser()


@dataclass
class Settings:
    """Runtime settings of an ErrorManager.

    Sources, lowest to highest precedence:
    - dataclass defaults
    - a TOML file (env ERROR_MANAGER_SETTINGS_FILE or an explicit path), either
      top-level keys or an [error_manager] table
    - environment variables (prefix ERROR_MANAGER_)
    """

    # Validate loaded payloads against a JSON schema
    validate_schema: bool = True
    # Render "<code> - <message>" rather than the bare message
    include_code: bool = True
    encoding: str = "utf-8"
    # Custom schema file; None selects the bundled schema
    schema_path: Optional[Path] = None
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Normalize settings to safe values."""
        try:
            self.validate_schema = _as_bool(self.validate_schema)
            self.include_code = _as_bool(self.include_code)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid settings: {exc}") from exc
        self.schema_path = _as_optional_path(self.schema_path)
        level = str(self.log_level).strip().upper()
        if level not in _LOG_LEVELS:
            logger.warning("Unknown log level %r; using WARNING", self.log_level)
            level = "WARNING"
        self.log_level = level
        if not self.encoding:
            self.encoding = "utf-8"
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ConfigurationError(f"Unknown encoding {self.encoding!r}", context={"encoding": self.encoding}) from exc

    def as_dict(self) -> Dict[str, Any]:
        return {
            "validate_schema": self.validate_schema,
            "include_code": self.include_code,
            "encoding": self.encoding,
            "schema_path": str(self.schema_path) if self.schema_path else None,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in data.items() if k in allowed}
        obj = cls(**filtered)
        obj.validate()
        return obj

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping = {
            "ERROR_MANAGER_VALIDATE": ("validate_schema", _as_bool),
            "ERROR_MANAGER_INCLUDE_CODE": ("include_code", _as_bool),
            "ERROR_MANAGER_ENCODING": ("encoding", str),
            "ERROR_MANAGER_SCHEMA": ("schema_path", _as_optional_path),
            "ERROR_MANAGER_LOG_LEVEL": ("log_level", str),
        }
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in mapping.items():
            if env_key in env and env[env_key] != "":
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    logger.error("Invalid env for %s=%r: %s", env_key, env[env_key], exc)
        return out

    @classmethod
    def from_toml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return {}
        try:
            with path.open("rb") as f:
                doc = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Failed to read settings TOML {path}: {exc}", context={"path": str(path)}) from exc
        flat: Dict[str, Any] = {k: v for k, v in doc.items() if not isinstance(v, dict)}
        if isinstance(doc.get(TOML_SECTION), dict):
            flat.update(doc[TOML_SECTION])
        return flat

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Mapping[str, str]] = None,
        file_path: Optional[Path | str] = None,
    ) -> "Settings":
        env = os.environ if env is None else env
        data: Dict[str, Any] = {}
        if file_path is None and env.get(SETTINGS_FILE_ENV):
            file_path = env[SETTINGS_FILE_ENV]
        if file_path is not None:
            data.update(cls.from_toml_file(Path(file_path).expanduser()))
        data.update(cls.from_env(env))
        return cls.from_dict(data)


__all__ = [
    "Settings",
    "SETTINGS_FILE_ENV",
]

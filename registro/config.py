"""Configuration management for the registration console."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger("registro.config")

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ConfigurationError(RuntimeError):
    """Raised when the session configuration cannot be used."""


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return _env_bool(None if value is None else str(value), default)


def _normalize_log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"Unknown log level {value!r}; expected one of {', '.join(sorted(_LOG_LEVELS))}"
        )
    return level


def _normalize_sentinel(value: Any) -> str:
    sentinel = str(value)
    if not sentinel.strip():
        raise ConfigurationError("The exit word must not be empty")
    return sentinel


@dataclass(frozen=True)
class SessionSettings:
    """Options for an interactive registration session."""

    sentinel: str = "exit"
    mask_password: bool = True
    log_level: str = "WARNING"

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "SessionSettings":
        """Create :class:`SessionSettings` from the ``session`` mapping of a config file."""
        unknown = set(data.keys()) - {"sentinel", "mask_password", "log_level"}
        if unknown:
            raise ConfigurationError(f"Unknown session settings: {', '.join(sorted(unknown))}")

        defaults = SessionSettings()
        return SessionSettings(
            sentinel=_normalize_sentinel(data.get("sentinel", defaults.sentinel)),
            mask_password=_coerce_bool(data.get("mask_password"), defaults.mask_password),
            log_level=_normalize_log_level(data.get("log_level", defaults.log_level)),
        )


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "session.yaml").resolve(strict=False)
    return candidate


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Failed to read {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

    session = raw.get("session") or {}
    if not isinstance(session, dict):
        raise ConfigurationError("The 'session' key must contain a mapping")
    return session


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SessionSettings:
    """Load session settings from the YAML file and environment overrides."""

    env = os.environ if environ is None else environ
    if config_path is None:
        config_path = resolve_config_path(env.get("REGISTRO_CONFIG_PATH"))

    if config_path.is_file():
        settings = SessionSettings.from_dict(_read_config_file(config_path))
        logger.debug("Loaded session settings from %s", config_path)
    else:
        logger.debug("No configuration file at %s; using defaults", config_path)
        settings = SessionSettings()

    sentinel = env.get("REGISTRO_SENTINEL")
    if sentinel is not None:
        settings = replace(settings, sentinel=_normalize_sentinel(sentinel))

    settings = replace(
        settings,
        mask_password=_env_bool(env.get("REGISTRO_MASK_PASSWORD"), settings.mask_password),
    )

    log_level = env.get("REGISTRO_LOG_LEVEL")
    if log_level:
        settings = replace(settings, log_level=_normalize_log_level(log_level))

    return settings


__all__ = ["ConfigurationError", "SessionSettings", "load_settings", "resolve_config_path"]

"""Runtime configuration loading helpers for the serializer and harness."""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .settings import HarnessSettings

_ENV_PREFIX = "KM_ACTIONS_"
_CONFIG_NAME = "km_actions.ini"
_BOOL_TRUE = {"1", "true", "yes", "on"}
_BOOL_FALSE = {"0", "false", "no", "off"}


@dataclass(slots=True)
class RuntimeConfig:
    """Declarative overrides sourced from environment variables or config files."""

    config_source: Optional[Path] = None
    engine_log_path: Optional[str] = None
    failures_dir: Optional[str] = None
    test_group_name: Optional[str] = None
    macro_name_prefix: Optional[str] = None
    poll_attempts: Optional[int] = None
    poll_interval: Optional[float] = None
    max_consecutive_failures: Optional[int] = None
    max_cases: Optional[int] = None
    tolerate_engine_errors: Optional[bool] = None
    osascript_path: Optional[str] = None

    def apply_to_settings(self, settings: HarnessSettings) -> None:
        """Project runtime overrides onto persisted settings without destroying saved values."""

        if self.engine_log_path is not None:
            settings.engine_log_path = self.engine_log_path
        if self.failures_dir is not None:
            settings.failures_dir = self.failures_dir
        if self.test_group_name is not None:
            settings.test_group_name = self.test_group_name
        if self.macro_name_prefix is not None:
            settings.macro_name_prefix = self.macro_name_prefix
        if self.poll_attempts is not None:
            settings.poll_attempts = self.poll_attempts
        if self.poll_interval is not None:
            settings.poll_interval = self.poll_interval
        if self.max_consecutive_failures is not None:
            settings.max_consecutive_failures = self.max_consecutive_failures
        if self.max_cases is not None:
            settings.max_cases = self.max_cases
        if self.tolerate_engine_errors is not None:
            settings.tolerate_engine_errors = self.tolerate_engine_errors
        if self.osascript_path is not None:
            settings.osascript_path = self.osascript_path


def load_runtime_config(
    env: Mapping[str, str] | None = None,
    config_path: Optional[Path] = None,
) -> RuntimeConfig:
    """Load runtime configuration overrides from environment variables and an optional INI file."""

    source_env = os.environ if env is None else env
    config_file = _determine_config_path(source_env, config_path)
    config = RuntimeConfig(config_source=config_file)

    if config_file is not None and config_file.is_file():
        parser: Optional[configparser.ConfigParser] = configparser.ConfigParser()
        try:
            parser.read(config_file, encoding="utf-8")
        except configparser.Error:
            parser = None  # pragma: no cover - invalid file handled via env overrides only
        if parser and parser.has_section("runtime"):
            section = parser["runtime"]
            config.engine_log_path = section.get("engine_log_path", config.engine_log_path)
            config.failures_dir = section.get("failures_dir", config.failures_dir)
            config.test_group_name = section.get("test_group_name", config.test_group_name)
            config.macro_name_prefix = section.get("macro_name_prefix", config.macro_name_prefix)
            config.poll_attempts = _get_int(section, "poll_attempts", config.poll_attempts)
            config.poll_interval = _get_float(section, "poll_interval", config.poll_interval)
            config.max_consecutive_failures = _get_int(
                section, "max_consecutive_failures", config.max_consecutive_failures
            )
            config.max_cases = _get_int(section, "max_cases", config.max_cases)
            config.tolerate_engine_errors = _get_bool(section, "tolerate_engine_errors", config.tolerate_engine_errors)
            config.osascript_path = section.get("osascript_path", config.osascript_path)

    _apply_env_overrides(config, source_env)
    return config


def _determine_config_path(env: Mapping[str, str], explicit: Optional[Path]) -> Optional[Path]:
    if explicit is not None:
        return explicit
    env_override = env.get(f"{_ENV_PREFIX}CONFIG_FILE")
    if env_override:
        return Path(env_override).expanduser()
    candidates = (
        Path(env.get(f"{_ENV_PREFIX}ROOT", "")) / _CONFIG_NAME if env.get(f"{_ENV_PREFIX}ROOT") else None,
        Path.cwd() / _CONFIG_NAME,
    )
    for candidate in candidates:
        if candidate and candidate.is_file():
            return candidate
    return None


def _apply_env_overrides(config: RuntimeConfig, env: Mapping[str, str]) -> None:
    config.engine_log_path = env.get(f"{_ENV_PREFIX}ENGINE_LOG_PATH", config.engine_log_path)
    config.failures_dir = env.get(f"{_ENV_PREFIX}FAILURES_DIR", config.failures_dir)
    config.test_group_name = env.get(f"{_ENV_PREFIX}TEST_GROUP_NAME", config.test_group_name)
    config.macro_name_prefix = env.get(f"{_ENV_PREFIX}MACRO_NAME_PREFIX", config.macro_name_prefix)
    config.poll_attempts = _get_int(env, f"{_ENV_PREFIX}POLL_ATTEMPTS", config.poll_attempts)
    config.poll_interval = _get_float(env, f"{_ENV_PREFIX}POLL_INTERVAL", config.poll_interval)
    config.max_consecutive_failures = _get_int(
        env, f"{_ENV_PREFIX}MAX_CONSECUTIVE_FAILURES", config.max_consecutive_failures
    )
    config.max_cases = _get_int(env, f"{_ENV_PREFIX}MAX_CASES", config.max_cases)
    config.tolerate_engine_errors = _get_bool(
        env, f"{_ENV_PREFIX}TOLERATE_ENGINE_ERRORS", config.tolerate_engine_errors
    )
    config.osascript_path = env.get(f"{_ENV_PREFIX}OSASCRIPT", config.osascript_path)


def _get_float(source: Mapping[str, str], key: str, default: Optional[float]) -> Optional[float]:
    raw = source.get(key)
    if raw is None:
        return default
    try:
        return float(str(raw).strip())
    except (TypeError, ValueError):
        return default


def _get_int(source: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
    raw = source.get(key)
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


def _get_bool(source: Mapping[str, str], key: str, default: Optional[bool]) -> Optional[bool]:
    raw = source.get(key)
    if raw is None:
        return default
    value = str(raw).strip().lower()
    if value in _BOOL_TRUE:
        return True
    if value in _BOOL_FALSE:
        return False
    return default

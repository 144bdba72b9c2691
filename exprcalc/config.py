"""Application configuration

Settings are read from the environment with the EXPRCALC prefix, e.g.
EXPRCALC_LOG_LEVEL=DEBUG or EXPRCALC_MCP_PORT=9020.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from exprcalc.exceptions import ConfigurationError

# Project-specific prefix
_ENV_PREFIX = "EXPRCALC"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_MCP_PORT = 8020
DEFAULT_WEB_PORT = 8022


@dataclass(frozen=True)
class ServerSettings:
    """Network settings shared by the MCP and web entry points."""

    host: str = DEFAULT_HOST
    mcp_port: int = DEFAULT_MCP_PORT
    web_port: int = DEFAULT_WEB_PORT


@dataclass(frozen=True)
class LogSettings:
    """Logging settings consumed by the shared session logger."""

    level: int = logging.INFO
    file: Optional[str] = None
    json_format: bool = False


@dataclass(frozen=True)
class Settings:
    server: ServerSettings
    log: LogSettings


def _env_key(name: str) -> str:
    return f"{_ENV_PREFIX}_{name}"


def _read_port(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(_env_key(name))
    if raw is None or raw.strip() == "":
        return default
    try:
        port = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{_env_key(name)} must be an integer, got '{raw}'",
            details={"variable": _env_key(name), "value": raw},
        ) from e
    if not 0 < port < 65536:
        raise ConfigurationError(
            f"{_env_key(name)} must be between 1 and 65535, got {port}",
            details={"variable": _env_key(name), "value": raw},
        )
    return port


def load_log_settings(env: Optional[Mapping[str, str]] = None) -> LogSettings:
    """Read logging settings; never raises so the logger can always start."""
    env_map = os.environ if env is None else env

    level_name = env_map.get(_env_key("LOG_LEVEL"), "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    return LogSettings(
        # Unknown level names fall back to INFO
        level=level if isinstance(level, int) else logging.INFO,
        file=env_map.get(_env_key("LOG_FILE")) or None,
        json_format=env_map.get(_env_key("LOG_JSON"), "false").lower() == "true",
    )


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from an environment mapping (os.environ by default).

    Raises:
        ConfigurationError: If a port variable is not a valid port number
    """
    env_map = os.environ if env is None else env

    server = ServerSettings(
        host=env_map.get(_env_key("HOST"), DEFAULT_HOST),
        mcp_port=_read_port(env_map, "MCP_PORT", DEFAULT_MCP_PORT),
        web_port=_read_port(env_map, "WEB_PORT", DEFAULT_WEB_PORT),
    )
    return Settings(server=server, log=load_log_settings(env_map))


_settings: Optional[Settings] = None


def get_settings(reload: bool = False) -> Settings:
    """Get settings with the EXPRCALC prefix, cached after the first call."""
    global _settings
    if _settings is None or reload:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "ServerSettings",
    "LogSettings",
    "load_log_settings",
    "load_settings",
    "get_settings",
    "reset_settings",
]

"""Runtime configuration loaded from the environment and an optional `.env` file."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# The server only ever binds to loopback.
HOST = "127.0.0.1"
DEFAULT_PORT = 8000

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when an environment value cannot be parsed."""

    def __init__(self, key: str, value: str, reason: str):
        super().__init__(f"Invalid value for {key}={value!r}: {reason}")
        self.key = key
        self.value = value


@dataclass(frozen=True)
class Config:
    """Immutable process configuration."""

    port: int = DEFAULT_PORT
    site_root: Path = field(default=_PROJECT_ROOT)
    log_level: str = "INFO"
    file_pipeline_enabled: bool = True
    host: str = HOST

    _instance = None
    _lock = threading.Lock()

    @property
    def templates_dir(self) -> Path:
        return self.site_root / "templates"

    @property
    def data_file(self) -> Path:
        return self.site_root / "dev-data" / "data.json"

    @property
    def txt_dir(self) -> Path:
        return self.site_root / "txt"

    @classmethod
    def get_instance(cls) -> "Config":
        """Return the process-wide config, loading it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls._load_from_env()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the cached config so the next call re-reads the environment."""
        with cls._lock:
            cls._instance = None

    @classmethod
    def _load_from_env(cls) -> "Config":
        env_path = _resolve_env_path()
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.debug("Loaded environment from %s", env_path)

        site_root_raw = os.getenv("SITE_ROOT", "").strip()
        site_root = Path(site_root_raw).resolve() if site_root_raw else _PROJECT_ROOT

        return cls(
            port=_parse_port(os.getenv("PORT")),
            site_root=site_root,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
            file_pipeline_enabled=_parse_bool(
                "FILE_PIPELINE_ENABLED", os.getenv("FILE_PIPELINE_ENABLED"), default=True
            ),
        )


def get_config() -> Config:
    """Shortcut for `Config.get_instance()`."""
    return Config.get_instance()


def _resolve_env_path() -> Path:
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return Path(env_file).resolve()
    return _PROJECT_ROOT / ".env"


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw.strip())
    except ValueError:
        raise ConfigError("PORT", raw, "not an integer") from None
    if not 0 <= port <= 65535:
        raise ConfigError("PORT", raw, "must be between 0 and 65535")
    return port


def _parse_bool(key: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(key, raw, "expected a boolean")

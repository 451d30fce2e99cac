"""YAML configuration loader with env var resolution and Pydantic validation.

Loads config from (priority order):
1. --config <path> CLI flag (or SPEEDY_PROXY_CONFIG_PATH)
2. ./speedy-proxy.yaml (working directory)
3. ~/.speedy-proxy/config.yaml (user home)

Environment variables override YAML: SPEEDY_PROXY_<SECTION>_<KEY>.
${VAR} references in YAML values resolve from environment at load time.
SPEEDY_USERNAME / SPEEDY_PASSWORD fill in credentials the file leaves
empty, and PORT overrides the listen port.

The result is frozen and loaded once at startup; the rest of the
process receives it explicitly.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from speedy_proxy.services.credentials import Credentials
from speedy_proxy.services.speedy_constants import (
    DEFAULT_COUNTRY_ID,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT_SECONDS,
    LABEL_CONTENT_TYPE,
    SPEEDY_BASE_URL,
)

logger = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")
_ENV_PREFIX = "SPEEDY_PROXY_"


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


class SpeedyConfig(BaseModel):
    """Upstream Speedy API settings and default credentials."""

    model_config = ConfigDict(frozen=True)

    base_url: str = SPEEDY_BASE_URL
    username: str = ""
    password: str = ""
    language: str = DEFAULT_LANGUAGE
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    default_country_id: int = DEFAULT_COUNTRY_ID
    label_content_type: str = LABEL_CONTENT_TYPE

    def default_credentials(self) -> Credentials | None:
        """Process-wide credentials, or None when not configured."""
        if not self.username and not self.password:
            return None
        return Credentials(identity=self.username, secret=self.password)


class ServerConfig(BaseModel):
    """HTTP server settings for the proxy process."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"
    # Empty list allows every origin, matching the browser worker setup.
    allowed_origins: tuple[str, ...] = ()
    max_body_bytes: int = Field(default=10 * 1024 * 1024, gt=0)


class ProxySettings(BaseModel):
    """Top-level configuration for the Speedy proxy."""

    model_config = ConfigDict(frozen=True)

    speedy: SpeedyConfig = SpeedyConfig()
    server: ServerConfig = ServerConfig()


def _find_config_file() -> Path | None:
    """Search for config file in standard locations."""
    candidates = [
        Path.cwd() / "speedy-proxy.yaml",
        Path.cwd() / "speedy-proxy.yml",
        Path.home() / ".speedy-proxy" / "config.yaml",
        Path.home() / ".speedy-proxy" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _coerce(value: str) -> Any:
    try:
        return int(value)
    except ValueError:
        pass
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply SPEEDY_PROXY_<SECTION>_<KEY> env var overrides to config data.

    For example, ``SPEEDY_PROXY_SPEEDY_TIMEOUT_SECONDS`` maps to section
    ``speedy``, field ``timeout_seconds``. Comma-separated values are
    split for ``server.allowed_origins``.
    """
    known_sections = sorted(ProxySettings.model_fields.keys(), key=len, reverse=True)
    for key, value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        suffix = key[len(_ENV_PREFIX):].lower()
        for section in known_sections:
            if suffix.startswith(section + "_"):
                field = suffix[len(section) + 1:]
                break
        else:
            continue
        if not field:
            continue
        section_data = data.setdefault(section, {})
        if not isinstance(section_data, dict):
            continue
        if field == "allowed_origins":
            section_data[field] = [o.strip() for o in value.split(",") if o.strip()]
        elif field in ("username", "password"):
            section_data[field] = value
        else:
            section_data[field] = _coerce(value)
    return data


def _apply_legacy_env(data: dict[str, Any]) -> dict[str, Any]:
    """Fill credentials and port from the plain env vars the proxy has always read."""
    speedy = data.setdefault("speedy", {})
    if isinstance(speedy, dict):
        if not speedy.get("username"):
            speedy["username"] = os.environ.get("SPEEDY_USERNAME", "").strip()
        if not speedy.get("password"):
            speedy["password"] = os.environ.get("SPEEDY_PASSWORD", "").strip()

    port = os.environ.get("PORT", "").strip()
    server = data.setdefault("server", {})
    if port and isinstance(server, dict) and "port" not in server:
        server["port"] = int(port)
    return data


def load_settings(config_path: str | None = None) -> ProxySettings:
    """Load proxy configuration from YAML file and environment.

    Args:
        config_path: Explicit path to config file. If None, checks
            SPEEDY_PROXY_CONFIG_PATH and then the standard locations.
            Without any file, settings come from the environment alone.

    Returns:
        Validated, immutable ProxySettings.

    Raises:
        FileNotFoundError: If an explicit config path does not exist.
    """
    config_path = config_path or os.environ.get("SPEEDY_PROXY_CONFIG_PATH") or None
    raw_data: dict[str, Any] = {}

    if config_path:
        path: Path | None = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()

    if path is not None:
        logger.info("Loading config from %s", path)
        with open(path) as f:
            raw_data = yaml.safe_load(f) or {}

    data = _resolve_env_vars_recursive(raw_data)
    data = _apply_env_overrides(data)
    data = _apply_legacy_env(data)

    return ProxySettings(**data)

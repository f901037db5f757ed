"""Runtime settings from .env files, an optional YAML file and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from smire.common.errors import InvalidArgumentError

TRANSPORTS = ("stdio", "sse", "streamable-http")

_ENV_MAP = {
    "data_path": "SMIRE_DATA_PATH",
    "log_level": "SMIRE_LOG_LEVEL",
    "log_json": "SMIRE_LOG_JSON",
    "server_name": "SMIRE_SERVER_NAME",
    "transport": "SMIRE_MCP_TRANSPORT",
    "host": "SMIRE_HOST",
    "port": "SMIRE_PORT",
}


@dataclass(frozen=True)
class Settings:
    data_path: str = "data/data_smire_final.json"
    log_level: str = "INFO"
    log_json: bool = True
    server_name: str = "smire-payments-analytics"
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000


def load_local_env(base_dir: Path | None = None) -> None:
    """Load KEY=VALUE pairs from .env.local/.env without overriding the environment."""
    root = base_dir or Path(".")
    for env_name in (".env.local", ".env"):
        path = root / env_name
        if not path.exists():
            continue
        for raw_line in path.read_text().splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def _coerce(name: str, value: Any) -> Any:
    if name == "port":
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"port must be an integer, got {value!r}") from exc
    if name == "log_json":
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    return str(value)


def load_settings(config_path: str | None = None, base_dir: Path | None = None) -> Settings:
    load_local_env(base_dir)

    values: dict[str, Any] = {}
    known = {f.name for f in fields(Settings)}

    if config_path:
        with open(config_path) as handle:
            raw_config = yaml.safe_load(handle) or {}
        section = raw_config.get("smire", raw_config) if isinstance(raw_config, dict) else {}
        for key, value in (section or {}).items():
            if key in known and value is not None:
                values[key] = _coerce(key, value)

    for name, env_name in _ENV_MAP.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            values[name] = _coerce(name, raw.strip())

    settings = replace(Settings(), **values)
    if settings.transport not in TRANSPORTS:
        raise InvalidArgumentError(
            f"transport must be one of {', '.join(TRANSPORTS)}, got {settings.transport!r}"
        )
    return settings

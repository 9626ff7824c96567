from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from prthreads_core.models import PullRequestRef

DEFAULT_CONFIG: dict = {
    "host": "dev.azure.com",
    "auth_type": "basic",  # "basic" for PATs, "bearer" for pipeline / Entra ID tokens
    "api_version": "7.1",
    "timeout": None,  # None = wait as long as requests does by default
    "organization": None,
    "project": None,
    "repository": None,
    "status_genre": "copilot",
    "status_context": "code review",
}

AUTH_TYPES = ("basic", "bearer")


@dataclass(frozen=True)
class ConnectionConfig:
    """Everything the client needs to authenticate against one Azure DevOps host."""

    token: str
    auth_type: str = "basic"
    host: str = "dev.azure.com"
    api_version: str = "7.1"
    timeout: float | None = None


def load_config(config_path: str = ".prthreads.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prthreads.yml in the current directory
      3. CLI argument overrides (which already include ADO_* environment values)
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config


def connection_from_config(config: dict) -> ConnectionConfig:
    token = config.get("token")
    if not token:
        raise ValueError("No Azure DevOps token configured.")

    auth_type = str(config.get("auth_type") or "basic").lower()
    if auth_type not in AUTH_TYPES:
        raise ValueError(f"Unknown auth_type: {auth_type!r}. Choose 'basic' or 'bearer'.")

    timeout = config.get("timeout")
    return ConnectionConfig(
        token=token,
        auth_type=auth_type,
        host=config.get("host") or DEFAULT_CONFIG["host"],
        api_version=str(config.get("api_version") or DEFAULT_CONFIG["api_version"]),
        timeout=float(timeout) if timeout is not None else None,
    )


def pull_request_from_config(config: dict, pull_request_id: int | None) -> PullRequestRef:
    """Build a PullRequestRef, naming every missing piece in one error."""
    missing = [key for key in ("organization", "project", "repository") if not config.get(key)]
    if pull_request_id is None:
        missing.append("pr_id")
    if missing:
        raise ValueError(f"Missing required setting(s): {', '.join(missing)}")

    return PullRequestRef(
        organization=config["organization"],
        project=config["project"],
        repository=config["repository"],
        pull_request_id=pull_request_id,
    )

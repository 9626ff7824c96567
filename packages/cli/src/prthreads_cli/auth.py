"""Azure DevOps token resolution with pipeline and Azure CLI fallbacks.

Resolution order (stops at first success):
  1. ADO_TOKEN environment variable (explicit PAT or OAuth token)
  2. SYSTEM_ACCESSTOKEN (the job token Azure Pipelines injects when mapped)
  3. `az account get-access-token` for the Azure DevOps resource
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

# Well-known application id of Azure DevOps in Entra ID.
AZURE_DEVOPS_RESOURCE = "499b84ac-1321-427f-aa17-267ca6975798"


def resolve_token() -> tuple[str, str] | None:
    """Return ``(token, auth_type)`` or None if no source is available.

    Never raises — callers should check for None and emit a UsageError.
    """
    token = os.environ.get("ADO_TOKEN")
    if token:
        return token, os.environ.get("ADO_AUTH_TYPE", "basic").lower()

    token = os.environ.get("SYSTEM_ACCESSTOKEN")
    if token:
        logger.debug("Using the Azure Pipelines job token.")
        return token, "bearer"

    try:
        result = subprocess.run(
            [
                "az",
                "account",
                "get-access-token",
                "--resource",
                AZURE_DEVOPS_RESOURCE,
                "--query",
                "accessToken",
                "-o",
                "tsv",
            ],
            capture_output=True,
            text=True,
            timeout=15,
        )
        if result.returncode == 0:
            az_token = result.stdout.strip()
            if az_token:
                logger.debug("Resolved Azure DevOps token via az CLI session.")
                return az_token, "bearer"
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # az is not installed or timed out.
        pass

    return None

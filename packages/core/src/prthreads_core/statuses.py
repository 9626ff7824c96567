"""Pull request status checks (the pass/fail markers branch policies gate on)."""

from __future__ import annotations

import logging

from prthreads_core.ado.client import AzureDevOpsClient
from prthreads_core.errors import AzureDevOpsError, NotFoundError
from prthreads_core.models import Created, Failed, PullRequestRef, StatusCheckOutcome, StatusCheckState

logger = logging.getLogger(__name__)

DEFAULT_GENRE = "copilot"
DEFAULT_CONTEXT = "code review"


def build_status_payload(
    state: str,
    description: str,
    target_url: str | None = None,
    genre: str = DEFAULT_GENRE,
    context: str = DEFAULT_CONTEXT,
    iteration_id: int | None = None,
) -> dict:
    payload = {
        "state": state,
        "description": description,
        "context": {"name": context, "genre": genre},
    }
    if target_url:
        payload["targetUrl"] = target_url
    if iteration_id:
        payload["iterationId"] = iteration_id
    return payload


class StatusCheckSetter:
    """Posts a status check; the server replaces any earlier status with the same genre/context."""

    def __init__(self, client: AzureDevOpsClient):
        self._client = client

    def set_status(
        self,
        target: PullRequestRef,
        state: str,
        description: str,
        target_url: str | None = None,
        genre: str = DEFAULT_GENRE,
        context: str = DEFAULT_CONTEXT,
        iteration_id: int | None = None,
    ) -> StatusCheckOutcome:
        # Raises ValueError for anything outside the API's state set.
        state = StatusCheckState(state).value
        label = f"{genre}/{context}"

        if not self._client.get_pull_request(target):
            raise NotFoundError(f"Pull request {target.display} not found.")

        payload = build_status_payload(state, description, target_url, genre, context, iteration_id)
        try:
            created = self._client.create_status(target, payload) or {}
        except AzureDevOpsError as e:
            logger.debug("Status %s on %s failed: %s", label, target.display, e)
            return Failed(reason=str(e))

        return Created(status_id=created.get("id", 0), state=state, context_label=label)

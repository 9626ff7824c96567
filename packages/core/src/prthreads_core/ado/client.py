"""Thin wrapper around the Azure DevOps Git pull request REST API.

Only the sub-resources prthreads needs are exposed. Every method returns the
decoded JSON body (or None for an empty body) and raises an AzureDevOpsError
subclass on any non-2xx response, so services never look at status codes.
"""

from __future__ import annotations

import base64
import logging
from urllib.parse import quote

import requests

from prthreads_core.config import ConnectionConfig
from prthreads_core.errors import (
    AuthenticationError,
    AzureDevOpsError,
    BadRequestError,
    NotFoundError,
    TransportError,
)
from prthreads_core.models import PullRequestRef

logger = logging.getLogger(__name__)

USER_AGENT = "prthreads"


def build_auth_header(token: str, auth_type: str = "basic") -> str:
    """Return the Authorization header value for a PAT (basic) or an OAuth token (bearer)."""
    if auth_type == "bearer":
        return f"Bearer {token}"
    encoded = base64.b64encode(f":{token}".encode()).decode("ascii")
    return f"Basic {encoded}"


class AzureDevOpsClient:
    def __init__(self, connection: ConnectionConfig, session: requests.Session | None = None):
        self._connection = connection
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": build_auth_header(connection.token, connection.auth_type),
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            }
        )

    # ------------------------------------------------------------------ #
    # Pull requests                                                        #
    # ------------------------------------------------------------------ #

    def get_pull_request(self, pr: PullRequestRef) -> dict | None:
        return self._request("GET", self.pull_request_url(pr))

    # ------------------------------------------------------------------ #
    # Threads                                                              #
    # ------------------------------------------------------------------ #

    def list_threads(self, pr: PullRequestRef) -> list[dict]:
        data = self._request("GET", self.pull_request_url(pr, "threads")) or {}
        return data.get("value", [])

    def get_thread(self, pr: PullRequestRef, thread_id: int) -> dict | None:
        return self._request("GET", self.pull_request_url(pr, f"threads/{thread_id}"))

    def create_thread(self, pr: PullRequestRef, payload: dict) -> dict | None:
        return self._request("POST", self.pull_request_url(pr, "threads"), payload)

    def update_thread(self, pr: PullRequestRef, thread_id: int, payload: dict) -> dict | None:
        return self._request("PATCH", self.pull_request_url(pr, f"threads/{thread_id}"), payload)

    def add_comment(self, pr: PullRequestRef, thread_id: int, payload: dict) -> dict | None:
        return self._request("POST", self.pull_request_url(pr, f"threads/{thread_id}/comments"), payload)

    # ------------------------------------------------------------------ #
    # Statuses                                                             #
    # ------------------------------------------------------------------ #

    def create_status(self, pr: PullRequestRef, payload: dict) -> dict | None:
        return self._request("POST", self.pull_request_url(pr, "statuses"), payload)

    # ------------------------------------------------------------------ #
    # Internals                                                            #
    # ------------------------------------------------------------------ #

    def pull_request_url(self, pr: PullRequestRef, suffix: str = "") -> str:
        url = (
            f"https://{self._connection.host}/{quote(pr.organization)}/{quote(pr.project)}"
            f"/_apis/git/repositories/{quote(pr.repository)}/pullrequests/{pr.pull_request_id}"
        )
        if suffix:
            url += f"/{suffix}"
        return url

    def _request(self, method: str, url: str, payload: dict | None = None) -> dict | None:
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                params={"api-version": self._connection.api_version},
                json=payload,
                timeout=self._connection.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if response.status_code >= 400:
            raise _error_for(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise AzureDevOpsError(f"Invalid JSON in response from {url}", response.status_code) from e


def _error_for(response: requests.Response) -> AzureDevOpsError:
    """Translate an error response into the matching exception."""
    status = response.status_code
    message = _server_message(response)

    if status == 401:
        return AuthenticationError(
            "Authentication failed (HTTP 401). Check the token and auth type.",
            status,
        )
    if status == 404:
        return NotFoundError(f"Resource not found (HTTP 404): {message}", status)
    if status == 400:
        return BadRequestError(message, status)
    return AzureDevOpsError(f"HTTP {status}: {message}", status)


def _server_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason or ""
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return response.text.strip()

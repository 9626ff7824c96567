"""Exceptions raised by the Azure DevOps client and the services built on it.

The CLI catches AzureDevOpsError and reports it as a non-zero exit; every
more specific failure derives from it so callers can branch on HTTP meaning
without inspecting status codes.
"""

from __future__ import annotations


class AzureDevOpsError(Exception):
    """Any failed call to the Azure DevOps REST API.

    Used directly for unexpected HTTP statuses and malformed responses.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(AzureDevOpsError):
    """The request never produced an HTTP response (DNS, TLS, connection reset)."""


class AuthenticationError(AzureDevOpsError):
    """HTTP 401 — the token is missing, expired, or lacks the required scope."""


class NotFoundError(AzureDevOpsError):
    """HTTP 404, or a lookup that came back empty."""


class BadRequestError(AzureDevOpsError):
    """HTTP 400 — the server rejected the payload; message is the server's text."""

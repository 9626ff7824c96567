"""Tests for StatusCheckSetter."""

from unittest.mock import MagicMock

import pytest

from prthreads_core.errors import AuthenticationError, NotFoundError
from prthreads_core.models import Created, Failed, PullRequestRef
from prthreads_core.statuses import StatusCheckSetter, build_status_payload

PR = PullRequestRef("org", "proj", "repo", 1)


def make_client(created=None):
    client = MagicMock()
    client.get_pull_request.return_value = {"pullRequestId": 1}
    client.create_status.return_value = created if created is not None else {"id": 17}
    return client


def test_payload_defaults():
    assert build_status_payload("failed", "x") == {
        "state": "failed",
        "description": "x",
        "context": {"name": "code review", "genre": "copilot"},
    }


def test_payload_optional_fields():
    payload = build_status_payload("succeeded", "ok", target_url="https://ci/1", iteration_id=3)
    assert payload["targetUrl"] == "https://ci/1"
    assert payload["iterationId"] == 3


class TestSetStatus:
    def test_failed_state_posts_default_context(self):
        client = make_client()

        outcome = StatusCheckSetter(client).set_status(PR, "failed", "x")

        assert outcome == Created(status_id=17, state="failed", context_label="copilot/code review")
        payload = client.create_status.call_args.args[1]
        assert payload["state"] == "failed"
        assert payload["context"] == {"name": "code review", "genre": "copilot"}
        assert "targetUrl" not in payload

    def test_custom_genre_and_context(self):
        client = make_client()

        outcome = StatusCheckSetter(client).set_status(PR, "pending", "running", genre="ci", context="lint")

        assert outcome.context_label == "ci/lint"
        assert client.create_status.call_args.args[1]["context"] == {"name": "lint", "genre": "ci"}

    def test_unknown_state_rejected_before_any_call(self):
        client = make_client()

        with pytest.raises(ValueError):
            StatusCheckSetter(client).set_status(PR, "green", "x")
        client.get_pull_request.assert_not_called()

    def test_missing_pull_request_raises(self):
        client = make_client()
        client.get_pull_request.return_value = None

        with pytest.raises(NotFoundError):
            StatusCheckSetter(client).set_status(PR, "failed", "x")
        client.create_status.assert_not_called()

    def test_post_error_returns_failed(self):
        client = make_client()
        client.create_status.side_effect = AuthenticationError("Authentication failed (HTTP 401).", 401)

        outcome = StatusCheckSetter(client).set_status(PR, "error", "x")

        assert isinstance(outcome, Failed)
        assert "401" in outcome.reason

"""Tests for the Azure DevOps HTTP client, with HTTP stubbed by `responses`."""

from __future__ import annotations

import base64
import json

import pytest
import requests
import responses

from prthreads_core.ado.client import AzureDevOpsClient, build_auth_header
from prthreads_core.config import ConnectionConfig
from prthreads_core.errors import (
    AuthenticationError,
    AzureDevOpsError,
    BadRequestError,
    NotFoundError,
    TransportError,
)
from prthreads_core.models import PullRequestRef

PR = PullRequestRef("contoso", "Web Site", "frontend", 7)
PR_URL = "https://dev.azure.com/contoso/Web%20Site/_apis/git/repositories/frontend/pullrequests/7"


def _client(auth_type="basic"):
    return AzureDevOpsClient(ConnectionConfig(token="secret", auth_type=auth_type))


class TestAuthHeader:
    def test_basic_encodes_empty_user_and_token(self):
        header = build_auth_header("secret", "basic")
        assert header == "Basic " + base64.b64encode(b":secret").decode()

    def test_bearer_passes_token_through(self):
        assert build_auth_header("secret", "bearer") == "Bearer secret"


class TestUrls:
    def test_pull_request_url_quotes_segments(self):
        assert _client().pull_request_url(PR) == PR_URL

    def test_suffix_appended(self):
        assert _client().pull_request_url(PR, "threads/3") == PR_URL + "/threads/3"

    def test_custom_host(self):
        client = AzureDevOpsClient(ConnectionConfig(token="t", host="ado.example.com"))
        assert client.pull_request_url(PR).startswith("https://ado.example.com/contoso/")


class TestRequests:
    @responses.activate
    def test_get_sends_api_version_and_auth(self):
        responses.add(responses.GET, PR_URL, json={"pullRequestId": 7})

        assert _client("bearer").get_pull_request(PR) == {"pullRequestId": 7}

        call = responses.calls[0]
        assert "api-version=7.1" in call.request.url
        assert call.request.headers["Authorization"] == "Bearer secret"

    @responses.activate
    def test_post_sends_json_body(self):
        responses.add(responses.POST, PR_URL + "/threads", json={"id": 11}, status=200)

        result = _client().create_thread(PR, {"status": 1})

        assert result == {"id": 11}
        assert json.loads(responses.calls[0].request.body) == {"status": 1}

    @responses.activate
    def test_patch_thread(self):
        responses.add(responses.PATCH, PR_URL + "/threads/5", json={"id": 5, "status": "fixed"})
        assert _client().update_thread(PR, 5, {"status": 2})["status"] == "fixed"

    @responses.activate
    def test_add_comment_endpoint(self):
        responses.add(responses.POST, PR_URL + "/threads/5/comments", json={"id": 3})
        assert _client().add_comment(PR, 5, {"content": "x"}) == {"id": 3}

    @responses.activate
    def test_create_status_endpoint(self):
        responses.add(responses.POST, PR_URL + "/statuses", json={"id": 99})
        assert _client().create_status(PR, {"state": "pending"}) == {"id": 99}

    @responses.activate
    def test_list_threads_unwraps_value(self):
        responses.add(responses.GET, PR_URL + "/threads", json={"value": [{"id": 1}, {"id": 2}], "count": 2})
        assert [t["id"] for t in _client().list_threads(PR)] == [1, 2]

    @responses.activate
    def test_empty_body_returns_none(self):
        responses.add(responses.POST, PR_URL + "/threads", body="", status=200)
        assert _client().create_thread(PR, {}) is None


class TestErrorMapping:
    @responses.activate
    def test_401_raises_authentication_error(self):
        responses.add(responses.GET, PR_URL, status=401, body="")
        with pytest.raises(AuthenticationError) as exc:
            _client().get_pull_request(PR)
        assert exc.value.status_code == 401

    @responses.activate
    def test_404_raises_not_found(self):
        responses.add(responses.GET, PR_URL + "/threads/9", status=404, json={"message": "Thread 9 missing"})
        with pytest.raises(NotFoundError, match="Thread 9 missing"):
            _client().get_thread(PR, 9)

    @responses.activate
    def test_400_surfaces_server_message_verbatim(self):
        responses.add(
            responses.POST,
            PR_URL + "/threads",
            status=400,
            json={"message": "The file path is not part of the iteration."},
        )
        with pytest.raises(BadRequestError) as exc:
            _client().create_thread(PR, {})
        assert exc.value.message == "The file path is not part of the iteration."

    @responses.activate
    def test_other_status_raises_base_error(self):
        responses.add(responses.POST, PR_URL + "/statuses", status=500, body="boom")
        with pytest.raises(AzureDevOpsError, match="HTTP 500: boom") as exc:
            _client().create_status(PR, {})
        assert type(exc.value) is AzureDevOpsError

    @responses.activate
    def test_connection_error_raises_transport_error(self):
        responses.add(responses.GET, PR_URL, body=requests.ConnectionError("refused"))
        with pytest.raises(TransportError):
            _client().get_pull_request(PR)

    @responses.activate
    def test_invalid_json_raises(self):
        responses.add(responses.GET, PR_URL, body="<html>sign in</html>", status=200)
        with pytest.raises(AzureDevOpsError, match="Invalid JSON"):
            _client().get_pull_request(PR)

"""Posting review comments, with a plain-comment fallback for inline anchors.

An inline thread can be rejected for reasons the caller cannot predict: the
file is not part of the iteration, the line range falls outside the diff, or
the iteration id is stale. Rather than lose the comment, a rejected inline
attempt is retried once as a general thread whose body names the location:

    attempt(inline payload) ──ok──▶ CreatedInline
            │ failed
            ▼
    attempt(general payload + location suffix) ──ok──▶ CreatedGeneral
            │ failed
            ▼
          Failed

Non-inline submissions have no fallback; their errors propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from prthreads_core.ado.client import AzureDevOpsClient
from prthreads_core.errors import AzureDevOpsError, NotFoundError
from prthreads_core.models import (
    CommentRequest,
    CreatedGeneral,
    CreatedInline,
    Failed,
    PostOutcome,
    PullRequestRef,
    Replied,
    ThreadStatus,
    format_line_range,
    normalize_path,
)

logger = logging.getLogger(__name__)

COMMENT_TYPE_TEXT = 1


@dataclass
class AttemptResult:
    """Outcome of a single thread submission: either the created thread or the error."""

    thread: dict | None = None
    error: AzureDevOpsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.thread)

    @property
    def reason(self) -> str:
        if self.error is not None:
            return str(self.error)
        return "the server returned an empty response"


def comment_payload(body: str) -> dict:
    return {"parentCommentId": 0, "content": body, "commentType": COMMENT_TYPE_TEXT}


def build_thread_payload(request: CommentRequest, anchored: bool = True) -> dict:
    """Build the body for POST /threads.

    With ``anchored=False`` the file/line context is left out even when the
    request carries one.
    """
    payload = {
        "comments": [comment_payload(request.body)],
        "status": ThreadStatus.wire(request.initial_status),
    }
    if not (anchored and request.is_inline):
        return payload

    payload["threadContext"] = {
        "filePath": normalize_path(request.file_path),
        "rightFileStart": {"line": request.start_line, "offset": 1},
        "rightFileEnd": {"line": request.effective_end_line, "offset": 1},
    }
    if request.iteration_id:
        payload["pullRequestThreadContext"] = {
            "iterationContext": {
                "firstComparingIteration": request.iteration_id,
                "secondComparingIteration": request.iteration_id,
            }
        }
    return payload


def location_suffix(file_path: str, start_line: int, end_line: int | None = None) -> str:
    """Text appended to a comment that could not be anchored inline."""
    end = end_line if end_line else start_line
    label = "Line" if end == start_line else "Lines"
    return f"\n\n**File:** `{normalize_path(file_path)}`\n**{label} {format_line_range(start_line, end)}**"


def build_fallback_payload(request: CommentRequest) -> dict:
    payload = build_thread_payload(request, anchored=False)
    body = request.body + location_suffix(request.file_path, request.start_line, request.end_line)
    payload["comments"] = [comment_payload(body)]
    return payload


def _first_comment_id(thread: dict) -> int:
    comments = thread.get("comments") or []
    return comments[0].get("id", 0) if comments else 0


class CommentPoster:
    """Posts replies and new threads on a pull request."""

    def __init__(self, client: AzureDevOpsClient):
        self._client = client

    def post(self, request: CommentRequest, target: PullRequestRef) -> PostOutcome:
        if request.thread_id:
            return self._reply(request, target)

        if not self._client.get_pull_request(target):
            raise NotFoundError(f"Pull request {target.display} not found.")

        if not request.is_inline:
            result = self._attempt(target, build_thread_payload(request))
            if result.error is not None:
                raise result.error
            if not result.ok:
                raise AzureDevOpsError(f"Could not create thread on {target.display}: {result.reason}")
            return CreatedGeneral(thread_id=result.thread.get("id", 0), comment_id=_first_comment_id(result.thread))

        return self._post_inline_with_fallback(request, target)

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _reply(self, request: CommentRequest, target: PullRequestRef) -> Replied:
        thread = self._client.get_thread(target, request.thread_id)
        if not thread:
            raise NotFoundError(f"Thread {request.thread_id} not found on {target.display}.")

        comment = self._client.add_comment(target, request.thread_id, comment_payload(request.body)) or {}
        return Replied(thread_id=request.thread_id, comment_id=comment.get("id", 0))

    def _attempt(self, target: PullRequestRef, payload: dict) -> AttemptResult:
        try:
            return AttemptResult(thread=self._client.create_thread(target, payload))
        except AzureDevOpsError as e:
            return AttemptResult(error=e)

    def _post_inline_with_fallback(self, request: CommentRequest, target: PullRequestRef) -> PostOutcome:
        path = normalize_path(request.file_path)
        line_range = format_line_range(request.start_line, request.effective_end_line)

        first = self._attempt(target, build_thread_payload(request))
        if first.ok:
            return CreatedInline(
                thread_id=first.thread.get("id", 0),
                comment_id=_first_comment_id(first.thread),
                path=path,
                line_range=line_range,
            )

        logger.warning(
            "Inline comment on %s:%s was not accepted (%s); posting as a general comment.",
            path,
            line_range,
            first.reason,
        )
        second = self._attempt(target, build_fallback_payload(request))
        if second.ok:
            return CreatedGeneral(thread_id=second.thread.get("id", 0), comment_id=_first_comment_id(second.thread))

        logger.error("Fallback comment failed as well: %s", second.reason)
        return Failed(reason=f"inline attempt: {first.reason}; fallback attempt: {second.reason}")

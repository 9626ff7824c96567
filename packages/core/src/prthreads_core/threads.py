"""Reading review threads and moving them between statuses."""

from __future__ import annotations

import logging

from prthreads_core.ado.client import AzureDevOpsClient
from prthreads_core.errors import AzureDevOpsError, NotFoundError
from prthreads_core.models import (
    Failed,
    PullRequestRef,
    StatusUpdateOutcome,
    ThreadStatus,
    ThreadSummary,
    Unchanged,
    Updated,
    decode_status,
)

logger = logging.getLogger(__name__)


class ThreadStatusUpdater:
    def __init__(self, client: AzureDevOpsClient):
        self._client = client

    def set_status(self, thread_id: int, new_status: str, target: PullRequestRef) -> StatusUpdateOutcome:
        """Move a thread to ``new_status`` unless it is already there.

        The comparison is against the display name (``"Fixed"``, ``"By Design"``),
        case-sensitive. An unchanged thread costs one GET and no write.
        """
        thread = self._client.get_thread(target, thread_id)
        if not thread:
            raise NotFoundError(f"Thread {thread_id} not found on {target.display}.")

        current = decode_status(thread.get("status"))
        if current == new_status:
            logger.debug("Thread %d already %s; skipping update.", thread_id, current)
            return Unchanged(thread_id=thread_id, status=current)

        try:
            self._client.update_thread(target, thread_id, {"status": ThreadStatus.wire(new_status)})
        except AzureDevOpsError as e:
            return Failed(reason=str(e))
        return Updated(thread_id=thread_id, previous=current, status=new_status)


def _summarize(thread: dict) -> ThreadSummary:
    context = thread.get("threadContext") or {}
    start = (context.get("rightFileStart") or context.get("leftFileStart") or {}).get("line")
    end = (context.get("rightFileEnd") or context.get("leftFileEnd") or {}).get("line")
    comments = [c for c in thread.get("comments") or [] if not c.get("isDeleted")]
    first = comments[0].get("content", "") if comments else ""
    authors = []
    for c in comments:
        name = (c.get("author") or {}).get("displayName")
        if name and name not in authors:
            authors.append(name)
    return ThreadSummary(
        thread_id=thread.get("id", 0),
        status=decode_status(thread.get("status")),
        file_path=context.get("filePath"),
        start_line=start,
        end_line=end,
        comment_count=len(comments),
        first_comment=first or "",
        authors=authors,
    )


def list_threads(client: AzureDevOpsClient, target: PullRequestRef) -> list[ThreadSummary]:
    """Return every non-deleted thread on the pull request, oldest first."""
    threads = [t for t in client.list_threads(target) if not t.get("isDeleted")]
    return [_summarize(t) for t in threads]

"""thread-status command — move a review thread to a new status."""

from __future__ import annotations

import click
from rich.console import Console

from prthreads_cli.options import connect, fail, pull_request_options
from prthreads_core.errors import AzureDevOpsError
from prthreads_core.models import Failed, ThreadStatus, Unchanged, Updated
from prthreads_core.threads import ThreadStatusUpdater

console = Console()


@click.command("thread-status")
@pull_request_options
@click.option("--thread-id", type=click.IntRange(min=1), required=True, help="Thread to update.")
@click.option(
    "--status",
    "new_status",
    type=click.Choice(ThreadStatus.names()),
    required=True,
    help="Status to move the thread to.",
)
@click.pass_context
def thread_status_cmd(
    ctx,
    organization: str | None,
    project: str | None,
    repository: str | None,
    pr_id: int | None,
    token: str | None,
    auth_type: str | None,
    thread_id: int,
    new_status: str,
):
    """Set the status of a pull request review thread.

    Does nothing (and makes no write call) when the thread already has the
    requested status.
    """
    client, target = connect(ctx, organization, project, repository, pr_id, token, auth_type)

    try:
        outcome = ThreadStatusUpdater(client).set_status(thread_id, new_status, target)
    except AzureDevOpsError as e:
        fail(ctx, e.message)
        return

    if isinstance(outcome, Unchanged):
        console.print(f"[yellow]Thread {outcome.thread_id} is already {outcome.status}. Nothing to do.[/yellow]")
    elif isinstance(outcome, Updated):
        console.print(f"[green]Thread {outcome.thread_id} updated:[/green] {outcome.previous} → {outcome.status}")
    elif isinstance(outcome, Failed):
        fail(ctx, f"Could not update thread {thread_id}: {outcome.reason}")

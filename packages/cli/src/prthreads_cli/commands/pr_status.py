"""pr-status command — set a status check on a pull request."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from prthreads_cli.options import connect, fail, pull_request_options
from prthreads_core.errors import AzureDevOpsError
from prthreads_core.models import Created, Failed, StatusCheckState
from prthreads_core.statuses import StatusCheckSetter

console = Console()

_STATE_STYLE = {
    "succeeded": "green",
    "failed": "red",
    "error": "red",
    "pending": "yellow",
}


@click.command("pr-status")
@pull_request_options
@click.option(
    "--state",
    type=click.Choice([s.value for s in StatusCheckState]),
    required=True,
    help="Status check state.",
)
@click.option("--description", "-d", required=True, help="Short text shown next to the status.")
@click.option("--target-url", default=None, help="Link attached to the status (e.g. a build log).")
@click.option("--genre", default=None, help="Status genre. Default from config: copilot.")
@click.option("--context", "context_name", default=None, help="Status name. Default from config: code review.")
@click.option(
    "--iteration-id",
    envvar="ADO_ITERATION_ID",
    type=int,
    default=None,
    help="Attach the status to this PR iteration.",
)
@click.pass_context
def pr_status_cmd(
    ctx,
    organization: str | None,
    project: str | None,
    repository: str | None,
    pr_id: int | None,
    token: str | None,
    auth_type: str | None,
    state: str,
    description: str,
    target_url: str | None,
    genre: str | None,
    context_name: str | None,
    iteration_id: int | None,
):
    """Set a status check on a pull request.

    Statuses are keyed by genre/context; posting again with the same pair
    replaces the previous status on the pull request.
    """
    client, target = connect(ctx, organization, project, repository, pr_id, token, auth_type)

    config = (ctx.find_root().obj or {}).get("config") or {}
    genre = genre or config.get("status_genre") or "copilot"
    context_name = context_name or config.get("status_context") or "code review"

    try:
        outcome = StatusCheckSetter(client).set_status(
            target,
            state,
            description,
            target_url=target_url,
            genre=genre,
            context=context_name,
            iteration_id=iteration_id,
        )
    except AzureDevOpsError as e:
        fail(ctx, e.message)
        return

    if isinstance(outcome, Created):
        style = _STATE_STYLE.get(outcome.state, "white")
        console.print(
            f"Status [bold]{escape(outcome.context_label)}[/bold] set to [{style}]{outcome.state}[/{style}] "
            f"on {target.display} (id {outcome.status_id})"
        )
    elif isinstance(outcome, Failed):
        fail(ctx, f"Could not set status: {outcome.reason}")

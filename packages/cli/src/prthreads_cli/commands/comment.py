"""comment command — reply to a thread or start a new (optionally inline) one."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from prthreads_cli.options import connect, fail, pull_request_options
from prthreads_core.comments import CommentPoster
from prthreads_core.errors import AzureDevOpsError
from prthreads_core.models import (
    CommentRequest,
    CreatedGeneral,
    CreatedInline,
    Failed,
    Replied,
    ThreadStatus,
)

console = Console()


@click.command("comment")
@pull_request_options
@click.option("--body", "-b", required=True, help="Comment text (markdown supported).")
@click.option("--thread-id", type=int, default=None, help="Reply to this existing thread instead of starting one.")
@click.option("--file-path", default=None, help="Anchor the new thread to this file.")
@click.option("--start-line", type=int, default=None, help="First line of the anchor (required with --file-path).")
@click.option("--end-line", type=int, default=None, help="Last line of the anchor. Defaults to --start-line.")
@click.option(
    "--iteration-id",
    envvar="ADO_ITERATION_ID",
    type=int,
    default=None,
    help="Pin the anchor to this PR iteration.",
)
@click.option(
    "--status",
    "initial_status",
    type=click.Choice(ThreadStatus.names()),
    default=ThreadStatus.ACTIVE.value,
    show_default=True,
    help="Status of a newly created thread.",
)
@click.pass_context
def comment_cmd(
    ctx,
    organization: str | None,
    project: str | None,
    repository: str | None,
    pr_id: int | None,
    token: str | None,
    auth_type: str | None,
    body: str,
    thread_id: int | None,
    file_path: str | None,
    start_line: int | None,
    end_line: int | None,
    iteration_id: int | None,
    initial_status: str,
):
    """Post a comment on a pull request.

    With --thread-id the comment is a reply. With --file-path/--start-line a
    new inline thread is attempted; if Azure DevOps rejects the anchor, the
    comment is posted as a general thread naming the file and line instead.

    \b
    Environment variables:
      ADO_TOKEN, ADO_AUTH_TYPE, ADO_ORG, ADO_PROJECT,
      ADO_REPO, ADO_PR_ID, ADO_ITERATION_ID
    """
    try:
        request = CommentRequest(
            body=body,
            thread_id=thread_id,
            file_path=file_path,
            start_line=start_line,
            end_line=end_line,
            iteration_id=iteration_id,
            initial_status=initial_status,
        )
    except ValueError as e:
        raise click.UsageError(str(e))

    client, target = connect(ctx, organization, project, repository, pr_id, token, auth_type)

    if request.thread_id:
        console.print(f"Replying to thread [bold]{request.thread_id}[/bold] on {target.display}")
    elif request.is_inline:
        console.print(f"Posting inline comment on {target.display}")
    else:
        console.print(f"Posting comment on {target.display}")

    try:
        outcome = CommentPoster(client).post(request, target)
    except AzureDevOpsError as e:
        fail(ctx, e.message)
        return

    if isinstance(outcome, Replied):
        console.print(f"[green]Reply posted.[/green] Thread {outcome.thread_id}, comment {outcome.comment_id}")
    elif isinstance(outcome, CreatedInline):
        console.print(f"[green]Inline thread {outcome.thread_id} created.[/green]")
        console.print(f"  File: {escape(outcome.path)}  Line(s): {outcome.line_range}")
    elif isinstance(outcome, CreatedGeneral):
        if request.is_inline:
            console.print("[yellow]Inline anchor rejected; posted as a general comment.[/yellow]")
        console.print(f"[green]Thread {outcome.thread_id} created.[/green] Comment {outcome.comment_id}")
    elif isinstance(outcome, Failed):
        fail(ctx, f"Could not post comment: {outcome.reason}")

"""threads command — list the review threads on a pull request."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from prthreads_cli.options import connect, fail, pull_request_options
from prthreads_core.errors import AzureDevOpsError
from prthreads_core.models import format_line_range
from prthreads_core.threads import list_threads

console = Console()

_STATUS_STYLE = {
    "Active": "yellow",
    "Pending": "yellow",
    "Fixed": "green",
    "Closed": "dim",
    "WontFix": "dim",
    "By Design": "dim",
}


@click.command("threads")
@pull_request_options
@click.option("--status", "status_filter", default=None, help="Only show threads with this status (e.g. Active).")
@click.pass_context
def threads_cmd(
    ctx,
    organization: str | None,
    project: str | None,
    repository: str | None,
    pr_id: int | None,
    token: str | None,
    auth_type: str | None,
    status_filter: str | None,
):
    """Show the review threads on a pull request."""
    client, target = connect(ctx, organization, project, repository, pr_id, token, auth_type)

    try:
        threads = list_threads(client, target)
    except AzureDevOpsError as e:
        fail(ctx, e.message)
        return

    if status_filter:
        threads = [t for t in threads if t.status == status_filter]
    # System threads (votes, pushes) carry no comments worth listing.
    threads = [t for t in threads if t.comment_count]

    if not threads:
        console.print("[yellow]No review threads found.[/yellow]")
        return

    table = Table(title=f"Threads — {target.display}", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold", justify="right")
    table.add_column("Status", width=10)
    table.add_column("Location", max_width=40)
    table.add_column("Comments", justify="right")
    table.add_column("First comment", max_width=50)

    for t in threads:
        style = _STATUS_STYLE.get(t.status, "white")
        location = ""
        if t.file_path:
            location = t.file_path
            if t.start_line:
                location += f":{format_line_range(t.start_line, t.end_line or t.start_line)}"
        first_line = t.first_comment.splitlines()[0] if t.first_comment else ""
        table.add_row(
            str(t.thread_id),
            f"[{style}]{escape(t.status)}[/{style}]",
            escape(location),
            str(t.comment_count),
            escape(first_line[:50]),
        )

    console.print(table)

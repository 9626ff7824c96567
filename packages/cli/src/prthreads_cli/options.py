"""Options and connection wiring shared by every pull request command.

Each option can also be supplied through a fixed ADO_* environment variable,
which is how CI pipelines invoke prthreads without putting credentials on
the command line. The environment is read here, once, and turned into an
explicit ConnectionConfig + PullRequestRef.
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from prthreads_core.ado.client import AzureDevOpsClient
from prthreads_core.config import AUTH_TYPES, connection_from_config, load_config, pull_request_from_config
from prthreads_core.models import PullRequestRef

err_console = Console(stderr=True)

_PR_OPTIONS = [
    click.option("--organization", "--org", envvar="ADO_ORG", default=None, help="Azure DevOps organization."),
    click.option("--project", envvar="ADO_PROJECT", default=None, help="Project name."),
    click.option("--repository", "--repo", envvar="ADO_REPO", default=None, help="Repository name or id."),
    click.option(
        "--pr-id",
        "pr_id",
        envvar="ADO_PR_ID",
        type=click.IntRange(min=1),
        default=None,
        help="Pull request id.",
    ),
    click.option(
        "--token",
        envvar="ADO_TOKEN",
        default=None,
        help="Personal access token or OAuth token. Prefer the ADO_TOKEN environment variable.",
    ),
    click.option(
        "--auth-type",
        envvar="ADO_AUTH_TYPE",
        type=click.Choice(AUTH_TYPES, case_sensitive=False),
        default=None,
        help="How the token is sent: basic (PAT) or bearer (OAuth). Default: basic.",
    ),
]


def pull_request_options(f):
    """Attach the organization/project/repository/PR/credential options to a command."""
    for option in reversed(_PR_OPTIONS):
        f = option(f)
    return f


def connect(
    ctx: click.Context,
    organization: str | None,
    project: str | None,
    repository: str | None,
    pr_id: int | None,
    token: str | None,
    auth_type: str | None,
) -> tuple[AzureDevOpsClient, PullRequestRef]:
    """Resolve configuration and credentials into a ready client and target PR."""
    from prthreads_cli.auth import resolve_token

    if not token:
        resolved = resolve_token()
        if resolved:
            token, resolved_type = resolved
            auth_type = auth_type or resolved_type
    if not token:
        raise click.UsageError(
            "No Azure DevOps token found. Set ADO_TOKEN, map SYSTEM_ACCESSTOKEN in your pipeline, "
            "or run `az login` first."
        )

    obj = ctx.find_root().obj or {}
    config = dict(obj.get("config") or load_config())
    config.update(
        {
            key: value
            for key, value in {
                "organization": organization,
                "project": project,
                "repository": repository,
                "token": token,
                "auth_type": auth_type,
            }.items()
            if value is not None
        }
    )

    try:
        connection = connection_from_config(config)
        target = pull_request_from_config(config, pr_id)
    except ValueError as e:
        raise click.UsageError(str(e))

    return AzureDevOpsClient(connection), target


def fail(ctx: click.Context, message: str) -> None:
    """Print an error to stderr and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    ctx.exit(1)

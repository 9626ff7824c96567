"""CLI entry point for prthreads.

Commands:
  comment        — post a reply, an inline comment, or a general comment
  thread-status  — move a review thread to a new status
  pr-status      — set a pull request status check
  threads        — list the review threads on a pull request
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prthreads_cli.commands.comment import comment_cmd
from prthreads_cli.commands.pr_status import pr_status_cmd
from prthreads_cli.commands.thread_status import thread_status_cmd
from prthreads_cli.commands.threads import threads_cmd


def _configure_logging(verbose: bool) -> None:
    """Route prthreads' own loggers through rich on stderr when --verbose is given."""
    if not verbose:
        return
    for name in ("prthreads_core", "prthreads_cli"):
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        if not any(isinstance(h, RichHandler) for h in logger.handlers):
            logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@click.group()
@click.version_option(
    version=importlib.metadata.version("prthreads"),
    prog_name="prthreads",
)
@click.option(
    "--config",
    "config_path",
    default=".prthreads.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRTHREADS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every API call to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Post and manage Azure DevOps pull request comments and status checks."""
    from prthreads_core.config import load_config

    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


main.add_command(comment_cmd)
main.add_command(thread_status_cmd)
main.add_command(pr_status_cmd)
main.add_command(threads_cmd)

"""Command-line interface for PR Size Guard."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from prguard import __version__
from prguard.config import load_repo_config, resolve_config
from prguard.evaluator import evaluate
from prguard.exceptions import PRGuardError
from prguard.github.client import GitHubClient
from prguard.github.comments import post_comment
from prguard.github.context import load_run_context, resolve_token
from prguard.github.fetcher import fetch_changed_files
from prguard.models import Outcome
from prguard.reporter import report
from prguard.ui.console import Console, ConsoleLogHandler

console = Console()


def _setup_logging(out: Console, verbose: bool) -> None:
    """Send `prguard.*` log records to the console."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("prguard")
    for handler in list(logger.handlers):
        if isinstance(handler, ConsoleLogHandler):
            logger.removeHandler(handler)
    logger.addHandler(ConsoleLogHandler(out, level=level))
    logger.setLevel(level)


@click.group()
@click.version_option(version=__version__, prog_name="prguard")
def main():
    """PR Size Guard - keep pull requests small and tested."""
    pass


@main.command()
@click.option("--max-lines", envvar="INPUT_MAX_LINES", default=None,
              help="Maximum changed lines (additions + deletions).")
@click.option("--max-files", envvar="INPUT_MAX_FILES", default=None,
              help="Maximum changed files.")
@click.option("--test-paths", envvar="INPUT_TEST_PATHS", default=None,
              help="Comma-separated directory names that count as tests.")
@click.option("--exclude", envvar="INPUT_EXCLUDE", default=None,
              help="Comma-separated globs of files to ignore.")
@click.option("--mode", envvar="INPUT_MODE", default=None,
              help="'warn' (advisory) or 'fail' (fail the check on violations).")
@click.option("--retries", envvar="INPUT_RETRIES", default=None,
              help="Extra attempts for transient API failures.")
@click.option("--token", envvar="INPUT_TOKEN", default=None,
              help="GitHub token, used when GITHUB_TOKEN and GH_TOKEN are unset.")
@click.option("--repo-root", envvar="GITHUB_WORKSPACE", default=".",
              type=click.Path(file_okay=False, path_type=Path),
              help="Repository root holding .pr_guard.yml.")
@click.option("--repo", "repository", default=None,
              help="owner/repo (defaults to GITHUB_REPOSITORY).")
@click.option("--pr", "pr_number", type=int, default=None,
              help="Pull request number (defaults to the event payload).")
@click.option("--no-comment", is_flag=True, help="Evaluate without posting a comment.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug diagnostics.")
def check(
    max_lines: str | None,
    max_files: str | None,
    test_paths: str | None,
    exclude: str | None,
    mode: str | None,
    retries: str | None,
    token: str | None,
    repo_root: Path,
    repository: str | None,
    pr_number: int | None,
    no_comment: bool,
    output_format: str,
    verbose: bool,
):
    """Check the current pull request against the size and test policy.

    Usage in CI:

        prguard check --mode fail

    Local usage:

        GITHUB_TOKEN=... prguard check --repo owner/repo --pr 42 --no-comment
    """
    out = Console(stderr=True) if output_format == "json" else console
    _setup_logging(out, verbose)

    try:
        gh_token = resolve_token(token)
        ctx = load_run_context(repository=repository, pr_number=pr_number)

        config = resolve_config(
            overrides={
                "max_lines": max_lines,
                "max_files": max_files,
                "test_paths": test_paths,
                "exclude": exclude,
                "mode": mode,
                "retries": retries,
            },
            file_cfg=load_repo_config(repo_root),
        )

        client = GitHubClient(gh_token, base_url=ctx.api_url)
        files = fetch_changed_files(client, ctx, config.retry_count)
    except PRGuardError as e:
        out.error(f"Error: {e}")
        sys.exit(1)

    result = evaluate(files, config)

    poster = None if no_comment else (
        lambda body: post_comment(client, ctx, body, config.retry_count)
    )
    rep = report(result, config, post=poster)

    if output_format == "json":
        payload = result.to_dict()
        payload.update({
            "outcome": rep.outcome.value,
            "message": rep.message,
            "comment": rep.comment,
            "posted": rep.posted,
        })
        click.echo(json.dumps(payload, indent=2))
    elif not result.skipped:
        out.show_result(result)

    if rep.outcome is Outcome.FAILURE:
        out.error(rep.message)
    elif rep.outcome is Outcome.WARNING:
        out.notice(rep.message)
    else:
        out.success(rep.message)

    sys.exit(rep.outcome.exit_code)


if __name__ == "__main__":
    main()

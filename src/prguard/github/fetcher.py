"""Fetch every file changed by a pull request."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from prguard.github.client import PER_PAGE, GitHubClient
from prguard.github.context import RunContext
from prguard.models import ChangedFile
from prguard.retry import DEFAULT_DELAY, with_retry

logger = logging.getLogger("prguard.github.fetcher")


def fetch_changed_files(
    client: GitHubClient,
    ctx: RunContext,
    retries: int,
    per_page: int = PER_PAGE,
    delay: float = DEFAULT_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> list[ChangedFile]:
    """Confirm the pull request is reachable, then collect all its pages.

    Each call is retried on its own, so a transient failure on page 3 does
    not refetch pages 1 and 2.

    Raises:
        HttpError: If a call still fails after `retries` extra attempts,
            or fails with a non-transient status.
    """
    with_retry(
        lambda: client.get_pull_request(ctx.owner, ctx.repo, ctx.pr_number),
        retries,
        delay=delay,
        sleep=sleep,
    )

    files: list[ChangedFile] = []
    page = 1
    while True:
        records, has_next = with_retry(
            lambda: client.list_pull_files_page(
                ctx.owner, ctx.repo, ctx.pr_number, page=page, per_page=per_page
            ),
            retries,
            delay=delay,
            sleep=sleep,
        )
        files.extend(ChangedFile.from_api(r) for r in records)
        logger.debug(f"Page {page}: {len(records)} files")
        if len(records) < per_page or not has_next:
            break
        page += 1

    logger.info(f"Fetched {len(files)} changed files from {ctx.full_name}#{ctx.pr_number}")
    return files

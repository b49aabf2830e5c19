"""Turn an evaluation into a comment and a pass/fail outcome."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from prguard.config import PolicyConfig
from prguard.exceptions import CommentPostError
from prguard.github.renderer import render_comment
from prguard.models import EvaluationResult, Outcome

logger = logging.getLogger("prguard.reporter")

SKIP_MESSAGES = {
    "no_files": "No changed files detected in this PR.",
    "all_excluded": "All changed files are excluded by configuration.",
}

FORBIDDEN_HINT = (
    "Could not comment on the PR. Check workflow token permissions: "
    "`pull-requests: write`. If this is from a fork, consider a maintainer-only "
    "workflow to add comments."
)


@dataclass
class Report:
    """What the run decided and what it told the pull request."""
    outcome: Outcome
    message: str
    comment: str | None = None
    posted: bool = False


def decide_outcome(result: EvaluationResult, config: PolicyConfig) -> Outcome:
    if not result.has_violations:
        return Outcome.SUCCESS
    if config.fails_on_violation:
        return Outcome.FAILURE
    return Outcome.WARNING


def report(
    result: EvaluationResult,
    config: PolicyConfig,
    post: Callable[[str], None] | None = None,
) -> Report:
    """Build the report and post the comment if there is something to say.

    Args:
        result: Output of `evaluate`.
        config: The effective policy; only `mode` matters here.
        post: Callable that publishes a comment body. `None` skips posting.
            A `CommentPostError` from it is logged and never changes the
            outcome.
    """
    if result.skipped:
        return Report(outcome=Outcome.SUCCESS, message=SKIP_MESSAGES[result.skipped])

    outcome = decide_outcome(result, config)
    if outcome is Outcome.SUCCESS:
        return Report(
            outcome=outcome,
            message=f"PR Size Guard found no issues. {result.summary}",
        )

    body = render_comment(result)
    posted = False
    if post is not None:
        try:
            post(body)
            posted = True
        except CommentPostError as e:
            if e.status == 403:
                logger.error(FORBIDDEN_HINT)
            else:
                logger.error(f"Failed to comment on the PR. Status: {e.status or 'unknown'}.")
            logger.debug(f"Comment post error: {e}")

    message = (
        "PR Size Guard policy failed."
        if outcome is Outcome.FAILURE
        else "PR Size Guard posted warnings."
    )
    return Report(outcome=outcome, message=message, comment=body, posted=posted)

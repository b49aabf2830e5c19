"""Markdown renderer for the PR Size Guard comment."""

from __future__ import annotations

from prguard.models import EvaluationResult

MARKER = "<!-- pr-size-guard -->"

HEADER = "PR Size Guard report:"

TIPS = (
    "Tips: Adjust limits via `.pr_guard.yml` or action inputs. "
    "Exclude globs with `exclude` input."
)


def render_comment(result: EvaluationResult) -> str:
    """Render the advisory comment for a result that has violations."""
    sections: list[str] = [MARKER, HEADER, ""]
    sections.extend(f"- {v.message}" for v in result.violations)
    sections.append("")
    sections.append(result.summary)
    sections.append("")
    sections.append(TIPS)
    return "\n".join(sections)

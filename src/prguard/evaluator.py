"""Policy evaluation over a pull request's changed files."""

from __future__ import annotations

from prguard.config import PolicyConfig
from prguard.models import ChangedFile, EvaluationResult, Violation
from prguard.pathmatch import matches_any


def touches_tests(file: ChangedFile, test_dir_names: list[str]) -> bool:
    """True if any path segment is exactly one of the test directory names."""
    names = set(test_dir_names)
    return any(segment in names for segment in file.segments)


def filter_excluded(files: list[ChangedFile], exclude_globs: list[str]) -> list[ChangedFile]:
    if not exclude_globs:
        return list(files)
    return [f for f in files if not matches_any(f.path, exclude_globs)]


def drop_neutral_renames(files: list[ChangedFile]) -> list[ChangedFile]:
    """Pure renames move content without changing it; they do not count."""
    return [f for f in files if not (f.is_renamed and f.line_delta == 0)]


def evaluate(files: list[ChangedFile], config: PolicyConfig) -> EvaluationResult:
    """Compute totals and violations for a set of changed files.

    Violations are always listed as lines, then files, then missing tests.
    When nothing remains after exclusion the result is marked as skipped
    and carries no violations. Files dropped as neutral renames do not
    skip evaluation, so an all-rename change still gets the missing-tests
    advisory.
    """
    if not files:
        return EvaluationResult(skipped="no_files")

    considered = filter_excluded(files, config.exclude_globs)
    if not considered:
        return EvaluationResult(skipped="all_excluded")

    effective = drop_neutral_renames(considered)

    total_files = len(effective)
    total_changes = sum(f.line_delta for f in effective)
    tests_touched = any(touches_tests(f, config.test_dir_names) for f in effective)

    violations: list[Violation] = []
    if total_changes > config.max_lines:
        violations.append(Violation(
            rule="max_lines",
            message=f"Too many changed lines: {total_changes}. Limit is {config.max_lines}.",
            actual=total_changes,
            limit=config.max_lines,
        ))
    if total_files > config.max_files:
        violations.append(Violation(
            rule="max_files",
            message=f"Too many changed files: {total_files}. Limit is {config.max_files}.",
            actual=total_files,
            limit=config.max_files,
        ))
    if not tests_touched:
        violations.append(Violation(
            rule="missing_tests",
            message="No test files changed. Consider adding or updating a test.",
        ))

    return EvaluationResult(
        total_files=total_files,
        total_changes=total_changes,
        tests_touched=tests_touched,
        violations=violations,
    )

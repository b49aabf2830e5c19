"""Configuration management for PR Size Guard.

Policy values come from three tiers, highest first:

  1. explicit invocation inputs (CLI options / action inputs)
  2. the repository config file (`.pr_guard.yml` or `.pr_guard.yaml`)
  3. built-in defaults

Each field is resolved on its own, so a bad value in one tier only drops
that field down to the next tier.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from prguard.exceptions import ConfigReadError

logger = logging.getLogger("prguard.config")

CONFIG_FILES = (".pr_guard.yml", ".pr_guard.yaml")

MODES = ("warn", "fail")

DEFAULT_MAX_LINES = 400
DEFAULT_MAX_FILES = 25
DEFAULT_TEST_PATHS = ["test", "tests", "__tests__"]
DEFAULT_MODE = "warn"
DEFAULT_RETRIES = 2


class PolicyConfig(BaseModel):
    """Effective policy for a single run."""

    model_config = ConfigDict(frozen=True)

    max_lines: int = DEFAULT_MAX_LINES
    max_files: int = DEFAULT_MAX_FILES
    test_dir_names: list[str] = Field(default_factory=lambda: list(DEFAULT_TEST_PATHS))
    exclude_globs: list[str] = Field(default_factory=list)
    mode: str = DEFAULT_MODE
    retry_count: int = DEFAULT_RETRIES

    @field_validator("mode")
    @classmethod
    def _normalize_mode(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("retry_count")
    @classmethod
    def _clamp_retries(cls, value: int) -> int:
        return max(0, value)

    @property
    def fails_on_violation(self) -> bool:
        return self.mode == "fail"


def csv_list(value: Any) -> list[str]:
    """Turn a native list or a comma-separated string into clean entries."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [str(v) for v in value]
    else:
        items = str(value).split(",")
    return [item.strip() for item in items if item is not None and item.strip()]


def as_int(value: Any) -> int | None:
    """Parse an integer, returning None when the value is unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def as_positive_int(value: Any) -> int | None:
    n = as_int(value)
    return n if n is not None and n > 0 else None


def as_mode(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


def first_set(*candidates: Any, default: Any) -> Any:
    """Return the first candidate that is neither None nor an empty list."""
    for candidate in candidates:
        if candidate is None:
            continue
        if isinstance(candidate, list) and not candidate:
            continue
        return candidate
    return default


def find_config_file(root: Path) -> Path | None:
    """Locate the repository config file; the first known name wins."""
    for name in CONFIG_FILES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a repository config file into its recognized fields.

    Raises:
        ConfigReadError: If the file cannot be read, is not valid YAML,
            or does not contain a mapping.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Failed to read {path.name}: {e}") from e

    try:
        doc = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigReadError(f"Failed to parse {path.name}: {e}") from e

    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ConfigReadError(
            f"Failed to read {path.name}: expected a mapping, got {type(doc).__name__}"
        )

    cfg: dict[str, Any] = {}
    if doc.get("max_lines") is not None:
        cfg["max_lines"] = as_positive_int(doc["max_lines"])
    if doc.get("max_files") is not None:
        cfg["max_files"] = as_positive_int(doc["max_files"])
    if doc.get("mode"):
        cfg["mode"] = as_mode(doc["mode"])
    if doc.get("retries") is not None:
        cfg["retries"] = as_int(doc["retries"])
    if doc.get("test_paths"):
        cfg["test_paths"] = csv_list(doc["test_paths"])
    if doc.get("exclude"):
        cfg["exclude"] = csv_list(doc["exclude"])
    return cfg


def load_repo_config(root: Path) -> dict[str, Any]:
    """Load the repository config file, degrading to `{}` on any failure."""
    path = find_config_file(root)
    if path is None:
        logger.debug(f"No config file found in {root}")
        return {}
    try:
        cfg = read_config_file(path)
    except ConfigReadError as e:
        logger.warning(f"{e}. Falling back to inputs and defaults.")
        return {}
    logger.debug(f"Loaded {path.name}: {sorted(cfg)}")
    return cfg


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    file_cfg: Mapping[str, Any] | None = None,
) -> PolicyConfig:
    """Merge invocation overrides, file values and defaults.

    Args:
        overrides: Raw invocation inputs keyed by input name
            (`max_lines`, `max_files`, `test_paths`, `exclude`, `mode`,
            `retries`). Values may be unparsed strings.
        file_cfg: Output of `load_repo_config`.
    """
    overrides = overrides or {}
    file_cfg = file_cfg or {}

    mode = first_set(
        as_mode(overrides.get("mode")),
        file_cfg.get("mode"),
        default=DEFAULT_MODE,
    )
    if mode not in MODES:
        logger.warning(f"Unknown mode '{mode}'; violations will not fail the run.")

    return PolicyConfig(
        max_lines=first_set(
            as_positive_int(overrides.get("max_lines")),
            file_cfg.get("max_lines"),
            default=DEFAULT_MAX_LINES,
        ),
        max_files=first_set(
            as_positive_int(overrides.get("max_files")),
            file_cfg.get("max_files"),
            default=DEFAULT_MAX_FILES,
        ),
        test_dir_names=first_set(
            csv_list(overrides.get("test_paths")),
            file_cfg.get("test_paths"),
            default=list(DEFAULT_TEST_PATHS),
        ),
        exclude_globs=first_set(
            csv_list(overrides.get("exclude")),
            file_cfg.get("exclude"),
            default=[],
        ),
        mode=mode,
        retry_count=first_set(
            as_int(overrides.get("retries")),
            file_cfg.get("retries"),
            default=DEFAULT_RETRIES,
        ),
    )

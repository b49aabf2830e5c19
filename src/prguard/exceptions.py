"""Custom exceptions for PR Size Guard."""

from __future__ import annotations


class PRGuardError(Exception):
    """Base exception for all PR Size Guard errors."""


class AuthError(PRGuardError):
    """No GitHub credential could be resolved."""


class ContextError(PRGuardError):
    """The run is not associated with a pull request."""


class ConfigReadError(PRGuardError):
    """The repository config file is unreadable or malformed."""


class CommentPostError(PRGuardError):
    """The advisory comment could not be posted."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class HttpError(PRGuardError):
    """A GitHub API call failed."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class TransientHttpError(HttpError):
    """Rate limiting (429) or a server error (5xx). Safe to retry."""


class PermanentHttpError(HttpError):
    """Any other failed call. Not retried."""


def is_transient_status(status: int | None) -> bool:
    return status is not None and (status == 429 or 500 <= status < 600)


def http_error_for(status: int | None, message: str) -> HttpError:
    """Build the matching HttpError subclass for a response status."""
    if is_transient_status(status):
        return TransientHttpError(message, status=status)
    return PermanentHttpError(message, status=status)

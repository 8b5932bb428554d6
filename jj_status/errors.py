"""
Custom exception types used across jj-status.

Defining explicit error classes makes it easier for the CLI and front
ends to tell user-facing failures (no repository, a failed jj command)
apart from unexpected bugs.
"""

from __future__ import annotations


class JjStatusError(Exception):
    """Base class for all jj-status specific errors."""


class ConfigError(JjStatusError):
    """Raised when configuration values cannot be used."""


class JjCommandError(JjStatusError):
    """Raised when a jj invocation fails."""


class NotARepositoryError(JjCommandError):
    """Raised when jj reports that the directory is not inside a repository."""


class RefreshInProgressError(JjStatusError):
    """Raised when a refresh is requested while another one is still running."""


class JumpError(JjStatusError):
    """Raised when neither a file nor a line can be derived for a jump."""

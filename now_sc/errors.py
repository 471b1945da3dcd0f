"""Exceptions raised by now-sc components.

Every fatal failure derives from :class:`NowScError` so that the command
layer can report it and exit non-zero. Errors that come from an upstream
HTTP API keep the status code and raw body for diagnostics.
"""

from __future__ import annotations

from pathlib import Path


class NowScError(Exception):
    """Base class for all now-sc failures."""


class ScaffoldError(NowScError):
    """Raised when a project directory or file cannot be created."""

    def __init__(self, message: str, path: str | Path = ""):
        self.path = Path(path) if path else None
        super().__init__(message)


class FetchError(NowScError):
    """Raised when prompt templates cannot be listed, downloaded or saved."""


class GitHubAPIError(NowScError):
    """Raised when the GitHub API answers with an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ProvisionError(NowScError):
    """Raised when a local git initialisation step fails."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class OpenRouterError(NowScError):
    """Raised when a chat-completion request does not produce a response."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)

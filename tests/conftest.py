"""Shared pytest fixtures for the now-sc test suite.

Provides reusable fixtures for:
- A fully populated ``Config`` with fake credentials
- Mock HTTP transports for the GitHub and OpenRouter clients
- Mock subprocess helpers for git
- A scaffolded project directory
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from now_sc.config import Config, GitHubConfig, OpenRouterConfig
from now_sc.github_client import GitHubClient
from now_sc.scaffolder import create_structure

RAW_BASE = "https://raw.githubusercontent.com/Now-AI-Foundry/Now-SC-Base-Prompts/main"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Config with both credentials set."""
    return Config(
        github=GitHubConfig(token="ghp_test_token"),
        openrouter=OpenRouterConfig(api_key="sk-or-test"),
    )


@pytest.fixture
def config_without_credentials() -> Config:
    return Config()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_listing() -> list[dict[str, Any]]:
    """A contents-API listing with two prompts, a folder and a PDF."""
    return [
        {
            "name": "Discovery_Call_Prep.md",
            "type": "file",
            "download_url": f"{RAW_BASE}/Prompts/Discovery_Call_Prep.md",
        },
        {
            "name": "Executive_Summary.md",
            "type": "file",
            "download_url": f"{RAW_BASE}/Prompts/Executive_Summary.md",
        },
        {
            "name": "archive",
            "type": "dir",
            "download_url": None,
        },
        {
            "name": "overview.pdf",
            "type": "file",
            "download_url": f"{RAW_BASE}/Prompts/overview.pdf",
        },
    ]


@pytest.fixture
def github_factory() -> Callable[..., tuple[GitHubClient, list[httpx.Request]]]:
    """Build a ``GitHubClient`` whose requests are answered by *handler*.

    Returns the client and the list that records every request sent.

    Usage:
        def test_x(github_factory):
            client, requests = github_factory(lambda request: httpx.Response(200))
    """
    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        token: str | None = "ghp_test_token",
    ) -> tuple[GitHubClient, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = GitHubClient(token=token, transport=httpx.MockTransport(recording))
        return client, seen

    return factory


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@pytest.fixture
def scaffolded_project(tmp_path: Path) -> Path:
    """An ``acme-poc`` project tree with two prompt templates in place."""
    root = tmp_path / "acme-poc"
    create_structure(root, "Acme Corp")
    prompts = root / "10_PromptTemplates"
    (prompts / "Discovery_Call_Prep.md").write_text(
        "You are a presales assistant. Prepare discovery questions.\n", encoding="utf-8"
    )
    (prompts / "Executive_Summary.md").write_text(
        "Summarise the engagement for an executive audience.\n" * 10, encoding="utf-8"
    )
    (prompts / "notes.txt").write_text("not a prompt", encoding="utf-8")
    return root

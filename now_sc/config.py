"""now-sc configuration.

Typed configuration for both commands. Credentials and endpoints are read from
the environment once, when a command starts, and the resulting ``Config`` is
passed down to every component instead of helpers calling ``os.environ``
themselves.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field

BASE_PROMPTS_REPO = "Now-AI-Foundry/Now-SC-Base-Prompts"
DEFAULT_MODEL = "google/gemini-2.0-flash-exp:free"
OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_REFERER = "https://github.com/now-sc-cli"
OPENROUTER_TITLE = "Now-SC CLI Tool"


class GitHubConfig(BaseModel):
    """Settings for the GitHub REST API and the base-prompts repository."""

    token: str | None = Field(default=None, description="Personal access token (GITHUB_PAT)")
    org: str = Field(default="Now-AI-Foundry", description="Organization that owns new repositories")
    api_url: str = Field(default="https://api.github.com")
    prompts_url: str = Field(
        default=f"https://api.github.com/repos/{BASE_PROMPTS_REPO}/contents/Prompts",
        description="Contents listing of the prompt templates folder",
    )
    templates_url: str = Field(
        default=f"https://raw.githubusercontent.com/{BASE_PROMPTS_REPO}/main/Templates",
        description="Raw base URL of the communication templates folder",
    )


class OpenRouterConfig(BaseModel):
    """Settings for the OpenRouter chat-completions API."""

    api_key: str | None = Field(default=None, description="OPENROUTER_API_KEY")
    url: str = Field(default=OPENROUTER_API_URL)
    model: str = Field(default=DEFAULT_MODEL)
    referer: str = Field(default=OPENROUTER_REFERER)
    title: str = Field(default=OPENROUTER_TITLE)


class Config(BaseModel):
    """Global now-sc configuration.

    Created once per command invocation, usually through :meth:`from_env`,
    and handed to the command implementation.
    """

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    openrouter: OpenRouterConfig = Field(default_factory=OpenRouterConfig)
    http_timeout: float = Field(default=60.0, gt=0, description="Per-request timeout in seconds")
    prompts_dir: str = Field(default="10_PromptTemplates")
    templates_dir: str = Field(default="30_CommunicationTemplates")

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            OPENROUTER_API_KEY, GITHUB_PAT,
            NOW_SC_GITHUB_ORG, NOW_SC_MODEL, NOW_SC_HTTP_TIMEOUT.
        """
        github_kwargs: dict[str, Any] = {}
        if os.environ.get("GITHUB_PAT"):
            github_kwargs["token"] = os.environ["GITHUB_PAT"]
        if os.environ.get("NOW_SC_GITHUB_ORG"):
            github_kwargs["org"] = os.environ["NOW_SC_GITHUB_ORG"]

        openrouter_kwargs: dict[str, Any] = {}
        if os.environ.get("OPENROUTER_API_KEY"):
            openrouter_kwargs["api_key"] = os.environ["OPENROUTER_API_KEY"]
        if os.environ.get("NOW_SC_MODEL"):
            openrouter_kwargs["model"] = os.environ["NOW_SC_MODEL"]

        kwargs: dict[str, Any] = {}
        if os.environ.get("NOW_SC_HTTP_TIMEOUT"):
            kwargs["http_timeout"] = float(os.environ["NOW_SC_HTTP_TIMEOUT"])

        return cls(
            github=GitHubConfig(**github_kwargs),
            openrouter=OpenRouterConfig(**openrouter_kwargs),
            **kwargs,
        )

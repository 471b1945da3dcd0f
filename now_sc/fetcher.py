"""Download prompt and communication templates into a new project.

Prompt templates are essential: any failure while listing, downloading or
saving them raises :class:`~now_sc.errors.FetchError`. Communication
templates are optional: failures are collected in the returned
:class:`TemplateFetchResult` and never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import FetchError, GitHubAPIError
from .github_client import GitHubClient
from .scaffolder.structure import COMMUNICATION_TEMPLATES_DIR, PROMPT_TEMPLATES_DIR

PROMPT_SUFFIX = ".md"


@dataclass(frozen=True)
class CommunicationTemplate:
    """A template file downloaded from a fixed URL."""

    url: str
    filename: str


def default_communication_templates(base_url: str) -> list[CommunicationTemplate]:
    """The communication templates published next to the base prompts."""
    base = base_url.rstrip("/")
    return [
        CommunicationTemplate(
            url=f"{base}/servicenow_poc_status_template.html",
            filename="servicenow_poc_status_template.html",
        ),
    ]


@dataclass
class PromptFetchResult:
    """Prompt templates saved by :func:`fetch_prompts`."""

    saved: list[Path] = field(default_factory=list)


@dataclass(frozen=True)
class SkippedTemplate:
    filename: str
    reason: str


@dataclass
class TemplateFetchResult:
    """Outcome of the best-effort communication template download."""

    saved: list[Path] = field(default_factory=list)
    skipped: list[SkippedTemplate] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped


async def fetch_prompts(
    client: GitHubClient,
    project_root: str | Path,
    listing_url: str,
    prompts_dir: str = PROMPT_TEMPLATES_DIR,
) -> PromptFetchResult:
    """Download every Markdown prompt in the remote listing.

    Files are written one by one into ``<project_root>/<prompts_dir>``; when
    an item fails, the ones already written stay and the failing item is
    not written.

    Raises:
        FetchError: On any listing, download or write failure.
    """
    target_dir = Path(project_root) / prompts_dir
    try:
        entries = await client.list_directory(listing_url)
    except GitHubAPIError as exc:
        raise FetchError(f"failed to fetch prompts: {exc}") from exc

    result = PromptFetchResult()
    for entry in entries:
        if not entry.is_file or not entry.name.endswith(PROMPT_SUFFIX):
            continue
        if not entry.download_url:
            raise FetchError(f"failed to download {entry.name}: no download URL")
        try:
            content = await client.download(entry.download_url)
        except GitHubAPIError as exc:
            raise FetchError(f"failed to download {entry.name}: {exc}") from exc

        path = target_dir / entry.name
        try:
            path.write_bytes(content)
        except OSError as exc:
            raise FetchError(f"failed to save {entry.name}: {exc}") from exc
        result.saved.append(path)

    return result


async def fetch_communication_templates(
    client: GitHubClient,
    project_root: str | Path,
    templates: list[CommunicationTemplate],
    templates_dir: str = COMMUNICATION_TEMPLATES_DIR,
) -> TemplateFetchResult:
    """Download each communication template, skipping the ones that fail."""
    target_dir = Path(project_root) / templates_dir
    result = TemplateFetchResult()
    for template in templates:
        try:
            content = await client.download(template.url)
        except GitHubAPIError as exc:
            result.skipped.append(SkippedTemplate(template.filename, str(exc)))
            continue

        path = target_dir / template.filename
        try:
            path.write_bytes(content)
        except OSError as exc:
            result.skipped.append(SkippedTemplate(template.filename, str(exc)))
            continue
        result.saved.append(path)

    return result

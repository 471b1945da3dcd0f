"""GitHub repository provisioning for a new project.

Creates a private repository (organization first, personal account as a
fallback when the organization refuses) and wires a local git repository
to it as ``origin``. Nothing is committed or pushed.
"""

from __future__ import annotations

from pathlib import Path

from .errors import GitHubAPIError, ProvisionError
from .github_client import GitHubClient, RemoteRepository
from .utils import console, run_command, sanitize_repo_name

DEFAULT_BRANCH = "main"


def _is_permission_denied(exc: GitHubAPIError) -> bool:
    """Whether an organization-level failure should fall back to the user."""
    if exc.status_code == 403:
        return True
    return "admin access" in exc.body.lower() or "admin access" in str(exc).lower()


async def _run_git(*args: str, cwd: str | Path) -> str:
    """Run a git command in *cwd* and return its stdout.

    Raises ProvisionError naming the command if it exits non-zero.
    """
    cmd = ["git", *args]
    cmd_str = " ".join(cmd)
    try:
        returncode, stdout, stderr = await run_command(cmd, cwd=cwd, timeout=60)
    except OSError as exc:
        raise ProvisionError(f"failed to run {cmd_str}: {exc}", command=cmd_str) from exc

    if returncode != 0:
        raise ProvisionError(
            f"failed to run {cmd_str} (exit {returncode}): {stderr}",
            command=cmd_str,
            stderr=stderr,
        )
    return stdout


async def init_git_repo(project_root: str | Path, clone_url: str) -> None:
    """Initialise git in *project_root* with *clone_url* as ``origin``."""
    steps = (
        ("init",),
        ("remote", "add", "origin", clone_url),
        ("branch", "-M", DEFAULT_BRANCH),
    )
    for step in steps:
        await _run_git(*step, cwd=project_root)


async def create_remote_repository(
    client: GitHubClient,
    org: str,
    repo_name: str,
    description: str,
) -> RemoteRepository:
    """Create the repository under *org*, or under the user when *org* refuses.

    Any other failure, including "already exists" in either namespace, is
    raised unchanged.
    """
    try:
        return await client.create_org_repository(org, repo_name, description)
    except GitHubAPIError as exc:
        if not _is_permission_denied(exc):
            raise

    login = await client.get_authenticated_user()
    account = f" ({login})" if login else ""
    console.print(
        f"Note: Cannot create in {org} organization. "
        f"Creating in your personal account{account} instead...",
        markup=False,
    )
    return await client.create_user_repository(repo_name, description)


async def create_repository(
    client: GitHubClient,
    project_root: str | Path,
    project_name: str,
    customer_name: str,
    org: str,
) -> RemoteRepository:
    """Create the GitHub repository for a project and connect the local copy.

    Raises:
        GitHubAPIError: If the repository cannot be created.
        ProvisionError: If a local git step fails.
    """
    repo_name = sanitize_repo_name(project_name)
    description = f"Presales project for {customer_name}"

    repo = await create_remote_repository(client, org, repo_name, description)

    try:
        await init_git_repo(project_root, repo.clone_url)
    except ProvisionError as exc:
        raise ProvisionError(
            f"failed to initialize git: {exc}", command=exc.command, stderr=exc.stderr
        ) from exc

    return repo

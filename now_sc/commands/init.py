"""``now-sc init``: create a new presales project.

Steps run strictly in order and a fatal failure stops the remaining ones:

1. resolve project and customer names (options, else interactive)
2. confirm overwriting an existing project directory
3. create the directory tree
4. download prompt templates (fatal)
5. download communication templates (warn only)
6. write README.md, .env.example and .gitignore (fatal)
7. create the GitHub repository when enabled (warn only)
8. print the structure summary and next steps
"""

from __future__ import annotations

import shutil
from pathlib import Path

from rich.markup import escape

from ..config import Config
from ..errors import NowScError, ScaffoldError
from ..fetcher import (
    default_communication_templates,
    fetch_communication_templates,
    fetch_prompts,
)
from ..github_client import GitHubClient
from ..provisioner import create_repository
from ..scaffolder import ProjectDescriptor, create_project_files, create_structure
from ..scaffolder.structure import check_customer_name
from ..utils import (
    ask_text,
    confirm,
    console,
    print_error,
    print_hint,
    print_step,
    print_success,
    print_warning,
)

DEFAULT_PROJECT_NAME = "presales-project"


def resolve_project(project_name: str | None, customer_name: str | None) -> ProjectDescriptor:
    """Fill in whichever of the two names was not given on the command line."""
    if not project_name or not project_name.strip():
        project_name = ask_text("Project name", default=DEFAULT_PROJECT_NAME, required=True)
    while True:
        if not customer_name or not customer_name.strip():
            customer_name = ask_text(
                "Customer name", required=True, required_message="Customer name is required"
            )
        try:
            check_customer_name(customer_name.strip())
        except ValueError as exc:
            print_warning(f"Invalid customer name: {exc}")
            customer_name = None
            continue
        break
    return ProjectDescriptor(name=project_name.strip(), customer_name=customer_name.strip())


async def run_init(
    config: Config,
    project_name: str | None = None,
    customer_name: str | None = None,
    no_github: bool = False,
    cwd: str | Path = ".",
    github: GitHubClient | None = None,
) -> int:
    """Run the ``init`` flow and return the process exit code."""
    project = resolve_project(project_name, customer_name)
    project_path = Path(cwd) / project.name

    if project_path.exists():
        if not confirm(f"Directory {escape(project.name)} already exists. Overwrite?", default=False):
            print_warning("Project initialization cancelled.")
            return 0
        try:
            shutil.rmtree(project_path)
        except OSError as exc:
            print_error(f"Error: failed to remove existing directory: {exc}")
            return 1

    github = github or GitHubClient(
        token=config.github.token,
        api_url=config.github.api_url,
        timeout=config.http_timeout,
    )

    try:
        await _build_project(config, github, project, project_path)
    except NowScError as exc:
        print_error(f"Error: {exc}")
        return 1

    print_success(f'✓ Project "{project.name}" created successfully!')

    await _maybe_create_repository(config, github, project, project_path, no_github)
    print_summary(project, project_path)
    return 0


async def _build_project(
    config: Config,
    github: GitHubClient,
    project: ProjectDescriptor,
    project_path: Path,
) -> None:
    print_step("Creating project structure...")
    try:
        create_structure(project_path, project.customer_name)
    except ScaffoldError as exc:
        raise ScaffoldError(f"failed to create project structure: {exc}", path=exc.path or "") from exc

    print_step("Fetching base prompts from GitHub...")
    prompts = await fetch_prompts(
        github, project_path, config.github.prompts_url, prompts_dir=config.prompts_dir
    )
    console.print(f"  Saved {len(prompts.saved)} prompt template(s)")

    print_step("Fetching communication templates...")
    templates = await fetch_communication_templates(
        github,
        project_path,
        default_communication_templates(config.github.templates_url),
        templates_dir=config.templates_dir,
    )
    if not templates.ok:
        print_warning("Warning: Failed to fetch some templates")
        for skipped in templates.skipped:
            print_hint(f"  {skipped.filename}: {skipped.reason}")

    await create_project_files(project_path, project)


async def _maybe_create_repository(
    config: Config,
    github: GitHubClient,
    project: ProjectDescriptor,
    project_path: Path,
    no_github: bool,
) -> None:
    # The opt-out switch wins over a configured token.
    if no_github:
        console.print("\nSkipped GitHub repository creation.")
        return

    if not config.github.token:
        print_warning("\nNote: GITHUB_PAT environment variable not set. Skipping GitHub repository creation.")
        console.print("To enable automatic repository creation, set your GitHub Personal Access Token:")
        console.print("  export GITHUB_PAT=your_token_here")
        return

    print_step("Creating GitHub repository...")
    try:
        repo = await create_repository(
            github, project_path, project.name, project.customer_name, config.github.org
        )
    except NowScError as exc:
        print_error(f"✗ GitHub repository creation failed: {exc}")
        print_warning("You can create the repository manually later.")
        return

    print_success("✓ GitHub repository created!")
    console.print(f"Repository URL: {repo.html_url}", style="cyan", markup=False)
    print_hint("Git initialized with remote origin set.")
    print_hint(
        'To push your code: git add . && git commit -m "Initial commit" && git push -u origin main'
    )


def print_summary(project: ProjectDescriptor, project_path: Path) -> None:
    """Print the created layout and what to do next."""
    console.print()
    console.print("[cyan]Project structure created:[/cyan]")
    lines = [
        f"  {project_path}/",
        "  ├── 00_Inbox/",
        f"  ├── 01_Customers/{project.customer_name}/",
        "  ├── 10_PromptTemplates/",
        "  ├── 20_Demo_Library/",
        "  ├── 30_CommunicationTemplates/",
        "  └── 99_Assets/",
    ]
    for line in lines:
        console.print(line, markup=False, highlight=False)

    console.print()
    print_warning("Next steps:")
    console.print(f"  1. cd {project.name}", markup=False)
    console.print("  2. Set your OPENROUTER_API_KEY environment variable")
    console.print('  3. Run "now-sc prompt" to execute prompts')

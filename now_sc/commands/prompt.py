"""``now-sc prompt``: run a saved prompt template against OpenRouter.

Must be started from the root of a project created by ``now-sc init``. The
selected template is sent as the system prompt together with the user's
input, the reply is shown, and it can be saved as a Markdown document.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from jinja2 import TemplateError

from ..config import Config
from ..errors import NowScError
from ..openrouter_client import OpenRouterClient
from ..scaffolder.templates import TemplateRenderer
from ..utils import (
    ask_text,
    confirm,
    console,
    print_block,
    print_error,
    print_step,
    print_success,
    print_warning,
    select,
    template_label,
)

PREVIEW_CHARS = 200
OTHER_LOCATION = "Other (specify)"
DEFAULT_CUSTOM_LOCATION = "99_Assets"

# (menu label, path relative to the project root)
OUTPUT_LOCATIONS: tuple[tuple[str, str], ...] = (
    ("Project Overview", "99_Assets/Project_Overview"),
    ("Communications", "99_Assets/Communications"),
    ("POC Documents", "99_Assets/POC_Documents"),
    ("Notes", "00_Inbox/notes"),
)


@dataclass
class ChatExchange:
    """One executed prompt: what was sent and what came back."""

    template_name: str
    system_content: str
    user_content: str
    response_text: str
    model: str


def list_prompt_templates(prompts_dir: Path) -> list[str]:
    """Names of the ``.md`` files directly inside *prompts_dir*, sorted."""
    return sorted(
        entry.name
        for entry in prompts_dir.iterdir()
        if entry.is_file() and entry.name.endswith(".md")
    )


def preview(content: str, limit: int = PREVIEW_CHARS) -> str:
    if len(content) > limit:
        return content[:limit] + "..."
    return content


def location_menu() -> list[str]:
    items = [f"{label} ({path})" for label, path in OUTPUT_LOCATIONS]
    items.append(OTHER_LOCATION)
    return items


def resolve_output_location(index: int, custom_path: str | None = None) -> str:
    """Map a menu index to a path relative to the project root.

    The index one past the presets is the free-text option; *custom_path*
    is used there, falling back to ``99_Assets``.
    """
    if 0 <= index < len(OUTPUT_LOCATIONS):
        return OUTPUT_LOCATIONS[index][1]
    if index == len(OUTPUT_LOCATIONS):
        return (custom_path or "").strip() or DEFAULT_CUSTOM_LOCATION
    raise ValueError(f"Unknown output location index: {index}")


def default_filename(template_name: str, today: datetime | None = None) -> str:
    """``Discovery_Prep.md`` on 2024-05-01 -> ``Discovery_Prep_2024-05-01``."""
    stem = template_name[: -len(".md")] if template_name.endswith(".md") else template_name
    return f"{stem}_{(today or datetime.now()).strftime('%Y-%m-%d')}"


def render_output(
    exchange: ChatExchange,
    filename: str,
    timestamp: datetime | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Compose the Markdown document stored for an executed prompt."""
    renderer = renderer or TemplateRenderer()
    return renderer.render(
        "prompt_output.md.j2",
        {
            "filename": filename,
            "timestamp": (timestamp or datetime.now()).strftime("%Y-%m-%d %H:%M:%S"),
            "template_name": exchange.template_name,
            "model": exchange.model,
            "user_input": exchange.user_content,
            "response": exchange.response_text,
        },
    )


def save_output(project_root: Path, location: str, filename: str, document: str) -> Path:
    """Write *document* to ``<project_root>/<location>/<filename>.md``."""
    path = project_root / location / f"{filename}.md"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise NowScError(f"failed to write file {path}: {exc}") from exc
    return path


async def run_prompt(
    config: Config,
    cwd: str | Path = ".",
    client: OpenRouterClient | None = None,
) -> int:
    """Run the ``prompt`` flow and return the process exit code."""
    project_root = Path(cwd)

    api_key = config.openrouter.api_key
    if not api_key:
        print_error("Error: OPENROUTER_API_KEY environment variable is not set")
        print_warning("Please set your OpenRouter API key:")
        console.print("  export OPENROUTER_API_KEY=your_api_key_here")
        return 1

    prompts_dir = project_root / config.prompts_dir
    if not prompts_dir.is_dir():
        print_error("Error: No prompt templates directory found in current directory")
        print_warning('Make sure you are in a project created with "now-sc init"')
        return 1

    try:
        templates = list_prompt_templates(prompts_dir)
    except OSError as exc:
        print_error(f"Error: failed to read prompts directory: {exc}")
        return 1
    if not templates:
        print_error("Error: No prompt templates found")
        return 1

    index = select("Select a prompt template", [template_label(t) for t in templates])
    template_name = templates[index]
    try:
        prompt_content = (prompts_dir / template_name).read_text(encoding="utf-8")
    except OSError as exc:
        print_error(f"Error: failed to read prompt file: {exc}")
        return 1

    print_block("Prompt Preview:", preview(prompt_content))

    user_input = ask_text("Enter your input for this prompt")

    client = client or OpenRouterClient(
        api_key=api_key,
        url=config.openrouter.url,
        model=config.openrouter.model,
        timeout=config.http_timeout,
        referer=config.openrouter.referer,
        title=config.openrouter.title,
    )

    print_step("Executing prompt...")
    try:
        response_text = await client.execute_prompt(prompt_content, user_input)
    except NowScError as exc:
        print_error(f"Error: failed to execute prompt: {exc}")
        return 1

    print_success("✓ Prompt executed successfully!")
    print_block("Response:", response_text)

    if not confirm("Would you like to save this output?", default=True):
        return 0

    exchange = ChatExchange(
        template_name=template_name,
        system_content=prompt_content,
        user_content=user_input,
        response_text=response_text,
        model=client.model,
    )
    return _save_exchange(project_root, exchange)


def _save_exchange(project_root: Path, exchange: ChatExchange) -> int:
    location_index = select("Where would you like to save the output?", location_menu())
    custom_path = None
    if location_index == len(OUTPUT_LOCATIONS):
        custom_path = ask_text(
            "Enter the path (relative to project root)", default=DEFAULT_CUSTOM_LOCATION
        )
    location = resolve_output_location(location_index, custom_path)

    filename = ask_text(
        "Enter filename (without extension)",
        default=default_filename(exchange.template_name),
        required=True,
        required_message="Filename is required",
    ).strip()

    try:
        document = render_output(exchange, filename)
        path = save_output(project_root, location, filename, document)
    except (NowScError, TemplateError) as exc:
        print_error(f"Error: {exc}")
        return 1

    print_success(f"✓ Output saved to: {path}")
    return 0

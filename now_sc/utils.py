"""Shared utility functions for now-sc.

Provides async command execution, name sanitisation, Rich-based console
output and the interactive prompt helpers used by both commands.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.rule import Rule

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
) -> tuple[int, str, str]:
    """Run a command asynchronously without a shell.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_repo_name(name: str) -> str:
    """Make a project name safe to use as a GitHub repository name.

    Every character outside ``[A-Za-z0-9_-]`` becomes a hyphen. Nothing is
    collapsed or stripped, so the result always has the input's length.

    Examples::

        sanitize_repo_name("acme-poc")    -> "acme-poc"
        sanitize_repo_name("Acme Corp!")  -> "Acme-Corp-"
    """
    return re.sub(r"[^A-Za-z0-9_-]", "-", name)


def template_label(filename: str) -> str:
    """Human-readable label for a prompt template file.

    ``Discovery_Call_Prep.md`` -> ``Discovery Call Prep``
    """
    label = filename.replace("_", " ")
    if label.endswith(".md"):
        label = label[: -len(".md")]
    return label


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------
# Messages are printed as plain text: they carry project names and API bodies.


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(message, style="bold green", markup=False)


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(message, style="bold red", markup=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(message, style="bold yellow", markup=False)


def print_step(message: str) -> None:
    """Print a cyan progress line for the step about to run."""
    console.print(message, style="cyan", markup=False)


def print_hint(message: str) -> None:
    console.print(message, style="dim", markup=False)


def print_block(title: str, body: str) -> None:
    """Print *body* framed by horizontal rules under a cyan *title*."""
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    console.print(Rule(style="dim"))
    # markup=False: prompt and model text routinely contain [brackets].
    console.print(body, markup=False, highlight=False)
    console.print(Rule(style="dim"))


# ---------------------------------------------------------------------------
# Interactive prompts
# ---------------------------------------------------------------------------


def ask_text(
    label: str,
    default: str | None = None,
    required: bool = False,
    required_message: str = "A value is required",
) -> str:
    """Ask for a line of text.

    When *required* is set the question is repeated until the answer is not
    blank.
    """
    while True:
        if default is None:
            answer = Prompt.ask(label, console=console, default="", show_default=False)
        else:
            answer = Prompt.ask(label, console=console, default=default)
        if not required or answer.strip():
            return answer
        print_warning(required_message)


def confirm(label: str, default: bool = False) -> bool:
    """Ask a yes/no question."""
    return Confirm.ask(label, console=console, default=default)


def select(label: str, items: list[str]) -> int:
    """Show a numbered menu and return the zero-based index of the choice."""
    if not items:
        raise ValueError("select() needs at least one item")
    console.print(f"[bold]{label}[/bold]")
    for number, item in enumerate(items, start=1):
        console.print(f"  [cyan]{number}[/cyan]. {escape(item)}", highlight=False)
    choice = IntPrompt.ask(
        "Choice",
        console=console,
        choices=[str(n) for n in range(1, len(items) + 1)],
        show_choices=False,
        default=1,
    )
    return choice - 1

"""Command-line entry point for ``now-sc``.

Usage::

    now-sc init --name acme-poc --customer "Acme Corp"
    now-sc init --no-github
    now-sc prompt
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from now_sc import __version__
from now_sc.commands import run_init, run_prompt
from now_sc.config import Config
from now_sc.utils import console, print_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="now-sc",
        description="CLI tool for bootstrapping presales projects for solution consultants",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  now-sc init -n acme-poc -c "Acme Corp"\n'
            "  now-sc init --no-github\n"
            "  now-sc prompt\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new presales project",
        description=(
            "Creates a new presales project with the standard directory structure, "
            "fetches base prompts from GitHub, and optionally creates a GitHub repository."
        ),
    )
    init_parser.add_argument("--name", "-n", default=None, help="Project name")
    init_parser.add_argument("--customer", "-c", default=None, help="Customer name")
    init_parser.add_argument(
        "--no-github",
        action="store_true",
        help="Skip GitHub repository creation",
    )

    subparsers.add_parser(
        "prompt",
        help="Execute a prompt template",
        description=(
            "Execute a prompt template using the OpenRouter API. "
            "Requires the OPENROUTER_API_KEY environment variable to be set."
        ),
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``now-sc`` and ``python -m now_sc``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    try:
        config = Config.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)

    try:
        if args.command == "init":
            code = asyncio.run(
                run_init(
                    config,
                    project_name=args.name,
                    customer_name=args.customer,
                    no_github=args.no_github,
                )
            )
        else:
            code = asyncio.run(run_prompt(config))
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_error("Aborted.")
        sys.exit(130)

    if code:
        sys.exit(code)

"""The ``init`` and ``prompt`` subcommands."""

from now_sc.commands.init import run_init
from now_sc.commands.prompt import run_prompt

__all__ = ["run_init", "run_prompt"]

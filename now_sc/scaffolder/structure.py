"""Presales project directory layout.

The layout is a fixed tree of :class:`DirectoryNode` values. The customer
folder is the :class:`CustomerPlaceholder` variant: it is created together
with exactly one child directory named after the customer.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from ..errors import ScaffoldError


@dataclass(frozen=True)
class DirectoryNode:
    """A plain directory with optional child directories."""

    name: str
    children: tuple["TreeNode", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CustomerPlaceholder:
    """A directory that receives a single ``<customer name>`` subdirectory."""

    name: str


TreeNode = Union[DirectoryNode, CustomerPlaceholder]


def check_customer_name(customer_name: str) -> str:
    """Return *customer_name* if it names exactly one directory level.

    Raises:
        ValueError: If the name contains a path separator or is ``.`` or ``..``.
    """
    if "/" in customer_name or "\\" in customer_name:
        raise ValueError(f"customer name must not contain a path separator: {customer_name!r}")
    if customer_name in (".", ".."):
        raise ValueError(f"customer name must not be {customer_name!r}")
    return customer_name


INBOX_DIR = "00_Inbox"
CUSTOMERS_DIR = "01_Customers"
PROMPT_TEMPLATES_DIR = "10_PromptTemplates"
DEMO_LIBRARY_DIR = "20_Demo_Library"
COMMUNICATION_TEMPLATES_DIR = "30_CommunicationTemplates"
ASSETS_DIR = "99_Assets"


PROJECT_STRUCTURE: tuple[TreeNode, ...] = (
    DirectoryNode(
        INBOX_DIR,
        (
            DirectoryNode("calls", (DirectoryNode("internal"), DirectoryNode("external"))),
            DirectoryNode("emails"),
            DirectoryNode("notes"),
        ),
    ),
    CustomerPlaceholder(CUSTOMERS_DIR),
    DirectoryNode(PROMPT_TEMPLATES_DIR),
    DirectoryNode(DEMO_LIBRARY_DIR),
    DirectoryNode(COMMUNICATION_TEMPLATES_DIR),
    DirectoryNode(
        ASSETS_DIR,
        (
            DirectoryNode("Project_Overview"),
            DirectoryNode("Communications"),
            DirectoryNode("POC_Documents"),
        ),
    ),
)


def iter_directories(
    base: Path,
    nodes: tuple[TreeNode, ...],
    customer_name: str,
) -> Iterator[Path]:
    """Yield every directory path the tree describes, parents first."""
    for node in nodes:
        path = base / node.name
        yield path
        if isinstance(node, CustomerPlaceholder):
            if customer_name:
                yield path / customer_name
        else:
            yield from iter_directories(path, node.children, customer_name)


def create_structure(
    root: str | Path,
    customer_name: str,
    structure: tuple[TreeNode, ...] = PROJECT_STRUCTURE,
) -> list[Path]:
    """Create the project directory tree under *root*.

    Creation is idempotent: directories that already exist are left alone.
    Whether an existing *root* should be removed first is the caller's
    decision.

    Returns:
        Every directory of the tree, in creation order.

    Raises:
        ScaffoldError: If *customer_name* is not a single directory name, or
            if any directory cannot be created.
    """
    try:
        check_customer_name(customer_name)
    except ValueError as exc:
        raise ScaffoldError(str(exc)) from exc

    created: list[Path] = []
    for path in iter_directories(Path(root), structure, customer_name):
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ScaffoldError(f"Failed to create directory {path}: {exc}", path=path) from exc
        created.append(path)
    return created

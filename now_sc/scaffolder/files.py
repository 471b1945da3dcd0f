"""Static project files written into a freshly scaffolded project."""

from __future__ import annotations

from pathlib import Path

from jinja2 import TemplateError
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import ScaffoldError
from .structure import check_customer_name
from .templates import TemplateRenderer

# (template, output file name)
PROJECT_FILES: tuple[tuple[str, str], ...] = (
    ("README.md.j2", "README.md"),
    ("env.example.j2", ".env.example"),
    ("gitignore.j2", ".gitignore"),
)


class ProjectDescriptor(BaseModel):
    """Name and customer of the project being initialised."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Project (and directory) name")
    customer_name: str = Field(..., min_length=1, description="Customer the engagement is for")

    @field_validator("customer_name")
    @classmethod
    def _single_directory_level(cls, value: str) -> str:
        return check_customer_name(value)

    def template_context(self) -> dict[str, str]:
        return {"project_name": self.name, "customer_name": self.customer_name}


async def create_project_files(
    root: str | Path,
    project: ProjectDescriptor,
    renderer: TemplateRenderer | None = None,
) -> list[Path]:
    """Write README.md, .env.example and .gitignore into *root*.

    Raises:
        ScaffoldError: If a file cannot be rendered or written. The message
            names the file.
    """
    renderer = renderer or TemplateRenderer()
    context = project.template_context()
    written: list[Path] = []
    for template_name, filename in PROJECT_FILES:
        target = Path(root) / filename
        try:
            written.append(await renderer.render_to_file(template_name, target, context))
        except (OSError, TemplateError) as exc:
            raise ScaffoldError(f"Failed to create {filename}: {exc}", path=target) from exc
    return written

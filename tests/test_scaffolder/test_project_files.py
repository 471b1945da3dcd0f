"""Tests for project file generation (now_sc.scaffolder.files / templates).

Covers:
- ProjectDescriptor validation and immutability
- README.md, .env.example and .gitignore content
- Rewriting files over an existing project
- Error reporting when a file cannot be written
- TemplateRenderer: the ``spaced`` filter and strict undefined variables
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from now_sc.errors import ScaffoldError
from now_sc.scaffolder import ProjectDescriptor, TemplateRenderer, create_project_files

pytestmark = pytest.mark.unit


@pytest.fixture
def acme() -> ProjectDescriptor:
    return ProjectDescriptor(name="acme-poc", customer_name="Acme Corp")


class TestProjectDescriptor:
    def test_fields(self, acme: ProjectDescriptor):
        assert acme.name == "acme-poc"
        assert acme.customer_name == "Acme Corp"

    def test_frozen(self, acme: ProjectDescriptor):
        with pytest.raises(ValidationError):
            acme.name = "other"  # type: ignore[misc]

    def test_empty_customer_rejected(self):
        with pytest.raises(ValidationError):
            ProjectDescriptor(name="acme-poc", customer_name="")

    @pytest.mark.parametrize("customer", ["Acme/Corp", "../x", "Acme\\Corp", ".", ".."])
    def test_customer_must_be_one_directory(self, customer: str):
        with pytest.raises(ValidationError, match="customer name"):
            ProjectDescriptor(name="acme-poc", customer_name=customer)

    def test_brackets_and_dots_allowed(self):
        project = ProjectDescriptor(name="acme [/draft]", customer_name="Acme Corp. [EMEA]")
        assert project.customer_name == "Acme Corp. [EMEA]"


class TestCreateProjectFiles:
    @pytest.mark.asyncio
    async def test_writes_three_files(self, tmp_path: Path, acme: ProjectDescriptor):
        written = await create_project_files(tmp_path, acme)
        assert [p.name for p in written] == ["README.md", ".env.example", ".gitignore"]
        for path in written:
            assert path.is_file()

    @pytest.mark.asyncio
    async def test_readme_interpolates_names(self, tmp_path: Path, acme: ProjectDescriptor):
        await create_project_files(tmp_path, acme)
        readme = (tmp_path / "README.md").read_text(encoding="utf-8")
        assert readme.startswith("# acme-poc\n")
        assert "## Customer: Acme Corp" in readme
        assert "**01_Customers/Acme Corp/**" in readme
        assert "now-sc prompt" in readme
        assert "OPENROUTER_API_KEY" in readme

    @pytest.mark.asyncio
    async def test_env_example(self, tmp_path: Path, acme: ProjectDescriptor):
        await create_project_files(tmp_path, acme)
        env = (tmp_path / ".env.example").read_text(encoding="utf-8")
        assert "OPENROUTER_API_KEY=your_api_key_here" in env
        assert "Acme" not in env

    @pytest.mark.asyncio
    async def test_gitignore(self, tmp_path: Path, acme: ProjectDescriptor):
        await create_project_files(tmp_path, acme)
        gitignore = (tmp_path / ".gitignore").read_text(encoding="utf-8")
        assert gitignore.splitlines() == ["node_modules/", ".env", ".DS_Store", "*.log"]

    @pytest.mark.asyncio
    async def test_overwrites_existing(self, tmp_path: Path, acme: ProjectDescriptor):
        (tmp_path / "README.md").write_text("old", encoding="utf-8")
        await create_project_files(tmp_path, acme)
        assert (tmp_path / "README.md").read_text(encoding="utf-8") != "old"

    @pytest.mark.asyncio
    async def test_unwritable_target_names_file(self, tmp_path: Path, acme: ProjectDescriptor):
        (tmp_path / ".env.example").mkdir()
        with pytest.raises(ScaffoldError) as excinfo:
            await create_project_files(tmp_path, acme)
        assert ".env.example" in str(excinfo.value)
        assert excinfo.value.path == tmp_path / ".env.example"
        # README was written before the failure.
        assert (tmp_path / "README.md").is_file()


class TestTemplateRenderer:
    def test_spaced_filter(self, tmp_path: Path):
        (tmp_path / "t.j2").write_text("{{ value | spaced }}", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("t.j2", {"value": "Deal_Review_Notes"}) == "Deal Review Notes"

    def test_missing_variable_is_an_error(self, tmp_path: Path):
        from jinja2 import UndefinedError

        (tmp_path / "t.j2").write_text("{{ missing }}", encoding="utf-8")
        with pytest.raises(UndefinedError):
            TemplateRenderer(tmp_path).render("t.j2", {})

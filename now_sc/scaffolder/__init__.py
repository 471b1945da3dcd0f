"""now-sc scaffolder -- creates the presales project skeleton.

Quick usage::

    from now_sc.scaffolder import ProjectDescriptor, create_project_files, create_structure

    project = ProjectDescriptor(name="acme-poc", customer_name="Acme Corp")
    create_structure("acme-poc", project.customer_name)
    await create_project_files("acme-poc", project)
"""

from now_sc.scaffolder.files import ProjectDescriptor, create_project_files
from now_sc.scaffolder.structure import (
    PROJECT_STRUCTURE,
    CustomerPlaceholder,
    DirectoryNode,
    create_structure,
)
from now_sc.scaffolder.templates import TemplateRenderer

__all__ = [
    "PROJECT_STRUCTURE",
    "CustomerPlaceholder",
    "DirectoryNode",
    "ProjectDescriptor",
    "TemplateRenderer",
    "create_project_files",
    "create_structure",
]

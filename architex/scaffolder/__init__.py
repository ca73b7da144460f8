"""Architex scaffolder -- generates architecture pattern file trees.

Quick usage::

    from architex.scaffolder import ArchitectureGenerator

    generator = ArchitectureGenerator(root="/tmp/project")
    generator.generate_cqrs("CreateUser")
"""

from architex.scaffolder.generator import ArchitectureGenerator, BaseGenerator, GeneratedFile
from architex.scaffolder.resolver import TemplateResolver
from architex.scaffolder.templates import TemplateRenderer

__all__ = [
    "ArchitectureGenerator",
    "BaseGenerator",
    "GeneratedFile",
    "TemplateRenderer",
    "TemplateResolver",
]

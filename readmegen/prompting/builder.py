"""Builds the single README prompt sent to the completion endpoint."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import RepositoryIdentity, RepositoryStructure, SourceFile
from .constants import (
    COLLAPSIBLE_SECTIONS,
    NO_DESCRIPTION,
    PROMPT_TEMPLATE,
    README_SECTIONS,
    SECTION_DETAILS,
    SYSTEM_PROMPT,
)


class PromptBuilder:
    """Renders repository context and selected files into a chat prompt."""

    SYSTEM_PROMPT = SYSTEM_PROMPT

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = self._create_env(self.templates_dir)

    def build(
        self,
        identity: RepositoryIdentity,
        structure: RepositoryStructure,
        files: Sequence[SourceFile],
    ) -> str:
        """Return the user prompt for ``identity`` with files embedded in the given order."""
        template = self._env.get_template(PROMPT_TEMPLATE)
        dependencies = structure.dependencies
        rendered = template.render(
            identity=identity,
            description=structure.description or NO_DESCRIPTION,
            readme=structure.readme,
            dependencies=json.dumps(dependencies, indent=2) if dependencies else None,
            files=list(files),
            sections=README_SECTIONS,
            section_details=SECTION_DETAILS,
            collapsible=COLLAPSIBLE_SECTIONS,
        )
        return rendered

    @staticmethod
    def _create_env(templates_dir: Path) -> Environment:
        return Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )


__all__ = ["PromptBuilder"]

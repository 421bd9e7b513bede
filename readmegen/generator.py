"""Turns repository context and selected source files into README markdown."""

from __future__ import annotations

from typing import Sequence

from .errors import ConfigError, InputError
from .llm.runner import CompletionRunner
from .logging import get_logger
from .models import RepositoryIdentity, RepositoryStructure, SourceFile
from .prompting.builder import PromptBuilder

NO_SOURCE_FILES_MESSAGE = (
    "No source files found. Please ensure the repository contains JavaScript/TypeScript files."
)


class DocumentationGenerator:
    """Builds one prompt and sends it through one completion call."""

    def __init__(
        self,
        runner: CompletionRunner | None,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self.runner = runner
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.logger = get_logger("generator")

    def generate(
        self,
        identity: RepositoryIdentity,
        structure: RepositoryStructure,
        files: Sequence[SourceFile],
    ) -> str:
        if not files:
            raise InputError(NO_SOURCE_FILES_MESSAGE)
        if self.runner is None or not self.runner.configured:
            raise ConfigError("OpenAI API key is not configured")

        prompt = self.prompt_builder.build(identity, structure, files)
        self.logger.info(
            "Requesting README for %s from %d source files", identity.full_name, len(files)
        )
        return self.runner.run(prompt, system=self.prompt_builder.SYSTEM_PROMPT)


__all__ = ["DocumentationGenerator", "NO_SOURCE_FILES_MESSAGE"]

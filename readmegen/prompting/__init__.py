"""Prompt assembly for README generation."""

from .builder import PromptBuilder

__all__ = ["PromptBuilder"]

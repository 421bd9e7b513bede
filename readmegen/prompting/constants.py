"""Shared constants for README prompting."""

from __future__ import annotations

SYSTEM_PROMPT = (
    "You are a technical documentation expert. Generate comprehensive documentation "
    "in a clear, well-structured README format. Include detailed code examples, "
    "API references, and changelog where relevant."
)

README_SECTIONS: tuple[str, ...] = (
    "Project Title and Description",
    "Features",
    "Technologies Used",
    "Installation Guide",
    "Usage Instructions",
    "API Reference",
    "Architecture Overview",
    "Contributing Guidelines",
    "Changelog",
    "License Information",
)

SECTION_DETAILS: dict[str, tuple[str, ...]] = {
    "API Reference": (
        "Detailed list of all functions/methods",
        "Parameters and return values",
        "Example usage for each endpoint/function",
    ),
    "Changelog": (
        "Version history",
        "Notable changes",
        "Breaking changes",
    ),
}

COLLAPSIBLE_SECTIONS: tuple[str, ...] = ("API Reference", "Changelog")

NO_DESCRIPTION = "No description provided"

PROMPT_TEMPLATE = "readme_prompt.j2"


__all__ = [
    "COLLAPSIBLE_SECTIONS",
    "NO_DESCRIPTION",
    "PROMPT_TEMPLATE",
    "README_SECTIONS",
    "SECTION_DETAILS",
    "SYSTEM_PROMPT",
]

"""Generate README documentation for GitHub repositories with a chat-completion model."""

__version__ = "0.1.0"

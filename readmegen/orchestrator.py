"""Pipeline orchestration for the connect and generate flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .config import Settings
from .errors import AuthError, ConfigError, InputError, NotFoundError, ReadmeGenError
from .generator import DocumentationGenerator
from .github.client import ContentClient
from .github.selector import SourceFileSelector
from .github.structure import StructureFetcher
from .identity import parse_repository_url
from .llm.runner import CompletionRunner
from .logging import get_logger
from .models import GeneratedDocument, RepositoryIdentity
from .state import ActionMachine
from .stores import IdentityStore

CONNECT_SUCCESS_MESSAGE = "Repository connected successfully!"
GENERATE_SUCCESS_MESSAGE = "Documentation generated successfully!"
CONNECT_ERROR_PREFIX = "Error connecting to repository. "
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please check the logs for details."


@dataclass
class Notification:
    """Transient user-facing status message."""

    message: str
    success: bool


@dataclass
class ActionResult:
    """Outcome of one connect or generate run."""

    action: str
    notification: Notification
    identity: Optional[RepositoryIdentity] = None
    document: Optional[GeneratedDocument] = None
    error: Optional[ReadmeGenError] = None

    @property
    def success(self) -> bool:
        return self.notification.success


def describe_connect_error(exc: BaseException) -> str:
    if isinstance(exc, AuthError):
        detail = "Invalid or missing GitHub token. Please check your configuration."
    elif isinstance(exc, NotFoundError):
        detail = "Repository not found or private."
    else:
        detail = str(exc) or "Please check the URL and try again."
    return CONNECT_ERROR_PREFIX + detail


def describe_generate_error(exc: BaseException) -> str:
    return str(exc) or "Error generating documentation. Please try again."


class Orchestrator:
    """Wires the GitHub client, selector and generator to the identity store.

    This is the only place that turns a :class:`ReadmeGenError` into a
    user-facing :class:`Notification`. Anything else propagates to the
    presentation layer's fallback handler.
    """

    def __init__(
        self,
        settings: Settings,
        store: IdentityStore,
        *,
        client_factory: Callable[[], ContentClient] | None = None,
        generator: DocumentationGenerator | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self._client_factory = client_factory or self._default_client
        self.generator = generator or DocumentationGenerator(
            CompletionRunner(
                settings.llm.api_key,
                model=settings.llm.model,
                base_url=settings.llm.base_url,
                temperature=settings.llm.temperature,
                max_tokens=settings.llm.max_tokens,
                request_timeout=settings.llm.request_timeout,
            )
        )
        self.connect_machine = ActionMachine("connect")
        self.generate_machine = ActionMachine("generate")
        self.logger = get_logger("orchestrator")

    def current(self) -> Optional[RepositoryIdentity]:
        """Return the cached identity, if a repository was connected before."""
        return self.store.get()

    def connect(self, url: str | None) -> ActionResult:
        try:
            identity = self.connect_machine.run(lambda: self._connect(url))
        except ReadmeGenError as exc:
            self.logger.error("Connect failed: %s", exc)
            return ActionResult(
                action="connect",
                notification=Notification(describe_connect_error(exc), success=False),
                error=exc,
            )
        return ActionResult(
            action="connect",
            notification=Notification(CONNECT_SUCCESS_MESSAGE, success=True),
            identity=identity,
        )

    def generate(self) -> ActionResult:
        try:
            document = self.generate_machine.run(self._generate)
        except ReadmeGenError as exc:
            self.logger.error("Generate failed: %s", exc)
            return ActionResult(
                action="generate",
                notification=Notification(describe_generate_error(exc), success=False),
                error=exc,
            )
        return ActionResult(
            action="generate",
            notification=Notification(GENERATE_SUCCESS_MESSAGE, success=True),
            identity=document.identity,
            document=document,
        )

    # ------------------------------------------------------------------
    # Flows

    def _connect(self, url: str | None) -> RepositoryIdentity:
        client = self._client_factory()
        identity = parse_repository_url(url)
        self.logger.info("Connecting to %s", identity.full_name)
        client.get_repository_metadata(identity.owner, identity.repo)
        self.store.set(identity)
        return identity

    def _generate(self) -> GeneratedDocument:
        runner = self.generator.runner
        if runner is None or not runner.configured:
            raise ConfigError("OpenAI API key is not configured")

        identity = self.store.get()
        if identity is None:
            raise InputError("Please connect a repository first")

        client = self._client_factory()
        structure = StructureFetcher(client).fetch_structure(identity.owner, identity.repo)
        selector_config = self.settings.selector
        selector = SourceFileSelector(
            client,
            root=selector_config.root,
            extensions=selector_config.extensions,
            excluded_fragments=selector_config.excluded_fragments,
            priority=selector_config.priority,
            limit=selector_config.limit,
        )
        files = selector.select_source_files(identity.owner, identity.repo)
        markdown = self.generator.generate(identity, structure, files)
        self.logger.info("Generated README for %s", identity.full_name)
        return GeneratedDocument(
            identity=identity,
            markdown=markdown,
            files=[item.path for item in files],
        )

    def _default_client(self) -> ContentClient:
        github = self.settings.github
        return ContentClient(
            github.token,
            api_url=github.api_url,
            request_timeout=github.request_timeout,
        )


__all__ = [
    "ActionResult",
    "Notification",
    "Orchestrator",
    "UNEXPECTED_ERROR_MESSAGE",
    "describe_connect_error",
    "describe_generate_error",
]

"""FastAPI application entrypoint for readmegen service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List, Optional, TypeVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import Settings, load_settings
from ..errors import (
    AuthError,
    BusyError,
    ConfigError,
    InputError,
    NotFoundError,
    ReadmeGenError,
    TransportError,
)
from ..logging import get_logger, mask_secrets
from ..orchestrator import UNEXPECTED_ERROR_MESSAGE, ActionResult, Orchestrator
from ..stores import JsonIdentityStore

T = TypeVar("T")

_STATUS_BY_ERROR: tuple[tuple[type[ReadmeGenError], int], ...] = (
    (ConfigError, 500),
    (AuthError, 401),
    (NotFoundError, 404),
    (InputError, 400),
    (BusyError, 409),
    (TransportError, 502),
)


class ConnectRequest(BaseModel):
    url: str


class RepositoryPayload(BaseModel):
    owner: str
    repo: str
    url: str


class ConnectResponse(BaseModel):
    success: bool
    message: str
    repository: Optional[RepositoryPayload] = None


class GenerateResponse(BaseModel):
    success: bool
    message: str
    repository: Optional[RepositoryPayload] = None
    markdown: Optional[str] = None
    files: List[str] = []


class CurrentRepositoryResponse(BaseModel):
    connected: bool
    repository: Optional[RepositoryPayload] = None


class HealthResponse(BaseModel):
    status: str


def status_for_error(exc: BaseException) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


def _default_orchestrator(config_path: Path | None = None) -> Orchestrator:
    settings: Settings = load_settings(config_path or Path.cwd())
    mask_secrets(settings.github.token, settings.llm.api_key)
    settings.report_missing_credentials()
    return Orchestrator(settings, JsonIdentityStore(settings.store_path))


def _repository_payload(result: ActionResult) -> Optional[RepositoryPayload]:
    if result.identity is None:
        return None
    return RepositoryPayload(
        owner=result.identity.owner,
        repo=result.identity.repo,
        url=result.identity.html_url,
    )


async def _run_blocking(func: Callable[[], T]) -> T:
    return await asyncio.get_running_loop().run_in_executor(None, func)


def create_app(
    orchestrator: Orchestrator | None = None,
    *,
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing readmegen operations.

    One orchestrator (and therefore one identity store and one pair of action
    machines) serves every request for the lifetime of the app.
    """
    app = FastAPI(title="readmegen", version="0.1.0")
    app.state.orchestrator = orchestrator or orchestrator_factory()
    logger = get_logger("service")

    def get_orchestrator() -> Orchestrator:
        return app.state.orchestrator

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/repository", response_model=CurrentRepositoryResponse)
    async def current_repository() -> CurrentRepositoryResponse:
        identity = await _run_blocking(get_orchestrator().current)
        if identity is None:
            return CurrentRepositoryResponse(connected=False)
        return CurrentRepositoryResponse(
            connected=True,
            repository=RepositoryPayload(
                owner=identity.owner, repo=identity.repo, url=identity.html_url
            ),
        )

    @app.post("/connect", response_model=ConnectResponse)
    async def connect(payload: ConnectRequest) -> Any:
        result = await _run_blocking(lambda: get_orchestrator().connect(payload.url))
        body = ConnectResponse(
            success=result.success,
            message=result.notification.message,
            repository=_repository_payload(result),
        )
        if result.error is not None:
            return JSONResponse(
                status_code=status_for_error(result.error), content=body.model_dump()
            )
        return body

    @app.post("/generate", response_model=GenerateResponse)
    async def generate() -> Any:
        result = await _run_blocking(get_orchestrator().generate)
        body = GenerateResponse(
            success=result.success,
            message=result.notification.message,
            repository=_repository_payload(result),
            markdown=result.document.markdown if result.document else None,
            files=result.document.files if result.document else [],
        )
        if result.error is not None:
            return JSONResponse(
                status_code=status_for_error(result.error), content=body.model_dump()
            )
        return body

    @app.exception_handler(ReadmeGenError)
    async def readmegen_error_handler(_: Request, exc: ReadmeGenError) -> JSONResponse:
        return JSONResponse(
            status_code=status_for_error(exc),
            content={"success": False, "message": str(exc)},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error while serving request", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": UNEXPECTED_ERROR_MESSAGE},
        )

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000, *, config_path: Path | None = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(_default_orchestrator(config_path))
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service", "status_for_error"]

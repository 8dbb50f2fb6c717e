"""FastAPI application entrypoint for modulegen service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..document import load_document
from ..errors import InvalidPathError, ModuleGenError
from ..logging import configure_logging
from ..orchestrator import Orchestrator


class BuildRequest(BaseModel):
    path: str


class RenderRequest(BaseModel):
    path: str
    format: str


class RenderResponse(BaseModel):
    output: str


class ValidateRequest(BaseModel):
    path: str
    schema_location: Optional[str] = None


class IssueModel(BaseModel):
    location: str
    message: str


class ValidateResponse(BaseModel):
    valid: bool
    issues: List[IssueModel]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


async def _run_blocking(func: Callable[[], Any]) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing modulegen operations."""

    app = FastAPI(title="modulegen service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/build")
    async def build(
        payload: BuildRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Dict[str, Any]:
        document = await _run_blocking(lambda: orchestrator.build_module(payload.path))
        return document.to_data()

    @app.post("/render", response_model=RenderResponse)
    async def render(
        payload: RenderRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> RenderResponse:
        def _run_render() -> str:
            document = load_document(Path(payload.path))
            return orchestrator.render_document(document, payload.format)

        output = await _run_blocking(_run_render)
        return RenderResponse(output=output)

    @app.post("/validate", response_model=ValidateResponse)
    async def validate(
        payload: ValidateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ValidateResponse:
        _, issues = await _run_blocking(
            lambda: orchestrator.check_document(payload.path, schema=payload.schema_location)
        )
        return ValidateResponse(
            valid=not issues,
            issues=[IssueModel(location=issue.location, message=issue.message) for issue in issues],
        )

    @app.exception_handler(FileNotFoundError)
    @app.exception_handler(InvalidPathError)
    async def not_found_handler(_: Any, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ModuleGenError)
    async def modulegen_error_handler(_: Any, exc: ModuleGenError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    verbose: bool = False,
    log_file: Optional[Path] = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    logger = configure_logging(verbose=verbose, log_file=log_file)
    logger.info("Serving modulegen on http://%s:%d", host, port)
    uvicorn.run(create_app(), host=host, port=port, log_level="debug" if verbose else "info")

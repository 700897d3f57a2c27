"""FastAPI application entrypoint for codeprose service mode."""

from __future__ import annotations

import asyncio
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

try:  # pragma: no cover - optional dependency
    from fastapi import Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..orchestrator import Orchestrator


class FileRequest(BaseModel):
    path: str


class DescribeRequest(BaseModel):
    path: str
    project_root: Optional[str] = None


class OutlineResponse(BaseModel):
    outline: str
    entries: int


class AnnotateResponse(BaseModel):
    file_summary: str
    outline: List[str]
    nodes: List[Dict[str, Any]]


class DescribeResponse(BaseModel):
    text: Optional[str] = None
    error: Optional[str] = None
    truncated: bool = False


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


async def _in_executor(func: Callable[[], Any]) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing codeprose operations."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    app = FastAPI(title="CodeProse Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/outline", response_model=OutlineResponse)
    async def outline_file(
        payload: FileRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> OutlineResponse:
        outline = await _in_executor(lambda: orchestrator.outline(payload.path))
        return OutlineResponse(outline=outline.text, entries=len(outline.entries))

    @app.post("/annotate", response_model=AnnotateResponse)
    async def annotate_file(
        payload: FileRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnnotateResponse:
        annotated = await _in_executor(lambda: orchestrator.annotate(payload.path))
        return AnnotateResponse(
            file_summary=annotated.file_summary,
            outline=annotated.outline,
            nodes=[asdict(node) for node in annotated.nodes],
        )

    @app.post("/describe", response_model=DescribeResponse)
    async def describe_file(
        payload: DescribeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> DescribeResponse:
        result = await _in_executor(
            lambda: orchestrator.describe(payload.path, project_root=payload.project_root)
        )
        return DescribeResponse(text=result.text, error=result.error, truncated=result.truncated)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)

"""FastAPI application serving merged translations."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from ..errors import DirectoryNotFoundError, LocalizationError
from ..export import LocalizationExport
from ..exporter import LocalizationExporter
from ..render import render_js


class HealthResponse(BaseModel):
    status: str


class ClearCacheResponse(BaseModel):
    removed: bool


def _default_exporter() -> LocalizationExporter:
    return LocalizationExporter.from_path(".")


async def _run_export(exporter: LocalizationExporter) -> LocalizationExport:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, exporter.export)


def create_app(
    exporter_factory: Callable[[], LocalizationExporter] = _default_exporter,
) -> FastAPI:
    """Create the FastAPI application exposing the export."""
    app = FastAPI(title="Localization Export Service", version="1.0.0")

    async def get_exporter() -> LocalizationExporter:
        return exporter_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/localization")
    async def nested(
        exporter: LocalizationExporter = Depends(get_exporter),
    ) -> Dict[str, Any]:
        result = await _run_export(exporter)
        return result.to_dict()

    @app.get("/localization/flat")
    async def flat(
        separator: str = ".",
        exporter: LocalizationExporter = Depends(get_exporter),
    ) -> Dict[str, Any]:
        result = await _run_export(exporter)
        return result.as_flat(separator)

    @app.get("/localization.js")
    async def script(
        exporter: LocalizationExporter = Depends(get_exporter),
    ) -> Response:
        result = await _run_export(exporter)
        settings = exporter.config.export
        document = result.as_flat() if settings.flat else result.as_nested()
        body = render_js(document, variable=settings.variable)
        return Response(content=body, media_type="application/javascript")

    @app.delete("/localization/cache", response_model=ClearCacheResponse)
    async def clear_cache(
        exporter: LocalizationExporter = Depends(get_exporter),
    ) -> ClearCacheResponse:
        return ClearCacheResponse(removed=exporter.clear_cache())

    @app.exception_handler(DirectoryNotFoundError)
    async def directory_not_found_handler(
        _: Any, exc: DirectoryNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(LocalizationError)
    async def localization_error_handler(
        _: Any, exc: LocalizationError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app


def run_service(
    path: str = ".", host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    # One exporter for the process so in-memory cache drivers survive between requests.
    exporter = LocalizationExporter.from_path(path)
    app = create_app(lambda: exporter)
    uvicorn.run(app, host=host, port=port)

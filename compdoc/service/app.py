"""FastAPI application entrypoint for compdoc service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..models import ComponentDocument, DocumentOutcome, ExtractionResult
from ..orchestrator import Orchestrator


class PropertyModel(BaseModel):
    name: str
    type: str
    values: Optional[List[str]] = None
    description: str


class ComponentModel(BaseModel):
    name: str
    props: List[PropertyModel]
    codeExample: str
    importPath: str
    documentation: str

    @classmethod
    def from_document(cls, document: ComponentDocument) -> "ComponentModel":
        return cls.model_validate(document.to_dict())


class DocumentRequest(BaseModel):
    path: str
    output: Optional[str] = None


class DocumentResponse(BaseModel):
    output_path: str
    components: List[ComponentModel] = Field(default_factory=list)


class SourceRequest(BaseModel):
    filename: str = "Component.tsx"
    source: str


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
    """Create the FastAPI application exposing compdoc operations."""

    app = FastAPI(title="CompDoc Service", version=__version__)

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/document", response_model=DocumentResponse, response_model_exclude_none=True)
    async def document_project(
        payload: DocumentRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> DocumentResponse:
        outcome: DocumentOutcome = await _run_blocking(
            lambda: orchestrator.run_document(payload.path, payload.output)
        )
        return DocumentResponse(
            output_path=str(outcome.path),
            components=[ComponentModel.from_document(doc) for doc in outcome.components],
        )

    @app.post("/document/source", response_model=ComponentModel, response_model_exclude_none=True)
    async def document_source(
        payload: SourceRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ComponentModel:
        result: ExtractionResult = await _run_blocking(
            lambda: orchestrator.document_source(payload.filename, payload.source)
        )
        if not result.ok:
            raise HTTPException(
                status_code=422,
                detail=f"Could not fully parse {result.file}: {result.error}",
            )
        if result.document is None:
            raise HTTPException(
                status_code=422,
                detail=f"No props declaration found in {result.file}",
            )
        return ComponentModel.from_document(result.document)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(
        _: Any, exc: NotADirectoryError
    ) -> JSONResponse:
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
    uvicorn.run(create_app(), host=host, port=port)

"""FastAPI application exposing hubgen as a generation service."""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Tuple

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..codegen import ApiModel
from ..errors import ContractLoadError, GenerationError
from ..generator import generate_from_text


class GenerateRequest(BaseModel):
    contract: str
    namespace: str
    class_name: str
    prior_source: Optional[str] = None


class GenerateResponse(BaseModel):
    source: str
    declared_types: List[str]
    methods: List[str]


class HealthResponse(BaseModel):
    status: str


def create_app() -> FastAPI:
    """Create the FastAPI application exposing generation over HTTP."""

    app = FastAPI(title="hubgen service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(payload: GenerateRequest) -> GenerateResponse:
        def _run() -> Tuple[ApiModel, str]:
            return generate_from_text(
                payload.contract,
                payload.namespace,
                payload.class_name,
                prior_source=payload.prior_source,
            )

        # Each request gets its own registry; run off the event loop.
        loop = asyncio.get_running_loop()
        model, source = await loop.run_in_executor(None, _run)
        return GenerateResponse(
            source=source,
            declared_types=[descriptor.name for descriptor in model.declared_types],
            methods=[method.name for method in model.methods],
        )

    @app.exception_handler(GenerationError)
    async def generation_error_handler(_: Any, exc: GenerationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ContractLoadError)
    async def contract_error_handler(_: Any, exc: ContractLoadError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)

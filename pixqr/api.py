"""FastAPI application for pixqr."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, Response

from .config import settings
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware, route_path
from .monitoring import metrics_payload, record_service_error
from .schemas import PixPayloadRequest, PixPayloadResponse
from .services.errors import ServiceError
from .services.generator import PixGenerator

logger = logging.getLogger("pixqr.api")


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key":
        logger.warning(
            "api key is using its default value",
            extra={"config_key": "api_key", "environment": settings.environment},
        )


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    _warn_insecure_defaults()
    yield


app = FastAPI(title="pixqr", version="0.1.0", lifespan=lifespan)
app.add_middleware(RequestLoggingMiddleware)


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    path = route_path(request)
    logger.warning(
        "service error",
        extra={"code": exc.code, "field": exc.field, "path": path, "method": request.method},
    )
    record_service_error(exc.code, path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message, "field": exc.field},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled exception",
        extra={"path": route_path(request), "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post("/v1/pix", response_model=PixPayloadResponse, tags=["pix"], dependencies=[Depends(require_api_key)])
def generate_pix(
    payload: PixPayloadRequest,
    render: bool = Query(default=True, description="Also return the QR code as a PNG"),
) -> PixPayloadResponse:
    result = PixGenerator(title=settings.app_name).generate(payload.to_parameters(), render=render)
    return PixPayloadResponse(
        payload=result.encoded.payload,
        crc=result.encoded.crc,
        qr_png_base64=result.qr_png_base64,
        qr_data_url=result.qr_data_url,
    )

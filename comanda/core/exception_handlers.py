import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from comanda.core.exceptions import ComandaError

logger = logging.getLogger(__name__)


async def comanda_exception_handler(request: Request, exc: ComandaError):
    logger.warning(
        "[Erro] %s %s -> %s (%s): %s",
        request.method, request.url.path, exc.status_code, exc.tipo, exc.detail,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "tipo": exc.tipo},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("[Erro] Payload inválido em %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors(), "tipo": "validacao"},
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.error("[Erro] Exceção não tratada em %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Erro interno do servidor"},
    )

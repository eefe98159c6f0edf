"""
Entry point de la API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import get_settings
from app.core.validation import InvalidRequestError
from app.services.tapestry_client import TapestryError, TapestryNotConfiguredError

from app.controllers.rewards_controller import router as rewards_router
from app.controllers.tapestry_controller import router as tapestry_router
from app.controllers.health_controller import router as health_router

settings = get_settings()
logger = logging.getLogger(__name__)

# Parse CORS origins
CORS_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


def is_allowed_origin(origin: str) -> bool:
    """Check if origin is in the explicit allow list."""
    return bool(origin) and origin in CORS_ORIGINS


class CORSMiddleware(BaseHTTPMiddleware):
    """
    CORS middleware that answers OPTIONS preflight before routing.

    The frontend only consumes JSON from /rewards and /tapestry/*.
    """

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin", "")

        if request.method == "OPTIONS":
            if not is_allowed_origin(origin):
                return Response(status_code=403, content="Origin not allowed")
            return Response(
                status_code=200,
                headers={
                    "Access-Control-Allow-Origin": origin,
                    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
                    "Access-Control-Allow-Headers": "Content-Type, Accept, Origin",
                    "Access-Control-Max-Age": "86400",  # Cache preflight for 24 hours
                }
            )

        response = await call_next(request)

        if is_allowed_origin(origin):
            response.headers["Access-Control-Allow-Origin"] = origin

        return response


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """
    Last line of defense: any exception no handler mapped becomes a 500
    with the exception message.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
            return JSONResponse(status_code=500, content={"error": str(e) or "Unknown error"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level.upper())
    if not settings.tapestry_api_key:
        logger.warning("⚠️ TAPESTRY_API_KEY not set: Tapestry endpoints will answer 500")
    yield


# Creo la app
app = FastAPI(
    title="Quest Rewards API",
    description="Puntaje gamificado y leaderboard sobre un feed social de Tapestry",
    version="1.0.0",
    lifespan=lifespan
)

# El orden importa: el último agregado es el más externo
app.add_middleware(UnexpectedErrorMiddleware)
app.add_middleware(CORSMiddleware)


# ==================== Manejo de errores ====================

@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(TapestryNotConfiguredError)
async def tapestry_not_configured_handler(request: Request, exc: TapestryNotConfiguredError):
    logger.error(f"❌ {exc}")
    return JSONResponse(status_code=500, content={"error": "Server misconfiguration"})


@app.exception_handler(TapestryError)
async def tapestry_error_handler(request: Request, exc: TapestryError):
    # Se devuelve el status y el body de Tapestry sin tocar, sin reintentos
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "status": exc.status_code, "details": exc.body}
    )


# Agrego todos los routers de los controllers al app
app.include_router(health_router)
app.include_router(rewards_router)
app.include_router(tapestry_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": "Quest Rewards API",
        "version": "1.0.0",
        "docs": "/docs"  # Link a la documentación interactiva de Swagger
    }

"""
Controlador de salud - Endpoint de comprobación del servicio
"""

from fastapi import APIRouter
from pydantic import BaseModel

from app.core.dependencies import AppSettings


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Respuesta del chequeo de estado."""
    status: str
    tapestry: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: AppSettings):
    """
    Endpoint de verificación de estado.

    Comprueba que la API esté en funcionamiento y que la API key de Tapestry esté configurada.
    No llama a Tapestry.
    """
    tapestry_status = "configured" if settings.tapestry_api_key else "missing"

    return HealthResponse(
        status="ok",
        tapestry=tapestry_status
    )

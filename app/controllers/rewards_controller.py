"""
Controlador de rewards - Puntaje gamificado y leaderboard

Todo se recalcula en cada request a partir del feed y los comentarios en
Tapestry; no hay puntajes guardados.
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.core.dependencies import Rewards
from app.core.validation import validate_wallet_address
from app.models.rewards import RewardsResponse


router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get("", response_model=RewardsResponse)
async def get_rewards(
    rewards_service: Rewards,
    walletAddress: Optional[str] = Query(None, description="Wallet del usuario (20-50 caracteres alfanuméricos)")
):
    """
    Obtener el puntaje del usuario, su desglose y el top de autores.

    - 400 si la wallet falta o no es válida
    - status de Tapestry si falla el perfil o el feed
    - los errores al traer comentarios de un item no cortan el cálculo
    """
    wallet_address = validate_wallet_address(walletAddress)
    return await rewards_service.get_rewards(wallet_address)

"""
IdentityService - Resuelve una wallet a un perfil de Tapestry.
"""

import logging
from typing import Any, Optional

from app.models.profile import Profile
from app.services.tapestry_client import TapestryClient

logger = logging.getLogger(__name__)

FALLBACK_USERNAME_PREFIX = "user_"
FALLBACK_USERNAME_CHARS = 6


def fallback_username(wallet_address: str) -> str:
    """Username determinístico derivado de la wallet: user_ + 6 primeros caracteres"""
    return f"{FALLBACK_USERNAME_PREFIX}{wallet_address[:FALLBACK_USERNAME_CHARS]}"


def requested_username(wallet_address: str, username: Optional[str] = None) -> str:
    """El username pedido, o el derivado de la wallet si no vino ninguno"""
    return username or fallback_username(wallet_address)


def profile_from_payload(payload: Any, default_username: str) -> Profile:
    """
    Arma el Profile desde la respuesta de findOrCreate.

    id: profile.id, si no profile.username, si no el username por defecto.
    username: profile.username, si no el username por defecto.
    """
    data = payload.get("profile") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        data = {}

    username = data.get("username")
    if username is None:
        username = default_username

    profile_id = data.get("id")
    if profile_id is None:
        profile_id = username

    return Profile(id=str(profile_id), username=str(username))


class IdentityService:
    def __init__(self, client: TapestryClient):
        self.client = client

    async def resolve(
        self,
        wallet_address: str,
        username: Optional[str] = None,
        bio: str = ""
    ) -> Profile:
        """
        Find-or-create del perfil de una wallet.

        1. Deriva el username por defecto (o usa el que se pidió)
        2. Llama a findOrCreate en Tapestry (una sola llamada, sin reintentos)
        3. Retorna el id asignado por Tapestry, o el username si no vino id

        Raises: UpstreamIdentityError con el status y body de Tapestry
        """
        username = requested_username(wallet_address, username)

        payload = await self.client.find_or_create_profile(
            wallet_address,
            username,
            bio
        )
        profile = profile_from_payload(payload, username)

        logger.info(f"🔑 Wallet {wallet_address[:6]}... resuelta a perfil {profile.id}")
        return profile

    async def resolve_raw(
        self,
        wallet_address: str,
        username: Optional[str] = None,
        bio: str = ""
    ) -> Any:
        """Igual que resolve pero devuelve el JSON de Tapestry sin tocar"""
        return await self.client.find_or_create_profile(
            wallet_address,
            requested_username(wallet_address, username),
            bio
        )

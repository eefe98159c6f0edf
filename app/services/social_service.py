"""
SocialService - Operaciones simples sobre Tapestry (posts, quests, likes, comentarios, feed).

Cada operación valida sus campos, resuelve la identidad de la wallet y hace
una sola llamada a Tapestry. Los errores de Tapestry se propagan tal cual.
"""

import logging
from typing import Any, Optional

from app.core.validation import InvalidRequestError, optional_string, require_string
from app.services.identity_service import IdentityService
from app.services.tapestry_client import TapestryClient

logger = logging.getLogger(__name__)


def build_quest_text(title: str, reward: str, details: str = "") -> str:
    """
    Texto de una quest. Lleva el prefijo [QUEST] para que el feed la detecte
    aunque el lector no entienda las propiedades.
    """
    base = f"[QUEST] {title} — Reward: {reward}"
    return f"{base}\n{details}" if details else base


def build_quest_properties(title: str, reward: str, details: str = "") -> list[dict]:
    return [
        {"key": "text", "value": build_quest_text(title, reward, details)},
        {"key": "type", "value": "quest"},
        {"key": "title", "value": title},
        {"key": "reward", "value": reward},
        {"key": "details", "value": details},
    ]


class SocialService:
    def __init__(self, client: TapestryClient):
        self.client = client
        self.identity_service = IdentityService(client)

    async def _profile_id(self, wallet_address: str, username: Optional[str] = None) -> str:
        profile = await self.identity_service.resolve(wallet_address, username)
        return profile.id

    async def find_or_create_profile(
        self,
        wallet_address: Any,
        username: Any = None,
        bio: Any = None
    ) -> Any:
        wallet_address = require_string(wallet_address, "walletAddress")
        return await self.identity_service.resolve_raw(
            wallet_address,
            optional_string(username),
            bio if isinstance(bio, str) else ""
        )

    async def create_post(self, wallet_address: Any, text: Any, username: Any = None) -> Any:
        wallet_address = require_string(wallet_address, "walletAddress")
        text = require_string(text, "text").strip()

        profile_id = await self._profile_id(wallet_address, optional_string(username))
        logger.info(f"📝 New post by {profile_id}")
        return await self.client.create_content(
            profile_id,
            [{"key": "text", "value": text}]
        )

    async def create_quest(
        self,
        wallet_address: Any,
        title: Any,
        reward: Any,
        details: Any = None
    ) -> Any:
        wallet_address = require_string(wallet_address, "walletAddress")
        title = require_string(title, "title").strip()
        reward = require_string(reward, "reward").strip()
        details = details.strip() if isinstance(details, str) else ""

        profile_id = await self._profile_id(wallet_address)
        logger.info(f"🗺️ New quest by {profile_id}: {title}")
        return await self.client.create_content(
            profile_id,
            build_quest_properties(title, reward, details),
            error_message="Tapestry quest error"
        )

    async def set_like(self, wallet_address: Any, content_id: Any, action: Any) -> Any:
        wallet_address = require_string(wallet_address, "walletAddress")
        content_id = require_string(content_id, "contentId")
        if action not in ("like", "unlike"):
            raise InvalidRequestError('action must be "like" or "unlike"')

        profile_id = await self._profile_id(wallet_address)
        if action == "like":
            result = await self.client.like(content_id, profile_id)
        else:
            result = await self.client.unlike(content_id, profile_id)

        # Tapestry a veces responde con body vacío
        return result if result is not None else {"success": True}

    async def create_comment(self, wallet_address: Any, content_id: Any, text: Any) -> Any:
        wallet_address = require_string(wallet_address, "walletAddress")
        content_id = require_string(content_id, "contentId")
        text = require_string(text, "text").strip()

        profile_id = await self._profile_id(wallet_address)
        return await self.client.create_comment(profile_id, content_id, text)

    async def list_comments(
        self,
        content_id: Optional[str] = None,
        profile_id: Optional[str] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Any:
        if not content_id and not profile_id:
            raise InvalidRequestError("contentId or profileId is required")
        return await self.client.list_comments(content_id, profile_id, page, page_size)

    async def list_feed(
        self,
        profile_id: Optional[str] = None,
        wallet_address: Optional[str] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Any:
        if not profile_id:
            if not wallet_address:
                raise InvalidRequestError("Provide profileId or walletAddress")
            profile_id = await self._profile_id(wallet_address)
        return await self.client.list_contents(profile_id, page, page_size)

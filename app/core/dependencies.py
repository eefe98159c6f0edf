"""
Dependencies de FastAPI para inyectar el cliente de Tapestry y los servicios
"""

from typing import Annotated, AsyncGenerator

import httpx
from fastapi import Depends

from app.core.config import Settings, get_settings
from app.services.feed_collector import FeedCollector
from app.services.identity_service import IdentityService
from app.services.points_service import PointsService
from app.services.rewards_service import RewardsService
from app.services.social_service import SocialService
from app.services.tapestry_client import TapestryClient, TapestryNotConfiguredError


async def get_tapestry_client(
    settings: Annotated[Settings, Depends(get_settings)]
) -> AsyncGenerator[TapestryClient, None]:
    """
    Dependency que abre un cliente HTTP hacia Tapestry por request.

    Si falta la API key corta con TapestryNotConfiguredError (500) antes de
    hacer cualquier llamada de red.
    """
    if not settings.tapestry_api_key:
        raise TapestryNotConfiguredError("TAPESTRY_API_KEY is not configured")

    async with httpx.AsyncClient(
        base_url=settings.tapestry_base_url,
        timeout=settings.tapestry_timeout_seconds,
        headers={"Content-Type": "application/json"}
    ) as http:
        yield TapestryClient(
            http,
            settings.tapestry_api_key,
            blockchain=settings.tapestry_blockchain,
            execution=settings.tapestry_execution
        )


# Alias de tipos para que se vea mas limpio en los endpoints
Tapestry = Annotated[TapestryClient, Depends(get_tapestry_client)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_rewards_service(client: Tapestry, settings: AppSettings) -> RewardsService:
    return RewardsService(
        identity_service=IdentityService(client),
        feed_collector=FeedCollector(
            client,
            page_size=settings.rewards_feed_page_size,
            concurrency=settings.rewards_comment_concurrency
        ),
        points_service=PointsService(),
        leaderboard_size=settings.rewards_leaderboard_size
    )


def get_social_service(client: Tapestry) -> SocialService:
    return SocialService(client)


Rewards = Annotated[RewardsService, Depends(get_rewards_service)]
Social = Annotated[SocialService, Depends(get_social_service)]

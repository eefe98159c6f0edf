"""
RewardsService - Calcula el puntaje de un usuario y el leaderboard en tiempo real.

Nada se persiste: cada request resuelve identidad, trae feed + comentarios,
y recalcula todos los puntos desde cero.
"""

import logging
from datetime import datetime, timezone

from app.models.rewards import ComputedFrom, RewardsResponse
from app.services.feed_collector import FeedCollector
from app.services.identity_service import IdentityService
from app.services.points_service import PointsService


logger = logging.getLogger(__name__)


class RewardsService:
    def __init__(
        self,
        identity_service: IdentityService,
        feed_collector: FeedCollector,
        points_service: PointsService,
        leaderboard_size: int = 5
    ):
        self.identity_service = identity_service
        self.feed_collector = feed_collector
        self.points_service = points_service
        self.leaderboard_size = leaderboard_size

    async def get_rewards(self, wallet_address: str) -> RewardsResponse:
        """
        1. Resuelve el perfil de la wallet
        2. Trae el feed y los comentarios de cada item
        3. Calcula puntos por autor y el desglose del usuario
        4. Arma el top

        Raises: UpstreamIdentityError / UpstreamFeedError (se cortan acá)
        """
        profile = await self.identity_service.resolve(wallet_address)
        items, comment_lists = await self.feed_collector.collect(profile)

        result = self.points_service.calculate(items, comment_lists, profile.username)
        leaderboard = self.points_service.build_leaderboard(
            result.author_points,
            profile.username,
            self.leaderboard_size
        )

        logger.info(
            f"🏆 Rewards for {profile.username}: {result.total_points} pts, "
            f"{len(result.author_points)} authors ranked"
        )

        return RewardsResponse(
            profile=profile,
            total_points=result.total_points,
            breakdown=result.breakdown,
            leaderboard=leaderboard,
            computed_from=ComputedFrom(
                posts=result.posts_scored,
                comments=result.comments_scored
            ),
            computed_at=datetime.now(timezone.utc).isoformat()
        )

from pydantic import BaseModel, Field

from app.models.leaderboard import LeaderboardRow
from app.models.profile import Profile


class CountedPoints(BaseModel):
    count: int = 0
    points: int = 0


class EarnedPoints(BaseModel):
    points: int = 0


class ScoreBreakdown(BaseModel):
    """Desglose de puntos del usuario que hace el request"""

    posts: CountedPoints = Field(default_factory=CountedPoints)
    quests: CountedPoints = Field(default_factory=CountedPoints)
    completions: CountedPoints = Field(default_factory=CountedPoints)
    likes_received: EarnedPoints = Field(default_factory=EarnedPoints, alias="likesReceived")
    comments_received: EarnedPoints = Field(default_factory=EarnedPoints, alias="commentsReceived")

    class Config:
        populate_by_name = True

    @property
    def total_points(self) -> int:
        # El total siempre es la suma de las categorías, nunca se lee del mapa de autores
        return (
            self.posts.points
            + self.quests.points
            + self.completions.points
            + self.likes_received.points
            + self.comments_received.points
        )


class ComputedFrom(BaseModel):
    posts: int = 0
    comments: int = 0


class RewardsResponse(BaseModel):
    """Respuesta completa de GET /rewards"""

    profile: Profile
    total_points: int = Field(..., alias="totalPoints")
    breakdown: ScoreBreakdown
    leaderboard: list[LeaderboardRow]
    computed_from: ComputedFrom = Field(..., alias="computedFrom")
    computed_at: str = Field(..., alias="computedAt")

    class Config:
        populate_by_name = True

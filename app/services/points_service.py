"""
Servicio de Puntos - Convierte la actividad del feed en puntos y arma el leaderboard
"""

import logging
from dataclasses import dataclass, field

from app.models.content import CommentItem, ContentItem, ContentKind
from app.models.leaderboard import LeaderboardRow
from app.models.rewards import ScoreBreakdown
from app.services.classifier import is_completion_comment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringSchedule:
    """Puntos por evento. Inmutable; los tests pueden pasar otra tabla."""

    post: int = 10
    quest: int = 20
    completion: int = 30
    like_received: int = 1
    comment_received: int = 1


DEFAULT_SCHEDULE = ScoringSchedule()


@dataclass
class PointsResult:
    """Resultado de una pasada de agregación (todo vive solo durante el request)"""

    author_points: dict[str, int] = field(default_factory=dict)
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    posts_scored: int = 0
    comments_scored: int = 0

    @property
    def total_points(self) -> int:
        return self.breakdown.total_points


class PointsService:
    """
    Calcula los puntos de todos los autores del feed y el desglose del usuario.

    Sistema de puntos (por defecto):
    - 10 puntos: publicar un post
    - 20 puntos: publicar una quest
    - 30 puntos: comentar una prueba de completion
    - 1 punto: cada like recibido
    - 1 punto: cada comentario recibido

    El leaderboard usa el total de cada autor (con engagement incluido). El
    total del usuario que consulta es la suma de su desglose, nunca se lee
    del mapa de autores.
    """

    def __init__(self, schedule: ScoringSchedule = DEFAULT_SCHEDULE):
        self.schedule = schedule

    def content_points(self, item: ContentItem) -> int:
        if item.kind == ContentKind.QUEST:
            return self.schedule.quest
        return self.schedule.post

    def engagement_points(self, item: ContentItem) -> tuple[int, int]:
        """(puntos por likes, puntos por comentarios) que recibe el autor del item"""
        return (
            item.like_count * self.schedule.like_received,
            item.comment_count * self.schedule.comment_received,
        )

    def calculate(
        self,
        items: list[ContentItem],
        comment_lists: list[list[CommentItem]],
        username: str
    ) -> PointsResult:
        """
        Recorre el feed en orden y acumula puntos.

        Args:
            items: Items del feed ya clasificados
            comment_lists: comment_lists[i] son los comentarios de items[i]
            username: Username del usuario que hace el request

        Returns:
            PointsResult con el mapa username -> puntos y el desglose del usuario
        """
        result = PointsResult()
        breakdown = result.breakdown

        def add_points(author: str, points: int) -> None:
            # Autores sin username no entran al leaderboard
            if not author:
                return
            result.author_points[author] = result.author_points.get(author, 0) + points

        for index, item in enumerate(items):
            likes_pts, comments_pts = self.engagement_points(item)
            add_points(item.author, self.content_points(item) + likes_pts + comments_pts)

            if item.author == username:
                if item.kind == ContentKind.QUEST:
                    breakdown.quests.count += 1
                    breakdown.quests.points += self.schedule.quest
                else:
                    breakdown.posts.count += 1
                    breakdown.posts.points += self.schedule.post
                breakdown.likes_received.points += likes_pts
                breakdown.comments_received.points += comments_pts

            comments = comment_lists[index] if index < len(comment_lists) else []
            result.comments_scored += len(comments)

            # Cada completion suma, aunque el mismo autor repita sobre la misma quest
            for comment in comments:
                if not is_completion_comment(comment.text):
                    continue
                add_points(comment.author, self.schedule.completion)
                if comment.author == username:
                    breakdown.completions.count += 1
                    breakdown.completions.points += self.schedule.completion

        result.posts_scored = len(items)
        return result

    def build_leaderboard(
        self,
        author_points: dict[str, int],
        username: str,
        limit: int = 5
    ) -> list[LeaderboardRow]:
        """
        Top de autores por puntos (descendente).

        Los empates mantienen el orden en que el autor sumó puntos por primera
        vez: sorted() es estable y el dict conserva el orden de inserción.
        """
        entries = [(name, points) for name, points in author_points.items() if name]
        entries = sorted(entries, key=lambda entry: entry[1], reverse=True)

        return [
            LeaderboardRow(
                rank=rank,
                username=name,
                points=points,
                is_you=name == username
            )
            for rank, (name, points) in enumerate(entries[:limit], start=1)
        ]

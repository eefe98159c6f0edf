"""
FeedCollector - Trae el feed de un perfil y los comentarios de cada item.

Un fetch del feed + un fetch de comentarios por item, estos últimos con
concurrencia acotada. Si falla el feed se corta todo el request; si falla
el fetch de comentarios de un item, ese item queda con lista vacía y el
resto sigue igual.
"""

import logging
from typing import Awaitable, Callable

from app.core.concurrency import run_bounded
from app.models.content import CommentItem, ContentItem
from app.models.profile import Profile
from app.services.tapestry_client import (
    TapestryClient,
    extract_list,
    feed_entry_content_id,
    parse_comment_entry,
    parse_feed_entry,
)

logger = logging.getLogger(__name__)

FEED_PAGE_SIZE = 50
COMMENTS_PAGE_SIZE = 50
COMMENT_FETCH_CONCURRENCY = 5


class FeedCollector:
    def __init__(
        self,
        client: TapestryClient,
        page_size: int = FEED_PAGE_SIZE,
        concurrency: int = COMMENT_FETCH_CONCURRENCY
    ):
        self.client = client
        self.page_size = page_size
        self.concurrency = concurrency

    async def fetch_comments(self, content_id: str) -> list[CommentItem]:
        """
        Comentarios de un contenido. Nunca lanza: cualquier error (red,
        status no exitoso, JSON inválido) se loguea y devuelve [].
        """
        try:
            payload = await self.client.list_comments(
                content_id=content_id,
                page=1,
                page_size=COMMENTS_PAGE_SIZE
            )
            return [parse_comment_entry(entry, content_id) for entry in extract_list(payload)]
        except Exception as e:
            logger.warning(f"⚠️ Comments for {content_id} unavailable, scoring without them: {e}")
            return []

    def _comment_task(self, content_id: str) -> Callable[[], Awaitable[list[CommentItem]]]:
        async def task() -> list[CommentItem]:
            return await self.fetch_comments(content_id)

        return task

    async def collect(self, profile: Profile) -> tuple[list[ContentItem], list[list[CommentItem]]]:
        """
        Retorna (items del feed, comentarios de cada item) con las listas
        alineadas por posición: comments[i] son los comentarios de items[i].

        Los items sin id no generan fetch y quedan con lista vacía.

        Raises: UpstreamFeedError si falla el listado del feed
        """
        payload = await self.client.list_contents(profile.id, page=1, page_size=self.page_size)
        entries = extract_list(payload)

        items = [parse_feed_entry(entry) for entry in entries]
        comment_lists: list[list[CommentItem]] = [[] for _ in entries]

        # (posición en el feed, content id) de los items que sí se pueden consultar
        fetchable: list[tuple[int, str]] = []
        for index, entry in enumerate(entries):
            content_id = feed_entry_content_id(entry)
            if content_id:
                fetchable.append((index, content_id))

        results = await run_bounded(
            [self._comment_task(content_id) for _, content_id in fetchable],
            self.concurrency
        )
        for (index, _), comments in zip(fetchable, results):
            comment_lists[index] = comments

        logger.info(
            f"📥 Feed for {profile.username}: {len(items)} items, "
            f"{sum(len(c) for c in comment_lists)} comments"
        )
        return items, comment_lists

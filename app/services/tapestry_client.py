"""
Cliente de Tapestry - único punto de contacto con el servicio externo de grafo social

Tapestry guarda perfiles, contenidos (posts/quests), comentarios y likes.
Todas las llamadas llevan la API key como query param `apiKey`.

Las respuestas de Tapestry no tienen una forma fija: una lista puede venir
suelta o dentro de `contents`, `comments`, `data` o `items`, y cada entrada
del feed puede traer el contenido anidado en `content` o plano. Toda esa
normalización vive en este módulo (extract_list / parse_*), así la lógica de
negocio nunca ve el JSON crudo.
"""

import logging
import math
import uuid
from typing import Any, Optional
from urllib.parse import quote

import httpx

from app.models.content import CommentItem, ContentItem
from app.services.classifier import classify_content

logger = logging.getLogger(__name__)

# Campos donde Tapestry puede devolver una lista, en orden de preferencia
LIST_FIELDS = ("contents", "comments", "data", "items")


class TapestryError(Exception):
    """
    Respuesta no exitosa de Tapestry.

    Guarda el status y el body crudo para devolverlos tal cual al cliente.
    """

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class UpstreamIdentityError(TapestryError):
    """Falló findOrCreate del perfil"""
    pass


class UpstreamFeedError(TapestryError):
    """Falló el listado de contenidos del feed"""
    pass


class TapestryNotConfiguredError(Exception):
    """Se intentó usar Tapestry sin TAPESTRY_API_KEY"""
    pass


class TapestryClient:
    """
    Wrapper async sobre la API REST de Tapestry.

    Recibe un httpx.AsyncClient ya configurado con base_url y timeout; el
    ciclo de vida del cliente HTTP lo maneja quien lo crea (ver dependencies).
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        blockchain: str = "SOLANA",
        execution: str = "FAST_UNCONFIRMED"
    ):
        if not api_key:
            raise TapestryNotConfiguredError("TAPESTRY_API_KEY is not configured")
        self.http = http
        self.api_key = api_key
        self.blockchain = blockchain
        self.execution = execution

    async def _request(
        self,
        method: str,
        path: str,
        error_message: str,
        error_class: type[TapestryError] = TapestryError,
        params: Optional[dict] = None,
        json: Optional[dict] = None
    ) -> Any:
        query = {"apiKey": self.api_key}
        if params:
            query.update(params)

        response = await self.http.request(method, path, params=query, json=json)

        if not response.is_success:
            logger.warning(f"❌ Tapestry {method} {path} -> {response.status_code}")
            raise error_class(error_message, response.status_code, response.text)

        if not response.content:
            return None
        return response.json()

    # ==================== Perfiles ====================

    async def find_or_create_profile(
        self,
        wallet_address: str,
        username: str,
        bio: str = ""
    ) -> Any:
        """Busca el perfil de la wallet o lo crea con el username dado"""
        return await self._request(
            "POST",
            "/profiles/findOrCreate",
            "Tapestry profile error",
            error_class=UpstreamIdentityError,
            json={
                "walletAddress": wallet_address,
                "username": username,
                "bio": bio,
                "blockchain": self.blockchain,
                "execution": self.execution,
            }
        )

    # ==================== Contenidos ====================

    async def list_contents(self, profile_id: str, page: int = 1, page_size: int = 20) -> Any:
        return await self._request(
            "GET",
            "/contents/",
            "Tapestry feed error",
            error_class=UpstreamFeedError,
            params={"profileId": profile_id, "pageSize": str(page_size), "page": str(page)}
        )

    async def create_content(
        self,
        profile_id: str,
        properties: list[dict],
        content_id: Optional[str] = None,
        error_message: str = "Tapestry content error"
    ) -> Any:
        """
        Crea un nodo de contenido vía POST /contents/findOrCreate.

        El id tiene que ser único por contenido; si no se pasa se genera un UUID.
        """
        return await self._request(
            "POST",
            "/contents/findOrCreate",
            error_message,
            json={
                "id": content_id or str(uuid.uuid4()),
                "profileId": profile_id,
                "properties": properties,
            }
        )

    # ==================== Comentarios ====================

    async def list_comments(
        self,
        content_id: Optional[str] = None,
        profile_id: Optional[str] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Any:
        params = {"pageSize": str(page_size), "page": str(page)}
        if content_id:
            params["contentId"] = content_id
        if profile_id:
            params["profileId"] = profile_id

        return await self._request("GET", "/comments/", "Tapestry comments error", params=params)

    async def create_comment(self, profile_id: str, content_id: str, text: str) -> Any:
        # No mandar commentId: Tapestry lo usa como clave de búsqueda y responde 404
        return await self._request(
            "POST",
            "/comments/",
            "Tapestry comment error",
            json={"profileId": profile_id, "text": text, "contentId": content_id}
        )

    # ==================== Likes ====================

    async def like(self, content_id: str, profile_id: str) -> Any:
        return await self._request(
            "POST",
            f"/likes/{quote(content_id, safe='')}",
            "Tapestry like error",
            json={"startId": profile_id}
        )

    async def unlike(self, content_id: str, profile_id: str) -> Any:
        # startId va también como query param: algunos servidores ignoran el body en DELETE
        return await self._request(
            "DELETE",
            f"/likes/{quote(content_id, safe='')}",
            "Tapestry like error",
            params={"startId": profile_id},
            json={"startId": profile_id}
        )


# ==================== Normalización de payloads ====================

def extract_list(payload: Any) -> list:
    """
    Normaliza cualquier respuesta "tipo lista" de Tapestry a una lista plana.

    Acepta una lista suelta o un objeto con la lista en alguno de LIST_FIELDS.
    Cualquier otra cosa se normaliza a [] (nunca es un error).
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for field in LIST_FIELDS:
            value = payload.get(field)
            if isinstance(value, list):
                return value
    return []


def _nested(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    return str(value)


def _as_count(value: Any) -> int:
    """
    Contador del upstream como int. Tapestry siempre manda enteros; un valor
    fraccionario como "2.5" se trunca a 2. No numérico o no finito cuenta 0.
    """
    try:
        count = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(count):
        return 0
    return int(count)


def feed_entry_content(entry: Any) -> Any:
    """El contenido de una entrada del feed: anidado en `content` o la entrada misma"""
    content = _nested(entry, "content")
    return content if content is not None else entry


def feed_entry_content_id(entry: Any) -> Optional[str]:
    """
    ID para pedir los comentarios de una entrada: content.id, o el id de la
    entrada si no hay contenido anidado con id. None (o vacío) si no hay ninguno.
    """
    content_id = _nested(entry, "content", "id")
    if content_id is None:
        content_id = _nested(entry, "id")
    return _as_id(content_id) or None


def parse_feed_entry(entry: Any) -> ContentItem:
    """Convierte una entrada cruda del feed en ContentItem, clasificada"""
    content = feed_entry_content(entry)
    return ContentItem(
        id=feed_entry_content_id(entry),
        author=_as_text(_nested(entry, "authorProfile", "username")),
        text=_as_text(_nested(content, "text")),
        created_at=_nested(content, "created_at") or _nested(content, "createdAt"),
        like_count=_as_count(_nested(entry, "socialCounts", "likeCount")),
        comment_count=_as_count(_nested(entry, "socialCounts", "commentCount")),
        kind=classify_content(content),
    )


def parse_comment_entry(entry: Any, content_id: Optional[str] = None) -> CommentItem:
    """Convierte un comentario crudo en CommentItem"""
    comment = _nested(entry, "comment")
    if comment is None:
        comment = entry

    author = _nested(entry, "author", "username")
    if author is None:
        author = _nested(entry, "authorProfile", "username")

    return CommentItem(
        id=_as_id(_nested(comment, "id")),
        content_id=content_id,
        author=_as_text(author),
        text=_as_text(_nested(comment, "text")),
        created_at=_nested(comment, "created_at") or _nested(comment, "createdAt"),
    )

"""
Controlador de Tapestry - Proxies simples hacia el grafo social

Cada endpoint valida los campos requeridos, resuelve el perfil de la wallet
y reenvía una sola llamada a Tapestry. Si Tapestry falla, se devuelve su
status y su body tal cual.
"""

from typing import Any, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from app.core.dependencies import Social


router = APIRouter(prefix="/tapestry", tags=["tapestry"])


# Los campos son Any a propósito: la validación (y sus mensajes) la hace el servicio
class ProfileRequest(BaseModel):
    wallet_address: Any = Field(None, alias="walletAddress")
    username: Any = None
    bio: Any = None


class PostRequest(BaseModel):
    wallet_address: Any = Field(None, alias="walletAddress")
    text: Any = None
    username: Any = None


class QuestRequest(BaseModel):
    wallet_address: Any = Field(None, alias="walletAddress")
    title: Any = None
    reward: Any = None
    details: Any = None


class LikeRequest(BaseModel):
    wallet_address: Any = Field(None, alias="walletAddress")
    content_id: Any = Field(None, alias="contentId")
    action: Any = None


class CommentRequest(BaseModel):
    wallet_address: Any = Field(None, alias="walletAddress")
    content_id: Any = Field(None, alias="contentId")
    text: Any = None


@router.post("/profile")
async def find_or_create_profile(request: ProfileRequest, social_service: Social):
    """
    Busca o crea el perfil de una wallet.

    Si no se manda username se usa user_<6 primeros caracteres de la wallet>.
    """
    return await social_service.find_or_create_profile(
        request.wallet_address,
        request.username,
        request.bio
    )


@router.get("/feed")
async def get_feed(
    social_service: Social,
    profileId: Optional[str] = Query(None),
    walletAddress: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    pageSize: int = Query(20, ge=1),
    page: int = Query(1, ge=1)
):
    """
    Feed de un perfil. Acepta profileId directo o una wallet para resolverlo.

    Tapestry pagina con page/pageSize; `limit` se acepta como alias de pageSize.
    """
    return await social_service.list_feed(
        profile_id=profileId,
        wallet_address=walletAddress,
        page=page,
        page_size=limit or pageSize
    )


@router.post("/post")
async def create_post(request: PostRequest, social_service: Social):
    """Publica un post de texto"""
    return await social_service.create_post(
        request.wallet_address,
        request.text,
        request.username
    )


@router.post("/quest")
async def create_quest(request: QuestRequest, social_service: Social):
    """
    Publica una quest.

    Se guarda con el texto "[QUEST] ..." y además con la propiedad type=quest,
    así la detectan tanto lectores viejos como nuevos.
    """
    return await social_service.create_quest(
        request.wallet_address,
        request.title,
        request.reward,
        request.details
    )


@router.post("/like")
async def set_like(request: LikeRequest, social_service: Social):
    """Like o unlike de un contenido (action: "like" | "unlike")"""
    return await social_service.set_like(
        request.wallet_address,
        request.content_id,
        request.action
    )


@router.post("/comment")
async def create_comment(request: CommentRequest, social_service: Social):
    """Comenta un contenido. Las pruebas de completion también entran por acá."""
    return await social_service.create_comment(
        request.wallet_address,
        request.content_id,
        request.text
    )


@router.get("/comments")
async def get_comments(
    social_service: Social,
    contentId: Optional[str] = Query(None),
    profileId: Optional[str] = Query(None),
    pageSize: int = Query(20, ge=1),
    page: int = Query(1, ge=1)
):
    """Comentarios por contenido o por perfil (uno de los dos es obligatorio)"""
    return await social_service.list_comments(
        content_id=contentId,
        profile_id=profileId,
        page=page,
        page_size=pageSize
    )

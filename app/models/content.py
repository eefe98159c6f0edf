from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ContentKind(str, Enum):
    POST = "post"
    QUEST = "quest"


class ContentItem(BaseModel):
    """Item del feed ya normalizado (post o quest)"""

    id: Optional[str] = None
    author: str = ""  # username, vacío si el upstream no lo trae
    text: str = ""
    created_at: Any = Field(None, alias="createdAt")
    like_count: int = Field(0, alias="likeCount")
    comment_count: int = Field(0, alias="commentCount")
    kind: ContentKind = ContentKind.POST

    class Config:
        populate_by_name = True


class CommentItem(BaseModel):
    """Comentario de un item del feed; puede ser una prueba de completion"""

    id: Optional[str] = None
    content_id: Optional[str] = Field(None, alias="contentId")
    author: str = ""
    text: str = ""
    created_at: Any = Field(None, alias="createdAt")

    class Config:
        populate_by_name = True

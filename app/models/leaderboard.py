from pydantic import BaseModel, Field


class LeaderboardRow(BaseModel):
    """Fila del top de autores (vista derivada, no se persiste)"""

    rank: int
    username: str
    points: int
    is_you: bool = Field(False, alias="isYou")

    class Config:
        populate_by_name = True

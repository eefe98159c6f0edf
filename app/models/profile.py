from pydantic import BaseModel


class Profile(BaseModel):
    """Identidad del usuario dentro de Tapestry, resuelta desde su wallet"""

    id: str  # ID autoritativo en Tapestry
    username: str  # Clave de atribución de puntos

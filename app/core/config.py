"""
Configuración de la app cargada desde variables de entorno (.env)

Todo lo que varía entre desarrollo/producción va aquí
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Tapestry - servicio externo de grafo social (perfiles, contenidos, comentarios, likes)
    tapestry_api_key: str | None = None  # Sin API key el servidor responde 500 antes de llamar afuera
    tapestry_base_url: str = "https://api.usetapestry.dev/api/v1"
    tapestry_timeout_seconds: float = 15.0  # Timeout por llamada, un upstream colgado no bloquea para siempre
    tapestry_blockchain: str = "SOLANA"
    tapestry_execution: str = "FAST_UNCONFIRMED"

    # Rewards - parámetros del cálculo de puntos
    rewards_feed_page_size: int = 50  # Cuántos items del feed se puntúan por request
    rewards_comment_concurrency: int = 5  # Máximo de fetches de comentarios en paralelo
    rewards_leaderboard_size: int = 5  # Filas del top

    # App
    app_env: str = "development"  # o "production"
    debug: bool = False
    log_level: str = "INFO"

    # CORS - de dónde pueden venir los requests
    cors_origins: str = "http://localhost:3000"  # URLs separadas por coma

    class Config:
        env_file = ".env"  # Lee desde el archivo .env
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignora campos extras del .env que no estén en el modelo


@lru_cache()
def get_settings() -> Settings:
    """Retorna la instancia de configuración (cacheada para no releerla)"""
    return Settings()

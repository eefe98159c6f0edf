"""
Tests para configuración de la aplicación

Valida que la configuración se cargue correctamente desde variables de entorno
y que los valores por defecto sean apropiados.
"""

from unittest.mock import patch

from app.core.config import Settings


class TestSettings:
    """Tests para Settings"""

    @patch.dict('os.environ', {
        'TAPESTRY_API_KEY': 'test-tapestry-key',
        'TAPESTRY_BASE_URL': 'https://tapestry.test/api/v1',
    })
    def test_settings_loads_from_env(self):
        """Validar que Settings carga desde variables de entorno"""
        settings = Settings()

        assert settings.tapestry_api_key == 'test-tapestry-key'
        assert settings.tapestry_base_url == 'https://tapestry.test/api/v1'

    @patch.dict('os.environ', {}, clear=True)
    def test_settings_default_values(self):
        """Validar valores por defecto de configuración"""
        settings = Settings(_env_file=None)

        assert settings.tapestry_api_key is None
        assert settings.tapestry_base_url == "https://api.usetapestry.dev/api/v1"
        assert settings.tapestry_blockchain == "SOLANA"
        assert settings.tapestry_execution == "FAST_UNCONFIRMED"
        assert settings.rewards_feed_page_size == 50
        assert settings.rewards_comment_concurrency == 5
        assert settings.rewards_leaderboard_size == 5
        assert settings.app_env == "development"

    @patch.dict('os.environ', {
        'REWARDS_COMMENT_CONCURRENCY': '2',
        'TAPESTRY_TIMEOUT_SECONDS': '3.5',
    })
    def test_settings_numeric_overrides(self):
        """Validar que los parámetros numéricos se parseen desde el entorno"""
        settings = Settings()

        assert settings.rewards_comment_concurrency == 2
        assert settings.tapestry_timeout_seconds == 3.5

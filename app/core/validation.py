"""
Validación de entrada - se ejecuta antes de tocar el servicio externo
"""

import re
from typing import Any


# Direcciones de wallet: 20-50 caracteres alfanuméricos
WALLET_ADDRESS_PATTERN = re.compile(r"[A-Za-z0-9]{20,50}")


class InvalidRequestError(Exception):
    """Raised when a request field is missing or malformed. Never reaches upstream."""
    pass


def require_string(value: Any, field: str) -> str:
    """
    Valida que un campo requerido sea un string no vacío.

    Retorna el valor sin tocar (el trim lo decide quien lo usa).
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(f"{field} is required")
    return value


def optional_string(value: Any) -> str | None:
    """Retorna el string sin espacios o None si viene vacío / no es string"""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def validate_wallet_address(wallet_address: Any) -> str:
    """Valida el formato estricto de wallet que exige el endpoint de rewards"""
    if not isinstance(wallet_address, str) or not WALLET_ADDRESS_PATTERN.fullmatch(wallet_address):
        raise InvalidRequestError(
            "walletAddress is required and must be a valid Solana address"
        )
    return wallet_address

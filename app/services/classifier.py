"""
Classifier - Decide qué es cada contenido y cada comentario.

Funciones puras, sin I/O. Entradas ausentes o mal formadas se tratan siempre
como el caso negativo (Post / no-completion), nunca lanzan.

Detección de quest (de mayor a menor prioridad):
1. content["type"] == "quest"
2. properties contiene {"key": "type", "value": "quest"}
3. El texto, sin espacios a la izquierda y en mayúsculas, empieza con "[QUEST]"

Esto cubre contenido creado por versiones viejas (solo prefijo en el texto)
y nuevas (propiedad explícita) del creador de quests.
"""

from typing import Any

from app.models.content import ContentKind

QUEST_TYPE = "quest"
QUEST_TEXT_TAG = "[QUEST]"

COMPLETION_MARKER = "✅ Completed:"
COMPLETION_TX_MARKER = "Tx:"
COMPLETION_FALLBACK_MARKER = "GRAVEYARD_QUEST_COMPLETE"


def _has_quest_property(properties: Any) -> bool:
    if not isinstance(properties, list):
        return False
    return any(
        isinstance(prop, dict)
        and prop.get("key") == "type"
        and prop.get("value") == QUEST_TYPE
        for prop in properties
    )


def is_quest_content(content: Any) -> bool:
    """True si el contenido crudo de Tapestry es una quest"""
    if not isinstance(content, dict):
        return False

    if content.get("type") == QUEST_TYPE:
        return True

    if _has_quest_property(content.get("properties")):
        return True

    text = content.get("text")
    if not isinstance(text, str):
        return False
    return text.lstrip().upper().startswith(QUEST_TEXT_TAG)


def classify_content(content: Any) -> ContentKind:
    """Post o Quest para un contenido crudo del feed"""
    return ContentKind.QUEST if is_quest_content(content) else ContentKind.POST


def is_completion_comment(text: Any) -> bool:
    """
    Un comentario es prueba de completion si trae el marcador "✅ Completed:"
    y además una referencia de transacción ("Tx:") o el token de prueba
    textual (GRAVEYARD_QUEST_COMPLETE) para completions sin transacción.
    """
    if not isinstance(text, str):
        return False
    return COMPLETION_MARKER in text and (
        COMPLETION_TX_MARKER in text or COMPLETION_FALLBACK_MARKER in text
    )

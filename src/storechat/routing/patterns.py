"""Literal phrase matcher for database and knowledge questions.

Substring containment on the lower-cased message, so "vale" also fires
inside "equivale". Each category contributes a flat bonus when any of
its phrases is present; ties are settled by the classifier.
"""

from __future__ import annotations

from dataclasses import dataclass

from storechat.constants import PATTERN_MATCH_BONUS

DATABASE_PHRASES: tuple[str, ...] = (
    "cuántos",
    "cuántas",
    "cuánto",
    "cuánta",
    "hay en stock",
    "hay disponibles",
    "tienen en",
    "precio de",
    "cuesta",
    "vale",
    "qué productos",
    "qué modelos",
    "stock de",
    "disponibilidad de",
    "usuarios registrados",
    "clientes registrados",
    "ventas",
    "compras realizadas",
    "categoría",
    "categorías",
    "marca",
    "marcas",
    "estadísticas",
    "estadistica",
    "listar productos",
    "mostrar productos",
    "inventario",
    "catálogo",
    "catalogo",
    "disponible",
    "tienen",
    "tienes",
)

KNOWLEDGE_PHRASES: tuple[str, ...] = (
    "cuándo salió",
    "cuando salio",
    "qué es",
    "que es",
    "historia de",
    "origen de",
    "diferencia entre",
    "comparar",
    "mejor que",
    "vs",
    "versus",
    "cómo funciona",
    "como funciona",
    "características de",
    "especificaciones técnicas generales",
    "qué significa",
    "que significa",
    "definición",
    "definicion",
)


@dataclass(frozen=True)
class PatternMatch:
    """Which phrase lists matched at least once."""

    database: bool
    knowledge: bool

    @property
    def database_bonus(self) -> int:
        return PATTERN_MATCH_BONUS if self.database else 0

    @property
    def knowledge_bonus(self) -> int:
        return PATTERN_MATCH_BONUS if self.knowledge else 0


def _contains_any(text: str, phrases: tuple[str, ...]) -> bool:
    return any(p in text for p in phrases)


def match_patterns(text: str) -> PatternMatch:
    """Match an already lower-cased message against both phrase lists."""
    return PatternMatch(
        database=_contains_any(text, DATABASE_PHRASES),
        knowledge=_contains_any(text, KNOWLEDGE_PHRASES),
    )

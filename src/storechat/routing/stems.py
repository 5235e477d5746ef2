"""Weighted stem scorer.

Tokens are reduced with the Snowball Spanish stemmer, then every stem
is tested against every keyword fragment of both weight tables by
substring containment. A stem may hit several fragments and collect
all of their weights.

The tokenizer keeps runs of Unicode word characters, so accented
letters stay inside a token and "salió" is stemmed as one word rather
than cut at the accent. The weight tables are written against those
whole-word stems. This split is intentional and does not reproduce an
ASCII-only tokenizer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

import snowballstemmer

DATABASE_WEIGHTS: dict[str, int] = {
    "stock": 3,
    "precio": 3,
    "dispon": 2,
    "producto": 2,
    "usuario": 2,
    "venta": 2,
    "categoria": 2,
    "marca": 2,
    "inventario": 2,
    "catalogo": 2,
    "cuanto": 2,
    "cuanta": 2,
}

KNOWLEDGE_WEIGHTS: dict[str, int] = {
    "historia": 3,
    "cuando": 2,
    "salió": 2,
    "definicion": 3,
    "significa": 2,
    "funciona": 2,
    "diferencia": 2,
    "compar": 2,
    "mejor": 2,
    "versus": 2,
    "vs": 2,
    "origen": 2,
}

_WORD_RE = re.compile(r"\w+")
_stemmer = snowballstemmer.stemmer("spanish")


@dataclass(frozen=True)
class CategoryScores:
    database: int = 0
    knowledge: int = 0


def tokenize(text: str) -> list[str]:
    """Split on whitespace and punctuation; accents stay in the token."""
    return _WORD_RE.findall(text)


@lru_cache(maxsize=4096)
def stem(token: str) -> str:
    return str(_stemmer.stemWord(token))


def _weigh(stem_text: str, table: dict[str, int]) -> int:
    return sum(w for frag, w in table.items() if frag in stem_text)


def score_stems(text: str) -> CategoryScores:
    """Score an already lower-cased message against both weight tables."""
    db_score = 0
    kn_score = 0
    for token in tokenize(text):
        s = stem(token)
        db_score += _weigh(s, DATABASE_WEIGHTS)
        kn_score += _weigh(s, KNOWLEDGE_WEIGHTS)
    return CategoryScores(database=db_score, knowledge=kn_score)

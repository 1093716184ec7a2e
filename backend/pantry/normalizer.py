"""
Ingredient Normalizer
Canonical form used for every ingredient comparison
"""

import re
from typing import Iterable

_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lower-case, trim and collapse internal whitespace.

    No stemming, plural handling or synonyms: "eggs" stays "eggs".
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip().lower()


def normalize_all(items: Iterable[str]) -> list[str]:
    """Canonical forms in input order, blanks and repeats dropped"""
    seen = set()
    result = []
    for item in items:
        canonical = normalize(item)
        if canonical and canonical not in seen:
            seen.add(canonical)
            result.append(canonical)
    return result


def clean_user_ingredients(raw: Iterable[str]) -> list[str]:
    """Drop blank entries but keep the rest exactly as typed"""
    return [item for item in raw if item and item.strip()]

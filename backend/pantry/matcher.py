"""
Fuzzy Matcher
Bidirectional substring containment between canonical ingredient names
"""

from typing import Iterable


def matches(user_ingredient: str, recipe_ingredient: str) -> bool:
    """True if either canonical string contains the other.

    Permissive on purpose: "egg" matches "eggs" and "chicken" matches
    "chicken breast", but "pea" also matches "peanut".
    """
    if not user_ingredient or not recipe_ingredient:
        return False
    return user_ingredient in recipe_ingredient or recipe_ingredient in user_ingredient


def matches_any(user_ingredient: str, recipe_ingredients: Iterable[str]) -> bool:
    return any(matches(user_ingredient, recipe_ing) for recipe_ing in recipe_ingredients)

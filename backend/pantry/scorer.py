"""
Recipe Scorer
Computes the match score and matched/missing ingredients of a recipe
"""

from typing import Iterable

from pantry.matcher import matches_any
from pantry.models import MatchResult, Recipe, ScoredRecipe
from pantry.normalizer import normalize, normalize_all


def score(user_ingredients: Iterable[str], candidate: Recipe) -> MatchResult:
    """
    Score one candidate against the user's ingredients

    The score is the percentage of user ingredients found in the recipe,
    each user ingredient counted once however many recipe lines it hits.
    Missing ingredients are the recipe lines no user ingredient covers,
    reported by their display name.
    """
    users = normalize_all(user_ingredients)
    raw_names = candidate.ingredient_names()
    recipe_names = [normalize(name) for name in raw_names]

    matched = [user_ing for user_ing in users if matches_any(user_ing, recipe_names)]
    missing = [
        raw for raw, canonical in zip(raw_names, recipe_names)
        if not matches_any(canonical, users)
    ]

    if not users:
        match_score = 0
    else:
        match_score = round(len(matched) / len(users) * 100)

    return MatchResult(matched=matched, missing=missing, score=match_score)


def score_all(user_ingredients: Iterable[str], candidates: Iterable[Recipe]) -> list[ScoredRecipe]:
    """Score every candidate, keeping input order"""
    users = normalize_all(user_ingredients)
    return [ScoredRecipe(recipe=candidate, match=score(users, candidate)) for candidate in candidates]

"""
Pantry Chef Core Module
Matches the ingredients a user has against recipe candidates and ranks them
"""

from pantry.normalizer import normalize
from pantry.matcher import matches
from pantry.scorer import score
from pantry.aggregator import aggregate
from pantry.ranking import rank
from pantry.fallback import synthesize
from pantry.finder import find_recipes, validate_ingredients
from pantry.models import Recipe, Ingredient, CandidateRef, MatchResult, RankedResult, SearchStatus
from pantry.errors import (
    PantryError,
    ProviderError,
    RateLimitError,
    ProviderUnavailableError,
    IngredientValidationError,
)

__all__ = [
    "normalize",
    "matches",
    "score",
    "aggregate",
    "rank",
    "synthesize",
    "find_recipes",
    "validate_ingredients",
    "Recipe",
    "Ingredient",
    "CandidateRef",
    "MatchResult",
    "RankedResult",
    "SearchStatus",
    "PantryError",
    "ProviderError",
    "RateLimitError",
    "ProviderUnavailableError",
    "IngredientValidationError",
]

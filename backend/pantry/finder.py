"""
Recipe Finder
Entry point tying aggregation, scoring, ranking and the fallback together
"""

import asyncio
import logging
from typing import Optional

from config import MAX_ALTERNATES, MAX_INGREDIENTS
from pantry.aggregator import aggregate
from pantry.errors import IngredientValidationError, ProviderUnavailableError
from pantry.fallback import synthesize
from pantry.models import RankedResult, Recipe, ScoredRecipe, SearchStatus
from pantry.normalizer import clean_user_ingredients
from pantry.providers.base import RecipeProvider, check_provider_health
from pantry.ranking import rank, rankable, select
from pantry.scorer import score_all

logger = logging.getLogger(__name__)

EMPTY_RESULT = RankedResult(
    primary=None,
    alternates=[],
    used_fallback=False,
    status=SearchStatus.EMPTY
)


def validate_ingredients(raw: list[str], max_ingredients: int = MAX_INGREDIENTS) -> list[str]:
    """Blank-filtered ingredient list, or IngredientValidationError if the count is off"""
    ingredients = clean_user_ingredients(raw)
    if not ingredients:
        raise IngredientValidationError("Please enter at least one ingredient")
    if len(ingredients) > max_ingredients:
        raise IngredientValidationError(
            f"Please enter at most {max_ingredients} ingredients (got {len(ingredients)})"
        )
    return ingredients


def _fallback_result(user_ingredients: list[str]) -> RankedResult:
    return RankedResult(
        primary=synthesize(user_ingredients),
        alternates=[],
        used_fallback=True,
        status=SearchStatus.FALLBACK
    )


def _to_result(ordered: list[ScoredRecipe], status: SearchStatus) -> RankedResult:
    ranking = select(ordered, MAX_ALTERNATES) if status is SearchStatus.RELATED else rank(ordered, MAX_ALTERNATES)
    chosen = [ranking.primary] + ranking.alternates
    return RankedResult(
        primary=ranking.primary.recipe,
        alternates=[item.recipe for item in ranking.alternates],
        used_fallback=False,
        status=status,
        matches={item.recipe.id: item.match for item in chosen}
    )


async def _collect(user_ingredients: list[str], provider: RecipeProvider) -> list[Recipe]:
    if not await check_provider_health(provider):
        raise ProviderUnavailableError("Recipe provider health check failed")
    return await aggregate(user_ingredients, provider)


async def find_recipes(
    user_ingredients: list[str],
    provider: RecipeProvider,
    timeout: Optional[float] = None
) -> RankedResult:
    """
    Find and rank recipes for the user's ingredients

    - blank-only input: empty result, no provider calls
    - provider unreachable, every lookup failing or a timeout: fallback recipe
    - candidates found but none matches an ingredient: the unranked pool
    - otherwise: ranked matches
    - no candidates at all: fallback recipe
    """
    ingredients = clean_user_ingredients(user_ingredients)
    if not ingredients:
        return EMPTY_RESULT
    if len(ingredients) > MAX_INGREDIENTS:
        raise IngredientValidationError(
            f"Please enter at most {MAX_INGREDIENTS} ingredients (got {len(ingredients)})"
        )

    try:
        if timeout:
            candidates = await asyncio.wait_for(_collect(ingredients, provider), timeout)
        else:
            candidates = await _collect(ingredients, provider)
    except ProviderUnavailableError as e:
        logger.info("No provider data (%s); generating fallback recipe", e)
        return _fallback_result(ingredients)
    except asyncio.TimeoutError:
        logger.info("Recipe search timed out after %ss; generating fallback recipe", timeout)
        return _fallback_result(ingredients)

    scored = score_all(ingredients, candidates)
    matched = rankable(scored)
    if matched:
        logger.debug("%d of %d candidates matched", len(matched), len(scored))
        return _to_result(matched, SearchStatus.MATCHED)
    if scored:
        logger.info("No candidate matched any ingredient; showing %d related recipes", len(scored))
        return _to_result(scored, SearchStatus.RELATED)

    logger.info("No recipe candidates found; generating fallback recipe")
    return _fallback_result(ingredients)

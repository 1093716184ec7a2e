"""
Candidate Aggregator
Fans out one provider lookup per user ingredient and collects the
de-duplicated candidate pool
"""

import asyncio
import logging
from typing import Iterable

from config import DETAIL_FETCH_CONCURRENCY
from pantry.errors import ProviderUnavailableError
from pantry.models import CandidateRef, Recipe
from pantry.normalizer import normalize_all
from pantry.providers.base import RecipeProvider

logger = logging.getLogger(__name__)


async def aggregate(
    user_ingredients: Iterable[str],
    provider: RecipeProvider,
    concurrency: int = DETAIL_FETCH_CONCURRENCY
) -> list[Recipe]:
    """
    Collect recipe candidates for the user's ingredients

    Lookups run in the order the ingredients were given. Detail fetches for
    the references of one lookup run concurrently, at most `concurrency` at
    a time. A failed lookup or detail fetch only loses its own contribution;
    if every lookup fails, ProviderUnavailableError is raised.

    Output order is the order in which each id was first seen.
    """
    ingredients = normalize_all(user_ingredients)
    semaphore = asyncio.Semaphore(max(1, concurrency))
    seen: set[str] = set()
    order: list[str] = []
    pool: dict[str, Recipe] = {}
    failed_lookups = 0

    async def fetch(ref: CandidateRef) -> None:
        async with semaphore:
            try:
                recipe = await provider.fetch_details(ref.id)
            except Exception as e:
                logger.warning("Detail fetch failed for %s: %s", ref.id, e)
                return
        if recipe is None:
            logger.debug("No details for %s", ref.id)
            return
        pool[ref.id] = recipe

    for ingredient in ingredients:
        try:
            refs = await provider.lookup_by_ingredient(ingredient)
        except Exception as e:
            failed_lookups += 1
            logger.warning("Lookup failed for %r: %s", ingredient, e)
            continue

        new_refs = []
        for ref in refs:
            if ref.id in seen:
                continue
            seen.add(ref.id)
            order.append(ref.id)
            new_refs.append(ref)

        logger.debug("Lookup %r: %d refs, %d new", ingredient, len(refs), len(new_refs))
        await asyncio.gather(*(fetch(ref) for ref in new_refs))

    if ingredients and failed_lookups == len(ingredients):
        raise ProviderUnavailableError(
            f"All {failed_lookups} ingredient lookups failed"
        )

    candidates = []
    recipe_ids = set()
    for ref_id in order:
        recipe = pool.get(ref_id)
        if recipe is None or recipe.id in recipe_ids:
            continue
        recipe_ids.add(recipe.id)
        candidates.append(recipe)
    return candidates

"""Aggregator and find_recipes tests"""

import pytest

from conftest import FakeProvider, make_recipe
from pantry.aggregator import aggregate
from pantry.errors import IngredientValidationError, ProviderError, ProviderUnavailableError
from pantry.finder import find_recipes, validate_ingredients
from pantry.models import SearchStatus


class TestAggregate:
    @pytest.mark.asyncio
    async def test_dedup_across_lookups(self, chicken_provider):
        candidates = await aggregate(["chicken", "rice"], chicken_provider)
        assert [r.id for r in candidates] == ["1", "2", "3"]
        # "2" is referenced twice but fetched once
        assert chicken_provider.detail_calls.count("2") == 1

    @pytest.mark.asyncio
    async def test_lookups_use_canonical_form_in_order(self, chicken_provider):
        await aggregate(["  Rice ", "CHICKEN"], chicken_provider)
        assert chicken_provider.lookup_calls == ["rice", "chicken"]

    @pytest.mark.asyncio
    async def test_failed_lookup_skips_only_that_ingredient(self):
        provider = FakeProvider(
            lookups={"beef": ProviderError("down"), "rice": ["3"]},
            recipes={"3": make_recipe("3", "rice")}
        )
        candidates = await aggregate(["beef", "rice"], provider)
        assert [r.id for r in candidates] == ["3"]

    @pytest.mark.asyncio
    async def test_detail_failure_and_miss_do_not_abort(self):
        provider = FakeProvider(
            lookups={"rice": ["1", "2", "3", "4"]},
            recipes={"1": make_recipe("1", "rice"), "2": make_recipe("2", "rice"), "4": make_recipe("4", "rice")},
            failing_details={"2"}
        )
        candidates = await aggregate(["rice"], provider)
        assert [r.id for r in candidates] == ["1", "4"]
        assert sorted(provider.detail_calls) == ["1", "2", "3", "4"]

    @pytest.mark.asyncio
    async def test_all_lookups_failing_raises(self):
        provider = FakeProvider(
            lookups={"rice": ProviderError("down"), "egg": ProviderError("down")},
            recipes={}
        )
        with pytest.raises(ProviderUnavailableError):
            await aggregate(["rice", "egg"], provider)

    @pytest.mark.asyncio
    async def test_detail_concurrency_is_bounded(self):
        ids = [str(i) for i in range(12)]
        provider = FakeProvider(
            lookups={"rice": ids},
            recipes={i: make_recipe(i, "rice") for i in ids}
        )
        candidates = await aggregate(["rice"], provider, concurrency=3)
        assert len(candidates) == 12
        assert provider.max_in_flight <= 3
        assert provider.max_in_flight > 1


class TestValidateIngredients:
    def test_filters_blanks(self):
        assert validate_ingredients(["egg", " ", ""]) == ["egg"]

    def test_rejects_empty(self):
        with pytest.raises(IngredientValidationError):
            validate_ingredients(["", "  "])

    def test_rejects_more_than_five(self):
        with pytest.raises(IngredientValidationError):
            validate_ingredients(["a", "b", "c", "d", "e", "f"])


class TestFindRecipes:
    @pytest.mark.asyncio
    async def test_single_ingredient_primary(self):
        provider = FakeProvider(
            lookups={"chicken": ["1"]},
            recipes={"1": make_recipe("1", "chicken breast", "salt")}
        )
        result = await find_recipes(["chicken"], provider)
        assert result.status is SearchStatus.MATCHED
        assert result.used_fallback is False
        assert result.primary.id == "1"
        match = result.matches["1"]
        assert match.matched == ["chicken"]
        assert match.score == 100
        assert match.missing == ["salt"]

    @pytest.mark.asyncio
    async def test_fully_coverable_recipe_ranks_first(self):
        provider = FakeProvider(
            lookups={"egg": ["X", "Y"], "rice": ["X"], "onion": ["X"]},
            recipes={
                "X": make_recipe("X", "egg", "rice", "onion", "oil"),
                "Y": make_recipe("Y", "egg"),
            }
        )
        result = await find_recipes(["egg", "rice", "onion"], provider)
        assert result.primary.id == "Y"
        assert [r.id for r in result.alternates] == ["X"]

    @pytest.mark.asyncio
    async def test_all_lookups_fail_uses_fallback(self):
        provider = FakeProvider(
            lookups={"tofu": ProviderError("down"), "kale": ProviderError("down")},
            recipes={}
        )
        result = await find_recipes(["tofu", "kale"], provider)
        assert result.used_fallback is True
        assert result.status is SearchStatus.FALLBACK
        assert result.primary.your_ingredients == ["tofu", "kale"]
        assert "tofu" in result.primary.title
        assert result.primary.is_synthetic
        assert result.alternates == []

    @pytest.mark.asyncio
    async def test_blank_input_makes_no_calls(self, chicken_provider):
        result = await find_recipes(["", "   "], chicken_provider)
        assert result.primary is None
        assert result.alternates == []
        assert result.used_fallback is False
        assert result.status is SearchStatus.EMPTY
        assert chicken_provider.lookup_calls == []

    @pytest.mark.asyncio
    async def test_too_many_ingredients_rejected_before_io(self, chicken_provider):
        with pytest.raises(IngredientValidationError):
            await find_recipes(["a", "b", "c", "d", "e", "f"], chicken_provider)
        assert chicken_provider.lookup_calls == []

    @pytest.mark.asyncio
    async def test_no_candidates_uses_fallback(self):
        provider = FakeProvider(lookups={"saffron": []}, recipes={})
        result = await find_recipes(["saffron"], provider)
        assert result.used_fallback is True
        assert result.primary.title == "Simple saffron Dish"

    @pytest.mark.asyncio
    async def test_unhealthy_provider_uses_fallback(self, chicken_provider):
        chicken_provider.healthy = False
        result = await find_recipes(["chicken"], chicken_provider)
        assert result.used_fallback is True
        assert chicken_provider.lookup_calls == []

    @pytest.mark.asyncio
    async def test_timeout_uses_fallback(self, chicken_provider):
        chicken_provider.delay = 1
        result = await find_recipes(["chicken"], chicken_provider, timeout=0.05)
        assert result.used_fallback is True

    @pytest.mark.asyncio
    async def test_unmatched_pool_is_shown_unranked(self):
        # The provider returns recipes that do not contain the ingredient
        provider = FakeProvider(
            lookups={"truffle": ["a", "b", "c", "d", "e"]},
            recipes={i: make_recipe(i, "pasta", "cream") for i in "abcde"}
        )
        result = await find_recipes(["truffle"], provider)
        assert result.status is SearchStatus.RELATED
        assert result.used_fallback is False
        assert result.primary.id == "a"
        assert [r.id for r in result.alternates] == ["b", "c", "d"]
        assert result.matches["a"].score == 0

    @pytest.mark.asyncio
    async def test_shared_candidate_appears_once(self, chicken_provider):
        result = await find_recipes(["chicken", "rice"], chicken_provider)
        ids = [result.primary.id] + [r.id for r in result.alternates]
        # "3" needs only rice; "2" matches both but misses onion
        assert ids == ["3", "2", "1"]

    @pytest.mark.asyncio
    async def test_unmatched_candidates_dropped_when_others_match(self):
        provider = FakeProvider(
            lookups={"rice": ["1", "2"]},
            recipes={"1": make_recipe("1", "pasta"), "2": make_recipe("2", "rice", "beans")}
        )
        result = await find_recipes(["rice"], provider)
        assert result.primary.id == "2"
        assert result.alternates == []

    @pytest.mark.asyncio
    async def test_never_empty_without_fallback_for_real_input(self):
        for provider in (
            FakeProvider(lookups={}, recipes={}),
            FakeProvider(lookups={"egg": ProviderError("x")}, recipes={}),
            FakeProvider(lookups={"egg": ["1"]}, recipes={}),
        ):
            result = await find_recipes(["egg"], provider)
            assert result.primary is not None

    @pytest.mark.asyncio
    async def test_to_dict_merges_match_info(self, chicken_provider):
        result = await find_recipes(["chicken"], chicken_provider)
        data = result.to_dict()
        assert data["status"] == "matched"
        assert data["primary"]["match_score"] == 100
        assert "missing_ingredients" in data["primary"]

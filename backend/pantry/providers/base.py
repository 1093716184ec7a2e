"""
Recipe Provider Interface
The protocol the search core consumes, and a shared async HTTP client base
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

import httpx

from config import CACHE_TTL, HTTP_MAX_RETRIES, HTTP_RETRY_DELAY, HTTP_TIMEOUT
from pantry.errors import ProviderError, RateLimitError
from pantry.models import CandidateRef, Recipe

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = [429, 500, 502, 503, 522]


@runtime_checkable
class RecipeProvider(Protocol):
    """Anything that can look up recipes by ingredient and fetch their details.

    Both calls signal failure by raising; a missing recipe is None.
    """

    async def lookup_by_ingredient(self, ingredient: str) -> list[CandidateRef]:
        ...

    async def fetch_details(self, recipe_id: str) -> Optional[Recipe]:
        ...


async def check_provider_health(provider: RecipeProvider) -> bool:
    """Providers without a health check are assumed healthy"""
    check = getattr(provider, "check_health", None)
    if check is None:
        return True
    try:
        return bool(await check())
    except Exception as e:
        logger.warning("Provider health check failed: %s", e)
        return False


class HTTPRecipeProvider:
    """Base class for JSON-over-HTTP recipe providers"""

    name = "http"

    def __init__(
        self,
        base_url: str,
        timeout: float = HTTP_TIMEOUT,
        max_retries: int = HTTP_MAX_RETRIES,
        retry_delay: float = HTTP_RETRY_DELAY,
        cache_ttl: int = CACHE_TTL,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.transport = transport
        # Simple in-memory cache
        self._cache: dict = {}
        self._cache_ttl = cache_ttl

    def _cache_key(self, endpoint: str, params: dict) -> str:
        """Generate cache key"""
        param_str = json.dumps(sorted(params.items()), default=str)
        return f"{endpoint}:{param_str}"

    def _get_cached(self, key: str):
        """Get cached result if valid"""
        if key in self._cache:
            result, timestamp = self._cache[key]
            if (datetime.now() - timestamp).total_seconds() < self._cache_ttl:
                return result
            del self._cache[key]
        return None

    def _set_cache(self, key: str, result):
        """Cache a result"""
        self._cache[key] = (result, datetime.now())
        # Limit cache size
        if len(self._cache) > 100:
            oldest = min(self._cache.keys(), key=lambda k: self._cache[k][1])
            del self._cache[oldest]

    def _prepare_params(self, params: dict) -> dict:
        """Hook for subclasses to add credentials"""
        return params

    async def _get(self, endpoint: str, params: dict = None, use_cache: bool = True):
        """
        GET a JSON document with retry logic

        Returns None on 404. Raises RateLimitError on 402, or on 429 once
        retries are exhausted, and ProviderError for every other failure.
        """
        params = params or {}

        cache_key = self._cache_key(endpoint, params)
        if use_cache:
            cached = self._get_cached(cache_key)
            if cached is not None:
                return cached

        request_params = self._prepare_params(params)
        url = f"{self.base_url}{endpoint}"
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.get(url, params=request_params)
                    if response.status_code == 404:
                        return None
                    response.raise_for_status()
                    result = response.json()

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status == 402:
                    raise RateLimitError(f"{self.name} quota exceeded (402)") from e
                if status in RETRY_STATUS_CODES:
                    last_error = RateLimitError(f"{self.name} rate limited (429)") if status == 429 \
                        else ProviderError(f"{self.name} API error: {status}")
                    if attempt < self.max_retries - 1:
                        await asyncio.sleep(self.retry_delay * (attempt + 1))
                        continue
                    raise last_error from e
                raise ProviderError(f"{self.name} API error: {status}") from e

            except httpx.TimeoutException as e:
                last_error = ProviderError(f"{self.name} API timeout")
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(self.retry_delay * (attempt + 1))
                    continue
                raise last_error from e

            except httpx.RequestError as e:
                raise ProviderError(f"{self.name} network error: {e}") from e

            except ValueError as e:
                raise ProviderError(f"{self.name} returned invalid JSON") from e

            if use_cache:
                self._set_cache(cache_key, result)
            return result

        raise last_error or ProviderError(f"{self.name} request failed")

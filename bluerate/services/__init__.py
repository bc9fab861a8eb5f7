"""Service layer modules."""

from .rate_cache import CacheEntry, CacheKey, RateCache, RateKind, init_cache
from .rate_service import RateService, init_rate_service

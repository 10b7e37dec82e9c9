"""Cache providers.

In-memory TTL cache used to avoid repeating external geolocation calls for
addresses already resolved during this process lifetime.  Not shared across
processes; each worker warms its own cache.
"""

from src.providers.cache.memory_cache import CountryCache

__all__ = ["CountryCache"]

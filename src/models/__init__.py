"""ipcountry domain models: re-exports all public model classes."""

from src.models.geo import CacheEntry, CacheEntryStats, CacheStats, ProviderFailure

__all__ = [
    "CacheEntry",
    "CacheEntryStats",
    "CacheStats",
    "ProviderFailure",
]

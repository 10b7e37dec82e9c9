"""Public interface definitions for external geolocation providers.

Every external lookup service is reached only through :class:`IGeoProvider`.
Concrete adapters live in ``src/providers/geo/`` and are assembled into a
:class:`~src.services.provider_chain.ProviderChain` by ``src/main.py``.
Unit tests inject mocks implementing the same interface.
"""

from src.interfaces.geo_provider import IGeoProvider

__all__ = ["IGeoProvider"]

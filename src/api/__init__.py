"""FastAPI integration: request dependencies and the ``/geoip`` router."""

from src.api.dependencies import ClientAddressDep, ClientCountryDep, ResolverDep
from src.api.routes import router

__all__ = ["ClientAddressDep", "ClientCountryDep", "ResolverDep", "router"]

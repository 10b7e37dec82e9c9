"""FastAPI dependencies for host applications.

Read the resolver stored on ``app.state`` by :func:`src.main.attach_geoip`
and derive the client's address and country for the current request::

    @app.post("/signup")
    async def signup(country: ClientCountryDep) -> ...:
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from src.services.geo_resolver import GeoResolver
from src.utils.address import client_address_from_request


def get_resolver(request: Request) -> GeoResolver:
    """Return the resolver from application state."""
    resolver = getattr(request.app.state, "geo_resolver", None)
    if resolver is None:
        raise HTTPException(status_code=503, detail="Geolocation is not configured")
    return resolver


def get_client_address(request: Request) -> str | None:
    """Return the originating client address (proxy headers first)."""
    return client_address_from_request(request)


ResolverDep = Annotated[GeoResolver, Depends(get_resolver)]
ClientAddressDep = Annotated[str | None, Depends(get_client_address)]


async def get_client_country(resolver: ResolverDep, address: ClientAddressDep) -> str | None:
    """Return the client's country code, or ``None`` if it cannot be resolved."""
    return await resolver.resolve(address)


ClientCountryDep = Annotated[str | None, Depends(get_client_country)]

"""Client address helpers: non-routable filtering and proxy-aware extraction.

``is_non_routable`` decides whether an address is worth sending to an
external geolocation provider at all.  It deliberately works on string
prefixes rather than :mod:`ipaddress` networks, and matches the whole of
``172.0.0.0/8`` (not just ``172.16.0.0/12``).  Callers rely on that
filtering footprint, so do not tighten it without product sign-off.

``extract_client_address`` recovers the originating client address from
reverse-proxy / CDN headers before falling back to the socket peer.
"""

from __future__ import annotations

from collections.abc import Mapping

from starlette.requests import HTTPConnection

_LOOPBACK_ADDRESSES = frozenset({"127.0.0.1", "::1"})

# IPv4 private ranges followed by IPv6 unique-local / link-local.
_NON_ROUTABLE_PREFIXES = (
    "192.168.",
    "10.",
    "172.",
    "fc00:",
    "fd00:",
    "fe80:",
)

# Checked in this order; the first header present wins.
_FORWARDED_FOR_HEADER = "x-forwarded-for"
_REAL_IP_HEADER = "x-real-ip"
_CF_CONNECTING_IP_HEADER = "cf-connecting-ip"

_IPV4_MAPPED_PREFIX = "::ffff:"


def is_non_routable(address: str | None) -> bool:
    """Return ``True`` if *address* is empty, loopback, private or link-local."""
    if not address or address in _LOOPBACK_ADDRESSES:
        return True
    return address.startswith(_NON_ROUTABLE_PREFIXES)


def _header(headers: Mapping[str, str], name: str) -> str | None:
    # Starlette's Headers is already case-insensitive; plain dicts are not.
    value = headers.get(name)
    if value is None and not hasattr(headers, "getlist"):
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
    return value


def extract_client_address(
    headers: Mapping[str, str],
    connection_address: str | None = None,
) -> str | None:
    """Return the originating client address for a request.

    Precedence: first entry of ``X-Forwarded-For`` (trimmed), then
    ``X-Real-IP``, then Cloudflare's ``CF-Connecting-IP``, then the
    transport-level *connection_address*.  The first source present wins;
    nothing is validated or merged across sources.
    """
    forwarded = _header(headers, _FORWARDED_FOR_HEADER)
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = _header(headers, _REAL_IP_HEADER)
    if real_ip:
        return real_ip

    cf_connecting_ip = _header(headers, _CF_CONNECTING_IP_HEADER)
    if cf_connecting_ip:
        return cf_connecting_ip

    return connection_address or None


def _unmap_ipv4(address: str) -> str:
    # Dual-stack listeners report IPv4 peers as ::ffff:a.b.c.d.
    if address.lower().startswith(_IPV4_MAPPED_PREFIX) and "." in address:
        return address[len(_IPV4_MAPPED_PREFIX):]
    return address


def client_address_from_request(request: HTTPConnection) -> str | None:
    """Apply :func:`extract_client_address` to a Starlette/FastAPI request.

    The socket peer is unmapped from ``::ffff:a.b.c.d`` form first, so an
    IPv4 peer on a dual-stack listener is classified as IPv4.  Header values
    are passed through unchanged.
    """
    peer = _unmap_ipv4(request.client.host) if request.client else None
    return extract_client_address(request.headers, peer)

# =============================================================================
# src/cli/lookup.py: Resolve addresses from the command line
# =============================================================================
#
# Runs the same resolver a host application would build, against one or more
# addresses, and prints the country codes.  Useful for checking provider
# credentials and reachability from a deployment shell.
#
#   python -m src.cli.lookup 8.8.8.8 1.1.1.1
#   python -m src.cli.lookup 8.8.8.8 --json --stats
#
# Addresses are resolved sequentially so a repeated address shows up as a
# cache hit.  --json implies --quiet so log lines never mix into the output.
# =============================================================================

"""Standalone CLI for resolving IP addresses to country codes.

Usage::

    python -m src.cli.lookup 8.8.8.8
    python -m src.cli.lookup 8.8.8.8 81.2.69.142 --json
    python -m src.cli.lookup 8.8.8.8 --stats --config config/config.yaml

Exit status is 0 when every address resolved, 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys


async def _run(
    addresses: list[str],
    config_path: str,
    json_output: bool,
    show_stats: bool,
    quiet: bool,
) -> int:
    """Build a resolver, resolve *addresses* in order, print the results."""
    from src.config.loader import load_settings
    from src.main import build_resolver
    from src.utils.errors import ConfigurationError
    from src.utils.logging import configure_logging

    try:
        app_settings = load_settings(config_path)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    # Logs go to stderr so stdout carries only the results.
    configure_logging(
        log_level="WARNING" if quiet else app_settings.log_level,
        stream=sys.stderr,
    )

    results: dict[str, str | None] = {}
    async with build_resolver(app_settings) as resolver:
        for address in addresses:
            results[address] = await resolver.resolve(address)
        stats = resolver.get_cache_stats()

    if json_output:
        payload: dict = {"results": results}
        if show_stats:
            payload["cache"] = stats.model_dump()
        print(json.dumps(payload, indent=2))
    else:
        width = max(len(a) for a in addresses)
        for address, country_code in results.items():
            print(f"{address.ljust(width)}  {country_code or '-'}")
        if show_stats:
            print(f"\ncache entries: {stats.size}")

    return 0 if all(results.values()) else 1


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.lookup",
        description="Resolve IP addresses to two-letter country codes.",
    )
    parser.add_argument(
        "addresses",
        nargs="+",
        help="One or more IP addresses to resolve.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print results as JSON.",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Also print cache statistics after resolving.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML config file (default: config/config.yaml).",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the lookups; exits with the lookup status."""
    args = _build_parser().parse_args(argv)

    exit_code = asyncio.run(
        _run(
            args.addresses,
            args.config,
            args.json_output,
            args.stats,
            quiet=args.quiet or args.json_output,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Preload script for the gateway cache.

Runs one preload sweep over every news country/category combination and
exits non-zero if any combination failed. Meant to be triggered by cron or
another external scheduler instead of the /backup endpoint.
"""

import asyncio
import sys

from nexaview.config import configure_logging, settings
from nexaview.repositories import RedisKeyValueStore
from nexaview.services import GatewayService, PreloadSweeper


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def run_sweep() -> int:
    """Run a single sweep and print its report."""
    store = RedisKeyValueStore.create()
    service = GatewayService.create(store=store)
    sweeper = PreloadSweeper(
        resolver=service.resolver,
        key_space=service.preload_key_space,
        concurrency=settings.sweep_concurrency,
    )

    try:
        report = await sweeper.preload_all()
    finally:
        await service.close()
        await store.close()

    print_section("Preload Sweep")
    print(f"\n  Refreshed: {len(report.succeeded)}/{report.total}")
    for key in report.succeeded:
        print(f"  ✓ {key}")
    for failure in report.failed:
        print(f"  ✗ {failure.key}: {failure.reason}")

    return 0 if report.ok else 1


def main() -> None:
    """Entry point."""
    configure_logging()
    sys.exit(asyncio.run(run_sweep()))


if __name__ == "__main__":
    main()

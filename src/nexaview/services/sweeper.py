"""Preload sweeper.

Eagerly refreshes every key of a known key space through the cache-aside
resolver. One failing target never aborts the rest of the sweep.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable

from nexaview.entities import SweepFailure, SweepReport, SweepTarget
from nexaview.exceptions import ResolveError

from .resolver import CacheAsideResolver

logger = logging.getLogger(__name__)

KeySpace = Callable[[], Iterable[SweepTarget]]


class PreloadSweeper:
    """Bulk cache refresh over an injectable key space.

    The key space is a zero-argument callable yielding SweepTargets, so the
    same control flow serves any domain. By default targets are refreshed
    one after another to stay under a single provider key's rate limit;
    ``concurrency`` above 1 allows that many refreshes at once. Either way
    the report lists targets in enumeration order.

    Example:
        ```python
        sweeper = PreloadSweeper(
            resolver=resolver,
            key_space=lambda: news_key_space(policies, ["us", "sg"], ["general"]),
        )
        report = await sweeper.preload_all()
        ```
    """

    def __init__(
        self,
        resolver: CacheAsideResolver,
        key_space: KeySpace,
        concurrency: int = 1,
    ) -> None:
        """Initialize the sweeper.

        Args:
            resolver: Resolver used to refresh each target (required).
            key_space: Enumerates the targets of one sweep (required).
            concurrency: Maximum refreshes in flight at once.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._resolver = resolver
        self._key_space = key_space
        self._concurrency = concurrency

    async def preload_all(self) -> SweepReport:
        """Refresh every target of the key space.

        Returns:
            SweepReport with the refreshed keys and the failures
        """
        targets = list(self._key_space())
        logger.info("Preloading %d cache entries...", len(targets))

        if self._concurrency == 1:
            outcomes = [await self._refresh(target) for target in targets]
        else:
            semaphore = asyncio.Semaphore(self._concurrency)

            async def bounded(target: SweepTarget) -> SweepFailure | None:
                async with semaphore:
                    return await self._refresh(target)

            outcomes = await asyncio.gather(*(bounded(target) for target in targets))

        report = SweepReport()
        for target, failure in zip(targets, outcomes):
            if failure is None:
                report.succeeded.append(str(target.key))
            else:
                report.failed.append(failure)

        logger.info(
            "Preloading complete: %d refreshed, %d failed",
            len(report.succeeded),
            len(report.failed),
        )
        return report

    async def _refresh(self, target: SweepTarget) -> SweepFailure | None:
        try:
            await self._resolver.refresh(target.key, target.ttl_seconds, target.fetch)
        except ResolveError as e:
            logger.warning("Failed: %s - %s", target.key, e.reason)
            return SweepFailure(key=str(target.key), reason=e.reason)
        return None

# orchestration/fan_out.py
"""
Fan-out Invoker
Sends one (message, language) to every registered provider at once and
waits for all of them to settle. A slow or failing provider never blocks
or discards the results of the others.
"""

import asyncio
import time
from typing import List, Optional, Sequence

from loguru import logger

from ..providers.base import InvocationResult, ProviderAdapter


class FanOutInvoker:
    """
    Concurrent join-all over a fixed adapter set.
    Results come back in registration order, whatever the completion order.
    """

    def __init__(self, providers: Sequence[ProviderAdapter], timeout: Optional[float] = None):
        """
        Args:
            providers: Registered adapters, in registration order
            timeout: Optional safety-net deadline in seconds for each adapter;
                None or 0 disables it
        """
        self.providers = tuple(providers)
        self.timeout = timeout if timeout and timeout > 0 else None

    async def invoke(self, message: str, language: str) -> List[InvocationResult]:
        """
        Call every provider concurrently.

        Returns:
            One InvocationResult per provider, in registration order
        """
        if not self.providers:
            logger.warning("Fan-out skipped: no AI providers registered")
            return []

        start = time.perf_counter()
        settled = await asyncio.gather(
            *(self._invoke_one(provider, message, language) for provider in self.providers),
            return_exceptions=True
        )

        results = []
        for provider, outcome in zip(self.providers, settled):
            if isinstance(outcome, InvocationResult):
                results.append(outcome)
            else:
                # Adapter broke the never-raise contract; isolate it
                logger.error(f"{provider.provider_id} raised through the adapter boundary: {outcome!r}")
                results.append(InvocationResult.failed(provider.provider_id, "error"))

        elapsed = (time.perf_counter() - start) * 1000
        succeeded = sum(1 for r in results if r.ok)
        timings = ", ".join(
            f"{r.provider_id}={'ok' if r.ok else r.failure}/{r.elapsed_ms:.0f}ms" for r in results
        )
        logger.info(f"Fan-out finished: {succeeded}/{len(results)} succeeded in {elapsed:.0f}ms [{timings}]")

        return results

    async def _invoke_one(self, provider: ProviderAdapter, message: str, language: str) -> InvocationResult:
        if self.timeout is None:
            return await provider.invoke(message, language)

        start = time.perf_counter()
        try:
            return await asyncio.wait_for(provider.invoke(message, language), timeout=self.timeout)
        except asyncio.TimeoutError:
            elapsed = (time.perf_counter() - start) * 1000
            logger.warning(f"{provider.provider_id} exceeded fan-out timeout of {self.timeout}s")
            return InvocationResult.failed(provider.provider_id, "timeout", elapsed)

    async def candidates(self, message: str, language: str) -> list:
        """Candidate-or-None per provider, in registration order"""
        return [result.candidate for result in await self.invoke(message, language)]

# providers/base.py
"""
Provider Adapter Base
Uniform contract for every text-generation backend:

- call() returns a Candidate or None and never raises
- invoke() returns the same outcome as an InvocationResult with the
  failure reason and latency, for fan-out logging
- subclasses only implement _generate(), which may raise

Failure taxonomy absorbed at this boundary:
- ProviderUnavailable: network error, timeout, non-2xx status
- MalformedProviderResponse: missing fields or empty text
"""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import httpx
from loguru import logger


# Confidence heuristic (not calibrated)
NATURAL_STOP_CONFIDENCE = 0.9
DEFAULT_CONFIDENCE = 0.7


# ============================================
# Errors
# ============================================

class ProviderError(Exception):
    """Base class for failures inside a provider adapter"""

    reason = "error"

    def __init__(self, provider_id: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{provider_id}: {message}")
        self.provider_id = provider_id
        self.status_code = status_code


class ProviderUnavailable(ProviderError):
    """Network failure, timeout, or non-success HTTP status"""

    reason = "unavailable"


class MalformedProviderResponse(ProviderError):
    """Response received but missing expected fields or text"""

    reason = "malformed"


# ============================================
# Data Model
# ============================================

@dataclass(frozen=True)
class Candidate:
    """A normalized successful response from one provider"""
    text: str
    confidence: float
    provider_id: str

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError("Candidate text must be non-empty")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Candidate confidence out of range: {self.confidence}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InvocationResult:
    """Outcome of one provider call: a candidate or a failure reason"""
    provider_id: str
    candidate: Optional[Candidate] = None
    failure: Optional[str] = None
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.candidate is not None

    @classmethod
    def succeeded(cls, candidate: Candidate, elapsed_ms: float = 0.0) -> "InvocationResult":
        return cls(provider_id=candidate.provider_id, candidate=candidate, elapsed_ms=elapsed_ms)

    @classmethod
    def failed(cls, provider_id: str, reason: str, elapsed_ms: float = 0.0) -> "InvocationResult":
        return cls(provider_id=provider_id, failure=reason, elapsed_ms=elapsed_ms)


def confidence_from_finish_reason(finish_reason: Optional[str]) -> float:
    """0.9 for a natural stop, 0.7 for truncated or unknown completions"""
    if finish_reason and str(finish_reason).lower() == "stop":
        return NATURAL_STOP_CONFIDENCE
    return DEFAULT_CONFIDENCE


# ============================================
# Adapter Base
# ============================================

class ProviderAdapter(ABC):
    """
    One instance per backend. Constructed once at startup and shared
    read-only by every request.
    """

    provider_id: str = "provider"

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    @abstractmethod
    async def _generate(self, message: str, language: str) -> Candidate:
        """Call the backend and normalize its response; may raise"""

    async def invoke(self, message: str, language: str) -> InvocationResult:
        """
        Call the backend and report the outcome.

        Args:
            message: User's chat message
            language: Language code used for prompt interpolation

        Returns:
            InvocationResult, never raises
        """
        start = time.perf_counter()
        try:
            candidate = await self._generate(message, language)
        except ProviderError as e:
            elapsed = (time.perf_counter() - start) * 1000
            logger.warning(f"{self.provider_id} failed ({e.reason}): {e}")
            return InvocationResult.failed(self.provider_id, e.reason, elapsed)
        except Exception as e:
            elapsed = (time.perf_counter() - start) * 1000
            logger.error(f"{self.provider_id} unexpected error: {e!r}")
            return InvocationResult.failed(self.provider_id, "error", elapsed)

        elapsed = (time.perf_counter() - start) * 1000
        return InvocationResult.succeeded(candidate, elapsed)

    def _make_candidate(self, text: str, confidence: float) -> Candidate:
        """Build this provider's Candidate; invariant violations count as malformed"""
        try:
            return Candidate(text=text, confidence=confidence, provider_id=self.provider_id)
        except ValueError as e:
            raise MalformedProviderResponse(self.provider_id, str(e)) from e

    async def call(self, message: str, language: str) -> Optional[Candidate]:
        """Candidate on success, None on any failure. Never raises."""
        result = await self.invoke(message, language)
        return result.candidate

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider_id={self.provider_id!r})"


class HTTPProviderAdapter(ProviderAdapter):
    """
    Adapter for backends reached with plain JSON-over-HTTP.
    Retries 5xx responses a bounded number of times with linear backoff.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 10.0,
        max_attempts: int = 2,
        retry_delay: float = 0.3,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        region: str = "Jharkhand",
        http_client: Optional[httpx.AsyncClient] = None
    ):
        super().__init__(timeout=timeout)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.region = region
        self._http_client = http_client

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    async def _post_json(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload and return the decoded JSON body.

        Raises:
            ProviderUnavailable: network error, timeout, or non-2xx after retries
            MalformedProviderResponse: body is not a JSON object
        """
        if self._http_client is not None:
            return await self._post_with_retry(self._http_client, url, payload)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._post_with_retry(client, url, payload)

    async def _post_with_retry(
        self,
        client: httpx.AsyncClient,
        url: str,
        payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        attempt = 0
        while True:
            attempt += 1
            try:
                response = await client.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
            except httpx.TimeoutException as e:
                raise ProviderUnavailable(self.provider_id, f"timed out after {self.timeout}s") from e
            except httpx.HTTPError as e:
                raise ProviderUnavailable(self.provider_id, f"request failed: {e!r}") from e

            status = response.status_code
            if status >= 500 and attempt < self.max_attempts:
                delay = self.retry_delay * attempt
                logger.warning(
                    f"{self.provider_id} server error (status={status}), "
                    f"retrying in {delay:.2f}s ({attempt}/{self.max_attempts})"
                )
                await asyncio.sleep(delay)
                continue

            if not 200 <= status < 300:
                raise ProviderUnavailable(
                    self.provider_id,
                    f"HTTP {status}: {response.text[:300]}",
                    status_code=status
                )

            try:
                data = response.json()
            except ValueError as e:
                raise MalformedProviderResponse(self.provider_id, "response body is not JSON") from e

            if not isinstance(data, dict):
                raise MalformedProviderResponse(self.provider_id, "response body is not a JSON object")
            return data

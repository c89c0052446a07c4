"""Availability probe for the optional retrieval (Chroma) backend.

The first `check()` loads the `chromadb` client, connects to the configured
server and opens (or creates) the configured collection. The outcome is
cached for the life of the probe; later calls return the same result
without I/O unless `force=True` is passed.

The probe never raises: a missing client module, an unreachable server or
a timeout all come back as `available=False` with a readable reason.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from types import ModuleType
from typing import Callable, Optional
from urllib.parse import urlparse

from ..models.api_models import AvailabilityResult


logger = logging.getLogger(__name__)

MISSING_MODULE_REASON = "chromadb module missing"


def load_chromadb() -> ModuleType:
    """Import the optional Chroma client; raises ImportError when absent."""
    return importlib.import_module("chromadb")


class AvailabilityProbe:
    """Cached, lock-guarded check of the retrieval backend.

    Parameters
    ----------
    url:
        Chroma server URL, e.g. "http://localhost:8000".
    collection:
        Collection to open or create on the server.
    timeout_seconds:
        Default limit for the network step; a per-call value passed to
        `check` takes precedence.
    client_loader:
        Callable returning the `chromadb` module. Defaults to a plain
        import; tests pass fakes.
    """

    def __init__(
        self,
        url: str = "http://localhost:8000",
        collection: str = "shopeasly_data",
        timeout_seconds: float = 5.0,
        client_loader: Optional[Callable[[], ModuleType]] = None,
    ) -> None:
        self.url = url
        self.collection = collection
        self.timeout_seconds = timeout_seconds
        self._client_loader = client_loader or load_chromadb
        self._cached: Optional[AvailabilityResult] = None
        self._lock = asyncio.Lock()

    @property
    def cached(self) -> Optional[AvailabilityResult]:
        return self._cached

    async def check(
        self,
        force: bool = False,
        timeout: Optional[float] = None,
    ) -> AvailabilityResult:
        if self._cached is not None and not force:
            return self._cached

        async with self._lock:
            # Another caller may have filled the cache while we waited.
            if self._cached is not None and not force:
                return self._cached
            self._cached = await self._probe(
                self.timeout_seconds if timeout is None else timeout
            )
            return self._cached

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _result(self, available: bool, reason: Optional[str]) -> AvailabilityResult:
        return AvailabilityResult(
            available=available,
            reason=reason,
            collection=self.collection,
            url=self.url,
        )

    async def _probe(self, timeout: float) -> AvailabilityResult:
        try:
            chromadb = self._client_loader()
        except ImportError:
            logger.info("[RAG] chromadb is not installed; retrieval disabled")
            return self._result(False, MISSING_MODULE_REASON)
        except Exception as exc:
            logger.warning("[RAG] chromadb failed to load: %s", exc)
            return self._result(False, str(exc) or exc.__class__.__name__)

        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._bootstrap_collection, chromadb),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("[RAG] %s did not answer within %ss", self.url, timeout)
            return self._result(False, f"timed out after {timeout}s")
        except Exception as exc:
            logger.warning("[RAG] %s unavailable: %s", self.url, exc)
            return self._result(False, str(exc) or exc.__class__.__name__)

        logger.info("[RAG] Collection %r ready at %s", self.collection, self.url)
        return self._result(True, None)

    def _bootstrap_collection(self, chromadb: ModuleType) -> None:
        parsed = urlparse(self.url)
        ssl = parsed.scheme == "https"
        client = chromadb.HttpClient(
            host=parsed.hostname or "localhost",
            port=parsed.port or (443 if ssl else 8000),
            ssl=ssl,
        )
        client.get_or_create_collection(name=self.collection)

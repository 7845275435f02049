import asyncio
import functools
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional

import requests # External dependency

from clouddetect.config.settings import HTTP_MAX_WORKERS, MAX_REQUEST_TIMEOUT
from clouddetect.core.context import DetectionContext
from clouddetect.exceptions import ProbeError, ProbeTimeoutError
from clouddetect.models import ProviderId
from clouddetect.utils.logging_config import logger


class MetadataHttpClient:
    """
    Issues metadata-service requests with `requests` on a shared thread pool.

    Every request is bounded by what remains of the context's deadline, capped at
    MAX_REQUEST_TIMEOUT per request. No request is started once the context is
    cancelled, and cancelling the awaiting task abandons the request at once; a
    request already on the wire finishes in its thread and its response is dropped.
    """

    _executor: Optional[ThreadPoolExecutor] = None
    _executor_lock = threading.Lock()

    @classmethod
    def _get_executor(cls) -> ThreadPoolExecutor:
        with cls._executor_lock:
            if cls._executor is None:
                cls._executor = ThreadPoolExecutor(max_workers=HTTP_MAX_WORKERS, thread_name_prefix="clouddetect-http")
            return cls._executor

    async def request(self, ctx: DetectionContext, provider: ProviderId, url: str,
                      method: str = 'GET', headers: Optional[Dict[str, str]] = None) -> requests.Response:
        if ctx.cancelled:
            raise ProbeTimeoutError(provider, f"detection cancelled before {method} {url}")
        remaining = ctx.remaining()
        if remaining <= 0:
            raise ProbeTimeoutError(provider, f"deadline elapsed before {method} {url}")
        request_timeout = min(remaining, MAX_REQUEST_TIMEOUT)

        logger.debug(f"[{provider}] {method} {url} (budget {remaining:.3f}s)")
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(
            self._get_executor(),
            functools.partial(self._send, ctx, provider, method, url, headers, request_timeout),
        )
        try:
            return await asyncio.wait_for(future, timeout=remaining)
        except asyncio.TimeoutError:
            raise ProbeTimeoutError(provider, f"deadline elapsed during {method} {url}")
        except requests.exceptions.Timeout:
            raise ProbeTimeoutError(provider, f"timed out after {request_timeout:.3f}s waiting on {url}")
        except requests.exceptions.ConnectionError as e:
            # Connection refused usually means no metadata server at this address.
            raise ProbeError(provider, f"connection error for {url}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise ProbeError(provider, f"request failed for {url}: {type(e).__name__} - {e}") from e

    @staticmethod
    def _send(ctx: DetectionContext, provider: ProviderId, method: str, url: str,
              headers: Optional[Dict[str, str]], timeout: float) -> requests.Response:
        # Runs on a worker thread; the pool may have queued us past a verdict.
        if ctx.cancelled:
            raise ProbeTimeoutError(provider, f"detection cancelled before {method} {url}")
        return requests.request(method, url, headers=headers, timeout=timeout)

    @classmethod
    def shutdown_executor(cls, wait: bool = False):
        """Releases the worker threads; the next request starts a fresh pool."""
        with cls._executor_lock:
            executor, cls._executor = cls._executor, None
        if executor is not None:
            logger.debug("Shutting down MetadataHttpClient's ThreadPoolExecutor.")
            executor.shutdown(wait=wait)

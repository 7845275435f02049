"""
Synchronous entry points for callers without an event loop.

Each call runs its own event loop with ``asyncio.run``, so these functions must
not be called from inside a running loop; use the coroutines in ``clouddetect``
there instead.
"""
import asyncio
from typing import List, Optional

from clouddetect.core.orchestrator import DetectionOrchestrator, Timeout
from clouddetect.core.registry import ProviderRegistry
from clouddetect.models import DetectionReport, ProviderId


def detect(timeout: Optional[Timeout] = None, registry: Optional[ProviderRegistry] = None) -> ProviderId:
    """Detects the host's cloud provider, blocking until a verdict or the timeout."""
    return asyncio.run(DetectionOrchestrator(registry).detect(timeout))


def detect_with_report(timeout: Optional[Timeout] = None,
                       registry: Optional[ProviderRegistry] = None) -> DetectionReport:
    return asyncio.run(DetectionOrchestrator(registry).detect_with_report(timeout))


def supported_providers() -> List[str]:
    return DetectionOrchestrator().supported_providers()

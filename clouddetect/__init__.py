"""
clouddetect: find out which cloud provider (if any) this host runs on.

    import asyncio
    from clouddetect import detect

    provider = asyncio.run(detect(timeout=3))
    print(provider)  # e.g. "aws", or "unknown"
"""
from clouddetect.utils.logging_config import logger, get_logger
from clouddetect.models import ProviderId, OutcomeKind, DetectionOutcome, DetectionReport, ProbeEvent
from clouddetect.exceptions import CloudDetectError, InvalidTimeoutError
from clouddetect.core.context import DetectionContext
from clouddetect.core.registry import ProviderRegistry, DEFAULT_REGISTRY
from clouddetect.core.orchestrator import (
    DetectionOrchestrator, detect, detect_with_report, supported_providers,
)
from clouddetect.config.settings import DEFAULT_DETECTION_TIMEOUT

__version__ = "2.2.0"

__all__ = [
    "detect", "detect_with_report", "supported_providers",
    "DetectionOrchestrator", "DetectionContext", "ProviderRegistry", "DEFAULT_REGISTRY",
    "ProviderId", "OutcomeKind", "DetectionOutcome", "DetectionReport", "ProbeEvent",
    "CloudDetectError", "InvalidTimeoutError", "DEFAULT_DETECTION_TIMEOUT",
    "logger", "get_logger",
]

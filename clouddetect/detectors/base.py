import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Tuple

import requests

from clouddetect.core.context import DetectionContext
from clouddetect.exceptions import ProbeTimeoutError
from clouddetect.models import DetectionOutcome, ProbeEvent, ProviderId
from clouddetect.utils.logging_config import logger
from .http_client import MetadataHttpClient
from .vendor_files import read_vendor_file

# (path, markers): the file matches when its content contains any marker
VendorFileCheck = Tuple[str, Sequence[str]]


class CloudDetector(ABC):
    """
    Probe for one cloud provider.

    Subclasses set `provider_id`, `METADATA_URI` and `VENDOR_FILES`, and implement
    `check_metadata_server`. Instances hold configuration only, so one instance can
    serve any number of concurrent detection calls.
    """

    provider_id: ProviderId = ProviderId.UNKNOWN
    METADATA_URI: str = ""
    VENDOR_FILES: Sequence[VendorFileCheck] = ()
    VENDOR_MATCH_IGNORE_CASE: bool = False

    def __init__(self, http_client: Optional[MetadataHttpClient] = None,
                 metadata_uri: Optional[str] = None,
                 vendor_files: Optional[Sequence[VendorFileCheck]] = None):
        self.http = http_client or MetadataHttpClient()
        self.metadata_uri = (metadata_uri or self.METADATA_URI).rstrip('/')
        self.vendor_files = tuple(vendor_files) if vendor_files is not None else tuple(self.VENDOR_FILES)

    async def detect(self, ctx: DetectionContext) -> DetectionOutcome:
        """Runs the probe and converts every failure into an outcome. Only task cancellation propagates."""
        provider = self.provider_id
        ctx.emit(ProbeEvent(ProbeEvent.PROBE_STARTED, provider))
        try:
            matched = await self.identify(ctx)
            if matched:
                logger.debug(f"✅ [{provider}] identified")
                outcome = DetectionOutcome.positive(provider, ctx.elapsed())
            else:
                outcome = DetectionOutcome.negative(provider, ctx.elapsed())
        except ProbeTimeoutError as e:
            logger.debug(f"⏱️ [{provider}] {e.message}")
            outcome = DetectionOutcome.timed_out(provider, e.message, ctx.elapsed())
        except asyncio.CancelledError:
            logger.debug(f"[{provider}] probe cancelled")
            ctx.emit(ProbeEvent(ProbeEvent.PROBE_RESULT, provider,
                                DetectionOutcome.timed_out(provider, "cancelled", ctx.elapsed())))
            raise
        except Exception as e:
            # One provider misbehaving must never abort detection of the others
            logger.debug(f"❌ [{provider}] probe failed: {type(e).__name__} - {e}")
            outcome = DetectionOutcome.errored(provider, f"{type(e).__name__}: {e}", ctx.elapsed())
        ctx.emit(ProbeEvent(ProbeEvent.PROBE_RESULT, provider, outcome))
        return outcome

    async def identify(self, ctx: DetectionContext) -> bool:
        """Local vendor markers first, then the metadata service."""
        if await self.check_vendor_files(ctx):
            return True
        if ctx.done:
            raise ProbeTimeoutError(self.provider_id, ctx.cancel_reason or "deadline elapsed")
        return await self.check_metadata_server(ctx)

    @abstractmethod
    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        pass

    async def check_vendor_files(self, ctx: DetectionContext) -> bool:
        if not self.vendor_files:
            return False
        loop = asyncio.get_running_loop()
        for path, markers in self.vendor_files:
            if ctx.done:
                return False
            logger.debug(f"[{self.provider_id}] checking vendor file {path}")
            content = await loop.run_in_executor(None, read_vendor_file, path)
            if content is not None and self._matches(content, markers):
                logger.debug(f"[{self.provider_id}] vendor marker found in {path}")
                return True
        return False

    def _matches(self, content: str, markers: Sequence[str]) -> bool:
        if self.VENDOR_MATCH_IGNORE_CASE:
            content = content.lower()
            return any(marker.lower() in content for marker in markers)
        return any(marker in content for marker in markers)

    def url(self, path: str) -> str:
        return f"{self.metadata_uri}{path}"

    async def fetch(self, ctx: DetectionContext, path: str, method: str = 'GET',
                    headers: Optional[Dict[str, str]] = None) -> requests.Response:
        return await self.http.request(ctx, self.provider_id, self.url(path), method=method, headers=headers)

    def json_payload(self, response: requests.Response) -> Optional[Dict[str, Any]]:
        """JSON object body of a 200 response; None for any other status or shape."""
        if response.status_code != 200:
            logger.debug(f"[{self.provider_id}] unexpected status {response.status_code} from {response.url}")
            return None
        try:
            payload = response.json()
        except ValueError as e: # json.JSONDecodeError and requests' wrapper both subclass ValueError
            logger.debug(f"[{self.provider_id}] malformed JSON from {response.url}: {e}")
            return None
        if not isinstance(payload, dict):
            logger.debug(f"[{self.provider_id}] unexpected JSON shape from {response.url}: {type(payload).__name__}")
            return None
        return payload

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider_id.value}, metadata_uri={self.metadata_uri!r})"

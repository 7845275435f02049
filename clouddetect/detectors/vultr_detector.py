from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from .base import CloudDetector
from .vendor_files import SYS_VENDOR_FILE


class VultrDetector(CloudDetector):
    """Vultr detection"""
    provider_id = ProviderId.VULTR
    METADATA_URI = "http://169.254.169.254"
    METADATA_PATH = "/v1.json"
    VENDOR_FILES = ((SYS_VENDOR_FILE, ("Vultr",)),)

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        payload = self.json_payload(await self.fetch(ctx, self.METADATA_PATH))
        if payload is None:
            return False
        instance_id = payload.get("instanceid")
        return isinstance(instance_id, str) and bool(instance_id)

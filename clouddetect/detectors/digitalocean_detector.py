from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from .base import CloudDetector
from .vendor_files import SYS_VENDOR_FILE


class DigitalOceanDetector(CloudDetector):
    """DigitalOcean droplet detection"""
    provider_id = ProviderId.DIGITALOCEAN
    METADATA_URI = "http://169.254.169.254"
    METADATA_PATH = "/metadata/v1.json"
    VENDOR_FILES = ((SYS_VENDOR_FILE, ("DigitalOcean",)),)

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        payload = self.json_payload(await self.fetch(ctx, self.METADATA_PATH))
        if payload is None:
            return False
        droplet_id = payload.get("droplet_id")
        return isinstance(droplet_id, int) and not isinstance(droplet_id, bool) and droplet_id > 0

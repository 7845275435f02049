from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from .base import CloudDetector
from .vendor_files import PRODUCT_NAME_FILE


class AlibabaDetector(CloudDetector):
    """Alibaba Cloud ECS detection"""
    provider_id = ProviderId.ALIBABA
    METADATA_URI = "http://100.100.100.200"
    METADATA_PATH = "/latest/meta-data/instance/virtualization-solution"
    VENDOR_FILES = ((PRODUCT_NAME_FILE, ("Alibaba Cloud ECS",)),)

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        resp = await self.fetch(ctx, self.METADATA_PATH)
        return resp.status_code == 200 and "ECS Virt" in resp.text

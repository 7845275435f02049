from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from .base import CloudDetector
from .vendor_files import PRODUCT_NAME_FILE, CHASSIS_ASSET_TAG_FILE


class OpenStackDetector(CloudDetector):
    """OpenStack detection (also covers OpenStack-based public clouds by asset tag)"""
    provider_id = ProviderId.OPENSTACK
    METADATA_URI = "http://169.254.169.254"
    METADATA_PATH = "/openstack/"
    PRODUCT_NAMES = ("Openstack Nova", "OpenStack Compute")
    CHASSIS_ASSET_TAGS = (
        "HUAWEICLOUD",
        "OpenTelekomCloud",
        "SAP CCloud VM",
        "OpenStack Nova",
        "OpenStack Compute",
    )
    VENDOR_FILES = (
        (PRODUCT_NAME_FILE, PRODUCT_NAMES),
        (CHASSIS_ASSET_TAG_FILE, CHASSIS_ASSET_TAGS),
    )

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        resp = await self.fetch(ctx, self.METADATA_PATH)
        return 200 <= resp.status_code < 300

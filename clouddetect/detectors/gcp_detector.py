from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from .base import CloudDetector
from .vendor_files import PRODUCT_NAME_FILE


class GCPDetector(CloudDetector):
    """Google Cloud Platform detection"""
    provider_id = ProviderId.GCP
    METADATA_URI = "http://metadata.google.internal"
    METADATA_PATH = "/computeMetadata/v1/instance/tags"
    VENDOR_FILES = ((PRODUCT_NAME_FILE, ("Google",)),)

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        resp = await self.fetch(ctx, self.METADATA_PATH, headers={'Metadata-Flavor': 'Google'})
        # The real metadata server echoes the flavor header on every response
        return 200 <= resp.status_code < 300 and resp.headers.get('Metadata-Flavor') == 'Google'

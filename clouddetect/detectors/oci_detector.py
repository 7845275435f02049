from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from .base import CloudDetector
from .vendor_files import CHASSIS_ASSET_TAG_FILE


class OCIDetector(CloudDetector):
    """Oracle Cloud Infrastructure detection"""
    provider_id = ProviderId.OCI
    METADATA_URI = "http://169.254.169.254"
    METADATA_PATH = "/opc/v1/instance/metadata/"
    VENDOR_FILES = ((CHASSIS_ASSET_TAG_FILE, ("OracleCloud",)),)

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        payload = self.json_payload(await self.fetch(ctx, self.METADATA_PATH))
        if payload is None:
            return False
        oke_tm = payload.get("oke-tm")
        return isinstance(oke_tm, str) and "oke" in oke_tm

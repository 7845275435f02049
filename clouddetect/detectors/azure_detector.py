from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from .base import CloudDetector
from .vendor_files import SYS_VENDOR_FILE


class AzureDetector(CloudDetector):
    """Microsoft Azure detection via the Instance Metadata Service"""
    provider_id = ProviderId.AZURE
    METADATA_URI = "http://169.254.169.254"
    METADATA_PATH = "/metadata/instance?api-version=2017-12-01"
    VENDOR_FILES = ((SYS_VENDOR_FILE, ("Microsoft Corporation",)),)

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        resp = await self.fetch(ctx, self.METADATA_PATH, headers={'Metadata': 'true'})
        payload = self.json_payload(resp)
        if payload is None:
            return False
        compute = payload.get("compute")
        if not isinstance(compute, dict):
            return False
        vm_id = compute.get("vmId")
        return isinstance(vm_id, str) and bool(vm_id)

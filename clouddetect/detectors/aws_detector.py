from typing import Optional

from clouddetect.config.settings import METADATA_TOKEN_TTL_SECONDS
from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from clouddetect.utils.logging_config import logger
from .base import CloudDetector
from .vendor_files import PRODUCT_VERSION_FILE, BIOS_VENDOR_FILE


class AWSDetector(CloudDetector):
    """Amazon EC2 detection: DMI markers, then the instance identity document (IMDSv2, IMDSv1 fallback)"""
    provider_id = ProviderId.AWS
    METADATA_URI = "http://169.254.169.254"
    METADATA_PATH = "/latest/dynamic/instance-identity/document"
    METADATA_TOKEN_PATH = "/latest/api/token"
    VENDOR_FILES = (
        (PRODUCT_VERSION_FILE, ("amazon",)),
        (BIOS_VENDOR_FILE, ("amazon",)),
    )
    VENDOR_MATCH_IGNORE_CASE = True

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        token = await self._fetch_token(ctx)
        if token:
            headers = {'X-aws-ec2-metadata-token': token}
        else:
            # Older instances may still allow IMDSv1 (no session token)
            logger.debug(f"[{self.provider_id}] no IMDSv2 token, falling back to IMDSv1")
            headers = None
        resp = await self.fetch(ctx, self.METADATA_PATH, headers=headers)
        document = self.json_payload(resp)
        if document is None:
            return False
        image_id = document.get("imageId")
        instance_id = document.get("instanceId")
        return (isinstance(image_id, str) and image_id.startswith("ami-")
                and isinstance(instance_id, str) and instance_id.startswith("i-"))

    async def _fetch_token(self, ctx: DetectionContext) -> Optional[str]:
        resp = await self.fetch(ctx, self.METADATA_TOKEN_PATH, method='PUT',
                                headers={'X-aws-ec2-metadata-token-ttl-seconds': METADATA_TOKEN_TTL_SECONDS})
        if resp.status_code != 200:
            return None
        return resp.text.strip() or None

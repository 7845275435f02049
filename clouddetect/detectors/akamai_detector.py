from clouddetect.config.settings import METADATA_TOKEN_TTL_SECONDS
from clouddetect.core.context import DetectionContext
from clouddetect.models import ProviderId
from clouddetect.utils.logging_config import logger
from .base import CloudDetector


class AkamaiDetector(CloudDetector):
    """Akamai Cloud (Linode) detection via the token-protected metadata service"""
    provider_id = ProviderId.AKAMAI
    METADATA_URI = "http://169.254.169.254"
    METADATA_PATH = "/v1/instance"
    METADATA_TOKEN_PATH = "/v1/token"

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        token_resp = await self.fetch(ctx, self.METADATA_TOKEN_PATH, method='PUT',
                                      headers={'Metadata-Token-Expiry-Seconds': METADATA_TOKEN_TTL_SECONDS})
        token = token_resp.text.strip() if token_resp.status_code == 200 else ""
        if not token:
            logger.debug(f"[{self.provider_id}] no metadata token issued (status {token_resp.status_code})")
            return False

        resp = await self.fetch(ctx, self.METADATA_PATH,
                                headers={'Metadata-Token': token, 'Accept': 'application/json'})
        payload = self.json_payload(resp)
        if payload is None:
            return False
        instance_id = payload.get("id")
        host_uuid = payload.get("host_uuid")
        return (isinstance(instance_id, int) and not isinstance(instance_id, bool) and instance_id > 0
                and isinstance(host_uuid, str) and bool(host_uuid))

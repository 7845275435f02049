import os
from typing import Optional

from clouddetect.config.settings import DMI_ID_DIR
from clouddetect.utils.logging_config import logger

# Common DMI identification files (Linux exposes SMBIOS strings here)
PRODUCT_NAME_FILE = os.path.join(DMI_ID_DIR, "product_name")
PRODUCT_VERSION_FILE = os.path.join(DMI_ID_DIR, "product_version")
SYS_VENDOR_FILE = os.path.join(DMI_ID_DIR, "sys_vendor")
BIOS_VENDOR_FILE = os.path.join(DMI_ID_DIR, "bios_vendor")
CHASSIS_ASSET_TAG_FILE = os.path.join(DMI_ID_DIR, "chassis_asset_tag")


def read_vendor_file(path: str) -> Optional[str]:
    """Contents of a host identification file, or None when it is missing or unreadable."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, 'r', errors='replace') as f:
            return f.read()
    except OSError as e:
        logger.debug(f"Could not read vendor file {path}: {e}")
        return None

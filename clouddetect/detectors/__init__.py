from .base import CloudDetector, VendorFileCheck
from .http_client import MetadataHttpClient
from .akamai_detector import AkamaiDetector
from .alibaba_detector import AlibabaDetector
from .aws_detector import AWSDetector
from .azure_detector import AzureDetector
from .digitalocean_detector import DigitalOceanDetector
from .gcp_detector import GCPDetector
from .oci_detector import OCIDetector
from .openstack_detector import OpenStackDetector
from .vultr_detector import VultrDetector

__all__ = [
    "CloudDetector", "VendorFileCheck", "MetadataHttpClient",
    "AkamaiDetector", "AlibabaDetector", "AWSDetector", "AzureDetector",
    "DigitalOceanDetector", "GCPDetector", "OCIDetector", "OpenStackDetector", "VultrDetector",
]

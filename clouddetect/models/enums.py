from enum import Enum


class ProviderId(str, Enum):
    """Identity of a cloud provider. Members compare equal to their string value."""
    AKAMAI = "akamai"
    ALIBABA = "alibaba"
    AWS = "aws"
    AZURE = "azure"
    DIGITALOCEAN = "digitalocean"
    GCP = "gcp"
    OCI = "oci"
    OPENSTACK = "openstack"
    VULTR = "vultr"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class OutcomeKind(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    ERRORED = "errored"
    TIMED_OUT = "timed_out"

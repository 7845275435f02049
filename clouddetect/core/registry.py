from typing import Iterable, Iterator, List, Tuple

from clouddetect.detectors import (
    CloudDetector, AkamaiDetector, AlibabaDetector, AWSDetector, AzureDetector,
    DigitalOceanDetector, GCPDetector, OCIDetector, OpenStackDetector, VultrDetector,
)
from clouddetect.models import ProviderId

RegistryEntry = Tuple[ProviderId, CloudDetector]


class ProviderRegistry:
    """
    Ordered, immutable (ProviderId, detector) pairs.

    Order only matters as the tie-break when several detectors report a positive
    in the same completion batch: the earlier entry wins.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[RegistryEntry]):
        checked: List[RegistryEntry] = []
        seen = set()
        for provider_id, detector in entries:
            provider_id = ProviderId(provider_id)
            if provider_id is ProviderId.UNKNOWN:
                raise ValueError("'unknown' is the no-match verdict and cannot be registered")
            if provider_id in seen:
                raise ValueError(f"Duplicate provider in registry: {provider_id}")
            if detector.provider_id is not provider_id:
                raise ValueError(f"{detector.__class__.__name__} detects {detector.provider_id}, not {provider_id}")
            seen.add(provider_id)
            checked.append((provider_id, detector))
        object.__setattr__(self, "_entries", tuple(checked))

    @classmethod
    def from_detectors(cls, detectors: Iterable[CloudDetector]) -> "ProviderRegistry":
        return cls((detector.provider_id, detector) for detector in detectors)

    def __setattr__(self, name, value):
        raise AttributeError("ProviderRegistry is immutable")

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> RegistryEntry:
        return self._entries[index]

    def provider_ids(self) -> List[ProviderId]:
        return [provider_id for provider_id, _ in self._entries]

    def index_of(self, provider_id: ProviderId) -> int:
        for index, (registered, _) in enumerate(self._entries):
            if registered == provider_id:
                return index
        raise KeyError(provider_id)

    def __repr__(self) -> str:
        return f"ProviderRegistry([{', '.join(p.value for p in self.provider_ids())}])"


# Built once at import; adding a provider means appending its detector here.
DEFAULT_REGISTRY = ProviderRegistry.from_detectors([
    AkamaiDetector(),
    AlibabaDetector(),
    AWSDetector(),
    AzureDetector(),
    DigitalOceanDetector(),
    GCPDetector(),
    OCIDetector(),
    OpenStackDetector(),
    VultrDetector(),
])

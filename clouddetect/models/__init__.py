# clouddetect/models/__init__.py
from .enums import ProviderId, OutcomeKind
from .data_schemas import DetectionOutcome, DetectionReport, ProbeEvent

__all__ = [
    "ProviderId", "OutcomeKind",
    "DetectionOutcome", "DetectionReport", "ProbeEvent",
]

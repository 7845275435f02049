# clouddetect/models/data_schemas.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from datetime import datetime

from .enums import ProviderId, OutcomeKind


@dataclass(frozen=True)
class DetectionOutcome:
    """Result of one detector's probe within a single detection call."""
    provider: ProviderId
    kind: OutcomeKind
    reason: Optional[str] = None  # Always set for ERRORED; says why for TIMED_OUT
    elapsed: float = 0.0          # Seconds since the detection call started

    @classmethod
    def positive(cls, provider: ProviderId, elapsed: float = 0.0) -> "DetectionOutcome":
        return cls(provider, OutcomeKind.POSITIVE, elapsed=elapsed)

    @classmethod
    def negative(cls, provider: ProviderId, elapsed: float = 0.0) -> "DetectionOutcome":
        return cls(provider, OutcomeKind.NEGATIVE, elapsed=elapsed)

    @classmethod
    def errored(cls, provider: ProviderId, reason: str, elapsed: float = 0.0) -> "DetectionOutcome":
        return cls(provider, OutcomeKind.ERRORED, reason=reason or "unknown error", elapsed=elapsed)

    @classmethod
    def timed_out(cls, provider: ProviderId, reason: str = "deadline elapsed", elapsed: float = 0.0) -> "DetectionOutcome":
        return cls(provider, OutcomeKind.TIMED_OUT, reason=reason, elapsed=elapsed)

    @property
    def is_positive(self) -> bool:
        return self.kind is OutcomeKind.POSITIVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider.value,
            "outcome": self.kind.value,
            "reason": self.reason,
            "elapsed": round(self.elapsed, 4),
        }


@dataclass(frozen=True)
class DetectionReport:
    """Verdict of one detection call plus per-provider outcomes, in registry order."""
    verdict: ProviderId
    outcomes: List[DetectionOutcome] = field(default_factory=list)
    timeout: float = 0.0
    elapsed: float = 0.0
    deadline_exceeded: bool = False

    def _providers_with(self, kind: OutcomeKind) -> List[ProviderId]:
        return [o.provider for o in self.outcomes if o.kind is kind]

    @property
    def checked(self) -> List[ProviderId]:
        return [o.provider for o in self.outcomes]

    @property
    def positives(self) -> List[ProviderId]:
        return self._providers_with(OutcomeKind.POSITIVE)

    @property
    def errored(self) -> List[ProviderId]:
        return self._providers_with(OutcomeKind.ERRORED)

    @property
    def timed_out(self) -> List[ProviderId]:
        return self._providers_with(OutcomeKind.TIMED_OUT)

    def outcome_for(self, provider: ProviderId) -> Optional[DetectionOutcome]:
        for outcome in self.outcomes:
            if outcome.provider == provider:
                return outcome
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "timeout": self.timeout,
            "elapsed": round(self.elapsed, 4),
            "deadline_exceeded": self.deadline_exceeded,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


@dataclass(frozen=True)
class ProbeEvent:
    """Structured event handed to an observer hook (probe_started / probe_result)."""
    name: str
    provider: ProviderId
    outcome: Optional[DetectionOutcome] = None
    timestamp: datetime = field(default_factory=datetime.now)

    PROBE_STARTED = "probe_started"
    PROBE_RESULT = "probe_result"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "event": self.name,
            "provider": self.provider.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.outcome is not None:
            data["outcome"] = self.outcome.to_dict()
        return data

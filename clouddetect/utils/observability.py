from typing import Callable, Optional

from clouddetect.models import ProbeEvent
from clouddetect.utils.logging_config import logger

ProbeObserver = Callable[[ProbeEvent], None]


def log_probe_event(event: ProbeEvent) -> None:
    """Observer that writes probe events to the package logger at DEBUG."""
    if event.outcome is None:
        logger.debug(f"  🔎 [{event.provider}] {event.name}")
    else:
        reason = f" ({event.outcome.reason})" if event.outcome.reason else ""
        logger.debug(f"  🔎 [{event.provider}] {event.name}: {event.outcome.kind.value}{reason} after {event.outcome.elapsed:.3f}s")


def notify(observer: Optional[ProbeObserver], event: ProbeEvent) -> None:
    """Hands an event to the observer. Observer failures are logged and dropped."""
    if observer is None:
        return
    try:
        observer(event)
    except Exception as e:
        logger.debug(f"Probe observer raised on {event.name} for {event.provider}: {type(e).__name__} - {e}")

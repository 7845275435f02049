import asyncio
import math
from typing import Dict, List, Optional, Set, Union

from clouddetect.config.settings import DEFAULT_DETECTION_TIMEOUT, CANCELLATION_GRACE_PERIOD
from clouddetect.core.context import DetectionContext
from clouddetect.core.registry import DEFAULT_REGISTRY, ProviderRegistry
from clouddetect.exceptions import InvalidTimeoutError
from clouddetect.models import DetectionOutcome, DetectionReport, ProviderId
from clouddetect.utils.logging_config import logger
from clouddetect.utils.observability import ProbeObserver, log_probe_event

Timeout = Union[int, float]


def validate_timeout(timeout: Optional[Timeout]) -> float:
    """Seconds to allow for one detection call; None means DEFAULT_DETECTION_TIMEOUT."""
    if timeout is None:
        return float(DEFAULT_DETECTION_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise InvalidTimeoutError(f"Timeout must be a number of seconds, got {type(timeout).__name__}")
    if not math.isfinite(timeout) or timeout <= 0:
        raise InvalidTimeoutError(f"Timeout must be a finite positive number of seconds, got {timeout!r}")
    return float(timeout)


class DetectionOrchestrator:
    """
    Races every registered detector and returns the first conclusive provider.

    All detectors start together under one deadline. Completions are consumed in
    batches; the first batch holding a positive decides the verdict, lowest registry
    index first. Everything still running is then cancelled and its eventual result
    dropped. No match, or no match before the deadline, is ProviderId.UNKNOWN.
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None,
                 observer: Optional[ProbeObserver] = log_probe_event):
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.observer = observer

    def supported_providers(self) -> List[str]:
        return [provider_id.value for provider_id in self.registry.provider_ids()]

    async def detect(self, timeout: Optional[Timeout] = None) -> ProviderId:
        report = await self.detect_with_report(timeout)
        return report.verdict

    async def detect_with_report(self, timeout: Optional[Timeout] = None) -> DetectionReport:
        timeout_sec = validate_timeout(timeout)
        ctx = DetectionContext(timeout_sec, observer=self.observer)
        entries = list(self.registry)
        logger.debug(f"🚀 Detecting cloud provider across {len(entries)} providers (timeout {timeout_sec}s)")

        tasks: Dict[asyncio.Task, int] = {}
        for index, (provider_id, detector) in enumerate(entries):
            task = asyncio.ensure_future(detector.detect(ctx))
            tasks[task] = index

        outcomes: List[Optional[DetectionOutcome]] = [None] * len(entries)
        pending: Set[asyncio.Task] = set(tasks)
        winner: Optional[int] = None
        try:
            while pending and winner is None:
                remaining = ctx.remaining()
                if remaining <= 0:
                    break
                done, pending = await asyncio.wait(pending, timeout=remaining, return_when=asyncio.FIRST_COMPLETED)
                positives = []
                for task in done:
                    index = tasks[task]
                    outcome = self._collect(task, entries[index][0], ctx)
                    outcomes[index] = outcome
                    if outcome.is_positive:
                        positives.append(index)
                if positives:
                    # Simultaneous positives resolve to registry order
                    winner = min(positives)
        finally:
            ctx.cancel("verdict reached" if winner is not None else "deadline elapsed")
            await self._cancel_outstanding(pending)

        stop_reason = "cancelled after verdict" if winner is not None else "deadline elapsed"
        for task in pending:
            index = tasks[task]
            outcomes[index] = DetectionOutcome.timed_out(entries[index][0], stop_reason, ctx.elapsed())

        verdict = entries[winner][0] if winner is not None else ProviderId.UNKNOWN
        report = DetectionReport(
            verdict=verdict,
            outcomes=[o for o in outcomes if o is not None],
            timeout=timeout_sec,
            elapsed=ctx.elapsed(),
            deadline_exceeded=winner is None and bool(pending),
        )
        self._log_summary(report)
        return report

    @staticmethod
    def _collect(task: asyncio.Task, provider_id: ProviderId, ctx: DetectionContext) -> DetectionOutcome:
        if task.cancelled():
            return DetectionOutcome.timed_out(provider_id, "cancelled", ctx.elapsed())
        exc = task.exception()
        if exc is not None:
            # Detectors convert their own failures; this only catches a detector that broke that contract
            logger.warning(f"⚠️ Detector for {provider_id} raised instead of reporting: {type(exc).__name__} - {exc}")
            return DetectionOutcome.errored(provider_id, f"{type(exc).__name__}: {exc}", ctx.elapsed())
        outcome = task.result()
        if not isinstance(outcome, DetectionOutcome) or outcome.provider != provider_id:
            logger.warning(f"⚠️ Unexpected result from {provider_id} detector: {outcome!r}")
            return DetectionOutcome.errored(provider_id, f"invalid outcome {outcome!r}", ctx.elapsed())
        return outcome

    async def _cancel_outstanding(self, pending: Set[asyncio.Task]):
        if not pending:
            return
        for task in pending:
            task.add_done_callback(_discard_late_result)
            task.cancel()
        # Short grace so cancelled probes can unwind; stragglers are abandoned
        _, stuck = await asyncio.wait(pending, timeout=CANCELLATION_GRACE_PERIOD)
        if stuck:
            logger.debug(f"{len(stuck)} detector task(s) still unwinding after cancellation; their results will be discarded.")

    @staticmethod
    def _log_summary(report: DetectionReport):
        if report.verdict is ProviderId.UNKNOWN:
            details = []
            if report.errored:
                details.append(f"errored: {', '.join(p.value for p in report.errored)}")
            if report.timed_out:
                details.append(f"timed out: {', '.join(p.value for p in report.timed_out)}")
            suffix = f" ({'; '.join(details)})" if details else ""
            logger.info(f"ⓘ No cloud provider identified after {report.elapsed:.3f}s{suffix}")
        else:
            logger.info(f"✅ Detected cloud provider: {report.verdict} in {report.elapsed:.3f}s")


def _discard_late_result(task: asyncio.Task):
    # Retrieve whatever a cancelled probe ended with so it is never reported or warned about
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"Discarded late failure from cancelled detector: {type(exc).__name__} - {exc}")
    else:
        logger.debug(f"Discarded late result from cancelled detector: {task.result()!r}")


async def detect(timeout: Optional[Timeout] = None) -> ProviderId:
    """Detects the host's cloud provider with the default registry. UNKNOWN when nothing matched in time."""
    return await DetectionOrchestrator().detect(timeout)


async def detect_with_report(timeout: Optional[Timeout] = None) -> DetectionReport:
    """Like detect(), but also returns every provider's outcome for diagnostics."""
    return await DetectionOrchestrator().detect_with_report(timeout)


def supported_providers() -> List[str]:
    """Identifiers of the providers in the default registry, in priority order."""
    return DetectionOrchestrator().supported_providers()

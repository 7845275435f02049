"""Tests for clouddetect/core/context.py."""

import threading
import time

from clouddetect.core.context import DetectionContext


def test_remaining_counts_down_and_never_goes_negative():
    ctx = DetectionContext(0.05, observer=None)
    assert 0 < ctx.remaining() <= 0.05
    time.sleep(0.07)
    assert ctx.remaining() == 0.0
    assert ctx.expired
    assert ctx.done


def test_cancel_is_idempotent_and_keeps_first_reason():
    ctx = DetectionContext(1.0, observer=None)
    assert not ctx.cancelled

    ctx.cancel("verdict reached")
    ctx.cancel("deadline elapsed")

    assert ctx.cancelled
    assert ctx.done
    assert ctx.cancel_reason == "verdict reached"


def test_cancellation_is_visible_to_other_threads():
    ctx = DetectionContext(5.0, observer=None)
    seen = threading.Event()

    def _worker():
        while not ctx.cancelled:
            time.sleep(0.001)
        seen.set()

    thread = threading.Thread(target=_worker)
    thread.start()
    ctx.cancel()
    thread.join(timeout=1)

    assert seen.is_set()


def test_emit_without_observer_is_a_no_op():
    from clouddetect.models import ProbeEvent, ProviderId

    DetectionContext(1.0, observer=None).emit(ProbeEvent(ProbeEvent.PROBE_STARTED, ProviderId.AWS))

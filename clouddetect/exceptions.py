class CloudDetectError(Exception):
    """Base class for errors raised by clouddetect."""


class InvalidTimeoutError(CloudDetectError, ValueError):
    """The detection timeout is not a finite positive number of seconds."""


class ProbeError(CloudDetectError):
    """A single provider probe failed. Never escapes a detector."""

    def __init__(self, provider, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class ProbeTimeoutError(ProbeError):
    """The shared deadline elapsed, or detection was cancelled, before the probe concluded."""

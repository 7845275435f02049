import asyncio
import json
import sys

from clouddetect import DetectionOrchestrator, InvalidTimeoutError, supported_providers, logger as cd_logger
from clouddetect.config.settings import DEFAULT_DETECTION_TIMEOUT, resolve_log_level
from clouddetect.detectors import MetadataHttpClient


def parse_timeout(argv) -> float:
    """Timeout in seconds from the first argument; raises InvalidTimeoutError on non-numeric input."""
    if len(argv) < 2:
        return DEFAULT_DETECTION_TIMEOUT
    try:
        return float(argv[1])
    except ValueError:
        raise InvalidTimeoutError(f"timeout must be a number of seconds, got {argv[1]!r}")


async def main_cloud_detect_demo(timeout: float):
    """Detects the host's cloud provider and prints the per-provider report."""
    print("Starting cloud provider detection demo")
    cd_logger.setLevel(resolve_log_level())
    print(f"Supported providers: {', '.join(supported_providers())}")

    orchestrator = DetectionOrchestrator()
    try:
        report = await orchestrator.detect_with_report(timeout)
    except InvalidTimeoutError as e:
        print(f"Invalid timeout: {e}")
        return 2
    finally:
        MetadataHttpClient.shutdown_executor()

    print(f"\nDetected provider: {report.verdict}")
    print("\n--- Per-provider outcomes ---")
    print(json.dumps(report.to_dict(), indent=2))
    return 0


def main(argv=None) -> int:
    try:
        demo_timeout = parse_timeout(sys.argv if argv is None else argv)
    except InvalidTimeoutError as e:
        print(f"Invalid timeout: {e}")
        return 2
    return asyncio.run(main_cloud_detect_demo(demo_timeout))


if __name__ == "__main__":
    sys.exit(main())

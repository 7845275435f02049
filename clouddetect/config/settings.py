import os
import logging

# --- Detection ---
DEFAULT_DETECTION_TIMEOUT = 5  # seconds
# How long the orchestrator waits for cancelled detector tasks to unwind before abandoning them.
CANCELLATION_GRACE_PERIOD = 0.25  # seconds

# --- Metadata HTTP client ---
# One worker per registered provider plus headroom for requests still draining after a verdict.
HTTP_MAX_WORKERS = 16
# Ceiling on a single request's socket timeout; the overall deadline may be far longer.
MAX_REQUEST_TIMEOUT = 60.0  # seconds
METADATA_TOKEN_TTL_SECONDS = "60"

# --- Local vendor markers ---
DMI_ID_DIR = "/sys/class/dmi/id"

# --- Logging Configuration ---
DEFAULT_LOG_LEVEL = logging.INFO
LOG_LEVEL_ENV_VAR = "CLOUDDETECT_LOG_LEVEL"


def resolve_log_level() -> int:
    """Log level from the environment, falling back to DEFAULT_LOG_LEVEL on unknown names."""
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, logging.getLevelName(DEFAULT_LOG_LEVEL)).upper()
    level = getattr(logging, level_name, DEFAULT_LOG_LEVEL)
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL

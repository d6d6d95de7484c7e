import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConfigurationError(RuntimeError):
    """Startup requirements are not met."""


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup for the entry points (API startup, CLI)."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def validate_storage_dirs(*dirs: Path) -> None:
    """
    Validate operational requirements before startup.

    Each directory is created if missing and must be writable.
    """
    problems = []
    for directory in dirs:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            problems.append(f"{directory}: {e.strerror or e}")
            continue
        if not os.access(directory, os.W_OK):
            problems.append(f"{directory}: not writable")

    if problems:
        raise ConfigurationError("Storage directories unusable: " + "; ".join(problems))

    logger.info("Storage directories validated: %s", ", ".join(str(d) for d in dirs))

from __future__ import annotations

"""
Build Logging Settings.

Describes how a build reports progress. The verbosity presets follow the
pipeline's reporting policy:
- WARNING: configuration problems and unresolved asset references only;
- INFO: adds one line per published tree and per finished build;
- DEBUG: adds one line per ingested, ignored, written or resized node.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

BUILD_LOG_NAME: str = "assets-build.log"

# Indexed by verbosity count, e.g. the number of -v flags
_VERBOSITY_LEVELS: Tuple[int, ...] = (logging.WARNING, logging.INFO, logging.DEBUG)

# Third-party loggers held at INFO so per-node DEBUG output stays readable
_NOISY_LOGGERS: Tuple[str, ...] = ("PIL",)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable description of how a build logs.

    Attributes:
        level: Minimum severity captured for assettree records.
        console: Echo records to stderr.
        log_file: Optional rotating build log. Keep it outside the output
            directory, which is wiped at the start of every build.
        max_bytes: Size of a log segment before rotation.
        backup_count: Number of rotated build logs to keep.
        console_fmt: Format for terminal output.
        file_fmt: Format for build log entries.
        datefmt: Timestamp format for build log entries.
        quiet_third_party: Hold Pillow's decoder chatter at INFO.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 1

    console_fmt: str = "%(levelname)-7s %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
    datefmt: str = "%H:%M:%S"

    quiet_third_party: bool = True

    @classmethod
    def for_verbosity(cls, verbosity: int, log_dir: Optional[str] = None) -> LoggingConfig:
        """
        Build the settings matching a verbosity count.

        Args:
            verbosity: 0 for warnings only, 1 for per-tree progress, 2 or
                more for per-node detail. Negative counts behave as 0.
            log_dir: Directory receiving `assets-build.log`, if any.

        Returns:
            LoggingConfig: Settings with the preset level applied.
        """
        index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
        log_file = os.path.join(log_dir, BUILD_LOG_NAME) if log_dir else None
        return cls(level=logging.getLevelName(_VERBOSITY_LEVELS[index]), log_file=log_file)

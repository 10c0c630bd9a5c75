from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization and the preparation of output directories owned
by the publishing pipeline. Acts as a thin abstraction over 'os' and
'shutil' so that build orchestration stays free of platform details.
"""

import logging
import os
import shutil
from typing import Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# OUTPUT DIRECTORY API
# -----------------------------------------------------------------------------

def prepare_output_dir(path: str) -> None:
    """
    Create `path` as an empty directory, removing any previous content.

    Published output is never merged with the result of an earlier build.

    Args:
        path: Directory to (re)create.

    Raises:
        OSError: If the directory cannot be removed or created.
    """
    if os.path.lexists(path):
        logger.debug(f"Removing previous output at {path}")
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    os.makedirs(path)

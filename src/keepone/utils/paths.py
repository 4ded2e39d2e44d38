"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/paths.py
Default scan root detection: the user's OneDrive folder.
"""
import os
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Set by the OneDrive client; personal accounts first
ONEDRIVE_ENV_VARS = ("OneDrive", "OneDriveConsumer", "OneDriveCommercial")


def detect_onedrive_root() -> Optional[str]:
    """
    Return the first existing OneDrive directory, or None.
    Environment variables are checked before the ~/OneDrive fallback.
    """
    candidates = [os.environ.get(var) for var in ONEDRIVE_ENV_VARS]
    candidates.append(str(Path.home() / "OneDrive"))

    for candidate in candidates:
        if candidate and Path(candidate).is_dir():
            logger.debug(f"OneDrive folder detected: {candidate}")
            return str(Path(candidate).resolve())

    logger.debug("No OneDrive folder found")
    return None

"""
Sidecar lookup for Google Takeout exports.

Each exported item may come with a "<file name>.json" description holding
`photoTakenTime.timestamp` (epoch seconds, usually as a string).
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .. import config


def sidecar_path_for(media_path: Path) -> Path:
    return media_path.with_name(media_path.name + config.SIDECAR_SUFFIX)


def read_photo_taken_time(media_path: Path) -> Optional[datetime]:
    """
    Returns the sidecar's photo-taken time as a local datetime, or None when
    there is no sidecar or it cannot be used.
    """
    sidecar = sidecar_path_for(media_path)
    if not sidecar.is_file():
        return None

    try:
        with sidecar.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logging.warning(f"Unreadable sidecar {sidecar}: {e}")
        return None

    try:
        raw = data["photoTakenTime"]["timestamp"]
        seconds = int(float(raw))
        return datetime.fromtimestamp(seconds)
    except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
        logging.warning(f"Sidecar {sidecar} has no usable photoTakenTime: {e!r}")
        return None

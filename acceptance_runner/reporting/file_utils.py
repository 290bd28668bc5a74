"""Atomic file writes for report artifacts."""

import os
import re
import tempfile
from pathlib import Path
from typing import Union

_UNSAFE = re.compile(r'[\\/:*?"<>|\s]')


def flat_name(name: str) -> str:
    """Flatten a hierarchical result name into a single file name."""
    flat = _UNSAFE.sub("_", name.strip()).strip(".")
    return flat or "root"


def write_atomic(path: Union[str, Path], data: Union[str, bytes]) -> Path:
    """Write ``data`` to ``path`` via a temp file and rename.

    Readers never see a half-written file, and a failed write leaves any
    previous file in place.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(p.parent), suffix=".tmp")
    try:
        if isinstance(data, bytes):
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        else:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
        os.replace(tmp, str(p))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
    return p

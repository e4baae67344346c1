"""
Text file persistence — atomic writes for patched project files.

Every file this plugin touches is owned by the developer's project, so
writes go to a temp file in the same directory first and are renamed
over the target.  A crash mid-write leaves the old file intact, and the
target's permission bits are carried over.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, keeping its newlines untouched."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_text_atomic(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` atomically.

    Uses write-to-temp-then-rename to prevent corruption.

    Args:
        path: Target file path.  Parent directories are created.
        content: Full file content.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with open(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if path.exists():
            shutil.copymode(path, tmp)
        tmp.replace(path)
        logger.debug("Wrote %s (%d bytes)", path, len(content))
    except Exception:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to write %s", path)
        raise

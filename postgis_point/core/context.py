"""
Process context — the JHipster app this run patches.

``main.py`` records the app root once, before any sub-command runs:

- the folder of ``--config`` when given;
- else the folder of the nearest ``.yo-rc.json`` at or above the cwd;
- else the cwd itself, so commands can still report the missing file.

Commands without ``--config`` then load ``.yo-rc.json`` from this root
instead of searching again.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_project_root: Optional[Path] = None


def set_project_root(root: Path) -> None:
    global _project_root
    _project_root = root


def get_project_root() -> Optional[Path]:
    """The recorded app root, or None before the CLI has started."""
    return _project_root

"""
Planned file model — one file's full new content, staged before any write.

Planners (entity regeneration, module init) return lists of these; the
writer compares each against disk and writes only what differs.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """New content for one project file.

    Attributes:
        path:      Project-relative path, ``/``-separated.
        content:   Complete file text.
        overwrite: False for support files created once and then owned by
                   the developer; True for patched project files.
        reason:    Short description, logged when written.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""

    def target(self, project_root: Path) -> Path:
        return project_root / self.path

    def matches_disk(self, project_root: Path) -> bool:
        """True when the file already holds exactly ``content``."""
        target = self.target(project_root)
        if not target.is_file():
            return False
        with open(target, encoding="utf-8", newline="") as f:
            return f.read() == self.content

# viz/renderer_headless.py
from __future__ import annotations
from typing import List, Optional
from core.interfaces import Snapshot

class HeadlessRenderer:
    """Keeps the frames it is handed instead of drawing them."""
    def __init__(self, keep: Optional[int] = None):
        self.surface = None
        self.keep = keep
        self.frames: List[Snapshot] = []

    def draw(self, snap: Snapshot) -> None:
        self.frames.append(snap)
        if self.keep is not None and len(self.frames) > self.keep:
            del self.frames[0]

    @property
    def last(self) -> Optional[Snapshot]:
        return self.frames[-1] if self.frames else None

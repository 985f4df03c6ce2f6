# viz/keyboard.py
from typing import Optional, Union
import pygame as pg
from core.interfaces import Direction

Command = Union[Direction, str]   # Direction, or "start" / "pause" / "quit"

KEYMAP = {
    pg.K_UP: Direction.UP, pg.K_w: Direction.UP,
    pg.K_DOWN: Direction.DOWN, pg.K_s: Direction.DOWN,
    pg.K_LEFT: Direction.LEFT, pg.K_a: Direction.LEFT,
    pg.K_RIGHT: Direction.RIGHT, pg.K_d: Direction.RIGHT,
    pg.K_SPACE: "start", pg.K_RETURN: "start",
    pg.K_p: "pause",
    pg.K_ESCAPE: "quit",
}

def key_to_command(key: int) -> Optional[Command]:
    return KEYMAP.get(key)

class Keyboard:
    def translate(self, event: pg.event.Event) -> Optional[Command]:
        if event.type == pg.QUIT:
            return "quit"
        if event.type == pg.KEYDOWN:
            return key_to_command(event.key)
        return None

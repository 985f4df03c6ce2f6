# viz/sprites.py
"""
Vector sprites for the head and the food kinds, drawn once with pygame
primitives on a 40x40 canvas and cached as SRCALPHA surfaces.

The art faces "up": the head's tongue points to y=0, so the renderer only has
to rotate it to the travel direction.
"""
from __future__ import annotations
from typing import Dict, List, Sequence, Tuple
import pygame as pg

from core.interfaces import FoodKind

CANVAS = 40
Point = Tuple[float, float]


# ---- path helpers ----
def quad(p0: Point, p1: Point, p2: Point, n: int = 12) -> List[Point]:
    out = []
    for i in range(1, n + 1):
        t = i / n
        u = 1 - t
        out.append((u*u*p0[0] + 2*u*t*p1[0] + t*t*p2[0],
                    u*u*p0[1] + 2*u*t*p1[1] + t*t*p2[1]))
    return out

def cubic(p0: Point, p1: Point, p2: Point, p3: Point, n: int = 16) -> List[Point]:
    out = []
    for i in range(1, n + 1):
        t = i / n
        u = 1 - t
        out.append((u**3*p0[0] + 3*u*u*t*p1[0] + 3*u*t*t*p2[0] + t**3*p3[0],
                    u**3*p0[1] + 3*u*u*t*p1[1] + 3*u*t*t*p2[1] + t**3*p3[1]))
    return out

def _filled(surf: pg.Surface, fill, stroke, pts: Sequence[Point], width: int = 1) -> None:
    pg.draw.polygon(surf, fill, pts)
    if stroke is not None:
        pg.draw.polygon(surf, stroke, pts, width)

def _circle(surf, fill, stroke, center: Point, r: float, width: int = 1) -> None:
    pg.draw.circle(surf, fill, center, r)
    if stroke is not None:
        pg.draw.circle(surf, stroke, center, r, width)

def _ellipse(surf, fill, stroke, cx: float, cy: float, rx: float, ry: float, width: int = 1) -> None:
    rect = pg.Rect(0, 0, round(rx * 2), round(ry * 2))
    rect.center = (round(cx), round(cy))
    pg.draw.ellipse(surf, fill, rect)
    if stroke is not None:
        pg.draw.ellipse(surf, stroke, rect, width)

def _blend(surf: pg.Surface, draw) -> None:
    """Draw translucent shapes on a scratch layer so they blend instead of overwrite."""
    layer = pg.Surface(surf.get_size(), pg.SRCALPHA)
    draw(layer)
    surf.blit(layer, (0, 0))


# ---- sprites ----
def draw_head(s: pg.Surface) -> None:
    red = (239, 68, 68)
    pg.draw.line(s, red, (19, 2), (17, 0), 2)
    pg.draw.line(s, red, (21, 2), (23, 0), 2)
    pg.draw.line(s, red, (20, 15), (20, 2), 3)

    outline = [(20, 5)]
    outline += cubic((20, 5), (5, 15), (5, 30), (10, 35))
    outline += quad((10, 35), (20, 40), (30, 35))
    outline += cubic((30, 35), (35, 30), (35, 15), (20, 5))
    _filled(s, (74, 222, 128), (22, 101, 52), outline)

    def scales(layer):
        for a, b in (((20, 5), (20, 15)), ((15, 12), (18, 18)), ((25, 12), (22, 18)),
                     ((12, 25), (18, 25)), ((28, 25), (22, 25)), ((20, 30), (20, 38))):
            pg.draw.line(layer, (22, 101, 52, 77), a, b, 1)
    _blend(s, scales)

    for cx in (14, 26):
        _ellipse(s, (250, 204, 21), (133, 77, 14), cx, 18, 3.5, 5)
        _ellipse(s, (0, 0, 0), None, cx, 18, 1, 3.5)
    for cx in (17, 23):
        _circle(s, (20, 83, 45), None, (cx, 8), 0.8)
    _blend(s, lambda layer: _ellipse(layer, (255, 255, 255, 77), None, 20, 12, 6, 3))


def draw_apple(s: pg.Surface) -> None:
    body = [(20, 14)]
    body += quad((20, 14), (34, 14), (34, 27))
    body += quad((34, 27), (34, 40), (20, 40))
    body += quad((20, 40), (6, 40), (6, 27))
    body += quad((6, 27), (6, 14), (20, 14))
    _filled(s, (239, 68, 68), (153, 27, 27), body)
    pg.draw.line(s, (120, 53, 15), (20, 14), (20, 6), 2)
    leaf = [(20, 9)] + quad((20, 9), (28, 4), (25, 12))
    _filled(s, (34, 197, 94), (22, 101, 52), leaf)


def draw_hamster(s: pg.Surface) -> None:
    fur, edge = (251, 191, 36), (146, 64, 14)
    _circle(s, fur, edge, (10, 10), 5)
    _circle(s, fur, edge, (30, 10), 5)
    _circle(s, fur, edge, (20, 22), 16)
    _circle(s, (0, 0, 0), None, (14, 20), 2.5)
    _circle(s, (0, 0, 0), None, (26, 20), 2.5)
    _circle(s, (248, 113, 113), None, (20, 25), 1.5)


def draw_rabbit(s: pg.Surface) -> None:
    fur, edge = (226, 232, 240), (100, 116, 139)
    _ellipse(s, fur, edge, 14, 10, 4, 10)
    _ellipse(s, fur, edge, 26, 10, 4, 10)
    _circle(s, fur, edge, (20, 25), 14)
    _circle(s, (0, 0, 0), None, (15, 22), 2)
    _circle(s, (0, 0, 0), None, (25, 22), 2)
    pg.draw.lines(s, (244, 114, 182), False, [(18, 28)] + quad((18, 28), (20, 30), (22, 28), 6), 2)


def draw_bird(s: pg.Surface) -> None:
    blue, edge = (96, 165, 250), (30, 64, 175)
    _circle(s, blue, edge, (22, 22), 15)
    wing = [(5, 22)] + quad((5, 22), (10, 15), (15, 22))
    _filled(s, blue, edge, wing)
    _filled(s, (251, 191, 36), (146, 64, 14), [(32, 20), (38, 22), (32, 24)])
    _circle(s, (0, 0, 0), None, (28, 18), 2.5)


def draw_chicken(s: pg.Surface) -> None:
    _circle(s, (254, 252, 232), (202, 138, 4), (20, 22), 15)
    comb = [(15, 10)] + quad((15, 10), (18, 5), (22, 10)) + quad((22, 10), (25, 5), (25, 10))
    _filled(s, (239, 68, 68), (185, 28, 28), comb)
    _filled(s, (250, 204, 21), (161, 98, 7), [(16, 22), (12, 24), (16, 26)])
    _circle(s, (0, 0, 0), None, (24, 20), 2.5)
    pg.draw.lines(s, (202, 138, 4), False, [(22, 25)] + quad((22, 25), (30, 28), (28, 20), 8), 2)


def draw_duck(s: pg.Surface) -> None:
    _circle(s, (253, 224, 71), (234, 179, 8), (20, 22), 15)
    bill = [(10, 20)] + quad((10, 20), (5, 22), (10, 24)) + [(15, 22)]
    _filled(s, (249, 115, 22), (194, 65, 12), bill)
    _circle(s, (0, 0, 0), None, (20, 18), 2.5)
    _circle(s, (0, 0, 0), None, (28, 18), 2.5)
    pg.draw.lines(s, (234, 179, 8), False, [(25, 25)] + quad((25, 25), (32, 28), (32, 22), 8), 2)


FOOD_ART = {
    FoodKind.APPLE: draw_apple,
    FoodKind.HAMSTER: draw_hamster,
    FoodKind.RABBIT: draw_rabbit,
    FoodKind.BIRD: draw_bird,
    FoodKind.CHICKEN: draw_chicken,
    FoodKind.DUCK: draw_duck,
}


def render_sprite(draw, size: int = CANVAS) -> pg.Surface:
    surf = pg.Surface((CANVAS, CANVAS), pg.SRCALPHA)
    draw(surf)
    if size != CANVAS:
        surf = pg.transform.smoothscale(surf, (size, size))
    return surf


class SpriteAtlas:
    """Head + one drawable per food kind, rasterised once at `size` px."""
    def __init__(self, size: int = CANVAS):
        self.size = size
        self.head = render_sprite(draw_head, size)
        self._food: Dict[FoodKind, pg.Surface] = {
            kind: render_sprite(draw, size) for kind, draw in FOOD_ART.items()
        }

    def food(self, kind: FoodKind) -> pg.Surface:
        return self._food.get(kind, self._food[FoodKind.APPLE])

    def kinds(self):
        return tuple(self._food)

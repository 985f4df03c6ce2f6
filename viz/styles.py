# viz/styles.py  (pure numbers for the render pipeline, no pygame)
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple

from core.interfaces import Direction, FoodKind
import viz.renderer_colors as theme

RGBA = Tuple[int, int, int, int]

# clockwise degrees; the head sprite faces up on the canvas
HEAD_ANGLE = {
    Direction.UP: 0,
    Direction.RIGHT: 90,
    Direction.DOWN: 180,
    Direction.LEFT: -90,
}


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def to_byte(alpha: float) -> int:
    return max(0, min(255, round_half_up(alpha * 255)))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass(frozen=True)
class BodyStyle:
    ratio: float
    alpha: float
    fill: RGBA          # body colour with alpha baked in
    glow: RGBA          # glow colour, alpha = alpha * 0.5
    blur: float         # glow radius in px
    highlight: RGBA     # white dots, alpha = alpha * 0.2


def body_style(index: int, length: int) -> BodyStyle:
    """Style of body cell `index` (1..length-1) in a snake of `length` cells."""
    ratio = index / max(length - 1, 1)
    alpha = lerp(theme.BODY_ALPHA_NEAR, theme.BODY_ALPHA_FAR, ratio)
    r, g, b = (round_half_up(lerp(n, f, ratio)) for n, f in zip(theme.BODY_NEAR, theme.BODY_FAR))
    gr, gg, gb = theme.SNAKE
    return BodyStyle(
        ratio=ratio,
        alpha=alpha,
        fill=(r, g, b, to_byte(alpha)),
        glow=(gr, gg, gb, to_byte(alpha * 0.5)),
        blur=lerp(theme.BODY_BLUR_NEAR, theme.BODY_BLUR_FAR, ratio),
        highlight=(255, 255, 255, to_byte(alpha * 0.2)),
    )


def food_glow(kind: FoodKind, growth: float) -> Tuple[Tuple[int, int, int], float]:
    color = theme.FOOD_APPLE_GLOW if kind is FoodKind.APPLE else theme.FOOD_ANIMAL_GLOW
    return color, theme.FOOD_BLUR * max(0.0, min(1.0, growth))


def scaled_size(cell_px: int, growth: float) -> int:
    return round_half_up(cell_px * max(0.0, min(1.0, growth)))

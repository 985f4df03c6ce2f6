# viz/renderer_pygame.py
from __future__ import annotations
import logging
import math
import os
from typing import Dict, Optional, Tuple, Union
import numpy as np
import pygame as pg

from config import AppConfig
from core.interfaces import Snapshot
from viz.sprites import SpriteAtlas
from viz.styles import HEAD_ANGLE, body_style, food_glow, scaled_size, to_byte
import viz.renderer_colors as theme

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes, os.PathLike]
HUD_H = 32
GLOW_ALPHA = 0.5


def glow_surface(w: int, h: int, blur: float, color: Tuple[int, int, int], alpha: int) -> Optional[pg.Surface]:
    """
    Soft halo around a w x h box: `color` at `alpha` inside the box, falling
    off quadratically to 0 at `blur` px outside it. None when there is nothing
    to draw.
    """
    b = int(math.ceil(blur))
    if b <= 0 or alpha <= 0 or w <= 0 or h <= 0:
        return None
    W, H = w + 2 * b, h + 2 * b
    xs = np.arange(W, dtype=np.float32) + 0.5
    ys = np.arange(H, dtype=np.float32) + 0.5
    dx = np.maximum(np.maximum(b - xs, xs - (b + w)), 0.0)
    dy = np.maximum(np.maximum(b - ys, ys - (b + h)), 0.0)
    d = np.hypot(dx[:, None], dy[None, :])          # (W, H), surfarray order
    fall = np.clip(1.0 - d / float(blur), 0.0, 1.0) ** 2
    surf = pg.Surface((W, H), pg.SRCALPHA)
    surf.fill((*color, 0))
    a = pg.surfarray.pixels_alpha(surf)
    a[...] = (fall * alpha).astype(np.uint8)
    del a   # release the surface lock
    return surf


def _gauss_kernel(blur: float) -> np.ndarray:
    b = int(math.ceil(blur))
    sigma = max(blur / 2.0, 0.5)
    x = np.arange(-b, b + 1, dtype=np.float32)
    k = np.exp(-(x * x) / (2.0 * sigma * sigma))
    return k / k.sum()


def shadow_surface(img: pg.Surface, blur: float, color: Tuple[int, int, int], alpha: int) -> Optional[pg.Surface]:
    """
    Blurred copy of img's alpha mask in `color`, padded by the blur radius on
    every side (what a canvas shadowBlur with zero offset paints).
    """
    b = int(math.ceil(blur))
    if b <= 0 or alpha <= 0:
        return None
    mask = np.pad(pg.surfarray.array_alpha(img).astype(np.float32) / 255.0, b)
    k = _gauss_kernel(blur)
    for axis in (0, 1):
        mask = np.apply_along_axis(lambda m: np.convolve(m, k, mode="same"), axis, mask)
    surf = pg.Surface(mask.shape, pg.SRCALPHA)
    surf.fill((*color, 0))
    a = pg.surfarray.pixels_alpha(surf)
    a[...] = np.clip(mask * alpha, 0, 255).astype(np.uint8)
    del a
    return surf


class PygameRenderer:
    """
    Projects a Snapshot onto an off-screen canvas (draw) and, when it owns a
    window, composes canvas + HUD onto the display (present).
    """
    def __init__(self):
        self.cell = 20
        self.cfg: Optional[AppConfig] = None
        self.surf: Optional[pg.Surface] = None      # game canvas
        self.screen: Optional[pg.Surface] = None    # window, None when embedded
        self.clock: Optional[pg.time.Clock] = None
        self.atlas: Optional[SpriteAtlas] = None
        self._grid_overlay: Optional[pg.Surface] = None
        self._glow_cache: Dict[tuple, Optional[pg.Surface]] = {}
        self._font: Optional[pg.font.Font] = None
        self._frame_idx = 0

    @property
    def surface(self) -> Optional[pg.Surface]:
        return self.surf

    def open(self, cfg: AppConfig) -> None:
        # Guard: ensure instance, not class
        if isinstance(cfg, type):
            raise TypeError("Pass an AppConfig instance (use AppConfig()), not the class.")
        pg.init()
        pg.display.set_caption(cfg.render_title)
        hud = HUD_H if cfg.render_show_hud else 0
        self.screen = pg.display.set_mode((cfg.canvas_w, cfg.canvas_h + hud))
        self.clock = pg.time.Clock()
        self._setup(pg.Surface((cfg.canvas_w, cfg.canvas_h)), cfg)

    def attach_surface(self, surface: pg.Surface, cfg: AppConfig) -> None:
        """Draw into a caller-owned surface (tests, embedding). No window, no clock."""
        if not pg.get_init():
            pg.init()
        self.screen = None
        self.clock = None
        self._setup(surface, cfg)

    def _setup(self, surface: pg.Surface, cfg: AppConfig) -> None:
        self.cfg = cfg
        self.cell = cfg.cell_px
        self.surf = surface
        self.atlas = SpriteAtlas(self.cell)
        self._grid_overlay = self._build_grid(cfg) if cfg.render_grid_lines else None
        self._glow_cache.clear()
        self._frame_idx = 0
        if cfg.render_record_dir:
            os.makedirs(cfg.render_record_dir, exist_ok=True)
        logger.debug("renderer ready: %dx%d cells of %dpx", cfg.grid_w, cfg.grid_h, self.cell)

    def _build_grid(self, cfg: AppConfig) -> pg.Surface:
        w, h = self.surf.get_size()
        c = self.cell
        layer = pg.Surface((w, h), pg.SRCALPHA)
        for i in range(cfg.grid_w + 1):
            pg.draw.line(layer, theme.GRID, (i * c, 0), (i * c, h))
        for j in range(cfg.grid_h + 1):
            pg.draw.line(layer, theme.GRID, (0, j * c), (w, j * c))
        return layer

    def _glow(self, w: int, h: int, blur: float, color, alpha: int) -> Optional[pg.Surface]:
        key = (w, h, round(blur, 2), tuple(color), alpha)
        if key not in self._glow_cache:
            self._glow_cache[key] = glow_surface(w, h, blur, color, alpha)
        return self._glow_cache[key]

    def _blit_glow(self, rect: pg.Rect, blur: float, color, alpha: int) -> None:
        g = self._glow(rect.w, rect.h, blur, color, alpha)
        if g is not None:
            self.surf.blit(g, g.get_rect(center=rect.center))

    def _blit_shadow(self, key: tuple, img: pg.Surface, center, blur: float, color) -> None:
        k = ("shadow", key, img.get_size(), round(blur, 2), tuple(color))
        if k not in self._glow_cache:
            self._glow_cache[k] = shadow_surface(img, blur, color, to_byte(GLOW_ALPHA))
        g = self._glow_cache[k]
        if g is not None:
            self.surf.blit(g, g.get_rect(center=center))

    # ---- frame ----
    def draw(self, s: Snapshot) -> None:
        assert self.surf is not None, "Renderer not opened"
        assert self.cfg is not None, "Renderer config not set (call open first)"
        surf = self.surf
        c = self.cell

        surf.fill(theme.BG)
        if self._grid_overlay is not None:
            surf.blit(self._grid_overlay, (0, 0))

        if s.food is not None:
            self._draw_food(s)

        n = len(s.snake)
        for i in range(n - 1, -1, -1):
            x, y = s.snake[i]
            cell = pg.Rect(x * c, y * c, c, c)
            if i == 0:
                self._draw_head(cell, s)
            else:
                self._draw_body(cell, i, n)

        if self.cfg.render_record_dir:
            self._save_surface_frame()

    def _draw_food(self, s: Snapshot) -> None:
        c = self.cell
        fx, fy = s.food.cell
        size = scaled_size(c, s.food.growth)
        if size <= 0:
            return
        center = (fx * c + c // 2, fy * c + c // 2)
        color, blur = food_glow(s.food.kind, s.food.growth)
        img = self.atlas.food(s.food.kind)
        if size != img.get_width():
            img = pg.transform.smoothscale(img, (size, size))
        self._blit_shadow(s.food.kind, img, center, blur, color)
        self.surf.blit(img, img.get_rect(center=center))

    def _draw_head(self, cell: pg.Rect, s: Snapshot) -> None:
        # pygame rotates counter-clockwise; the table is clockwise
        img = pg.transform.rotate(self.atlas.head, -HEAD_ANGLE[s.direction])
        self._blit_shadow(s.direction, img, cell.center, theme.HEAD_BLUR, theme.SNAKE)
        self.surf.blit(img, img.get_rect(center=cell.center))

    def _draw_body(self, cell: pg.Rect, index: int, length: int) -> None:
        c = self.cell
        st = body_style(index, length)
        p = theme.BODY_PADDING
        inner = cell.inflate(-2 * p, -2 * p)
        self._blit_glow(inner, st.blur, st.glow[:3], st.glow[3])

        layer = pg.Surface((c, c), pg.SRCALPHA)
        pg.draw.rect(layer, st.fill, pg.Rect(p, p, c - 2 * p, c - 2 * p), border_radius=theme.BODY_RADIUS)
        self.surf.blit(layer, cell.topleft)

        dots = pg.Surface((c, c), pg.SRCALPHA)
        pg.draw.circle(dots, st.highlight, (c * 0.3, c * 0.3), c * 0.1)
        pg.draw.circle(dots, st.highlight, (c * 0.7, c * 0.6), c * 0.08)
        self.surf.blit(dots, cell.topleft)

    # ---- window ----
    def present(self, hud: str = "", overlay: Optional[str] = None, sub: Optional[str] = None) -> None:
        """Canvas + HUD strip + optional centred overlay onto the window, then flip."""
        if self.screen is None:
            return
        assert self.cfg is not None
        if self._font is None:
            self._font = pg.font.SysFont(None, 26)
        top = HUD_H if self.cfg.render_show_hud else 0
        self.screen.fill(theme.BG)
        if top:
            txt = self._font.render(hud, True, theme.TEXT)
            self.screen.blit(txt, (8, (HUD_H - txt.get_height()) // 2))
        self.screen.blit(self.surf, (0, top))

        if overlay:
            w, h = self.surf.get_size()
            shade = pg.Surface((w, h), pg.SRCALPHA)
            shade.fill(theme.OVERLAY)
            self.screen.blit(shade, (0, top))
            msg = self._font.render(overlay, True, theme.TEXT)
            self.screen.blit(msg, msg.get_rect(center=(w // 2, top + h // 2 - 12)))
            if sub:
                sm = self._font.render(sub, True, theme.TEXT_DIM)
                self.screen.blit(sm, sm.get_rect(center=(w // 2, top + h // 2 + 16)))
        pg.display.flip()

    def tick(self, fps: int) -> None:
        if self.clock:
            self.clock.tick(fps)

    def close(self) -> None:
        try:
            pg.quit()
        finally:
            self.surf = None
            self.screen = None
            self.clock = None

    # internals
    def _save_surface_frame(self) -> None:
        assert self.surf is not None
        assert self.cfg is not None
        rec_dir: PathLike = self.cfg.render_record_dir
        if not isinstance(rec_dir, (str, bytes, os.PathLike)):
            raise TypeError(f"render_record_dir must be path-like, got {type(rec_dir)}")
        fname = os.path.join(rec_dir, f"frame_{self._frame_idx:06d}.png")
        pg.image.save(self.surf, fname)
        self._frame_idx += 1

# tests/conftest.py
import os
import sys

# Headless SDL so tests don't open a window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# Ensure project root is importable (so core.* / viz.* imports work when running from repo root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pygame as pg
import pytest

from config import AppConfig

@pytest.fixture(scope="session", autouse=True)
def _pygame_session():
    pg.init()
    yield
    pg.quit()

@pytest.fixture
def cfg():
    # 10x10 grid of 20px cells
    return AppConfig(canvas_w=200, canvas_h=200, cell_px=20, seed=1234)

@pytest.fixture
def timer():
    from core.timer import ManualTimer
    return ManualTimer()

@pytest.fixture
def frames():
    from viz.renderer_headless import HeadlessRenderer
    return HeadlessRenderer()

@pytest.fixture
def events():
    from core.interfaces import EventQueue
    return EventQueue()

@pytest.fixture
def engine_factory(timer, frames, events):
    from core.engine import GameEngine
    def make(cfg, **kwargs):
        kwargs.setdefault("timer", timer)
        kwargs.setdefault("renderer", frames)
        kwargs.setdefault("sinks", [events])
        return GameEngine(cfg, **kwargs)
    return make

@pytest.fixture
def engine(engine_factory, cfg):
    return engine_factory(cfg)

@pytest.fixture
def screen(cfg):
    # Plain Surface is fine for draw/blit tests (no need for display mode)
    return pg.Surface((cfg.canvas_w, cfg.canvas_h))

@pytest.fixture
def renderer(screen, cfg):
    from viz.renderer_pygame import PygameRenderer
    r = PygameRenderer()
    r.attach_surface(screen, cfg)
    return r

@pytest.fixture
def store(tmp_path):
    from profiles.store import ProfileStore
    return ProfileStore(str(tmp_path / "profiles.json"))

# config.py
from dataclasses import dataclass, replace
from typing import Optional

@dataclass(frozen=True, slots=True)
class AppConfig:
    # board
    canvas_w: int = 400
    canvas_h: int = 400
    cell_px: int = 20
    seed: Optional[int] = None

    # gameplay
    start_len: int = 3
    tick_ms: int = 120
    min_tick_ms: int = 60
    speedup_ms: int = 2
    food_points: int = 10
    food_growth_step: float = 0.15
    food_place_attempts: int = 100

    # host loop / render
    fps: int = 60
    render_title: str = "Neon Snake"
    render_grid_lines: bool = True
    render_show_hud: bool = True
    render_record_dir: Optional[str] = None

    # profiles / logs
    profiles_path: str = "runs/profiles.json"
    history_cap: int = 20
    min_password_len: int = 4
    session_log_path: str = "runs/sessions.csv"
    log_level: str = "INFO"

    @property
    def grid_w(self) -> int:
        return self.canvas_w // self.cell_px

    @property
    def grid_h(self) -> int:
        return self.canvas_h // self.cell_px

    def with_(self, **kwargs) -> "AppConfig":
        """Convenience: clone with updated values"""
        return replace(self, **kwargs)

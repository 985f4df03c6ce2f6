# runners/run_snake.py
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import pygame as pg

from config import AppConfig
from core.engine import GameEngine
from core.interfaces import CallbackSink, Direction, Phase
from core.session_log import CSVLogger, SESSION_KEYS, make_game_logger
from profiles.store import ProfileStore, GUEST
from viz.keyboard import Keyboard
from viz.pygame_timer import PygameTimer
from viz.renderer_pygame import PygameRenderer

logger = logging.getLogger(__name__)

OVERLAYS = {
    Phase.IDLE: "Press SPACE to start",
    Phase.PAUSED: "Paused  (P to resume)",
    Phase.ENDED: "Game over",
}


def handle_command(engine: GameEngine, cmd) -> bool:
    """Apply one keyboard command; False means quit."""
    if cmd == "quit":
        engine.stop()
        return False
    if cmd == "start":
        engine.start()
    elif cmd == "pause":
        if engine.phase is Phase.PAUSED:
            engine.resume()
        else:
            engine.pause()
    elif isinstance(cmd, Direction):
        engine.set_direction(cmd)
    return True


def main(cfg: Optional[AppConfig] = None, store: Optional[ProfileStore] = None) -> None:
    cfg = cfg or AppConfig()
    store = store or ProfileStore(cfg.profiles_path, cfg.history_cap, cfg.min_password_len)
    user = store.current_user or GUEST
    hud: Dict[str, Any] = {"score": 0, "best": 0 if store.is_guest else store.high_score(user)}

    session_log = CSVLogger(cfg.session_log_path, fieldnames=SESSION_KEYS)
    rend = PygameRenderer()
    rend.open(cfg)
    timer = PygameTimer()
    kbd = Keyboard()
    engine = GameEngine(cfg, timer=timer, renderer=rend)

    log_game = make_game_logger(logger=session_log, stats=engine.game_stats, user_getter=lambda: user)

    def on_score_change(score: int) -> None:
        hud["score"] = score

    def on_game_over(score: int, surface) -> None:
        if user != GUEST:
            store.add_score(user, score)
            hud["best"] = store.high_score(user)
        log_game(score, surface)

    engine.add_sink(CallbackSink(on_score_change=on_score_change, on_game_over=on_game_over))
    engine.init()
    logger.info("playing as %s on a %dx%d grid", user, cfg.grid_w, cfg.grid_h)

    running = True
    try:
        while running:
            for event in pg.event.get():
                if timer.dispatch(event):
                    continue
                cmd = kbd.translate(event)
                if cmd is not None and not handle_command(engine, cmd):
                    running = False
                    break

            overlay = OVERLAYS.get(engine.phase)
            sub = None
            if engine.phase is Phase.ENDED:
                sub = f"Score: {hud['score']}   SPACE to play again"
            rend.present(hud=f"{user}   Score: {hud['score']}   Best: {hud['best']}",
                         overlay=overlay, sub=sub)
            rend.tick(cfg.fps)
    finally:
        engine.stop()
        session_log.close()
        rend.close()


if __name__ == "__main__":
    main()

import argparse
import getpass
import logging
import sys

from config import AppConfig
from profiles.store import ProfileStore


def build_config(args) -> AppConfig:
    cfg = AppConfig(log_level=args.log_level)
    if args.seed is not None:
        cfg = cfg.with_(seed=args.seed)
    if args.cell is not None:
        cfg = cfg.with_(cell_px=args.cell)
    if args.size is not None:
        cfg = cfg.with_(canvas_w=args.size, canvas_h=args.size)
    if args.profiles is not None:
        cfg = cfg.with_(profiles_path=args.profiles)
    if args.record_dir is not None:
        cfg = cfg.with_(render_record_dir=args.record_dir)
    if args.log_path is not None:
        cfg = cfg.with_(session_log_path=args.log_path)
    return cfg


def open_store(cfg: AppConfig) -> ProfileStore:
    return ProfileStore(cfg.profiles_path, cfg.history_cap, cfg.min_password_len)


def run_play(cfg: AppConfig, args) -> int:
    from runners.run_snake import main as snake
    store = open_store(cfg)
    if args.guest or not args.user:
        store.login_as_guest()
    else:
        password = args.password if args.password is not None else getpass.getpass("password: ")
        res = store.login(args.user, password)
        if not res:
            print(res.message, file=sys.stderr)
            return 1
    try:
        snake(cfg, store)
    finally:
        store.logout()
    return 0


def run_register(cfg: AppConfig, args) -> int:
    if not args.user:
        print("--user is required", file=sys.stderr)
        return 2
    password = args.password if args.password is not None else getpass.getpass("password: ")
    confirm = args.password if args.password is not None else getpass.getpass("confirm: ")
    res = open_store(cfg).register(args.user, password, confirm)
    print(res.message, file=sys.stdout if res else sys.stderr)
    return 0 if res else 1


def run_history(cfg: AppConfig, args) -> int:
    store = open_store(cfg)
    if not args.user or not store.user_exists(args.user):
        print(f"unknown user: {args.user}", file=sys.stderr)
        return 1
    print(f"{args.user}  best: {store.high_score(args.user)}")
    print("scores:")
    for r in store.scores(args.user):
        print(f"  {r['score']:>6}  {r['date']}")
    print("logins:")
    for d in store.logins(args.user):
        print(f"  {d}")
    return 0


def run_plot(cfg: AppConfig, args) -> int:
    from pathlib import Path
    from tools.plot_scores import main as plot_sessions, plot_scores, profile_scores
    try:
        if args.user and not args.from_log:
            records = open_store(cfg).scores(args.user)
            if not records:
                print(f"no scores for {args.user}", file=sys.stderr)
                return 1
            plot_scores(profile_scores(records), Path(args.out_dir) / f"{args.user}_scores.png",
                        title=f"Score history ({args.user})")
        else:
            plot_sessions(cfg.session_log_path, args.out_dir, user=args.user)
    except (FileNotFoundError, RuntimeError) as e:
        print(e, file=sys.stderr)
        return 1
    return 0


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Neon Snake")
    p.add_argument("mode", nargs="?", default="play", choices=["play", "register", "history", "plot"])
    p.add_argument("--user")
    p.add_argument("--password")
    p.add_argument("--guest", action="store_true")
    p.add_argument("--seed", type=int)
    p.add_argument("--cell", type=int, help="cell size in px")
    p.add_argument("--size", type=int, help="square canvas size in px")
    p.add_argument("--profiles", help="profile store JSON path")
    p.add_argument("--record-dir", help="save every frame as PNG here")
    p.add_argument("--out-dir", default="runs/plots")
    p.add_argument("--from-log", action="store_true", help="plot from the session CSV")
    p.add_argument("--log-path", help="session CSV path")
    p.add_argument("--log-level", default="INFO")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    cfg = build_config(args)
    modes = {"play": run_play, "register": run_register, "history": run_history, "plot": run_plot}
    return modes[args.mode](cfg, args)


if __name__ == "__main__":
    sys.exit(main())

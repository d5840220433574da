import argparse
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from signalhunt.api.config import EngineConfig
from signalhunt.app.loop import run_game


def parse_screen(value: str) -> tuple[int, int]:
    try:
        w, h = map(int, value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"screen size must be positive, got {value!r}")
    return w, h


def main():
    parser = argparse.ArgumentParser(description="Signal Hunt Launcher")
    parser.add_argument("--game", default="signal-hunt", help="Game folder name under games/")
    parser.add_argument("--screen", type=parse_screen, default="1280x720", help="Screen size WxH, e.g. 1280x720")
    parser.add_argument("--fps", type=int, default=60, help="Frame rate cap")
    parser.add_argument("--touch", action="store_true",
                        help="Touch-screen mode: smaller glyphs, fewer particles, no extra reaction time")
    parser.add_argument("--difficulty", help="Preselect a difficulty (easy, normal, hard, chaos)")
    parser.add_argument("--storage", type=Path, help="JSON file for high scores (default: runtime/storage.json)")
    parser.add_argument("--debug", action="store_true", help="Enable debug behaviour")
    args = parser.parse_args()

    cfg = EngineConfig(
        screen_size=args.screen,
        fps=args.fps,
        touch=args.touch,
        storage_path=args.storage,
        difficulty=args.difficulty,
        debug=args.debug,
    )
    sys.exit(run_game(args.game, cfg))


if __name__ == "__main__":
    main()

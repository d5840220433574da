from __future__ import annotations
import importlib.util
from pathlib import Path
import yaml
from typing import Dict, Any, Tuple

from signalhunt.api.game_base import Game


def games_dir() -> Path:
    return Path(__file__).resolve().parents[2] / "games"


def load_game_manifest(game_root: Path) -> Dict[str, Any]:
    """Read games/<id>/manifest.yaml. An empty file counts as an empty manifest."""
    manifest = game_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {game_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{manifest} must contain a mapping, got {type(data).__name__}")
    return data


def load_game_module(game_root: Path):
    """
    Import games/<id>/main.py from its path; the module has to expose a
    get_game() -> Game factory.
    """
    main_py = game_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {game_root}")
    spec = importlib.util.spec_from_file_location(f"games.{game_root.name}.main", main_py)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    if not hasattr(module, "get_game"):
        raise AttributeError(f"{main_py} must define get_game()")
    return module


def load_game(game_id: str, root: Path | None = None) -> Tuple[Dict[str, Any], Game]:
    """Resolve a game folder by id and return (manifest, game instance)."""
    game_root = (root or games_dir()) / game_id
    if not game_root.is_dir():
        raise FileNotFoundError(f"No game named {game_id!r} under {game_root.parent}")
    manifest = load_game_manifest(game_root)
    game = load_game_module(game_root).get_game()
    if not isinstance(game, Game):
        raise TypeError(f"get_game() in {game_id!r} returned {type(game).__name__}, not a Game")
    return manifest, game

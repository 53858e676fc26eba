"""Settings loading (YAML) with repo-relative path resolution."""

from pathlib import Path

import yaml


PROJECT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_SETTINGS_PATH = "config/settings.yaml"

DEFAULT_SETTINGS = {
    "board_size": 16,
    "difficulty": "normal",
    "forbidden_rule": "human",
    "resign_threshold": -50000,
    "log_level": "INFO",
    "mcts": {},
    "difficulties": {},
    "pv_checkpoint": None,
    "pv_device": "cpu",
}


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a repo-relative path when invoked from outside `Gomoku_AI/`."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = PROJECT_DIR / p
    return candidate if candidate.exists() else p


def load_settings(path=DEFAULT_SETTINGS_PATH):
    """Load settings YAML over the defaults; a missing file yields the defaults."""
    settings = dict(DEFAULT_SETTINGS)
    path = resolve_project_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return settings
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")
    settings.update(data)
    return settings

"""Difficulty profiles: which search backend to use and how hard to search."""

from dataclasses import dataclass, replace


MINIMAX = "minimax"
MCTS = "mcts"
POLICY = "policy"
STRATEGIES = (MINIMAX, MCTS, POLICY)


@dataclass(frozen=True)
class Difficulty:
    name: str
    label: str
    strategy: str = MINIMAX
    depth: int = 2          # minimax depth; also the resignation re-check depth
    iterations: int = 0     # MCTS iterations

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy {self.strategy!r} for difficulty {self.name!r}")
        if self.depth < 1:
            raise ValueError(f"Difficulty {self.name!r}: depth must be >= 1")
        if self.strategy == MCTS and self.iterations < 1:
            raise ValueError(f"Difficulty {self.name!r}: MCTS needs a positive iteration budget")


DEFAULT_PROFILES = {
    "easy": Difficulty("easy", "Easy", MINIMAX, depth=1),
    "normal": Difficulty("normal", "Normal", MINIMAX, depth=2),
    "hard": Difficulty("hard", "Hard", MINIMAX, depth=3),
    "tini": Difficulty("tini", "TINI", MINIMAX, depth=4),
    "mcts": Difficulty("mcts", "MCTS", MCTS, depth=2, iterations=200),
    "neural": Difficulty("neural", "Neural", POLICY, depth=2),
}


def get_profile(name, overrides=None):
    """
    Look up a profile by name, applying optional settings overrides, e.g.
    {"mcts": {"iterations": 300}} or a brand-new entry with a strategy.
    """
    overrides = overrides or {}
    key = str(name).lower()
    base = DEFAULT_PROFILES.get(key)
    fields = dict(overrides.get(key) or {})
    if base is None:
        if not fields:
            raise ValueError(f"Unknown difficulty {name!r}; choose from {sorted(DEFAULT_PROFILES)}")
        return Difficulty(name=key, label=fields.pop("label", key.title()), **fields)
    return replace(base, **fields) if fields else base

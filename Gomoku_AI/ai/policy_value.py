"""Inference helper: load a policy checkpoint and suggest moves from it."""

from __future__ import annotations

import logging
import pickle

import torch

try:
    from ai.policy_net import PolicyNet, encode_window
    from errors import PolicyUnavailableError
except ImportError:
    from .policy_net import PolicyNet, encode_window
    from Gomoku_AI.errors import PolicyUnavailableError


LOGGER = logging.getLogger(__name__)


class PolicyAdvisor:
    def __init__(self, checkpoint: str, device: str | torch.device | None = None):
        if isinstance(device, torch.device):
            self.device = device
        else:
            self.device = torch.device(device or ("cuda" if torch.cuda.is_available() else "cpu"))

        try:
            ckpt = torch.load(checkpoint, map_location=self.device)
        except (OSError, RuntimeError, EOFError, pickle.UnpicklingError) as exc:
            raise PolicyUnavailableError(f"Cannot load policy checkpoint {checkpoint}: {exc}") from exc

        if isinstance(ckpt, dict) and "model_state" in ckpt:
            state_dict = ckpt["model_state"]
            args = ckpt.get("args", {})
        elif isinstance(ckpt, dict) and all(isinstance(v, torch.Tensor) for v in ckpt.values()):
            # Plain state_dict saved via torch.save(model.state_dict(), path)
            state_dict = ckpt
            args = {}
        else:
            raise PolicyUnavailableError(
                f"Checkpoint {checkpoint} is missing 'model_state' and is not a valid state_dict."
            )

        self.window = args.get("board_size", 15)
        self.model = PolicyNet(
            board_size=self.window,
            channels=args.get("channels", 32),
            num_blocks=args.get("blocks", 3),
        ).to(self.device)
        try:
            self.model.load_state_dict(state_dict)
        except RuntimeError as exc:
            raise PolicyUnavailableError(f"Checkpoint {checkpoint} does not match PolicyNet: {exc}") from exc
        self.model.eval()

    def window_origin(self, board) -> tuple[int, int]:
        """Top-left corner of the model window, centred on the stones and clamped to the board."""
        if board.size <= self.window:
            return 0, 0
        occupied = board.occupied_cells()
        if occupied:
            rows = [r for r, _ in occupied]
            cols = [c for _, c in occupied]
            center_r = (min(rows) + max(rows)) // 2
            center_c = (min(cols) + max(cols)) // 2
        else:
            center_r = center_c = board.size // 2
        limit = board.size - self.window
        r0 = min(max(center_r - self.window // 2, 0), limit)
        c0 = min(max(center_c - self.window // 2, 0), limit)
        return r0, c0

    @torch.no_grad()
    def predict(self, board, stone: int) -> dict[tuple[int, int], float]:
        """
        Probability per board cell covered by the model window.
        Cells outside the window are absent from the result.
        """
        r0, c0 = self.window_origin(board)
        cells = [
            [board.cells[r0 + i][c0 + j] if board.in_bounds(r0 + i, c0 + j) else None for j in range(self.window)]
            for i in range(self.window)
        ]
        x = encode_window(cells, stone).unsqueeze(0).to(self.device)
        probs = torch.softmax(self.model(x), dim=1).squeeze(0).cpu()

        out = {}
        for idx, p in enumerate(probs.tolist()):
            i, j = divmod(idx, self.window)
            r, c = r0 + i, c0 + j
            if board.in_bounds(r, c):
                out[(r, c)] = p
        return out

    def get_best_move(self, board, stone: int, legal_moves):
        """Legal move with the highest probability; first legal move if prediction fails."""
        legal_moves = list(legal_moves)
        if not legal_moves:
            return None
        try:
            probs = self.predict(board, stone)
        except (RuntimeError, ValueError) as exc:
            LOGGER.warning("Policy prediction failed (%s); using first legal move", exc)
            return legal_moves[0]
        return max(legal_moves, key=lambda mv: probs.get(mv, 0.0))

"""Small residual policy network over a fixed-size window of the board."""

from __future__ import annotations

import torch
import torch.nn as nn
import torch.nn.functional as F


IN_PLANES = 3  # own stones, opponent stones, on-board mask


def encode_window(cells: list[list[int]], stone: int) -> torch.Tensor:
    """
    Encode a square window into planes from `stone`'s perspective.
    Cells outside the real board are given as None and only appear as mask=0.
    """
    if stone not in (-1, 1):
        raise ValueError(f"stone must be -1 or 1, got {stone}")
    size = len(cells)
    planes = torch.zeros((IN_PLANES, size, size), dtype=torch.float32)
    for r, row in enumerate(cells):
        if len(row) != size:
            raise ValueError("window must be square")
        for c, v in enumerate(row):
            if v is None:
                continue
            planes[2, r, c] = 1.0
            if v == stone:
                planes[0, r, c] = 1.0
            elif v == -stone:
                planes[1, r, c] = 1.0
    return planes


class ResidualBlock(nn.Module):
    def __init__(self, channels: int):
        super().__init__()
        self.conv1 = nn.Conv2d(channels, channels, kernel_size=3, padding=1, bias=False)
        self.bn1 = nn.BatchNorm2d(channels)
        self.conv2 = nn.Conv2d(channels, channels, kernel_size=3, padding=1, bias=False)
        self.bn2 = nn.BatchNorm2d(channels)

    def forward(self, x):
        out = F.relu(self.bn1(self.conv1(x)), inplace=True)
        out = self.bn2(self.conv2(out))
        return F.relu(out + x, inplace=True)


class PolicyNet(nn.Module):
    def __init__(self, board_size: int = 15, channels: int = 32, num_blocks: int = 3):
        super().__init__()
        self.board_size = board_size
        self.stem = nn.Sequential(
            nn.Conv2d(IN_PLANES, channels, kernel_size=3, padding=1, bias=False),
            nn.BatchNorm2d(channels),
            nn.ReLU(inplace=True),
        )
        self.res_blocks = nn.Sequential(*[ResidualBlock(channels) for _ in range(num_blocks)])
        # 1x1 conv keeps the head size independent of channel count.
        self.policy_conv = nn.Conv2d(channels, 2, kernel_size=1)
        self.policy_fc = nn.Linear(2 * board_size * board_size, board_size * board_size)

    def forward(self, x):
        # x: [B, IN_PLANES, H, W] -> logits [B, H*W]
        out = self.res_blocks(self.stem(x))
        p = F.relu(self.policy_conv(out), inplace=True)
        return self.policy_fc(p.view(p.size(0), -1))

"""Session progression: score, level, counters and the win flag."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Tuple

from config import (
    LEVEL_UP_EVERY,
    POINTS_PER_DIFFICULTY,
    STARTING_LEVEL,
    TIME_BONUS_DIVISOR_MS,
    WIN_THRESHOLD,
)


def service_points(difficulty: int, patience_remaining: float) -> Tuple[int, int]:
    """Return ``(base_points, time_bonus)`` for serving a dish."""
    base = difficulty * POINTS_PER_DIFFICULTY
    bonus = max(0, math.floor(patience_remaining / TIME_BONUS_DIVISOR_MS))
    return base, bonus


@dataclass
class SessionState:
    score: int = 0
    level: int = STARTING_LEVEL
    completed: int = 0
    abandoned: int = 0
    started: bool = False
    won: bool = False

    def record_service(self, points: int) -> Tuple[bool, bool]:
        """Bank a served order.  Returns ``(leveled_up, won_now)``."""
        self.score += max(0, points)
        self.completed += 1
        leveled_up = self.completed % LEVEL_UP_EVERY == 0
        if leveled_up:
            self.level += 1
        won_now = not self.won and self.completed >= WIN_THRESHOLD
        if won_now:
            self.won = True
        return leveled_up, won_now

    def record_abandonment(self) -> None:
        self.abandoned += 1

    def to_dict(self) -> Dict:
        return asdict(self)

from __future__ import annotations

import logging
from dataclasses import dataclass


logger = logging.getLogger(__name__)


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (5, 15, 30, 50)

    def score_for_lines(self, lines: int) -> int:
        # A single lock spans at most four rows, so more is a broken invariant.
        if not 0 <= lines <= 4:
            raise ValueError(f"{lines} rows cleared by a single lock")
        if lines == 0:
            return 0
        return self.line_clear_scores[lines - 1]


# (pieces locked, ticks per row), checked from the fastest step down.
TICK_STEPS: tuple[tuple[int, int], ...] = (
    (901, 5),
    (701, 6),
    (501, 8),
    (301, 10),
    (201, 12),
    (101, 15),
    (51, 20),
    (26, 25),
)
BASE_TICK_RATE = 30


def tick_rate_for(piece_count: int) -> int:
    for threshold, rate in TICK_STEPS:
        if piece_count >= threshold:
            return rate
    return BASE_TICK_RATE


class Level:
    """Fall speed driven by the number of pieces locked so far."""

    def __init__(self) -> None:
        self.piece_count = 0
        self.tick_rate = BASE_TICK_RATE

    def update(self) -> None:
        self.piece_count += 1
        prev_rate = self.tick_rate
        self.tick_rate = tick_rate_for(self.piece_count)
        if self.tick_rate != prev_rate:
            logger.info("Tick rate: %d (after %d pieces)", self.tick_rate, self.piece_count)

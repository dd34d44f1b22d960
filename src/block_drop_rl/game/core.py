from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .controls import Action, InputSource
from .grid import GameGrid
from .pieces import Piece, Rotation, TetrominoType, random_kind
from .rules import Level, ScoringRules


logger = logging.getLogger(__name__)

# Horizontal anchor shifts tried, in order, when a rotation is blocked.
WALL_KICKS = (0, -1, 1, -2, 2)


class GameState(Enum):
    START = "start"
    PLAY = "play"
    PAUSE = "pause"
    OVER = "over"
    CLOSED = "closed"


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    spawn_x: int = GameGrid.WIDTH // 2
    spawn_y: int = 1


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of one frame, handed to the draw sink."""

    grid: np.ndarray
    kind: TetrominoType
    rotation: Rotation
    position: Tuple[int, int]
    ghost_offset: int
    state: GameState
    held: Optional[TetrominoType]
    next_kind: TetrominoType
    score: int


class BlockDropGame:
    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid()
        self.state = GameState.START
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        """Start a brand-new session: empty field, zero score, fresh pieces."""
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.level = Level()
        self.score = 0
        self.lines_cleared_total = 0
        self.tick = 0
        self.current_kind = random_kind(self.rng)
        self.next_kind = random_kind(self.rng)
        self.held_kind: Optional[TetrominoType] = None
        self.swapped = False
        self._reset_position()

    def start(self, seed: Optional[int] = None) -> None:
        self.reset(seed)
        self._transition(GameState.PLAY)

    def close(self) -> None:
        self._transition(GameState.CLOSED)

    @property
    def spawn_position(self) -> Tuple[int, int]:
        return (self.config.spawn_x, self.config.spawn_y)

    @property
    def current_piece(self) -> Piece:
        return Piece(self.current_kind, self.rotation)

    @property
    def pieces_locked(self) -> int:
        return self.level.piece_count

    def _transition(self, state: GameState) -> None:
        if state is not self.state:
            logger.debug("state %s -> %s", self.state.value, state.value)
        self.state = state

    def _reset_position(self) -> None:
        self.current_x, self.current_y = self.spawn_position
        self.rotation = Rotation.DEG0

    def _movable(self, rotation: Rotation, dx: int, dy: int) -> bool:
        return self.grid.is_legal(
            self.current_kind, rotation, (self.current_x, self.current_y), dx, dy
        )

    # Frame update

    def update(self, inputs: InputSource) -> None:
        if self.state is GameState.START:
            self._update_start(inputs)
        elif self.state is GameState.PLAY:
            self._update_play(inputs)
        elif self.state is GameState.PAUSE:
            self._update_pause(inputs)
        elif self.state is GameState.OVER:
            self._update_over(inputs)
        else:
            raise RuntimeError("update() called after the game reached the closed state")

    def _update_start(self, inputs: InputSource) -> None:
        if inputs.pressed(Action.CONFIRM):
            self._transition(GameState.PLAY)
        elif inputs.pressed(Action.QUIT):
            self._transition(GameState.CLOSED)

    def _update_pause(self, inputs: InputSource) -> None:
        if inputs.pressed(Action.CONFIRM):
            self._transition(GameState.PLAY)
        elif inputs.pressed(Action.QUIT):
            self._transition(GameState.CLOSED)

    def _update_over(self, inputs: InputSource) -> None:
        if inputs.pressed(Action.CONFIRM):
            self.start()
        elif inputs.pressed(Action.QUIT):
            self._transition(GameState.CLOSED)

    def _update_play(self, inputs: InputSource) -> None:
        if inputs.pressed(Action.PAUSE):
            self._transition(GameState.PAUSE)
            return

        # A rejected action has no effect and falls through to the next one,
        # and finally to gravity. Drops always take the frame.
        if inputs.pressed(Action.LEFT) and self.move(-1):
            return
        if inputs.pressed(Action.RIGHT) and self.move(1):
            return
        if inputs.pressed(Action.SOFT_DROP):
            self.soft_drop()
            return
        if inputs.pressed(Action.HARD_DROP):
            self.hard_drop()
            return
        if inputs.pressed(Action.ROTATE_CW) and self.rotate(clockwise=True):
            return
        if inputs.pressed(Action.ROTATE_CCW) and self.rotate(clockwise=False):
            return
        if inputs.pressed(Action.HOLD) and self.hold():
            return
        self._apply_gravity()

    # Player actions

    def move(self, dx: int) -> bool:
        if self._movable(self.rotation, dx, 0):
            self.current_x += dx
            return True
        return False

    def soft_drop(self) -> None:
        if self._movable(self.rotation, 0, 1):
            self.current_y += 1
            self.tick = 0
        else:
            self._lock_piece()

    def hard_drop(self) -> None:
        while self._movable(self.rotation, 0, 1):
            self.current_y += 1
        self._lock_piece()

    def rotate(self, clockwise: bool = True) -> bool:
        target = self.rotation.spin_cw() if clockwise else self.rotation.spin_ccw()
        for kick in WALL_KICKS:
            if self._movable(target, kick, 0):
                self.current_x += kick
                self.rotation = target
                return True
        return False

    def hold(self) -> bool:
        """Swap the active piece with the hold slot, once per piece.

        The incoming piece is placed at the spawn anchor without a legality
        check, so it may overlap locked cells; the next lock writes over them.
        """
        if self.swapped:
            return False
        if self.held_kind is None:
            self.held_kind = self.current_kind
            self._promote_next()
        else:
            self.held_kind, self.current_kind = self.current_kind, self.held_kind
        self._reset_position()
        self.swapped = True
        return True

    # Gravity and locking

    def _apply_gravity(self) -> None:
        self.tick += 1
        if self.tick < self.level.tick_rate:
            return
        if self._movable(self.rotation, 0, 1):
            self.current_y += 1
            self.tick = 0
        else:
            self._lock_piece()

    def _promote_next(self) -> None:
        self.current_kind = self.next_kind
        self.next_kind = random_kind(self.rng)

    def _lock_piece(self) -> int:
        self.grid.lock_piece(self.current_kind, self.rotation, (self.current_x, self.current_y))
        lines = self.grid.squash_filled_rows()
        self.score += self.rules.score_for_lines(lines)
        self.lines_cleared_total += lines

        self._reset_position()
        if not self.grid.is_legal(self.next_kind, Rotation.DEG0, self.spawn_position):
            self._transition(GameState.OVER)
            logger.info("game over with score %d", self.score)
            return lines

        self._promote_next()
        self.swapped = False
        self.level.update()
        self.tick = 0
        return lines

    # Read-only views

    def ghost_offset(self) -> int:
        offset = 0
        while self._movable(self.rotation, 0, offset + 1):
            offset += 1
        return offset

    def snapshot(self) -> Snapshot:
        return Snapshot(
            grid=self.grid.clone_state(),
            kind=self.current_kind,
            rotation=self.rotation,
            position=(self.current_x, self.current_y),
            ghost_offset=self.ghost_offset(),
            state=self.state,
            held=self.held_kind,
            next_kind=self.next_kind,
            score=self.score,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.state is not GameState.OVER:
            for x, y in self.current_piece.cells_at(self.current_x, self.current_y):
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_kind)
        return state

    def info(self) -> dict:
        return {
            "score": self.score,
            "lines_cleared_total": self.lines_cleared_total,
            "pieces_locked": self.pieces_locked,
            "tick_rate": self.level.tick_rate,
            "max_height": self.grid.get_max_height(),
        }

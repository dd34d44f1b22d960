"""Game module for Block Drop RL.

Exports the core game engine and supporting classes:
- GameGrid: Playfield, collision queries and row compaction
- Piece, TetrominoType, Rotation: Piece catalog and rotation states
- ScoringRules, Level: Row-clear scores and fall-speed progression
- Action, DebouncedInput, FrameInput: Logical input and input sources
- BlockDropGame: Frame-driven controller and state machine
"""

from .grid import GameGrid
from .pieces import Piece, Rotation, TetrominoType
from .rules import Level, ScoringRules
from .controls import Action, DebouncedInput, FrameInput, InputSource, KeyState
from .core import BlockDropGame, GameConfig, GameState, Snapshot

__all__ = [
    "GameGrid",
    "Piece",
    "Rotation",
    "TetrominoType",
    "Level",
    "ScoringRules",
    "Action",
    "DebouncedInput",
    "FrameInput",
    "InputSource",
    "KeyState",
    "BlockDropGame",
    "GameConfig",
    "GameState",
    "Snapshot",
]

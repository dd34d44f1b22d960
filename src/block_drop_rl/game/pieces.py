from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple


Offset = Tuple[int, int]
Color = Tuple[int, int, int]


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    J = 4
    L = 5
    S = 6
    Z = 7


class Rotation(IntEnum):
    DEG0 = 0
    DEG90 = 1
    DEG180 = 2
    DEG270 = 3

    def spin_cw(self) -> "Rotation":
        return Rotation((self + 1) % 4)

    def spin_ccw(self) -> "Rotation":
        return Rotation((self - 1) % 4)


_I_FLAT = ((-1, 0), (0, 0), (1, 0), (2, 0))
_I_TALL = ((0, -1), (0, 0), (0, 1), (0, 2))
_O = ((0, 0), (1, 0), (0, 1), (1, 1))
_S_FLAT = ((0, 0), (1, 0), (-1, 1), (0, 1))
_S_TALL = ((0, -1), (0, 0), (1, 0), (1, 1))
_Z_FLAT = ((-1, 0), (0, 0), (0, 1), (1, 1))
_Z_TALL = ((0, -1), (-1, 0), (0, 0), (-1, 1))

# Cells occupied relative to the anchor, (dx, dy) with dy pointing down.
OFFSETS: Dict[Tuple[TetrominoType, Rotation], Tuple[Offset, ...]] = {
    (TetrominoType.I, Rotation.DEG0): _I_FLAT,
    (TetrominoType.I, Rotation.DEG90): _I_TALL,
    (TetrominoType.I, Rotation.DEG180): _I_FLAT,
    (TetrominoType.I, Rotation.DEG270): _I_TALL,
    (TetrominoType.O, Rotation.DEG0): _O,
    (TetrominoType.O, Rotation.DEG90): _O,
    (TetrominoType.O, Rotation.DEG180): _O,
    (TetrominoType.O, Rotation.DEG270): _O,
    (TetrominoType.T, Rotation.DEG0): ((0, -1), (-1, 0), (0, 0), (1, 0)),
    (TetrominoType.T, Rotation.DEG90): ((0, -1), (0, 0), (1, 0), (0, 1)),
    (TetrominoType.T, Rotation.DEG180): ((-1, 0), (0, 0), (1, 0), (0, 1)),
    (TetrominoType.T, Rotation.DEG270): ((0, -1), (-1, 0), (0, 0), (0, 1)),
    (TetrominoType.J, Rotation.DEG0): ((0, -1), (0, 0), (-1, 1), (0, 1)),
    (TetrominoType.J, Rotation.DEG90): ((-1, -1), (-1, 0), (0, 0), (1, 0)),
    (TetrominoType.J, Rotation.DEG180): ((0, -1), (1, -1), (0, 0), (0, 1)),
    (TetrominoType.J, Rotation.DEG270): ((-1, 0), (0, 0), (1, 0), (1, 1)),
    (TetrominoType.L, Rotation.DEG0): ((0, -1), (0, 0), (0, 1), (1, 1)),
    (TetrominoType.L, Rotation.DEG90): ((-1, 0), (0, 0), (1, 0), (-1, 1)),
    (TetrominoType.L, Rotation.DEG180): ((-1, -1), (0, -1), (0, 0), (0, 1)),
    (TetrominoType.L, Rotation.DEG270): ((1, -1), (-1, 0), (0, 0), (1, 0)),
    (TetrominoType.S, Rotation.DEG0): _S_FLAT,
    (TetrominoType.S, Rotation.DEG90): _S_TALL,
    (TetrominoType.S, Rotation.DEG180): _S_FLAT,
    (TetrominoType.S, Rotation.DEG270): _S_TALL,
    (TetrominoType.Z, Rotation.DEG0): _Z_FLAT,
    (TetrominoType.Z, Rotation.DEG90): _Z_TALL,
    (TetrominoType.Z, Rotation.DEG180): _Z_FLAT,
    (TetrominoType.Z, Rotation.DEG270): _Z_TALL,
}

FILL_COLORS: Dict[TetrominoType, Color] = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (255, 0, 255),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 128, 0),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
}

GHOST_ALPHA = 76  # 0.3 opacity


def offsets(kind: TetrominoType, rotation: Rotation) -> Tuple[Offset, ...]:
    return OFFSETS[(kind, rotation)]


def fill_color(kind: TetrominoType) -> Color:
    return FILL_COLORS[kind]


def ghost_color(kind: TetrominoType) -> Tuple[int, int, int, int]:
    r, g, b = FILL_COLORS[kind]
    return (r, g, b, GHOST_ALPHA)


def random_kind(rng: random.Random) -> TetrominoType:
    """Pick one of the seven shapes uniformly."""
    return rng.choice(list(TetrominoType))


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    rotation: Rotation = Rotation.DEG0

    def offsets(self) -> Tuple[Offset, ...]:
        return offsets(self.kind, self.rotation)

    def rotated(self, clockwise: bool = True) -> "Piece":
        rotation = self.rotation.spin_cw() if clockwise else self.rotation.spin_ccw()
        return Piece(self.kind, rotation)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        return [(origin_x + dx, origin_y + dy) for dx, dy in self.offsets()]

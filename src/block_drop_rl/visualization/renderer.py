from __future__ import annotations

from typing import Optional, Tuple

import pygame

from block_drop_rl.game import GameGrid, GameState, Snapshot, TetrominoType
from block_drop_rl.game.pieces import Rotation, fill_color, ghost_color, offsets


BORDER_COLOR = (0, 0, 0)
BACKGROUND_COLOR = (32, 38, 58)
EMPTY_COLOR = (0, 0, 0)
TEXT_COLOR = (200, 200, 200)
TITLE_COLOR = (255, 255, 255)

OVERLAY_TEXT = {
    GameState.START: ("BLOCK DROP", "Press ENTER to start", "Press Q to quit"),
    GameState.PAUSE: ("PAUSED", "Press ENTER to unpause", "Press Q to quit"),
    GameState.OVER: ("GAME OVER", "Press ENTER to restart", "Press Q to quit"),
}


class Renderer:
    def __init__(self, cell_size: int = 32, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.board_w = GameGrid.WIDTH * cell_size
        self.board_h = GameGrid.HEIGHT * cell_size
        self.panel_x = margin * 2 + self.board_w
        self.panel_w = cell_size * 5
        self._font: Optional[pygame.font.Font] = None
        self._title_font: Optional[pygame.font.Font] = None

    @property
    def screen_size(self) -> Tuple[int, int]:
        return (self.panel_x + self.panel_w + self.margin, self.board_h + self.margin * 2)

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._title_font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont(None, 24)
            self._title_font = pygame.font.SysFont(None, 56)
        return self._font, self._title_font

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + x * self.cell_size,
            self.margin + y * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def _draw_grid(self, surf: pygame.Surface, snapshot: Snapshot) -> None:
        border = pygame.Rect(self.margin // 2, self.margin // 2, self.board_w + self.margin, self.board_h + self.margin)
        pygame.draw.rect(surf, BACKGROUND_COLOR, border, self.margin // 2)
        h, w = snapshot.grid.shape
        for y in range(h):
            for x in range(w):
                v = int(snapshot.grid[y, x])
                color = fill_color(TetrominoType(v)) if v else EMPTY_COLOR
                pygame.draw.rect(surf, color, self._cell_rect(x, y))

    def _draw_active(self, surf: pygame.Surface, snapshot: Snapshot) -> None:
        x0, y0 = snapshot.position
        cells = [(x0 + dx, y0 + dy) for dx, dy in offsets(snapshot.kind, snapshot.rotation)]
        if snapshot.ghost_offset:
            ghost = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
            ghost.fill(ghost_color(snapshot.kind))
            for x, y in cells:
                surf.blit(ghost, self._cell_rect(x, y + snapshot.ghost_offset))
        for x, y in cells:
            pygame.draw.rect(surf, fill_color(snapshot.kind), self._cell_rect(x, y))

    def _draw_overlay(self, surf: pygame.Surface, state: GameState) -> None:
        shade = pygame.Surface((self.board_w, self.board_h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 191))
        surf.blit(shade, (self.margin, self.margin))
        font, title_font = self._fonts()
        title, *lines = OVERLAY_TEXT[state]
        cx = self.margin + self.board_w // 2
        cy = self.margin + self.board_h // 2
        img = title_font.render(title, True, TITLE_COLOR)
        surf.blit(img, img.get_rect(center=(cx, cy - 50)))
        for i, line in enumerate(lines):
            img = font.render(line, True, TEXT_COLOR)
            surf.blit(img, img.get_rect(center=(cx, cy + i * 30)))

    def _draw_piece_box(self, surf: pygame.Surface, kind: Optional[TetrominoType], label: str, y: int) -> int:
        font, _ = self._fonts()
        surf.blit(font.render(label, True, TEXT_COLOR), (self.panel_x, y))
        y += self.margin
        box = pygame.Rect(self.panel_x, y, self.panel_w, self.cell_size * 4)
        pygame.draw.rect(surf, BACKGROUND_COLOR, box)
        if kind is not None:
            cells = offsets(kind, Rotation.DEG0)
            min_x = min(dx for dx, _ in cells)
            max_x = max(dx for dx, _ in cells)
            min_y = min(dy for _, dy in cells)
            max_y = max(dy for _, dy in cells)
            # Center the piece's bounding box inside the preview box.
            piece_w = (max_x - min_x + 1) * self.cell_size
            piece_h = (max_y - min_y + 1) * self.cell_size
            ox = box.x + (box.w - piece_w) // 2
            oy = box.y + (box.h - piece_h) // 2
            for dx, dy in cells:
                rect = pygame.Rect(
                    ox + (dx - min_x) * self.cell_size,
                    oy + (dy - min_y) * self.cell_size,
                    self.cell_size,
                    self.cell_size,
                )
                pygame.draw.rect(surf, fill_color(kind), rect)
        return box.bottom + self.margin

    def render_surface(self, snapshot: Snapshot) -> pygame.Surface:
        surf = pygame.Surface(self.screen_size)
        surf.fill(BORDER_COLOR)
        self._draw_grid(surf, snapshot)
        self._draw_active(surf, snapshot)
        if snapshot.state is not GameState.PLAY and snapshot.state in OVERLAY_TEXT:
            self._draw_overlay(surf, snapshot.state)

        font, _ = self._fonts()
        y = self.margin
        surf.blit(font.render("Score:", True, TEXT_COLOR), (self.panel_x, y))
        surf.blit(font.render(str(snapshot.score), True, TEXT_COLOR), (self.panel_x, y + self.margin))
        y += self.margin * 3
        y = self._draw_piece_box(surf, snapshot.held, "Hold", y)
        self._draw_piece_box(surf, snapshot.next_kind, "Next", y)
        return surf

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        screen.blit(self.render_surface(snapshot), (0, 0))
        pygame.display.flip()

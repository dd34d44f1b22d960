from __future__ import annotations

import argparse
from typing import Dict, Optional, Sequence, Tuple

import pygame

from block_drop_rl.game import Action, BlockDropGame, DebouncedInput, GameConfig, GameState
from .renderer import Renderer


# Several physical keys may stand for the same logical action.
KEY_BINDINGS: Dict[Action, Tuple[int, ...]] = {
    Action.LEFT: (pygame.K_LEFT,),
    Action.RIGHT: (pygame.K_RIGHT,),
    Action.SOFT_DROP: (pygame.K_DOWN,),
    Action.HARD_DROP: (pygame.K_SPACE,),
    Action.ROTATE_CW: (pygame.K_UP, pygame.K_x),
    Action.ROTATE_CCW: (pygame.K_LCTRL, pygame.K_RCTRL, pygame.K_z),
    Action.HOLD: (pygame.K_LSHIFT, pygame.K_RSHIFT, pygame.K_c),
    Action.PAUSE: (pygame.K_ESCAPE,),
    Action.CONFIRM: (pygame.K_RETURN, pygame.K_KP_ENTER),
    Action.QUIT: (pygame.K_q,),
}


def keys_down(pressed: Sequence[bool]) -> Dict[Action, bool]:
    return {action: any(pressed[k] for k in keys) for action, keys in KEY_BINDINGS.items()}


def run(fps: int = 60, refractory_frames: int = 8, seed: Optional[int] = None) -> int:
    """Play until the window is closed or Q is pressed; returns the final score."""
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = BlockDropGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=32)
        inputs = DebouncedInput(refractory_frames, actions=KEY_BINDINGS)

        screen = pygame.display.set_mode(renderer.screen_size)
        pygame.display.set_caption("Block Drop")

        while game.state is not GameState.CLOSED:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.close()
            if game.state is GameState.CLOSED:
                break

            inputs.poll(keys_down(pygame.key.get_pressed()))
            game.update(inputs)
            if game.state is GameState.CLOSED:
                break

            renderer.draw(screen, game.snapshot())
            clock.tick(fps)
    finally:
        pygame.quit()

    print(f"Final score: {game.score}")
    return game.score


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--refractory", type=int, default=8, help="Frames before a held key repeats")
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    run(fps=args.fps, refractory_frames=args.refractory, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()

"""Logical input actions and the sources the controller polls them from.

The controller never sees physical keys. A frontend maps its keys onto
``Action`` values and hands the controller an ``InputSource`` once per frame.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, Iterable, Mapping


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    HARD_DROP = 3
    ROTATE_CW = 4
    ROTATE_CCW = 5
    HOLD = 6
    NONE = 7
    PAUSE = 8
    CONFIRM = 9
    QUIT = 10


# In-play actions, in the order they are checked each frame.
PLAY_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.ROTATE_CW,
    Action.ROTATE_CCW,
    Action.HOLD,
)


class KeyState(Enum):
    PRESSED = "pressed"
    HELD = "held"
    RELEASED = "released"


class InputSource:
    def state(self, action: Action) -> KeyState:
        """Debounced state of ``action`` for the current frame; subclasses implement this."""
        raise NotImplementedError

    def pressed(self, action: Action) -> bool:
        return self.state(action) is KeyState.PRESSED


class FrameInput(InputSource):
    """A single frame in which exactly the given actions were triggered."""

    def __init__(self, *actions: Action) -> None:
        self.actions = frozenset(a for a in actions if a is not Action.NONE)

    def state(self, action: Action) -> KeyState:
        return KeyState.PRESSED if action in self.actions else KeyState.RELEASED


class DebouncedInput(InputSource):
    """Turns raw per-frame "key is down" flags into debounced triggers.

    Each logical action owns its own refractory counter. A down key fires
    when its counter is at zero and then stays quiet for ``refractory_frames``
    frames; keeping it down past that re-fires it, giving auto-repeat.
    """

    def __init__(self, refractory_frames: int = 8, actions: Iterable[Action] = tuple(Action)) -> None:
        self.refractory_frames = int(refractory_frames)
        self.counters: Dict[Action, int] = {a: 0 for a in actions if a is not Action.NONE}
        self._states: Dict[Action, KeyState] = {a: KeyState.RELEASED for a in self.counters}

    def poll(self, down: Mapping[Action, bool]) -> None:
        for action, counter in self.counters.items():
            is_down = bool(down.get(action, False))
            if counter > 0:
                self.counters[action] = counter - 1
                self._states[action] = KeyState.HELD if is_down else KeyState.RELEASED
            elif is_down:
                self.counters[action] = self.refractory_frames
                self._states[action] = KeyState.PRESSED
            else:
                self._states[action] = KeyState.RELEASED

    def state(self, action: Action) -> KeyState:
        return self._states.get(action, KeyState.RELEASED)

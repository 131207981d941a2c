"""Input sources that steer a bomber: the abstract controller and the keyboard keymaps."""

from __future__ import annotations

import abc
import enum
from typing import Any, Iterable, Optional


class ControllerType(enum.IntEnum):
    AI = 0
    AI_MASS = 1
    KEYMAP_1 = 2
    KEYMAP_2 = 3
    KEYMAP_3 = 4
    RCMOUSE = 5
    JOYSTICK_1 = 6
    JOYSTICK_2 = 7
    JOYSTICK_3 = 8
    JOYSTICK_4 = 9
    JOYSTICK_5 = 10
    JOYSTICK_6 = 11
    JOYSTICK_7 = 12
    JOYSTICK_8 = 13


class BombMode(enum.Enum):
    NORMAL = "normal"
    ALWAYS = "always"
    NEVER = "never"


class Controller(abc.ABC):
    """Answers, frame by frame, which directions and whether the bomb button are held."""

    def __init__(self) -> None:
        self.bomber: Any = None
        self.active = False
        self.reverse = False
        self.bomb_mode = BombMode.NORMAL
        self.put_bomb = False
        self.c_type: Optional[ControllerType] = None

    def attach(self, bomber: Any) -> None:
        self.bomber = bomber

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def revert(self) -> None:
        """Toggle reversed controls."""
        self.reverse = not self.reverse

    def bomb_always(self) -> None:
        self.bomb_mode = BombMode.ALWAYS

    def bomb_normal(self) -> None:
        self.bomb_mode = BombMode.NORMAL

    def update(self, dt: float) -> None:
        """Refresh the input for this frame; plain controllers have nothing to poll."""

    @abc.abstractmethod
    def reset(self) -> None:
        """Forget any input state kept between frames."""

    @abc.abstractmethod
    def is_left(self) -> bool:
        """Whether left is held."""

    @abc.abstractmethod
    def is_right(self) -> bool:
        """Whether right is held."""

    @abc.abstractmethod
    def is_up(self) -> bool:
        """Whether up is held."""

    @abc.abstractmethod
    def is_down(self) -> bool:
        """Whether down is held."""

    @abc.abstractmethod
    def is_bomb(self) -> bool:
        """Whether the bomb button is held."""


_KEYMAPS = (
    {"left": "left", "right": "right", "up": "up", "down": "down", "bomb": "return"},
    {"left": "a", "right": "d", "up": "w", "down": "s", "bomb": "tab"},
    {"left": "j", "right": "l", "up": "i", "down": "k", "bomb": "space"},
)

_KEYMAP_TYPES = (ControllerType.KEYMAP_1, ControllerType.KEYMAP_2, ControllerType.KEYMAP_3)


class KeyboardController(Controller):
    """Reads one of three fixed keymaps from the shared keyboard state.

    Keymap 0 is the arrow keys with Return, 1 is WASD with Tab and 2 is IJKL
    with Space; any other index falls back to keymap 0. The keyboard state is
    shared by all keyboard controllers and is set once per frame with
    :meth:`update_keyboard_state`.
    """

    _pressed: frozenset = frozenset()

    def __init__(self, keymap_index: int = 0) -> None:
        super().__init__()
        index = keymap_index if 0 <= keymap_index < len(_KEYMAPS) else 0
        self.keys = dict(_KEYMAPS[index])
        self.c_type = _KEYMAP_TYPES[index]

    @staticmethod
    def update_keyboard_state(pressed: Iterable[str]) -> None:
        """Record the names of the keys held down this frame."""
        KeyboardController._pressed = frozenset(key.lower() for key in pressed)

    def reset(self) -> None:
        """The keyboard state is shared, so there is nothing per controller to clear."""

    def _held(self, action: str) -> bool:
        return self.keys[action] in KeyboardController._pressed

    def is_left(self) -> bool:
        return self._held("left")

    def is_right(self) -> bool:
        return self._held("right")

    def is_up(self) -> bool:
        return self._held("up")

    def is_down(self) -> bool:
        return self._held("down")

    def is_bomb(self) -> bool:
        return self._held("bomb")
"""Small commands the computer player queues up: walk, drop a bomb, wait."""

from __future__ import annotations

import abc
import enum
import math
from typing import Any

from .core import TILE_SIZE, Direction

RATING_EXTRA = 30
RATING_HOT = -100
RATING_X = -666
RATING_BLOCKING = -1000

DRATING_ENEMY = 150
DRATING_BOX = 20
DRATING_DISEASE = 10
DRATING_DBOX = -50
DRATING_EXTRA = -90
DRATING_BOMB = -100
DRATING_FRIEND = -200


class Personality(enum.IntEnum):
    PEACEFUL = 0
    EASY = 1
    NORMAL = 2
    HARD = 3
    NIGHTMARE = 4


def _cell_offset(value: float) -> int:
    """Pixel offset inside a tile, with the remainder taking the dividend's sign."""
    return int(math.fmod(int(value), TILE_SIZE))


class AIJob(abc.ABC):
    """One step of a plan; it reports when it is done or no longer makes sense.

    The controller is expected to offer ``bomber``, ``current_dir``,
    ``put_bomb``, ``is_death(x, y)`` and ``is_hotspot(x, y)``.
    """

    def __init__(self, controller: Any) -> None:
        self.controller = controller
        self.bomber = controller.bomber
        self.app = getattr(self.bomber, "app", None)
        self.finished = False
        self.obsolete = False

    @abc.abstractmethod
    def execute(self, dt: float) -> None:
        """Drive the controller for one frame."""

    def init(self) -> None:
        """Prepare the job when it becomes the first in the queue."""

    def release(self) -> None:
        """Undo any input the job left on the controller when it is dropped."""


class GoJob(AIJob):
    """Walk in one direction for a number of tiles."""

    def __init__(self, controller: Any, direction: Any, distance: int = 1) -> None:
        super().__init__(controller)
        self.direction = Direction(direction)
        self.distance = distance
        self.start = 0
        self.init()

    def init(self) -> None:
        bx, by = self.bomber.map_x, self.bomber.map_y
        if self.direction is Direction.NONE:
            self._give_up()
            return
        dx, dy = self.direction.delta
        if self.controller.is_death(bx + dx, by + dy):
            self._give_up()
        self.start = by if dy else bx

    def _give_up(self) -> None:
        self.obsolete = True
        self.controller.current_dir = Direction.NONE

    def _arrive(self) -> None:
        self.finished = True
        self.controller.current_dir = Direction.NONE

    def execute(self, dt: float) -> None:
        controller, bomber = self.controller, self.bomber
        controller.current_dir = self.direction
        direction = self.direction

        if direction is Direction.UP:
            if bomber.map_y <= self.start - self.distance and _cell_offset(bomber.y) < 15:
                self._arrive()
        elif direction is Direction.DOWN:
            if bomber.map_y >= self.start + self.distance and _cell_offset(bomber.y) > 25:
                self._arrive()
        elif direction is Direction.LEFT:
            if bomber.map_x <= self.start - self.distance and _cell_offset(bomber.x) < 15:
                self._arrive()
        elif direction is Direction.RIGHT:
            if bomber.map_x >= self.start + self.distance and _cell_offset(bomber.x) > 25:
                self._arrive()
        else:
            self._give_up()

        if getattr(bomber, "stopped", False):
            self.obsolete = True

    def release(self) -> None:
        self.controller.current_dir = Direction.NONE


class PutBombJob(AIJob):
    """Press the bomb button once, unless a bomb already lies underfoot."""

    def execute(self, dt: float) -> None:
        self.controller.put_bomb = True
        self.finished = True
        game_map = getattr(self.app, "map", None)
        if game_map is None:
            return
        tile = game_map.tile_at(self.bomber.map_x, self.bomber.map_y)
        if tile is not None and tile.bomb is not None:
            self.obsolete = True

    def release(self) -> None:
        self.controller.put_bomb = False


class WaitJob(AIJob):
    """Stand still for a while; give up if the spot becomes dangerous."""

    def __init__(self, controller: Any, duration: float) -> None:
        super().__init__(controller)
        self.duration = duration

    def execute(self, dt: float) -> None:
        self.duration -= dt
        self.controller.put_bomb = False
        self.controller.current_dir = Direction.NONE
        if self.duration <= 0:
            self.finished = True
        if self.controller.is_hotspot(self.bomber.map_x, self.bomber.map_y):
            self.obsolete = True
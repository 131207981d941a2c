"""Shared game-world types: directions, object kinds, the base game object and the application state."""

from __future__ import annotations

import enum
import math
from pathlib import Path
from typing import Any, NamedTuple, Optional

TILE_SIZE = 40


class Direction(enum.IntEnum):
    """Facing and movement directions; the values index sprite rows."""

    NONE = -1
    DOWN = 0
    LEFT = 1
    UP = 2
    RIGHT = 3

    @property
    def delta(self) -> tuple[int, int]:
        """Unit step (dx, dy) in screen coordinates."""
        return _DELTAS[self]


_DELTAS = {
    Direction.NONE: (0, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
}


class ObjectKind(enum.Enum):
    """What a game object is, used when scanning the object list."""

    GENERIC = "generic"
    BOMB = "bomb"
    BOMBER = "bomber"
    EXPLOSION = "explosion"
    EXTRA = "extra"
    BOMBER_CORPSE = "bomber_corpse"
    CORPSE_PART = "corpse_part"


class BomberColor(enum.IntEnum):
    RED = 0
    BLUE = 1
    YELLOW = 2
    GREEN = 3
    CYAN = 4
    ORANGE = 5
    PURPLE = 6
    BROWN = 7


_SKINS = {
    BomberColor.RED: "bomber_dull_red",
    BomberColor.BLUE: "bomber_dull_blue",
    BomberColor.YELLOW: "bomber_dull_yellow",
    BomberColor.GREEN: "bomber_dull_green",
    BomberColor.CYAN: "bomber_snake",
    BomberColor.ORANGE: "bomber_tux",
    BomberColor.PURPLE: "bomber_spider",
    BomberColor.BROWN: "bomber_bsd",
}

_DEFAULT_SKIN = "bomber_snake"


def skin_for_color(color: Any) -> str:
    """Texture name of the bomber skin used for a colour."""
    try:
        return _SKINS[BomberColor(color)]
    except ValueError:
        return _DEFAULT_SKIN


class Sprite(NamedTuple):
    """What an object asks to have drawn this frame."""

    texture: str
    frame: int
    x: float
    y: float
    z: int


def _trunc_div(value: float, divisor: int) -> int:
    return int(int(value) / divisor)


def _cell(coordinate: float) -> int:
    return math.floor(coordinate / TILE_SIZE)


class GameObject:
    """Anything that lives on the map: it acts each frame and may be drawn.

    The application's ``map`` is expected to offer ``width``, ``height`` and
    ``tile_at(x, y)``, which returns a tile or ``None`` outside the map; a tile
    offers ``is_blocking()`` and a ``bomb`` attribute.
    """

    kind = ObjectKind.GENERIC

    def __init__(self, x: float, y: float, app: Optional["GameApp"] = None) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = 0
        self.app = app
        self.speed = 0
        self.cur_dir = Direction.NONE
        self.texture_name = ""
        self.sprite_nr = 0
        self.delete_me = False
        self.stopped = False
        self.object_id = app.next_object_id() if app is not None else 0

    @property
    def map_x(self) -> int:
        return _trunc_div(self.x + TILE_SIZE // 2, TILE_SIZE)

    @property
    def map_y(self) -> int:
        return _trunc_div(self.y + TILE_SIZE // 2, TILE_SIZE)

    def act(self, dt: float) -> None:
        """Advance one frame; a plain object only travels in its current direction."""
        if self.cur_dir is not Direction.NONE:
            self.move(dt)

    def show(self) -> Optional[Sprite]:
        """The sprite to draw, or None when the object has no texture."""
        if not self.texture_name:
            return None
        return Sprite(self.texture_name, self.sprite_nr, self.x, self.y, self.z)

    def snap(self) -> None:
        """Align the object to the grid cell it mostly occupies."""
        mx, my = self.map_x, self.map_y
        self.x = float(mx * TILE_SIZE)
        self.y = float(my * TILE_SIZE)

    def tile(self) -> Any:
        """The map tile under the object's centre, or None."""
        game_map = self.app.map if self.app is not None else None
        if game_map is None:
            return None
        return game_map.tile_at(self.map_x, self.map_y)

    def move(self, dt: float) -> bool:
        """Travel along ``cur_dir`` at ``speed``; return False when blocked."""
        dx, dy = self.cur_dir.delta
        if dx == 0 and dy == 0:
            self.stopped = True
            return False
        step = self.speed * dt
        nx = self.x + dx * step
        ny = self.y + dy * step
        game_map = self.app.map if self.app is not None else None
        if game_map is not None:
            here = (self.map_x, self.map_y)
            if dx:
                target = (_cell(nx + (TILE_SIZE - 1 if dx > 0 else 0)), here[1])
            else:
                target = (here[0], _cell(ny + (TILE_SIZE - 1 if dy > 0 else 0)))
            if target != here:
                tile = game_map.tile_at(*target)
                occupied = tile is not None and tile.bomb is not None and tile.bomb is not self
                if tile is None or tile.is_blocking() or occupied:
                    self.stopped = True
                    return False
        self.x, self.y = nx, ny
        self.stopped = False
        return True


class GameApp:
    """State of one local game: the map, the live objects and optional services."""

    MAP_PATH = Path("data/maps/")

    def __init__(self, game_map: Any = None, *, audio: Any = None, renderer: Any = None) -> None:
        self.map = game_map
        self.audio = audio
        self.renderer = renderer
        self.objects: list[GameObject] = []
        self.bomber_objects: list[GameObject] = []
        self.paused = False
        self._next_id = 1

    @property
    def is_server(self) -> bool:
        return False

    @property
    def is_client(self) -> bool:
        return False

    def next_object_id(self) -> int:
        """Hand out object ids, wrapping like a 16-bit counter."""
        object_id = self._next_id
        self._next_id = (object_id + 1) % 65536
        return object_id

    def object_by_id(self, object_id: int) -> Optional[GameObject]:
        return next((obj for obj in self.objects if obj.object_id == object_id), None)

    def delete_all_objects(self) -> None:
        self.objects.clear()
        self.bomber_objects.clear()

    def add(self, obj: GameObject) -> GameObject:
        self.objects.append(obj)
        return obj
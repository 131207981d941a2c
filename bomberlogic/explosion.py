"""Cross-shaped explosions that burn boxes, set off bombs and kill bombers."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from .core import GameObject, ObjectKind

DETONATION_PERIOD = 0.5


class Explosion(GameObject):
    """A blast centred on a tile with four rays, alive for half a second.

    Map tiles are expected to offer ``is_burnable()``, ``is_blocking()``,
    ``destroy()`` and a ``bomb`` attribute.
    """

    kind = ObjectKind.EXPLOSION

    def __init__(self, x: float, y: float, power: int, owner: Any, app: Any) -> None:
        super().__init__(x, y, app)
        self.owner = owner
        self.power = power
        self.detonation_period = DETONATION_PERIOD
        self.texture_name = "explosion"

        cx, cy = self.map_x, self.map_y
        self.length_up = self._ray_length(cx, cy, 0, -1)
        self.length_down = self._ray_length(cx, cy, 0, 1)
        self.length_left = self._ray_length(cx, cy, -1, 0)
        self.length_right = self._ray_length(cx, cy, 1, 0)

        self.detonate_other_bombs()

    def _tile(self, map_x: int, map_y: int) -> Optional[Any]:
        game_map = getattr(self.app, "map", None)
        if game_map is None:
            return None
        return game_map.tile_at(map_x, map_y)

    def _ray_length(self, cx: int, cy: int, dx: int, dy: int) -> int:
        length = 0
        for i in range(1, self.power + 1):
            tile = self._tile(cx + dx * i, cy + dy * i)
            if tile is None:
                break
            length = i
            if tile.is_burnable() or tile.is_blocking():
                break
        return length

    def _cells(self) -> Iterator[tuple[int, int]]:
        """Map cells covered: the centre, then the up, down, left and right rays."""
        cx, cy = self.map_x, self.map_y
        yield cx, cy
        for i in range(1, self.length_up + 1):
            yield cx, cy - i
        for i in range(1, self.length_down + 1):
            yield cx, cy + i
        for i in range(1, self.length_left + 1):
            yield cx - i, cy
        for i in range(1, self.length_right + 1):
            yield cx + i, cy

    def covers(self, map_x: int, map_y: int) -> bool:
        """Whether the blast reaches the given map cell."""
        cx, cy = self.map_x, self.map_y
        if map_x == cx and cy - self.length_up <= map_y <= cy + self.length_down:
            return True
        return map_y == cy and cx - self.length_left <= map_x <= cx + self.length_right

    def act(self, dt: float) -> None:
        self.detonate_other_bombs()
        self.kill_bombers()
        self.explode_corpses()

        self.detonation_period -= dt
        if self.detonation_period < 0:
            self.delete_me = True

    def detonate_other_bombs(self) -> None:
        """Cut the fuse of bombs in reach and burn burnable tiles."""
        for map_x, map_y in self._cells():
            tile = self._tile(map_x, map_y)
            if tile is None:
                continue
            if tile.bomb is not None:
                tile.bomb.explode_delayed()
            if tile.is_burnable():
                tile.destroy()

    def kill_bombers(self) -> None:
        """Kill every living bomber standing in the blast."""
        if self.app is None:
            return
        for bomber in list(self.app.bomber_objects):
            if bomber is None or bomber.delete_me or getattr(bomber, "dead", False):
                continue
            if self.covers(bomber.map_x, bomber.map_y):
                bomber.die()

    def explode_corpses(self) -> None:
        """Blow apart every intact corpse lying in the blast."""
        if self.app is None:
            return
        for obj in list(self.app.objects):
            if obj is None or obj.kind is not ObjectKind.BOMBER_CORPSE:
                continue
            if obj.exploded:
                continue
            if self.covers(obj.map_x, obj.map_y):
                obj.explode()
"""Bombs that tick down, can be kicked along the floor, and burst into explosions."""

from __future__ import annotations

from typing import Any

from .audio import AudioPosition
from .core import TILE_SIZE, Direction, GameObject, ObjectKind
from .explosion import Explosion

DEFAULT_COUNTDOWN = 3.0
DEFAULT_CHAIN_DELAY = 0.1
KICK_SPEED = 240
ANIMATION_FRAMES = 4
ANIMATION_SPEED = 10.0
EXPLODE_SOUND_DISTANCE = 600.0


def _grid_align(value: float) -> float:
    """Round a pixel coordinate to the nearest tile corner, truncating toward zero."""
    n = int(value) + TILE_SIZE // 2
    q = abs(n) // TILE_SIZE
    return float((q if n >= 0 else -q) * TILE_SIZE)


class Bomb(GameObject):
    """A bomb sitting on (or sliding across) the map until its fuse runs out.

    ``countdown`` is the fuse in seconds; ``chain_delay`` is the short fuse the
    bomb is cut down to when another explosion reaches it.
    """

    kind = ObjectKind.BOMB

    def __init__(
        self,
        x: float,
        y: float,
        power: int,
        owner: Any,
        app: Any,
        *,
        countdown: float = DEFAULT_COUNTDOWN,
        chain_delay: float = DEFAULT_CHAIN_DELAY,
    ) -> None:
        super().__init__(x, y, app)
        self.texture_name = "bombs"
        self.power = power
        self.owner = owner
        self.countdown = countdown
        self.chain_delay = chain_delay
        self.x = _grid_align(self.x)
        self.y = _grid_align(self.y)

        self.anim_timer = 0.0
        color = getattr(owner, "color", 0) if owner is not None else 0
        self.base_sprite = int(color) * ANIMATION_FRAMES
        self.sprite_nr = self.base_sprite

        tile = self.tile()
        if tile is not None:
            tile.bomb = self

    def _release_tile(self) -> None:
        tile = self.tile()
        if tile is not None and tile.bomb is self:
            tile.bomb = None

    def act(self, dt: float) -> None:
        self.anim_timer += dt
        frame = int(self.anim_timer * ANIMATION_SPEED) % ANIMATION_FRAMES
        self.sprite_nr = self.base_sprite + frame

        if self.cur_dir is not Direction.NONE and not self.move(dt):
            self.stop()

        self.countdown -= dt
        if self.countdown <= 0:
            self.explode()

    def explode(self) -> None:
        """Blow up once: free the owner's bomb slot and spawn the explosion."""
        if self.delete_me:
            return
        self.delete_me = True

        if self.owner is not None:
            self.owner.dec_current_bombs()

        audio = getattr(self.app, "audio", None)
        if audio is not None:
            audio.play_sound_3d(
                "explode", AudioPosition(self.x, self.y, 0.0), EXPLODE_SOUND_DISTANCE
            )

        self._release_tile()
        if self.app is not None:
            self.app.add(Explosion(int(self.x), int(self.y), self.power, self.owner, self.app))

    def explode_delayed(self) -> None:
        """Shorten the fuse to the chain-reaction delay if it is longer."""
        if self.countdown > self.chain_delay:
            self.countdown = self.chain_delay

    def kick(self, direction: Direction) -> None:
        """Send a resting bomb sliding in a direction; a moving bomb ignores kicks."""
        if self.cur_dir is not Direction.NONE:
            return
        self._release_tile()
        self.cur_dir = Direction(direction)
        self.speed = KICK_SPEED

    def stop(self) -> None:
        """Halt the bomb, snap it to the grid and claim the tile beneath it."""
        self.cur_dir = Direction.NONE
        self.snap()
        tile = self.tile()
        if tile is not None:
            tile.bomb = self
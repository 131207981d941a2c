"""Power-ups that lie on the map and change a bomber's abilities when picked up."""

from __future__ import annotations

import enum
import math
from typing import Any, Optional

from .audio import AudioPosition
from .core import TILE_SIZE, GameObject, ObjectKind, Sprite

Z_EXTRA = 5
PICKUP_DISTANCE = 20.0
COLLECT_ANIMATION_TIME = 0.3
BOUNCE_SPEED = 4.0
BOUNCE_HEIGHT = 3.0
PICKUP_SOUND_DISTANCE = 400.0


class ExtraType(enum.IntEnum):
    BOMB = 0
    FLAME = 1
    SPEED = 2
    KICK = 3
    GLOVE = 4
    SKATE = 5
    DISEASE = 6
    KOKS = 7
    VIAGRA = 8

    @property
    def is_negative(self) -> bool:
        """Whether picking this up is a penalty rather than a bonus."""
        return self in (ExtraType.DISEASE, ExtraType.KOKS, ExtraType.VIAGRA)


def _grid_align(value: float) -> float:
    n = int(value) + TILE_SIZE // 2
    q = abs(n) // TILE_SIZE
    return float((q if n >= 0 else -q) * TILE_SIZE)


class Extra(GameObject):
    """A bouncing power-up collected by the first living bomber that touches it."""

    kind = ObjectKind.EXTRA

    def __init__(self, x: float, y: float, extra_type: Any, app: Any = None) -> None:
        super().__init__(x, y, app)
        self.extra_type = ExtraType(extra_type)
        self.collected = False
        self.collect_animation = 0.0
        self.bounce_timer = 0.0
        self.bounce_offset = 0.0

        self.texture_name = f"extras2_{int(self.extra_type)}"
        self.sprite_nr = 0
        self.z = Z_EXTRA

        self.x = _grid_align(self.x)
        self.y = _grid_align(self.y)

    def act(self, dt: float) -> None:
        if self.collected:
            self.collect_animation += dt
            if self.collect_animation > COLLECT_ANIMATION_TIME:
                self.delete_me = True
            return

        self.bounce_timer += dt * BOUNCE_SPEED
        self.bounce_offset = math.sin(self.bounce_timer) * BOUNCE_HEIGHT

        bombers = self.app.bomber_objects if self.app is not None else []
        for bomber in list(bombers):
            if bomber is None or bomber.delete_me or getattr(bomber, "dead", False):
                continue
            if math.hypot(bomber.x - self.x, bomber.y - self.y) < PICKUP_DISTANCE:
                self.apply_effect(bomber)
                self.collect()
                break

    def show(self) -> Optional[Sprite]:
        """The bouncing sprite, or nothing once the extra has been picked up."""
        if self.collected:
            return None
        sprite = super().show()
        if sprite is None:
            return None
        return sprite._replace(y=self.y + self.bounce_offset)

    def collect(self) -> None:
        """Mark the extra as taken and play the pickup sound once."""
        if self.collected:
            return
        self.collected = True
        audio = getattr(self.app, "audio", None)
        if audio is not None:
            name = "schnief" if self.extra_type.is_negative else "wow"
            audio.play_sound_3d(name, AudioPosition(self.x, self.y, 0.0), PICKUP_SOUND_DISTANCE)

    def apply_effect(self, bomber: Any) -> None:
        """Change the bomber according to this extra's type."""
        if bomber is None:
            return
        kind = self.extra_type
        if kind is ExtraType.BOMB:
            bomber.inc_max_bombs(1)
        elif kind is ExtraType.FLAME:
            bomber.inc_power(1)
        elif kind is ExtraType.SPEED:
            bomber.inc_speed(20)
        elif kind is ExtraType.KICK:
            bomber.can_kick = True
        elif kind is ExtraType.GLOVE:
            bomber.can_throw = True
        elif kind is ExtraType.SKATE:
            bomber.inc_speed(10)
        elif kind is ExtraType.DISEASE:
            bomber.dec_speed(40)
        elif kind is ExtraType.KOKS:
            bomber.inc_speed(50)
        elif kind is ExtraType.VIAGRA:
            bomber.dec_speed(20)
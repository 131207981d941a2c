"""The body a bomber leaves behind, which can be blown into pieces."""

from __future__ import annotations

import math
import random
from typing import Any, Optional

from .audio import AudioPosition
from .core import GameObject, ObjectKind, skin_for_color
from .corpse_part import CorpsePart

Z_CORPSE = 10
DEAD_SPRITE = 40
CORPSE_LIFETIME = 10.0
GORE_DELAY = 0.1
BLOOD_DROPS = 20


class BomberCorpse(GameObject):
    """Lies on the map until it times out or an explosion turns it into gore."""

    kind = ObjectKind.BOMBER_CORPSE

    def __init__(
        self,
        x: float,
        y: float,
        color: Any,
        app: Any = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(x, y, app)
        self._rng = rng if rng is not None else random.Random()
        self.color = color
        self.exploded = False
        self.death_animation_timer = 0.0
        self.gore_explosion_timer = 0.0
        self.gore_created = False

        self.texture_name = skin_for_color(color)
        self.sprite_nr = DEAD_SPRITE
        self.z = Z_CORPSE

        self._play("die", 500.0)

    def _play(self, name: str, max_distance: float) -> None:
        audio = getattr(self.app, "audio", None)
        if audio is not None:
            audio.play_sound_3d(name, AudioPosition(self.x, self.y, 0.0), max_distance)

    def act(self, dt: float) -> None:
        self.death_animation_timer += dt

        if self.exploded and not self.gore_created:
            self.gore_explosion_timer += dt
            if self.gore_explosion_timer > GORE_DELAY:
                self._create_gore_explosion()
                self.gore_created = True
                self.delete_me = True

        if not self.exploded and self.death_animation_timer > CORPSE_LIFETIME:
            self.delete_me = True

    def explode(self) -> None:
        """Mark the corpse as hit; the gore follows after a short delay."""
        if self.exploded:
            return
        self.exploded = True
        self.gore_explosion_timer = 0.0
        self._play("corpse_explode", 600.0)

    def _spawn_part(self, offset: float, part_type: int, vel_x: float, vel_y: float,
                    force: float) -> CorpsePart:
        start_x = int(self.x + self._rng.uniform(-offset, offset))
        start_y = int(self.y + self._rng.uniform(-offset, offset))
        return CorpsePart(start_x, start_y, part_type, vel_x, vel_y, force, self.app, rng=self._rng)

    def _create_gore_explosion(self) -> list[CorpsePart]:
        rng = self._rng
        parts: list[CorpsePart] = []

        for _ in range(rng.randint(8, 12)):
            angle = rng.uniform(0.0, 2.0 * math.pi)
            velocity = rng.uniform(150.0, 450.0)
            force = rng.uniform(800.0, 1500.0)
            vel_x = math.cos(angle) * velocity
            vel_y = math.sin(angle) * velocity
            vel_y *= 0.7 if vel_y > 0 else 1.3
            part_type = rng.randint(0, 3)
            parts.append(self._spawn_part(15.0, part_type, vel_x, vel_y, force))

        for _ in range(BLOOD_DROPS):
            angle = rng.uniform(0.0, 2.0 * math.pi)
            velocity = rng.uniform(150.0, 450.0) * 0.6
            force = rng.uniform(800.0, 1500.0) * 0.3
            vel_x = math.cos(angle) * velocity
            vel_y = math.sin(angle) * velocity * 0.8
            parts.append(self._spawn_part(20.0, 0, vel_x, vel_y, force))

        if self.app is not None:
            for part in parts:
                self.app.add(part)
        return parts
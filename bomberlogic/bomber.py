"""Player characters: movement, bomb placing and throwing, lives and respawning."""

from __future__ import annotations

from typing import Any, Callable, Optional

from .audio import AudioPosition
from .bomb import Bomb
from .bomber_corpse import BomberCorpse
from .core import TILE_SIZE, BomberColor, Direction, GameObject, ObjectKind, skin_for_color

START_SPEED = 90
MIN_SPEED = 30
THROW_HOLD_TIME = 0.3
THROW_DISTANCE = 120.0
PLACE_COOLDOWN = 0.5
THROW_COOLDOWN = 0.8
RESPAWN_DELAY = 2.0
INVINCIBLE_TIME = 3.0
FLICKER_RATE = 8

Thrower = Callable[[Any, float, float], Optional[GameObject]]


class Bomber(GameObject):
    """A bomber steered by a controller.

    ``thrower`` is an optional callable ``(bomber, target_x, target_y)`` that
    builds a thrown bomb; without it a bomber with the glove cannot throw.
    ``respawn`` asks the map for ``bomber_position(number)`` when it has one.
    """

    kind = ObjectKind.BOMBER

    def __init__(
        self,
        x: float,
        y: float,
        color: Any,
        controller: Any,
        app: Any = None,
        *,
        start_power: int = 1,
        lives: int = 3,
        thrower: Optional[Thrower] = None,
    ) -> None:
        super().__init__(x, y, app)
        self.color = color
        self.controller = controller
        if controller is not None:
            controller.attach(self)
        self.anim_count = 0.0
        self.cur_dir = Direction.RIGHT
        self.speed = START_SPEED
        self.bomb_cooldown = 0.0
        self.power = start_power
        self.max_bombs = 1
        self.current_bombs = 0
        self.can_kick = False
        self.can_throw = False
        self.dead = False

        self.lives = lives
        self.respawning = False
        self.invincible = False
        self.respawn_timer = 0.0
        self.invincible_timer = 0.0

        self.flying = False
        self.flight_timer = 0.0
        self.flight_duration = 0.0
        self.start_x = self.start_y = self.target_x = self.target_y = 0

        self.team = 0
        self.number = 0
        self.name = "Bomber"

        self.bomb_hold_timer = 0.0
        self.bomb_button_held = False
        self.thrower = thrower

        self.texture_name = skin_for_color(color)

    def _play(self, name: str, max_distance: float) -> None:
        audio = getattr(self.app, "audio", None)
        if audio is not None:
            audio.play_sound_3d(name, AudioPosition(self.x, self.y, 0.0), max_distance)

    def act(self, dt: float) -> None:
        controller = self.controller
        if self.dead or controller is None:
            return

        if self.respawning:
            self.respawn_timer -= dt
            if self.respawn_timer > 0.0:
                return
            self.respawning = False
            self.dead = False
            self.invincible = True
            self.invincible_timer = INVINCIBLE_TIME

        if self.invincible:
            self.invincible_timer -= dt
            if self.invincible_timer <= 0.0:
                self.invincible = False

        if self.flying:
            self._advance_flight(dt)

        controller.update(dt)

        moved = False
        if controller.active and not self.flying:
            pressed = [
                (controller.is_left(), Direction.LEFT),
                (controller.is_right(), Direction.RIGHT),
                (controller.is_up(), Direction.UP),
                (controller.is_down(), Direction.DOWN),
            ]
            chosen = next((d for held, d in pressed if held), None)
            if chosen is not None:
                self.cur_dir = chosen
                moved = self.move(dt)

        if self.bomb_cooldown > 0:
            self.bomb_cooldown -= dt

        if controller.active and not self.flying and self.bomb_cooldown <= 0:
            self._handle_bomb_button(controller.is_bomb(), dt)
        elif not controller.is_bomb():
            self.bomb_button_held = False
            self.bomb_hold_timer = 0.0

        if moved:
            self.anim_count += dt * 20 * (self.speed / 90.0)
        else:
            self.anim_count = 0.0
        if self.anim_count >= 9:
            self.anim_count = 1.0

        self.sprite_nr = int(self.cur_dir) * 10 + int(self.anim_count)

    def _advance_flight(self, dt: float) -> None:
        self.flight_timer += dt
        if self.flight_duration > 0:
            progress = self.flight_timer / self.flight_duration
        else:
            progress = 1.0
        if progress >= 1.0:
            self.flying = False
            self.x = float(self.target_x)
            self.y = float(self.target_y)
        else:
            ease = 1.0 - (1.0 - progress) * (1.0 - progress)
            self.x = self.start_x + (self.target_x - self.start_x) * ease
            self.y = self.start_y + (self.target_y - self.start_y) * ease

    def _handle_bomb_button(self, pressed: bool, dt: float) -> None:
        if pressed and not self.bomb_button_held:
            self.bomb_button_held = True
            self.bomb_hold_timer = 0.0
        elif pressed:
            self.bomb_hold_timer += dt
        elif self.bomb_button_held:
            self.bomb_button_held = False
            if self.bomb_hold_timer >= THROW_HOLD_TIME and self.can_throw:
                self._throw_bomb()
            elif self.can_place_bomb():
                self.place_bomb()
            self.bomb_hold_timer = 0.0

    def die(self) -> None:
        """Leave a corpse and lose a life; respawn later or go for good."""
        if self.dead or self.invincible:
            return
        self.dead = True
        corpse = BomberCorpse(self.x, self.y, self.color, self.app)
        if self.app is not None:
            self.app.add(corpse)
        self.lose_life()
        if self.has_lives():
            self.respawning = True
            self.respawn_timer = RESPAWN_DELAY
        else:
            self.delete_me = True

    def respawn(self) -> None:
        """Come back to life, briefly invincible, at the map's spawn point."""
        self.dead = False
        self.respawning = False
        self.invincible = True
        self.invincible_timer = INVINCIBLE_TIME
        game_map = getattr(self.app, "map", None)
        locate = getattr(game_map, "bomber_position", None)
        if locate is not None:
            spawn_x, spawn_y = locate(self.number)
            self.x = float(spawn_x * TILE_SIZE)
            self.y = float(spawn_y * TILE_SIZE)

    def is_visible(self) -> bool:
        """False on the blank frames of the invincibility flicker."""
        if not self.invincible:
            return True
        frame = int(self.invincible_timer / (1.0 / FLICKER_RATE))
        return frame % 2 != 0

    def show(self):
        if not self.is_visible():
            return None
        return super().show()

    def fly_to(self, target_x: int, target_y: int, duration_ms: float) -> None:
        """Glide to a point over the given time, easing out."""
        self.flying = True
        self.flight_timer = 0.0
        self.flight_duration = duration_ms / 1000.0
        self.start_x = int(self.x)
        self.start_y = int(self.y)
        self.target_x = int(target_x)
        self.target_y = int(target_y)

    def place_bomb(self) -> Optional[Bomb]:
        """Drop a bomb where the bomber stands unless one is already there."""
        tile = self.tile()
        if tile is not None and tile.bomb is not None:
            return None
        bomb = Bomb(self.x, self.y, self.power, self, self.app)
        if self.app is not None:
            self.app.add(bomb)
        self.inc_current_bombs()
        self.bomb_cooldown = PLACE_COOLDOWN
        self._play("putbomb", 400.0)
        return bomb

    def _throw_bomb(self) -> Optional[GameObject]:
        if self.thrower is None:
            return None
        target_x, target_y = self.x, self.y
        dx, dy = self.cur_dir.delta
        target_x += dx * THROW_DISTANCE
        target_y += dy * THROW_DISTANCE
        target_x = max(20.0, min(target_x, 780.0))
        target_y = max(20.0, min(target_y, 580.0))
        thrown = self.thrower(self, target_x, target_y)
        if thrown is not None and self.app is not None:
            self.app.add(thrown)
        self.inc_current_bombs()
        self.bomb_cooldown = THROW_COOLDOWN
        self._play("whoosh", 400.0)
        return thrown

    def lose_life(self) -> None:
        if self.lives > 0:
            self.lives -= 1

    def has_lives(self) -> bool:
        return self.lives > 0

    def inc_speed(self, amount: int) -> None:
        self.speed += amount

    def dec_speed(self, amount: int) -> None:
        self.speed = max(MIN_SPEED, self.speed - amount)

    def inc_power(self, amount: int) -> None:
        self.power += amount

    def inc_max_bombs(self, amount: int) -> None:
        self.max_bombs += amount

    def inc_current_bombs(self) -> None:
        self.current_bombs += 1

    def dec_current_bombs(self) -> None:
        if self.current_bombs > 0:
            self.current_bombs -= 1

    def can_place_bomb(self) -> bool:
        return self.current_bombs < self.max_bombs


__all__ = ["Bomber", "BomberColor"]
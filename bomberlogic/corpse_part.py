"""Flying body parts thrown out when a corpse is blown apart."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any, Optional

from .core import GameObject, ObjectKind

Z_CORPSE_PART = 20

GROUND_Y = 560.0
LEFT_WALL = 0.0
RIGHT_WALL = 760.0
GRAVITY = 980.0
GROUND_FRICTION = 0.7
DRAG_SCALE = 0.01
MAX_BLOOD_DROPS = 50
BLOOD_LIFE = 2.0
BLOOD_FALL_SPEED = 50.0
REST_SPEED = 5.0
REST_SPIN = 10.0
REST_DELAY = 1.0

_MASSES = {0: 2.5, 1: 4.0, 2: 1.8, 3: 2.2}
_SURFACE_AREAS = {0: 1.2, 1: 2.0, 2: 0.8, 3: 1.0}


def _part_index(part_type: int) -> int:
    # Remainder keeps the sign of the dividend, so negative types fall to the default.
    return int(math.fmod(part_type, 4))


def part_mass(part_type: int) -> float:
    """Mass of a body part: head, torso, arm or leg."""
    return _MASSES.get(_part_index(part_type), 2.0)


def part_surface_area(part_type: int) -> float:
    """Surface area of a body part, used for drag."""
    return _SURFACE_AREAS.get(_part_index(part_type), 1.0)


@dataclass(frozen=True)
class Vector2D:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2D":
        return Vector2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vector2D":
        """Unit vector in the same direction, or the zero vector."""
        m = self.magnitude()
        return self * (1.0 / m) if m > 0 else Vector2D()


@dataclass
class BloodDrop:
    position: Vector2D = field(default_factory=Vector2D)
    life: float = BLOOD_LIFE
    size: float = 1.0
    alpha: int = 255


class CorpsePart(GameObject):
    """A body part moved by gravity, drag and bounces until it rests or expires."""

    kind = ObjectKind.CORPSE_PART

    def __init__(
        self,
        x: float,
        y: float,
        part_type: int,
        vel_x: float,
        vel_y: float,
        explosion_force: float,
        app: Any = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(x, y, app)
        self._rng = rng if rng is not None else random.Random()

        self.position = Vector2D(float(x), float(y))
        self.velocity = Vector2D(vel_x, vel_y)
        self.acceleration = Vector2D()

        self.mass = part_mass(part_type)
        self.surface_area = part_surface_area(part_type)
        self.drag_coefficient = 0.47
        self.restitution = 0.3 + part_type * 0.1

        self.air_density = 1.225
        self.moment_of_inertia = self.mass * self.surface_area * 0.4
        self.angular_drag = 0.1

        self.blood_trails: list[BloodDrop] = []
        self.blood_emission_timer = 0.0
        self.blood_emission_rate = 20.0
        self.viscosity_factor = 0.8 + part_type * 0.05

        self.lifetime = 0.0
        self.max_lifetime = 8.0 + part_type * 0.5
        self.is_resting = False
        self.rest_timer = 0.0

        self.texture_name = "corpse_parts"
        self.part_sprite = _part_index(part_type)
        self.sprite_nr = self.part_sprite
        self.z = Z_CORPSE_PART

        self.rotation = self._rng.uniform(0.0, 360.0)
        self.angular_velocity = self._rng.uniform(-720.0, 720.0) * (explosion_force / self.mass)

        self.apply_force(self.velocity.normalized() * explosion_force)

    def act(self, dt: float) -> None:
        self.lifetime += dt

        if not self.is_resting:
            self._integrate(dt)

        self._update_blood_trail(dt)

        if self.velocity.magnitude() > 50.0 and self.lifetime < 2.0:
            self.blood_emission_timer += dt
            if self.blood_emission_timer > 1.0 / self.blood_emission_rate:
                self.emit_blood()
                self.blood_emission_timer = 0.0

        if self.lifetime > self.max_lifetime:
            self.delete_me = True

    def _integrate(self, dt: float) -> None:
        self.acceleration = Vector2D()
        self._apply_gravity()
        self._apply_drag()

        self.position = self.position + self.velocity * dt + self.acceleration * (0.5 * dt * dt)
        self.velocity = self.velocity + self.acceleration * dt
        self.velocity = self.velocity * (1.0 - self.viscosity_factor * dt)

        angular_acceleration = 0.0
        if self.moment_of_inertia > 0.0:
            drag_torque = -self.angular_velocity * self.angular_velocity * self.angular_drag
            angular_acceleration = drag_torque / self.moment_of_inertia
        self.angular_velocity += angular_acceleration * dt
        self.rotation += self.angular_velocity * dt
        self._normalize_rotation()

        self._handle_collisions()
        self.x = self.position.x
        self.y = self.position.y

        if self.velocity.magnitude() < REST_SPEED and abs(self.angular_velocity) < REST_SPIN:
            self.rest_timer += dt
            if self.rest_timer > REST_DELAY:
                self.is_resting = True
                self.velocity = Vector2D()
                self.angular_velocity = 0.0
        else:
            self.rest_timer = 0.0

    def _normalize_rotation(self) -> None:
        if math.isfinite(self.rotation) and -3600.0 < self.rotation < 3600.0:
            while self.rotation > 360.0:
                self.rotation -= 360.0
            while self.rotation < 0.0:
                self.rotation += 360.0
        else:
            self.rotation = 0.0
            self.angular_velocity = 0.0

    def apply_force(self, force: Vector2D) -> None:
        """Add force / mass to the current acceleration."""
        if self.mass > 0.0:
            self.acceleration = self.acceleration + force * (1.0 / self.mass)

    def _apply_drag(self) -> None:
        speed = self.velocity.magnitude()
        if speed > 0.0:
            drag = 0.5 * self.air_density * speed * speed * self.drag_coefficient * self.surface_area
            drag *= DRAG_SCALE
            self.apply_force(self.velocity.normalized() * -drag)

    def _apply_gravity(self) -> None:
        self.apply_force(Vector2D(0.0, self.mass * GRAVITY))

    def _handle_collisions(self) -> None:
        pos, vel = self.position, self.velocity

        if pos.y > GROUND_Y:
            normal, tangent = vel.y, vel.x
            pos = Vector2D(pos.x, GROUND_Y)
            vel = Vector2D(tangent * (1.0 - GROUND_FRICTION), -normal * self.restitution)
            self.angular_velocity += (tangent / self.mass) * 50.0

        if pos.x < LEFT_WALL:
            pos = Vector2D(LEFT_WALL, pos.y)
            vel = Vector2D(-vel.x * self.restitution, vel.y)
            self.angular_velocity += vel.y * 0.1
        elif pos.x > RIGHT_WALL:
            pos = Vector2D(RIGHT_WALL, pos.y)
            vel = Vector2D(-vel.x * self.restitution, vel.y)
            self.angular_velocity -= vel.y * 0.1

        self.position, self.velocity = pos, vel

    def _update_blood_trail(self, dt: float) -> None:
        for drop in self.blood_trails:
            drop.life -= dt
            drop.alpha = max(0, min(255, int(255.0 * (drop.life / BLOOD_LIFE))))
            drop.position = Vector2D(drop.position.x, drop.position.y + BLOOD_FALL_SPEED * dt)
        self.blood_trails = [drop for drop in self.blood_trails if drop.life > 0.0]

    def emit_blood(self) -> None:
        """Drop one blood droplet near the part, up to a fixed number alive."""
        if len(self.blood_trails) >= MAX_BLOOD_DROPS:
            return
        offset_x = self._rng.uniform(-5.0, 5.0)
        offset_y = self._rng.uniform(-5.0, 5.0)
        self.blood_trails.append(
            BloodDrop(
                position=Vector2D(self.position.x + offset_x, self.position.y + offset_y),
                life=BLOOD_LIFE,
                size=self._rng.uniform(1.0, 3.0),
                alpha=255,
            )
        )
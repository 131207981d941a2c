"""Computer player that rates every map cell and plans walks, bombs and escapes."""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Any, Optional

from .ai_jobs import (
    RATING_BLOCKING,
    RATING_EXTRA,
    RATING_HOT,
    RATING_X,
    AIJob,
    GoJob,
    Personality,
    PutBombJob,
    WaitJob,
)
from .controller import BombMode, Controller, ControllerType, KeyboardController
from .core import Direction, ObjectKind

log = logging.getLogger(__name__)

AI_UPDATE_INTERVAL = 0.05
STANDARD_POWER = 2
ASSUMED_COUNTDOWN = 3.0
ESCAPE_WAIT = 4.0
ESCAPE_DISTANCE = 3

_SETTINGS = {
    Personality.PEACEFUL: (0.1, 0.8),
    Personality.EASY: (0.3, 0.5),
    Personality.NORMAL: (0.5, 0.2),
    Personality.HARD: (0.8, 0.1),
    Personality.NIGHTMARE: (1.0, 0.03),
}

_MAX_BOMBS = {
    Personality.PEACEFUL: 1,
    Personality.EASY: 1,
    Personality.NORMAL: 2,
    Personality.HARD: 2,
    Personality.NIGHTMARE: 3,
}

_MIN_BENEFIT = {
    Personality.NIGHTMARE: 5,
    Personality.HARD: 8,
    Personality.NORMAL: 10,
}

# Up, right, down, left.
_STEPS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class ModernAIController(Controller):
    """Rates the map each think step and works through a queue of jobs.

    The map must offer ``width``, ``height`` and ``tile_at(x, y)``; tiles offer
    ``is_blocking()``, ``is_destructible()`` and a ``bomb`` attribute.
    """

    def __init__(
        self,
        personality: Personality = Personality.NORMAL,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__()
        self._rng = rng if rng is not None else random.Random()
        self.c_type = ControllerType.AI
        self.personality = Personality(personality)
        self.aggression_level = 0.5
        self.reaction_time = 0.1
        self.ai_update_interval = AI_UPDATE_INTERVAL
        self.last_ai_update = 0.0
        self._clock = 0.0
        self.current_dir = Direction.NONE
        self.jobs: list[AIJob] = []
        self.rating_map: list[list[int]] = []
        self.game_map: Any = None
        self.set_personality(personality)
        self.reset()

    # ------------------------------------------------------------ setup

    def set_personality(self, personality: Personality) -> None:
        self.personality = Personality(personality)
        self.aggression_level, self.reaction_time = _SETTINGS[self.personality]

    def _map_of(self, bomber: Any) -> Any:
        app = getattr(bomber, "app", None)
        return getattr(app, "map", None) if app is not None else None

    def attach(self, bomber: Any) -> None:
        super().attach(bomber)
        game_map = self._map_of(bomber)
        if game_map is not None:
            self.game_map = game_map

    def reset(self) -> None:
        self.current_dir = Direction.NONE
        self.put_bomb = False
        self.game_map = self._map_of(self.bomber)
        self._clear_all_jobs()
        self.rating_map = self._blank_ratings()

    def _blank_ratings(self) -> list[list[int]]:
        if self.game_map is None:
            return []
        return [[0] * self.game_map.height for _ in range(self.game_map.width)]

    @property
    def width(self) -> int:
        return len(self.rating_map)

    @property
    def height(self) -> int:
        return len(self.rating_map[0]) if self.rating_map else 0

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # ------------------------------------------------------------ inputs

    def is_left(self) -> bool:
        return self.current_dir is Direction.LEFT and self.active

    def is_right(self) -> bool:
        return self.current_dir is Direction.RIGHT and self.active

    def is_up(self) -> bool:
        return self.current_dir is Direction.UP and self.active

    def is_down(self) -> bool:
        return self.current_dir is Direction.DOWN and self.active

    def is_bomb(self) -> bool:
        if self.bomb_mode is BombMode.NEVER:
            return False
        if self.bomb_mode is BombMode.ALWAYS:
            return True
        return self.put_bomb and self.active

    def current_state(self) -> str:
        """A short name for what the first queued job is doing."""
        if not self.jobs:
            return "IDLE"
        job = self.jobs[0]
        if isinstance(job, GoJob):
            return "MOVING"
        if isinstance(job, PutBombJob):
            return "BOMBING"
        if isinstance(job, WaitJob):
            return "WAITING"
        return "UNKNOWN"

    # ------------------------------------------------------------ main loop

    def update(self, dt: float) -> None:
        if not self.active or self.bomber is None or self.game_map is None:
            return
        self._clock += dt
        if self._clock - self.last_ai_update >= self.ai_update_interval:
            self.generate_rating_map()
            if self._job_ready():
                self.jobs[0].execute(dt)
            self.last_ai_update = self._clock

    def _job_ready(self) -> bool:
        while True:
            if not self.jobs:
                self._find_new_jobs()
                return bool(self.jobs)
            first = self.jobs[0]
            if first.obsolete:
                self._clear_all_jobs()
                continue
            if first.finished:
                self.jobs.pop(0).release()
                if self.jobs:
                    self.jobs[0].init()
                continue
            return True

    def _clear_all_jobs(self) -> None:
        jobs, self.jobs = self.jobs, []
        for job in jobs:
            job.release()

    def _find_new_jobs(self) -> None:
        if self._avoid_bombs():
            return
        if self.find_way(RATING_EXTRA, RATING_HOT, 10):
            return
        if self._should_move_to_better_position():
            return
        if self._find_bombing_opportunities():
            return
        self.find_way(0, RATING_HOT, 3)

    # ------------------------------------------------------------ ratings

    def generate_rating_map(self) -> None:
        """Rate every cell from the bombs, explosions, extras and walls on the map."""
        self.rating_map = self._blank_ratings()
        app = getattr(self.bomber, "app", None)
        for obj in list(app.objects) if app is not None else []:
            if obj is None:
                continue
            x, y = obj.map_x, obj.map_y
            if not self._in_bounds(x, y):
                continue
            if obj.kind is ObjectKind.BOMB:
                self.apply_bomb_rating(x, y, STANDARD_POWER, ASSUMED_COUNTDOWN)
            elif obj.kind is ObjectKind.EXPLOSION:
                self.rating_map[x][y] += RATING_X
            elif obj.kind is ObjectKind.EXTRA:
                self.rating_map[x][y] += RATING_EXTRA

        for x in range(self.width):
            for y in range(self.height):
                tile = self.game_map.tile_at(x, y)
                if tile is not None and tile.is_blocking():
                    self.rating_map[x][y] += RATING_BLOCKING

    def apply_bomb_rating(self, x: int, y: int, power: int, countdown: float) -> None:
        """Mark a bomb cell and its rays as dangerous, more so as the fuse shortens."""
        if not self._in_bounds(x, y):
            raise ValueError(f"bomb position outside the map: ({x}, {y})")
        speed = getattr(self.bomber, "speed", 0) if self.bomber is not None else 0
        rating = RATING_HOT
        if countdown > 2.9:
            rating = -1
        elif speed > 0 and countdown < 40.0 / float(speed):
            rating = RATING_X

        self.rating_map[x][y] = rating
        for dx, dy in _STEPS:
            for i in range(1, power + 1):
                nx, ny = x + dx * i, y + dy * i
                if not self._in_bounds(nx, ny):
                    break
                tile = self.game_map.tile_at(nx, ny)
                if tile is None or tile.is_blocking():
                    break
                self.rating_map[nx][ny] += rating

    def is_hotspot(self, x: int, y: int) -> bool:
        if not self._in_bounds(x, y):
            return True
        return self.rating_map[x][y] <= RATING_HOT

    def is_death(self, x: int, y: int) -> bool:
        if not self._in_bounds(x, y):
            return True
        return self.rating_map[x][y] <= RATING_X

    # ------------------------------------------------------------ pathfinding

    def find_way(
        self, dest_rating: int = 0, avoid_rating: int = RATING_X, max_distance: int = 999
    ) -> bool:
        """Search outward for a cell rated at least ``dest_rating`` and queue the walk.

        Cells rated at or below ``avoid_rating`` are never entered. For a positive
        destination rating only the first step is queued.
        """
        if self.bomber is None or not self.rating_map:
            return False
        width, height = self.width, self.height
        visit = [[-1] * height for _ in range(width)]
        start = (self.bomber.map_x, self.bomber.map_y)
        if not self._in_bounds(*start):
            return False
        visit[start[0]][start[1]] = 0
        frontier: deque[tuple[int, int]] = deque([start])
        dest: Optional[tuple[int, int]] = None
        distance = 0

        while distance < max_distance and dest is None and frontier:
            working, frontier = frontier, deque()
            distance += 1
            while working and dest is None:
                cx, cy = working.popleft()
                directions = [Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]
                for _ in range(10):
                    a, b = self._rng.randrange(4), self._rng.randrange(4)
                    directions[a], directions[b] = directions[b], directions[a]
                for direction in directions:
                    dx, dy = direction.delta
                    nx, ny = cx + dx, cy + dy
                    if not self._in_bounds(nx, ny):
                        continue
                    if self.rating_map[nx][ny] > avoid_rating and visit[nx][ny] < 0:
                        frontier.append((nx, ny))
                        visit[nx][ny] = distance
                        if self.rating_map[nx][ny] >= dest_rating:
                            dest = (nx, ny)

        if dest is None:
            return False

        reverse_path: list[GoJob] = []
        dx, dy = dest
        while (dx, dy) != start:
            distance -= 1
            if dy > 0 and visit[dx][dy - 1] == distance:
                reverse_path.append(GoJob(self, Direction.DOWN))
                dy -= 1
            elif dx < width - 1 and visit[dx + 1][dy] == distance:
                reverse_path.append(GoJob(self, Direction.LEFT))
                dx += 1
            elif dy < height - 1 and visit[dx][dy + 1] == distance:
                reverse_path.append(GoJob(self, Direction.UP))
                dy += 1
            elif dx > 0 and visit[dx - 1][dy] == distance:
                reverse_path.append(GoJob(self, Direction.RIGHT))
                dx -= 1
            else:
                return False

        if dest_rating > 0:
            if reverse_path:
                step = reverse_path.pop()
                for job in reverse_path:
                    job.release()
                self.jobs.append(step)
        else:
            self.jobs.extend(reversed(reverse_path))
        return True

    # ------------------------------------------------------------ tactics

    def _avoid_bombs(self) -> bool:
        x, y = self.bomber.map_x, self.bomber.map_y
        if self.is_hotspot(x, y) or self.is_death(x, y):
            self._clear_all_jobs()
            if not self.find_way(0, -1, 8):
                if not self.find_way(0, RATING_HOT, 5):
                    self.find_way(0, RATING_X, 3)
            return True
        if self.count_nearby_threats(x, y) >= 2:
            self.find_way(0, RATING_HOT, 4)
            return True
        return False

    def _find_bombing_opportunities(self) -> bool:
        x, y = self.bomber.map_x, self.bomber.map_y
        if self.is_starting_corner_position(x, y):
            return False
        if self.personality is Personality.PEACEFUL:
            return False
        if self._count_active_bombs() >= self.max_bombs():
            return False
        here = self.game_map.tile_at(x, y)
        if here is not None and here.bomb is not None:
            return False
        if not self.can_escape_from_bomb_safely(x, y):
            return False
        if self.bombing_is_beneficial(x, y):
            self.jobs.append(PutBombJob(self))
            self._add_escape_sequence(x, y)
            return True
        return False

    def is_starting_corner_position(self, x: int, y: int) -> bool:
        """Whether a cell lies in one of the 2x2 map corners where bombers start."""
        w, h = self.width, self.height
        return (
            (x <= 1 and y <= 1)
            or (x >= w - 2 and y <= 1)
            or (x <= 1 and y >= h - 2)
            or (x >= w - 2 and y >= h - 2)
        )

    def can_escape_from_bomb_safely(self, x: int, y: int) -> bool:
        """Whether enough straight, clear routes lead out of a bomb's reach."""
        safe_routes = 0
        for dx, dy in _STEPS:
            route_safe = True
            for dist in range(1, STANDARD_POWER + 2):
                nx, ny = x + dx * dist, y + dy * dist
                if not self._in_bounds(nx, ny) or self.is_hotspot(nx, ny):
                    route_safe = False
                    break
                tile = self.game_map.tile_at(nx, ny)
                if tile is not None and tile.is_blocking():
                    route_safe = False
                    break
            if route_safe:
                safe_routes += 1
        required = 1 if self.personality in (Personality.NIGHTMARE, Personality.HARD) else 2
        return safe_routes >= required

    def bombing_is_beneficial(self, x: int, y: int) -> bool:
        """Whether a bomb here would break enough boxes for this personality."""
        score = 0
        for dx, dy in _STEPS:
            for dist in range(1, STANDARD_POWER + 1):
                nx, ny = x + dx * dist, y + dy * dist
                if not self._in_bounds(nx, ny):
                    break
                tile = self.game_map.tile_at(nx, ny)
                if tile is None:
                    continue
                if tile.is_blocking() and not tile.is_destructible():
                    break
                if tile.is_destructible():
                    score += 10
                    break
        return score >= _MIN_BENEFIT.get(self.personality, 15)

    def _should_move_to_better_position(self) -> bool:
        x, y = self.bomber.map_x, self.bomber.map_y
        if not self.is_starting_corner_position(x, y):
            return False
        cx, cy = self.width // 2, self.height // 2
        if abs(x - cx) > abs(y - cy):
            tx = x + 1 if x < cx else x - 1
            if 0 <= tx < self.width and not self.is_death(tx, y):
                direction = Direction.RIGHT if x < cx else Direction.LEFT
                self.jobs.append(GoJob(self, direction, 1))
                return True
        else:
            ty = y + 1 if y < cy else y - 1
            if 0 <= ty < self.height and not self.is_death(x, ty):
                direction = Direction.DOWN if y < cy else Direction.UP
                self.jobs.append(GoJob(self, direction, 1))
                return True
        return False

    def _count_active_bombs(self) -> int:
        app = getattr(self.bomber, "app", None)
        if app is None:
            return 0
        return sum(1 for obj in app.objects if obj is not None and obj.kind is ObjectKind.BOMB)

    def max_bombs(self) -> int:
        """How many bombs this personality allows itself on the map at once."""
        return _MAX_BOMBS.get(self.personality, 1)

    def _add_escape_sequence(self, bomb_x: int, bomb_y: int) -> None:
        best = self.find_best_escape_direction(bomb_x, bomb_y)
        if best is not Direction.NONE:
            self.jobs.append(GoJob(self, best, ESCAPE_DISTANCE))
            self.jobs.append(WaitJob(self, ESCAPE_WAIT))

    def find_best_escape_direction(self, bomb_x: int, bomb_y: int) -> Direction:
        best, best_score = Direction.NONE, -1000
        for direction in (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT):
            score = self.evaluate_escape_direction(bomb_x, bomb_y, direction)
            if score > best_score:
                best, best_score = direction, score
        return best

    def evaluate_escape_direction(self, bomb_x: int, bomb_y: int, direction: Any) -> int:
        """Score how far and how safely one can run from a bomb in a direction."""
        direction = Direction(direction)
        if direction is Direction.NONE:
            return -1000
        dx, dy = direction.delta
        score = 0
        for dist in range(1, STANDARD_POWER + 3):
            nx, ny = bomb_x + dx * dist, bomb_y + dy * dist
            if not self._in_bounds(nx, ny):
                break
            if self.is_death(nx, ny) or self.is_hotspot(nx, ny):
                score -= 50
                break
            tile = self.game_map.tile_at(nx, ny)
            if tile is not None and tile.is_blocking():
                break
            score += 10
            if dist > STANDARD_POWER:
                score += 50
        return score

    def count_nearby_threats(self, x: int, y: int) -> int:
        """Number of dangerous cells within three cells in each direction."""
        return sum(
            1
            for ny in range(y - 3, y + 4)
            for nx in range(x - 3, x + 4)
            if self._in_bounds(nx, ny) and self.is_hotspot(nx, ny)
        )


def create_controller(kind: Any) -> Controller:
    """Build the controller that belongs to a controller type."""
    kind = ControllerType(kind)
    if kind is ControllerType.AI:
        return ModernAIController(Personality.NORMAL)
    if kind is ControllerType.AI_MASS:
        return ModernAIController(Personality.HARD)
    if kind is ControllerType.KEYMAP_1:
        return KeyboardController(0)
    if kind is ControllerType.KEYMAP_2:
        return KeyboardController(1)
    if kind is ControllerType.KEYMAP_3:
        return KeyboardController(2)
    log.info("Unknown controller type: %s, using KEYMAP_1 instead", kind.name)
    return KeyboardController(0)
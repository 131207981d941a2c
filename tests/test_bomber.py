import pytest

from bomberlogic.bomb import Bomb
from bomberlogic.bomber import Bomber
from bomberlogic.bomber_corpse import BomberCorpse
from bomberlogic.controller import Controller
from bomberlogic.core import BomberColor, Direction, GameApp


class Tile:
    def __init__(self, blocking=False):
        self.blocking = blocking
        self.bomb = None
        self.destroyed = False

    def is_blocking(self):
        return self.blocking

    def is_burnable(self):
        return False

    def destroy(self):
        self.destroyed = True


class Map:
    width = 20
    height = 15

    def __init__(self):
        self.tiles = {(x, y): Tile() for x in range(self.width) for y in range(self.height)}
        self.spawns = {0: (1, 1), 1: (5, 3)}

    def tile_at(self, x, y):
        return self.tiles.get((x, y))

    def bomber_position(self, number):
        return self.spawns[number]


class Pad(Controller):
    def __init__(self):
        super().__init__()
        self.held = set()
        self.updates = 0

    def update(self, dt):
        self.updates += 1

    def reset(self):
        self.held.clear()

    def is_left(self):
        return "left" in self.held

    def is_right(self):
        return "right" in self.held

    def is_up(self):
        return "up" in self.held

    def is_down(self):
        return "down" in self.held

    def is_bomb(self):
        return "bomb" in self.held


@pytest.fixture
def app():
    return GameApp(Map())


@pytest.fixture
def pad():
    p = Pad()
    p.activate()
    return p


def make(app, pad, x=80, y=80, **kwargs):
    bomber = Bomber(x, y, BomberColor.RED, pad, app, **kwargs)
    app.bomber_objects.append(bomber)
    return bomber


def test_skin_and_defaults(app, pad):
    b = make(app, pad)
    assert b.texture_name == "bomber_dull_red"
    assert b.speed == 90
    assert b.max_bombs == 1
    assert b.lives == 3
    assert b.cur_dir is Direction.RIGHT
    assert pad.bomber is b


def test_dec_speed_has_floor(app, pad):
    b = make(app, pad)
    b.dec_speed(1000)
    assert b.speed == 30
    b.inc_speed(15)
    assert b.speed == 45


def test_bomb_counting(app, pad):
    b = make(app, pad)
    assert b.can_place_bomb() is True
    b.inc_current_bombs()
    assert b.can_place_bomb() is False
    b.inc_max_bombs(1)
    assert b.can_place_bomb() is True
    b.dec_current_bombs()
    b.dec_current_bombs()
    assert b.current_bombs == 0


def test_place_bomb_adds_bomb_once_per_tile(app, pad):
    b = make(app, pad)
    first = b.place_bomb()
    assert isinstance(first, Bomb)
    assert app.objects == [first]
    assert b.current_bombs == 1
    assert b.place_bomb() is None
    assert len(app.objects) == 1


def test_press_and_release_places_bomb(app, pad):
    b = make(app, pad)
    pad.held.add("bomb")
    b.act(0.016)
    assert app.objects == []
    pad.held.clear()
    b.act(0.016)
    assert len(app.objects) == 1
    assert isinstance(app.objects[0], Bomb)
    assert pad.updates == 2


def test_long_hold_with_glove_throws(app, pad):
    calls = []
    b = make(app, pad, thrower=lambda bomber, tx, ty: calls.append((bomber, tx, ty)))
    b.can_throw = True
    pad.held.add("bomb")
    b.act(0.016)
    b.act(0.4)
    pad.held.clear()
    b.act(0.016)
    assert calls == [(b, 200.0, 80.0)]
    assert b.current_bombs == 1
    assert app.objects == []


def test_throw_target_is_clamped(app, pad):
    calls = []
    b = make(app, pad, x=760, thrower=lambda bomber, tx, ty: calls.append((tx, ty)))
    b.can_throw = True
    pad.held.add("bomb")
    b.act(0.0)
    b.act(0.5)
    pad.held.clear()
    b.act(0.0)
    assert calls[0][0] == 780.0


def test_long_hold_without_glove_places_normally(app, pad):
    b = make(app, pad)
    pad.held.add("bomb")
    b.act(0.016)
    b.act(0.5)
    pad.held.clear()
    b.act(0.016)
    assert len(app.objects) == 1


def test_moving_right(app, pad):
    b = make(app, pad)
    pad.held.add("right")
    b.act(0.1)
    assert b.x > 80
    assert b.cur_dir is Direction.RIGHT
    assert b.sprite_nr // 10 == int(Direction.RIGHT)


def test_direction_priority_left_first(app, pad):
    b = make(app, pad)
    pad.held.update({"left", "up"})
    b.act(0.05)
    assert b.cur_dir is Direction.LEFT
    assert b.x < 80


def test_inactive_controller_does_not_move(app, pad):
    b = make(app, pad)
    pad.deactivate()
    pad.held.add("down")
    b.act(0.1)
    assert (b.x, b.y) == (80.0, 80.0)


def test_die_leaves_corpse_and_respawns_later(app, pad):
    b = make(app, pad)
    b.die()
    assert b.dead is True
    assert b.lives == 2
    assert b.respawning is True
    assert any(isinstance(o, BomberCorpse) for o in app.objects)
    assert b.delete_me is False


def test_die_on_last_life_deletes(app, pad):
    b = make(app, pad, lives=1)
    b.die()
    assert b.has_lives() is False
    assert b.delete_me is True


def test_invincible_cannot_die(app, pad):
    b = make(app, pad)
    b.invincible = True
    b.die()
    assert b.dead is False
    assert b.lives == 3


def test_dead_bomber_does_not_act(app, pad):
    b = make(app, pad)
    b.die()
    pad.held.add("right")
    b.act(0.1)
    assert pad.updates == 0
    assert b.x == 80.0


def test_respawn_moves_to_spawn_point(app, pad):
    b = make(app, pad)
    b.number = 1
    b.die()
    b.respawn()
    assert b.dead is False
    assert b.invincible is True
    assert (b.x, b.y) == (5 * 40.0, 3 * 40.0)


def test_invincibility_flickers(app, pad):
    b = make(app, pad)
    assert b.is_visible() is True
    b.invincible = True
    b.invincible_timer = 3.0
    assert b.is_visible() is False
    assert b.show() is None
    b.invincible_timer = 3.0 - 1 / 8
    assert b.is_visible() is True
    assert b.show() is not None and b.show().texture == b.texture_name


def test_invincibility_wears_off(app, pad):
    b = make(app, pad)
    b.invincible = True
    b.invincible_timer = 0.05
    b.act(0.1)
    assert b.invincible is False


def test_fly_to_reaches_target(app, pad):
    b = make(app, pad)
    pad.deactivate()
    b.fly_to(200, 120, 1000)
    b.act(0.5)
    assert 80 < b.x < 200
    assert 80 < b.y < 120
    assert b.flying is True
    b.act(0.5)
    assert b.flying is False
    assert (b.x, b.y) == (200.0, 120.0)


def test_lose_life_stops_at_zero(app, pad):
    b = make(app, pad, lives=1)
    b.lose_life()
    b.lose_life()
    assert b.lives == 0
    assert b.has_lives() is False
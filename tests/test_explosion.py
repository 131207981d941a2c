import pytest

from bomberlogic.bomb import DEFAULT_CHAIN_DELAY, Bomb
from bomberlogic.bomber_corpse import BomberCorpse
from bomberlogic.core import BomberColor, GameApp, GameObject
from bomberlogic.explosion import Explosion


class FakeTile:
    def __init__(self, kind="ground"):
        self.kind = kind
        self.bomb = None
        self.destroyed = 0

    def is_blocking(self):
        return self.kind in ("wall", "box")

    def is_burnable(self):
        return self.kind == "box"

    def destroy(self):
        self.kind = "ground"
        self.destroyed += 1


class FakeMap:
    def __init__(self, width=15, height=11):
        self.width = width
        self.height = height
        self.tiles = {(x, y): FakeTile() for x in range(width) for y in range(height)}

    def tile_at(self, x, y):
        return self.tiles.get((x, y))

    def set(self, x, y, kind):
        self.tiles[(x, y)].kind = kind


class FakeBomber(GameObject):
    def __init__(self, x, y, app):
        super().__init__(x, y, app)
        self.dead = False
        self.deaths = 0

    def die(self):
        self.dead = True
        self.deaths += 1


class FakeOwner:
    color = 0

    def dec_current_bombs(self):
        pass


@pytest.fixture
def app():
    return GameApp(FakeMap())


def test_open_map_rays_reach_full_power(app):
    blast = Explosion(200, 200, 3, None, app)
    assert (blast.length_up, blast.length_down, blast.length_left, blast.length_right) == (3, 3, 3, 3)


def test_wall_stops_ray_at_wall(app):
    app.map.set(5, 4, "wall")
    blast = Explosion(200, 200, 3, None, app)
    assert blast.length_up == 1
    assert app.map.tile_at(5, 4).kind == "wall"


def test_map_edge_stops_ray(app):
    blast = Explosion(0, 0, 2, None, app)
    assert blast.length_up == 0
    assert blast.length_left == 0
    assert blast.length_right == 2


def test_box_is_burned_and_shields_beyond(app):
    app.map.set(6, 5, "box")
    app.map.set(7, 5, "box")
    blast = Explosion(200, 200, 3, None, app)
    assert blast.length_right == 1
    assert app.map.tile_at(6, 5).kind == "ground"
    assert app.map.tile_at(7, 5).kind == "box"


def test_covers_cross_shape(app):
    blast = Explosion(200, 200, 2, None, app)
    assert blast.covers(5, 5)
    assert blast.covers(5, 3)
    assert blast.covers(7, 5)
    assert blast.covers(3, 5)
    assert not blast.covers(5, 8)
    assert not blast.covers(6, 6)


def test_chain_reaction_shortens_other_fuse(app):
    other = Bomb(280, 200, 2, FakeOwner(), app, countdown=3.0)
    Explosion(200, 200, 2, None, app)
    assert other.countdown == DEFAULT_CHAIN_DELAY


def test_bomb_out_of_reach_keeps_fuse(app):
    other = Bomb(400, 200, 2, FakeOwner(), app, countdown=3.0)
    Explosion(200, 200, 2, None, app)
    assert other.countdown == 3.0


def test_kills_bomber_in_ray_only(app):
    hit = FakeBomber(200, 280, app)
    safe = FakeBomber(240, 240, app)
    app.bomber_objects.extend([hit, safe])
    blast = Explosion(200, 200, 2, None, app)
    blast.kill_bombers()
    assert hit.dead
    assert not safe.dead


def test_dead_bomber_not_killed_again(app):
    bomber = FakeBomber(200, 200, app)
    app.bomber_objects.append(bomber)
    blast = Explosion(200, 200, 1, None, app)
    blast.act(0.1)
    blast.act(0.1)
    assert bomber.deaths == 1


def test_corpse_in_blast_explodes(app):
    corpse = app.add(BomberCorpse(200, 240, BomberColor.RED, app))
    far_corpse = app.add(BomberCorpse(400, 400, BomberColor.BLUE, app))
    blast = Explosion(200, 200, 2, None, app)
    blast.explode_corpses()
    assert corpse.exploded
    assert not far_corpse.exploded


def test_expires_after_detonation_period(app):
    blast = Explosion(200, 200, 1, None, app)
    blast.act(0.3)
    assert not blast.delete_me
    blast.act(0.3)
    assert blast.delete_me


def test_texture_name(app):
    blast = Explosion(200, 200, 1, None, app)
    sprite = blast.show()
    assert sprite.texture == "explosion"
    assert (sprite.x, sprite.y) == (200.0, 200.0)
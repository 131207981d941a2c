import math

import pytest

from bomberlogic.bomber import MIN_SPEED, Bomber
from bomberlogic.core import BomberColor, GameApp, ObjectKind
from bomberlogic.extra import Extra, ExtraType


class RecordingAudio:
    def __init__(self):
        self.played = []

    def play_sound_3d(self, name, pos, max_distance):
        self.played.append(name)
        return True


def make_app():
    return GameApp(None, audio=RecordingAudio())


def add_bomber(app, x, y):
    bomber = Bomber(x, y, BomberColor.RED, None, app)
    app.bomber_objects.append(bomber)
    return bomber


def test_texture_and_kind():
    extra = Extra(40, 40, ExtraType.KICK)
    assert extra.texture_name == "extras2_3"
    assert extra.kind is ObjectKind.EXTRA
    assert extra.extra_type is ExtraType.KICK


def test_position_snaps_to_grid():
    extra = Extra(50, 70, ExtraType.BOMB)
    aligned = Extra(40, 80, ExtraType.BOMB)
    assert (extra.x, extra.y) == (aligned.x, aligned.y)
    assert extra.x % 40 == 0 and extra.y % 40 == 0


@pytest.mark.parametrize(
    "kind, attr, delta",
    [
        (ExtraType.BOMB, "max_bombs", 1),
        (ExtraType.FLAME, "power", 1),
        (ExtraType.SPEED, "speed", 20),
        (ExtraType.SKATE, "speed", 10),
        (ExtraType.KOKS, "speed", 50),
        (ExtraType.DISEASE, "speed", -40),
        (ExtraType.VIAGRA, "speed", -20),
    ],
)
def test_numeric_effects(kind, attr, delta):
    app = make_app()
    bomber = add_bomber(app, 0, 0)
    before = getattr(bomber, attr)
    Extra(0, 0, kind, app).apply_effect(bomber)
    assert getattr(bomber, attr) == before + delta


def test_ability_effects():
    app = make_app()
    bomber = add_bomber(app, 0, 0)
    Extra(0, 0, ExtraType.KICK, app).apply_effect(bomber)
    Extra(0, 0, ExtraType.GLOVE, app).apply_effect(bomber)
    assert bomber.can_kick is True
    assert bomber.can_throw is True


def test_disease_speed_has_floor():
    app = make_app()
    bomber = add_bomber(app, 0, 0)
    bomber.speed = MIN_SPEED + 5
    Extra(0, 0, ExtraType.DISEASE, app).apply_effect(bomber)
    assert bomber.speed == MIN_SPEED


def test_nearby_bomber_collects_and_extra_disappears():
    app = make_app()
    extra = Extra(80, 80, ExtraType.FLAME, app)
    bomber = add_bomber(app, extra.x + 5, extra.y)
    before = bomber.power
    extra.act(0.016)
    assert extra.collected is True
    assert bomber.power == before + 1
    assert app.audio.played == ["wow"]
    extra.act(0.2)
    assert extra.delete_me is False
    extra.act(0.2)
    assert extra.delete_me is True


def test_far_bomber_does_not_collect():
    app = make_app()
    extra = Extra(80, 80, ExtraType.FLAME, app)
    add_bomber(app, extra.x + 40, extra.y)
    extra.act(0.016)
    assert extra.collected is False


def test_dead_bomber_does_not_collect():
    app = make_app()
    extra = Extra(80, 80, ExtraType.BOMB, app)
    bomber = add_bomber(app, extra.x, extra.y)
    bomber.dead = True
    extra.act(0.016)
    assert extra.collected is False
    assert bomber.max_bombs == 1


@pytest.mark.parametrize("kind", [ExtraType.DISEASE, ExtraType.KOKS, ExtraType.VIAGRA])
def test_negative_extras_play_schnief(kind):
    app = make_app()
    Extra(0, 0, kind, app).collect()
    assert app.audio.played == ["schnief"]


def test_collect_only_once():
    app = make_app()
    extra = Extra(0, 0, ExtraType.BOMB, app)
    extra.collect()
    extra.collect()
    assert app.audio.played == ["wow"]


def test_show_bounces_and_hides_when_collected():
    app = make_app()
    extra = Extra(80, 80, ExtraType.SPEED, app)
    extra.act(0.1)
    sprite = extra.show()
    assert sprite.y == pytest.approx(extra.y + extra.bounce_offset)
    assert sprite.x == extra.x
    assert abs(extra.bounce_offset) <= 3.0
    assert extra.bounce_offset == pytest.approx(math.sin(extra.bounce_timer) * 3.0)
    extra.collect()
    assert extra.show() is None
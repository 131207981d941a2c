# bomberlogic

The rules and simulation of a grid-based arcade game in which players walk a
maze of walls and crates, drop bombs, pick up power-ups and try to be the last
one standing. The package holds the game logic only: positions, timers, object
lists and the decisions of computer opponents. It uses only the standard
library and needs Python 3.10 or later.

## Modules

- `bomberlogic.core`: `Direction` (with a `delta` step per direction),
  `ObjectKind`, `BomberColor` and `skin_for_color`; the `GameObject` base
  class with `act`, `show` (returns a `Sprite` tuple or `None`), `snap`,
  `move` and `tile`; and `GameApp`, which holds `map`, `objects`,
  `bomber_objects`, optional `audio` and `renderer`, and offers `add`,
  `object_by_id`, `delete_all_objects` and `next_object_id`.
- `bomberlogic.bomber`: `Bomber`, steered by a controller. It has lives
  (`lose_life`, `has_lives`), dying into a corpse (`die`), respawning with
  three seconds of flickering invincibility (`respawn`, `is_visible`), a bomb
  limit (`can_place_bomb`, `place_bomb`), power and speed upgrades, and an
  eased glide with `fly_to`. A quick press of the bomb button places a bomb;
  holding it for 0.3 s throws one, if the bomber has the glove and was given a
  `thrower` callable that builds the thrown object.
- `bomberlogic.bomb`: `Bomb` counts down (3 s by default), animates, can be
  sent sliding with `kick` and halted with `stop`, and on `explode` frees its
  owner's bomb slot and adds an `Explosion`. `explode_delayed` cuts its fuse
  short when another blast reaches it.
- `bomberlogic.explosion`: `Explosion` reaches `power` cells in each
  direction, stopping at the first burnable or blocking tile. For half a
  second it burns burnable tiles, shortens the fuse of bombs in reach, kills
  bombers (`kill_bombers`) and blows up corpses (`explode_corpses`).
  `covers(map_x, map_y)` tells whether a cell is hit.
- `bomberlogic.extra`: `ExtraType` and `Extra`, a bouncing power-up picked
  up by the first living bomber within 20 pixels. `apply_effect` adds a bomb,
  flame power, speed, kick or glove, or, for the harmful types, changes speed.
- `bomberlogic.bomber_corpse` and `bomberlogic.corpse_part`: `BomberCorpse`
  lies for ten seconds unless an explosion hits it, in which case it bursts
  into `CorpsePart` pieces moved by gravity, drag, viscosity and bounces off
  the floor and side walls, shedding `BloodDrop`s. `part_mass` and
  `part_surface_area` give the physical constants per part; `Vector2D` is the
  small vector type they use.
- `bomberlogic.controller`: the abstract `Controller` (`attach`, `activate`,
  `deactivate`, `revert`, `bomb_always`, `bomb_normal`, `update(dt)` and the
  `is_left`/`is_right`/`is_up`/`is_down`/`is_bomb` queries), `ControllerType`,
  `BombMode`, and `KeyboardController` with three keymaps: arrows + `return`,
  `w a s d` + `tab`, `i j k l` + `space`. Feed it the names of the held keys
  once per frame with `KeyboardController.update_keyboard_state(pressed)`.
- `bomberlogic.ai_jobs`: `Personality`, the rating constants, and the job
  steps `GoJob`, `PutBombJob` and `WaitJob`.
- `bomberlogic.ai_modern`: `ModernAIController` rates every map cell
  (`generate_rating_map`, `apply_bomb_rating`, `is_hotspot`, `is_death`),
  searches breadth-first for a way (`find_way`), flees danger, walks out of
  the starting corners, drops bombs where they break enough crates and it can
  escape (`bombing_is_beneficial`, `can_escape_from_bomb_safely`,
  `find_best_escape_direction`), and reports what it is doing with
  `current_state`. `create_controller(kind)` builds the controller for a
  `ControllerType`; the types with no controller of their own fall back to
  keymap 1.
- `bomberlogic.audio`: `AudioMixer` with sixteen `Channel`s for 44.1 kHz
  16-bit stereo `Sound`s. `load_sound` reads a PCM WAV file and converts it;
  `add_sound`, `play_sound` and `play_sound_3d` start sounds, fading with
  distance from the listener (`set_listener_position`, `distance_to`) and
  panned left or right (`stereo_pan`). `mix(num_bytes)` returns the next block
  of little-endian output bytes. Load failures raise `AudioError`.

## What you supply

The map is not part of the package. `GameApp.map` must be an object with
`width`, `height` and `tile_at(x, y)`, which returns a tile or `None` outside
the map. Tiles need `is_blocking()`, `is_burnable()`, `is_destructible()`,
`destroy()` and a writable `bomb` attribute. For `Bomber.respawn` to move a
bomber, the map may also offer `bomber_position(number)`.

A front end drives the game: each frame it calls `act(dt)` on every object
with the elapsed seconds, drops those with `delete_me` set, and draws what
`show()` returns. Game objects play the sounds `"explode"`, `"putbomb"`,
`"whoosh"`, `"die"`, `"corpse_explode"`, `"wow"` and `"schnief"` through
`GameApp.audio`; register sounds under those names to hear them.

## What it does not do

There is no window, drawing, sound output device, map file loading, menu,
network play or command to run. The package ships no thrown-bomb object: a
bomber throws only through the `thrower` you give it.
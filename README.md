# platformkit

platformkit is the core of a small 2D side-scrolling platformer engine. It uses
only the standard library. It provides the parts a game loop is built from,
which are a module lifecycle, input state, tile maps, GUI controls and entity
management. Drawing is left to your own renderer.

## Modules

- `platformkit.module.Module` is the base class for engine modules.
  - Its hooks are `awake(config)`, `start()`, `pre_update()`, `update(dt)`,
    `post_update()` and `clean_up()`. Each hook returns `True` to carry on.
  - `enable()` starts a module that was disabled.
  - `disable()` cleans up a module that was enabled.
  - The `state` dict holds string values. `save_state` writes them as attributes
    of a saved-game XML node, and `load_state` reads them back.
  - `on_gui_mouse_click_event(control)` stores the clicked control in
    `last_clicked_control`.
- `platformkit.app.App` runs an ordered list of modules.
  - `awake()` reads an XML config file with a `<config>` root and passes each
    module the child node named after it. It takes the title from
    `app/title` and the frame cap from `app/maxFrameDuration@value`.
  - `update()` runs one frame. It calls `pre_update`, `update` and
    `post_update` on the enabled modules, then sleeps to reach the frame cap.
    It also refreshes `dt`, `frame_count`, `frames_per_second`, `average_fps`
    and `window_title`.
  - `request_save()` and `request_load()` ask for a save or a load, which
    happens at the end of the frame. `save()` and `load()` write and read a
    `<game_state>` document.
  - `clean_up()` cleans up the modules in reverse order.
  - `arg(index)` returns a command-line argument, or `None` if there is none at
    that index.
- `platformkit.inputstate.Input` is a module that tracks key and mouse-button
  states (`KeyState.IDLE`, `DOWN`, `REPEAT`, `UP`) frame by frame.
  - Set the keys that are held with `set_keyboard(...)`.
  - Queue events with `post_event(...)`. The event types are `QuitEvent`,
    `WindowChangeEvent`, `MouseButtonEvent` and `MouseMotionEvent`.
  - `pre_update()` advances the states.
  - Query the result with `get_key`, `get_mouse_button`, `get_window_event`,
    `mouse_position` and `mouse_motion`.
- `platformkit.fade.FadeToBlack` fades the screen.
  - `pass_screens(a, b, frames)` fades out, disables `a`, enables `b` and fades
    back in.
  - `fade_alpha()` gives the overlay opacity (0-255). It returns `None` when no
    fade is running.
- `platformkit.tilemap` handles Tiled maps.
  - `parse_map(path)` reads a Tiled XML map into `MapData`. The result holds
    `TileSet`, `MapLayer`, `ObjectGroup` and `MapObject` entries, plus boolean
    `Properties`.
  - `TileMap` is a module with these methods:
    - `load(path)` reads a map.
    - `map_to_world` and `world_to_map` convert between tile and world
      coordinates.
    - `navigation_map()` returns `(width, height, cells)`. A cell is 0 where
      the navigation layer holds the blocked gid and 1 everywhere else.
    - `tiles_to_draw(player_x)` yields tile positions and source rectangles.
      For layers marked `Draw` it covers the columns near the player. For
      layers marked `Parallax` it covers every column.
  - After a load, `colliders` lists the static rectangles taken from object
    group 8 (platforms) and object group 10 (stairs, sensor only).
- `platformkit.gui` provides mouse-driven controls.
  - The controls are `GuiButton`, `GuiCheckBox`, `GuiPopUp` and `GuiSlider`.
    Each `update(input_state)` returns `DrawText` and `DrawRect` commands
    instead of drawing.
  - Clicks are passed to the control's observer module.
  - `GuiManager` is a module:
    - `create_control(...)` creates a control.
    - `remove_control(...)` removes one.
    - Each frame, the commands from all controls are collected in `draw_list`.
- `platformkit.entities.EntityManager` manages game entities.
  - `register(entity_type, factory, enemy)` sets the factory for a type, and
    `create_entity(entity_type)` uses it to build an entity.
  - It runs `awake`, `start` and `update` on the active entities. Setting
    `paused` skips updates.
  - `kill_enemies_load()` deactivates every enemy whose `initial_pos` appears
    in `enemies_dead`.
- `platformkit.pqueue.PriorityQueue` is a stable priority queue. Lower
  priorities come out first.
- `platformkit.fifo.Fifo` is a first-in, first-out queue.
- `platformkit.motion_path.MotionPath` is a scripted movement made of timed,
  constant-speed steps, with at most 25 steps.

## Example

```python
from platformkit.app import App
from platformkit.inputstate import Input
from platformkit.module import Module


class Hello(Module):
    def update(self, dt):
        print(f"frame took {dt:.1f} ms")
        return True


app = App(["game"], "config.xml", "save_game.xml")
app.add_module(Input())
app.add_module(Hello("hello", True))
if app.awake() and app.start():
    app.update()
    app.clean_up()
```

Reading a map:

```python
from platformkit.tilemap import parse_map

data = parse_map("Assets/Maps/level1.tmx")
layer = data.navigation_layer()
if layer is not None:
    print(layer.get(0, 0))
```

## What it does not do

platformkit does not include any of the following:

- a window, renderer, audio, fonts or texture loading
- a physics engine
- concrete game entities such as a player, enemies, items or checkpoints
- a pathfinding algorithm: `navigation_map()` and `PriorityQueue` give you the
  grid and a queue, and you write the search
- a command-line program to run

You supply these and plug them in as `Module` subclasses or entity factories.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```
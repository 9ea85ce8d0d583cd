# factori

A small top-down sandbox built on pygame. You walk a character across endless
terrain that is generated chunk by chunk from seeded Perlin noise. You can zoom the
view in and out. A build mode shows a grid and lets you place objects on it.

## Installing

```
pip install .
```

To install the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
factori
```

By default the game opens full screen. The command takes these options:

| Option | Meaning |
| --- | --- |
| `--windowed` | Run in a resizable window instead of full screen |
| `--width N` | Window width (default 1280) |
| `--height N` | Window height (default 720) |
| `--seed N` | World seed. The default is the current time in seconds. |

### Controls

| Key | Action |
| --- | --- |
| `W` / `A` / `S` / `D` | Move the player. Diagonal movement is normalised. |
| `+` or `=` | Zoom in (held) |
| `-` | Zoom out (held) |
| `F1` | Open the System menu |
| `Esc` | Close an open menu |

The zoom value stays between 1 and 15, and it starts at 3. Chunks around the player
are loaded and dropped as the player moves or the zoom changes. While the mouse is
over the build selector panel, the movement keys are ignored.

### Menus

Click a menu title in the bar at the top to open it.

- **System → Settings** shows `!!!WIP!!!` in the menu bar.
- **System → Shutdown** quits the game.
- **Game → Build** toggles build mode. When build mode is on, a grid is drawn and
  the cell under the mouse is highlighted. Clicking places an object in that cell,
  drawn as a red square. A cell holds at most one object. A "Selector" panel also
  opens at the right-hand side. You can drag the panel by holding the left mouse
  button. Closing it with the cross in its title bar, or choosing **Build** again,
  turns build mode off.

## Using the pieces as a library

The game logic does not need an open window, so its parts can be used on their own:

- `factori.noise` contains the seeded Perlin noise generator,
  `PerlinNoiseGenerator(chunk_x, chunk_y, width, height, seed)`. Its `noise` method
  gives the noise value. `tile_at` and `tile_map` pick the atlas tile (water, sand,
  grass, rock) for the cells of a chunk. `generate_texture` composes the chunk
  texture. `build_atlas()` builds the solid-colour tile atlas, and the helpers
  `fade`, `lerp` and `grad` are available too.
- `factori.drawable.DrawableObject` is a texture with a world position, size,
  rotation, opacity, tint and a buffer of extra textures.
  `make_placeholder_texture` creates a solid-colour surface.
- `factori.scene.Scene` holds the world state:
  - player movement (`key_press`, `key_release`, `update_movement`)
  - zoom (`zoom`)
  - chunk loading (`chunk_loader`)
  - mapping the mouse to a grid cell (`mouse_move`, `mouse_grid_position`)
  - placed objects (`edit_mode`, `mouse_press`, `placed_objects`)
  - drawing onto a surface (`render`)
- `factori.highlighter.CodeHighlighter` colours a line of Python source.
  `highlight_block(text)` returns the `(start, length, colour)` spans in the order
  they are applied. `colors(text)` returns the final colour of each character.
- `factori.logger.get_logger()` returns the shared `DropLog`. Its `error`, `warning`
  and `info` methods write coloured, time-stamped lines of the form
  `hh:mm:ss | [LEVEL] | tag: info` through the standard `logging` logger
  `factori`, and they return the line. `error` logs at `CRITICAL`.
- `factori.game_api.example(value)` is a sample scripting hook. It takes a 32-bit
  integer, logs it and returns `1`. It raises `TypeError` for a non-integer and
  `OverflowError` for a value out of range.
- `factori.app` has the window classes `MainWindow`, `MainView` and `ActionWindow`,
  and `main(argv=None)`, which the `factori` command runs.

## What it does not do

- **Game → Editor** does nothing. There is no code editor window. The highlighter
  exists only as a library class.
- Game scripts are not loaded or run. `game_api.example` can only be called
  directly.
- The build selector panel is empty. There is only one kind of object to place.
- Placed objects and the world are not saved anywhere.
- Sprites and terrain tiles are plain coloured squares. No image files are used.
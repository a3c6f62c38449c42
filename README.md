# minibomber

A small arcade game played on a 15 × 15 grid. Walk the maze, plant bombs to
blast through brick walls, collect power-ups, avoid the two wandering enemies
and find the exit hidden under one of the bricks to move on to the next level.
The screens use Portuguese labels.

## Installing

```
pip install .
```

## Playing

```
minibomber
minibomber --seed 42
```

`--seed` fixes the random generator, so levels, enemy placement and power-up
drops repeat from run to run.

The game looks in the current directory for:

* `resources/` – sprite images (`player.png`, `enemy.png`, `bomb.png`,
  `ground.png`, `destructible_wall.png` and the `wall_*.png` pieces). Any
  image that is missing is drawn as a plain coloured square.
* `save/` – where the game is saved as `save/save.dat`.
* `mapas/` – your own maps, as `.txt` files.

These directories are not created by the game; if `save/` or `mapas/` does not
exist, saving silently does nothing.

The main menu offers:

1. **Novo Jogo**: a freshly generated level.
2. **Continuar**: resume `save/save.dat`, or start a new level if there is no
   readable save.
3. **Carregar Mapa**: pick one of the `.txt` files in `mapas/` (Backspace
   cancels). A game on a custom map cannot be saved.
4. **Editor de Mapa**: draw a map and save it to `mapas/`.
5. **Sair**

Pressing **9** closes the game from any screen.

### Controls in a game

| Key                | Action                                             |
|--------------------|----------------------------------------------------|
| Arrow keys / WASD  | Move one tile                                      |
| Space              | Plant a bomb                                       |
| F                  | Take the exit when standing on it                  |
| Esc                | Pause menu (return, save, exit, main menu)         |
| R                  | Start a new level after game over                  |

Bombs go off two seconds after they are planted; at most ten can be on the
board at once. The blast reaches as far as your explosion range in each of the
four directions. It stops at solid walls and at the first brick it breaks, and
it sets off any other bomb it reaches in the same moment. A broken brick may
leave a power-up behind (20 % each):

* an extra bomb refills your bomb stock (the maximum itself only grows while
  it is below ten);
* a flame raises your explosion range by one.

Each enemy caught in a blast is worth 100 points. Touching an enemy or
standing in a blast ends the game. Your score carries over when you take the
exit.

Levels loaded from a map file or from a save have no hidden exit, so they
cannot be left through an exit.

### Map editor

The editor starts with an empty map. Use the arrow keys to move the cursor.
**Q** places a solid wall, **E** a brick and **C** clears the tile. **Enter**
asks for a file name; Enter again saves the map as `mapas/<name>.txt` (an empty
name saves nothing). **Esc** asks whether to leave: Enter leaves, Backspace
stays.

Map files are plain text, one line per row: `W` is a solid wall, `B` a brick,
and any other character an empty tile.

## Using the package from code

The game rules do not depend on the display and can be driven directly:

```python
import random

from minibomber.game import Action, Game
from minibomber.level import Level

game = Game.new(random.Random(7))
game.update(1 / 60, {Action.RIGHT, Action.PLANT_BOMB})
print(game.player.x, game.player.y, game.game_over)

level = Level.generate(random.Random(1))
print(level.to_text())
```

The modules:

* `minibomber.level` – `Level` (generation, `from_file`, `save_file`,
  `to_text`, `wall_piece`), `TileType` and `WallPiece`.
* `minibomber.bombs` – `BombField` with its bomb and explosion slots.
* `minibomber.player` – `Player`.
* `minibomber.enemy` – `Enemy`, `spawn_enemies`, `update_enemies`.
* `minibomber.game` – `Game` and the per-frame `Action` inputs.
* `minibomber.save` – `save_game`, `load_game` and `save_exists`; `load_game`
  raises `ValueError` for a file that is not a save record.
* `minibomber.menus` – menu selection state, `PauseAction` and `list_maps`.
* `minibomber.editor` – `MapEditor`.
* `minibomber.app` – the pygame window and the `main` entry point.

## Running the tests

```
pip install .[test]
pytest
```
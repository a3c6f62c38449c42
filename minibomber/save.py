"""Saving and loading a game in a fixed binary layout.

The record holds the player, every tile, every bomb and explosion slot and
every enemy, as little-endian 32-bit integers and floats. The exit position is
not part of the record, so a loaded level has no hidden exit.
"""

from __future__ import annotations

import os
import random
import struct
from collections.abc import Iterator

from minibomber.bombs import MAX_BOMBS, MAX_EXPLOSIONS, Bomb, BombField, Explosion
from minibomber.enemy import MAX_ENEMIES, Enemy
from minibomber.game import Game
from minibomber.level import MAP_HEIGHT, MAP_WIDTH, Level
from minibomber.player import Player

SAVE_PATH = os.path.join("save", "save.dat")

_SLOT = "iifi"
_ENEMY = "5ifi"
_RECORD = struct.Struct(
    "<8i"
    + f"{MAP_WIDTH * MAP_HEIGHT}i"
    + _SLOT * (MAX_BOMBS + MAX_EXPLOSIONS)
    + _ENEMY * MAX_ENEMIES
)
SAVE_SIZE = _RECORD.size


def _pack(game: Game) -> bytes:
    if len(game.enemies) != MAX_ENEMIES:
        raise ValueError(f"a saved game holds exactly {MAX_ENEMIES} enemies")
    p = game.player
    values: list[int | float] = [
        p.x, p.y, p.bombs_available, p.bombs_max, p.reach, int(p.alive), p.score, p.facing,
    ]
    values += [int(tile) for row in game.level.tiles for tile in row]
    for slot in (*game.bombs.bombs, *game.bombs.explosions):
        values += [slot.x, slot.y, slot.timer, int(slot.active)]
    for e in game.enemies:
        values += [e.x, e.y, e.dir_x, e.dir_y, int(e.alive), e.move_timer, e.facing]
    return _RECORD.pack(*values)


def _take(values: Iterator, count: int) -> list:
    return [next(values) for _ in range(count)]


def save_game(game: Game, path: str | os.PathLike[str] = SAVE_PATH) -> None:
    """Write the game to a save file."""
    data = _pack(game)
    with open(path, "wb") as f:
        f.write(data)


def load_game(
    path: str | os.PathLike[str] = SAVE_PATH, rng: random.Random | None = None
) -> Game:
    """Read a game from a save file; raise ValueError if the file is not a save record."""
    with open(path, "rb") as f:
        data = f.read()
    if len(data) != SAVE_SIZE:
        raise ValueError(f"save file is {len(data)} bytes, expected {SAVE_SIZE}")
    values = iter(_RECORD.unpack(data))

    x, y, available, most, reach, alive, score, facing = _take(values, 8)
    player = Player(x, y, available, most, reach, bool(alive), score, facing)

    cells = _take(values, MAP_WIDTH * MAP_HEIGHT)
    tiles = [cells[row * MAP_WIDTH:(row + 1) * MAP_WIDTH] for row in range(MAP_HEIGHT)]
    level = Level(tiles)

    game = Game(level, rng)
    game.player = player

    bombs = BombField()
    for slot in (*bombs.bombs, *bombs.explosions):
        sx, sy, timer, active = _take(values, 4)
        slot.x, slot.y, slot.timer, slot.active = sx, sy, timer, bool(active)
    game.bombs = bombs

    enemies = []
    for _ in range(MAX_ENEMIES):
        ex, ey, dir_x, dir_y, e_alive, timer, e_facing = _take(values, 7)
        enemies.append(Enemy(ex, ey, dir_x, dir_y, bool(e_alive), timer, e_facing))
    game.enemies = enemies
    return game


def save_exists(path: str | os.PathLike[str] = SAVE_PATH) -> bool:
    return os.path.isfile(path)


__all__ = ["SAVE_PATH", "SAVE_SIZE", "save_game", "load_game", "save_exists", "Bomb", "Explosion"]
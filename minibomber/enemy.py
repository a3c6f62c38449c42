"""Wandering enemies."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from minibomber.bombs import BombField
from minibomber.level import START_AREA, Level, TileType
from minibomber.player import Player

MAX_ENEMIES = 2
MOVE_DELAY = 0.8
SPAWN_TRIES = 100
KILL_SCORE = 100

_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_BLOCKING = (TileType.HARD_WALL, TileType.SOFT_WALL)


@dataclass
class Enemy:
    x: int
    y: int
    dir_x: int
    dir_y: int
    alive: bool = True
    move_timer: float = 0.0
    facing: int = 1


def spawn_enemies(
    level: Level, rng: random.Random, count: int = MAX_ENEMIES
) -> list[Enemy]:
    """Place enemies on free empty tiles away from the start corner, each heading somewhere."""
    enemies: list[Enemy] = []
    for _ in range(count):
        taken = {(e.x, e.y) for e in enemies}
        x = y = 0
        for _ in range(SPAWN_TRIES):
            x = rng.randrange(level.width)
            y = rng.randrange(level.height)
            in_start = x <= START_AREA and y <= START_AREA
            if level[x, y] is TileType.EMPTY and (x, y) not in taken and not in_start:
                break
        dx, dy = _DIRECTIONS[rng.randrange(4)]
        enemies.append(Enemy(x, y, dx, dy))
    return enemies


def enemy_at(
    enemies: Iterable[Enemy], x: int, y: int, ignore: Enemy | None = None
) -> bool:
    """Whether a living enemy other than ``ignore`` stands on a tile."""
    return any(
        e is not ignore and e.alive and (e.x, e.y) == (x, y) for e in enemies
    )


def update_enemies(
    enemies: Sequence[Enemy],
    level: Level,
    bombs: BombField,
    player: Player,
    dt: float,
    rng: random.Random,
) -> None:
    """Step every living enemy whose move timer ran out, then apply fire and contact."""
    for enemy in enemies:
        if not enemy.alive:
            continue
        enemy.move_timer += dt
        if enemy.move_timer < MOVE_DELAY:
            continue
        enemy.move_timer = 0.0

        nx, ny = enemy.x + enemy.dir_x, enemy.y + enemy.dir_y
        blocked = (
            not level.in_bounds(nx, ny)
            or level[nx, ny] in _BLOCKING
            or enemy_at(enemies, nx, ny, ignore=enemy)
        )
        if blocked:
            for _ in range(4):
                dx, dy = _DIRECTIONS[rng.randrange(4)]
                tx, ty = enemy.x + dx, enemy.y + dy
                if level.in_bounds(tx, ty) and level[tx, ty] is TileType.EMPTY:
                    enemy.dir_x, enemy.dir_y = dx, dy
                    break
        else:
            enemy.x, enemy.y = nx, ny

        if enemy.dir_x != 0:
            enemy.facing = enemy.dir_x

        if bombs.explosion_at(enemy.x, enemy.y):
            enemy.alive = False
            player.score += KILL_SCORE

        if player.alive and (enemy.x, enemy.y) == (player.x, player.y):
            player.alive = False
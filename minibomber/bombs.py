"""Bombs, their explosions and chain reactions."""

from __future__ import annotations

import random
from dataclasses import dataclass

from minibomber.level import Level, TileType

MAX_BOMBS = 10
MAX_EXPLOSIONS = 50
BOMB_FUSE = 2.0
EXPLOSION_TIME = 0.5

BOMB_POWERUP_CHANCE = 20
RANGE_POWERUP_CHANCE = 20

_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass
class Bomb:
    x: int = 0
    y: int = 0
    timer: float = 0.0
    active: bool = False


@dataclass
class Explosion:
    x: int = 0
    y: int = 0
    timer: float = 0.0
    active: bool = False


def _drop(rng: random.Random) -> TileType:
    roll = rng.randrange(100)
    if roll < BOMB_POWERUP_CHANCE:
        return TileType.POWERUP_BOMB
    if roll < BOMB_POWERUP_CHANCE + RANGE_POWERUP_CHANCE:
        return TileType.POWERUP_RANGE
    return TileType.EMPTY


class BombField:
    """Fixed pools of bomb and explosion slots, plus bombs queued for chain detonation."""

    def __init__(self) -> None:
        self.bombs = [Bomb() for _ in range(MAX_BOMBS)]
        self.explosions = [Explosion() for _ in range(MAX_EXPLOSIONS)]
        self._pending: list[int] = []

    def reset(self) -> None:
        """Clear every bomb and the chain queue; explosions still burn out."""
        for bomb in self.bombs:
            bomb.active = False
        self._pending.clear()

    def plant(self, x: int, y: int) -> Bomb | None:
        """Place a bomb in the first free slot; None if every slot is taken."""
        bomb = next((b for b in self.bombs if not b.active), None)
        if bomb is not None:
            bomb.x, bomb.y, bomb.timer, bomb.active = x, y, BOMB_FUSE, True
        return bomb

    def add_explosion(self, x: int, y: int) -> Explosion | None:
        """Show fire at a tile; None if every explosion slot is taken."""
        flame = next((e for e in self.explosions if not e.active), None)
        if flame is not None:
            flame.x, flame.y, flame.timer, flame.active = x, y, EXPLOSION_TIME, True
        return flame

    def detonate_at(self, x: int, y: int) -> None:
        """Queue the first active bomb at a tile to go off in this update."""
        for index, bomb in enumerate(self.bombs):
            if bomb.active and (bomb.x, bomb.y) == (x, y):
                if index not in self._pending and len(self._pending) < MAX_BOMBS:
                    self._pending.append(index)
                return

    def explode(
        self, level: Level, x: int, y: int, reach: int, rng: random.Random
    ) -> None:
        """Spread fire from a tile in four directions, breaking soft walls it meets."""
        self.add_explosion(x, y)
        for dx, dy in _DIRECTIONS:
            for step in range(1, reach + 1):
                nx, ny = x + dx * step, y + dy * step
                if not level.in_bounds(nx, ny) or level[nx, ny] is TileType.HARD_WALL:
                    break
                self.detonate_at(nx, ny)
                self.add_explosion(nx, ny)
                if level[nx, ny] is TileType.SOFT_WALL:
                    if (nx, ny) == level.exit_pos:
                        level[nx, ny] = TileType.EXIT
                    else:
                        level[nx, ny] = _drop(rng)
                    break
        level[x, y] = TileType.EXIT if (x, y) == level.exit_pos else TileType.EMPTY

    def update(
        self, level: Level, dt: float, reach: int, rng: random.Random
    ) -> None:
        """Run fuses down, explode expired bombs, then any bombs caught in the blast."""
        for bomb in self.bombs:
            if bomb.active:
                bomb.timer -= dt
                if bomb.timer <= 0:
                    self.explode(level, bomb.x, bomb.y, reach, rng)
                    bomb.active = False

        # The queue may grow while chained bombs go off.
        done = 0
        while done < len(self._pending):
            bomb = self.bombs[self._pending[done]]
            done += 1
            if bomb.active:
                self.explode(level, bomb.x, bomb.y, reach, rng)
                bomb.active = False
        self._pending.clear()

    def update_explosions(self, dt: float) -> None:
        for flame in self.explosions:
            if flame.active:
                flame.timer -= dt
                if flame.timer <= 0:
                    flame.active = False

    def explosion_at(self, x: int, y: int) -> bool:
        return any(e.active and (e.x, e.y) == (x, y) for e in self.explosions)

    def bomb_at(self, x: int, y: int) -> bool:
        return any(b.active and (b.x, b.y) == (x, y) for b in self.bombs)
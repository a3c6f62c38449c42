"""The player: movement on the grid, power-ups and damage."""

from __future__ import annotations

from dataclasses import dataclass

from minibomber.bombs import MAX_BOMBS, BombField
from minibomber.level import Level, TileType

START_X = 1
START_Y = 1
START_BOMBS = 50
START_REACH = 1

# The sprite is drawn mirrored when facing is -1, which is how it faces right.
FACING_RIGHT = -1
FACING_LEFT = 1


@dataclass
class Player:
    """Grid position, bomb stock, blast reach, life and score of the player."""

    x: int = START_X
    y: int = START_Y
    bombs_available: int = START_BOMBS
    bombs_max: int = START_BOMBS
    reach: int = START_REACH
    alive: bool = True
    score: int = 0
    facing: int = FACING_RIGHT

    def move(self, level: Level, dx: int, dy: int) -> bool:
        """Turn towards dx and step by (dx, dy) if the target tile can be walked on."""
        if dx > 0:
            self.facing = FACING_RIGHT
        elif dx < 0:
            self.facing = FACING_LEFT
        nx, ny = self.x + dx, self.y + dy
        if not level.is_walkable(nx, ny):
            return False
        self.x, self.y = nx, ny
        return True

    def collect(self, level: Level) -> TileType | None:
        """Pick up a power-up under the player; return it, or None if there was none."""
        tile = level[self.x, self.y]
        if tile is TileType.POWERUP_BOMB:
            if self.bombs_max < MAX_BOMBS:
                self.bombs_max += 1
            self.bombs_available = self.bombs_max
        elif tile is TileType.POWERUP_RANGE:
            self.reach += 1
        else:
            return None
        level[self.x, self.y] = TileType.EMPTY
        return tile

    def check_damage(self, bombs: BombField) -> bool:
        """Kill the player if fire burns on their tile; True if this call killed them."""
        if self.alive and bombs.explosion_at(self.x, self.y):
            self.alive = False
            return True
        return False

    def on_exit(self, level: Level) -> bool:
        return level[self.x, self.y] is TileType.EXIT
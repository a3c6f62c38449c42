"""One running game: level, player, bombs and enemies advanced frame by frame."""

from __future__ import annotations

import enum
import random
from collections.abc import Iterable

from minibomber.bombs import BombField
from minibomber.enemy import spawn_enemies, update_enemies
from minibomber.level import Level
from minibomber.player import FACING_LEFT, Player


class Action(enum.Enum):
    """Inputs pressed during one frame."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PLANT_BOMB = "plant_bomb"
    USE_EXIT = "use_exit"


class Game:
    """The complete state of a game in progress."""

    def __init__(self, level: Level, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.level = level
        self.player = Player()
        self.bombs = BombField()
        self.enemies = spawn_enemies(level, self.rng)

    @classmethod
    def new(cls, rng: random.Random | None = None) -> Game:
        """Start a game on a freshly generated level."""
        rng = rng if rng is not None else random.Random()
        return cls(Level.generate(rng), rng)

    @property
    def game_over(self) -> bool:
        return not self.player.alive

    def restart(self) -> None:
        """Begin again on a new level with a fresh player."""
        self.level = Level.generate(self.rng)
        self.player = Player()
        self.bombs.reset()
        self.enemies = spawn_enemies(self.level, self.rng)

    def next_level(self) -> None:
        """Move on to a new level, keeping the score."""
        score = self.player.score
        self.restart()
        self.player.score = score

    def update(self, dt: float, actions: Iterable[Action] = ()) -> None:
        """Advance the game by dt seconds with the given inputs."""
        pressed = frozenset(actions)
        if self.player.alive:
            self._update_player(pressed)

        self.bombs.update(self.level, dt, self.player.reach, self.rng)
        if Action.PLANT_BOMB in pressed and self.player.bombs_available > 0:
            self.bombs.plant(self.player.x, self.player.y)
            self.player.bombs_available -= 1

        self.bombs.update_explosions(dt)
        update_enemies(
            self.enemies, self.level, self.bombs, self.player, dt, self.rng
        )

    def _update_player(self, pressed: frozenset[Action]) -> None:
        player = self.player
        dx = (Action.RIGHT in pressed) - (Action.LEFT in pressed)
        dy = (Action.DOWN in pressed) - (Action.UP in pressed)
        player.move(self.level, dx, dy)
        if Action.LEFT in pressed:
            player.facing = FACING_LEFT
        player.collect(self.level)
        player.check_damage(self.bombs)
        if player.on_exit(self.level) and Action.USE_EXIT in pressed:
            self.next_level()
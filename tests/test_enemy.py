import random

from minibomber.bombs import BombField
from minibomber.enemy import (
    KILL_SCORE,
    MAX_ENEMIES,
    MOVE_DELAY,
    Enemy,
    enemy_at,
    spawn_enemies,
    update_enemies,
)
from minibomber.level import START_AREA, Level, TileType
from minibomber.player import Player


class _FixedRng:
    def __init__(self, values):
        self._values = iter(values)

    def randrange(self, n):
        return next(self._values)


def _corridor():
    level = Level([[TileType.HARD_WALL] * 15 for _ in range(15)])
    level[5, 5] = TileType.EMPTY
    level[6, 5] = TileType.EMPTY
    return level


def test_spawn_on_free_tiles_outside_start_area():
    level = Level.generate(random.Random(11))
    enemies = spawn_enemies(level, random.Random(5))
    assert len(enemies) == MAX_ENEMIES
    positions = {(e.x, e.y) for e in enemies}
    assert len(positions) == MAX_ENEMIES
    for e in enemies:
        assert level[e.x, e.y] is TileType.EMPTY
        assert e.x > START_AREA or e.y > START_AREA
        assert abs(e.dir_x) + abs(e.dir_y) == 1
        assert e.alive and e.move_timer == 0.0 and e.facing == 1


def test_spawn_direction_table():
    level = Level.empty()
    rng = _FixedRng([7, 7, 3])
    (enemy,) = spawn_enemies(level, rng, count=1)
    assert (enemy.x, enemy.y) == (7, 7)
    assert (enemy.dir_x, enemy.dir_y) == (0, -1)


def test_enemy_at_respects_ignore_and_death():
    a = Enemy(2, 2, 1, 0)
    b = Enemy(3, 3, 1, 0, alive=False)
    enemies = [a, b]
    assert enemy_at(enemies, 2, 2)
    assert not enemy_at(enemies, 2, 2, ignore=a)
    assert not enemy_at(enemies, 3, 3)


def test_waits_for_move_delay():
    level = Level.empty()
    e = Enemy(5, 5, 1, 0)
    update_enemies([e], level, BombField(), Player(), MOVE_DELAY / 2, random.Random(0))
    assert (e.x, e.y) == (5, 5)
    assert e.move_timer == MOVE_DELAY / 2


def test_moves_when_path_clear():
    level = Level.empty()
    e = Enemy(5, 5, 1, 0, facing=-1)
    update_enemies([e], level, BombField(), Player(), MOVE_DELAY, random.Random(0))
    assert (e.x, e.y) == (6, 5)
    assert e.move_timer == 0.0
    assert e.facing == 1


def test_blocked_enemy_turns_without_moving():
    level = _corridor()
    e = Enemy(5, 5, -1, 0)
    update_enemies([e], level, BombField(), Player(), MOVE_DELAY, _FixedRng([0]))
    assert (e.x, e.y) == (5, 5)
    assert (e.dir_x, e.dir_y) == (1, 0)
    assert e.facing == 1


def test_blocked_by_other_enemy():
    level = Level.empty()
    a = Enemy(5, 5, 1, 0)
    b = Enemy(6, 5, 0, 1, move_timer=-100.0)
    update_enemies([a, b], level, BombField(), Player(), MOVE_DELAY, _FixedRng([2]))
    assert (a.x, a.y) == (5, 5)
    assert (a.dir_x, a.dir_y) == (0, 1)


def test_fire_kills_enemy_and_scores():
    level = Level.empty()
    bombs = BombField()
    bombs.add_explosion(6, 5)
    player = Player()
    e = Enemy(5, 5, 1, 0)
    update_enemies([e], level, bombs, player, MOVE_DELAY, random.Random(0))
    assert e.alive is False
    assert player.score == KILL_SCORE


def test_touching_player_kills_player():
    level = Level.empty()
    player = Player(x=6, y=5)
    e = Enemy(5, 5, 1, 0)
    update_enemies([e], level, BombField(), player, MOVE_DELAY, random.Random(0))
    assert player.alive is False


def test_dead_enemies_are_skipped():
    level = Level.empty()
    e = Enemy(5, 5, 1, 0, alive=False)
    update_enemies([e], level, BombField(), Player(), MOVE_DELAY, random.Random(0))
    assert (e.x, e.y) == (5, 5)
    assert e.move_timer == 0.0
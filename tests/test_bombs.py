import random

import pytest

from minibomber.bombs import (
    BOMB_FUSE,
    EXPLOSION_TIME,
    MAX_BOMBS,
    MAX_EXPLOSIONS,
    BombField,
)
from minibomber.level import MAP_WIDTH, Level, TileType


class _ConstantRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, n):
        return self.value % n


def _fire(field):
    return {(e.x, e.y) for e in field.explosions if e.active}


def test_plant_sets_fuse_and_marks_tile():
    field = BombField()
    bomb = field.plant(3, 4)
    assert bomb.timer == BOMB_FUSE
    assert field.bomb_at(3, 4)
    assert not field.bomb_at(4, 3)


def test_plant_is_limited_to_slot_count():
    field = BombField()
    planted = [field.plant(i, 0) for i in range(MAX_BOMBS)]
    assert all(b is not None for b in planted)
    assert field.plant(0, 1) is None
    assert not field.bomb_at(0, 1)


def test_explosion_slots_are_limited():
    field = BombField()
    for i in range(MAX_EXPLOSIONS):
        assert field.add_explosion(i % MAP_WIDTH, i // MAP_WIDTH) is not None
    assert field.add_explosion(0, 14) is None


def test_bomb_explodes_when_fuse_runs_out():
    level = Level.empty()
    field = BombField()
    field.plant(5, 5)
    field.update(level, 1.5, 1, random.Random(0))
    assert field.bomb_at(5, 5)
    assert not field.explosion_at(5, 5)
    field.update(level, 0.5, 1, random.Random(0))
    assert not field.bomb_at(5, 5)
    assert _fire(field) == {(5, 5), (6, 5), (4, 5), (5, 6), (5, 4)}


def test_explosions_burn_out():
    field = BombField()
    field.add_explosion(2, 2)
    field.update_explosions(EXPLOSION_TIME / 2)
    assert field.explosion_at(2, 2)
    field.update_explosions(EXPLOSION_TIME / 2)
    assert not field.explosion_at(2, 2)


def test_hard_wall_stops_fire():
    level = Level.empty()
    level[6, 5] = TileType.HARD_WALL
    field = BombField()
    field.explode(level, 5, 5, 3, random.Random(0))
    assert not field.explosion_at(6, 5)
    assert not field.explosion_at(7, 5)
    assert field.explosion_at(2, 5)
    assert level[6, 5] is TileType.HARD_WALL


def test_fire_stops_at_map_edge():
    level = Level.empty()
    field = BombField()
    field.explode(level, 0, 0, 2, random.Random(0))
    assert _fire(field) == {(0, 0), (1, 0), (2, 0), (0, 1), (0, 2)}


@pytest.mark.parametrize(
    "roll, tile",
    [
        (10, TileType.POWERUP_BOMB),
        (30, TileType.POWERUP_RANGE),
        (50, TileType.EMPTY),
    ],
)
def test_soft_wall_breaks_into_drop(roll, tile):
    level = Level.empty()
    level[6, 5] = TileType.SOFT_WALL
    field = BombField()
    field.explode(level, 5, 5, 3, _ConstantRng(roll))
    assert level[6, 5] is tile
    assert field.explosion_at(6, 5)
    assert not field.explosion_at(7, 5)


def test_soft_wall_over_exit_reveals_it():
    level = Level.empty()
    level[5, 7] = TileType.SOFT_WALL
    level.exit_pos = (5, 7)
    field = BombField()
    field.explode(level, 5, 5, 3, _ConstantRng(10))
    assert level[5, 7] is TileType.EXIT
    assert not field.explosion_at(5, 8)


def test_fire_passes_over_revealed_exit():
    level = Level.empty()
    level[7, 5] = TileType.EXIT
    level.exit_pos = (7, 5)
    field = BombField()
    field.explode(level, 5, 5, 3, random.Random(0))
    assert field.explosion_at(8, 5)
    assert level[7, 5] is TileType.EXIT


def test_center_tile_is_cleared():
    level = Level.empty()
    level[5, 5] = TileType.POWERUP_BOMB
    field = BombField()
    field.explode(level, 5, 5, 1, random.Random(0))
    assert level[5, 5] is TileType.EMPTY


def test_chain_reaction_in_same_update():
    level = Level.empty()
    field = BombField()
    field.plant(5, 5)
    field.update(level, 1.0, 2, random.Random(0))
    field.plant(7, 5)
    field.update(level, 1.0, 2, random.Random(0))
    assert not field.bomb_at(5, 5)
    assert not field.bomb_at(7, 5)
    assert field.explosion_at(9, 5)


def test_detonate_at_queues_once_and_update_fires():
    level = Level.empty()
    field = BombField()
    field.plant(3, 3)
    field.detonate_at(3, 3)
    field.detonate_at(3, 3)
    field.update(level, 0.0, 1, random.Random(0))
    assert not field.bomb_at(3, 3)
    assert field.explosion_at(3, 3)
    assert field.explosion_at(4, 3)


def test_reset_clears_bombs_but_not_fire():
    level = Level.empty()
    field = BombField()
    field.plant(1, 1)
    field.add_explosion(2, 2)
    field.detonate_at(1, 1)
    field.reset()
    field.update(level, 0.0, 1, random.Random(0))
    assert not field.bomb_at(1, 1)
    assert not field.explosion_at(1, 1)
    assert field.explosion_at(2, 2)
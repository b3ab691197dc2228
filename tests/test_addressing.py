import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from voxelcore.config import REGION_SIZE
from voxelcore.blocks import Block, BLOCK_TYPES, is_solid, is_transparent, block_color, block_by_name
from voxelcore.util import (
    RegionPos,
    LocalPos,
    cell_of,
    region_of,
    region_origin,
    local_index,
    world_to_local,
    local_to_world,
)


def test_region_of_floors_toward_negative_infinity():
    assert region_of((0, 0, 0)) == RegionPos(0, 0, 0)
    assert region_of((15.99, 0, 0)) == RegionPos(0, 0, 0)
    assert region_of((16, 0, 0)) == RegionPos(1, 0, 0)
    assert region_of((-0.01, 0, 0)) == RegionPos(-1, 0, 0)
    assert region_of((-1, -17, -16)) == RegionPos(-1, -2, -1)


def test_region_of_is_continuous_across_zero():
    # Every cell from -40 to 40 lands in exactly one region and region
    # indices never skip or repeat out of order.
    previous = None
    for x in range(-40, 41):
        r = region_of((x + 0.5, 0, 0)).x
        if previous is not None:
            assert r in (previous, previous + 1)
        previous = r
    assert region_of((-16, 0, 0)).x == -1
    assert region_of((-17, 0, 0)).x == -2


def test_region_origin_is_inverse_of_region_of():
    for pos in [(0, 0, 0), (3, -1, -7), (-2, 0, 5)]:
        origin = region_origin(pos)
        assert region_of(origin) == RegionPos(*pos)
        assert region_of(tuple(c + REGION_SIZE - 0.5 for c in origin)) == RegionPos(*pos)


def test_world_to_local_floors_fractional_points():
    assert world_to_local((5.5, 0.25, -0.5)) == (RegionPos(0, 0, -1), LocalPos(5, 0, 15))
    assert world_to_local((-16.01, 31.99, 16.0)) == (RegionPos(-2, 1, 1), LocalPos(15, 15, 0))
    region, local = world_to_local((3.7, 2.2, 1.0))
    assert all(isinstance(c, int) for c in local)


def test_world_to_local_wraps_negative_cells():
    region, local = world_to_local((-1, -1, -1))
    assert region == RegionPos(-1, -1, -1)
    assert local == LocalPos(15, 15, 15)
    region, local = world_to_local((17, 0, -16))
    assert region == RegionPos(1, 0, -1)
    assert local == LocalPos(1, 0, 0)


def test_local_to_world_round_trip_on_boundaries():
    for cell in [(0, 0, 0), (-1, 15, 16), (-16, -17, 31)]:
        region, local = world_to_local(cell)
        assert local_to_world(region, local) == cell


def test_cell_of_uses_floor():
    assert cell_of((0.5, -0.5, 2.0)) == (0, -1, 2)


def test_local_index_order_and_bounds():
    assert local_index((0, 0, 0)) == 0
    assert local_index((1, 0, 0)) == 1
    assert local_index((0, 0, 1)) == REGION_SIZE
    assert local_index((0, 1, 0)) == REGION_SIZE * REGION_SIZE
    assert local_index((15, 15, 15)) == REGION_SIZE ** 3 - 1
    with pytest.raises(IndexError):
        local_index((16, 0, 0))
    with pytest.raises(IndexError):
        local_index((0, -1, 0))


def test_block_properties():
    assert set(BLOCK_TYPES) == set(Block)
    assert not is_solid(Block.EMPTY)
    assert is_transparent(Block.EMPTY)
    assert is_transparent(Block.WATER)
    for block in (Block.GRASS, Block.DIRT, Block.STONE, Block.SAND):
        assert is_solid(block)
        assert not is_transparent(block)
        assert block_color(block)[3] == 1.0
    assert block_color(Block.WATER)[3] < 1.0
    assert block_by_name('Stone') == Block.STONE

from enum import IntEnum

import numpy


class Block(IntEnum):
    EMPTY = 0
    GRASS = 1
    DIRT = 2
    STONE = 3
    SAND = 4
    WATER = 5


class BlockType(object):
    name = None
    # Solid blocks stop movement and count as cover for interaction.
    solid = True
    # Transparent blocks let the faces of their neighbors show through.
    transparent = False
    color = (1.0, 1.0, 1.0, 1.0)

class Empty(BlockType):
    name = 'Empty'
    solid = False
    transparent = True
    color = (0.0, 0.0, 0.0, 0.0)

class Grass(BlockType):
    name = 'Grass'
    color = (0.3, 0.7, 0.3, 1.0)

class Dirt(BlockType):
    name = 'Dirt'
    color = (0.6, 0.4, 0.2, 1.0)

class Stone(BlockType):
    name = 'Stone'
    color = (0.5, 0.5, 0.5, 1.0)

class Sand(BlockType):
    name = 'Sand'
    color = (0.9, 0.8, 0.6, 1.0)

class Water(BlockType):
    name = 'Water'
    solid = False
    transparent = True
    color = (0.2, 0.4, 0.8, 0.7)


BLOCK_TYPES = {
    Block.EMPTY: Empty,
    Block.GRASS: Grass,
    Block.DIRT: Dirt,
    Block.STONE: Stone,
    Block.SAND: Sand,
    Block.WATER: Water,
}

_missing = [b.name for b in Block if b not in BLOCK_TYPES]
if _missing:
    raise RuntimeError(f"block variants without properties: {_missing}")

# Lookup tables indexed by block id, so whole regions can be classified at once.
BLOCK_SOLID = numpy.array([BLOCK_TYPES[b].solid for b in Block], dtype=bool)
BLOCK_TRANSPARENT = numpy.array([BLOCK_TYPES[b].transparent for b in Block], dtype=bool)
BLOCK_COLORS = numpy.array([BLOCK_TYPES[b].color for b in Block], dtype=numpy.float32)
BLOCK_NAMES = [BLOCK_TYPES[b].name for b in Block]
BLOCK_ID = {BLOCK_TYPES[b].name: b for b in Block}


def is_solid(block):
    return bool(BLOCK_SOLID[block])


def is_transparent(block):
    return bool(BLOCK_TRANSPARENT[block])


def block_color(block):
    """ Return the (r, g, b, a) display color of `block` as floats in 0-1.

    """
    return BLOCK_TYPES[Block(block)].color


def block_by_name(name):
    return BLOCK_ID[name]

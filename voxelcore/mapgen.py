#std/external libs
import numpy

#local libs
from voxelcore import config
from voxelcore.config import REGION_SIZE
from voxelcore.blocks import Block
from voxelcore.simplex import SimplexNoise
from voxelcore.util import region_origin


class TerrainGenerator(object):
    """Deterministic height and biome fields over world (x, z).

    Both fields are pure functions of the coordinates once the seed is fixed,
    so a generator can be shared by every region without locking.
    """

    def __init__(self, seed=None):
        if seed is None:
            seed = config.WORLD_SEED
        self.seed = seed
        self.height_noise = SimplexNoise(seed=seed)
        self.biome_noise = SimplexNoise(seed=seed + 1)
        self.scale = getattr(config, 'TERRAIN_SCALE', 0.02)
        self.biome_scale = getattr(config, 'BIOME_SCALE', 0.01)
        self.multiplier = getattr(config, 'HEIGHT_MULTIPLIER', 12.0)
        self.offset = getattr(config, 'HEIGHT_OFFSET', 15.0)

    def height_map(self, x, z):
        sx = numpy.asarray(x, dtype=numpy.float64) * self.scale
        sz = numpy.asarray(z, dtype=numpy.float64) * self.scale
        base = self.height_noise.noise(sx, sz)
        detail = self.height_noise.noise(sx * 4.0, sz * 4.0) * 0.25
        # Squared so ridges rise whichever sign the field has.
        mountains = self.height_noise.noise(sx * 0.5, sz * 0.5) * 0.5
        combined = base + detail + mountains * mountains * 2.0
        return combined * self.multiplier + self.offset

    def biome_map(self, x, z):
        bx = numpy.asarray(x, dtype=numpy.float64) * self.biome_scale
        bz = numpy.asarray(z, dtype=numpy.float64) * self.biome_scale
        return numpy.clip((self.biome_noise.noise(bx, bz) + 1.0) * 0.5, 0.0, 1.0)

    def height(self, x, z):
        return float(self.height_map(x, z))

    def biome(self, x, z):
        return float(self.biome_map(x, z))


def fill_columns(heights, biomes, origin_y):
    """ Fill a region's cells from per-column surface data.

    Parameters
    ----------
    heights : array (REGION_SIZE, REGION_SIZE) indexed [z, x]
        Real-valued terrain height of each column.
    biomes : array (REGION_SIZE, REGION_SIZE) indexed [z, x]
        Biome value in [0, 1] of each column.
    origin_y : int
        World y of the region's lowest cell layer.

    Returns
    -------
    blocks : uint8 array (REGION_SIZE, REGION_SIZE, REGION_SIZE) indexed [y, z, x]

    """
    dirt_depth = getattr(config, 'DIRT_DEPTH', 3)
    sand_threshold = getattr(config, 'SAND_BIOME_THRESHOLD', 0.6)
    # Surface cell of each column; negative heights sit on the world floor.
    h = numpy.maximum(numpy.asarray(heights, dtype=numpy.float64), 0.0).astype(numpy.int64)[None, :, :]
    surface = numpy.where(numpy.asarray(biomes)[None, :, :] > sand_threshold, Block.SAND, Block.GRASS)
    y = (origin_y + numpy.arange(REGION_SIZE, dtype=numpy.int64))[:, None, None]

    dirt_band = (h > dirt_depth) & (y > h - dirt_depth)
    b = numpy.full((REGION_SIZE, REGION_SIZE, REGION_SIZE), Block.STONE, dtype=numpy.uint8)
    b = numpy.where(dirt_band, Block.DIRT, b)
    b = numpy.where(y == h, surface, b)
    b = numpy.where(y > h, Block.EMPTY, b)
    return b.astype(numpy.uint8)


def generate_region(position, generator):
    """ Build the block array of the region at `position` from `generator`.

    Returns a flat uint8 array in region index order (y, then z, then x).

    """
    ox, oy, oz = region_origin(position)
    xs = ox + numpy.arange(REGION_SIZE, dtype=numpy.float64)
    zs = oz + numpy.arange(REGION_SIZE, dtype=numpy.float64)
    Z, X = numpy.meshgrid(zs, xs, indexing='ij')
    heights = generator.height_map(X, Z)
    biomes = generator.biome_map(X, Z)
    return fill_columns(heights, biomes, oy).reshape(-1)

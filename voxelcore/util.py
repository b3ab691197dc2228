import math
from collections import namedtuple

from voxelcore.config import REGION_SIZE

RegionPos = namedtuple('RegionPos', ['x', 'y', 'z'])
LocalPos = namedtuple('LocalPos', ['x', 'y', 'z'])

FACES = [
    ( 0, 1, 0), #up
    ( 0,-1, 0), #down
    (-1, 0, 0), #left
    ( 1, 0, 0), #right
    ( 0, 0, 1), #forward
    ( 0, 0,-1), #back
]


def cell_of(position):
    """ Accepts `position` of arbitrary precision and returns the cell
    containing that position.

    Parameters
    ----------
    position : tuple of len 3

    Returns
    -------
    cell : tuple of ints of len 3

    """
    x, y, z = position
    return (int(math.floor(x)), int(math.floor(y)), int(math.floor(z)))


def region_of(position):
    """ Returns the RegionPos of the region containing `position`.

    Flooring is toward negative infinity, so world x = -1 lands in region -1
    and x = 0 in region 0.

    Parameters
    ----------
    position : tuple of len 3
        World-space point (ints or floats).

    Returns
    -------
    region : RegionPos

    """
    x, y, z = position
    return RegionPos(
        int(math.floor(x / REGION_SIZE)),
        int(math.floor(y / REGION_SIZE)),
        int(math.floor(z / REGION_SIZE)),
    )


def region_origin(region):
    """ World-space minimum corner of `region`. """
    x, y, z = region
    return (x * REGION_SIZE, y * REGION_SIZE, z * REGION_SIZE)


def valid_local(local):
    x, y, z = local
    return 0 <= x < REGION_SIZE and 0 <= y < REGION_SIZE and 0 <= z < REGION_SIZE


def local_index(local):
    """ Flat index of `local` into a region's block array (y-major, then z, then x).

    Raises IndexError for coordinates outside the region; callers validate
    first, so reaching it means a coordinate translation is broken.

    """
    if not valid_local(local):
        raise IndexError(f"local coordinate {tuple(local)} outside region of size {REGION_SIZE}")
    x, y, z = local
    return y * REGION_SIZE * REGION_SIZE + z * REGION_SIZE + x


def world_to_local(position):
    """ Split the world cell containing `position` into its RegionPos and LocalPos.

    Fractional points are floored to their cell first.

    """
    x, y, z = cell_of(position)
    region = RegionPos(x // REGION_SIZE, y // REGION_SIZE, z // REGION_SIZE)
    local = LocalPos(x % REGION_SIZE, y % REGION_SIZE, z % REGION_SIZE)
    return region, local


def local_to_world(region, local):
    ox, oy, oz = region_origin(region)
    return (ox + local[0], oy + local[1], oz + local[2])

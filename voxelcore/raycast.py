import math
from collections import namedtuple

from voxelcore import config
from voxelcore.blocks import Block
from voxelcore.util import cell_of, world_to_local

RaycastHit = namedtuple('RaycastHit', ['region', 'local', 'normal', 'distance'])


def sight_vector(rotation):
    """ Returns the line of sight vector for a (yaw, pitch) `rotation` in degrees.

    Pitch ranges from -90 (straight down) to 90 (straight up); yaw 0 looks
    along -z.

    """
    x, y = rotation
    # m is 1 when looking ahead parallel to the ground and 0 when looking
    # straight up or down.
    m = math.cos(math.radians(y))
    dy = math.sin(math.radians(y))
    dx = math.cos(math.radians(x - 90)) * m
    dz = math.sin(math.radians(x - 90)) * m
    return (dx, dy, dz)


def raycast(store, origin, direction, max_distance=None, max_steps=None):
    """ Find the first non-empty cell along a ray by grid traversal (DDA).

    The ray visits every cell it passes through in order, so it cannot tunnel
    past a single thin cell whatever its angle. The cell containing `origin`
    itself is never reported.

    Parameters
    ----------
    store : RegionStore
        Loaded regions; unloaded space reads as empty.
    origin : tuple of len 3
        World-space start of the ray.
    direction : tuple of len 3
        Direction of the ray; normalized here. A zero vector never hits.
    max_distance : float
        Reach along the ray, defaults to config.MAX_INTERACTION_DISTANCE.
    max_steps : int
        Cap on traversal steps, defaults to config.RAYCAST_MAX_STEPS.

    Returns
    -------
    RaycastHit or None
        `normal` is the outward normal of the face the ray entered through and
        `distance` the ray length to that face.

    """
    if max_distance is None:
        max_distance = config.MAX_INTERACTION_DISTANCE
    if max_steps is None:
        max_steps = config.RAYCAST_MAX_STEPS

    length = math.sqrt(sum(c * c for c in direction))
    if length == 0.0 or not math.isfinite(length):
        return None
    d = [c / length for c in direction]

    cell = list(cell_of(origin))
    step = [0, 0, 0]
    t_delta = [math.inf] * 3
    t_max = [math.inf] * 3
    for axis in range(3):
        p = origin[axis]
        if d[axis] > 0:
            step[axis] = 1
            t_delta[axis] = 1.0 / d[axis]
            t_max[axis] = (cell[axis] + 1 - p) * t_delta[axis]
        elif d[axis] < 0:
            step[axis] = -1
            t_delta[axis] = -1.0 / d[axis]
            t_max[axis] = (p - cell[axis]) * t_delta[axis]

    for _ in range(max_steps):
        if t_max[0] < t_max[1] and t_max[0] < t_max[2]:
            axis = 0
        elif t_max[1] < t_max[2]:
            axis = 1
        else:
            axis = 2
        distance = t_max[axis]
        if distance > max_distance:
            return None
        cell[axis] += step[axis]
        t_max[axis] += t_delta[axis]

        region, local = world_to_local(cell)
        if store.get_local(region, local) != Block.EMPTY:
            normal = [0, 0, 0]
            normal[axis] = -step[axis]
            return RaycastHit(region, local, tuple(normal), distance)
    return None

'''
world.py -- owns loaded regions, their block data and their render identities
'''
import itertools

import numpy

from voxelcore import config
from voxelcore import logutil
from voxelcore.config import REGION_SIZE
from voxelcore.blocks import Block
from voxelcore.mapgen import TerrainGenerator, generate_region
from voxelcore.mesher import build_mesh
from voxelcore.renderer import RenderListener
from voxelcore.util import (
    RegionPos,
    region_of,
    valid_local,
    local_index,
    world_to_local,
)

REGION_VOLUME = REGION_SIZE ** 3


class Region(object):
    def __init__(self, position, blocks=None):
        self.position = RegionPos(*position)
        if blocks is None:
            blocks = numpy.zeros(REGION_VOLUME, dtype=numpy.uint8)
        else:
            blocks = numpy.asarray(blocks, dtype=numpy.uint8).reshape(-1)
            if blocks.shape[0] != REGION_VOLUME:
                raise ValueError(f"region {self.position} needs {REGION_VOLUME} blocks, got {blocks.shape[0]}")
        self.blocks = blocks
        # Set whenever block data changes; cleared by a mesh rebuild.
        self.dirty = True

    @property
    def grid(self):
        """ (y, z, x) view of the block array. """
        return self.blocks.reshape(REGION_SIZE, REGION_SIZE, REGION_SIZE)

    def get(self, local):
        if not valid_local(local):
            return Block.EMPTY
        return Block(int(self.blocks[local_index(local)]))

    def set(self, local, block):
        """ Write `block` at `local`; returns True if the stored value changed. """
        if not valid_local(local):
            return False
        block = Block(block)
        i = local_index(local)
        if self.blocks[i] == block:
            return False
        self.blocks[i] = block
        self.dirty = True
        return True

    def is_empty(self):
        return not self.blocks.any()

    def solid_count(self):
        return int(numpy.count_nonzero(self.blocks))

    def __repr__(self):
        return f"Region({tuple(self.position)})"


class RegionStore(object):
    """All loaded regions around the observer.

    `regions` maps RegionPos to Region, `handles` maps RegionPos to the
    identity the renderer keys its geometry by, and `meshes` maps that
    identity to the latest MeshData. A region gets its handle from its first
    mesh build, which activation runs before returning, so `handles` and
    `regions` always share the same keys between calls.
    """

    def __init__(self, generator=None, seed=None, radius=None, listener=None):
        if generator is None:
            generator = TerrainGenerator(seed)
        self.generator = generator
        if radius is None:
            radius = getattr(config, 'LOAD_RADIUS', 3)
        self.radius = radius
        self.listener = listener if listener is not None else RenderListener()
        self.regions = {}
        self.handles = {}
        self.meshes = {}
        self._handle_counter = itertools.count(1)

    def new_handle(self):
        return next(self._handle_counter)

    def __contains__(self, region_pos):
        return RegionPos(*region_pos) in self.regions

    def __len__(self):
        return len(self.regions)

    def __getitem__(self, position):
        """
        retrieves the block at the integer (x,y,z) world cell `position`
        """
        return self.get_block(position)

    def neighborhood(self, center, radius=None):
        """ Region positions kept loaded around `center` on the ground layer. """
        if radius is None:
            radius = self.radius
        cx, _, cz = center
        layer = getattr(config, 'GROUND_LAYER', 0)
        return {
            RegionPos(cx + dx, layer, cz + dz)
            for dx, dz in itertools.product(range(-radius, radius + 1), repeat=2)
        }

    def activate(self, center, radius=None):
        """ Load every region within `radius` of `center` and drop the rest.

        Missing regions are generated and meshed before this returns. Calling
        it again with the same arguments changes nothing.

        Returns
        -------
        added, removed : lists of RegionPos

        """
        wanted = self.neighborhood(center, radius)
        removed = [pos for pos in self.regions if pos not in wanted]
        for pos in removed:
            self.remove_region(pos)
        added = [pos for pos in wanted if pos not in self.regions]
        for pos in added:
            self.ensure_region(pos)
        if added or removed:
            logutil.log("REGION", f"activated around {tuple(center)}: +{len(added)} -{len(removed)}, {len(self.regions)} loaded")
        return added, removed

    def update(self, observer_position):
        return self.activate(region_of(observer_position))

    def ensure_region(self, region_pos):
        """ Return the region at `region_pos`, generating it from terrain if absent. """
        region_pos = RegionPos(*region_pos)
        region = self.regions.get(region_pos)
        if region is None:
            region = Region(region_pos, generate_region(region_pos, self.generator))
            self.insert_region(region)
        return region

    def insert_region(self, region):
        logutil.log("REGION", f"setting new region data {tuple(region.position)}", "DEBUG")
        self.regions[region.position] = region
        self.rebuild(region.position)
        return region

    def remove_region(self, region_pos):
        region_pos = RegionPos(*region_pos)
        region = self.regions.pop(region_pos, None)
        if region is None:
            return False
        handle = self.handles.pop(region_pos, None)
        if handle is not None:
            self.meshes.pop(handle, None)
            self.listener.region_removed(handle, region_pos)
        logutil.log("REGION", f"released region {tuple(region_pos)}", "DEBUG")
        return True

    def rebuild(self, region_pos):
        """ Rebuild the mesh of a loaded region now; returns None if it is not loaded. """
        region_pos = RegionPos(*region_pos)
        region = self.regions.get(region_pos)
        if region is None:
            return None
        mesh = build_mesh(region)
        region.dirty = False
        handle = self.handles.get(region_pos)
        if handle is None:
            handle = self.new_handle()
            self.handles[region_pos] = handle
        self.meshes[handle] = mesh
        logutil.log("MESH", f"region {tuple(region_pos)} handle {handle}: {mesh.quad_count} quads")
        self.listener.region_meshed(handle, region_pos, mesh)
        return mesh

    def rebuild_dirty(self):
        dirty = [pos for pos, region in self.regions.items() if region.dirty]
        for pos in dirty:
            self.rebuild(pos)
        return dirty

    def get_local(self, region_pos, local):
        region = self.regions.get(RegionPos(*region_pos))
        if region is None:
            return Block.EMPTY
        return region.get(local)

    def set_local(self, region_pos, local, block):
        region = self.regions.get(RegionPos(*region_pos))
        if region is None:
            return False
        return region.set(local, block)

    def get_block(self, position):
        region_pos, local = world_to_local(position)
        return self.get_local(region_pos, local)

    def set_block(self, position, block):
        region_pos, local = world_to_local(position)
        return self.set_local(region_pos, local, block)

    def find_surface_y(self, x, z):
        """
        Find the y-coordinate of the ground at the given (x, z) cell column,
        searching every loaded region stacked on that column.
        """
        best = None
        (rx, _, rz), local = world_to_local((x, 0, z))
        for region_pos, region in self.regions.items():
            if region_pos.x != rx or region_pos.z != rz:
                continue
            column = region.grid[:, local.z, local.x]
            non_air = numpy.nonzero(column != Block.EMPTY)[0]
            if len(non_air) == 0:
                continue
            y = region_pos.y * REGION_SIZE + int(non_air[-1]) + 1
            if best is None or y > best:
                best = y
        return best

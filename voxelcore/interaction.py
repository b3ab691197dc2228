'''
interaction.py -- per-frame aiming, break and place on top of a RegionStore

Nothing here is global: the host owns a RegionStore and a TargetState and
passes both into tick() once per frame together with that frame's input.
'''
from collections import namedtuple

from voxelcore import config
from voxelcore import logutil
from voxelcore.config import REGION_SIZE
from voxelcore.blocks import Block, BLOCK_NAMES, block_by_name
from voxelcore.raycast import raycast
from voxelcore.renderer import highlight_center, highlight_size
from voxelcore.util import RegionPos, LocalPos

FrameInput = namedtuple('FrameInput', ['position', 'direction', 'aiming', 'break_pressed', 'place_pressed', 'keys'])


class TargetState(object):
    """The cell under the crosshair this frame and its highlight identity."""

    def __init__(self):
        self.hit = None
        self.highlight = None

    def clear_highlight(self, listener):
        if self.highlight is not None:
            listener.highlight_removed(self.highlight)
            self.highlight = None


def update_target(target, store, origin, direction, aiming=True):
    """ Recast the aim ray and move the highlight to whatever it strikes.

    With `aiming` off (e.g. the cursor is released) the hit and the highlight
    are both cleared.

    """
    listener = store.listener
    target.clear_highlight(listener)
    if not aiming:
        target.hit = None
        return None
    hit = raycast(store, origin, direction)
    target.hit = hit
    if hit is not None:
        target.highlight = store.new_handle()
        listener.highlight_shown(target.highlight, highlight_center(hit), highlight_size())
    return hit


def select_block(keys):
    """ Block to place for the set of currently held `keys`.

    The first configured key that is held wins; with none held the default
    block is used.

    """
    held = set(keys or ())
    for key, name in config.PLACE_KEY_BLOCKS:
        if key in held:
            return block_by_name(name)
    return block_by_name(config.DEFAULT_PLACE_BLOCK)


def placement_target(hit):
    """ Region and local cell next to `hit` on the side of its face normal.

    Each axis that steps off the region wraps to the opposite bound of the
    neighboring region, so a downward placement at local y=0 lands at
    y=REGION_SIZE-1 of the region below.

    """
    region = list(hit.region)
    local = list(hit.local)
    for axis in range(3):
        local[axis] += int(round(hit.normal[axis]))
        if local[axis] < 0:
            region[axis] -= 1
            local[axis] += REGION_SIZE
        elif local[axis] >= REGION_SIZE:
            region[axis] += 1
            local[axis] -= REGION_SIZE
    return RegionPos(*region), LocalPos(*local)


def break_block(target, store):
    hit = target.hit
    if hit is None:
        return False
    if hit.region not in store:
        return False
    changed = store.set_local(hit.region, hit.local, Block.EMPTY)
    store.rebuild(hit.region)
    logutil.log("INTERACT", f"break {tuple(hit.local)} in region {tuple(hit.region)}")
    return changed


def place_block(target, store, block):
    """ Place `block` against the face of the targeted cell.

    A destination region that is not loaded yet is generated first, exactly
    as activation would.

    """
    hit = target.hit
    if hit is None:
        return False
    region_pos, local = placement_target(hit)
    store.ensure_region(region_pos)
    changed = store.set_local(region_pos, local, block)
    store.rebuild(region_pos)
    logutil.log("INTERACT", f"place {BLOCK_NAMES[block]} at {tuple(local)} in region {tuple(region_pos)}")
    return changed


def tick(store, target, frame, frame_id=None):
    """ Advance the world core by one frame of host input.

    Regions follow the observer, the aim ray is recast, then a break and a
    place request (in that order) act on this frame's target.

    """
    if frame_id is not None:
        logutil.set_frame(frame_id)
    store.update(frame.position)
    update_target(target, store, frame.position, frame.direction, frame.aiming)
    if not frame.aiming:
        return
    if frame.break_pressed:
        break_block(target, store)
    if frame.place_pressed:
        place_block(target, store, select_block(frame.keys))

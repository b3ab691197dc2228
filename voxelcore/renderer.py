'''
renderer.py -- the contract between the world core and whatever draws it

The core never owns GPU resources. It hands out integer identities for region
geometry and target highlights and reports every change through a
RenderListener; the host keeps its buffers keyed by those identities.
'''
from voxelcore import config
from voxelcore.util import local_to_world


class RenderListener(object):
    """No-op base; hosts override the hooks they care about."""

    def region_meshed(self, handle, region_pos, mesh):
        pass

    def region_removed(self, handle, region_pos):
        pass

    def highlight_shown(self, handle, center, size):
        pass

    def highlight_removed(self, handle):
        pass


class RecordingListener(RenderListener):
    """Keeps the latest geometry and highlight per identity.

    Enough for a headless host or a test to look things up the same way a
    real renderer would.
    """

    def __init__(self):
        self.meshes = {}
        self.regions = {}
        self.highlights = {}
        self.removed = []
        self.mesh_builds = 0

    def region_meshed(self, handle, region_pos, mesh):
        self.meshes[handle] = mesh
        self.regions[handle] = region_pos
        self.mesh_builds += 1

    def region_removed(self, handle, region_pos):
        self.meshes.pop(handle, None)
        self.regions.pop(handle, None)
        self.removed.append(region_pos)

    def highlight_shown(self, handle, center, size):
        self.highlights[handle] = (center, size)

    def highlight_removed(self, handle):
        self.highlights.pop(handle, None)


def highlight_center(hit):
    """ World-space center of the cell struck by `hit`. """
    x, y, z = local_to_world(hit.region, hit.local)
    return (x + 0.5, y + 0.5, z + 0.5)


def highlight_size():
    return getattr(config, 'HIGHLIGHT_SIZE', 1.05)

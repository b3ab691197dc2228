'''
mesher.py -- turns a region's block array into a triangle mesh of its visible faces
'''
import numpy

from voxelcore import config
from voxelcore.config import REGION_SIZE
from voxelcore.blocks import Block, BLOCK_COLORS, BLOCK_TRANSPARENT
from voxelcore.util import FACES, region_origin

# In-plane axes u, v of each face in FACES order, with u x v == normal, so
# corners (0,0),(1,0),(1,1),(0,1) in (u, v) wind counter-clockwise when seen
# from outside the face.
FACE_PLANES = [
    ((0, 0, 1), (1, 0, 0)),  # up
    ((1, 0, 0), (0, 0, 1)),  # down
    ((0, 0, 1), (0, 1, 0)),  # left
    ((0, 1, 0), (0, 0, 1)),  # right
    ((1, 0, 0), (0, 1, 0)),  # forward
    ((0, 1, 0), (1, 0, 0)),  # back
]
FACE_AXES = [(normal, u, v) for normal, (u, v) in zip(FACES, FACE_PLANES)]

QUAD_CORNERS = ((0, 0), (1, 0), (1, 1), (0, 1))
QUAD_UVS = numpy.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=numpy.float32)

# Triangle index patterns for a quad split along the 0-2 or the 1-3 diagonal.
TRIS_DIAG_02 = numpy.array([0, 1, 2, 0, 2, 3], dtype=numpy.uint32)
TRIS_DIAG_13 = numpy.array([0, 1, 3, 1, 2, 3], dtype=numpy.uint32)


def _add(*vecs):
    return tuple(sum(c) for c in zip(*vecs))


def _scale(vec, k):
    return tuple(k * c for c in vec)


def _build_face_tables():
    corners = []
    samples = []
    for normal, u, v in FACE_AXES:
        # The face plane sits on the far side of the cell for positive normals.
        plane = tuple(max(c, 0) for c in normal)
        face_corners = []
        face_samples = []
        for a, b in QUAD_CORNERS:
            face_corners.append(_add(plane, _scale(u, a), _scale(v, b)))
            du = _scale(u, 2 * a - 1)
            dv = _scale(v, 2 * b - 1)
            # side1, side2, corner: cells in the layer the face looks into.
            face_samples.append((_add(normal, du), _add(normal, dv), _add(normal, du, dv)))
        corners.append(face_corners)
        samples.append(face_samples)
    return numpy.array(corners, dtype=numpy.float32), samples


FACE_CORNERS, AO_SAMPLES = _build_face_tables()


class MeshData(object):
    """Triangle mesh of one region, in region-local coordinates.

    `origin` is the world-space placement of the region's minimum corner.
    `occlusion` holds the four per-vertex AO factors of each quad.
    """

    def __init__(self, positions, normals, colors, uvs, indices, occlusion, origin):
        self.positions = positions
        self.normals = normals
        self.colors = colors
        self.uvs = uvs
        self.indices = indices
        self.occlusion = occlusion
        self.origin = origin

    @classmethod
    def empty(cls, origin=(0, 0, 0)):
        return cls(
            numpy.zeros((0, 3), dtype=numpy.float32),
            numpy.zeros((0, 3), dtype=numpy.float32),
            numpy.zeros((0, 4), dtype=numpy.float32),
            numpy.zeros((0, 2), dtype=numpy.float32),
            numpy.zeros((0,), dtype=numpy.uint32),
            numpy.zeros((0, 4), dtype=numpy.float64),
            origin,
        )

    @property
    def vertex_count(self):
        return len(self.positions)

    @property
    def index_count(self):
        return len(self.indices)

    @property
    def quad_count(self):
        return len(self.positions) // 4

    def is_empty(self):
        return len(self.positions) == 0

    def triangles(self):
        """ Vertex positions grouped per triangle, shape (T, 3, 3). """
        return self.positions[self.indices].reshape(-1, 3, 3)

    def __repr__(self):
        return f"MeshData(quads={self.quad_count}, origin={self.origin})"


def ambient_occlusion(side1, side2, corner):
    """ Occlusion factor of a vertex from its two edge cells and corner cell.

    Works elementwise on boolean arrays; returns a float for scalar input.

    """
    side1 = numpy.asarray(side1, dtype=bool)
    side2 = numpy.asarray(side2, dtype=bool)
    corner = numpy.asarray(corner, dtype=bool)
    ao = numpy.where(side1 & side2, 0.5,
         numpy.where(corner & ~side1 & ~side2, 0.7,
         numpy.where(side1 | side2 | corner, 0.8, 1.0)))
    if ao.ndim == 0:
        return float(ao)
    return ao


def _shifted(padded, offset):
    # `padded` is a (y, z, x) grid with one cell of padding on every side.
    dx, dy, dz = offset
    return padded[1 + dy:1 + dy + REGION_SIZE,
                  1 + dz:1 + dz + REGION_SIZE,
                  1 + dx:1 + dx + REGION_SIZE]


def build_mesh(region):
    """ Extract the visible surface of `region` as a MeshData.

    A face of a non-empty cell is kept when the neighbor it faces is empty,
    transparent or outside the region. Cells outside the region count as
    occluders when computing ambient occlusion, so boundary faces are always
    drawn and darkened toward the region edge.

    """
    origin = region_origin(region.position)
    grid = region.grid
    filled = grid != Block.EMPTY
    if not filled.any():
        return MeshData.empty(origin)

    see_through = numpy.pad(BLOCK_TRANSPARENT[grid], 1, mode='constant', constant_values=True)
    occluders = numpy.pad(filled, 1, mode='constant', constant_values=True)
    ao_enabled = getattr(config, 'AO_ENABLED', True)

    positions = []
    normals = []
    colors = []
    occlusion = []
    for f, (normal, u, v) in enumerate(FACE_AXES):
        visible = filled & _shifted(see_through, normal)
        ys, zs, xs = numpy.nonzero(visible)
        count = len(ys)
        if count == 0:
            continue

        ao = numpy.ones((count, 4), dtype=numpy.float64)
        if ao_enabled:
            for k, (side1, side2, corner) in enumerate(AO_SAMPLES[f]):
                ao[:, k] = ambient_occlusion(
                    _shifted(occluders, side1)[ys, zs, xs],
                    _shifted(occluders, side2)[ys, zs, xs],
                    _shifted(occluders, corner)[ys, zs, xs],
                )

        cells = numpy.stack([xs, ys, zs], axis=1).astype(numpy.float32)
        positions.append(cells[:, None, :] + FACE_CORNERS[f][None, :, :])
        normals.append(numpy.broadcast_to(numpy.array(normal, dtype=numpy.float32), (count, 4, 3)))
        base = BLOCK_COLORS[grid[ys, zs, xs]]
        face_colors = numpy.repeat(base[:, None, :], 4, axis=1)
        face_colors[:, :, :3] *= ao[:, :, None].astype(numpy.float32)
        colors.append(face_colors)
        occlusion.append(ao)

    occlusion = numpy.concatenate(occlusion)
    quads = len(occlusion)
    # Split each quad along the diagonal whose endpoints are less occluded.
    split_02 = (occlusion[:, 0] + occlusion[:, 2]) > (occlusion[:, 1] + occlusion[:, 3])
    base_index = (numpy.arange(quads, dtype=numpy.uint32) * 4)[:, None]
    tris = numpy.where(split_02[:, None], TRIS_DIAG_02[None, :], TRIS_DIAG_13[None, :]) + base_index

    return MeshData(
        positions=numpy.concatenate(positions).reshape(-1, 3).astype(numpy.float32),
        normals=numpy.concatenate(normals).reshape(-1, 3).astype(numpy.float32),
        colors=numpy.concatenate(colors).reshape(-1, 4).astype(numpy.float32),
        uvs=numpy.tile(QUAD_UVS, (quads, 1)),
        indices=tris.reshape(-1).astype(numpy.uint32),
        occlusion=occlusion,
        origin=origin,
    )

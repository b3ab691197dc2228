import os
import sys

import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from voxelcore.blocks import Block, BLOCK_COLORS
from voxelcore import mesher
from voxelcore.mesher import build_mesh, ambient_occlusion, TRIS_DIAG_02, TRIS_DIAG_13
from voxelcore.world import Region


def _region(cells, position=(0, 0, 0)):
    region = Region(position)
    for local, block in cells.items():
        region.set(local, block)
    return region


def _quad(mesh, cell, normal):
    """Index of the quad of `cell` facing `normal`."""
    normal = np.array(normal, dtype=np.float32)
    for q in range(mesh.quad_count):
        if not np.array_equal(mesh.normals[4 * q], normal):
            continue
        corner = mesh.positions[4 * q:4 * q + 4].min(axis=0)
        lo = np.array(cell, dtype=np.float32) + np.maximum(normal, 0)
        if np.array_equal(corner, lo):
            return q
    raise AssertionError(f"no quad for {cell} facing {tuple(normal)}")


def _quad_indices(mesh, q):
    return mesh.indices[6 * q:6 * q + 6] - 4 * q


def test_ambient_occlusion_table():
    assert ambient_occlusion(True, True, False) == 0.5
    assert ambient_occlusion(True, True, True) == 0.5
    assert ambient_occlusion(False, False, True) == 0.7
    assert ambient_occlusion(True, False, False) == 0.8
    assert ambient_occlusion(False, True, True) == 0.8
    assert ambient_occlusion(False, False, False) == 1.0
    ao = ambient_occlusion(np.array([True, False]), np.array([True, False]), np.array([False, False]))
    assert list(ao) == [0.5, 1.0]


def test_empty_region_gives_empty_mesh():
    mesh = build_mesh(Region((3, 0, -2)))
    assert mesh.is_empty()
    assert mesh.vertex_count == 0
    assert mesh.index_count == 0
    assert mesh.origin == (48, 0, -32)


def test_single_interior_cell():
    mesh = build_mesh(_region({(8, 8, 8): Block.STONE}))
    assert mesh.vertex_count == 24
    assert mesh.index_count == 36
    assert mesh.uvs.shape == (24, 2)
    assert np.all(mesh.occlusion == 1.0)
    assert np.allclose(mesh.colors, BLOCK_COLORS[Block.STONE])
    assert mesh.positions.min() == 8.0
    assert mesh.positions.max() == 9.0


def test_hidden_faces_between_neighbors():
    mesh = build_mesh(_region({(8, 8, 8): Block.STONE, (9, 8, 8): Block.DIRT}))
    assert mesh.quad_count == 10


def test_faces_toward_water_are_kept():
    mesh = build_mesh(_region({(8, 8, 8): Block.STONE, (9, 8, 8): Block.WATER}))
    # The stone keeps all six faces; the water drops the face against the stone.
    assert mesh.quad_count == 11
    _quad(mesh, (8, 8, 8), (1, 0, 0))


def test_boundary_cell_keeps_faces_with_edge_occlusion():
    mesh = build_mesh(_region({(0, 0, 0): Block.GRASS}))
    assert mesh.quad_count == 6
    left = _quad(mesh, (0, 0, 0), (-1, 0, 0))
    assert list(mesh.occlusion[left]) == [0.5] * 4
    up = _quad(mesh, (0, 0, 0), (0, 1, 0))
    assert list(mesh.occlusion[up]) == [0.5, 0.8, 1.0, 0.8]


def test_two_edge_cells_darken_vertex():
    mesh = build_mesh(_region({
        (8, 8, 8): Block.STONE,
        (8, 9, 7): Block.STONE,
        (7, 9, 8): Block.STONE,
    }))
    up = _quad(mesh, (8, 8, 8), (0, 1, 0))
    assert list(mesh.occlusion[up]) == [0.5, 0.8, 1.0, 0.8]
    assert np.array_equal(_quad_indices(mesh, up), TRIS_DIAG_13)


def test_diagonal_follows_brighter_pair():
    mesh = build_mesh(_region({(8, 8, 8): Block.STONE, (7, 9, 7): Block.STONE}))
    up = _quad(mesh, (8, 8, 8), (0, 1, 0))
    assert list(mesh.occlusion[up]) == [0.7, 1.0, 1.0, 1.0]
    assert np.array_equal(_quad_indices(mesh, up), TRIS_DIAG_13)

    mesh = build_mesh(_region({(8, 8, 8): Block.STONE, (7, 9, 9): Block.STONE}))
    up = _quad(mesh, (8, 8, 8), (0, 1, 0))
    assert list(mesh.occlusion[up]) == [1.0, 0.7, 1.0, 1.0]
    assert np.array_equal(_quad_indices(mesh, up), TRIS_DIAG_02)


def test_triangles_wind_counter_clockwise_from_outside():
    region = _region({
        (0, 0, 0): Block.STONE,
        (8, 8, 8): Block.SAND,
        (8, 9, 8): Block.DIRT,
        (7, 9, 9): Block.GRASS,
        (15, 15, 15): Block.WATER,
    })
    mesh = build_mesh(region)
    tris = mesh.triangles()
    normals = mesh.normals[mesh.indices[::3]]
    cross = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    assert np.all(np.einsum('ij,ij->i', cross, normals) > 0)


def test_colors_are_scaled_by_occlusion():
    mesh = build_mesh(_region({(0, 0, 0): Block.SAND, (1, 1, 0): Block.STONE}))
    ao = mesh.occlusion.reshape(-1)
    quad_max = mesh.positions.reshape(-1, 4, 3).max(axis=(1, 2))
    sand = np.repeat(quad_max <= 1.0, 4)
    expected = BLOCK_COLORS[Block.SAND][:3][None, :] * ao[sand][:, None]
    assert np.allclose(mesh.colors[sand, :3], expected)
    assert np.allclose(mesh.colors[:, 3], 1.0)


def test_occlusion_can_be_disabled(monkeypatch):
    monkeypatch.setattr(mesher.config, "AO_ENABLED", False)
    mesh = build_mesh(_region({(0, 0, 0): Block.STONE}))
    assert np.all(mesh.occlusion == 1.0)
    assert np.allclose(mesh.colors, BLOCK_COLORS[Block.STONE])

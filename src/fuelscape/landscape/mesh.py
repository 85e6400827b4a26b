"""Triangulated terrain mesh built from the elevation field."""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.ndimage import map_coordinates

from ..exceptions import InvalidDimensionError, SequencingViolationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MeshResult:
    """Vertex, UV, triangle and normal arrays of a terrain mesh.

    Arrays are owned by the mesh and read-only.
    """

    resolution: int
    vertices: NDArray[np.float32]
    uvs: NDArray[np.float32]
    triangles: NDArray[np.int32]
    normals: NDArray[np.float32]

    def __post_init__(self) -> None:
        for array in (self.vertices, self.uvs, self.triangles, self.normals):
            array.setflags(write=False)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)


def bilinear_sample(
    raster: NDArray[np.floating],
    u: ArrayLike,
    v: ArrayLike,
) -> NDArray[np.float64]:
    """Sample a raster at normalized coordinates with bilinear filtering.

    The raster spans [0, 1] in both directions with cell centers at
    ``(i + 0.5) / n`` and repeats outside that range, so samples between
    the outermost centers and the border blend the last column (or row)
    with the first.

    Args:
        raster: 2D array of shape (height, width).
        u: Horizontal coordinates in [0, 1].
        v: Vertical coordinates in [0, 1], broadcastable with u.

    Returns:
        Interpolated values with the broadcast shape of u and v.
    """
    height, width = raster.shape
    u_arr, v_arr = np.broadcast_arrays(
        np.asarray(u, dtype=np.float64), np.asarray(v, dtype=np.float64)
    )

    px = u_arr * width - 0.5
    py = v_arr * height - 0.5

    # map_coordinates takes (row, col) order
    coords = np.vstack([py.ravel(), px.ravel()])
    values = map_coordinates(
        raster.astype(np.float64), coords, order=1, mode="grid-wrap"
    )
    return values.reshape(u_arr.shape)


def triangulate_grid(resolution: int) -> NDArray[np.int32]:
    """Triangle indices for a resolution x resolution vertex grid.

    Each quad with corner ``current = y * resolution + x`` emits
    ``(current, next, current + 1)`` and ``(current + 1, next, next + 1)``
    where ``next = current + resolution``. The winding gives +Y face
    normals for a flat grid.

    Returns:
        Array of shape (2 * (resolution - 1) ** 2, 3).
    """
    cells = resolution - 1
    ys, xs = np.meshgrid(np.arange(cells), np.arange(cells), indexing="ij")
    current = (ys * resolution + xs).ravel()
    below = current + resolution

    first = np.stack([current, below, current + 1], axis=1)
    second = np.stack([current + 1, below, below + 1], axis=1)

    return np.stack([first, second], axis=1).reshape(-1, 3).astype(np.int32)


def compute_vertex_normals(
    vertices: NDArray[np.floating],
    triangles: NDArray[np.integer],
) -> NDArray[np.float32]:
    """Average area-weighted face normals onto vertices.

    Args:
        vertices: Vertex positions, shape (n, 3).
        triangles: Triangle indices, shape (m, 3).

    Returns:
        Unit normals of shape (n, 3). Vertices without faces get zero normals.
    """
    points = vertices.astype(np.float64)
    v0 = points[triangles[:, 0]]
    v1 = points[triangles[:, 1]]
    v2 = points[triangles[:, 2]]
    face_normals = np.cross(v1 - v0, v2 - v0)

    normals = np.zeros_like(points)
    for corner in range(3):
        np.add.at(normals, triangles[:, corner], face_normals)

    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    lengths[lengths == 0] = 1.0
    return (normals / lengths).astype(np.float32)


def build_mesh(
    elevation: NDArray[np.float32] | None,
    resolution: int = 256,
    plane_size: float = 10.0,
    elevation_multiplier: float = 10.0,
) -> MeshResult:
    """Build a square terrain mesh centered at the origin.

    Vertex (x, y) sits at ``((u - 0.5) * plane_size,
    bilinear(elevation, u, v) * elevation_multiplier, (v - 0.5) * plane_size)``
    with ``u = x / (resolution - 1)`` and ``v = y / (resolution - 1)``.

    Args:
        elevation: Elevation field; its size is independent of resolution.
        resolution: Vertices per side.
        plane_size: Side length of the mesh.
        elevation_multiplier: Vertical scale.

    Returns:
        MeshResult with resolution**2 vertices.

    Raises:
        SequencingViolationError: If no elevation field is given.
        InvalidDimensionError: If resolution is 1 or less.
    """
    if elevation is None:
        raise SequencingViolationError(
            "Mesh generation requires an elevation field; generate it first"
        )
    if resolution <= 1:
        raise InvalidDimensionError(
            f"Mesh resolution must be greater than 1, got {resolution}"
        )

    steps = np.arange(resolution, dtype=np.float64) / (resolution - 1)
    v_grid, u_grid = np.meshgrid(steps, steps, indexing="ij")

    heights = bilinear_sample(elevation, u_grid, v_grid) * elevation_multiplier

    vertices = np.stack(
        [(u_grid - 0.5) * plane_size, heights, (v_grid - 0.5) * plane_size],
        axis=-1,
    ).reshape(-1, 3).astype(np.float32)
    uvs = np.stack([u_grid, v_grid], axis=-1).reshape(-1, 2).astype(np.float32)
    triangles = triangulate_grid(resolution)
    normals = compute_vertex_normals(vertices, triangles)

    logger.debug(
        f"Built mesh {resolution}x{resolution}: "
        f"{len(vertices):,} vertices, {len(triangles):,} triangles"
    )

    return MeshResult(
        resolution=resolution,
        vertices=vertices,
        uvs=uvs,
        triangles=triangles,
        normals=normals,
    )

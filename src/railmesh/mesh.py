from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from railmesh.validation import GeometryInconsistency, validate_buffers


@dataclass(frozen=True)
class MeshAnalysis:
    n_vertices: int
    n_faces: int
    degenerate_faces: int
    boundary_edges: int
    nonmanifold_edges: int
    invalid_vertices: int

    @property
    def is_manifold(self) -> bool:
        return self.nonmanifold_edges == 0

    @property
    def is_watertight(self) -> bool:
        return self.boundary_edges == 0 and self.is_manifold

    @property
    def has_degenerate_faces(self) -> bool:
        return self.degenerate_faces > 0

    @property
    def has_invalid_vertices(self) -> bool:
        return self.invalid_vertices > 0

    def issues(self) -> list[str]:
        issues: list[str] = []
        if self.has_invalid_vertices:
            issues.append(f"{self.invalid_vertices} invalid vertices (NaN/inf)")
        if self.has_degenerate_faces:
            issues.append(f"{self.degenerate_faces} degenerate faces")
        if self.boundary_edges > 0:
            issues.append(f"{self.boundary_edges} boundary edges (not watertight)")
        if self.nonmanifold_edges > 0:
            issues.append(f"{self.nonmanifold_edges} non-manifold edges")
        return issues


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def _as_vertices(value: object) -> np.ndarray:
    try:
        verts = np.array(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise GeometryInconsistency("Vertices must be numeric Nx3 points.") from exc
    if verts.size == 0:
        return verts.reshape(0, 3)
    return verts


def _as_faces(value: object) -> np.ndarray:
    faces = np.array(value)
    if faces.size == 0:
        return np.zeros((0, 3), dtype=np.int64)
    if not np.issubdtype(faces.dtype, np.integer):
        raise GeometryInconsistency("Faces must hold integer vertex indices.")
    return faces.astype(np.int64)


@dataclass(frozen=True, eq=False)
class Mesh:
    """Immutable triangle mesh: an Nx3 vertex buffer and an Mx3 index buffer.

    Construction copies both buffers, checks that every face addresses an
    existing vertex and freezes the arrays.
    """

    vertices: np.ndarray
    faces: np.ndarray

    def __post_init__(self) -> None:
        verts = _as_vertices(self.vertices)
        faces = _as_faces(self.faces)
        validate_buffers(verts, faces)
        object.__setattr__(self, "vertices", _frozen(verts))
        object.__setattr__(self, "faces", _frozen(faces))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mesh):
            return NotImplemented
        return np.array_equal(self.vertices, other.vertices) and np.array_equal(self.faces, other.faces)

    __hash__ = None  # type: ignore[assignment]

    @property
    def triangles(self) -> np.ndarray:
        return self.faces

    @property
    def n_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def n_faces(self) -> int:
        return int(self.faces.shape[0])

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        if self.n_vertices == 0:
            return (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        mins = self.vertices.min(axis=0)
        maxs = self.vertices.max(axis=0)
        return (float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1]), float(mins[2]), float(maxs[2]))

    def transformed(self, matrix: np.ndarray) -> "Mesh":
        """Return a copy with ``matrix`` (4x4, homogeneous) applied to every vertex."""

        mat = np.asarray(matrix, dtype=float)
        if mat.shape != (4, 4):
            raise ValueError("transformed requires a 4x4 matrix.")
        verts = np.hstack([self.vertices, np.ones((self.n_vertices, 1), dtype=float)])
        return Mesh(vertices=(mat @ verts.T).T[:, :3], faces=self.faces)


def assemble_mesh(vertices: np.ndarray, faces: np.ndarray) -> Mesh:
    """Pair a vertex buffer with an index buffer, refusing mismatched pairs."""

    return Mesh(vertices=vertices, faces=faces)


def analyze_mesh(mesh: Mesh, area_epsilon: float = 1e-12) -> MeshAnalysis:
    verts = mesh.vertices
    faces = mesh.faces
    invalid_vertices = int(np.count_nonzero(~np.isfinite(verts)))

    degenerate_faces = 0
    if faces.size > 0:
        v0 = verts[faces[:, 0]]
        v1 = verts[faces[:, 1]]
        v2 = verts[faces[:, 2]]
        cross = np.cross(v1 - v0, v2 - v0)
        areas = np.linalg.norm(cross, axis=1) * 0.5
        degenerate_faces = int(np.count_nonzero(areas <= area_epsilon))

    edge_counts: dict[tuple[int, int], int] = {}
    for tri in faces:
        edges = [(tri[0], tri[1]), (tri[1], tri[2]), (tri[2], tri[0])]
        for a, b in edges:
            key = (int(a), int(b)) if a < b else (int(b), int(a))
            edge_counts[key] = edge_counts.get(key, 0) + 1

    boundary_edges = sum(1 for count in edge_counts.values() if count == 1)
    nonmanifold_edges = sum(1 for count in edge_counts.values() if count > 2)

    return MeshAnalysis(
        n_vertices=mesh.n_vertices,
        n_faces=mesh.n_faces,
        degenerate_faces=degenerate_faces,
        boundary_edges=boundary_edges,
        nonmanifold_edges=nonmanifold_edges,
        invalid_vertices=invalid_vertices,
    )


def face_normals(mesh: Mesh) -> np.ndarray:
    """Unit normals following each triangle's winding; zero for degenerate faces."""

    if mesh.n_faces == 0:
        return np.zeros((0, 3), dtype=float)
    v0 = mesh.vertices[mesh.faces[:, 0]]
    v1 = mesh.vertices[mesh.faces[:, 1]]
    v2 = mesh.vertices[mesh.faces[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    lengths = np.linalg.norm(normals, axis=1)
    out = np.zeros_like(normals)
    np.divide(normals, lengths[:, np.newaxis], out=out, where=lengths[:, np.newaxis] > 0)
    return out


def mesh_to_pyvista(mesh: Mesh):
    import pyvista as pv

    if mesh.n_faces == 0:
        return pv.PolyData(np.array(mesh.vertices), deep=True)
    faces = np.hstack([np.full((mesh.n_faces, 1), 3, dtype=np.int64), mesh.faces]).ravel()
    return pv.PolyData(np.array(mesh.vertices), faces, deep=True)

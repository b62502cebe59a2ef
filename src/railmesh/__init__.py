"""railmesh – procedural rail track meshes."""

from __future__ import annotations

from .mesh import Mesh, MeshAnalysis, analyze_mesh, assemble_mesh
from .validation import GeometryInconsistency, InvalidSegmentCount, ValidationError

__all__ = [
    "__version__",
    "Mesh",
    "MeshAnalysis",
    "analyze_mesh",
    "assemble_mesh",
    "GeometryInconsistency",
    "InvalidSegmentCount",
    "ValidationError",
]

__version__ = "0.1.0"

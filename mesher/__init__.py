from .loft import (
    SpanMorphParameters,
    WingSolidMesh,
    build_lofted_solid,
    compute_vertex_normals,
    extrude,
    morph_progress,
    morph_start,
)
from .state import WingState

__all__ = [
    "SpanMorphParameters",
    "WingSolidMesh",
    "WingState",
    "build_lofted_solid",
    "compute_vertex_normals",
    "extrude",
    "morph_progress",
    "morph_start",
]

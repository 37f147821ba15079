import numpy as np
import numpy.typing as npt

from dataclasses import dataclass, replace
from warnings import warn

from geometry import CrossSection


@dataclass(frozen=True)
class SpanMorphParameters:
    """
    Span-wise morph controls.

    - start_percent: span fraction where morphing begins (0 = root, 1 = tip)
    - thickness_factor: tip / root scale multiplier
    - slice_count: number of span stations, at least 2
    - shift_amount: chordwise translation at full morph, in chord units
    - dihedral_angle: bend of the outer span in radians
    """
    start_percent: float = 0.5
    thickness_factor: float = 1.0
    slice_count: int = 40
    shift_amount: float = 0.0
    dihedral_angle: float = 0.0

    def clamped(self) -> "SpanMorphParameters":
        """Start percent clamped to [0, 1], slice count floored and raised to 2."""
        return replace(
            self,
            start_percent=min(max(float(self.start_percent), 0.0), 1.0),
            slice_count=max(2, int(np.floor(self.slice_count)))
        )


@dataclass(frozen=True, eq=False)
class WingSolidMesh:
    """
    Triangulated closed solid.

    positions: flat float array, 3 per vertex
    indices: flat integer array, 3 per triangle, counter-clockwise seen from outside
    normals: flat float array, 3 per vertex
    """
    positions: npt.NDArray[np.float64]
    indices: npt.NDArray[np.int64]
    normals: npt.NDArray[np.float64]

    @classmethod
    def from_arrays(cls, vertices: npt.NDArray[np.float64], faces: npt.NDArray[np.int64]) -> "WingSolidMesh":
        vertices = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
        faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
        normals = compute_vertex_normals(vertices, faces)
        return cls(vertices.ravel(), faces.ravel(), normals.ravel())

    @property
    def vertices(self) -> npt.NDArray[np.float64]:
        return self.positions.reshape(-1, 3)

    @property
    def faces(self) -> npt.NDArray[np.int64]:
        return self.indices.reshape(-1, 3)

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def volume(self) -> float:
        """
        Signed volume by the divergence theorem, positive for outward-facing triangles.
        """
        v0, v1, v2 = (self.vertices[self.faces[:, k]] for k in range(3))
        return float(np.sum(np.einsum("ij,ij->i", v0, np.cross(v1, v2))) / 6.0)

    @property
    def surface_area(self) -> float:
        return float(np.sum(np.linalg.norm(_face_cross(self.vertices, self.faces), axis=1)) / 2.0)

    def is_closed(self) -> bool:
        """
        True if every directed edge appears once and its reverse appears once,
        i.e. the surface is closed and consistently wound.
        """
        faces = self.faces
        edges = np.concatenate((faces[:, [0, 1]], faces[:, [1, 2]], faces[:, [2, 0]]), axis=0)
        n = self.vertex_count
        keys = edges[:, 0] * n + edges[:, 1]
        unique_keys, counts = np.unique(keys, return_counts=True)
        if np.any(counts != 1):
            return False
        reversed_keys = edges[:, 1] * n + edges[:, 0]
        return bool(np.all(np.isin(reversed_keys, unique_keys)))

    def mirrored(self) -> "WingSolidMesh":
        """
        Returns the mesh reflected through the z = 0 plane, with the winding reversed so it stays outward-facing.
        """
        vertices = self.vertices * np.array([1.0, 1.0, -1.0])
        return WingSolidMesh.from_arrays(vertices, self.faces[:, [0, 2, 1]])


def _face_cross(vertices: npt.NDArray[np.float64], faces: npt.NDArray[np.int64]) -> npt.NDArray[np.float64]:
    v0 = vertices[faces[:, 0]]
    return np.cross(vertices[faces[:, 1]] - v0, vertices[faces[:, 2]] - v0)


def compute_vertex_normals(vertices: npt.NDArray[np.float64], faces: npt.NDArray[np.int64]) -> npt.NDArray[np.float64]:
    """
    Unit vertex normals, the area-weighted sum of the normals of the adjacent triangles.
    Vertices without a non-degenerate adjacent triangle get a zero normal.
    """
    face_normals = _face_cross(vertices, faces)
    normals = np.zeros_like(vertices)
    for k in range(3):
        np.add.at(normals, faces[:, k], face_normals)
    lengths = np.linalg.norm(normals, axis=1)
    safe = np.where(lengths > 0, lengths, 1.0)
    return np.where(lengths[:, np.newaxis] > 0, normals / safe[:, np.newaxis], 0.0)


def morph_start(span: float, start_percent: float) -> float:
    """Span position where morphing begins, start_percent clamped to [0, 1]."""
    return -span / 2 + min(max(start_percent, 0.0), 1.0) * span


def morph_progress(z: npt.NDArray[np.float64], span: float, start_percent: float) -> npt.NDArray[np.float64]:
    """
    Morph progress t of each span station.

    t = 0 at or before the morph start, then grows linearly to 1 at the tip.
    If the morph starts at the tip the ramp has no length and every z past the start gets t = 1.
    """
    start_z = morph_start(span, start_percent)
    denom = span / 2 - start_z
    if denom <= 0:
        ramp = np.ones_like(z)
    else:
        ramp = np.clip((z - start_z) / denom, 0.0, 1.0)
    return np.where(z <= start_z, 0.0, ramp)


def build_lofted_solid(
    cross_section: npt.NDArray[np.float64] | CrossSection,
    span: float,
    params: SpanMorphParameters,
    chord: float = 1.0,
    scale: float = 1.0
) -> WingSolidMesh:
    """
    Lofts a section along the z axis from -span / 2 to +span / 2 and caps both ends.

    At each station the section is scaled by 1 + (thickness_factor - 1) t about its origin,
    shifted in x by t * shift_amount * chord * scale and raised in y by t * tan(dihedral_angle) * (z - start_z).
    The root cap fans to (0, 0, -span / 2), the tip cap to the fully morphed tip centre.
    Triangles face outward for a section in generator order (upper surface first, clockwise).

    @param cross_section: Section points of shape (n, 2) or a CrossSection. A closing point equal to the first is dropped.
    @param span: Loft length. Not checked, a non-positive span gives a flat or inside-out mesh.
    @param params: Morph parameters. `slice_count` is floored and raised to 2 with a warning.
    @param chord: Chord of the section, the unit of `shift_amount`.
    @param scale: Uniform scale applied to the section coordinates.
    @return: A mesh with slice_count * N + 2 vertices and 2 N (slice_count - 1) + 2 N triangles.
    """
    section = cross_section if isinstance(cross_section, CrossSection) else CrossSection(cross_section)
    slices = int(np.floor(params.slice_count))
    if slices < 2:
        warn(f"slice_count {params.slice_count} is below 2, using 2 stations")
        slices = 2

    points = section.points
    n = len(points)
    half = span / 2
    start_z = morph_start(span, params.start_percent)
    max_shift = params.shift_amount * chord * scale
    slope = np.tan(params.dihedral_angle)

    z = -half + np.linspace(0.0, 1.0, slices) * span
    t = morph_progress(z, span, params.start_percent)
    local_scale = scale * (1 + (params.thickness_factor - 1) * t)

    stations = np.empty((slices, n, 3), dtype=np.float64)
    stations[:, :, 0] = points[np.newaxis, :, 0] * local_scale[:, np.newaxis] + (t * max_shift)[:, np.newaxis]
    stations[:, :, 1] = points[np.newaxis, :, 1] * local_scale[:, np.newaxis] + (t * slope * (z - start_z))[:, np.newaxis]
    stations[:, :, 2] = z[:, np.newaxis]

    root_center = np.array([0.0, 0.0, -half])
    tip_center = np.array([max_shift, slope * (half - start_z), half])
    vertices = np.concatenate((stations.reshape(-1, 3), root_center[np.newaxis], tip_center[np.newaxis]), axis=0)
    root_index = slices * n
    tip_index = slices * n + 1

    j = np.arange(n)
    j2 = (j + 1) % n
    base = (np.arange(slices - 1) * n)[:, np.newaxis]
    upper = base + n
    side = np.stack((
        np.stack((base + j, upper + j, upper + j2), axis=-1),
        np.stack((base + j, upper + j2, base + j2), axis=-1),
    ), axis=2).reshape(-1, 3)

    # fans wound to match the side walls: root faces -z, tip faces +z
    tip_base = (slices - 1) * n
    root_cap = np.column_stack((np.full(n, root_index), j, j2))
    tip_cap = np.column_stack((np.full(n, tip_index), tip_base + j2, tip_base + j))

    faces = np.concatenate((side, root_cap, tip_cap), axis=0)
    return WingSolidMesh.from_arrays(vertices, faces)


def extrude(
    cross_section: npt.NDArray[np.float64] | CrossSection,
    span: float,
    scale: float = 1.0
) -> WingSolidMesh:
    """
    Plain straight extrusion: a loft with two stations and no morph.
    """
    return build_lofted_solid(cross_section, span, SpanMorphParameters(start_percent=0.0, slice_count=2), scale=scale)

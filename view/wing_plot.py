import numpy as np
import numpy.typing as npt

from matplotlib.colors import to_rgba
from mpl_toolkits.mplot3d.art3d import Poly3DCollection
from mpl_toolkits.mplot3d.axes3d import Axes3D

from mesher import WingSolidMesh
from .settings import ViewOptions

# mesh (x, y, z) -> plot (x, z, y): span runs across the screen and y stays up
_PLOT_AXES = [0, 2, 1]


def shade_faces(
    mesh: WingSolidMesh,
    color: str,
    light_direction: tuple[float, float, float]
) -> npt.NDArray[np.float64]:
    """
    Lambert shading of every triangle, returns RGBA colors of shape (F, 4).
    Faces turned away from the light keep an ambient level of 0.35.
    """
    vertices = mesh.vertices
    faces = mesh.faces
    v0 = vertices[faces[:, 0]]
    face_normals = np.cross(vertices[faces[:, 1]] - v0, vertices[faces[:, 2]] - v0)
    lengths = np.linalg.norm(face_normals, axis=1)
    face_normals = face_normals / np.where(lengths > 0, lengths, 1.0)[:, np.newaxis]
    light = np.asarray(light_direction, dtype=np.float64)
    light = light / np.linalg.norm(light)
    intensity = 0.35 + 0.65 * np.clip(face_normals @ light, 0.0, 1.0)
    base = np.array(to_rgba(color))
    colors = np.tile(base, (len(faces), 1))
    colors[:, :3] *= intensity[:, np.newaxis]
    return colors


def plot_wing(ax: Axes3D, mesh: WingSolidMesh, options: ViewOptions | None = None) -> Poly3DCollection:
    """
    Draw a wing mesh on a 3D axis, optionally with its mirror image.

    @param ax: Target axis, created with projection="3d".
    @param mesh: The mesh to draw.
    @param options: Display switches, defaults to ViewOptions().
    @return: The collection of the first wing.
    """
    if options is None:
        options = ViewOptions()
    meshes = [mesh, mesh.mirrored()] if options.mirror else [mesh]
    collections = []
    for item in meshes:
        triangles = item.vertices[:, _PLOT_AXES][item.faces]
        collection = Poly3DCollection(
            triangles,
            facecolors=shade_faces(item, options.color, options.light_direction),
            edgecolors="k" if options.show_edges else "none",
            linewidths=0.2 if options.show_edges else 0.0,
        )
        ax.add_collection3d(collection)
        collections.append(collection)

    points = np.concatenate([item.vertices[:, _PLOT_AXES] for item in meshes], axis=0)
    lower = points.min(axis=0)
    upper = points.max(axis=0)
    center = (lower + upper) / 2
    radius = float(np.max(upper - lower)) / 2 or 1.0
    ax.set_xlim(center[0] - radius, center[0] + radius)
    ax.set_ylim(center[1] - radius, center[1] + radius)
    ax.set_zlim(center[2] - radius, center[2] + radius)
    ax.set_box_aspect((1, 1, 1))
    ax.set_facecolor(options.background)
    ax.grid(options.show_grid)
    if options.show_axes:
        ax.set_xlabel("X (chord)")
        ax.set_ylabel("Z (span)")
        ax.set_zlabel("Y")
    else:
        ax.set_axis_off()
    return collections[0]

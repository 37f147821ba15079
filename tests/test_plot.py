import os
import tempfile

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from geometry import CrossSection
from mesher import SpanMorphParameters, WingState
from view import SectionVisualizer, ViewOptions, plot_wing, shade_faces


def _small_state() -> WingState:
    return WingState(sample_count=20, params=SpanMorphParameters(slice_count=4, dihedral_angle=0.2))


def test_shade_faces():
    mesh = _small_state().mesh
    colors = shade_faces(mesh, "#ffffff", (0.0, 1.0, 0.0))
    assert colors.shape == (mesh.triangle_count, 4)
    assert np.all(colors[:, :3] >= 0.35 - 1e-12)
    assert np.all(colors[:, :3] <= 1.0 + 1e-12)
    np.testing.assert_allclose(colors[:, 3], 1.0)
    # the tip cap faces +z, perpendicular to the light
    np.testing.assert_allclose(colors[-1, :3], 0.35, atol=0.05)


def test_plot_wing_with_mirror():
    mesh = _small_state().mesh
    fig = plt.figure()
    ax = fig.add_subplot(projection="3d")
    collection = plot_wing(ax, mesh, ViewOptions(mirror=True, show_axes=False))
    assert collection is not None
    assert len(ax.collections) == 2
    plt.close(fig)


def test_section_visualizer_saves_figure():
    visualizer = SectionVisualizer(figsize=(4, 3), dpi=50)
    section = CrossSection.from_designation("2412", 1.0, 40)
    visualizer.add_section(section, label="NACA 2412", show_points=True, show_normals=True)
    visualizer.add_section(CrossSection.from_designation("0012", 1.0, 40), fill=False)
    with tempfile.TemporaryDirectory() as directory:
        path = os.path.join(directory, "sections.png")
        visualizer.plot(save_path=path, show_plot=False)
        assert os.path.getsize(path) > 0
    plt.close("all")


def test_section_comparison():
    visualizer = SectionVisualizer(figsize=(4, 3), dpi=50)
    sections = [CrossSection.from_designation(code, 1.0, 30) for code in ("0012", "23012")]
    visualizer.plot_comparison(sections, labels=["0012"], show_plot=False)
    assert len(visualizer.sections) == 2
    assert visualizer.sections[1]['label'] == "Section 2"
    plt.close("all")

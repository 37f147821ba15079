from .section_visualizer import SectionVisualizer
from .settings import ViewOptions, WingSettings
from .wing_plot import plot_wing, shade_faces

__all__ = [
    "SectionVisualizer",
    "ViewOptions",
    "WingSettings",
    "plot_wing",
    "shade_faces",
]

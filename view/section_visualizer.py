import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from typing import List, Optional, Tuple, Dict, Any
from geometry import CrossSection

class SectionVisualizer:
    """
    Plots one or more section contours on a shared 2D axis.
    """

    def __init__(self, figsize: Tuple[float, float] = (12, 8), dpi: int = 100):
        """
        @param figsize: Figure size as (width, height) in inches
        @param dpi: Figure DPI for resolution
        """
        self.figsize = figsize
        self.dpi = dpi
        self.fig: Optional[Figure] = None
        self.ax: Optional[Axes] = None
        self.sections: List[Dict[str, Any]] = []

    def add_section(
        self,
        section: CrossSection,
        label: Optional[str] = None,
        color: str = 'blue',
        alpha: float = 0.7,
        fill: bool = True,
        line_width: float = 2.0,
        line_style: str = '-',
        show_points: bool = False,
        point_size: float = 3.0,
        show_normals: bool = False,
        normal_scale: float = 0.05,
        normal_color: str = 'red'
    ) -> None:
        """
        Add a section to the plot.

        @param section: The CrossSection to draw
        @param label: Legend label
        @param color: Color of outline and fill
        @param alpha: Transparency level (0.0 to 1.0)
        @param fill: Whether to fill the contour
        @param line_width: Width of the outline
        @param line_style: Style of the outline ('-', '--', '-.', ':')
        @param show_points: Whether to mark the sample points
        @param point_size: Size of the points
        @param show_normals: Whether to draw the outward panel normals
        @param normal_scale: Length of the drawn normals
        @param normal_color: Color of the normals
        """
        self.sections.append({
            'section': section,
            'label': label,
            'color': color,
            'alpha': alpha,
            'fill': fill,
            'line_width': line_width,
            'line_style': line_style,
            'show_points': show_points,
            'point_size': point_size,
            'show_normals': show_normals,
            'normal_scale': normal_scale,
            'normal_color': normal_color
        })

    def clear_sections(self) -> None:
        self.sections.clear()

    def _setup_figure(self) -> None:
        if self.fig is None:
            self.fig, self.ax = plt.subplots(figsize=self.figsize, dpi=self.dpi)
        elif self.ax is not None:
            self.ax.clear()
        assert self.ax is not None
        self.ax.set_aspect('equal')
        self.ax.grid(True, alpha=0.3)
        self.ax.set_xlabel('X Coordinate')
        self.ax.set_ylabel('Y Coordinate')
        self.ax.set_title('Section Visualization')

    def _plot_outline(self, config: Dict[str, Any]) -> None:
        assert self.ax is not None
        points = config['section'].points
        if config['fill']:
            self.ax.add_patch(patches.Polygon(
                points,
                closed=True,
                facecolor=config['color'],
                alpha=config['alpha'],
                edgecolor=config['color'],
                linewidth=config['line_width'],
                linestyle=config['line_style'],
                label=config['label']
            ))
        else:
            closed_points = np.vstack([points, points[0]])
            self.ax.plot(
                closed_points[:, 0],
                closed_points[:, 1],
                color=config['color'],
                linewidth=config['line_width'],
                linestyle=config['line_style'],
                alpha=config['alpha'],
                label=config['label']
            )

    def _plot_points(self, config: Dict[str, Any]) -> None:
        if not config['show_points']:
            return
        assert self.ax is not None
        points = config['section'].points
        self.ax.scatter(
            points[:, 0],
            points[:, 1],
            s=config['point_size']**2,
            c=config['color'],
            alpha=config['alpha'],
            zorder=10
        )

    def _plot_normals(self, config: Dict[str, Any]) -> None:
        if not config['show_normals']:
            return
        assert self.ax is not None
        section = config['section']
        midpoints = section.midpoint
        normals = section.norm * config['normal_scale']
        self.ax.quiver(
            midpoints[:, 0], midpoints[:, 1],
            normals[:, 0], normals[:, 1],
            color=config['normal_color'],
            angles='xy', scale_units='xy', scale=1.0,
            alpha=0.7,
            zorder=5
        )

    def _add_edge_markers(self, config: Dict[str, Any]) -> None:
        assert self.ax is not None
        section = config['section']
        points = section.points
        self.ax.scatter(
            points[0, 0], points[0, 1],
            s=50, c='green', marker='o',
            alpha=0.9, zorder=15,
            edgecolors='darkgreen', linewidth=2
        )
        tail = points[section.tail_index]
        self.ax.scatter(
            tail[0], tail[1],
            s=50, c='red', marker='s',
            alpha=0.9, zorder=15,
            edgecolors='darkred', linewidth=2
        )

    def plot(
        self,
        show_legend: bool = True,
        show_edges: bool = True,
        title: Optional[str] = None,
        save_path: Optional[str] = None,
        show_plot: bool = True
    ) -> None:
        """
        Plot all added sections.

        @param show_legend: Whether to show the legend
        @param show_edges: Whether to mark leading and trailing edges
        @param title: Custom title for the plot
        @param save_path: Path to save the figure (optional)
        @param show_plot: Whether to display the plot
        """
        if not self.sections:
            print("No sections to plot. Add sections using add_section() first.")
            return

        self._setup_figure()
        assert self.ax is not None
        for config in self.sections:
            self._plot_outline(config)
            self._plot_points(config)
            self._plot_normals(config)
            if show_edges:
                self._add_edge_markers(config)
        self.ax.autoscale_view()
        if title:
            self.ax.set_title(title)
        if show_legend and any(config['label'] for config in self.sections):
            self.ax.legend()

        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight')
            print(f"Plot saved to: {save_path}")
        if show_plot:
            plt.show()

    def plot_comparison(
        self,
        sections: List[CrossSection],
        labels: Optional[List[str]] = None,
        colors: Optional[List[str]] = None,
        title: str = "Section Comparison",
        save_path: Optional[str] = None,
        show_plot: bool = True
    ) -> None:
        """
        Convenience method to overlay several sections.

        @param sections: Sections to compare
        @param labels: Label of each section
        @param colors: Colors, cycled
        @param title: Plot title
        @param save_path: Path to save the figure
        @param show_plot: Whether to display the plot
        """
        if colors is None:
            colors = ['blue', 'red', 'green', 'orange', 'purple', 'brown', 'pink', 'gray']
        if labels is None:
            labels = [f'Section {i+1}' for i in range(len(sections))]
        self.clear_sections()
        for i, section in enumerate(sections):
            self.add_section(
                section=section,
                label=labels[i] if i < len(labels) else f'Section {i+1}',
                color=colors[i % len(colors)],
                alpha=0.4,
                fill=True,
                line_width=1.5
            )
        self.plot(title=title, save_path=save_path, show_plot=show_plot)

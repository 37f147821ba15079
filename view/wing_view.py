import numpy as np

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import (
    QWidget, QHBoxLayout, QVBoxLayout, QFormLayout, QLineEdit,
    QDoubleSpinBox, QSpinBox, QPushButton, QLabel
)
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

from mesher import WingState
from .settings import ViewOptions, WingSettings
from .wing_plot import plot_wing


class WingView(QWidget):
    """
    Wing viewer: parameter controls on the left, shaded 3D mesh on the right.

    The widget owns exactly one WingState. Every edit builds a new state from the current one,
    so morph settings survive a change of designation or resolution.
    """
    _state: WingState
    _options: ViewOptions
    _defaults: WingSettings
    _timer: QTimer

    def __init__(
        self,
        settings: WingSettings | None = None,
        options: ViewOptions | None = None,
        width: int = 1200,
        height: int = 800,
        debounce_ms: int = 200,
        parent: QWidget | None = None
    ) -> None:
        """
        @param settings: Initial inputs, WingSettings() (environment) if omitted.
        @param options: Display switches.
        @param width: Window width in pixels.
        @param height: Window height in pixels.
        @param debounce_ms: Delay between the last edit and the rebuild.
        """
        super().__init__(parent)
        self._defaults = settings if settings is not None else WingSettings()
        self._options = options if options is not None else ViewOptions()
        self._state = self._defaults.build_state()

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(debounce_ms)
        self._timer.timeout.connect(self.apply)

        self._figure = Figure(facecolor=self._options.background)
        self._canvas = FigureCanvasQTAgg(self._figure)
        self._ax = self._figure.add_subplot(projection="3d")
        self._info = QLabel()

        controls = QFormLayout()
        self._naca = QLineEdit(self._defaults.naca)
        self._chord = self._double_box(0.001, 100.0, 0.01, self._defaults.chord)
        self._points = self._int_box(10, 2000, self._defaults.points)
        self._depth = self._double_box(0.001, 100.0, 0.01, self._defaults.depth)
        self._scale = self._double_box(0.01, 100.0, 0.1, self._defaults.scale)
        self._start = self._int_box(0, 100, round(self._defaults.start_percent * 100))
        self._factor = self._double_box(0.01, 3.0, 0.01, self._defaults.thickness_factor)
        self._slices = self._int_box(2, 200, self._defaults.slices)
        self._shift = self._double_box(-5.0, 5.0, 0.01, self._defaults.shift_amount)
        self._dihedral = self._double_box(-89.0, 89.0, 1.0, self._defaults.dihedral_deg)
        controls.addRow("NACA (4 or 5 digit)", self._naca)
        controls.addRow("Chord", self._chord)
        controls.addRow("Points", self._points)
        controls.addRow("Depth", self._depth)
        controls.addRow("Scale", self._scale)
        controls.addRow("Morph start (%) (0=root, 100=tip)", self._start)
        controls.addRow("Thickness factor (1 = original)", self._factor)
        controls.addRow("Slices", self._slices)
        controls.addRow("Shift (X, chord units)", self._shift)
        controls.addRow("Dihedral (deg)", self._dihedral)
        self._naca.textChanged.connect(self._schedule)
        for box in (self._chord, self._points, self._depth, self._scale, self._start,
                    self._factor, self._slices, self._shift, self._dihedral):
            box.valueChanged.connect(self._schedule)

        apply_button = QPushButton("Apply")
        apply_button.clicked.connect(self.apply)
        reset_button = QPushButton("Reset morph")
        reset_button.clicked.connect(self.reset_morph)

        panel = QVBoxLayout()
        panel.addLayout(controls)
        panel.addWidget(apply_button)
        panel.addWidget(reset_button)
        panel.addWidget(self._info)
        panel.addStretch(1)

        layout = QHBoxLayout(self)
        layout.addLayout(panel)
        layout.addWidget(self._canvas, stretch=1)
        self.resize(width, height)
        self.setWindowTitle("NACA wing")
        self._redraw()

    @staticmethod
    def _double_box(lower: float, upper: float, step: float, value: float) -> QDoubleSpinBox:
        box = QDoubleSpinBox()
        box.setRange(lower, upper)
        box.setSingleStep(step)
        box.setDecimals(3)
        box.setValue(value)
        return box

    @staticmethod
    def _int_box(lower: int, upper: int, value: int) -> QSpinBox:
        box = QSpinBox()
        box.setRange(lower, upper)
        box.setValue(value)
        return box

    @property
    def state(self) -> WingState:
        return self._state

    def _schedule(self, *_) -> None:
        self._timer.start()

    def _read_settings(self) -> WingSettings:
        return WingSettings(
            naca=self._naca.text(),
            chord=self._chord.value(),
            points=self._points.value(),
            depth=self._depth.value(),
            scale=self._scale.value(),
            start_percent=self._start.value() / 100,
            thickness_factor=self._factor.value(),
            slices=self._slices.value(),
            shift_amount=self._shift.value(),
            dihedral_deg=self._dihedral.value(),
        )

    def apply(self) -> None:
        """Rebuild the wing from the controls."""
        settings = self._read_settings()
        self._state = self._state.with_params(
            designation=settings.naca,
            chord=settings.chord,
            sample_count=settings.points,
            depth=settings.depth,
            scale=settings.scale,
            params=settings.morph_parameters(),
        )
        self._redraw()

    def reset_morph(self) -> None:
        """Restore the morph controls to their initial values and rebuild."""
        for box, value in (
            (self._start, round(self._defaults.start_percent * 100)),
            (self._factor, self._defaults.thickness_factor),
            (self._slices, self._defaults.slices),
            (self._shift, self._defaults.shift_amount),
            (self._dihedral, self._defaults.dihedral_deg),
        ):
            box.blockSignals(True)
            box.setValue(value)
            box.blockSignals(False)
        self.apply()

    def _redraw(self) -> None:
        self._ax.clear()
        plot_wing(self._ax, self._state.mesh, self._options)
        mesh = self._state.mesh
        params = self._state.params
        self._info.setText(
            f"NACA {self._state.designation}\n"
            f"{mesh.vertex_count} vertices, {mesh.triangle_count} triangles\n"
            f"volume {mesh.volume:.4f}\n"
            f"dihedral {np.degrees(params.dihedral_angle):.1f} deg"
        )
        self._canvas.draw_idle()

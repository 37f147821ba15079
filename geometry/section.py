import numpy as np
import numpy.typing as npt

from typing import cast

from .utils import generate_cross_section

CLOSING_TOLERANCE = 1e-9


class CrossSection:
    """
    A closed 2D section contour, as produced by the NACA generators.

    Points Array (`points`):
    - Order: upper surface from leading edge to trailing edge, then lower surface back to the leading edge.
      For a positive thickness this is a clockwise traversal.
    - Leading edge: points[0].
    - Trailing edge: Stored at index `tail_index` (farthest point from the leading edge).
    - Closure: a last point that coincides with points[0] (within 1e-9 on both coordinates) is dropped,
      closure between the last and the first point is implicit.

    Key Properties:
    1. `panel`: panel[i] = points[(i+1) % n] - points[i]
    2. `norm`: Outward unit normal of each panel, whatever the traversal direction
    3. `length`: Length of each panel
    4. `midpoint`: Midpoint of each panel
    5. `signed_area`: Shoelace area, negative for a clockwise contour
    6. `area`: Enclosed area
    7. `center`: Panel midpoints averaged with panel lengths as weights
    8. `chord`: Distance between the leading edge and the trailing edge

    Points are never modified after construction.
    """
    _norm_buffer: npt.NDArray[np.float64] | None = None
    _panel_buffer: npt.NDArray[np.float64] | None = None
    _length_buffer: npt.NDArray[np.float64] | None = None
    _mid_point_buffer: npt.NDArray[np.float64] | None = None
    _center_buffer: tuple[float, float] | None = None
    _tail_index: int
    _chord_length: float
    points: npt.NDArray[np.float64]

    @classmethod
    def from_designation(
        cls,
        designation: int | str,
        chord: float = 1.0,
        sample_count: int = 200
    ) -> "CrossSection":
        """
        Generates the section of a NACA 4-digit or 5-digit designation.

        @param designation: The NACA code, e.g. "2412" or "23012".
        @param chord: The chord length.
        @param sample_count: The number of intervals per surface.
        """
        return cls(generate_cross_section(designation, chord, sample_count))

    def __init__(self, points: npt.NDArray[np.float64]):
        """
        @param points: A 2D array of shape (n, 2), leading edge first.
        """
        points = np.array(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError("Points must be a 2D array with shape (n, 2).")
        if len(points) > 1 and np.all(np.abs(points[-1] - points[0]) < CLOSING_TOLERANCE):
            points = points[:-1]
        if len(points) < 3:
            raise ValueError("At least 3 points are required to form a section.")
        points.setflags(write=False)
        self.points = points
        lengths = np.linalg.norm(self.points - self.points[0], axis=1)
        self._tail_index = int(np.argmax(lengths))
        self._chord_length = float(lengths[self._tail_index])

    def __len__(self) -> int:
        return len(self.points)

    @property
    def signed_area(self) -> float:
        x = self.points[:, 0]
        y = self.points[:, 1]
        return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))

    @property
    def area(self) -> float:
        return abs(self.signed_area)

    @property
    def is_counter_clockwise(self) -> bool:
        return self.signed_area > 0

    @property
    def panel(self) -> npt.NDArray[np.float64]:
        """
        Returns the panel vectors of the section, a n * 2 array.
        """
        if self._panel_buffer is None:
            self._panel_buffer = np.roll(self.points, -1, axis=0) - self.points
        return self._panel_buffer

    @property
    def length(self) -> npt.NDArray[np.float64]:
        """
        Returns the lengths of the panels.
        """
        if self._length_buffer is None:
            self._length_buffer = cast(npt.NDArray[np.float64], np.linalg.norm(self.panel, axis=1))
        return self._length_buffer

    @property
    def norm(self) -> npt.NDArray[np.float64]:
        """
        Returns the unit normal vectors of the panels, pointed outward.
        Zero-length panels get a zero normal.
        """
        if self._norm_buffer is None:
            panel = self.panel
            # (dy, -dx) is the outward side of a counter-clockwise contour
            sign = 1.0 if self.is_counter_clockwise else -1.0
            normal = sign * np.column_stack((panel[:, 1], -panel[:, 0]))
            lengths = self.length
            safe = np.where(lengths > 0, lengths, 1.0)
            self._norm_buffer = np.where(lengths[:, np.newaxis] > 0, normal / safe[:, np.newaxis], 0.0)
        return self._norm_buffer

    @property
    def midpoint(self) -> npt.NDArray[np.float64]:
        """
        Returns the mid-point of each panel.
        """
        if self._mid_point_buffer is None:
            self._mid_point_buffer = (self.points + np.roll(self.points, -1, axis=0)) / 2
        return self._mid_point_buffer

    @property
    def chord(self) -> float:
        return self._chord_length

    @property
    def tail_index(self) -> int:
        """
        Returns the index of the tail point (the farthest point from the leading edge).
        """
        return self._tail_index

    @property
    def center(self) -> tuple[float, float]:
        """
        Returns the center point of the contour.

        center = Σ(midpoint[i] * length[i]) / Σ(length[i])
        """
        if self._center_buffer is None:
            lengths = self.length
            weighted_sum = np.sum(self.midpoint * lengths[:, np.newaxis], axis=0)
            center_coords = weighted_sum / np.sum(lengths)
            self._center_buffer = (float(center_coords[0]), float(center_coords[1]))
        return self._center_buffer

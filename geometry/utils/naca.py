import numpy as np
import numpy.typing as npt
from scipy.integrate import quad

from collections.abc import Callable
from warnings import warn

from .designation import NacaDesignation

THICKNESS_COEFFICIENTS = (0.2969, -0.1260, -0.3516, 0.2843, -0.1015)

# key = 5 * position code: (r, k1) at the reference lift coefficient
FIVE_DIGIT_STANDARD: dict[int, tuple[float, float]] = {
    5: (0.10, 0.0580),
    10: (0.20, 0.1260),
    15: (0.30, 0.2025),
    20: (0.40, 0.2900),
    25: (0.50, 0.3910),
}
# key = 5 * position code: (r, k1, k2 / k1)
FIVE_DIGIT_REFLEX: dict[int, tuple[float, float, float]] = {
    10: (0.20, 0.1300, 0.000764),
    15: (0.30, 0.2170, 0.00677),
    20: (0.40, 0.3180, 0.0303),
    25: (0.50, 0.4410, 0.1355),
}
FIVE_DIGIT_DEFAULT_KEY = 15
FIVE_DIGIT_REFERENCE_LIFT = 0.3


def cosine_spacing(n: int) -> npt.NDArray[np.float64]:
    """
    Normalised chordwise stations x/c = (1 - cos(beta)) / 2, beta = i / n * pi, i = 0..n.
    Points are concentrated near the leading and the trailing edge.
    """
    beta = np.arange(n + 1, dtype=np.float64) / n * np.pi
    return (1.0 - np.cos(beta)) / 2.0


def thickness_distribution(x_c: npt.NDArray[np.float64], t: float) -> npt.NDArray[np.float64]:
    """
    Half thickness of the NACA 4-digit family, normalised by chord.

    $$
        y_{t} = \\frac{t}{0.2} \\left( 0.2969 \\sqrt{x} - 0.1260 x - 0.3516 x^{2} + 0.2843 x^{3} - 0.1015 x^{4} \\right)
    $$
    """
    a0, a1, a2, a3, a4 = THICKNESS_COEFFICIENTS
    return (t / 0.2) * (a0 * np.sqrt(x_c) + a1 * x_c + a2 * x_c**2 + a3 * x_c**3 + a4 * x_c**4)


def camber_line_4_digit(
        x_c: npt.NDArray[np.float64],
        m: float,
        p: float
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Mean camber line and its slope, normalised by chord.

    $$
        y_{c} =
        \\begin{cases}
            \\frac{m}{p^{2}} \\left( 2 p x - x^{2} \\right), \\quad x \\lt p
            \\\\ \\frac{m}{\\left( 1 - p \\right)^{2}} \\left[ \\left( 1 - 2 p \\right) + 2 p x - x^{2} \\right], \\quad x \\ge p
        \\end{cases}
    $$

    A zero camber position gives a symmetric section whatever `m` is.
    """
    y_c = np.zeros_like(x_c)
    dy_c = np.zeros_like(x_c)
    if p == 0:
        return y_c, dy_c
    fore = x_c < p
    aft = ~fore
    y_c[fore] = (m / p**2) * (2 * p * x_c[fore] - x_c[fore]**2)
    dy_c[fore] = (2 * m / p**2) * (p - x_c[fore])
    y_c[aft] = (m / (1 - p)**2) * ((1 - 2 * p) + 2 * p * x_c[aft] - x_c[aft]**2)
    dy_c[aft] = (2 * m / (1 - p)**2) * (p - x_c[aft])
    return y_c, dy_c


def camber_line_5_digit(
        x_c: npt.NDArray[np.float64],
        r: float,
        k1: float,
        k2: float = 0.0
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Piecewise cubic camber line of the 5-digit family, normalised by chord.
    `k2` is the reflex coefficient and is zero for a normal camber line.
    """
    fore = x_c < r
    aft = ~fore
    tail = 1 - x_c
    y_c = (k2 / 6) * tail**3
    dy_c = -(k2 / 2) * tail**2
    x = x_c[fore]
    y_c[fore] += (k1 / 6) * (x**3 - 3 * r * x**2 + r**2 * (3 - r) * x)
    dy_c[fore] += (k1 / 6) * (3 * x**2 - 6 * r * x + r**2 * (3 - r))
    y_c[aft] += (k1 / 6) * r**3 * tail[aft]
    dy_c[aft] += -(k1 / 6) * r**3
    return y_c, dy_c


def five_digit_coefficients(designation: NacaDesignation) -> tuple[float, float, float]:
    """
    Look up (r, k1, k2) for a 5-digit designation.

    k1 is scaled linearly from the table's reference lift coefficient of 0.3 to the design lift
    coefficient. Position codes without a table entry fall back to the entry for key 15,
    no interpolation is done.
    """
    key = designation.position_code * 5
    table: dict[int, tuple[float, ...]] = dict(FIVE_DIGIT_REFLEX if designation.reflex else FIVE_DIGIT_STANDARD)
    if key not in table:
        warn(f"NACA {designation}: no camber table entry for key {key}, using key {FIVE_DIGIT_DEFAULT_KEY}")
        key = FIVE_DIGIT_DEFAULT_KEY
    entry = table[key]
    scale = max(0.0, designation.design_lift / FIVE_DIGIT_REFERENCE_LIFT)
    r = entry[0]
    k1 = entry[1] * scale
    k2 = k1 * entry[2] if designation.reflex else 0.0
    return r, k1, k2


def _assemble_section(
        x_c: npt.NDArray[np.float64],
        y_t: npt.NDArray[np.float64],
        y_c: npt.NDArray[np.float64],
        dy_c: npt.NDArray[np.float64],
        chord: float
    ) -> npt.NDArray[np.float64]:
    """
    Offset the thickness perpendicular to the camber line and order the contour:
    upper surface LE -> TE, then lower surface TE -> LE, centred on the mid chord.
    """
    x = x_c * chord
    y_t = y_t * chord
    y_c = y_c * chord
    theta = np.arctan(dy_c)
    sin_theta = np.sin(theta)
    cos_theta = np.cos(theta)
    upper = np.column_stack((x - y_t * sin_theta, y_c + y_t * cos_theta))
    lower = np.column_stack((x + y_t * sin_theta, y_c - y_t * cos_theta))
    points = np.concatenate((upper, lower[::-1]), axis=0)
    points[:, 0] -= chord / 2
    return points


def generate_4_digit(code: int | str, chord: float = 1.0, sample_count: int = 200) -> npt.NDArray[np.float64]:
    """
    Closed contour of a NACA 4-digit section.

    @param code: Designation, zero-padded/truncated to 4 characters.
    @param chord: Chord length, must be positive (not checked).
    @param sample_count: n, the number of intervals per surface. Each surface gets n + 1 points.
    @return: Array of shape (2 (n + 1), 2).
    """
    return _section_4_digit(NacaDesignation.parse(code, family=4), chord, sample_count)


def generate_5_digit(code: int | str, chord: float = 1.0, sample_count: int = 200) -> npt.NDArray[np.float64]:
    """
    Closed contour of a NACA 5-digit section.

    The camber line coefficients come from a small lookup table (see `five_digit_coefficients`),
    which approximates the closed-form 5-digit theory. Thickness, point order and centring are the same
    as for `generate_4_digit`.
    """
    return _section_5_digit(NacaDesignation.parse(code, family=5), chord, sample_count)


def generate_cross_section(designation: int | str, chord: float = 1.0, sample_count: int = 200) -> npt.NDArray[np.float64]:
    """
    Dispatch on the number of digits: 5 digits use the 5-digit family, everything else the 4-digit family.
    """
    parsed = NacaDesignation.parse(designation)
    if parsed.family == 5:
        return _section_5_digit(parsed, chord, sample_count)
    return _section_4_digit(parsed, chord, sample_count)


def _section_4_digit(designation: NacaDesignation, chord: float, sample_count: int) -> npt.NDArray[np.float64]:
    x_c = cosine_spacing(sample_count)
    y_t = thickness_distribution(x_c, designation.thickness)
    y_c, dy_c = camber_line_4_digit(x_c, designation.max_camber, designation.camber_position)
    return _assemble_section(x_c, y_t, y_c, dy_c, chord)


def _section_5_digit(designation: NacaDesignation, chord: float, sample_count: int) -> npt.NDArray[np.float64]:
    r, k1, k2 = five_digit_coefficients(designation)
    x_c = cosine_spacing(sample_count)
    y_t = thickness_distribution(x_c, designation.thickness)
    y_c, dy_c = camber_line_5_digit(x_c, r, k1, k2)
    return _assemble_section(x_c, y_t, y_c, dy_c, chord)


def naca_4_digit_f(
        c: float = 1.0,
        m: float = 0.02,
        p: float = 0.4,
        t: float = 0.12
    ) -> tuple[Callable[[npt.NDArray[np.float64]], npt.NDArray[np.float64]], ...]:
    """
    Surface functions of a NACA 4-digit section for continuous sampling.

    Both returned functions map normalised x in [0, 1] to points of shape (n, 2) in chord units,
    leading edge at the origin:

    $$
        upper = c \\begin{pmatrix} x - y_{t} \\sin \\theta \\\\ y_{c} + y_{t} \\cos \\theta \\end{pmatrix},
        \\quad
        lower = c \\begin{pmatrix} x + y_{t} \\sin \\theta \\\\ y_{c} - y_{t} \\cos \\theta \\end{pmatrix}
    $$
    """
    def surface(x_array: npt.NDArray[np.float64], sign: float) -> npt.NDArray[np.float64]:
        x_array = np.atleast_1d(np.asarray(x_array, dtype=np.float64))
        y_t = thickness_distribution(x_array, t)
        y_c, dy_c = camber_line_4_digit(x_array, m, p)
        theta = np.arctan(dy_c)
        x_surface = x_array - sign * y_t * np.sin(theta)
        y_surface = y_c + sign * y_t * np.cos(theta)
        return np.column_stack((x_surface, y_surface)) * c

    def upper_surface(x_array: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        return surface(x_array, 1.0)

    def lower_surface(x_array: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        return surface(x_array, -1.0)

    return upper_surface, lower_surface


def thickness_area(t: float, chord: float = 1.0) -> float:
    """
    Area enclosed by the thickness envelope, integral of 2 y_t over the chord.
    Offsetting along the camber normal changes this only to second order in the camber slope.
    """
    area, _ = quad(
        lambda x_c: 2 * float(thickness_distribution(np.asarray(x_c), t)),
        0.0, 1.0,
        limit=200
    )
    return area * chord**2

import warnings

def format_warning(message, category, filename, lineno, file=None, line=None):
    return f"{filename}:{lineno}: {category.__name__}: {message}\n"

warnings.formatwarning = format_warning

del warnings
del format_warning

from .designation import NacaDesignation
from .naca import (
    cosine_spacing,
    thickness_distribution,
    camber_line_4_digit,
    camber_line_5_digit,
    five_digit_coefficients,
    generate_4_digit,
    generate_5_digit,
    generate_cross_section,
    naca_4_digit_f,
    thickness_area,
)

__all__ = [
    "NacaDesignation",
    "cosine_spacing",
    "thickness_distribution",
    "camber_line_4_digit",
    "camber_line_5_digit",
    "five_digit_coefficients",
    "generate_4_digit",
    "generate_5_digit",
    "generate_cross_section",
    "naca_4_digit_f",
    "thickness_area",
]

from .section import CrossSection
from .utils import (
    NacaDesignation,
    generate_4_digit,
    generate_5_digit,
    generate_cross_section,
)

__all__ = [
    "CrossSection",
    "NacaDesignation",
    "generate_4_digit",
    "generate_5_digit",
    "generate_cross_section",
]

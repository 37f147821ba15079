import numpy as np
import numpy.typing as npt

from dataclasses import dataclass, field, fields, replace
from typing import Any

from geometry import NacaDesignation, generate_cross_section
from .loft import SpanMorphParameters, WingSolidMesh, build_lofted_solid

_MORPH_FIELDS = frozenset(f.name for f in fields(SpanMorphParameters))


@dataclass(frozen=True, eq=False)
class WingState:
    """
    Everything needed to redraw a wing: the generating inputs plus the section and mesh built from them.

    A state is never modified. `with_params` returns a new state built from scratch, so a viewer can keep
    the current morph settings while the designation or resolution changes.

    The span of the loft is `depth * scale`, and section coordinates are scaled by `scale`.
    """
    designation: str = "2412"
    chord: float = 1.0
    sample_count: int = 200
    depth: float = 3.0
    scale: float = 1.0
    params: SpanMorphParameters = field(default_factory=SpanMorphParameters)
    section: npt.NDArray[np.float64] = field(init=False, repr=False)
    mesh: WingSolidMesh = field(init=False, repr=False)

    def __post_init__(self) -> None:
        designation = str(NacaDesignation.parse(self.designation))
        section = generate_cross_section(designation, self.chord, self.sample_count)
        mesh = build_lofted_solid(section, self.span, self.params.clamped(), chord=self.chord, scale=self.scale)
        object.__setattr__(self, "designation", designation)
        object.__setattr__(self, "section", section)
        object.__setattr__(self, "mesh", mesh)

    @property
    def span(self) -> float:
        return self.depth * self.scale

    def with_params(self, **changes: Any) -> "WingState":
        """
        Returns a rebuilt state. Keyword arguments may name WingState inputs
        (designation, chord, sample_count, depth, scale, params) or SpanMorphParameters fields.
        """
        morph = {key: changes.pop(key) for key in list(changes) if key in _MORPH_FIELDS}
        unknown = set(changes) - {"designation", "chord", "sample_count", "depth", "scale", "params"}
        if unknown:
            raise TypeError(f"Unknown wing parameters: {sorted(unknown)}")
        params = changes.pop("params", self.params)
        if morph:
            params = replace(params, **morph)
        return replace(self, params=params, **changes)

import os

import numpy as np
import pytest

from view import ViewOptions, WingSettings


def test_default_settings():
    settings = WingSettings()
    assert settings.naca == "2412"
    assert settings.points == 200
    assert settings.slices == 40
    assert settings.span == pytest.approx(9.0)
    assert not ViewOptions().mirror


def test_settings_are_clamped():
    settings = WingSettings(
        chord=0.0,
        points=5,
        depth=-1.0,
        scale=0.0,
        start_percent=1.5,
        thickness_factor=-2.0,
        slices=500,
        shift_amount=-9.0,
        dihedral_deg=90.0,
    )
    assert settings.chord == 0.001
    assert settings.points == 10
    assert settings.depth == 0.001
    assert settings.scale == 0.01
    assert settings.start_percent == 1.0
    assert settings.thickness_factor == 0.01
    assert settings.slices == 200
    assert settings.shift_amount == -5.0
    assert settings.dihedral_deg == 89.0


def test_naca_input_is_normalised():
    assert WingSettings(naca="12").naca == "0012"
    assert WingSettings(naca="naca 23012").naca == "23012"
    assert WingSettings(naca="123456").naca == "99999"
    assert WingSettings(naca="").naca == "0000"
    assert WingSettings(naca="24²12").naca == "2412"


def test_settings_from_environment():
    os.environ["WING_NACA"] = "4415"
    os.environ["WING_SLICES"] = "1"
    try:
        settings = WingSettings()
    finally:
        del os.environ["WING_NACA"]
        del os.environ["WING_SLICES"]
    assert settings.naca == "4415"
    assert settings.slices == 2


def test_morph_parameters_use_radians():
    params = WingSettings(dihedral_deg=45.0, start_percent=0.25, slices=12).morph_parameters()
    assert params.dihedral_angle == pytest.approx(np.pi / 4)
    assert params.start_percent == 0.25
    assert params.slice_count == 12


def test_build_state():
    settings = WingSettings(naca="0012", points=20, slices=3, depth=2.0, scale=1.5)
    state = settings.build_state()
    assert state.designation == "0012"
    assert state.span == pytest.approx(3.0)
    assert state.mesh.vertex_count == 3 * 41 + 2
    assert state.mesh.vertices[:, 2].max() == pytest.approx(1.5)

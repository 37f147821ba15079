import numpy as np
import pytest

from geometry import CrossSection, generate_cross_section
from mesher import SpanMorphParameters, build_lofted_solid, extrude, morph_progress, morph_start


def _stations(mesh, slices, n):
    return mesh.vertices[:slices * n].reshape(slices, n, 3)


def test_loft_scenario_counts_and_scaling():
    section = generate_cross_section("0006", 1, 10)
    base = section[:-1]
    n = len(base)
    params = SpanMorphParameters(start_percent=0.5, thickness_factor=2, slice_count=4, shift_amount=0, dihedral_angle=0)
    mesh = build_lofted_solid(section, 3, params)

    assert n == 21
    assert mesh.vertex_count == 4 * n + 2
    assert len(mesh.indices) == 3 * (2 * n * 3 + 2 * n)
    assert len(mesh.normals) == len(mesh.positions)

    stations = _stations(mesh, 4, n)
    np.testing.assert_allclose(stations[:, 0, 2], [-1.5, -0.5, 0.5, 1.5])
    np.testing.assert_allclose(stations[0, :, :2], base)
    np.testing.assert_allclose(stations[1, :, :2], base)
    np.testing.assert_allclose(stations[2, :, :2], base * (1 + 1 / 3))
    np.testing.assert_allclose(stations[3, :, :2], base * 2)


def test_loft_without_morph_is_span_invariant():
    section = generate_cross_section("2412", 1.0, 30)
    base = section[:-1]
    params = SpanMorphParameters(start_percent=0.2, thickness_factor=1.0, slice_count=6)
    mesh = build_lofted_solid(section, 4.0, params, scale=2.0)
    stations = _stations(mesh, 6, len(base))
    for station in stations:
        np.testing.assert_allclose(station[:, :2], base * 2.0)


def test_morph_starting_at_tip_has_no_effect():
    section = generate_cross_section("2412", 1.0, 30)
    base = section[:-1]
    params = SpanMorphParameters(start_percent=1.0, thickness_factor=3.0, slice_count=5, shift_amount=1.0, dihedral_angle=0.3)
    mesh = build_lofted_solid(section, 2.0, params)
    stations = _stations(mesh, 5, len(base))
    for station in stations:
        np.testing.assert_allclose(station[:, :2], base)
    # the tip cap still shows the full shift
    np.testing.assert_allclose(mesh.vertices[-1], [1.0, 0.0, 1.0])


def test_morph_progress():
    z = np.linspace(-1.5, 1.5, 7)
    np.testing.assert_allclose(morph_progress(z, 3.0, 0.5), [0, 0, 0, 0, 1 / 3, 2 / 3, 1])
    np.testing.assert_allclose(morph_progress(z, 3.0, 1.0), np.zeros(7))
    np.testing.assert_allclose(morph_progress(z, 3.0, 1.7), np.zeros(7))
    np.testing.assert_allclose(morph_progress(z, 3.0, 0.0), [0, 1 / 6, 2 / 6, 3 / 6, 4 / 6, 5 / 6, 1])
    np.testing.assert_allclose(morph_progress(z, 3.0, -0.4), morph_progress(z, 3.0, 0.0))


def test_morph_start_is_clamped():
    assert morph_start(3.0, 0.5) == pytest.approx(0.0)
    assert morph_start(3.0, -0.4) == pytest.approx(-1.5)
    assert morph_start(3.0, 1.7) == pytest.approx(1.5)

    # the dihedral offset and the tip apex use the same clamped start as the progress
    section = generate_cross_section("0012", 1.0, 10)
    base = section[:-1]
    params = SpanMorphParameters(start_percent=-0.5, slice_count=3, dihedral_angle=np.pi / 4)
    mesh = build_lofted_solid(section, 2.0, params)
    stations = _stations(mesh, 3, len(base))
    np.testing.assert_allclose(stations[1, :, 1], base[:, 1] + 0.5)
    np.testing.assert_allclose(stations[2, :, 1], base[:, 1] + 2.0)
    np.testing.assert_allclose(mesh.vertices[-1], [0.0, 2.0, 1.0])


def test_shift_and_dihedral():
    section = generate_cross_section("0012", 1.0, 20)
    base = section[:-1]
    params = SpanMorphParameters(start_percent=0.0, thickness_factor=1.0, slice_count=3, shift_amount=0.5, dihedral_angle=np.pi / 4)
    mesh = build_lofted_solid(section, 2.0, params, chord=2.0)
    stations = _stations(mesh, 3, len(base))

    np.testing.assert_allclose(stations[0, :, :2], base)
    np.testing.assert_allclose(stations[1, :, 0], base[:, 0] + 0.5)
    np.testing.assert_allclose(stations[1, :, 1], base[:, 1] + 0.5)
    np.testing.assert_allclose(stations[2, :, 0], base[:, 0] + 1.0)
    np.testing.assert_allclose(stations[2, :, 1], base[:, 1] + 2.0)

    np.testing.assert_allclose(mesh.vertices[-2], [0.0, 0.0, -1.0])
    np.testing.assert_allclose(mesh.vertices[-1], [1.0, 2.0, 1.0])


def test_loft_is_closed_and_outward():
    section = CrossSection.from_designation("2412", 1.0, 40)
    params = SpanMorphParameters(start_percent=0.3, thickness_factor=0.5, slice_count=10, shift_amount=0.2, dihedral_angle=0.2)
    mesh = build_lofted_solid(section, 3.0, params)
    assert mesh.is_closed()
    assert mesh.volume > 0
    assert mesh.triangle_count == 2 * len(section) * 9 + 2 * len(section)
    np.testing.assert_allclose(np.linalg.norm(mesh.normals.reshape(-1, 3), axis=1), 1.0)


def test_extrusion_volume_and_cap_normals():
    section = CrossSection.from_designation("4415", 1.0, 60)
    mesh = extrude(section, 2.0)
    assert mesh.vertex_count == 2 * len(section) + 2
    assert mesh.volume == pytest.approx(section.area * 2.0, rel=1e-9)
    np.testing.assert_allclose(mesh.normals.reshape(-1, 3)[-2], [0.0, 0.0, -1.0], atol=1e-12)
    np.testing.assert_allclose(mesh.normals.reshape(-1, 3)[-1], [0.0, 0.0, 1.0], atol=1e-12)

    scaled = extrude(section, 2.0, scale=2.0)
    assert scaled.volume == pytest.approx(section.area * 4 * 2.0, rel=1e-9)


def test_slice_count_is_floored():
    section = generate_cross_section("0012", 1.0, 10)
    mesh = build_lofted_solid(section, 1.0, SpanMorphParameters(slice_count=7.9))
    assert mesh.vertex_count == 7 * 21 + 2


def test_loft_preconditions():
    section = generate_cross_section("0012", 1.0, 10)
    with pytest.warns(UserWarning, match="below 2"):
        mesh = build_lofted_solid(section, 1.0, SpanMorphParameters(slice_count=1))
    assert mesh.vertex_count == 2 * 21 + 2

    # a zero span is not rejected, the solid is flat
    flat = build_lofted_solid(section, 0.0, SpanMorphParameters(slice_count=3))
    assert flat.volume == pytest.approx(0.0, abs=1e-12)
    assert np.all(flat.vertices[:, 2] == 0.0)

    with pytest.raises(ValueError):
        build_lofted_solid(np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 0.0]]), 1.0, SpanMorphParameters())

    clamped = SpanMorphParameters(start_percent=1.5, slice_count=0.5).clamped()
    assert clamped.start_percent == 1.0
    assert clamped.slice_count == 2


def test_non_finite_angle_propagates():
    section = generate_cross_section("0012", 1.0, 10)
    mesh = build_lofted_solid(section, 1.0, SpanMorphParameters(start_percent=0.0, slice_count=3, dihedral_angle=np.nan))
    assert np.isnan(mesh.positions).any()


def test_mirrored_mesh():
    section = CrossSection.from_designation("2412", 1.0, 30)
    params = SpanMorphParameters(start_percent=0.5, thickness_factor=0.6, slice_count=8, shift_amount=0.4, dihedral_angle=0.1)
    mesh = build_lofted_solid(section, 3.0, params)
    mirror = mesh.mirrored()
    assert mirror.is_closed()
    assert mirror.volume == pytest.approx(mesh.volume)
    assert mirror.surface_area == pytest.approx(mesh.surface_area)
    np.testing.assert_allclose(mirror.vertices[:, 2], -mesh.vertices[:, 2])

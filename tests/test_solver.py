import numpy as np
import pandas as pd
import pytest

from gvf.solver import (DepthProfile, GVFSolver, GVFResult, runge_kutta_profile, run_no_lateral_flow,
                        run_case)
from gvf.parameters import RunParameters, FlowCategory
from gvf.boundary import ControlSection
from gvf.cross_section import CircularSection, RectangularSection, TrapezoidalSection
from gvf.hydraulics import FlowEquation
from gvf.bisection import NonConvergenceError


def pipe_parameters(discharge, **kwargs):
    settings = dict(cross_section=CircularSection(diameter=0.6),
                    equation=FlowEquation.MANNING,
                    roughness=0.013,
                    discharge=discharge,
                    bed_slope=0.001,
                    control_depth=0.3,
                    spatial_step=10.0,
                    n_steps=5,
                    direction='DN')
    settings.update(kwargs)
    return RunParameters(**settings)


def rectangle_parameters(direction, **kwargs):
    settings = dict(cross_section=RectangularSection(width=2.0),
                    equation=FlowEquation.MANNING,
                    roughness=0.015,
                    discharge=3.0,
                    bed_slope=0.001,
                    control_depth=1.5,
                    spatial_step=100.0,
                    n_steps=20,
                    direction=direction)
    settings.update(kwargs)
    return RunParameters(**settings)


def test_constant_slope_gives_linear_profile():
    k, dx, y0 = 0.002, 10.0, 1.0
    profile = runge_kutta_profile(lambda y: k, y0=y0, dx=dx, n_steps=5)

    assert len(profile) == 6
    assert profile[0] == (0.0, 1.0)
    for i in range(6):
        assert profile.distance[i] == pytest.approx(i * dx)
        assert profile.depth[i] == pytest.approx(y0 + i * k * dx, rel=1e-12)


def test_runge_kutta_stage_depths():
    # stages are evaluated at Y0, Y0 + A1 dx/2, Y0 + A2 dx/2 and Y0 + A3 dx
    stages = []

    def slope(y):
        stages.append(y)
        return y

    profile = runge_kutta_profile(slope, y0=1.0, dx=0.1, n_steps=1)

    A1 = 1.0
    A2 = 1.0 + 0.5 * A1 * 0.1
    A3 = 1.0 + 0.5 * A2 * 0.1
    A4 = 1.0 + A3 * 0.1
    assert stages == pytest.approx([A1, A2, A3, A4])
    assert profile.depth[1] == pytest.approx(1.0 + 0.1 / 6.0 * (A1 + 2 * A2 + 2 * A3 + A4))


def test_profile_starts_at_given_distance():
    profile = runge_kutta_profile(lambda y: 0.0, y0=1.0, dx=-10.0, n_steps=3, x0=250.0)

    assert profile.distance.tolist() == [250.0, 240.0, 230.0, 220.0]
    assert profile.depth.tolist() == [1.0, 1.0, 1.0, 1.0]


def test_control_section_chainage_offsets_distances(pipe_channel):
    solver = GVFSolver(channel=pipe_channel,
                       control_section=ControlSection(depth=0.3, direction='UP', chainage=1000.0),
                       discharge=0.1,
                       spatial_step=10.0,
                       n_steps=5)
    profile = solver.run(verbose=0).profile

    assert profile[0] == (1000.0, 0.3)
    assert profile.distance[-1] == pytest.approx(950.0)


def test_runge_kutta_requires_a_step():
    with pytest.raises(ValueError):
        runge_kutta_profile(lambda y: 0.0, y0=1.0, dx=1.0, n_steps=0)


def test_singular_slope_is_flagged():
    profile = runge_kutta_profile(lambda y: np.inf, y0=1.0, dx=10.0, n_steps=3)

    assert profile.singular_index == 1
    assert profile.depth[0] == 1.0
    assert not np.isfinite(profile.depth[1:]).any()

    result = GVFResult(critical_depth=0.5, normal_depth=0.8, profile=profile)
    assert result.is_singular


def test_depth_profile_presentation():
    profile = DepthProfile(distance=[0.0, -10.0], depth=[0.3, 0.25])

    assert profile.singular_index is None
    assert profile.depth_mm[0] == 300.0

    df = profile.to_dataframe()
    assert list(df.columns) == ["Distance (m)", "Depth (mm)"]
    assert df["Depth (mm)"].tolist() == pytest.approx([300.0, 250.0])


def test_depth_profile_length_mismatch():
    with pytest.raises(ValueError):
        DepthProfile(distance=[0.0, 1.0], depth=[0.3])


def test_directions_mirror_each_other():
    up = run_no_lateral_flow(rectangle_parameters('UP')).profile
    dn = run_no_lateral_flow(rectangle_parameters('DN')).profile

    assert len(up) == len(dn) == 21
    assert np.all(np.diff(up.distance) < 0)
    assert np.all(np.diff(dn.distance) > 0)
    assert np.array_equal(up.distance, -dn.distance)


def test_backwater_curve_upstream_approaches_normal_depth():
    result = run_no_lateral_flow(rectangle_parameters('UP'))
    depth = result.profile.depth

    assert result.critical_depth < result.normal_depth < 1.5
    assert np.all(np.isfinite(depth))
    assert np.all(np.diff(depth) < 0)
    assert depth[-1] > result.normal_depth - 0.01


def test_pipe_example_profile():
    result = run_no_lateral_flow(pipe_parameters(discharge=0.1))
    profile = result.profile

    assert len(profile) == 6
    distance, depth = profile[0]
    assert distance == 0.0
    assert profile.depth_mm[0] == pytest.approx(300.0)
    assert 0.0 < result.critical_depth < 0.6
    assert 0.0 < result.normal_depth < 0.6
    assert not result.is_singular
    assert np.all(np.diff(profile.depth) < 0)
    assert np.all(profile.depth > result.critical_depth)


def test_pipe_example_above_capacity_has_no_normal_depth():
    with pytest.raises(NonConvergenceError):
        run_no_lateral_flow(pipe_parameters(discharge=0.3))


def test_darcy_weisbach_trapezoid():
    params = RunParameters(cross_section=TrapezoidalSection(width=2.0, side_angle=45.0),
                           equation=FlowEquation.DARCY_WEISBACH,
                           roughness=0.0015,
                           discharge=2.5,
                           bed_slope=0.0005,
                           control_depth=1.2,
                           spatial_step=50.0,
                           n_steps=20,
                           direction='UP')
    result = run_no_lateral_flow(params)

    assert result.critical_depth < result.normal_depth < 1.2
    assert np.all(np.isfinite(result.profile.depth))
    assert np.all(np.diff(result.profile.depth) < 0)


def test_solver_verbose_output(capsys, pipe_channel):
    solver = GVFSolver(channel=pipe_channel,
                       control_section=ControlSection(depth=0.3, direction='DN'),
                       discharge=0.1,
                       spatial_step=10.0,
                       n_steps=2)
    solver.run(verbose=2)

    out = capsys.readouterr().out
    assert "Critical depth" in out
    assert "Normal depth" in out
    assert "Froude number at control section" in out
    assert "(subcritical)" in out
    assert "> x = 20.0 m" in out


def test_save_results(tmp_path, pipe_channel):
    solver = GVFSolver(channel=pipe_channel,
                       control_section=ControlSection(depth=0.3),
                       discharge=0.1,
                       spatial_step=10.0,
                       n_steps=5)

    with pytest.raises(RuntimeError):
        solver.save_results(str(tmp_path))

    solver.run(verbose=0)
    folder = tmp_path / "results"
    solver.save_results(str(folder))

    df = pd.read_csv(folder / "profile.csv")
    assert len(df) == 6
    assert df["Depth (mm)"].iloc[0] == pytest.approx(300.0)

    summary = (folder / "Data.txt").read_text()
    assert "Critical depth" in summary
    assert "Circular" in summary
    assert "Control section Froude number" in summary


@pytest.mark.parametrize("category", [FlowCategory.LATERAL_INFLOW, FlowCategory.LATERAL_OUTFLOW])
def test_lateral_flow_is_not_implemented(category):
    with pytest.raises(NotImplementedError):
        run_case(category, None)


def test_run_case_no_lateral_flow():
    result = run_case(FlowCategory.NO_LATERAL_FLOW, pipe_parameters(discharge=0.1))
    assert len(result.profile) == 6


@pytest.mark.parametrize("kwargs", [{'discharge': 0.0}, {'n_steps': 0}, {'n_steps': 1.5}])
def test_invalid_solver_arguments(pipe_channel, kwargs):
    settings = dict(channel=pipe_channel, control_section=ControlSection(depth=0.3),
                    discharge=0.1, spatial_step=10.0, n_steps=5)
    settings.update(kwargs)
    with pytest.raises(ValueError):
        GVFSolver(**settings)

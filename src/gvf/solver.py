import os
import numpy as np
import pandas as pd
from . import hydraulics
from .channel import Channel
from .boundary import ControlSection
from .parameters import FlowCategory, RunParameters
from .utility import create_directory_if_not_exists, m_to_mm

class DepthProfile:
    """
    Water-surface profile computed from a control section.

    Distances and depths are stored in metres; `depth_mm` and
    `to_dataframe()` present depths in millimetres.
    """
    def __init__(self, distance, depth):
        self.distance = np.asarray(distance, dtype=np.float64)
        self.depth = np.asarray(depth, dtype=np.float64)

        if self.distance.shape != self.depth.shape:
            raise ValueError("distance and depth must have the same length")

    def __len__(self):
        return self.distance.size

    def __getitem__(self, i):
        return float(self.distance[i]), float(self.depth[i])

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    @property
    def depth_mm(self) -> np.ndarray:
        return m_to_mm(self.depth)

    @property
    def singular_index(self):
        """Index of the first non-finite depth, or None.

        Non-finite depths appear when the profile runs into critical depth,
        where the GVF equation is singular.
        """
        bad = np.flatnonzero(~np.isfinite(self.depth))
        return int(bad[0]) if bad.size else None

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({"Distance (m)": self.distance, "Depth (mm)": self.depth_mm})

def runge_kutta_profile(slope, y0: float, dx: float, n_steps: int, x0: float = 0.0) -> DepthProfile:
    """
    Integrates dY/dx = slope(Y) with a fixed-step fourth order Runge-Kutta scheme.

    Parameters
    ----------
    slope : callable
        slope(Y) -> dY/dx.
    y0 : float
        Depth at the control section.
    dx : float
        Signed spatial step; negative when proceeding upstream.
    n_steps : int
        Number of steps.
    x0 : float
        Distance assigned to the control section.

    Returns
    -------
    DepthProfile
        n_steps + 1 entries starting at (x0, y0).

    """
    if n_steps < 1:
        raise ValueError("Number of steps must be at least 1.")

    distance = np.empty(n_steps + 1, dtype=np.float64)
    depth = np.empty(n_steps + 1, dtype=np.float64)
    depth[0] = Y0 = y0
    distance[0] = x = x0

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        for i in range(1, n_steps + 1):
            A1 = slope(Y0)
            A2 = slope(Y0 + 0.5 * A1 * dx)
            A3 = slope(Y0 + 0.5 * A2 * dx)
            A4 = slope(Y0 + A3 * dx)

            dY = (dx / 6.0) * (A1 + 2.0 * A2 + 2.0 * A3 + A4)
            Y0 = Y0 + dY
            x = x + dx

            distance[i] = x
            depth[i] = Y0

    return DepthProfile(distance=distance, depth=depth)

class GVFResult:
    def __init__(self, critical_depth: float, normal_depth: float, profile: DepthProfile):
        self.critical_depth = critical_depth
        self.normal_depth = normal_depth
        self.profile = profile

    @property
    def is_singular(self) -> bool:
        return self.profile.singular_index is not None

class GVFSolver:
    def __init__(self,
                 channel: Channel,
                 control_section: ControlSection,
                 discharge: float,
                 spatial_step: int | float,
                 n_steps: int):
        """
        Initializes the class.

        Parameters
        ----------
        channel : Channel
            The Channel object on which the computation is performed.
        control_section : ControlSection
            Section of known depth and the direction of computation.
        discharge : float
            Steady flow rate in m^3/s.
        spatial_step : float
            Step length in meters (always positive; the sign follows the direction).
        n_steps : int
            Number of computation steps.

        """
        if discharge <= 0:
            raise ValueError("Discharge must be positive.")
        if int(n_steps) != n_steps or n_steps < 1:
            raise ValueError("Number of steps must be a positive integer.")

        self.channel = channel
        self.control_section = control_section
        self.discharge = discharge
        self.spatial_step = spatial_step
        self.n_steps = int(n_steps)
        self.dx = self.control_section.signed_step(spatial_step)

        self.critical_depth = None
        self.normal_depth = None
        self.control_froude = None
        self.profile: DepthProfile = None
        self._solved = False

    def slope(self, h: float) -> float:
        return self.channel.dY_dx(h=h, Q=self.discharge)

    def run(self, verbose: int = 1) -> GVFResult:
        """
        Computes the critical and normal depths, then the depth profile.

        Parameters
        ----------
        verbose : int
            0 prints nothing, 1 prints a summary and warnings, 2 also prints every step.

        Returns
        -------
        GVFResult

        """
        Q = self.discharge

        self.critical_depth = self.channel.critical_depth(Q=Q)
        if verbose >= 1:
            print(f"Critical depth = {m_to_mm(self.critical_depth):.1f} mm")

        self.normal_depth = self.channel.normal_depth(Q=Q)
        if verbose >= 1:
            print(f"Normal depth = {m_to_mm(self.normal_depth):.1f} mm")

        self.control_froude = self.channel.froude_number(h=self.control_section.depth, Q=Q)
        if verbose >= 1:
            print(f"Froude number at control section = {self.control_froude:.3f} "
                  f"({hydraulics.flow_regime(self.control_froude)})")

        self.profile = runge_kutta_profile(slope=self.slope,
                                           y0=self.control_section.depth,
                                           dx=self.dx,
                                           n_steps=self.n_steps,
                                           x0=self.control_section.chainage)

        if verbose >= 2:
            for x, y in self.profile:
                print(f'> x = {x:.1f} m, y = {m_to_mm(y):.1f} mm')

        self._finalize(verbose)

        return GVFResult(critical_depth=self.critical_depth,
                         normal_depth=self.normal_depth,
                         profile=self.profile)

    def _finalize(self, verbose):
        self._solved = True

        i = self.profile.singular_index
        if i is not None and verbose >= 1:
            print(f"Warning: depth became non-finite at step {i} (x = {self.profile.distance[i]:.1f} m). "
                  "The profile has reached critical depth.")

        if verbose >= 1:
            print("Computation completed.")

    def save_results(self, folder_path):
        """
        Save the profile to 'profile.csv' and a run summary to 'Data.txt'.
        """
        if not self._solved:
            raise RuntimeError("The solver has not been run.")

        create_directory_if_not_exists(folder_path)

        self.profile.to_dataframe().to_csv(os.path.join(folder_path, "profile.csv"), index=False)

        with open(os.path.join(folder_path, 'Data.txt'), 'w') as output_file:
            output_file.write(f'Section = {self.channel.cross_section.describe()}\n')
            output_file.write(f'Flow equation = {self.channel.equation.value}\n')
            output_file.write(f'Roughness = {self.channel.roughness}\n')
            output_file.write(f'Bed slope = {self.channel.bed_slope}\n')
            output_file.write(f'Discharge = {self.discharge} m^3/s\n')
            output_file.write(f'Spatial step = {self.dx} m\n')
            output_file.write(f'Number of steps = {self.n_steps}\n')
            output_file.write(f'Critical depth = {m_to_mm(self.critical_depth):.1f} mm\n')
            output_file.write(f'Normal depth = {m_to_mm(self.normal_depth):.1f} mm\n')
            output_file.write(f'Control section Froude number = {self.control_froude:.3f} '
                              f'({hydraulics.flow_regime(self.control_froude)})\n')

            i = self.profile.singular_index
            if i is not None:
                output_file.write(f'Profile became non-finite at step {i}.\n')

def run_no_lateral_flow(params: RunParameters, verbose: int = 0) -> GVFResult:
    """
    Runs the GVF computation without lateral inflow or outflow.

    Parameters
    ----------
    params : RunParameters
        Validated parameters in SI units.
    verbose : int
        Passed to GVFSolver.run().

    Returns
    -------
    GVFResult

    """
    solver = build_solver(params)
    return solver.run(verbose=verbose)

def build_solver(params: RunParameters) -> GVFSolver:
    channel = Channel(cross_section=params.cross_section,
                      bed_slope=params.bed_slope,
                      roughness=params.roughness,
                      equation=params.equation)

    control = ControlSection(depth=params.control_depth, direction=params.direction)

    return GVFSolver(channel=channel,
                     control_section=control,
                     discharge=params.discharge,
                     spatial_step=params.spatial_step,
                     n_steps=params.n_steps)

def run_case(category: FlowCategory, params: RunParameters, verbose: int = 0) -> GVFResult:
    """Runs the computation for a flow category from the input menu."""
    if category is FlowCategory.NO_LATERAL_FLOW:
        return run_no_lateral_flow(params, verbose=verbose)

    elif category in (FlowCategory.LATERAL_INFLOW, FlowCategory.LATERAL_OUTFLOW):
        raise NotImplementedError(f"GVF with {category.name.lower().replace('_', ' ')} is not implemented.")

    raise ValueError("Unrecognised flow category.")

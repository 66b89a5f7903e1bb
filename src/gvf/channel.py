from . import hydraulics
from .hydraulics import FlowEquation
from .cross_section import CrossSection

class Channel:
    """
    Represents a prismatic channel: a cross-section laid at a constant bed
    slope, with a friction law and its roughness parameter.
    """
    def __init__(self,
                 cross_section: CrossSection,
                 bed_slope: float,
                 roughness: float,
                 equation: FlowEquation = FlowEquation.MANNING):
        """Initializes a Channel object.

        Args:
            cross_section (CrossSection): Channel cross-section.
            bed_slope (float): Longitudinal bed slope S0 (positive, falling downstream).
            roughness (float): Manning's n, or equivalent wall roughness ks [m] for Darcy-Weisbach.
            equation (FlowEquation, optional): Friction law. Defaults to FlowEquation.MANNING.
        """
        if not isinstance(equation, FlowEquation):
            raise hydraulics.InvalidEquationError(equation)
        if bed_slope <= 0:
            raise ValueError("Bed slope must be positive.")
        if roughness <= 0:
            raise ValueError("Roughness must be positive.")

        self.cross_section = cross_section
        self.bed_slope = bed_slope
        self.roughness = roughness
        self.equation = equation

    def friction_slope(self, h: float, Q: float) -> float:
        """Computes the friction slope at a depth.

        Args:
            h (float): Flow depth.
            Q (float): Flow rate.

        Returns:
            float: Friction slope (Sf)
        """
        A, R, T = self.cross_section.geometry(h)
        return hydraulics.friction_slope(equation=self.equation, Q=Q, A=A, R=R, roughness=self.roughness)

    def dY_dx(self, h: float, Q: float) -> float:
        """Computes the slope of the water surface relative to the bed.

        Args:
            h (float): Flow depth.
            Q (float): Flow rate.

        Returns:
            float: dY/dx
        """
        A, R, T = self.cross_section.geometry(h)
        Sf = hydraulics.friction_slope(equation=self.equation, Q=Q, A=A, R=R, roughness=self.roughness)

        return hydraulics.dY_dx(S0=self.bed_slope, Sf=Sf, Q=Q, A=A, T=T)

    def froude_number(self, h: float, Q: float) -> float:
        A, R, T = self.cross_section.geometry(h)
        return hydraulics.froude_num(T=T, A=A, Q=Q)

    def critical_depth(self, Q: float) -> float:
        return self.cross_section.critical_depth(Q=Q)

    def normal_depth(self, Q: float) -> float:
        return self.cross_section.normal_depth(Q=Q,
                                               bed_slope=self.bed_slope,
                                               equation=self.equation,
                                               roughness=self.roughness)

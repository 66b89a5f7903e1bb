from . import hydraulics
from .bisection import bisect, Convergence
from enum import Enum
import numpy as np
from scipy.constants import degree
from abc import ABC, abstractmethod

# Bisection brackets and tolerances
ANGLE_BRACKET = (0.0, np.pi)               # half-angle, circular sections [rad]
ANGLE_TOLERANCE = 0.001
CRITICAL_DEPTH_BRACKET = (0.0, 20.0)       # [m]
CRITICAL_DEPTH_TOLERANCE = 0.001
NORMAL_ANGLE_BRACKET = (0.001, np.pi)      # [rad]
NORMAL_ANGLE_TOLERANCE = 0.001             # relative, on the friction measure
NORMAL_DEPTH_BRACKET = (0.001, 40.0)       # [m]
NORMAL_DEPTH_TOLERANCE = 0.002

class ChannelShape(Enum):
    CIRCULAR = 1
    RECTANGULAR = 2
    TRAPEZOIDAL = 3

class CrossSection(ABC):
    """
    Abstract base class for prismatic channel cross-sections.

    Subclasses provide the geometry; the base class implements the
    depth-bracketed critical and normal depth searches shared by the
    open (rectangular and trapezoidal) sections.
    """
    shape: ChannelShape = None

    ## ------------------------------------------------------------------
    ## Abstract Methods (Must be implemented by subclasses)
    ## ------------------------------------------------------------------

    @abstractmethod
    def properties(self, h: float) -> tuple:
        """
        Return (A, P, R, T) for a flow depth h.
        (Area, Wetted Perimeter, Hydraulic Radius, Top Width)
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description of the section."""
        pass

    ## ------------------------------------------------------------------
    ## Concrete Methods (Shared functionality)
    ## ------------------------------------------------------------------

    def geometry(self, h: float) -> tuple:
        """Return (A, R, T) at depth h."""
        A, P, R, T = self.properties(h)
        return A, R, T

    def area(self, h: float) -> float:
        """Return wetted area (A)."""
        return self.properties(h)[0]

    def critical_depth(self, Q: float) -> float:
        """
        Depth at which Q^2 T / (g A^3) = 1, found by bisection over
        CRITICAL_DEPTH_BRACKET on A^3/T - Q^2/g (T = dA/dy).
        """
        XC = Q * Q / hydraulics.G

        def f(h):
            A, P, R, T = self.properties(h)
            return np.power(A, 3) / T - XC

        return bisect(f, *CRITICAL_DEPTH_BRACKET, tolerance=CRITICAL_DEPTH_TOLERANCE)

    def normal_depth(self, Q: float, bed_slope: float, equation: hydraulics.FlowEquation, roughness: float) -> float:
        """
        Depth at which the friction slope equals the bed slope.

        Bisection over NORMAL_DEPTH_BRACKET comparing sqrt(Sf) with sqrt(S0).
        """
        FSR = np.sqrt(bed_slope)

        def f(h):
            A, P, R, T = self.properties(h)
            FSH = hydraulics.friction_measure(equation=equation, Q=Q, A=A, R=R, roughness=roughness)
            return FSR - FSH

        return bisect(f, *NORMAL_DEPTH_BRACKET, tolerance=NORMAL_DEPTH_TOLERANCE)

## ------------------------------------------------------------------
## Circular section
## ------------------------------------------------------------------

class CircularSection(CrossSection):
    """
    Part-full circular conduit of diameter D.

    Depth is mapped to the central half-angle theta subtended by the free
    surface, y = D/2 (1 - cos theta).
    """
    shape = ChannelShape.CIRCULAR

    def __init__(self, diameter: float):
        if diameter <= 0:
            raise ValueError("Diameter must be positive.")

        self.diameter = float(diameter)

    def angle(self, h: float) -> float:
        """Half-angle theta for depth h, by bisection on 1 - 2h/D - cos(theta)."""
        D = self.diameter

        def f(theta):
            return 1.0 - 2.0 * h / D - np.cos(theta)

        return bisect(f, *ANGLE_BRACKET, tolerance=ANGLE_TOLERANCE)

    def depth_at_angle(self, theta: float) -> float:
        return 0.5 * self.diameter * (1.0 - np.cos(theta))

    def properties_at_angle(self, theta: float) -> tuple:
        """Return (A, P, R, T) for half-angle theta."""
        D = self.diameter
        P = D * theta
        A = 0.25 * D * D * (theta - 0.5 * np.sin(2.0 * theta))
        R = A / P
        T = D * np.sin(theta)
        return A, P, R, T

    def properties(self, h: float) -> tuple:
        return self.properties_at_angle(self.angle(h))

    def critical_depth(self, Q: float) -> float:
        """
        Bisection over the half-angle on A^3 / (dA/dy) - Q^2/g.

        dA/dy = (dA/dtheta) / (dy/dtheta) = 0.5 D^2 sin^2(theta) / (0.5 D sin(theta))
              = D sin(theta)
        """
        D = self.diameter
        XC = Q * Q / hydraulics.G

        def f(theta):
            A = 0.25 * D * D * (theta - 0.5 * np.sin(2.0 * theta))
            return np.power(A, 3) / (D * np.sin(theta)) - XC

        theta = bisect(f, *ANGLE_BRACKET, tolerance=ANGLE_TOLERANCE)
        return self.depth_at_angle(theta)

    def normal_depth(self, Q: float, bed_slope: float, equation: hydraulics.FlowEquation, roughness: float) -> float:
        """
        Bisection over NORMAL_ANGLE_BRACKET, converging on the relative
        mismatch between sqrt(Sf) and sqrt(S0).
        """
        FSR = np.sqrt(bed_slope)

        def f(theta):
            A, P, R, T = self.properties_at_angle(theta)
            FSH = hydraulics.friction_measure(equation=equation, Q=Q, A=A, R=R, roughness=roughness)
            return (FSR - FSH) / FSR

        theta = bisect(f, *NORMAL_ANGLE_BRACKET,
                       tolerance=NORMAL_ANGLE_TOLERANCE,
                       convergence=Convergence.RESIDUAL)
        return self.depth_at_angle(theta)

    def describe(self) -> str:
        return f"Circular, D = {self.diameter:g} m"

## ------------------------------------------------------------------
## Rectangular section
## ------------------------------------------------------------------

class RectangularSection(CrossSection):
    """Rectangular channel of width B."""
    shape = ChannelShape.RECTANGULAR

    def __init__(self, width: float):
        if width <= 0:
            raise ValueError("Width must be positive.")

        self.width = float(width)

    def properties(self, h: float) -> tuple:
        B = self.width
        A = B * h
        P = B + 2.0 * h
        R = A / P
        T = B
        return A, P, R, T

    def critical_depth(self, Q: float) -> float:
        """Closed form: Yc = (Q^2 / (B^2 g))^(1/3)."""
        return np.power(Q * Q / (self.width * self.width * hydraulics.G), 1/3)

    def describe(self) -> str:
        return f"Rectangular, B = {self.width:g} m"

## ------------------------------------------------------------------
## Trapezoidal section
## ------------------------------------------------------------------

class TrapezoidalSection(CrossSection):
    """
    Symmetric trapezoidal channel.

    Parameters:
    - width: Bottom width [m]
    - side_angle: Angle of the side walls to the horizontal [deg], 0 < angle < 90
    """
    shape = ChannelShape.TRAPEZOIDAL

    def __init__(self, width: float, side_angle: float):
        if width <= 0:
            raise ValueError("Bottom width must be positive.")
        if not 0 < side_angle < 90:
            raise ValueError("Side angle must lie strictly between 0 and 90 degrees.")

        self.width = float(width)
        self.side_angle = float(side_angle)
        self._phi = self.side_angle * degree

    def properties(self, h: float) -> tuple:
        B = self.width
        A = h * (B + h / np.tan(self._phi))
        P = B + 2.0 * h / np.sin(self._phi)
        R = A / P
        T = B + 2.0 * h / np.tan(self._phi)
        return A, P, R, T

    def describe(self) -> str:
        return f"Trapezoidal, B = {self.width:g} m, side angle = {self.side_angle:g} deg"

def make_section(shape: ChannelShape, diameter: float = None, width: float = None, side_angle: float = None) -> CrossSection:
    """Builds the cross-section matching `shape` from its parameters."""
    if shape is ChannelShape.CIRCULAR:
        if diameter is None:
            raise ValueError("A circular section requires a diameter.")
        return CircularSection(diameter=diameter)

    elif shape is ChannelShape.RECTANGULAR:
        if width is None:
            raise ValueError("A rectangular section requires a width.")
        return RectangularSection(width=width)

    elif shape is ChannelShape.TRAPEZOIDAL:
        if width is None or side_angle is None:
            raise ValueError("A trapezoidal section requires a bottom width and a side angle.")
        return TrapezoidalSection(width=width, side_angle=side_angle)

    raise ValueError("Invalid channel shape.")

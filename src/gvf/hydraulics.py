from enum import Enum
import numpy as np
from .bisection import bisect, Convergence

# Gravitational acceleration [m/s^2]. Kept at this value so that profiles
# reproduce published GVF tables.
G = 9.8100001

# Kinematic viscosity of water [m^2/s].
KINEMATIC_VISCOSITY = 1.307e-6

F_BRACKET = (0.0, 0.5)
F_TOLERANCE = 0.005

class FlowEquation(Enum):
    MANNING = 'Manning'
    DARCY_WEISBACH = 'Darcy-Weisbach'

class InvalidEquationError(ValueError):
    """Raised for a flow equation other than Manning or Darcy-Weisbach."""
    def __init__(self, equation):
        self.equation = equation
        super().__init__(f"Unexpected flow equation: {equation!r}.")

def manning_Sf(Q: float, A: float, n: float, R: float) -> float:
    """Computes friction slope using Manning's equation.

    Args:
        Q (float): Flow rate.
        A (float): Cross-sectional flow area.
        n (float): Manning's roughness coefficient.
        R (float): Hydraulic radius.

    Returns:
        float: Friction slope.
    """
    return np.power(n * Q / A, 2) * np.power(R, -4/3)

def darcy_weisbach_f(R: float, ks: float, V: float) -> float:
    """Solves the Colebrook-White equation for the Darcy-Weisbach friction factor.

    1/sqrt(f) = -0.88 ln( ks/(14.8 R) + 2.51 nu / (4 R V sqrt(f)) )

    Args:
        R (float): Hydraulic radius.
        ks (float): Equivalent wall roughness [m].
        V (float): Mean velocity.

    Returns:
        float: Friction factor f, between 0 and 0.5.
    """
    def W(f):
        X = ks / (14.8 * R) + (2.51 * KINEMATIC_VISCOSITY) / (4.0 * R * V * np.sqrt(f))
        return 1.0 / np.sqrt(f) + 0.88 * np.log(X)

    return bisect(W, *F_BRACKET,
                  tolerance=F_TOLERANCE,
                  convergence=Convergence.RELATIVE,
                  decreasing=True)

def darcy_weisbach_Sf(Q: float, A: float, R: float, f: float) -> float:
    """Computes friction slope using the Darcy-Weisbach equation.

    Args:
        Q (float): Flow rate.
        A (float): Cross-sectional flow area.
        R (float): Hydraulic radius.
        f (float): Friction factor.

    Returns:
        float: Friction slope.
    """
    return f * Q * Q / (8.0 * G * np.power(A, 2) * R)

def friction_slope(equation: FlowEquation, Q: float, A: float, R: float, roughness: float) -> float:
    """Computes friction slope with the selected flow equation.

    Args:
        equation (FlowEquation): Manning or Darcy-Weisbach.
        Q (float): Flow rate.
        A (float): Cross-sectional flow area.
        R (float): Hydraulic radius.
        roughness (float): Manning's n, or wall roughness ks [m] for Darcy-Weisbach.

    Returns:
        float: Friction slope.
    """
    if equation is FlowEquation.MANNING:
        return manning_Sf(Q=Q, A=A, n=roughness, R=R)

    elif equation is FlowEquation.DARCY_WEISBACH:
        V = Q / A
        f = darcy_weisbach_f(R=R, ks=roughness, V=V)
        return darcy_weisbach_Sf(Q=Q, A=A, R=R, f=f)

    raise InvalidEquationError(equation)

def friction_measure(equation: FlowEquation, Q: float, A: float, R: float, roughness: float) -> float:
    """Square root of the friction slope, the quantity matched against sqrt(S0)
    in normal-depth searches.

    Manning: n Q / (A R^(2/3)). Darcy-Weisbach: sqrt(f / (8 g R)) V.
    """
    if equation is FlowEquation.MANNING:
        return roughness * Q / (A * np.power(R, 2/3))

    elif equation is FlowEquation.DARCY_WEISBACH:
        V = Q / A
        f = darcy_weisbach_f(R=R, ks=roughness, V=V)
        return np.sqrt(f / (8.0 * G * R)) * V

    raise InvalidEquationError(equation)

def froude_num(T: float, A: float, Q: float) -> float:
    """Froude number V / sqrt(g A/T), based on the hydraulic depth A/T.

    Equals 1 at critical depth, so Fr^2 = Q^2 T / (g A^3) is the term
    subtracted in the dY/dx denominator.
    """
    hydraulic_depth = A / T
    return (Q / A) / np.sqrt(G * hydraulic_depth)

def flow_regime(froude: float) -> str:
    if froude < 1:
        return 'subcritical'
    elif froude > 1:
        return 'supercritical'
    return 'critical'

def dY_dx(S0: float, Sf: float, Q: float, A: float, T: float) -> float:
    """Water-surface slope of steady gradually varied flow.

    dY/dx = (S0 - Sf) / (1 - Q^2 T / (g A^3))

    The denominator vanishes at critical depth; the result is then
    infinite or NaN.

    Args:
        S0 (float): Bed slope.
        Sf (float): Friction slope.
        Q (float): Flow rate.
        A (float): Flow area.
        T (float): Top width.

    Returns:
        float: dY/dx.
    """
    A = np.float64(A)
    return (S0 - Sf) / (1.0 - Q * Q * T / (G * np.power(A, 3)))

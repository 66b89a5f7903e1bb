from enum import Enum
from .hydraulics import FlowEquation, InvalidEquationError
from .cross_section import ChannelShape, CrossSection, make_section
from .boundary import Direction
from .utility import mm_to_m

NO_LATERAL_FLOW_HELP = """ANALYSIS OF GVF IN CHANNELS WITHOUT LATERAL INFLOW/OUTFLOW
The program computes the flow depth at specified intervals along
the channel, starting from a control point at which the depth
is specified. The program outputs distance from the control
point and corresponding flow depth. Note the distances measured
upstream from the control point are printed as negative values.

DATA ENTRY:
"""

class FlowCategory(Enum):
    NO_LATERAL_FLOW = 1
    LATERAL_INFLOW = 2
    LATERAL_OUTFLOW = 3

class RunParameters:
    """
    Inputs of a GVF computation, in SI units (lengths in metres).
    """
    def __init__(self,
                 cross_section: CrossSection,
                 equation: FlowEquation,
                 roughness: float,
                 discharge: float,
                 bed_slope: float,
                 control_depth: float,
                 spatial_step: float,
                 n_steps: int,
                 direction: Direction | str = Direction.DN):
        """
        Parameters
        ----------
        cross_section : CrossSection
            Channel section.
        equation : FlowEquation
            Friction law.
        roughness : float
            Manning's n, or wall roughness ks in metres for Darcy-Weisbach.
        discharge : float
            Q in m^3/s.
        bed_slope : float
            S0.
        control_depth : float
            Depth at the control section in metres.
        spatial_step : float
            Step length in metres.
        n_steps : int
            Number of steps.
        direction : Direction | str
            'UP' or 'DN' from the control section.

        """
        self.cross_section = cross_section
        self.equation = equation
        self.roughness = roughness
        self.discharge = discharge
        self.bed_slope = bed_slope
        self.control_depth = control_depth
        self.spatial_step = spatial_step
        self.n_steps = n_steps
        self.direction = Direction(direction)

        self.validate()

    def validate(self):
        if not isinstance(self.cross_section, CrossSection):
            raise ValueError("Invalid cross-section.")
        if not isinstance(self.equation, FlowEquation):
            raise InvalidEquationError(self.equation)

        for name in ('roughness', 'discharge', 'bed_slope', 'control_depth', 'spatial_step'):
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive.")

        if int(self.n_steps) != self.n_steps or self.n_steps < 1:
            raise ValueError("Number of computation steps must be a positive integer.")

## ------------------------------------------------------------------
## Input deck
## ------------------------------------------------------------------

class DeckReader:
    """
    Reads whitespace-separated answers from a text stream, one question at a time.

    Answers may be spread over any number of lines; a line is only consumed
    once the previous answers have been used, so interactive input works.
    """
    def __init__(self, stream, prompt: bool = False):
        self.stream = stream
        self.prompt = prompt
        self._tokens = []

    def _next_token(self, question: str) -> str:
        if self.prompt:
            print(question)

        while not self._tokens:
            line = self.stream.readline()
            if not line:
                raise ValueError(f"Unexpected end of input while reading '{question}'.")
            self._tokens = line.split()

        return self._tokens.pop(0)

    def message(self, text: str):
        if self.prompt:
            print(text)

    def read_int(self, question: str) -> int:
        token = self._next_token(question)
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"Expected an integer for '{question}', got '{token}'.") from None

    def read_float(self, question: str) -> float:
        token = self._next_token(question)
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"Expected a number for '{question}', got '{token}'.") from None

    def read_str(self, question: str) -> str:
        return self._next_token(question)

def read_flow_type(reader: DeckReader) -> tuple:
    choice = reader.read_int("DO YOU WISH TO USE 1 MANNING OR 2 DARCY-WEISBACH ?")

    if choice == 1:
        return FlowEquation.MANNING, reader.read_float("MANNING N-VALUE")

    elif choice == 2:
        return FlowEquation.DARCY_WEISBACH, mm_to_m(reader.read_float("Wall Roughness(mm)"))

    raise ValueError("Error entering formula type.")

def read_channel_data(reader: DeckReader) -> CrossSection:
    choice = reader.read_int("IS SECTION 1 CIRCULAR 2 RECTANGULAR 3 TRAPEZOIDAL ?")

    try:
        shape = ChannelShape(choice)
    except ValueError:
        raise ValueError("Error entering channel data.") from None

    if shape is ChannelShape.CIRCULAR:
        return make_section(shape, diameter=mm_to_m(reader.read_float("DIAMETER (mm)")))

    elif shape is ChannelShape.RECTANGULAR:
        return make_section(shape, width=mm_to_m(reader.read_float("CHANNEL WIDTH (mm)")))

    width = mm_to_m(reader.read_float("BOTTOM WIDTH (mm)"))
    return make_section(shape, width=width, side_angle=reader.read_float("ANGLE OF SIDE TO HORL (deg)"))

def read_no_lateral_flow(reader: DeckReader) -> RunParameters:
    reader.message(NO_LATERAL_FLOW_HELP)

    equation, roughness = read_flow_type(reader)
    section = read_channel_data(reader)

    control_depth = mm_to_m(reader.read_float("DEPTH AT CONTROL SECTION (mm)"))
    bed_slope = reader.read_float("ENTER CHANNEL BED SLOPE")
    discharge = reader.read_float("ENTER DISCHARGE(m**3/s)")

    answer = reader.read_str("IS COMPUTATION PROCEEDING UPSTREAM (UP) OR DOWNSTREAM (DN) FROM CONTROL SECTION?")
    try:
        direction = Direction(answer.upper())
    except ValueError:
        raise ValueError("Invalid entry. Should be 'UP' or 'DN'.") from None

    spatial_step = reader.read_float("ENTER CHANNEL STEP COMPUTATIONAL LENGTH (m)")
    n_steps = reader.read_int("ENTER NUMBER OF COMPUTATION STEPS")

    return RunParameters(cross_section=section,
                         equation=equation,
                         roughness=roughness,
                         discharge=discharge,
                         bed_slope=bed_slope,
                         control_depth=control_depth,
                         spatial_step=spatial_step,
                         n_steps=n_steps,
                         direction=direction)

def read_parameters(stream, prompt: bool = False) -> tuple:
    """
    Reads a GVF input deck.

    Parameters
    ----------
    stream : text stream
        Open file or sys.stdin.
    prompt : bool
        Print each question before reading its answer.

    Returns
    -------
    tuple
        (FlowCategory, RunParameters). Parameters are None for the
        lateral-flow categories, which have no input layout yet.

    """
    reader = DeckReader(stream, prompt=prompt)

    try:
        category = FlowCategory(reader.read_int("ENTER NUMBER OF YOUR CHOICE"))
    except ValueError as e:
        raise ValueError(f"Unrecognised flow category. {e}") from None

    if category is FlowCategory.NO_LATERAL_FLOW:
        return category, read_no_lateral_flow(reader)

    return category, None

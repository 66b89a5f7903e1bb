from pathlib import Path
import matplotlib
import pytest

matplotlib.use('Agg')

from gvf.cross_section import CircularSection, RectangularSection, TrapezoidalSection
from gvf.channel import Channel
from gvf.hydraulics import FlowEquation

EXAMPLE_DIR = Path(__file__).resolve().parents[1] / 'cases' / 'example'

@pytest.fixture
def rectangle():
    return RectangularSection(width=2.0)

@pytest.fixture
def trapezoid():
    return TrapezoidalSection(width=2.0, side_angle=45.0)

@pytest.fixture
def pipe():
    return CircularSection(diameter=0.6)

@pytest.fixture
def rectangular_channel(rectangle):
    return Channel(cross_section=rectangle, bed_slope=0.001, roughness=0.015, equation=FlowEquation.MANNING)

@pytest.fixture
def pipe_channel(pipe):
    return Channel(cross_section=pipe, bed_slope=0.001, roughness=0.013, equation=FlowEquation.MANNING)

@pytest.fixture
def example_deck():
    return EXAMPLE_DIR / 'input.txt'

@pytest.fixture
def dw_deck():
    return EXAMPLE_DIR / 'input_dw_trapezoidal.txt'

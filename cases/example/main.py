import sys
from pathlib import Path

# add repo root and src to sys.path
root = Path(__file__).resolve().parents[2]
sys.path.append(str(root))
sys.path.append(str(root / 'src'))

from gvf.cross_section import CircularSection
from gvf.channel import Channel
from gvf.boundary import ControlSection
from gvf.hydraulics import FlowEquation
from gvf.solver import GVFSolver
from gvf.visual import plot_profile
from cases.example.settings import *

pipe = CircularSection(diameter=diameter)

example_channel = Channel(cross_section=pipe,
                          bed_slope=S_0,
                          roughness=roughness,
                          equation=FlowEquation.MANNING)

control = ControlSection(depth=control_depth, direction=direction)

solver = GVFSolver(channel=example_channel,
                   control_section=control,
                   discharge=discharge,
                   spatial_step=spatial_step,
                   n_steps=n_steps)

result = solver.run(verbose=2)

results_folder = str(Path(__file__).resolve().parent / 'results')
solver.save_results(folder_path=results_folder)
plot_profile(result, diameter=diameter, title=pipe.describe(), folder=results_folder, save=True, show=False)
print('Finished.')

import os
import numpy as np
import matplotlib.pyplot as plt
from .solver import GVFResult
from .utility import create_directory_if_not_exists, m_to_mm

def plot_profile(result: GVFResult, diameter: float = None, title: str = None,
                 folder=None, save=False, show=True):
    """
    Plot a computed depth profile against distance from the control section,
    with the critical and normal depth levels.

    Parameters
    ----------
    result : GVFResult
        Output of run_no_lateral_flow() or GVFSolver.run().
    diameter : float, optional
        Pipe diameter [m]; drawn as the crown level for circular sections.
    title : str, optional
        Axes title.
    folder : str, optional
        Folder in which 'profile.png' is written when save is True.
    save : bool
        If True, saves the figure as 'profile.png'.
    show : bool
        If True, displays the plot interactively.

    Returns
    -------
    matplotlib.figure.Figure
    """
    profile = result.profile
    order = np.argsort(profile.distance)
    x = profile.distance[order]
    y = profile.depth_mm[order]

    fig, ax = plt.subplots(figsize=(8, 4))

    ax.plot(x, y, 'o-', color='tab:blue', lw=1.5, label='Water surface')
    ax.axhline(m_to_mm(result.critical_depth), color='tab:red', ls='--', lw=1, label='Critical depth')
    ax.axhline(m_to_mm(result.normal_depth), color='tab:green', ls='-.', lw=1, label='Normal depth')

    if diameter is not None:
        ax.axhline(m_to_mm(diameter), color='k', lw=1, label='Crown')

    ax.set_xlabel('Distance from control section (m)')
    ax.set_ylabel('Depth (mm)')
    ax.set_ylim(bottom=0)
    if title is not None:
        ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')
    fig.tight_layout()

    if save:
        folder = '.' if folder is None else folder
        create_directory_if_not_exists(folder)
        fig.savefig(os.path.join(folder, 'profile.png'), dpi=150)

    if show:
        plt.show()

    return fig

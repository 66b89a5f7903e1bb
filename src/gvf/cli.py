import argparse
import os
import sys
from .bisection import NonConvergenceError
from .parameters import read_parameters, FlowCategory
from .solver import build_solver, run_case
from .visual import plot_profile
from .utility import m_to_mm

BANNER = """
Program GVF

THIS PROGRAM ANALYSES THREE CATEGORIES OF STEADY GRADUALLY
VARIED OPEN CHANNEL FLOW; IT CATERS FOR RECTANGULAR, TRAPEZOIDAL
AND CIRCULAR CHANNEL SECTIONS AND OFFERS A CHOICE BETWEEN THE
MANNING AND DARCY-WEISBACH FLOW EQUATIONS. THE ANALYSES USES A
FOURTH ORDER RUNGE-KUTTA NUMERICAL COMPUTATIONAL SCHEMA IN THE
SOLUTION OF THE RELEVANT WATER SURFACE SLOPE EQUATION.

THE THREE FLOW CATEGORIES ARE:
    (1) GVF WITHOUT LATERAL INFLOW OR OUTFLOW
    (2) GVF WITH LATERAL INFLOW
    (3) GVF WITH LATERAL OUTFLOW
"""

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gvf',
        description='Steady gradually varied flow profiles in circular, rectangular and trapezoidal channels.',
    )
    parser.add_argument('deck', nargs='?', default=None,
                        help='Input deck with the answers to the program questions (default: standard input).')
    parser.add_argument('-o', '--output', default=None,
                        help='Folder in which profile.csv and Data.txt are written.')
    parser.add_argument('--plot', action='store_true',
                        help='Save a plot of the profile (profile.png) in the output folder.')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Do not print the questions while reading the input.')
    return parser

def print_profile(result):
    print(f"CRITICAL DEPTH {m_to_mm(result.critical_depth):f} (mm)")
    print(f"NORMAL DEPTH {m_to_mm(result.normal_depth):f} (mm)")
    print("DISTANCE (m)    DEPTH(mm)")
    for x, y in zip(result.profile.distance, result.profile.depth_mm):
        print(f"{x:.1f}        {y:.1f}")

def main(argv=None) -> int:
    args = create_parser().parse_args(argv)

    print(BANNER)

    if args.deck is not None and not os.path.isfile(args.deck):
        print(f"File '{args.deck}' does not exist")
        return 1

    try:
        if args.deck is None:
            category, params = read_parameters(sys.stdin, prompt=not args.quiet)
        else:
            with open(args.deck) as stream:
                category, params = read_parameters(stream, prompt=not args.quiet)
    except ValueError as e:
        print(f"Input error: {e}")
        return 1

    if category is not FlowCategory.NO_LATERAL_FLOW:
        try:
            run_case(category, params)
        except NotImplementedError as e:
            print(e)
        return 1

    print("...data input complete;computation now in progress...")

    solver = build_solver(params)
    try:
        result = solver.run(verbose=0)
    except NonConvergenceError as e:
        print(f"Computation failed: {e}")
        return 1

    print_profile(result)

    if result.is_singular:
        print(f"WARNING: depth became non-finite at step {result.profile.singular_index}; "
              "the profile has reached critical depth.")

    if args.output is not None:
        solver.save_results(args.output)

        if args.plot:
            diameter = getattr(params.cross_section, 'diameter', None)
            plot_profile(result, diameter=diameter, title=params.cross_section.describe(),
                         folder=args.output, save=True, show=False)

    elif args.plot:
        print("--plot requires --output.")

    return 0

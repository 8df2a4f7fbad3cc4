# Solve a 3x3x3 cube given either as a 54-sticker facelet string or as a
# scramble sequence applied to the solved cube.
#
# Facelet string: U1-U9, R1-R9, F1-F9, D1-D9, L1-L9, B1-B9; any six symbols,
# the centre stickers define which symbol belongs to which face.
#
# Examples:
#   python solve_cube.py --scramble "R U R' U' F2 D L"
#   python solve_cube.py --facelets DRLUUBFBRBLURRLRUBLRDDFDLFUFUFFDBRDUBRUFLLFDDBFLUBLRBD

from typing import Optional

from argdantic import ArgParser
from pydantic import BaseModel

import py333

cli = ArgParser()


class SolveConfig(BaseModel):
    facelets: Optional[str] = None
    scramble: Optional[str] = None

    max_length: int = 23
    table_path: Optional[str] = "data/py333_tables.npz"

    show_movements: bool = False
    verbose: bool = True


@cli.command(singleton=True)
def solve_cube(config: SolveConfig):
    """Print a solution for the given cube."""
    if (config.facelets is None) == (config.scramble is None):
        raise ValueError("Give exactly one of --facelets or --scramble")

    if config.scramble is not None:
        scramble = py333.parse_moves(config.scramble)
        state = py333.CubieCube.from_moves(scramble)
        print(f"Scramble: {py333.format_moves(scramble)}")
        print(f"Facelets: {py333.FaceCube.from_cubie(state)}")
    else:
        state = py333.FaceCube.from_string(config.facelets).to_cubie()

    solver_config = py333.SolverConfig(
        max_length=config.max_length,
        table_path=config.table_path,
        verbose=config.verbose,
    )
    solver = solver_config.make_solver()

    print("searching...")
    solution = solver.solve(state)

    if solution is None:
        print(f"No solution within {config.max_length} moves, try a larger --max-length")
        return

    print(f"Solution ({solution.length} moves): {solution}")
    print(f"  phase 1: {solution.phase1_to_string() or '-'}")
    print(f"  phase 2: {solution.phase2_to_string() or '-'}")
    print(f"  nodes expanded: {solver.nodes_expanded}")

    if config.show_movements:
        for step in solution.to_movements():
            print(f"  rotate {step.axis.value} layer {step.layer} {step.direction.value}")


if __name__ == "__main__":
    cli()

"""
Evaluate the two-phase solver on random scrambles.

For every cube:
- scramble the solved cube with `scramble_moves` random moves
- solve it with the given move budget
- check that applying the solution really solves the cube

Prints the solve rate, average solution length, nodes expanded and time.
"""

import time
from typing import Dict, List, Optional

import numpy as np
from argdantic import ArgParser
from pydantic import BaseModel, Field
from tqdm import tqdm

import py333

cli = ArgParser()


class EvaluateConfig(BaseModel):
    seed: int = 42
    num_cubes: int = 10
    scramble_moves: int = 25

    max_length: int = Field(default=23, ge=0)
    table_path: Optional[str] = "data/py333_tables.npz"

    verbose: bool = False


def solve_one(solver: py333.Solver, scramble: List[py333.Move]) -> Dict:
    state = py333.CubieCube.from_moves(scramble)

    start_time = time.time()
    solution = solver.solve(state)
    elapsed = time.time() - start_time

    verified = solution is not None and state.apply_moves(solution.all_moves()).is_solved()
    return {
        "scramble": py333.format_moves(scramble),
        "solution": str(solution) if solution is not None else None,
        "solution_length": solution.length if solution is not None else None,
        "verified": verified,
        "nodes_expanded": solver.nodes_expanded,
        "time_seconds": elapsed,
    }


def run_evaluation(config: EvaluateConfig) -> List[Dict]:
    rng = np.random.default_rng(config.seed)
    solver = py333.SolverConfig(
        max_length=config.max_length,
        table_path=config.table_path,
        verbose=True,
    ).make_solver()

    print(f"\n{'='*60}")
    print(f"Evaluating two-phase solver on {config.num_cubes} cubes")
    print(f"Scramble moves: {config.scramble_moves}, Max length: {config.max_length}")
    print(f"{'='*60}\n")

    results = []
    for i in tqdm(range(config.num_cubes), desc="Solving"):
        scramble = py333.random_scramble(config.scramble_moves, rng)
        result = solve_one(solver, scramble)
        results.append(result)

        if config.verbose:
            tqdm.write(f"Cube {i+1}/{config.num_cubes}: {result['scramble']}")
            if result["solution"] is not None:
                tqdm.write(f"  ✓ {result['solution_length']} moves: {result['solution']} ({result['time_seconds']:.3f}s)")
            else:
                tqdm.write(f"  ✗ Not solved within {config.max_length} moves")

    solved = [r for r in results if r["solution"] is not None]
    wrong = [r for r in solved if not r["verified"]]

    print(f"\n{'='*60}")
    print("Summary")
    print(f"{'='*60}")
    print(f"Solved: {len(solved)}/{config.num_cubes} ({100*len(solved)/max(config.num_cubes, 1):.1f}%)")
    if wrong:
        print(f"WARNING: {len(wrong)} solutions do not solve their cube")

    if solved:
        lengths = np.array([r["solution_length"] for r in solved])
        print(f"Avg solution length: {lengths.mean():.2f} (min {lengths.min()}, max {lengths.max()})")
        print(f"Avg nodes expanded: {np.mean([r['nodes_expanded'] for r in solved]):.1f}")
        print(f"Avg time: {np.mean([r['time_seconds'] for r in solved]):.3f}s")

    return results


@cli.command(singleton=True)
def evaluate(config: EvaluateConfig):
    """Solve random scrambles and report statistics."""
    run_evaluation(config)


if __name__ == "__main__":
    cli()

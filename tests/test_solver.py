from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from py333 import ALL_MOVES, CubieCube, FaceCube, InvalidCubeStateError, Move, PHASE2_MOVES, Solution, Solver, solve, solve_facelets
from py333.cubie import SOLVED_CUBIE_CUBE
from py333.index import co_to_index, e_combo_to_index, eo_to_index
from py333.moves import parse_moves
from py333.scramble import random_scramble
from py333.solver import _join_phases


def test_solved_cube_gives_empty_solution(table):
    solution = Solver(table, 23).solve(CubieCube())
    assert solution is not None
    assert solution.phase1 == ()
    assert solution.phase2 == ()
    assert solution.is_empty()
    assert solution.length == 0
    assert str(solution) == ""


@pytest.mark.parametrize("move", ALL_MOVES, ids=str)
def test_single_move_is_undone_by_its_inverse(table, move):
    state = SOLVED_CUBIE_CUBE.apply_move(move)
    solution = Solver(table, 23).solve(state)
    assert solution is not None
    assert solution.all_moves() == [move.inverse]


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5, 6])
def test_short_scrambles(table, seed):
    rng = np.random.default_rng(seed)
    scramble = random_scramble(int(rng.integers(2, 9)), rng)
    state = CubieCube.from_moves(scramble)
    solution = Solver(table, 23).solve(state)
    assert solution is not None
    assert solution.length <= 23
    assert state.apply_moves(solution.all_moves()).is_solved()


@pytest.mark.parametrize("max_length", [21, 23])
@pytest.mark.parametrize("seed", [10, 20, 30])
def test_random_25_move_scrambles(table, seed, max_length):
    state = CubieCube.from_moves(random_scramble(25, np.random.default_rng(seed)))
    solution = Solver(table, max_length).solve(state)
    assert solution is not None
    assert solution.length <= max_length
    assert state.apply_moves(solution.all_moves()).is_solved()


def test_phase1_ends_in_g1(table):
    state = CubieCube.from_moves(parse_moves("R U F' L2 B D' R2 F U2 L'"))
    solution = Solver(table, 23).solve(state)
    assert solution is not None
    assert state.apply_moves(solution.all_moves()).is_solved()
    # phase 2 only uses moves that stay inside G1
    assert all(m in PHASE2_MOVES for m in solution.phase2)


def test_solve_is_deterministic(table):
    state = CubieCube.from_moves(random_scramble(20, np.random.default_rng(99)))
    solver = Solver(table, 23)
    first = solver.solve(state)
    second = solver.solve(state)
    third = Solver(table, 23).solve(state)
    assert first == second == third


def test_no_solution_within_budget(table):
    state = CubieCube.from_moves(parse_moves("R U F D L B"))
    assert Solver(table, 2).solve(state) is None


def test_zero_budget(table):
    assert Solver(table, 0).solve(CubieCube()) == Solution()
    assert Solver(table, 0).solve(CubieCube().apply_move(Move.U)) is None


def test_negative_budget_is_rejected(table):
    with pytest.raises(ValueError):
        Solver(table, -1)


@pytest.mark.parametrize(
    "state",
    [
        # last corner twisted; co_to_index never looks at it
        CubieCube(co=(0,) * 7 + (1,)),
        # two corners swapped, edges untouched
        CubieCube(cp=(1, 0, 2, 3, 4, 5, 6, 7)),
        # one edge flipped
        CubieCube(eo=(1,) + (0,) * 11),
    ],
    ids=["twisted-corner", "corner-swap", "flipped-edge"],
)
def test_unreachable_cube_is_rejected_before_search(table, state):
    solver = Solver(table, 23)
    with pytest.raises(InvalidCubeStateError):
        solver.solve(state)
    assert solver.nodes_expanded == 0
    with pytest.raises(InvalidCubeStateError):
        solve(state, 23, table)


def test_concurrent_solves_share_one_table(table):
    rng = np.random.default_rng(123)
    states = [CubieCube.from_moves(random_scramble(10, rng)) for _ in range(4)]
    expected = [Solver(table, 23).solve(s) for s in states]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda s: Solver(table, 23).solve(s), states))
    assert results == expected


def test_solver_scratch_is_clean_after_solve(table):
    solver = Solver(table, 23)
    solver.solve(CubieCube.from_moves(parse_moves("R U R' F2")))
    assert solver.solution_phase1 == []
    assert solver.solution_phase2 == []
    assert solver.nodes_expanded > 0


def test_join_phases_merges_boundary_moves():
    assert _join_phases([Move.R], [Move.R2]) == Solution((Move.R3,), ())
    assert _join_phases([Move.F, Move.U], [Move.U3, Move.F2]) == Solution((Move.F3,), ())
    assert _join_phases([Move.R], [Move.U]) == Solution((Move.R,), (Move.U,))
    assert _join_phases([], [Move.D]) == Solution((), (Move.D,))


def test_solution_strings_and_movements():
    solution = Solution((Move.R, Move.U3), (Move.D2,))
    assert solution.length == 3
    assert str(solution) == "R U' D2"
    assert solution.phase1_to_string() == "R U'"
    assert solution.phase2_to_string() == "D2"
    assert len(solution.to_movements()) == 4
    assert len(solution.to_movements(split_half_turns=False)) == 3


def test_solve_facelets(table):
    facelets = "DRLUUBFBRBLURRLRUBLRDDFDLFUFUFFDBRDUBRUFLLFDDBFLUBLRBD"
    solution = solve_facelets(facelets, 23, table)
    assert solution is not None
    state = FaceCube.from_string(facelets).to_cubie()
    assert state.apply_moves(solution.all_moves()).is_solved()


def test_phase1_moves_reach_g1(table):
    # merging boundary moves only moves G1 moves between the phases
    for alg in ["F R B L", "R", "L U F2 R' D B"]:
        state = CubieCube.from_moves(parse_moves(alg))
        solution = Solver(table, 23).solve(state)
        cube = state.apply_moves(solution.phase1)
        assert co_to_index(cube.co) == 0
        assert eo_to_index(cube.eo) == 0
        assert e_combo_to_index(cube.ep) == 0

import numpy as np
import pytest

from py333 import ALL_MOVES, CubieCube, DataTable, PHASE2_MOVES, TableConstructionError
from py333.index import (
    N_CO,
    N_CP,
    N_E_COMBO,
    N_E_EP,
    N_EO,
    N_UD_EP,
    co_to_index,
    cp_to_index,
    e_combo_to_index,
    e_ep_to_index,
    eo_to_index,
    ud_ep_to_index,
)
from py333.scramble import random_scramble
from py333.index import Coord
from py333.tables import MOVE_TABLE_NAMES, PRUNING_TABLE_NAMES, MoveTable, PruningTable, moves_for


def test_move_table_shapes(table):
    mt = table.move_table
    assert mt.co.shape == (N_CO, 18)
    assert mt.eo.shape == (N_EO, 18)
    assert mt.e_combo.shape == (N_E_COMBO, 18)
    assert mt.cp.shape == (N_CP, 10)
    assert mt.ud_ep.shape == (N_UD_EP, 10)
    assert mt.e_ep.shape == (N_E_EP, 10)


def test_moves_per_coordinate():
    for kind in (Coord.CO, Coord.EO, Coord.E_COMBO):
        assert moves_for(kind) == ALL_MOVES
    for kind in (Coord.CP, Coord.UD_EP, Coord.E_EP):
        assert moves_for(kind) == PHASE2_MOVES


def test_pruning_table_shapes(table):
    pt = table.pruning_table
    assert pt.co_e.shape == (N_CO, N_E_COMBO)
    assert pt.eo_e.shape == (N_EO, N_E_COMBO)
    assert pt.cp_e.shape == (N_CP, N_E_EP)
    assert pt.ep_e.shape == (N_UD_EP, N_E_EP)


def test_tables_are_read_only(table):
    with pytest.raises(ValueError):
        table.move_table.co[0, 0] = 1
    with pytest.raises(ValueError):
        table.pruning_table.co_e[0, 0] = 1


def test_move_table_rows_are_permutations(table):
    # every move is invertible, so each column is a permutation of the coordinate range
    for name in MOVE_TABLE_NAMES:
        arr = getattr(table.move_table, name)
        for col in range(arr.shape[1]):
            assert np.array_equal(np.sort(arr[:, col]), np.arange(arr.shape[0])), (name, col)


def test_move_tables_agree_with_cubie_moves(table):
    mt = table.move_table
    rng = np.random.default_rng(11)
    for _ in range(20):
        cube = CubieCube.from_moves(random_scramble(15, rng))
        for m in ALL_MOVES:
            nxt = cube.apply_move(m)
            assert mt.co[co_to_index(cube.co), m] == co_to_index(nxt.co)
            assert mt.eo[eo_to_index(cube.eo), m] == eo_to_index(nxt.eo)
            assert mt.e_combo[e_combo_to_index(cube.ep), m] == e_combo_to_index(nxt.ep)


def test_phase2_move_tables_agree_with_cubie_moves(table):
    mt = table.move_table
    rng = np.random.default_rng(12)
    for _ in range(20):
        moves = [PHASE2_MOVES[int(i)] for i in rng.integers(0, 10, size=20)]
        cube = CubieCube.from_moves(moves)
        for col, m in enumerate(PHASE2_MOVES):
            nxt = cube.apply_move(m)
            assert mt.cp[cp_to_index(cube.cp), col] == cp_to_index(nxt.cp)
            assert mt.ud_ep[ud_ep_to_index(cube.ep), col] == ud_ep_to_index(nxt.ep)
            assert mt.e_ep[e_ep_to_index(cube.ep), col] == e_ep_to_index(nxt.ep)


@pytest.mark.parametrize("name", PRUNING_TABLE_NAMES)
def test_pruning_table_zero_only_at_solved_pair(table, name):
    arr = getattr(table.pruning_table, name)
    assert arr[0, 0] == 0
    assert np.count_nonzero(arr == 0) == 1
    assert arr.max() < 20


def test_pruning_table_known_values(table):
    pt = table.pruning_table
    cube = CubieCube().apply_move(ALL_MOVES[6])  # R
    assert pt.co_e[co_to_index(cube.co), e_combo_to_index(cube.ep)] == 1
    assert pt.eo_e[eo_to_index(cube.eo), e_combo_to_index(cube.ep)] == 1


@pytest.mark.parametrize("name,moves_a,moves_b", [
    ("co_e", "co", "e_combo"),
    ("eo_e", "eo", "e_combo"),
    ("cp_e", "cp", "e_ep"),
    ("ep_e", "ud_ep", "e_ep"),
])
def test_pruning_table_is_consistent(table, name, moves_a, moves_b):
    # one move changes the distance by at most one
    dist = getattr(table.pruning_table, name)
    ma = getattr(table.move_table, moves_a)
    mb = getattr(table.move_table, moves_b)
    rng = np.random.default_rng(5)
    a = rng.integers(0, dist.shape[0], size=2000)
    b = rng.integers(0, dist.shape[1], size=2000)
    here = dist[a, b].astype(int)
    for col in range(ma.shape[1]):
        there = dist[ma[a, col], mb[b, col]].astype(int)
        assert np.all(np.abs(there - here) <= 1)


def test_save_and_load_round_trip(table, tmp_path):
    path = str(tmp_path / "tables.npz")
    table.save(path)
    loaded = DataTable.load(path)
    for name in MOVE_TABLE_NAMES:
        assert np.array_equal(getattr(loaded.move_table, name), getattr(table.move_table, name))
    for name in PRUNING_TABLE_NAMES:
        assert np.array_equal(getattr(loaded.pruning_table, name), getattr(table.pruning_table, name))
    assert loaded.search.co_e == table.search.co_e


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DataTable.load(str(tmp_path / "nope.npz"))


def test_load_rejects_incomplete_archive(tmp_path):
    path = str(tmp_path / "broken.npz")
    np.savez_compressed(path, co=np.zeros((N_CO, 18), dtype=np.uint16))
    with pytest.raises(TableConstructionError):
        DataTable.load(path)


def test_constructor_rejects_wrong_shapes(table):
    arrays = {name: getattr(table.move_table, name) for name in MOVE_TABLE_NAMES}
    arrays["cp"] = np.zeros((10, 10), dtype=np.uint16)
    with pytest.raises(TableConstructionError):
        DataTable(MoveTable(**arrays), table.pruning_table)

    pruning = {name: getattr(table.pruning_table, name) for name in PRUNING_TABLE_NAMES}
    pruning["co_e"] = np.zeros((N_CO, 3), dtype=np.uint8)
    with pytest.raises(TableConstructionError):
        DataTable(table.move_table, PruningTable(**pruning))

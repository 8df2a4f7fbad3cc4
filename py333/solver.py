"""
Two-phase solver.

Phase 1 searches for a move sequence that brings the cube into G1, the
subgroup where every corner and edge is oriented and the four slice edges
sit in the middle slice. Phase 2 then solves the cube using only moves that
stay inside G1. Both phases are iterative-deepening depth-first searches
pruned with the BFS distance tables from `tables.py`.

The first phase-2 success is returned. A deeper phase-1 solution could
combine with a shorter phase 2 into a shorter total, so solutions are short
but not guaranteed minimal.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

from .cubie import CubieCube
from .facelet import FaceCube
from .index import (
  N_E_COMBO,
  N_E_EP,
  co_to_index,
  cp_to_index,
  e_combo_to_index,
  e_ep_to_index,
  eo_to_index,
  ud_ep_to_index,
)
from .movement import Movement, to_movements
from .moves import ALL_MOVES, PHASE2_MOVES, Move, format_moves, is_move_available, make_move
from .tables import DataTable, SearchTables, get_data_table

DEFAULT_MAX_LENGTH = 23

# a phase-1 path ending in one of these was already in G1 one move earlier
_G1_MOVES = frozenset(PHASE2_MOVES)


class Phase1State(NamedTuple):
  co: int
  eo: int
  e_combo: int

  @classmethod
  def from_cubie(cls, cube: CubieCube) -> "Phase1State":
    return cls(co_to_index(cube.co), eo_to_index(cube.eo), e_combo_to_index(cube.ep))

  def is_solved(self) -> bool:
    return self.co == 0 and self.eo == 0 and self.e_combo == 0

  def next(self, t: SearchTables, move: int) -> "Phase1State":
    return Phase1State(t.co[self.co][move], t.eo[self.eo][move], t.e_combo[self.e_combo][move])

  def prune(self, t: SearchTables, depth: int) -> bool:
    """True if the state cannot reach G1 in `depth` moves."""
    co_e_dist = t.co_e[self.co * N_E_COMBO + self.e_combo]
    eo_e_dist = t.eo_e[self.eo * N_E_COMBO + self.e_combo]
    return max(co_e_dist, eo_e_dist) > depth


class Phase2State(NamedTuple):
  cp: int
  ud_ep: int
  e_ep: int

  @classmethod
  def from_cubie(cls, cube: CubieCube) -> "Phase2State":
    return cls(cp_to_index(cube.cp), ud_ep_to_index(cube.ep), e_ep_to_index(cube.ep))

  def is_solved(self) -> bool:
    return self.cp == 0 and self.ud_ep == 0 and self.e_ep == 0

  def next(self, t: SearchTables, column: int) -> "Phase2State":
    # column is the position of the move in PHASE2_MOVES
    return Phase2State(t.cp[self.cp][column], t.ud_ep[self.ud_ep][column], t.e_ep[self.e_ep][column])

  def prune(self, t: SearchTables, depth: int) -> bool:
    cp_e_dist = t.cp_e[self.cp * N_E_EP + self.e_ep]
    ep_e_dist = t.ep_e[self.ud_ep * N_E_EP + self.e_ep]
    return max(cp_e_dist, ep_e_dist) > depth


@dataclass(frozen=True)
class Solution:
  """Phase-1 moves followed by phase-2 moves."""
  phase1: Tuple[Move, ...] = ()
  phase2: Tuple[Move, ...] = ()

  @property
  def length(self) -> int:
    return len(self.phase1) + len(self.phase2)

  def is_empty(self) -> bool:
    return not self.phase1 and not self.phase2

  def all_moves(self) -> List[Move]:
    return list(self.phase1) + list(self.phase2)

  def phase1_to_string(self) -> str:
    return format_moves(self.phase1)

  def phase2_to_string(self) -> str:
    return format_moves(self.phase2)

  def to_movements(self, split_half_turns: bool = True) -> List[Movement]:
    return to_movements(self.all_moves(), split_half_turns)

  def __str__(self) -> str:
    return format_moves(self.all_moves())


def _join_phases(phase1: List[Move], phase2: List[Move]) -> Solution:
  """Merge turns of the same face meeting at the phase boundary.

  e.g. R followed by R2 becomes R', R followed by R' disappears.
  """
  phase1 = list(phase1)
  phase2 = list(phase2)
  while phase1 and phase2 and phase1[-1].face == phase2[0].face:
    last = phase1.pop()
    first = phase2.pop(0)
    power = (last.power + first.power) % 4
    if power:
      phase1.append(make_move(last.face, power))
  return Solution(tuple(phase1), tuple(phase2))


class Solver:
  """Solves one cube at a time against a shared, read-only DataTable.

  Solver instances keep the current search path, so give each thread its
  own instance.
  """

  def __init__(self, table: DataTable, max_length: int = DEFAULT_MAX_LENGTH):
    if max_length < 0:
      raise ValueError(f"max_length must be >= 0, got {max_length}")
    self.table = table
    self.max_length = max_length
    self.clear()

  def clear(self):
    """Reset the per-solve scratch state."""
    self.initial_state = CubieCube()
    self.solution_phase1: List[Move] = []
    self.solution_phase2: List[Move] = []
    self.best_solution: Optional[Solution] = None
    self.nodes_expanded = 0

  def solve(self, state: CubieCube) -> Optional[Solution]:
    """Return a Solution of at most max_length moves, or None.

    Raises InvalidCubeStateError before searching if the cube is unreachable.
    """
    state.verify()
    self.clear()
    self.initial_state = state
    start = Phase1State.from_cubie(state)

    for depth in range(self.max_length + 1):
      if self._solve_phase1(start, depth):
        return self.best_solution
    return None

  def _solve_phase1(self, state: Phase1State, depth: int) -> bool:
    self.nodes_expanded += 1
    if depth == 0:
      if state.is_solved():
        return self._start_phase2()
      return False

    t = self.table.search
    if state.prune(t, depth):
      return False

    path = self.solution_phase1
    prev = path[-1] if path else None
    for m in ALL_MOVES:
      if prev is not None and not is_move_available(prev, m):
        continue
      if depth == 1 and m in _G1_MOVES:
        continue
      path.append(m)
      found = self._solve_phase1(state.next(t, m), depth - 1)
      path.pop()
      if found:
        return True
    return False

  def _start_phase2(self) -> bool:
    cube = self.initial_state.apply_moves(self.solution_phase1)
    start = Phase2State.from_cubie(cube)
    budget = self.max_length - len(self.solution_phase1)

    for depth in range(budget + 1):
      if self._solve_phase2(start, depth):
        return True
    return False

  def _solve_phase2(self, state: Phase2State, depth: int) -> bool:
    self.nodes_expanded += 1
    if depth == 0:
      if state.is_solved():
        self.best_solution = _join_phases(self.solution_phase1, self.solution_phase2)
        return True
      return False

    t = self.table.search
    if state.prune(t, depth):
      return False

    path = self.solution_phase2
    prev = path[-1] if path else None
    for column, m in enumerate(PHASE2_MOVES):
      if prev is not None and not is_move_available(prev, m):
        continue
      path.append(m)
      found = self._solve_phase2(state.next(t, column), depth - 1)
      path.pop()
      if found:
        return True
    return False


def solve(state: CubieCube, max_length: int = DEFAULT_MAX_LENGTH,
          table: Optional[DataTable] = None) -> Optional[Solution]:
  """Solve a cubie cube with the process-wide tables unless `table` is given."""
  state.verify()
  if table is None:
    table = get_data_table()
  return Solver(table, max_length).solve(state)


def solve_facelets(facelets: str, max_length: int = DEFAULT_MAX_LENGTH,
                   table: Optional[DataTable] = None) -> Optional[Solution]:
  """Translate a 54-sticker string, check it, and solve it.

  Raises MalformedInputError or InvalidCubeStateError before any search.
  """
  state = FaceCube.from_string(facelets).to_cubie()
  return solve(state, max_length, table)

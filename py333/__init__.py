from .moves import (
  Move,
  ALL_MOVES,
  PHASE2_MOVES,
  is_move_available,
  parse_moves,
  format_moves,
  invert_moves,
)

from .cubie import (
  CubieCube,
  SOLVED_CUBIE_CUBE,
)

from .facelet import (
  FaceCube,
  SOLVED_FACELETS,
)

from .tables import (
  DataTable,
  get_data_table,
)

from .solver import (
  Solution,
  Solver,
  solve,
  solve_facelets,
)

from .movement import (
  Movement,
  RotateAxis,
  Direction,
  to_movements,
)

from .scramble import (
  random_scramble,
  scramble_cube,
)

from .config import SolverConfig

from .errors import (
  CubeError,
  MalformedInputError,
  InvalidCubeStateError,
  TableConstructionError,
)

__all__ = [
  'Move',
  'ALL_MOVES',
  'PHASE2_MOVES',
  'is_move_available',
  'parse_moves',
  'format_moves',
  'invert_moves',
  'CubieCube',
  'SOLVED_CUBIE_CUBE',
  'FaceCube',
  'SOLVED_FACELETS',
  'DataTable',
  'get_data_table',
  'Solution',
  'Solver',
  'solve',
  'solve_facelets',
  'Movement',
  'RotateAxis',
  'Direction',
  'to_movements',
  'random_scramble',
  'scramble_cube',
  'SolverConfig',
  'CubeError',
  'MalformedInputError',
  'InvalidCubeStateError',
  'TableConstructionError',
]

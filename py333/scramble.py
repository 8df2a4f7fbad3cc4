from typing import List, Optional, Tuple

import numpy as np

from .cubie import CubieCube
from .moves import ALL_MOVES, N_MOVES, Move, is_move_available


def random_scramble(length: int = 25, rng: Optional[np.random.Generator] = None) -> List[Move]:
  """Random move sequence with no redundant neighbours (e.g. no "R R'", no "D U")."""
  if rng is None:
    rng = np.random.default_rng()

  moves: List[Move] = []
  while len(moves) < length:
    move = ALL_MOVES[int(rng.integers(0, N_MOVES))]
    if moves and not is_move_available(moves[-1], move):
      continue
    moves.append(move)
  return moves


def scramble_cube(length: int = 25, rng: Optional[np.random.Generator] = None) -> Tuple[CubieCube, List[Move]]:
  moves = random_scramble(length, rng)
  return CubieCube.from_moves(moves), moves

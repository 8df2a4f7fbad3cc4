from enum import IntEnum
from typing import List, Sequence

from .errors import MalformedInputError

# Faces are ordered so that opposite faces sit next to each other:
# (U, D), (R, L), (F, B)
FACES = ["U", "D", "R", "L", "F", "B"]
OPPOSITE_FACE = {0: 1, 1: 0, 2: 3, 3: 2, 4: 5, 5: 4}

POWER_SUFFIX = {1: "", 2: "2", 3: "'"}


class Move(IntEnum):
  """The 18 face turns. Ordinal = 3 * face + (power - 1)."""
  U = 0
  U2 = 1
  U3 = 2
  D = 3
  D2 = 4
  D3 = 5
  R = 6
  R2 = 7
  R3 = 8
  L = 9
  L2 = 10
  L3 = 11
  F = 12
  F2 = 13
  F3 = 14
  B = 15
  B2 = 16
  B3 = 17

  @property
  def face(self) -> int:
    return self // 3

  @property
  def power(self) -> int:
    """Number of clockwise quarter turns (1, 2 or 3)."""
    return self % 3 + 1

  @property
  def inverse(self) -> "Move":
    return Move(3 * self.face + (3 - self.power))

  @property
  def is_half_turn(self) -> bool:
    return self.power == 2

  def __str__(self) -> str:
    return FACES[self.face] + POWER_SUFFIX[self.power]


ALL_MOVES = list(Move)

# moves that keep a cube inside G1
PHASE2_MOVES = [
  Move.U, Move.U2, Move.U3,
  Move.D, Move.D2, Move.D3,
  Move.R2, Move.L2, Move.F2, Move.B2,
]

N_MOVES = len(ALL_MOVES)

MOVE_NAMES = [str(m) for m in ALL_MOVES]
_NAME_TO_MOVE = {str(m): m for m in ALL_MOVES}
# accept the "U3" spelling as well as "U'"
_NAME_TO_MOVE.update({m.name: m for m in ALL_MOVES})


def make_move(face: int, power: int) -> Move:
  return Move(3 * face + (power - 1))


def is_move_available(prev: Move, current: Move) -> bool:
  """Whether `current` may follow `prev` in a search path.

  Two turns of the same face collapse into one, and turns of opposite
  faces commute, so only the order U..D, R..L, F..B is kept.
  """
  if prev.face == current.face:
    return False
  if OPPOSITE_FACE[prev.face] == current.face and current.face < prev.face:
    return False
  return True


def parse_move(token: str) -> Move:
  try:
    return _NAME_TO_MOVE[token]
  except KeyError:
    raise MalformedInputError(f"Unknown move '{token}'. Allowed moves: {' '.join(MOVE_NAMES)}") from None


def parse_moves(alg: str) -> List[Move]:
  """Parse a space separated move string such as "R U R' U2"."""
  return [parse_move(tok) for tok in alg.split()]


def format_moves(moves: Sequence[Move]) -> str:
  return " ".join(str(m) for m in moves)


def invert_moves(moves: Sequence[Move]) -> List[Move]:
  return [m.inverse for m in reversed(moves)]

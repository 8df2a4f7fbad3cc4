from dataclasses import dataclass
from typing import Iterable, Tuple

from .errors import InvalidCubeStateError
from .moves import Move

# Corner slots: URF, UFL, ULB, UBR, DFR, DLF, DBL, DRB
# Edge slots:   UR, UF, UL, UB, DR, DF, DL, DB, FR, FL, BL, BR
CORNER_NAMES = ["URF", "UFL", "ULB", "UBR", "DFR", "DLF", "DBL", "DRB"]
EDGE_NAMES = ["UR", "UF", "UL", "UB", "DR", "DF", "DL", "DB", "FR", "FL", "BL", "BR"]


def _parity(perm: Tuple[int, ...]) -> int:
  inversions = 0
  for i in range(len(perm)):
    for j in range(i + 1, len(perm)):
      if perm[i] > perm[j]:
        inversions += 1
  return inversions % 2


@dataclass(frozen=True)
class CubieCube:
  """Cube on the cubie level.

  cp[i] is the corner piece sitting in slot i, co[i] its twist (0, 1, 2);
  ep[i] and eo[i] are the same for edges (flip 0 or 1).
  """
  cp: Tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6, 7)
  co: Tuple[int, ...] = (0,) * 8
  ep: Tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11)
  eo: Tuple[int, ...] = (0,) * 12

  def multiply(self, other: "CubieCube") -> "CubieCube":
    """Apply `other` on top of this cube (self followed by other)."""
    cp = tuple(self.cp[p] for p in other.cp)
    co = tuple((self.co[p] + t) % 3 for p, t in zip(other.cp, other.co))
    ep = tuple(self.ep[p] for p in other.ep)
    eo = tuple((self.eo[p] + f) % 2 for p, f in zip(other.ep, other.eo))
    return CubieCube(cp, co, ep, eo)

  def inverse(self) -> "CubieCube":
    cp = [0] * 8
    co = [0] * 8
    for i, p in enumerate(self.cp):
      cp[p] = i
    for i, p in enumerate(self.cp):
      co[p] = (-self.co[i]) % 3
    ep = [0] * 12
    eo = [0] * 12
    for i, p in enumerate(self.ep):
      ep[p] = i
      eo[p] = self.eo[i]
    return CubieCube(tuple(cp), tuple(co), tuple(ep), tuple(eo))

  def apply_move(self, move: Move) -> "CubieCube":
    return self.multiply(MOVE_CUBES[move])

  def apply_moves(self, moves: Iterable[Move]) -> "CubieCube":
    cube = self
    for m in moves:
      cube = cube.multiply(MOVE_CUBES[m])
    return cube

  @classmethod
  def from_moves(cls, moves: Iterable[Move]) -> "CubieCube":
    return cls().apply_moves(moves)

  def is_solved(self) -> bool:
    return self == SOLVED_CUBIE_CUBE

  def corner_parity(self) -> int:
    return _parity(self.cp)

  def edge_parity(self) -> int:
    return _parity(self.ep)

  def verify(self) -> "CubieCube":
    """Raise InvalidCubeStateError unless the cube is reachable. Returns self."""
    if sorted(self.cp) != list(range(8)) or len(self.co) != 8:
      raise InvalidCubeStateError("Corner permutation is not a permutation of 8 corners")
    if sorted(self.ep) != list(range(12)) or len(self.eo) != 12:
      raise InvalidCubeStateError("Edge permutation is not a permutation of 12 edges")
    if any(t not in (0, 1, 2) for t in self.co):
      raise InvalidCubeStateError(f"Corner twist out of range: {self.co}")
    if any(f not in (0, 1) for f in self.eo):
      raise InvalidCubeStateError(f"Edge flip out of range: {self.eo}")
    if sum(self.co) % 3 != 0:
      raise InvalidCubeStateError("Total corner twist is not a multiple of 3 (a corner is twisted)")
    if sum(self.eo) % 2 != 0:
      raise InvalidCubeStateError("Total edge flip is odd (an edge is flipped)")
    if self.corner_parity() != self.edge_parity():
      raise InvalidCubeStateError("Corner and edge permutation parities differ (two pieces are swapped)")
    return self

  def __str__(self) -> str:
    corners = " ".join(f"{CORNER_NAMES[p]}{t}" for p, t in zip(self.cp, self.co))
    edges = " ".join(f"{EDGE_NAMES[p]}{f}" for p, f in zip(self.ep, self.eo))
    return f"corners: {corners}\nedges:   {edges}"


SOLVED_CUBIE_CUBE = CubieCube()

# the six clockwise face turns, written as "slot i receives the piece from slot p"
_BASIC_TURNS = {
  "U": CubieCube(
    cp=(3, 0, 1, 2, 4, 5, 6, 7), co=(0, 0, 0, 0, 0, 0, 0, 0),
    ep=(3, 0, 1, 2, 4, 5, 6, 7, 8, 9, 10, 11), eo=(0,) * 12),
  "D": CubieCube(
    cp=(0, 1, 2, 3, 5, 6, 7, 4), co=(0, 0, 0, 0, 0, 0, 0, 0),
    ep=(0, 1, 2, 3, 5, 6, 7, 4, 8, 9, 10, 11), eo=(0,) * 12),
  "R": CubieCube(
    cp=(4, 1, 2, 0, 7, 5, 6, 3), co=(2, 0, 0, 1, 1, 0, 0, 2),
    ep=(8, 1, 2, 3, 11, 5, 6, 7, 4, 9, 10, 0), eo=(0,) * 12),
  "L": CubieCube(
    cp=(0, 2, 6, 3, 4, 1, 5, 7), co=(0, 1, 2, 0, 0, 2, 1, 0),
    ep=(0, 1, 10, 3, 4, 5, 9, 7, 8, 2, 6, 11), eo=(0,) * 12),
  "F": CubieCube(
    cp=(1, 5, 2, 3, 0, 4, 6, 7), co=(1, 2, 0, 0, 2, 1, 0, 0),
    ep=(0, 9, 2, 3, 4, 8, 6, 7, 1, 5, 10, 11), eo=(0, 1, 0, 0, 0, 1, 0, 0, 1, 1, 0, 0)),
  "B": CubieCube(
    cp=(0, 1, 3, 7, 4, 5, 2, 6), co=(0, 0, 1, 2, 0, 0, 2, 1),
    ep=(0, 1, 2, 11, 4, 5, 6, 10, 8, 9, 3, 7), eo=(0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 1)),
}


def _build_move_cubes():
  cubes = []
  for face in ["U", "D", "R", "L", "F", "B"]:
    turn = _BASIC_TURNS[face]
    cube = SOLVED_CUBIE_CUBE
    for _ in range(3):
      cube = cube.multiply(turn)
      cubes.append(cube)
  return cubes


# indexed by Move
MOVE_CUBES = _build_move_cubes()

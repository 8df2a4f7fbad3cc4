# Translate solver moves into layer rotations for a renderer that models the
# cube as a 3x3x3 grid: x runs L -> R, y runs D -> U, z runs B -> F.
# Directions are seen looking from the positive end of the axis toward the
# origin, so turning L, D or B clockwise is a counter-clockwise rotation of
# layer 0.
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from .moves import Move


class RotateAxis(Enum):
  X = "x"
  Y = "y"
  Z = "z"


class Direction(Enum):
  CLOCKWISE = "clockwise"
  COUNTER_CLOCKWISE = "counter_clockwise"

  def reversed(self) -> "Direction":
    if self is Direction.CLOCKWISE:
      return Direction.COUNTER_CLOCKWISE
    return Direction.CLOCKWISE


@dataclass(frozen=True)
class Movement:
  axis: RotateAxis
  layer: int
  direction: Direction
  # quarter turns in this step: 1, or 2 when half turns are not split
  turns: int = 1


# face -> (axis, layer, direction of a clockwise face turn)
_FACE_LAYERS = {
  0: (RotateAxis.Y, 2, Direction.CLOCKWISE),          # U
  1: (RotateAxis.Y, 0, Direction.COUNTER_CLOCKWISE),  # D
  2: (RotateAxis.X, 2, Direction.CLOCKWISE),          # R
  3: (RotateAxis.X, 0, Direction.COUNTER_CLOCKWISE),  # L
  4: (RotateAxis.Z, 2, Direction.CLOCKWISE),          # F
  5: (RotateAxis.Z, 0, Direction.COUNTER_CLOCKWISE),  # B
}


def move_to_movements(move: Move, split_half_turns: bool = True) -> List[Movement]:
  axis, layer, direction = _FACE_LAYERS[move.face]
  if move.power == 3:
    return [Movement(axis, layer, direction.reversed())]
  if move.power == 2:
    if split_half_turns:
      step = Movement(axis, layer, direction)
      return [step, step]
    return [Movement(axis, layer, direction, turns=2)]
  return [Movement(axis, layer, direction)]


def to_movements(moves: Iterable[Move], split_half_turns: bool = True) -> List[Movement]:
  """Expand moves into the layer rotations an animation has to play."""
  result = []
  for m in moves:
    result.extend(move_to_movements(m, split_half_turns))
  return result

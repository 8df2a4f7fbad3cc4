# coordinate encodings: every function maps one part of a cubie cube to
# a dense integer, and the solved cube always maps to 0
from enum import IntEnum
from math import comb, factorial
from typing import Sequence

N_CO = 3 ** 7        # 2187
N_EO = 2 ** 11       # 2048
N_E_COMBO = comb(12, 4)  # 495
N_CP = factorial(8)  # 40320
N_UD_EP = factorial(8)   # 40320
N_E_EP = factorial(4)    # 24

# first slice edge (FR); FR, FL, BL, BR occupy slots 8..11 when solved
SLICE_START = 8


class Coord(IntEnum):
  CO = 0
  EO = 1
  E_COMBO = 2
  CP = 3
  UD_EP = 4
  E_EP = 5


COORD_SIZES = {
  Coord.CO: N_CO,
  Coord.EO: N_EO,
  Coord.E_COMBO: N_E_COMBO,
  Coord.CP: N_CP,
  Coord.UD_EP: N_UD_EP,
  Coord.E_EP: N_E_EP,
}

# coordinates searched in phase 1 with all 18 moves
PHASE1_COORDS = [Coord.CO, Coord.EO, Coord.E_COMBO]


def perm_rank(perm: Sequence[int]) -> int:
  """Lehmer code of a permutation of distinct values, in [0, n!)."""
  n = len(perm)
  idx = 0
  for i in range(n):
    v = perm[i]
    less = 0
    for j in range(i + 1, n):
      if perm[j] < v:
        less += 1
    idx = idx * (n - i) + less
  return idx


def co_to_index(co: Sequence[int]) -> int:
  # the last corner is fixed by the twist sum
  idx = 0
  for i in range(7):
    idx = idx * 3 + co[i]
  return idx


def eo_to_index(eo: Sequence[int]) -> int:
  idx = 0
  for i in range(11):
    idx = idx * 2 + eo[i]
  return idx


def e_combo_to_index(ep: Sequence[int]) -> int:
  """Rank of the set of slots holding slice edges.

  Slots are scanned from BR down to UR so that the solved placement
  (slots 8..11) ranks 0.
  """
  idx = 0
  found = 0
  for slot in range(11, -1, -1):
    if ep[slot] >= SLICE_START:
      idx += comb(11 - slot, found + 1)
      found += 1
  return idx


def cp_to_index(cp: Sequence[int]) -> int:
  return perm_rank(cp)


def ud_ep_to_index(ep: Sequence[int]) -> int:
  # only meaningful inside G1, where slots 0..7 hold edges 0..7
  return perm_rank(ep[:SLICE_START])


def e_ep_to_index(ep: Sequence[int]) -> int:
  return perm_rank(ep[SLICE_START:])


def coord_of(cube, kind: Coord) -> int:
  if kind == Coord.CO:
    return co_to_index(cube.co)
  if kind == Coord.EO:
    return eo_to_index(cube.eo)
  if kind == Coord.E_COMBO:
    return e_combo_to_index(cube.ep)
  if kind == Coord.CP:
    return cp_to_index(cube.cp)
  if kind == Coord.UD_EP:
    return ud_ep_to_index(cube.ep)
  if kind == Coord.E_EP:
    return e_ep_to_index(cube.ep)
  raise ValueError(f"Unknown coordinate {kind!r}")

"""
Move tables and pruning tables for the two-phase solver.

Both kinds of table are generated once by breadth-first search from the
solved cube and are read-only afterwards:

- a move table maps (coordinate, move column) -> coordinate
- a pruning table maps a pair of coordinates to the number of moves needed
  to bring both of them to 0, which is a lower bound on the cube distance

Phase-1 coordinates use all 18 moves, phase-2 coordinates only the 10 moves
of PHASE2_MOVES (column i is PHASE2_MOVES[i]).
"""

import os
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import numpy as np
from tqdm import tqdm

from .cubie import SOLVED_CUBIE_CUBE
from .errors import TableConstructionError
from .index import COORD_SIZES, PHASE1_COORDS, Coord, coord_of
from .moves import ALL_MOVES, PHASE2_MOVES, Move

UNVISITED = 255

MOVE_TABLE_NAMES = ["co", "eo", "e_combo", "cp", "ud_ep", "e_ep"]
PRUNING_TABLE_NAMES = ["co_e", "eo_e", "cp_e", "ep_e"]

# pruning table name -> the two coordinates it is built over
PRUNING_PAIRS = {
  "co_e": (Coord.CO, Coord.E_COMBO),
  "eo_e": (Coord.EO, Coord.E_COMBO),
  "cp_e": (Coord.CP, Coord.E_EP),
  "ep_e": (Coord.UD_EP, Coord.E_EP),
}


def moves_for(kind: Coord) -> List[Move]:
  if kind in PHASE1_COORDS:
    return ALL_MOVES
  return PHASE2_MOVES


def build_move_table(kind: Coord, verbose: bool = False) -> np.ndarray:
  """Breadth-first walk over one coordinate, starting from the solved cube.

  The first cube that reaches a coordinate value becomes its representative;
  its successors give that row of the table. No unranking is needed.
  """
  size = COORD_SIZES[kind]
  moves = moves_for(kind)

  rows: List[Optional[List[int]]] = [None] * size
  reps = [None] * size
  reps[0] = SOLVED_CUBIE_CUBE
  queue = deque([0])

  with tqdm(total=size, desc=f"Move table {kind.name.lower()}", disable=not verbose) as pbar:
    pbar.update(1)
    while queue:
      c = queue.popleft()
      cube = reps[c]
      row = []
      for m in moves:
        nxt = cube.apply_move(m)
        n = coord_of(nxt, kind)
        if not 0 <= n < size:
          raise TableConstructionError(f"{kind.name} index {n} outside [0, {size})")
        row.append(n)
        if reps[n] is None:
          reps[n] = nxt
          queue.append(n)
          pbar.update(1)
      rows[c] = row

  missing = sum(1 for r in rows if r is None)
  if missing:
    raise TableConstructionError(f"{kind.name}: {missing} of {size} coordinates never reached")

  table = np.array(rows, dtype=np.uint16)
  table.flags.writeable = False
  return table


def build_pruning_table(move_a: np.ndarray, move_b: np.ndarray, verbose: bool = False, desc: str = "") -> np.ndarray:
  """BFS distance from (0, 0) over the product of two coordinates.

  Each layer is expanded with all moves at once: pair (a, b) is stored
  flat as a * len(b) + b.
  """
  na, nb = move_a.shape[0], move_b.shape[0]
  if move_a.shape[1] != move_b.shape[1]:
    raise TableConstructionError(f"Move tables have different move sets: {move_a.shape} vs {move_b.shape}")

  dist = np.full(na * nb, UNVISITED, dtype=np.uint8)
  dist[0] = 0
  frontier = np.zeros(1, dtype=np.int64)
  depth = 0

  with tqdm(total=na * nb, desc=f"Pruning table {desc}", disable=not verbose) as pbar:
    pbar.update(1)
    while frontier.size:
      a, b = np.divmod(frontier, nb)
      nxt = move_a[a].astype(np.int64) * nb + move_b[b]
      nxt = np.unique(nxt.ravel())
      nxt = nxt[dist[nxt] == UNVISITED]
      depth += 1
      dist[nxt] = depth
      frontier = nxt
      pbar.update(int(nxt.size))

  unvisited = int(np.count_nonzero(dist == UNVISITED))
  if unvisited:
    raise TableConstructionError(f"Pruning table {desc}: {unvisited} of {na * nb} pairs never reached")

  table = dist.reshape(na, nb)
  table.flags.writeable = False
  return table


@dataclass(frozen=True)
class MoveTable:
  co: np.ndarray
  eo: np.ndarray
  e_combo: np.ndarray
  cp: np.ndarray
  ud_ep: np.ndarray
  e_ep: np.ndarray


@dataclass(frozen=True)
class PruningTable:
  co_e: np.ndarray
  eo_e: np.ndarray
  cp_e: np.ndarray
  ep_e: np.ndarray


class SearchTables(NamedTuple):
  """Plain-Python copies of the tables, used on the search hot path.

  Move tables are nested lists and pruning tables flat bytes, both of which
  index faster than numpy scalars.
  """
  co: List[List[int]]
  eo: List[List[int]]
  e_combo: List[List[int]]
  cp: List[List[int]]
  ud_ep: List[List[int]]
  e_ep: List[List[int]]
  co_e: bytes
  eo_e: bytes
  cp_e: bytes
  ep_e: bytes


def _expected_shape(name: str):
  if name in MOVE_TABLE_NAMES:
    kind = Coord[name.upper()]
    return (COORD_SIZES[kind], len(moves_for(kind)))
  a, b = PRUNING_PAIRS[name]
  return (COORD_SIZES[a], COORD_SIZES[b])


class DataTable:
  """Immutable bundle of all move and pruning tables.

  Build it once with DataTable.build() (or load a saved copy) and share it
  between any number of solvers and threads.
  """

  def __init__(self, move_table: MoveTable, pruning_table: PruningTable):
    for name in MOVE_TABLE_NAMES:
      self._check(name, getattr(move_table, name))
    for name in PRUNING_TABLE_NAMES:
      self._check(name, getattr(pruning_table, name))

    self.move_table = move_table
    self.pruning_table = pruning_table
    self.search = SearchTables(
      *(getattr(move_table, name).tolist() for name in MOVE_TABLE_NAMES),
      *(np.ascontiguousarray(getattr(pruning_table, name), dtype=np.uint8).tobytes()
        for name in PRUNING_TABLE_NAMES),
    )

  @staticmethod
  def _check(name: str, arr: np.ndarray):
    expected = _expected_shape(name)
    if arr.shape != expected:
      raise TableConstructionError(f"Table {name} has shape {arr.shape}, expected {expected}")
    arr.flags.writeable = False

  @classmethod
  def build(cls, verbose: bool = False) -> "DataTable":
    start = time.time()
    if verbose:
      print("generating move tables...")
    moves = {name: build_move_table(Coord[name.upper()], verbose) for name in MOVE_TABLE_NAMES}
    move_table = MoveTable(**moves)

    if verbose:
      print("generating pruning tables...")
    pruning = {}
    for name, (a, b) in PRUNING_PAIRS.items():
      pruning[name] = build_pruning_table(
        moves[MOVE_TABLE_NAMES[a]], moves[MOVE_TABLE_NAMES[b]], verbose, desc=name)
    pruning_table = PruningTable(**pruning)

    if verbose:
      print(f"tables ready in {time.time() - start:.1f}s")
    return cls(move_table, pruning_table)

  def save(self, path: str):
    """Write all tables to one compressed .npz archive."""
    directory = os.path.dirname(path)
    if directory:
      os.makedirs(directory, exist_ok=True)
    arrays = {name: getattr(self.move_table, name) for name in MOVE_TABLE_NAMES}
    arrays.update({name: getattr(self.pruning_table, name) for name in PRUNING_TABLE_NAMES})
    np.savez_compressed(path, **arrays)

  @classmethod
  def load(cls, path: str) -> "DataTable":
    if not os.path.exists(path):
      raise FileNotFoundError(f"Table file not found: {path}")
    with np.load(path) as data:
      missing = [n for n in MOVE_TABLE_NAMES + PRUNING_TABLE_NAMES if n not in data.files]
      if missing:
        raise TableConstructionError(f"Table file {path} is missing {', '.join(missing)}")
      move_table = MoveTable(**{n: data[n].astype(np.uint16) for n in MOVE_TABLE_NAMES})
      pruning_table = PruningTable(**{n: data[n].astype(np.uint8) for n in PRUNING_TABLE_NAMES})
    return cls(move_table, pruning_table)


_default_table: Optional[DataTable] = None
_default_lock = threading.Lock()


def get_data_table(cache_path: Optional[str] = None, verbose: bool = False) -> DataTable:
  """Process-wide DataTable, built (or loaded from `cache_path`) on first use.

  When `cache_path` is given but the file does not exist yet, the freshly
  built tables are written there.
  """
  global _default_table
  with _default_lock:
    if _default_table is None:
      if cache_path and os.path.exists(cache_path):
        if verbose:
          print(f"loading tables from {cache_path}")
        _default_table = DataTable.load(cache_path)
      else:
        _default_table = DataTable.build(verbose=verbose)
        if cache_path:
          _default_table.save(cache_path)
    return _default_table


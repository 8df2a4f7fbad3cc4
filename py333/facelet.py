"""
Facelet level description of the cube and its conversion to the cubie level.

A facelet string lists 54 stickers face by face in the order U, R, F, D, L, B,
each face read row by row as seen from outside the cube:

             U1 U2 U3
             U4 U5 U6
             U7 U8 U9
    L1 L2 L3 F1 F2 F3 R1 R2 R3 B1 B2 B3
    L4 L5 L6 F4 F5 F6 R4 R5 R6 B4 B5 B6
    L7 L8 L9 F7 F8 F9 R7 R8 R9 B7 B8 B9
             D1 D2 D3
             D4 D5 D6
             D7 D8 D9

Any six symbols can be used (colour letters for example); the centre
sticker of each face defines which symbol belongs to that face.
"""

from collections import Counter
from typing import Dict, List, Optional

from .cubie import CubieCube
from .errors import InvalidCubeStateError, MalformedInputError

FACE_ORDER = ["U", "R", "F", "D", "L", "B"]
N_FACELETS = 54
# index of the centre sticker of each face, in FACE_ORDER
CENTER_FACELETS = [4, 13, 22, 31, 40, 49]
SOLVED_FACELETS = "".join(face * 9 for face in FACE_ORDER)

U, R, F, D, L, B = range(6)

# sticker indices of each corner slot, starting with its U or D sticker and
# going clockwise
CORNER_FACELETS = [
  (8, 9, 20),    # URF
  (6, 18, 38),   # UFL
  (0, 36, 47),   # ULB
  (2, 45, 11),   # UBR
  (29, 26, 15),  # DFR
  (27, 44, 24),  # DLF
  (33, 53, 42),  # DBL
  (35, 17, 51),  # DRB
]

CORNER_COLORS = [
  (U, R, F), (U, F, L), (U, L, B), (U, B, R),
  (D, F, R), (D, L, F), (D, B, L), (D, R, B),
]

EDGE_FACELETS = [
  (5, 10),   # UR
  (7, 19),   # UF
  (3, 37),   # UL
  (1, 46),   # UB
  (32, 16),  # DR
  (28, 25),  # DF
  (30, 43),  # DL
  (34, 52),  # DB
  (23, 12),  # FR
  (21, 41),  # FL
  (50, 39),  # BL
  (48, 14),  # BR
]

EDGE_COLORS = [
  (U, R), (U, F), (U, L), (U, B),
  (D, R), (D, F), (D, L), (D, B),
  (F, R), (F, L), (B, L), (B, R),
]


class FaceCube:
  """54 stickers, each stored as a face number 0..5 in FACE_ORDER."""

  def __init__(self, faces: Optional[List[int]] = None):
    if faces is None:
      faces = [i // 9 for i in range(N_FACELETS)]
    self.faces = list(faces)

  @classmethod
  def from_string(cls, text: str, center_symbols: Optional[str] = None) -> "FaceCube":
    """Read a facelet string.

    `center_symbols` optionally gives the six reference symbols in
    U, R, F, D, L, B order; by default they are read from the centres.
    """
    text = "".join(text.split())
    if len(text) != N_FACELETS:
      raise MalformedInputError(f"Facelet string has {len(text)} stickers, expected {N_FACELETS}")

    if center_symbols is None:
      center_symbols = "".join(text[i] for i in CENTER_FACELETS)
    if len(center_symbols) != 6 or len(set(center_symbols)) != 6:
      raise MalformedInputError(f"The six centre symbols must be distinct, got '{center_symbols}'")
    for face, i in enumerate(CENTER_FACELETS):
      if text[i] != center_symbols[face]:
        raise MalformedInputError(
          f"Centre of face {FACE_ORDER[face]} is '{text[i]}', expected '{center_symbols[face]}'")

    symbol_to_face: Dict[str, int] = {s: face for face, s in enumerate(center_symbols)}
    unknown = sorted(set(text) - set(symbol_to_face))
    if unknown:
      raise MalformedInputError(
        f"Unknown sticker symbol(s) {unknown}. Allowed symbols: {sorted(symbol_to_face)}")

    counts = Counter(text)
    for s in center_symbols:
      if counts[s] != 9:
        raise MalformedInputError(f"Symbol '{s}' appears {counts[s]} times (expected 9)")

    return cls([symbol_to_face[c] for c in text])

  @classmethod
  def from_cubie(cls, cube: CubieCube) -> "FaceCube":
    faces = [i // 9 for i in range(N_FACELETS)]
    for slot in range(8):
      piece, twist = cube.cp[slot], cube.co[slot]
      for n in range(3):
        faces[CORNER_FACELETS[slot][(n + twist) % 3]] = CORNER_COLORS[piece][n]
    for slot in range(12):
      piece, flip = cube.ep[slot], cube.eo[slot]
      for n in range(2):
        faces[EDGE_FACELETS[slot][(n + flip) % 2]] = EDGE_COLORS[piece][n]
    return cls(faces)

  def to_string(self, symbols: str = "".join(FACE_ORDER)) -> str:
    return "".join(symbols[f] for f in self.faces)

  def __str__(self) -> str:
    return self.to_string()

  def to_cubie(self) -> CubieCube:
    """Identify every piece and check that the result is reachable."""
    f = self.faces
    cp: List[int] = []
    co: List[int] = []
    for slot in range(8):
      stickers = CORNER_FACELETS[slot]
      for twist in range(3):
        if f[stickers[twist]] in (U, D):
          break
      else:
        raise InvalidCubeStateError(f"Corner slot {slot} has no U or D sticker")
      col1 = f[stickers[(twist + 1) % 3]]
      col2 = f[stickers[(twist + 2) % 3]]
      for piece, colors in enumerate(CORNER_COLORS):
        if colors[0] == f[stickers[twist]] and colors[1] == col1 and colors[2] == col2:
          cp.append(piece)
          co.append(twist)
          break
      else:
        raise InvalidCubeStateError(f"Corner slot {slot} holds a corner that does not exist")

    ep: List[int] = []
    eo: List[int] = []
    for slot in range(12):
      a, b = f[EDGE_FACELETS[slot][0]], f[EDGE_FACELETS[slot][1]]
      for piece, colors in enumerate(EDGE_COLORS):
        if (a, b) == colors:
          ep.append(piece)
          eo.append(0)
          break
        if (b, a) == colors:
          ep.append(piece)
          eo.append(1)
          break
      else:
        raise InvalidCubeStateError(f"Edge slot {slot} holds an edge that does not exist")

    if len(set(cp)) != 8:
      raise InvalidCubeStateError("Some corner appears twice")
    if len(set(ep)) != 12:
      raise InvalidCubeStateError("Some edge appears twice")
    return CubieCube(tuple(cp), tuple(co), tuple(ep), tuple(eo)).verify()

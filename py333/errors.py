class CubeError(ValueError):
  """Base class for errors caused by bad caller input."""


class MalformedInputError(CubeError):
  """The facelet string or move string cannot be read."""


class InvalidCubeStateError(CubeError):
  """The cube described is not reachable by face turns from the solved cube."""


class TableConstructionError(RuntimeError):
  """A move or pruning table is inconsistent. Indicates a bug, never bad input."""

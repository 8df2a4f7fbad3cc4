from typing import Optional

from pydantic import BaseModel, Field

from .solver import DEFAULT_MAX_LENGTH, Solver
from .tables import DataTable, get_data_table


class SolverConfig(BaseModel):
  # God's number is 20; a few extra moves keep the two-phase search fast
  max_length: int = Field(default=DEFAULT_MAX_LENGTH, ge=0, le=50)

  # .npz file with prebuilt tables; built and written on first use if missing
  table_path: Optional[str] = None

  verbose: bool = False

  def load_table(self) -> DataTable:
    return get_data_table(self.table_path, self.verbose)

  def make_solver(self) -> Solver:
    return Solver(self.load_table(), self.max_length)

# Build the move and pruning tables of the two-phase solver and save them
# to a compressed .npz archive, so later runs can load instead of rebuild.
#
# The archive holds one array per table:
#   move tables:    co, eo, e_combo (18 moves), cp, ud_ep, e_ep (10 moves)
#   pruning tables: co_e, eo_e, cp_e, ep_e

import numpy as np
from argdantic import ArgParser
from pydantic import BaseModel

from py333 import DataTable
from py333.tables import MOVE_TABLE_NAMES, PRUNING_TABLE_NAMES

cli = ArgParser()


class BuildTablesConfig(BaseModel):
    output_path: str = "data/py333_tables.npz"


def print_distance_histogram(name: str, table: np.ndarray):
    values, counts = np.unique(table, return_counts=True)
    print(f"\n{name} {table.shape}:")
    for v, c in zip(values, counts):
        print(f"  {int(v):2d} moves: {int(c):8d}")


@cli.command(singleton=True)
def build_tables(config: BuildTablesConfig):
    """Generate all tables and write them to disk."""
    if not config.output_path.endswith(".npz"):
        raise ValueError(f"output_path must end with .npz, got {config.output_path}")

    table = DataTable.build(verbose=True)

    for name in MOVE_TABLE_NAMES:
        print(f"move table {name}: {getattr(table.move_table, name).shape}")
    for name in PRUNING_TABLE_NAMES:
        print_distance_histogram(name, getattr(table.pruning_table, name))

    table.save(config.output_path)
    print(f"\nSaved tables to {config.output_path}")


if __name__ == "__main__":
    cli()

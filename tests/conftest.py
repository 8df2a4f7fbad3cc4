import pytest

from py333 import DataTable


@pytest.fixture(scope="session")
def table():
    """All move and pruning tables, built once for the whole test run."""
    return DataTable.build()

import pytest

from grocery_utils.database import create_schema, get_connection


@pytest.fixture
def conn(tmp_path):
    """A fresh grocery database in a temporary directory."""
    conn = get_connection(tmp_path / "data" / "groceries.db")
    create_schema(conn)
    yield conn
    conn.close()

import logging
import sqlite3

import pytest

from workflow.db import DB


@pytest.fixture
def db():
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE t (id INTEGER PRIMARY KEY AUTOINCREMENT, a TEXT, b INTEGER)")
    connection.commit()
    database = DB(connection, False)
    yield database
    database.close()


def _rows(db):
    return db.connection.execute("SELECT id, a, b FROM t ORDER BY id").fetchall()


def test_insert_sql_shape(db):
    query, values = db.insert_sql("t", {"a": "x", "b": 2})
    assert query == "INSERT INTO t(a,b) VALUES(?,?)"
    assert values == ["x", 2]


def test_insert_sql_rejects_empty(db):
    with pytest.raises(ValueError):
        db.insert_sql("t", {})


def test_insert_returns_last_id(db):
    first = db.insert("t", {"a": "x", "b": 1})
    second = db.insert("t", {"a": "y", "b": 2})
    assert second == first + 1
    assert _rows(db) == [(first, "x", 1), (second, "y", 2)]


def test_update_sql_shape(db):
    query, values = db.update_sql("t", {"id": 1, "b": 3}, {"a": "z"})
    assert query == "UPDATE t SET a=? WHERE id=? and b=?"
    assert values == ["z", 1, 3]


def test_update_by_pk(db):
    row_id = db.insert("t", {"a": "x", "b": 1})
    db.insert("t", {"a": "y", "b": 2})
    assert db.update_by_pk("t", {"id": row_id}, {"a": "changed", "b": 9}) == 1
    assert _rows(db)[0] == (row_id, "changed", 9)
    assert db.update_by_pk("t", {"id": row_id + 100}, {"a": "none"}) == 0


def test_delete_sql_shape(db):
    query, values = db.delete_sql("t", {"id": 4, "a": "q"})
    assert query == "DELETE FROM t WHERE id=? and a=?"
    assert values == [4, "q"]


def test_delete_by_pk(db):
    row_id = db.insert("t", {"a": "x", "b": 1})
    other = db.insert("t", {"a": "y", "b": 2})
    assert db.delete_by_pk("t", {"id": row_id}) == 1
    assert [row[0] for row in _rows(db)] == [other]


def test_transaction_commits(db):
    with db.transaction():
        db.insert("t", {"a": "x", "b": 1})
        db.insert("t", {"a": "y", "b": 2})
    assert len(_rows(db)) == 2


def test_transaction_rolls_back(db):
    db.insert("t", {"a": "kept", "b": 0})
    with pytest.raises(RuntimeError):
        with db.transaction():
            db.insert("t", {"a": "x", "b": 1})
            raise RuntimeError("boom")
    assert [row[1] for row in _rows(db)] == ["kept"]


def test_nested_transaction_rolls_back_everything(db):
    with pytest.raises(KeyError):
        with db.transaction():
            db.insert("t", {"a": "outer", "b": 1})
            with db.transaction():
                db.insert("t", {"a": "inner", "b": 2})
            raise KeyError("x")
    assert _rows(db) == []


def test_expand_in_expands_lists(db):
    query, args = db.expand_in("SELECT * FROM t WHERE b = ? AND id IN (?)", 5, [1, 2, 3])
    assert query == "SELECT * FROM t WHERE b = ? AND id IN (?, ?, ?)"
    assert args == [5, 1, 2, 3]


def test_expand_in_runs_against_database(db):
    ids = [db.insert("t", {"a": str(n), "b": n}) for n in range(4)]
    query, args = db.expand_in("SELECT a FROM t WHERE id IN (?) ORDER BY id", ids[1:3])
    rows = db.connection.execute(query, args).fetchall()
    assert rows == [("1",), ("2",)]


def test_expand_in_without_lists_passes_through(db):
    query, args = db.expand_in("SELECT * FROM t WHERE id = ?", 7)
    assert query == "SELECT * FROM t WHERE id = ?"
    assert args == [7]


def test_expand_in_empty_list(db):
    with pytest.raises(ValueError, match="empty slice"):
        db.expand_in("SELECT * FROM t WHERE id IN (?)", [])


def test_expand_in_too_few_arguments(db):
    with pytest.raises(ValueError, match="exceeds"):
        db.expand_in("SELECT * FROM t WHERE id IN (?) AND b = ?", [1, 2])


def test_expand_in_too_many_arguments(db):
    with pytest.raises(ValueError, match="less than"):
        db.expand_in("SELECT * FROM t WHERE id IN (?)", [1, 2], 3)


def test_trace_logs_flattened_query(caplog):
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, a TEXT)")
    database = DB(connection, True)
    with caplog.at_level(logging.INFO, logger="workflow.db"):
        database.delete_by_pk("t", {"id": 1})
    database.close()
    assert any("DELETE FROM t WHERE id=?" in record.getMessage() for record in caplog.records)
    assert all("\n" not in record.getMessage() for record in caplog.records)


def test_close_is_idempotent_and_blocks_use(db):
    db.close()
    db.close()
    assert db.connection is None
    with pytest.raises(RuntimeError):
        db.insert("t", {"a": "x"})
"""PostgreSQL 統合テスト: RETURNING による生成キーの取得."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from ormly import Dialect, ErrorKind, Ormly

pytestmark = pytest.mark.postgresql


@dataclass
class Person:
    """テスト用エンティティ."""

    id: int | None = None
    name: str = ""
    age: int = 0


@pytest.fixture
def db(pg_conn: Any) -> Ormly:
    """テスト用テーブルを作成する."""
    with pg_conn.cursor() as cur:
        cur.execute("DROP TABLE IF EXISTS persons")
        cur.execute("""
            CREATE TABLE persons (
                id SERIAL PRIMARY KEY,
                name TEXT NOT NULL,
                age INTEGER
            )
        """)
    pg_conn.commit()
    return Ormly.from_connection(pg_conn, auto_commit=True)


def _rows(conn: Any, sql: str) -> list[tuple]:
    with conn.cursor() as cur:
        cur.execute(sql)
        return cur.fetchall()


class TestPostgreSQL:
    """create / save / delete."""

    def test_detect_dialect(self, db: Ormly) -> None:
        assert db.executor.dialect == Dialect.POSTGRESQL

    def test_create_uses_returning(self, db: Ormly) -> None:
        person = Person(name="Alice", age=30)
        result = db.create(person)
        assert result.statement is not None
        assert result.statement.sql.endswith("RETURNING id")
        assert person.id == 1

    def test_save_and_delete(self, db: Ormly, pg_conn: Any) -> None:
        person = Person(name="Alice", age=30)
        db.create(person)
        person.age = 31
        assert db.save(person).rowcount == 1
        assert _rows(pg_conn, "SELECT name, age FROM persons") == [("Alice", 31)]
        assert db.delete(person).rowcount == 1
        assert _rows(pg_conn, "SELECT COUNT(*) FROM persons") == [(0,)]

    def test_execution_failure(self, db: Ormly, pg_conn: Any) -> None:
        result = db.create(Person(name=None))  # type: ignore[arg-type]
        assert result.error_kind is ErrorKind.EXECUTION
        pg_conn.rollback()

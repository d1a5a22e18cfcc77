#!/usr/bin/env python3
"""ormly CRUD Example.

This example demonstrates the basic usage of ormly:
- Entity definition (dataclass + Column mapping)
- create with generated key write-back
- save / delete by primary key
- Failures returned as PersistResult instead of exceptions

Usage:
    uv run python examples/crud_example.py
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Annotated

import structlog

from ormly import Column, Ormly

# =============================================================================
# Entity Definition
# =============================================================================


@dataclass
class User:
    """User entity (table: users).

    Use Annotated[T, Column("DB_COLUMN_NAME")] to define
    mapping between DB column names and field names.
    """

    id: int | None = None
    name: str = ""
    email: str = ""
    department: Annotated[str | None, Column("dept")] = None


# =============================================================================
# Database Setup
# =============================================================================


def setup_database() -> sqlite3.Connection:
    """Set up SQLite database for testing."""
    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            dept TEXT
        )
    """)
    return conn


def show(conn: sqlite3.Connection) -> None:
    for row in conn.execute("SELECT id, name, email, dept FROM users ORDER BY id"):
        print(f"  {row}")


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(20))

    conn = setup_database()
    db = Ormly.from_connection(conn, auto_commit=True)

    print("1. create")
    tanaka = User(name="Tanaka Taro", email="tanaka@example.com", department="Sales")
    suzuki = User(name="Suzuki Hanako", email="suzuki@example.com")
    db.create(tanaka)
    db.create(suzuki)
    print(f"  tanaka.id={tanaka.id}, suzuki.id={suzuki.id}")
    show(conn)

    print("2. save")
    suzuki.department = "Development"
    result = db.save(suzuki)
    print(f"  rowcount={result.rowcount}")
    show(conn)

    print("3. delete")
    db.delete(tanaka)
    show(conn)

    print("4. failures")
    duplicate = User(name="Suzuki Copy", email="suzuki@example.com")
    result = db.create(duplicate)
    print(f"  create duplicate: ok={result.ok}, kind={result.error_kind}")
    result = db.save(User(name="No Key"))
    print(f"  save without key: ok={result.ok}, kind={result.error_kind}")

    conn.close()


if __name__ == "__main__":
    main()

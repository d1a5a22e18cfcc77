"""Dialect enum: RDBMS ごとの SQL 方言定義."""

from __future__ import annotations

from enum import Enum


class Dialect(Enum):
    """RDBMS ごとの SQL 方言.

    POSTGRESQL と MYSQL は同じプレースホルダ ``%s`` を使用するが、
    生成キーの取得方法が異なるため別メンバーとして定義する。
    """

    SQLITE = ("sqlite", "?")
    POSTGRESQL = ("postgresql", "%s")
    MYSQL = ("mysql", "%s")
    ORACLE = ("oracle", ":name")

    def __init__(self, dialect_id: str, placeholder_fmt: str) -> None:
        self._dialect_id = dialect_id
        self._placeholder_fmt = placeholder_fmt

    @property
    def dialect_id(self) -> str:
        """方言識別子を返す."""
        return self._dialect_id

    @property
    def placeholder(self) -> str:
        """プレースホルダ文字列を返す."""
        return self._placeholder_fmt

    @property
    def is_named(self) -> bool:
        """名前付きプレースホルダ（``:name``）を使用するか."""
        return self._placeholder_fmt == ":name"

    @property
    def supports_returning(self) -> bool:
        """INSERT ... RETURNING で生成キーを取得するか.

        PostgreSQL ドライバの ``cursor.lastrowid`` は生成キーを返さないため、
        RETURNING 句で取得する。他の RDBMS は ``lastrowid`` を使用する。
        """
        match self:
            case Dialect.POSTGRESQL:
                return True
            case _:
                return False

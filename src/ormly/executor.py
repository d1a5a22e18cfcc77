"""Executor: SQL 文の実行."""

from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog

from ormly._messages import format_message
from ormly.dialect import Dialect
from ormly.exceptions import ExecutionError

if TYPE_CHECKING:
    from ormly.statement import Statement

logger = structlog.get_logger(__name__)


@runtime_checkable
class Executor(Protocol):
    """SQL 文を実行するインターフェース.

    実装はドライバの例外を ``ExecutionError`` として送出すること。
    """

    @property
    def dialect(self) -> Dialect | None:
        """プレースホルダ形式の決定に使用する RDBMS 方言."""
        ...

    def execute(self, statement: Statement) -> int:
        """UPDATE/DELETE を実行し、影響行数を返す."""
        ...

    def execute_insert(self, statement: Statement) -> Any:
        """INSERT を実行し、生成されたキーを返す."""
        ...


class Database:
    """PEP 249 DB-API 2.0 接続を使用する Executor.

    操作ごとにカーソルを取得し、戻る前に必ず閉じる。

    Examples:
        >>> db = Database(sqlite3.connect("app.db"), auto_commit=True)
        >>> db.execute(Statement("DELETE FROM persons WHERE id = ?", [1]))
        1

        コンテキストマネージャとして使用:

        >>> with Database(connection) as db:
        ...     db.execute(statement)
        # 正常終了 → connection の __exit__ により commit
        # 例外発生 → connection の __exit__ により rollback

    """

    def __init__(
        self,
        connection: Any,
        *,
        dialect: Dialect | None = None,
        auto_commit: bool = False,
    ) -> None:
        """初期化.

        Args:
            connection: DB 接続オブジェクト（PEP 249 DB-API 2.0 準拠）
            dialect: RDBMS 方言（None の場合は自動検出を試みる）
            auto_commit: True の場合、文の実行後に自動で commit する

        """
        self._connection = connection
        self._dialect = dialect if dialect is not None else self._detect_dialect()
        self._auto_commit = auto_commit

    @property
    def dialect(self) -> Dialect | None:
        """RDBMS 方言."""
        return self._dialect

    def __enter__(self) -> Database:
        """コンテキストマネージャ: connection に委譲."""
        self._connection.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        """コンテキストマネージャ: connection に委譲."""
        return self._connection.__exit__(exc_type, exc_val, exc_tb)

    def commit(self) -> None:
        """トランザクションをコミットする（connection.commit() のラッパー）."""
        self._connection.commit()

    def rollback(self) -> None:
        """トランザクションをロールバックする（connection.rollback() のラッパー）."""
        self._connection.rollback()

    def execute(self, statement: Statement) -> int:
        """UPDATE/DELETE を実行し、影響行数を返す.

        Raises:
            ExecutionError: 実行に失敗した場合

        """
        cursor = self._execute(statement)
        try:
            return cursor.rowcount
        finally:
            cursor.close()

    def execute_insert(self, statement: Statement) -> Any:
        """INSERT を実行し、生成されたキーを返す.

        RETURNING 句で行が返る場合はその先頭カラム、それ以外は
        ``cursor.lastrowid`` を返す。Oracle の ``lastrowid`` は ROWID のため None とする。
        MySQL の ``lastrowid`` が 0 の場合も None とする。

        Raises:
            ExecutionError: 実行に失敗した場合

        """
        cursor = self._execute(statement)
        try:
            if cursor.description is not None:
                row = cursor.fetchone()
                return None if row is None else _first_column(row)
            if self._dialect is Dialect.ORACLE:
                return None
            # pymysql は生成キーがない場合 0 を返す
            if self._dialect is Dialect.MYSQL and not cursor.lastrowid:
                return None
            return cursor.lastrowid
        finally:
            cursor.close()

    def _execute(self, statement: Statement) -> Any:
        """SQL 文を実行し、カーソルを返す."""
        cursor = self._connection.cursor()
        try:
            cursor.execute(statement.sql, statement.bind_values)
            if self._auto_commit:
                self._connection.commit()
        except Exception as e:
            cursor.close()
            msg = format_message("execution_failed", error=str(e), sql=statement.sql)
            raise ExecutionError(msg) from e
        logger.debug(
            "statement_executed",
            dialect=None if self._dialect is None else self._dialect.dialect_id,
            sql=statement.sql,
            param_count=len(statement.bind_values),
        )
        return cursor

    def _detect_dialect(self) -> Dialect | None:
        """Connection オブジェクトから Dialect を自動検出する."""
        module = type(self._connection).__module__
        if "sqlite3" in module:
            return Dialect.SQLITE
        if "psycopg" in module:
            return Dialect.POSTGRESQL
        if "pymysql" in module:
            return Dialect.MYSQL
        if "oracledb" in module:
            return Dialect.ORACLE
        return None


def _first_column(row: Any) -> Any:
    if isinstance(row, Mapping):
        return next(iter(row.values()), None)
    return row[0]

"""Ormly: エンティティ永続化の高レベル API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from ormly._prepare import prepare_delete, prepare_insert, prepare_update
from ormly.exceptions import OrmlyError
from ormly.executor import Database
from ormly.extractor import require_key_mutator, write_primary_key
from ormly.result import PersistResult

if TYPE_CHECKING:
    from ormly.dialect import Dialect
    from ormly.executor import Executor
    from ormly.statement import Statement

logger = structlog.get_logger(__name__)


class Ormly:
    """エンティティの create / save / delete を提供する.

    属性の抽出、SQL 文の生成、実行、生成キーの書き戻しを統合する。
    各操作は 1 文を 1 回だけ実行し、失敗しても例外を送出せずに
    ``PersistResult`` で結果を返す。

    Examples:
        >>> db = Ormly.from_connection(connection, auto_commit=True)
        >>> person = Person(name="Alice", age=30)
        >>> db.create(person).ok
        True
        >>> person.id
        1
        >>> person.age = 31
        >>> db.save(person).rowcount
        1
        >>> db.delete(person).ok
        True

    """

    def __init__(self, executor: Executor) -> None:
        """初期化.

        Args:
            executor: SQL 文を実行する Executor

        """
        self._executor = executor

    @classmethod
    def from_connection(
        cls,
        connection: Any,
        *,
        dialect: Dialect | None = None,
        auto_commit: bool = False,
    ) -> Ormly:
        """DB-API 接続から生成する.

        Args:
            connection: DB 接続オブジェクト（PEP 249 DB-API 2.0 準拠）
            dialect: RDBMS 方言（None の場合は自動検出を試みる）
            auto_commit: True の場合、文の実行後に自動で commit する

        """
        return cls(Database(connection, dialect=dialect, auto_commit=auto_commit))

    @property
    def executor(self) -> Executor:
        """使用している Executor."""
        return self._executor

    def create(self, entity: Any) -> PersistResult:
        """エンティティを INSERT する.

        主キーはカラムリストに含めない。主キーの型タグが "int" で
        キーが生成された場合、主キーのミューテータで書き戻す。
        ミューテータがない場合は SQL を実行せずに失敗する。

        Args:
            entity: エンティティ

        Returns:
            操作結果。失敗時は主キーは設定されない。書き戻しに失敗した場合も
            生成キーは ``generated_key`` に保持する

        """
        statement: Statement | None = None
        generated_key: Any = None
        try:
            statement, key = prepare_insert(entity, dialect=self._executor.dialect)
            writes_back = key is not None and key.declared_type == "int"
            if writes_back:
                require_key_mutator(entity)
            generated_key = self._executor.execute_insert(statement)
            if writes_back and generated_key is not None:
                write_primary_key(entity, generated_key)
        except OrmlyError as e:
            return self._failed("create", entity, e, statement, generated_key)

        logger.info("entity_created", entity=type(entity).__name__, generated_key=generated_key)
        return PersistResult(
            operation="create",
            entity_type=type(entity).__name__,
            statement=statement,
            generated_key=generated_key,
        )

    def save(self, entity: Any) -> PersistResult:
        """エンティティを UPDATE する.

        主キーが解決できない場合は SQL を実行しない。
        影響行数が 0 でも失敗とはしない。

        Args:
            entity: エンティティ

        Returns:
            操作結果

        """
        statement: Statement | None = None
        try:
            statement = prepare_update(entity, dialect=self._executor.dialect)
            rowcount = self._executor.execute(statement)
        except OrmlyError as e:
            return self._failed("save", entity, e, statement)

        logger.info("entity_saved", entity=type(entity).__name__, rowcount=rowcount)
        return PersistResult(
            operation="save",
            entity_type=type(entity).__name__,
            statement=statement,
            rowcount=rowcount,
        )

    def delete(self, entity: Any) -> PersistResult:
        """エンティティを DELETE する.

        主キーの値が None の場合は SQL を実行しない。

        Args:
            entity: エンティティ

        Returns:
            操作結果

        """
        statement: Statement | None = None
        try:
            statement = prepare_delete(entity, dialect=self._executor.dialect)
            rowcount = self._executor.execute(statement)
        except OrmlyError as e:
            return self._failed("delete", entity, e, statement)

        logger.info("entity_deleted", entity=type(entity).__name__, rowcount=rowcount)
        return PersistResult(
            operation="delete",
            entity_type=type(entity).__name__,
            statement=statement,
            rowcount=rowcount,
        )

    @staticmethod
    def _failed(
        operation: str,
        entity: Any,
        error: OrmlyError,
        statement: Statement | None,
        generated_key: Any = None,
    ) -> PersistResult:
        """失敗をログに記録し、結果に変換する."""
        logger.error(
            f"{operation}_failed",
            entity=type(entity).__name__,
            kind=error.kind.value if error.kind is not None else None,
            error=str(error),
        )
        return PersistResult(
            operation=operation,
            entity_type=type(entity).__name__,
            statement=statement,
            generated_key=generated_key,
            error=error,
        )

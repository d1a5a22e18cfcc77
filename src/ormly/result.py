"""PersistResult: 永続化操作の結果."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ormly.exceptions import ErrorKind, OrmlyError
    from ormly.statement import Statement


@dataclass(frozen=True)
class PersistResult:
    """create / save / delete の結果.

    失敗時も例外を送出せず、``error`` に失敗内容を保持する。
    呼び出し側で例外として扱いたい場合は ``raise_for_error()`` を使用する。

    Examples:
        >>> result = db.save(person)
        >>> if not result.ok:
        ...     print(result.error_kind)
        >>> db.create(person).raise_for_error()

    """

    operation: str
    """操作名 ("create", "save", "delete")."""

    entity_type: str
    """エンティティの型名."""

    statement: Statement | None = None
    """生成された SQL 文。生成前に失敗した場合は None."""

    rowcount: int | None = None
    """影響を受けた行数."""

    generated_key: Any = None
    """INSERT で生成されたキー."""

    error: OrmlyError | None = None
    """失敗内容."""

    @property
    def ok(self) -> bool:
        """成功したか."""
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind | None:
        """失敗種別。成功時は None."""
        return None if self.error is None else self.error.kind

    def raise_for_error(self) -> None:
        """失敗していれば保持している例外を送出する."""
        if self.error is not None:
            raise self.error

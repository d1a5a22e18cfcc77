"""SQL 文の組み立て: INSERT / UPDATE / DELETE."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ormly._messages import format_message
from ormly.exceptions import MissingKeyError
from ormly.statement import Statement

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ormly.dialect import Dialect
    from ormly.mapper.metadata import AttributeDescriptor


class _Binder:
    """プレースホルダ文字列の生成とバインド値の記録を同時に行う."""

    def __init__(self, dialect: Dialect | None) -> None:
        self._named = dialect is not None and dialect.is_named
        self._placeholder = "?" if dialect is None else dialect.placeholder
        self.params: list[Any] = []
        self.named_params: dict[str, Any] = {}

    def bind(self, name: str, value: Any) -> str:
        if self._named:
            self.named_params[name] = value
            return f":{name}"
        self.params.append(value)
        return self._placeholder

    def statement(self, sql: str) -> Statement:
        return Statement(sql=sql, params=self.params, named_params=self.named_params)


def build_insert(
    table: str,
    attributes: Sequence[AttributeDescriptor],
    *,
    dialect: Dialect | None = None,
    returning: str | None = None,
) -> Statement:
    """INSERT 文を組み立てる.

    主キーの記述子はカラムリストから除外する（値はデータベースが生成する）。

    Args:
        table: テーブル名
        attributes: 属性記述子のリスト（抽出順）
        dialect: RDBMS 方言。None の場合は ``?`` プレースホルダ
        returning: 指定時は ``RETURNING <returning>`` を付与する

    Returns:
        ``INSERT INTO <table> (<c1>, <c2>) VALUES (?, ?)``

    """
    binder = _Binder(dialect)
    columns: list[str] = []
    placeholders: list[str] = []
    for attr in attributes:
        if attr.is_primary_key:
            continue
        columns.append(attr.name)
        placeholders.append(binder.bind(attr.name, attr.value))

    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(placeholders)})"
    if returning is not None:
        sql = f"{sql} RETURNING {returning}"
    return binder.statement(sql)


def build_update(
    table: str,
    attributes: Sequence[AttributeDescriptor],
    *,
    dialect: Dialect | None = None,
) -> Statement:
    """UPDATE 文を組み立てる.

    主キー以外の属性を抽出順にバインドし、最後に主キーの値をバインドする。

    Args:
        table: テーブル名
        attributes: 主キーを含む属性記述子のリスト（抽出順）
        dialect: RDBMS 方言

    Returns:
        ``UPDATE <table> SET <c1> = ?, <c2> = ? WHERE <pk> = ?``

    Raises:
        MissingKeyError: 主キーの記述子がない、または値が None の場合

    """
    key = next((attr for attr in attributes if attr.is_primary_key), None)
    if key is None or key.value is None:
        msg = format_message("missing_key", table=table)
        raise MissingKeyError(msg)

    binder = _Binder(dialect)
    assignments = [
        f"{attr.name} = {binder.bind(attr.name, attr.value)}"
        for attr in attributes
        if not attr.is_primary_key
    ]
    condition = f"{key.name} = {binder.bind(key.name, key.value)}"
    return binder.statement(f"UPDATE {table} SET {', '.join(assignments)} WHERE {condition}")


def build_delete(
    table: str,
    primary_key_name: str,
    key_value: Any,
    *,
    dialect: Dialect | None = None,
) -> Statement:
    """DELETE 文を組み立てる.

    主キーの値は SQL 文に埋め込まず、パラメータとしてバインドする。

    Returns:
        ``DELETE FROM <table> WHERE <pk> = ?``

    Raises:
        MissingKeyError: 主キーの値が None の場合

    """
    if key_value is None:
        msg = format_message("missing_key", table=table)
        raise MissingKeyError(msg)

    binder = _Binder(dialect)
    condition = f"{primary_key_name} = {binder.bind(primary_key_name, key_value)}"
    return binder.statement(f"DELETE FROM {table} WHERE {condition}")

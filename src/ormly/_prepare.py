"""エンティティから SQL 文を生成する便利関数."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ormly._messages import format_message
from ormly.builder import build_delete, build_insert, build_update
from ormly.exceptions import MissingKeyError
from ormly.extractor import extract, extract_with_key, read_primary_key
from ormly.mapper.factory import get_metadata

if TYPE_CHECKING:
    from ormly.dialect import Dialect
    from ormly.mapper.metadata import AttributeDescriptor
    from ormly.statement import Statement


def prepare_insert(
    entity: Any,
    *,
    dialect: Dialect | None = None,
) -> tuple[Statement, AttributeDescriptor | None]:
    """INSERT 文を生成する.

    Args:
        entity: エンティティ
        dialect: RDBMS 方言

    Returns:
        (INSERT 文, 主キーの記述子または None)

    Raises:
        ReflectionError: 属性の読み取りに失敗した場合

    """
    table = get_metadata(entity).table
    attributes, key = extract_with_key(entity)
    returning = None
    if dialect is not None and dialect.supports_returning and key is not None:
        if key.declared_type == "int":
            returning = key.name
    return build_insert(table, attributes, dialect=dialect, returning=returning), key


def prepare_update(entity: Any, *, dialect: Dialect | None = None) -> Statement:
    """UPDATE 文を生成する.

    Raises:
        MissingKeyError: 主キーが解決できない場合
        ReflectionError: 属性の読み取りに失敗した場合

    """
    table = get_metadata(entity).table
    return build_update(table, extract(entity), dialect=dialect)


def prepare_delete(entity: Any, *, dialect: Dialect | None = None) -> Statement:
    """DELETE 文を生成する.

    主キーの値のみを読み取り、他の属性は抽出しない。

    Raises:
        MissingKeyError: 主キーが解決できない場合
        ReflectionError: 主キーの読み取りに失敗した場合

    """
    metadata = get_metadata(entity)
    key_spec = metadata.primary_key()
    if key_spec is None:
        msg = format_message("missing_key", table=metadata.table)
        raise MissingKeyError(msg)
    return build_delete(metadata.table, key_spec.name, read_primary_key(entity), dialect=dialect)

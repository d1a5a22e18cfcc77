"""Column アノテーションと @entity デコレータ."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ormly.naming import to_camel, to_snake

_VALID_NAMING = frozenset({"as_is", "snake_to_camel", "camel_to_snake"})


@dataclass(frozen=True)
class Column:
    """カラム名を指定するアノテーション."""

    name: str


def entity(
    cls: type | None = None,
    *,
    primary_key: str | None = None,
    column_map: dict[str, str] | None = None,
    naming: str = "as_is",
    transient: Iterable[str] | None = None,
) -> Any:
    """エンティティデコレータ.

    Args:
        cls: デコレート対象クラス
        primary_key: 主キー名（省略時は ``config.DEFAULT_PRIMARY_KEY_NAME``）
        column_map: フィールド名→カラム名のマッピング
        naming: 命名規則 ("as_is", "snake_to_camel", "camel_to_snake")
        transient: 永続化対象から除外する属性名

    Examples:
        >>> @entity(primary_key="code", column_map={"name": "person_name"})
        ... @dataclass
        ... class Person:
        ...     code: int | None = None
        ...     name: str = ""

    """
    if naming not in _VALID_NAMING:
        msg = f"Invalid naming: {naming!r}. Must be one of {sorted(_VALID_NAMING)}"
        raise ValueError(msg)

    def decorator(cls: type) -> type:
        if primary_key is not None:
            cls.__primary_key__ = primary_key  # type: ignore[attr-defined]
        cls.__column_map__ = column_map or {}  # type: ignore[attr-defined]
        cls.__column_naming__ = naming  # type: ignore[attr-defined]
        cls.__transient__ = frozenset(transient or ())  # type: ignore[attr-defined]
        return cls

    if cls is not None:
        return decorator(cls)
    return decorator


def resolve_column_name(entity_cls: type, field_name: str, annotations: Iterable[Any] = ()) -> str:
    """フィールド名に対応するカラム名を解決する.

    優先順位は ``Column`` アノテーション、``column_map``、``naming`` ルールの順。

    Args:
        entity_cls: エンティティクラス
        field_name: フィールド名
        annotations: ``Annotated`` の付加情報

    Returns:
        カラム名

    """
    # 1. Annotated[..., Column("X")] をチェック
    for arg in annotations:
        if isinstance(arg, Column):
            return arg.name

    # 2. column_map をチェック
    column_map: dict[str, str] = getattr(entity_cls, "__column_map__", {})
    if field_name in column_map:
        return column_map[field_name]

    # 3. naming ルール適用
    naming: str = getattr(entity_cls, "__column_naming__", "as_is")
    if naming == "snake_to_camel":
        return to_camel(field_name)
    if naming == "camel_to_snake":
        return to_snake(field_name)
    return field_name

"""属性記述子とエンティティメタデータ."""

from __future__ import annotations

import datetime
import decimal
import types
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Annotated, Any, Union, get_args, get_origin

from ormly import config
from ormly._messages import format_message
from ormly.exceptions import ReflectionError
from ormly.naming import table_of

_TYPE_TAGS: dict[type, str] = {
    bool: "bool",
    int: "int",
    float: "float",
    str: "str",
    bytes: "bytes",
    decimal.Decimal: "decimal",
    datetime.datetime: "datetime",
    datetime.date: "date",
    datetime.time: "time",
}


@dataclass(frozen=True)
class AttributeDescriptor:
    """永続化対象の属性 1 つ分の記述子.

    抽出のたびに新しく生成され、値はその時点のものを保持する。
    """

    name: str
    """カラム名."""

    declared_type: str
    """宣言型のタグ ("int", "str", ...)."""

    is_primary_key: bool
    """主キーかどうか."""

    value: Any = None
    """抽出時点の値."""


@dataclass(frozen=True)
class AttributeSpec:
    """エンティティ型ごとに一度だけ構築される属性定義."""

    name: str
    """カラム名."""

    attr: str
    """Python 側の属性名（またはアクセサ名）."""

    declared_type: str
    """宣言型のタグ."""

    getter: Callable[[Any], Any]
    """エンティティから値を読み取る関数."""

    setter: Callable[[Any, Any], None] | None = None
    """エンティティへ値を書き込む関数."""

    def matches(self, primary_key_name: str) -> bool:
        """主キー名がカラム名または属性名と一致するか."""
        return primary_key_name in (self.name, self.attr)


@dataclass(frozen=True)
class EntityMetadata:
    """エンティティ型のメタデータ."""

    entity_cls: type
    table: str
    primary_key_name: str
    key_type: str | None
    """主キーの型タグ。主キーの属性がない場合は None."""

    attributes: tuple[AttributeSpec, ...]

    @classmethod
    def build(cls, entity_cls: type, attributes: list[AttributeSpec]) -> EntityMetadata:
        """属性定義のリストからメタデータを構築する.

        主キーに型注釈がない場合、型タグは ``config.DEFAULT_KEY_TYPE`` とする。

        Raises:
            ReflectionError: カラム名が重複している場合

        """
        seen: set[str] = set()
        for spec in attributes:
            if spec.name in seen:
                msg = format_message("duplicate_column", entity=entity_cls.__name__, column=spec.name)
                raise ReflectionError(msg)
            seen.add(spec.name)

        primary_key_name: str = getattr(
            entity_cls, "__primary_key__", config.DEFAULT_PRIMARY_KEY_NAME
        )
        specs = tuple(
            replace(spec, declared_type=config.DEFAULT_KEY_TYPE)
            if spec.matches(primary_key_name) and spec.declared_type == "object"
            else spec
            for spec in attributes
        )
        key_spec = next((spec for spec in specs if spec.matches(primary_key_name)), None)
        return cls(
            entity_cls=entity_cls,
            table=table_of(entity_cls),
            primary_key_name=primary_key_name,
            key_type=None if key_spec is None else key_spec.declared_type,
            attributes=specs,
        )

    def primary_key(self, primary_key_name: str | None = None) -> AttributeSpec | None:
        """主キーの属性定義を返す.

        Args:
            primary_key_name: 主キー名（省略時はエンティティの設定値）

        Returns:
            主キーの属性定義。見つからない場合は None

        """
        name = primary_key_name or self.primary_key_name
        for spec in self.attributes:
            if spec.matches(name):
                return spec
        return None


def type_tag(hint: Any) -> str:
    """型注釈から型タグを導出する.

    ``Annotated[X, ...]``、``X | None``、``Optional[X]`` は ``X`` として扱う。
    型注釈がない場合は ``"object"`` を返す。
    """
    if hint is None or hint is Any:
        return "object"
    if get_origin(hint) is Annotated:
        return type_tag(get_args(hint)[0])
    if get_origin(hint) in (Union, types.UnionType):
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        return type_tag(args[0]) if len(args) == 1 else "object"
    if isinstance(hint, type):
        return _TYPE_TAGS.get(hint, hint.__name__.lower())
    return "object"


def attribute_setter(name: str) -> Callable[[Any, Any], None]:
    """属性へ代入するミューテータを返す."""

    def setter(obj: Any, value: Any) -> None:
        setattr(obj, name, value)

    return setter

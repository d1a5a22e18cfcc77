"""命名規則: テーブル名の導出とアクセサ名からの属性名の導出."""

from __future__ import annotations

import re
from typing import Any

_SNAKE_PREFIXES = ("get_", "is_")
_CAMEL_PREFIXES = ("get", "is")


def table_of(entity: Any) -> str:
    """エンティティの型名からテーブル名を導出する.

    型名を小文字化し、英語の複数形接尾辞 ``s`` を付与する。
    不規則な複数形は扱わない。

    Args:
        entity: エンティティのインスタンスまたはクラス

    Returns:
        テーブル名

    Examples:
        >>> class Person: ...
        >>> table_of(Person())
        'persons'

    """
    cls = entity if isinstance(entity, type) else type(entity)
    return cls.__name__.lower() + "s"


def accessor_attribute_name(method_name: str) -> str | None:
    """アクセサメソッド名から属性名を導出する.

    ``get_`` / ``is_`` 接頭辞（snake_case）、または大文字が続く
    ``get`` / ``is`` 接頭辞（camelCase）を取り除き、残りを小文字化する。

    Args:
        method_name: メソッド名

    Returns:
        属性名。アクセサ名でない場合は None

    Examples:
        >>> accessor_attribute_name("get_name")
        'name'
        >>> accessor_attribute_name("isActive")
        'active'
        >>> accessor_attribute_name("issue") is None
        True

    """
    for prefix in _SNAKE_PREFIXES:
        if method_name.startswith(prefix) and len(method_name) > len(prefix):
            return method_name[len(prefix) :].lower()
    for prefix in _CAMEL_PREFIXES:
        remainder = method_name[len(prefix) :]
        if method_name.startswith(prefix) and remainder[:1].isupper():
            return remainder.lower()
    return None


def mutator_name(accessor_name: str) -> str:
    """アクセサメソッド名に対応するミューテータ名を返す.

    Examples:
        >>> mutator_name("get_id")
        'set_id'
        >>> mutator_name("isActive")
        'setActive'

    """
    for prefix in _SNAKE_PREFIXES + _CAMEL_PREFIXES:
        if accessor_name.startswith(prefix):
            return "set" + accessor_name[len(prefix) - (1 if prefix.endswith("_") else 0) :]
    msg = f"{accessor_name!r} is not an accessor name"
    raise ValueError(msg)


def to_camel(name: str) -> str:
    """Snake_case → camelCase."""
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def to_snake(name: str) -> str:
    """CamelCase → snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()

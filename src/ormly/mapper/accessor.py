"""AccessorInspector: アクセサメソッド/プロパティを持つ通常クラス用のメタデータ構築."""

from __future__ import annotations

import inspect
from operator import attrgetter, methodcaller
from typing import Any, get_type_hints

from ormly.mapper.column import resolve_column_name
from ormly.mapper.metadata import AttributeSpec, EntityMetadata, attribute_setter, type_tag
from ormly.naming import accessor_attribute_name, mutator_name


class AccessorInspector:
    """アクセサの命名規則からメタデータを構築する.

    以下を永続化対象の属性として扱う:
    - 引数なしで呼び出せる ``get_x()`` / ``getX()`` / ``is_x()`` / ``isX()`` メソッド
    - プロパティ

    ミューテータは ``set_x()`` / ``setX()`` メソッド、またはプロパティの setter。
    ``_`` で始まる名前、``object`` から継承した名前、``__transient__`` に
    含まれる属性名は対象外とする。
    """

    def __init__(self, entity_cls: type) -> None:
        if not isinstance(entity_cls, type):
            msg = f"{entity_cls!r} is not a class"
            raise TypeError(msg)
        self.entity_cls = entity_cls

    def inspect(self) -> EntityMetadata:
        """クラス定義の宣言順にメタデータを構築."""
        transient: frozenset[str] = getattr(self.entity_cls, "__transient__", frozenset())
        members = self._members()

        specs: list[AttributeSpec] = []
        for member_name, member in members.items():
            if member_name.startswith("_"):
                continue
            if isinstance(member, property):
                spec = self._property_spec(member_name, member)
            elif inspect.isfunction(member):
                spec = self._accessor_spec(member_name, member, members)
            else:
                continue
            if spec is not None and spec.attr not in transient:
                specs.append(spec)
        return EntityMetadata.build(self.entity_cls, specs)

    def _members(self) -> dict[str, Any]:
        """MRO を基底側から辿り、宣言順を保ったままメンバーを収集する."""
        members: dict[str, Any] = {}
        for klass in reversed(self.entity_cls.__mro__):
            if klass is object:
                continue
            for name, member in vars(klass).items():
                members[name] = member
        return members

    def _property_spec(self, name: str, prop: property) -> AttributeSpec:
        setter = attribute_setter(name) if prop.fset is not None else None
        return AttributeSpec(
            name=resolve_column_name(self.entity_cls, name),
            attr=name,
            declared_type=type_tag(_return_hint(prop.fget)),
            getter=attrgetter(name),
            setter=setter,
        )

    def _accessor_spec(
        self,
        method_name: str,
        func: Any,
        members: dict[str, Any],
    ) -> AttributeSpec | None:
        attribute = accessor_attribute_name(method_name)
        if attribute is None or not _takes_no_arguments(func):
            return None

        setter_name = mutator_name(method_name)
        setter = None
        if inspect.isfunction(members.get(setter_name)):
            setter = _method_setter(setter_name)

        return AttributeSpec(
            name=resolve_column_name(self.entity_cls, attribute),
            attr=attribute,
            declared_type=type_tag(_return_hint(func)),
            getter=methodcaller(method_name),
            setter=setter,
        )


def _takes_no_arguments(func: Any) -> bool:
    """self 以外に必須引数がないか."""
    params = list(inspect.signature(func).parameters.values())[1:]
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in params
    )


def _return_hint(func: Any) -> Any:
    """戻り値の型注釈を返す（解決できない場合は None）."""
    if func is None:
        return None
    try:
        return get_type_hints(func).get("return")
    except NameError:
        return None


def _method_setter(setter_name: str) -> Any:
    def setter(obj: Any, value: Any) -> None:
        getattr(obj, setter_name)(value)

    return setter

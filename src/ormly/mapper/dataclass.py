"""DataclassInspector: dataclass 用のメタデータ構築."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from operator import attrgetter
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from ormly.mapper.column import resolve_column_name
from ormly.mapper.metadata import AttributeSpec, EntityMetadata, attribute_setter, type_tag


class DataclassInspector:
    """Dataclass のフィールド定義からメタデータを構築する."""

    def __init__(self, entity_cls: type) -> None:
        if not is_dataclass(entity_cls):
            msg = f"{entity_cls} is not a dataclass"
            raise TypeError(msg)
        self.entity_cls = entity_cls

    def inspect(self) -> EntityMetadata:
        """フィールドの宣言順にメタデータを構築."""
        hints = get_type_hints(self.entity_cls, include_extras=True)
        transient: frozenset[str] = getattr(self.entity_cls, "__transient__", frozenset())

        specs: list[AttributeSpec] = []
        for f in fields(self.entity_cls):
            if f.name in transient:
                continue
            type_hint = hints.get(f.name)
            extras: tuple[Any, ...] = ()
            if type_hint is not None and get_origin(type_hint) is Annotated:
                extras = get_args(type_hint)[1:]
            specs.append(
                AttributeSpec(
                    name=resolve_column_name(self.entity_cls, f.name, extras),
                    attr=f.name,
                    declared_type=type_tag(type_hint),
                    getter=attrgetter(f.name),
                    setter=attribute_setter(f.name),
                )
            )
        return EntityMetadata.build(self.entity_cls, specs)

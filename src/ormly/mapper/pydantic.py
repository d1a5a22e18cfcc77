"""PydanticInspector: Pydantic BaseModel 用のメタデータ構築."""

from __future__ import annotations

from operator import attrgetter

from ormly.mapper.column import resolve_column_name
from ormly.mapper.metadata import AttributeSpec, EntityMetadata, attribute_setter, type_tag


class PydanticInspector:
    """Pydantic BaseModel の ``model_fields`` からメタデータを構築する."""

    def __init__(self, entity_cls: type) -> None:
        if not hasattr(entity_cls, "model_fields"):
            msg = f"{entity_cls} is not a Pydantic BaseModel"
            raise TypeError(msg)
        self.entity_cls = entity_cls

    def inspect(self) -> EntityMetadata:
        """``model_fields`` の定義順にメタデータを構築.

        ``Annotated[T, Column("X")]`` の付加情報は Pydantic により
        ``FieldInfo.metadata`` に格納される。
        """
        transient: frozenset[str] = getattr(self.entity_cls, "__transient__", frozenset())
        specs = [
            AttributeSpec(
                name=resolve_column_name(self.entity_cls, name, info.metadata),
                attr=name,
                declared_type=type_tag(info.annotation),
                getter=attrgetter(name),
                setter=attribute_setter(name),
            )
            for name, info in self.entity_cls.model_fields.items()  # type: ignore[attr-defined]
            if name not in transient
        ]
        return EntityMetadata.build(self.entity_cls, specs)

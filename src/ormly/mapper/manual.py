"""ManualInspector: 明示的に登録された属性定義を返す."""

from __future__ import annotations

from collections.abc import Iterable

from ormly.mapper.metadata import AttributeSpec, EntityMetadata


class ManualInspector:
    """ユーザーが列挙した属性定義からメタデータを構築する."""

    def __init__(self, entity_cls: type, attributes: Iterable[AttributeSpec]) -> None:
        self.entity_cls = entity_cls
        self._attributes = list(attributes)

    def inspect(self) -> EntityMetadata:
        """登録順にメタデータを構築."""
        return EntityMetadata.build(self.entity_cls, self._attributes)

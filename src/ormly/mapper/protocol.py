"""EntityInspector プロトコル定義."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ormly.mapper.metadata import EntityMetadata


@runtime_checkable
class EntityInspector(Protocol):
    """エンティティ型からメタデータを構築するインターフェース."""

    def inspect(self) -> EntityMetadata:
        """エンティティ型のメタデータを構築する."""
        ...

"""メタデータ取得とインスペクタの自動判定."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import is_dataclass
from typing import Any

from ormly._messages import format_message
from ormly.exceptions import ReflectionError
from ormly.mapper.manual import ManualInspector
from ormly.mapper.metadata import AttributeSpec, EntityMetadata
from ormly.mapper.protocol import EntityInspector

_metadata_cache: dict[type, EntityMetadata] = {}


def create_inspector(entity_cls: type) -> EntityInspector:
    """インスペクタを生成する.

    Args:
        entity_cls: エンティティクラス

    Returns:
        EntityInspector プロトコルを満たすインスペクタ

    Raises:
        ReflectionError: エンティティとして扱えないクラスの場合

    """
    if not isinstance(entity_cls, type):
        msg = format_message("unsupported_entity", entity=entity_cls)
        raise ReflectionError(msg)

    if is_dataclass(entity_cls):
        from ormly.mapper.dataclass import DataclassInspector

        return DataclassInspector(entity_cls)

    if hasattr(entity_cls, "model_fields") and hasattr(entity_cls, "model_validate"):
        from ormly.mapper.pydantic import PydanticInspector

        return PydanticInspector(entity_cls)

    from ormly.mapper.accessor import AccessorInspector

    return AccessorInspector(entity_cls)


def get_metadata(entity: Any) -> EntityMetadata:
    """エンティティ型のメタデータを取得する（キャッシュ付き）.

    メタデータは型ごとに一度だけ構築する。属性値はキャッシュしない。

    Args:
        entity: エンティティのインスタンスまたはクラス

    Returns:
        エンティティ型のメタデータ

    Raises:
        ReflectionError: メタデータを構築できない場合

    """
    entity_cls = entity if isinstance(entity, type) else type(entity)
    if entity_cls not in _metadata_cache:
        try:
            _metadata_cache[entity_cls] = create_inspector(entity_cls).inspect()
        except (TypeError, NameError) as e:
            msg = format_message("unsupported_entity", entity=entity_cls.__name__)
            raise ReflectionError(msg) from e
    return _metadata_cache[entity_cls]


def register_entity(entity_cls: type, attributes: Iterable[AttributeSpec]) -> EntityMetadata:
    """属性定義を明示的に登録する.

    登録済みの型は自動判定より優先される。

    Examples:
        >>> register_entity(
        ...     Person,
        ...     [
        ...         AttributeSpec("id", "id", "int", attrgetter("id"), attribute_setter("id")),
        ...         AttributeSpec("name", "name", "str", attrgetter("name")),
        ...     ],
        ... )

    """
    metadata = ManualInspector(entity_cls, attributes).inspect()
    _metadata_cache[entity_cls] = metadata
    return metadata


def clear_cache() -> None:
    """メタデータキャッシュを破棄する."""
    _metadata_cache.clear()

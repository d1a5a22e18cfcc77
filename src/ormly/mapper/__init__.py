"""ormly マッパーパッケージ."""

from ormly.mapper.factory import clear_cache, create_inspector, get_metadata, register_entity
from ormly.mapper.manual import ManualInspector
from ormly.mapper.metadata import AttributeDescriptor, AttributeSpec, EntityMetadata
from ormly.mapper.protocol import EntityInspector

__all__ = [
    "AttributeDescriptor",
    "AttributeSpec",
    "EntityInspector",
    "EntityMetadata",
    "ManualInspector",
    "clear_cache",
    "create_inspector",
    "get_metadata",
    "register_entity",
]

"""ormly: minimal object-relational mapping for Python."""

from ormly._prepare import prepare_delete, prepare_insert, prepare_update
from ormly.builder import build_delete, build_insert, build_update
from ormly.dialect import Dialect
from ormly.exceptions import (
    ErrorKind,
    ExecutionError,
    MissingKeyError,
    OrmlyError,
    ReflectionError,
)
from ormly.executor import Database, Executor
from ormly.extractor import (
    extract,
    extract_with_key,
    read_primary_key,
    require_key_mutator,
    write_primary_key,
)
from ormly.mapper import (
    AttributeDescriptor,
    AttributeSpec,
    EntityMetadata,
    get_metadata,
    register_entity,
)
from ormly.mapper.column import Column, entity
from ormly.naming import table_of
from ormly.ormly import Ormly
from ormly.result import PersistResult
from ormly.statement import Statement

__all__ = [
    "AttributeDescriptor",
    "AttributeSpec",
    "Column",
    "Database",
    "Dialect",
    "EntityMetadata",
    "ErrorKind",
    "ExecutionError",
    "Executor",
    "MissingKeyError",
    "Ormly",
    "OrmlyError",
    "PersistResult",
    "ReflectionError",
    "Statement",
    "build_delete",
    "build_insert",
    "build_update",
    "entity",
    "extract",
    "extract_with_key",
    "get_metadata",
    "prepare_delete",
    "prepare_insert",
    "prepare_update",
    "read_primary_key",
    "register_entity",
    "require_key_mutator",
    "table_of",
    "write_primary_key",
]

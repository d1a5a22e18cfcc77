"""属性抽出: エンティティから属性記述子のリストを生成する."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from ormly._messages import format_message
from ormly.exceptions import ReflectionError
from ormly.mapper.factory import get_metadata
from ormly.mapper.metadata import AttributeDescriptor

if TYPE_CHECKING:
    from collections.abc import Callable

    from ormly.mapper.metadata import AttributeSpec


def extract(
    entity: Any,
    *,
    include_primary_key: bool = True,
    primary_key_name: str | None = None,
) -> list[AttributeDescriptor]:
    """エンティティの永続化対象属性を抽出する.

    列挙はメタデータの順序で一度だけ行う。呼び出し側は返されたリストを
    カラム名・プレースホルダ・バインド値の生成に同じ順序で使用すること。

    Args:
        entity: エンティティ
        include_primary_key: False の場合、主キーの記述子を結果から除外する
        primary_key_name: 主キー名（省略時はエンティティの設定値）

    Returns:
        属性記述子のリスト

    Raises:
        ReflectionError: 属性の読み取りに失敗した場合

    """
    descriptors = _extract(entity, primary_key_name)
    if include_primary_key:
        return descriptors
    return [d for d in descriptors if not d.is_primary_key]


def extract_with_key(
    entity: Any,
    *,
    primary_key_name: str | None = None,
) -> tuple[list[AttributeDescriptor], AttributeDescriptor | None]:
    """主キー以外の属性と主キーの記述子を分けて抽出する.

    INSERT では主キーをカラムリストから除外するが、生成キーを書き戻すために
    どの属性が主キーかを別途知る必要がある。

    Returns:
        (主キー以外の属性記述子のリスト, 主キーの記述子または None)

    Raises:
        ReflectionError: 属性の読み取りに失敗した場合

    """
    descriptors: list[AttributeDescriptor] = []
    key: AttributeDescriptor | None = None
    for descriptor in _extract(entity, primary_key_name):
        if descriptor.is_primary_key:
            key = descriptor
        else:
            descriptors.append(descriptor)
    return descriptors, key


def read_primary_key(entity: Any, *, primary_key_name: str | None = None) -> Any:
    """主キーの値のみを読み取る.

    Returns:
        主キーの値。主キーの属性が存在しない場合は None

    Raises:
        ReflectionError: 主キーの読み取りに失敗した場合

    """
    key_spec = get_metadata(entity).primary_key(primary_key_name)
    if key_spec is None:
        return None
    return _read(entity, key_spec)


def write_primary_key(entity: Any, value: Any, *, primary_key_name: str | None = None) -> None:
    """主キーのミューテータで値を書き戻す.

    主キーの型タグが "int" の場合は ``int()`` で変換する。

    Raises:
        ReflectionError: ミューテータが存在しない、または書き込みに失敗した場合

    """
    key_spec = require_key_mutator(entity, primary_key_name=primary_key_name)
    setter = cast("Callable[[Any, Any], None]", key_spec.setter)
    try:
        if key_spec.declared_type == "int":
            value = int(value)
        setter(entity, value)
    except Exception as e:
        msg = format_message(
            "mutator_failed", entity=type(entity).__name__, attribute=key_spec.attr
        )
        raise ReflectionError(msg) from e


def require_key_mutator(entity: Any, *, primary_key_name: str | None = None) -> AttributeSpec:
    """主キーのミューテータが存在することを確認する.

    Returns:
        主キーの属性定義

    Raises:
        ReflectionError: 主キーの属性またはミューテータが存在しない場合

    """
    key_spec = get_metadata(entity).primary_key(primary_key_name)
    if key_spec is None or key_spec.setter is None:
        msg = format_message("mutator_missing", entity=type(entity).__name__)
        raise ReflectionError(msg)
    return key_spec


def _read(entity: Any, spec: AttributeSpec) -> Any:
    try:
        return spec.getter(entity)
    except Exception as e:
        msg = format_message("accessor_failed", entity=type(entity).__name__, attribute=spec.attr)
        raise ReflectionError(msg) from e


def _extract(entity: Any, primary_key_name: str | None) -> list[AttributeDescriptor]:
    metadata = get_metadata(entity)
    key_spec = metadata.primary_key(primary_key_name)
    return [
        AttributeDescriptor(
            name=spec.name,
            declared_type=spec.declared_type,
            is_primary_key=spec is key_spec,
            value=_read(entity, spec),
        )
        for spec in metadata.attributes
    ]

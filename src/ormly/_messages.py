"""エラーメッセージ定義."""

from __future__ import annotations

from typing import Any

from ormly import config

_MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        "missing_key": "主キーの値がありません",
        "unsupported_entity": "エンティティとして扱えないクラスです",
        "duplicate_column": "カラム名が重複しています",
        "accessor_failed": "属性の読み取りに失敗しました",
        "mutator_missing": "主キーのミューテータが見つかりません",
        "mutator_failed": "主キーの書き込みに失敗しました",
        "execution_failed": "SQL の実行に失敗しました",
    },
    "en": {
        "missing_key": "Primary key value is missing",
        "unsupported_entity": "Class cannot be used as an entity",
        "duplicate_column": "Duplicate column name",
        "accessor_failed": "Failed to read attribute",
        "mutator_missing": "Primary key mutator not found",
        "mutator_failed": "Failed to write primary key",
        "execution_failed": "Failed to execute SQL",
    },
}


def format_message(key: str, *, sql: str | None = None, **context: Any) -> str:
    """エラーメッセージを組み立てる.

    Args:
        key: メッセージキー
        sql: 失敗した SQL 文（``config.ERROR_INCLUDE_SQL`` が True の場合のみ付与）
        **context: メッセージ末尾に ``name=value`` 形式で付与する値

    Returns:
        ``config.ERROR_MESSAGE_LANGUAGE`` の言語によるメッセージ

    """
    lang = config.ERROR_MESSAGE_LANGUAGE
    msg = _MESSAGES.get(lang, _MESSAGES["ja"]).get(key, key)
    details = " ".join(f"{name}={value!r}" for name, value in context.items())
    if details:
        msg = f"{msg}: {details}"
    if sql is not None and config.ERROR_INCLUDE_SQL:
        msg = f"{msg} sql='{sql}'"
    return msg

"""ormly のグローバル設定.

モジュール属性を書き換えることで動作を変更する::

    from ormly import config

    config.ERROR_MESSAGE_LANGUAGE = "en"
"""

ERROR_MESSAGE_LANGUAGE = "ja"
"""エラーメッセージの言語 ("ja" または "en")."""

ERROR_INCLUDE_SQL = True
"""実行エラーのメッセージに SQL 文を含めるか."""

DEFAULT_PRIMARY_KEY_NAME = "id"
"""主キー名の既定値."""

DEFAULT_KEY_TYPE = "int"
"""型注釈のない主キーの型タグ."""

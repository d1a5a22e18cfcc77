"""ormly 例外クラス."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """永続化操作の失敗種別."""

    REFLECTION = "reflection"
    EXECUTION = "execution"
    MISSING_KEY = "missing_key"


class OrmlyError(Exception):
    """ormly の基底例外."""

    kind: ErrorKind | None = None


class ReflectionError(OrmlyError):
    """アクセサ/ミューテータの解決または呼び出しに失敗した."""

    kind = ErrorKind.REFLECTION


class ExecutionError(OrmlyError):
    """SQL の実行に失敗した."""

    kind = ErrorKind.EXECUTION


class MissingKeyError(OrmlyError):
    """主キーの値が解決できない."""

    kind = ErrorKind.MISSING_KEY

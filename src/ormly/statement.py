"""Statement: 生成された SQL 文とバインド値."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Statement:
    """生成結果."""

    sql: str
    params: list[Any] = field(default_factory=list)
    """?形式・%s形式用."""

    named_params: dict[str, Any] = field(default_factory=dict)
    """:name形式用."""

    @property
    def bind_values(self) -> list[Any] | dict[str, Any]:
        """DB-API の ``cursor.execute`` に渡すバインド値."""
        return self.named_params if self.named_params else self.params

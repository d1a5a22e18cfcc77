"""属性抽出のテスト."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import pytest

from ormly.exceptions import ReflectionError
from ormly.extractor import (
    extract,
    extract_with_key,
    read_primary_key,
    require_key_mutator,
    write_primary_key,
)
from ormly.mapper.column import Column, entity
from ormly.mapper.metadata import AttributeDescriptor


@dataclass
class Person:
    """テスト用エンティティ."""

    id: int | None = None
    name: str = ""
    age: int = 0


@entity(primary_key="code")
@dataclass
class Product:
    """主キー名を変更したエンティティ."""

    code: str | None = None
    name: str = ""


class TestExtract:
    """extract のテスト."""

    def test_include_primary_key(self) -> None:
        """主キーを含めて宣言順に抽出する."""
        attrs = extract(Person(id=7, name="Alice", age=30))
        assert attrs == [
            AttributeDescriptor("id", "int", True, 7),
            AttributeDescriptor("name", "str", False, "Alice"),
            AttributeDescriptor("age", "int", False, 30),
        ]

    def test_exclude_primary_key(self) -> None:
        """include_primary_key=False なら主キーを除外する."""
        attrs = extract(Person(id=7, name="Alice", age=30), include_primary_key=False)
        assert [a.name for a in attrs] == ["name", "age"]
        assert not any(a.is_primary_key for a in attrs)

    def test_primary_key_name_override(self) -> None:
        """primary_key_name で主キーを指定できる."""
        attrs = extract(Person(id=7, name="Alice"), primary_key_name="name")
        assert [a.name for a in attrs if a.is_primary_key] == ["name"]

    def test_at_most_one_primary_key(self) -> None:
        """主キーの記述子は高々 1 つ."""
        for entity_obj in (Person(id=1), Product(code="P1")):
            attrs = extract(entity_obj)
            assert sum(a.is_primary_key for a in attrs) == 1

    def test_no_primary_key(self) -> None:
        """主キーがない場合は全属性が非主キー."""

        @dataclass
        class Log:
            message: str = ""

        attrs = extract(Log(message="hello"))
        assert attrs == [AttributeDescriptor("message", "str", False, "hello")]

    def test_values_are_read_each_call(self) -> None:
        """値は抽出のたびに読み取る."""
        person = Person(name="Alice")
        first = extract(person)
        person.name = "Bob"
        second = extract(person)
        assert first[1].value == "Alice"
        assert second[1].value == "Bob"

    def test_column_name_is_used(self) -> None:
        """記述子の name はカラム名."""

        @dataclass
        class Employee:
            id: Annotated[int | None, Column("emp_id")] = None
            name: Annotated[str, Column("emp_name")] = ""

        attrs = extract(Employee(id=1, name="Alice"))
        assert [(a.name, a.is_primary_key) for a in attrs] == [
            ("emp_id", True),
            ("emp_name", False),
        ]

    def test_accessor_failure_raises_reflection_error(self) -> None:
        """アクセサが例外を送出すると ReflectionError."""

        class Broken:
            def get_id(self) -> int:
                return 1

            def get_name(self) -> str:
                msg = "boom"
                raise RuntimeError(msg)

        with pytest.raises(ReflectionError) as exc_info:
            extract(Broken())
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestExtractWithKey:
    """extract_with_key のテスト."""

    def test_split(self) -> None:
        """主キー以外と主キーを分けて返す."""
        attrs, key = extract_with_key(Person(id=None, name="Alice", age=30))
        assert [a.name for a in attrs] == ["name", "age"]
        assert key == AttributeDescriptor("id", "int", True, None)

    def test_custom_primary_key(self) -> None:
        """@entity(primary_key=...) を使用する."""
        attrs, key = extract_with_key(Product(code="P1", name="Pen"))
        assert [a.name for a in attrs] == ["name"]
        assert key is not None
        assert (key.name, key.declared_type, key.value) == ("code", "str", "P1")

    def test_no_key(self) -> None:
        """主キーがない場合は None."""

        @dataclass
        class Log:
            message: str = ""

        attrs, key = extract_with_key(Log())
        assert [a.name for a in attrs] == ["message"]
        assert key is None


class TestReadPrimaryKey:
    """read_primary_key のテスト."""

    def test_read(self) -> None:
        assert read_primary_key(Person(id=3)) == 3

    def test_unset(self) -> None:
        assert read_primary_key(Person()) is None

    def test_no_key_attribute(self) -> None:
        @dataclass
        class Log:
            message: str = ""

        assert read_primary_key(Log()) is None


class TestWritePrimaryKey:
    """write_primary_key のテスト."""

    def test_write_int_key(self) -> None:
        """型タグ int の主キーは int() で変換して書き込む."""
        person = Person()
        write_primary_key(person, "42")
        assert person.id == 42

    def test_write_non_int_key(self) -> None:
        """型タグ int 以外はそのまま書き込む."""
        product = Product()
        write_primary_key(product, "P9")
        assert product.code == "P9"

    def test_missing_mutator(self) -> None:
        """ミューテータがない場合は ReflectionError."""

        class ReadOnly:
            def get_id(self) -> int | None:
                return None

        with pytest.raises(ReflectionError):
            write_primary_key(ReadOnly(), 1)

    def test_no_key_attribute(self) -> None:
        """主キーの属性がない場合は ReflectionError."""

        @dataclass
        class Log:
            message: str = ""

        with pytest.raises(ReflectionError):
            write_primary_key(Log(), 1)

    def test_frozen_dataclass(self) -> None:
        """Frozen dataclass への書き込みは ReflectionError."""

        @dataclass(frozen=True)
        class Frozen:
            id: int | None = None

        with pytest.raises(ReflectionError):
            write_primary_key(Frozen(), 1)

    def test_unconvertible_value(self) -> None:
        """int() に変換できない値は ReflectionError."""
        with pytest.raises(ReflectionError):
            write_primary_key(Person(), "AAAAB3")


class TestRequireKeyMutator:
    """require_key_mutator のテスト."""

    def test_returns_key_spec(self) -> None:
        """ミューテータがあれば主キーの属性定義を返す."""
        spec = require_key_mutator(Person())
        assert spec.name == "id"
        assert spec.setter is not None

    def test_missing_mutator(self) -> None:
        """ミューテータがない場合は ReflectionError."""

        class ReadOnly:
            def get_id(self) -> int | None:
                return None

        with pytest.raises(ReflectionError):
            require_key_mutator(ReadOnly())

    def test_does_not_write(self) -> None:
        """確認のみで値は変更しない."""
        person = Person(id=5)
        require_key_mutator(person)
        assert person.id == 5

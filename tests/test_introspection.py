"""Tests for record schema introspection."""

from datetime import datetime
from typing import Any, Optional, Union

import pytest
from pydantic import NonNegativeInt, PositiveInt, conint

from recordgen import FieldKind, MalformedRecordError, get_schema, zero_instance
from recordgen.introspection import classify, integer_minimum
from tests.records import (
    Account,
    Address,
    Color,
    Customer,
    Empty,
    Loop,
    Node,
    Paint,
    Product,
    Ticket,
    User,
)


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        "annotation, kind",
        [
            (str, FieldKind.TEXT),
            (int, FieldKind.INTEGER),
            (float, FieldKind.FLOAT),
            (bool, FieldKind.BOOLEAN),
            (datetime, FieldKind.TIMESTAMP),
            (Address, FieldKind.RECORD),
            (list[str], FieldKind.OTHER),
            (Color, FieldKind.OTHER),
            (Any, FieldKind.OTHER),
        ],
    )
    def test_scalar_kinds(self, annotation, kind) -> None:
        """Each annotation maps to its kind."""
        assert classify(annotation)[0] is kind

    def test_optional_unwrapped(self) -> None:
        """Optional[X] classifies as X and is marked optional."""
        assert classify(Optional[str]) == (FieldKind.TEXT, str, True)
        assert classify(int | None) == (FieldKind.INTEGER, int, True)

    def test_multi_member_union_is_other(self) -> None:
        """Unions of several types are not auto-synthesized."""
        kind, _, optional = classify(Union[int, str, None])
        assert kind is FieldKind.OTHER
        assert optional is True

    def test_unsigned_integers(self) -> None:
        """Non-negative constrained ints are unsigned."""
        assert classify(NonNegativeInt)[0] is FieldKind.UNSIGNED_INTEGER
        assert classify(PositiveInt)[0] is FieldKind.UNSIGNED_INTEGER
        assert classify(conint(gt=-1))[0] is FieldKind.UNSIGNED_INTEGER
        assert classify(conint(ge=-5))[0] is FieldKind.INTEGER

    @pytest.mark.parametrize(
        "annotation, minimum",
        [
            (int, None),
            (str, None),
            (NonNegativeInt, 0),
            (PositiveInt, 1),
            (conint(gt=-1), 0),
            (conint(ge=-5), -5),
            (Optional[PositiveInt], 1),
        ],
    )
    def test_integer_minimum(self, annotation, minimum) -> None:
        """Lower bounds are normalized to an inclusive integer."""
        assert integer_minimum(annotation) == minimum


class TestGetSchema:
    """Tests for get_schema()."""

    def test_dataclass_fields_in_order(self) -> None:
        """Fields keep declaration order with their kinds."""
        schema = get_schema(User)

        assert schema.field_names == ["name", "age", "score", "active", "created_at"]
        assert [f.kind for f in schema.fields] == [
            FieldKind.TEXT,
            FieldKind.INTEGER,
            FieldKind.FLOAT,
            FieldKind.BOOLEAN,
            FieldKind.TIMESTAMP,
        ]
        assert all(f.settable for f in schema.fields)

    def test_private_fields_not_settable(self) -> None:
        """Underscore fields are listed but never settable."""
        schema = get_schema(Account)

        assert schema.field_names == ["_secret", "owner", "_pin"]
        assert [f.name for f in schema.settable_fields] == ["owner"]

    def test_nested_and_other_fields(self) -> None:
        """Nested records, containers and constrained ints are classified."""
        schema = get_schema(Customer)

        address = schema.field("address")
        assert address.kind is FieldKind.RECORD
        assert address.record_type is Address
        assert schema.field("tags").kind is FieldKind.OTHER
        assert schema.field("tags").has_default
        assert schema.field("nickname").optional
        assert schema.field("visits").kind is FieldKind.UNSIGNED_INTEGER

    def test_newtype_and_non_init_fields(self) -> None:
        """NewType unwraps to its supertype; init=False fields are tracked."""
        schema = get_schema(Ticket)

        assert schema.field("id").kind is FieldKind.INTEGER
        assert schema.field("number").init is False

    def test_self_reference_resolved(self) -> None:
        """Forward references to the record itself resolve."""
        parent = get_schema(Node).field("parent")

        assert parent.kind is FieldKind.RECORD
        assert parent.optional

    def test_pydantic_model(self) -> None:
        """Pydantic fields are introspected; private attributes are not."""
        schema = get_schema(Product)

        assert schema.flavour == "pydantic"
        assert schema.field_names == ["sku", "price", "stock", "available", "note"]
        assert schema.field("stock").kind is FieldKind.UNSIGNED_INTEGER
        assert schema.field("note").optional
        assert schema.field("_cache") is None

    def test_schema_cached(self) -> None:
        """A type is introspected once."""
        assert get_schema(User) is get_schema(User)

    def test_empty_record(self) -> None:
        """A record without fields has an empty schema."""
        assert get_schema(Empty).fields == ()

    @pytest.mark.parametrize("target", [int, str, dict, "User", User("a", 1, 1.0, True, None)])
    def test_non_record_rejected(self, target) -> None:
        """Non-record types raise MalformedRecordError."""
        with pytest.raises(MalformedRecordError, match="not a dataclass or pydantic model"):
            get_schema(target)


class TestZeroInstance:
    """Tests for zero_instance()."""

    def test_scalar_zeros(self) -> None:
        """Every scalar field holds its zero value."""
        assert zero_instance(User) == User(
            name="", age=0, score=0.0, active=False, created_at=None
        )

    def test_nested_and_defaults(self) -> None:
        """Nested records are zeroed, other kinds keep declared defaults."""
        customer = zero_instance(Customer)

        assert customer.address == Address(street="", city="")
        assert customer.tags == []
        assert customer.nickname is None
        assert customer.visits == 0

    def test_other_kind_without_default(self) -> None:
        """Unsupported kinds without a default are None."""
        assert zero_instance(Paint).color is None

    def test_private_default_kept(self) -> None:
        """Private fields keep their declared default."""
        account = zero_instance(Account)

        assert account._secret == ""
        assert account._pin == 1234

    def test_pydantic_zero(self) -> None:
        """Pydantic models get zero values too."""
        product = zero_instance(Product)

        assert product.sku == ""
        assert product.stock == 0
        assert product.note is None

    def test_recursive_record_rejected(self) -> None:
        """A record nesting itself without Optional cannot be built."""
        with pytest.raises(MalformedRecordError, match="contains itself"):
            zero_instance(Loop)

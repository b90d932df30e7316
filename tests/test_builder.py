"""Tests for the Builder API."""

import dataclasses

import pytest

from recordgen import (
    Builder,
    MalformedRecordError,
    PrototypeTypeError,
    zero_instance,
)
from tests.records import FIXED_NOW, Customer, Point, Product, User


def test_builder_without_customization(fixed_clock):
    """A bare builder generates like a bare generator."""
    users = Builder(User, clock=fixed_clock).generate(2)

    assert users == [
        User("name_1", 1, 1.1, True, FIXED_NOW),
        User("name_2", 2, pytest.approx(2.2), False, FIXED_NOW),
    ]


def test_with_defaults_copies_non_zero_fields():
    """Only non-zero prototype fields become defaults."""
    prototype = zero_instance(User)
    prototype.name = "alice"

    builder = Builder(User).with_defaults(prototype)
    users = builder.generate(3)

    assert builder.generator.overrides.default_values == {"name": "alice"}
    assert [u.name for u in users] == ["alice", "alice", "alice"]
    assert [u.age for u in users] == [1, 2, 3]
    assert [u.active for u in users] == [True, False, True]


def test_with_defaults_non_zero_boolean_and_timestamp():
    """True booleans and set timestamps are explicit defaults."""
    prototype = User(name="", age=0, score=0.0, active=True, created_at=FIXED_NOW)

    users = Builder(User).with_defaults(prototype).generate(2)

    assert [u.active for u in users] == [True, True]
    assert all(u.created_at == FIXED_NOW for u in users)


def test_with_defaults_zero_field_still_custom_resolved():
    """A zero prototype field leaves custom generators in charge."""
    prototype = User(name="bob", age=0, score=0.0, active=False, created_at=None)

    users = (
        Builder(User)
        .set_custom("age", lambda i: 40 + i)
        .with_defaults(prototype)
        .generate(2)
    )

    assert [(u.name, u.age) for u in users] == [("bob", 40), ("bob", 41)]


def test_with_defaults_snapshot():
    """Later changes to the prototype have no effect."""
    prototype = zero_instance(Customer)
    prototype.name = "acme"
    prototype.tags.append("vip")

    builder = Builder(Customer).with_defaults(prototype)
    prototype.name = "changed"
    prototype.tags.append("late")

    customer = builder.generate_one()
    assert customer.name == "acme"
    assert customer.tags == ["vip"]


def test_with_defaults_nested_record():
    """Non-zero nested records are snapshotted once as a shared default."""
    prototype = zero_instance(Customer)
    prototype.address.city = "Utrecht"

    customers = Builder(Customer).with_defaults(prototype).generate(2)

    assert [c.address.city for c in customers] == ["Utrecht", "Utrecht"]
    assert customers[0].address is customers[1].address
    assert customers[0].address is not prototype.address
    assert [c.name for c in customers] == ["name_1", "name_2"]


def test_with_defaults_wrong_type():
    """Prototypes must be instances of the record type."""
    with pytest.raises(PrototypeTypeError, match="cannot seed defaults"):
        Builder(User).with_defaults(Point(1, 2))


def test_modifiers_run_in_order():
    """The last modifier touching a field wins."""
    user = (
        Builder(User)
        .with_modifier(lambda u, i: setattr(u, "name", "first"))
        .with_modifier(lambda u, i: setattr(u, "name", "second"))
        .generate_one()
    )

    assert user.name == "second"


def test_modifiers_accumulate():
    """Each with_modifier() call adds a modifier."""
    builder = Builder(User)
    builder.with_modifier(lambda u, i: setattr(u, "age", u.age * 10))
    builder.with_modifier(lambda u, i: setattr(u, "name", f"{u.name}/{i}"))

    users = builder.generate(2)

    assert [(u.name, u.age) for u in users] == [("name_1/0", 10), ("name_2/1", 20)]


def test_modifiers_see_resolved_instance(fixed_clock):
    """Modifiers observe every field already resolved."""
    seen = []

    def record(user, index):
        seen.append(dataclasses.astuple(user))

    Builder(User, clock=fixed_clock).set_default("name", "fixed").with_modifier(record).generate(2)

    assert seen == [
        ("fixed", 1, 1.1, True, FIXED_NOW),
        ("fixed", 2, pytest.approx(2.2), False, FIXED_NOW),
    ]


def test_modifier_overrides_default():
    """Modifiers run after defaults and can replace their values."""
    user = (
        Builder(User)
        .set_default("age", 99)
        .with_modifier(lambda u, i: setattr(u, "age", 7))
        .generate_one()
    )

    assert user.age == 7


def test_modifier_replacement_for_frozen_record():
    """A modifier may return a replacement instance."""
    points = (
        Builder(Point)
        .with_modifier(lambda p, i: dataclasses.replace(p, y=p.x * 100))
        .generate(2)
    )

    assert points == [Point(1, 100), Point(2, 200)]


def test_modifier_replacement_for_pydantic_model():
    """Pydantic models can be replaced through model_copy()."""
    product = (
        Builder(Product)
        .with_modifier(lambda p, i: p.model_copy(update={"sku": "ABC"}))
        .generate_one()
    )

    assert product.sku == "ABC"


def test_modifier_other_result_ignored():
    """Return values that are not records leave the mutated instance in place."""
    log = []
    customer = (
        Builder(Customer)
        .set_default("tags", ["a", "b"])
        .with_modifier(lambda c, i: c.tags.pop())
        .with_modifier(lambda c, i: log.append(c.name) or len(log))
        .with_modifier(lambda c, i: "ignored")
        .generate_one()
    )

    assert isinstance(customer, Customer)
    assert customer.tags == ["a"]
    assert log == ["name_1"]


def test_modifier_foreign_record_ignored():
    """A record of another type is not a replacement."""
    user = Builder(User).with_modifier(lambda u, i: Point(1, 2)).generate_one()

    assert isinstance(user, User)


def test_builder_counts():
    """Count boundaries match the generator."""
    builder = Builder(User)

    assert builder.generate(0) == []
    assert builder.generate(-1) == []


def test_builder_rejects_non_record():
    with pytest.raises(MalformedRecordError):
        Builder(int)

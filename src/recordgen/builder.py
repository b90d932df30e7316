"""Builder API: generator defaults from a prototype plus post-fill modifiers."""

import copy
from datetime import datetime
from typing import Any, Callable, Generic, TypeVar

from recordgen.config import GenerationSettings
from recordgen.exceptions import PrototypeTypeError
from recordgen.generator import Generator, checked_count
from recordgen.introspection import get_introspector

T = TypeVar("T")

Modifier = Callable[[T, int], Any]


def apply_modifier(
    modifier: Callable[[Any, int], Any], item: Any, index: int, record_type: type
) -> Any:
    """
    Run one modifier on an instance.

    The modifier mutates the instance in place. When it returns an instance
    of the record type (e.g. dataclasses.replace() on frozen records), that
    instance replaces the item; any other return value is ignored.
    """
    result = modifier(item, index)
    if isinstance(result, record_type):
        return result
    return item


class Builder(Generic[T]):
    """
    Fluent API over a Generator with ordered post-fill modifiers.

    Modifiers run after every field is resolved, in registration order, and
    always see a fully filled instance.

    Example:
        >>> admins = (
        ...     Builder(User)
        ...     .with_defaults(User(name="", age=0, role="admin"))
        ...     .with_modifier(lambda u, i: setattr(u, "age", 30 + i))
        ...     .generate(2)
        ... )
        >>> [(a.role, a.age) for a in admins]
        [('admin', 30), ('admin', 31)]
    """

    def __init__(
        self,
        record_type: type[T],
        settings: GenerationSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize Builder.

        Args:
            record_type: Dataclass or pydantic model class
            settings: Synthesis settings (default: GenerationSettings())
            clock: Current-time source for timestamp fields

        Raises:
            MalformedRecordError: If record_type is not a record class
        """
        self.record_type = record_type
        self._generator: Generator[T] = Generator(record_type, settings, clock)
        self._modifiers: list[Modifier] = []

    @property
    def generator(self) -> Generator[T]:
        return self._generator

    def with_defaults(self, prototype: T) -> "Builder[T]":
        """
        Seed generator defaults from a prototype instance.

        Only settable fields holding a non-zero value are copied; zero
        fields count as unspecified. Values are copied now, so later changes
        to the prototype have no effect.

        Args:
            prototype: Instance of the record type

        Returns:
            Self for chaining

        Raises:
            PrototypeTypeError: If prototype is not an instance of the record type
        """
        if not isinstance(prototype, self.record_type):
            raise PrototypeTypeError(self._generator.schema.name, prototype)

        introspector = get_introspector()
        for info in self._generator.schema.settable_fields:
            value = getattr(prototype, info.name, None)
            if not introspector.is_zero(info, value):
                self._generator.set_default(info.name, copy.deepcopy(value))
        return self

    def with_modifier(self, modifier: Modifier) -> "Builder[T]":
        """
        Append a modifier called as modifier(instance, index).

        A returned instance of the record type replaces the item; any other
        return value is ignored.

        Returns:
            Self for chaining
        """
        self._modifiers.append(modifier)
        return self

    def set_default(self, field_name: str, value: Any) -> "Builder[T]":
        """Shortcut for builder.generator.set_default(); returns the builder."""
        self._generator.set_default(field_name, value)
        return self

    def set_custom(self, field_name: str, generator: Any) -> "Builder[T]":
        """Shortcut for builder.generator.set_custom(); returns the builder."""
        self._generator.set_custom(field_name, generator)
        return self

    def generate(self, count: int) -> list[T]:
        """
        Generate count instances with modifiers applied.

        Raises:
            TypeMismatchError: If an override value doesn't fit its field
            InvalidCountError: If count is negative and negative_count="error"
        """
        count = checked_count(count, self._generator.settings)
        self._generator.log_batch(count)
        return [self._generate_single(index) for index in range(count)]

    def generate_one(self) -> T:
        """Generate a single instance at index 0 with modifiers applied."""
        self._generator.log_batch(1)
        return self._generate_single(0)

    def _generate_single(self, index: int) -> T:
        item = self._generator.build(index)
        for modifier in self._modifiers:
            item = apply_modifier(modifier, item, index, self.record_type)
        return item

"""List helpers for records and primitive types."""

from typing import Any, Callable

from recordgen.builder import Builder
from recordgen.config import GenerationSettings
from recordgen.generator import Generator, checked_count
from recordgen.introspection import classify, is_record_type
from recordgen.models import FieldKind


def primitive_value(target: Any, index: int, settings: GenerationSettings) -> Any:
    """
    Synthesize a bare value of a primitive type for an index.

    str → "text_<index+1>", int → index + 1, float → (index + 1) * 1.1,
    bool → True on even indexes. Anything else is None.
    """
    kind, _, _ = classify(target)
    if kind is FieldKind.TEXT:
        return f"{settings.primitive_text_prefix}_{index + 1}"
    if kind in (FieldKind.INTEGER, FieldKind.UNSIGNED_INTEGER):
        return index + 1
    if kind is FieldKind.FLOAT:
        return settings.float_value(index)
    if kind is FieldKind.BOOLEAN:
        return index % 2 == 0
    return None


def generate_list(
    target: Any, count: int, settings: GenerationSettings | None = None
) -> list[Any]:
    """
    Generate a list of records or primitive values.

    Args:
        target: Record class, or a primitive type such as str or int
        count: Number of items
        settings: Synthesis settings (default: GenerationSettings())

    Examples:
        >>> generate_list(int, 3)
        [1, 2, 3]
        >>> generate_list(str, 2)
        ['text_1', 'text_2']
    """
    settings = settings or GenerationSettings()
    if is_record_type(target):
        return Generator(target, settings).generate(count)

    count = checked_count(count, settings)
    return [primitive_value(target, index, settings) for index in range(count)]


def generate_list_with(
    target: Any,
    count: int,
    modifier: Callable[[Any, int], Any] | None,
    settings: GenerationSettings | None = None,
) -> list[Any]:
    """
    Generate a list and pass every item through a modifier.

    Records behave as Builder(target).with_modifier(modifier). Primitive
    values are immutable, so for them a non-None return value of the
    modifier replaces the item.

    Example:
        >>> generate_list_with(int, 3, lambda v, i: v * 10)
        [10, 20, 30]
    """
    settings = settings or GenerationSettings()
    if is_record_type(target):
        builder = Builder(target, settings)
        if modifier is not None:
            builder.with_modifier(modifier)
        return builder.generate(count)

    count = checked_count(count, settings)
    items = []
    for index in range(count):
        item = primitive_value(target, index, settings)
        if modifier is not None:
            result = modifier(item, index)
            if result is not None:
                item = result
        items.append(item)
    return items

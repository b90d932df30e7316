"""Field value resolution: custom generator, then default, then auto-synthesis."""

from datetime import datetime
from typing import Any, Callable, get_origin

from recordgen.config import GenerationSettings
from recordgen.exceptions import TypeMismatchError
from recordgen.introspection import SchemaIntrospector, get_introspector, kind_of_value
from recordgen.models import FieldInfo, FieldKind, Overrides, RecordSchema


def describe_kind(info: FieldInfo) -> str:
    """Human-readable expected kind of a field, for error messages."""
    if info.kind is FieldKind.RECORD:
        expected = f"{FieldKind.RECORD.value} {info.record_type.__name__}"
    elif info.kind is FieldKind.OTHER:
        expected = getattr(info.annotation, "__name__", repr(info.annotation))
    else:
        expected = info.kind.value
    if info.minimum is not None and not (
        info.kind is FieldKind.UNSIGNED_INTEGER and info.minimum == 0
    ):
        expected += f" >= {info.minimum}"
    if info.optional:
        expected += " or None"
    return expected


def _matches_annotation(annotation: Any, value: Any) -> bool:
    # Generic aliases check their origin (list[int] → list); typing
    # constructs that are not classes (Any, Literal, multi-member unions)
    # accept anything
    if annotation is Any:
        return True
    origin = get_origin(annotation) or annotation
    if isinstance(origin, type):
        return isinstance(value, origin)
    return True


class FieldResolver:
    """
    Decide the value of each field of a record for an instance index.

    Precedence, first match wins:
        1. custom generator registered for the field name
        2. default value registered for the field name
        3. auto-synthesis from the field kind and the index

    Values from (1) and (2) are used as given and must be assignable to the
    field; nothing is coerced.
    """

    def __init__(
        self,
        settings: GenerationSettings,
        clock: Callable[[], datetime] | None = None,
        introspector: SchemaIntrospector | None = None,
    ):
        self.settings = settings
        self.clock = clock or settings.default_clock()
        self.introspector = introspector or get_introspector()

    def resolve(
        self,
        schema: RecordSchema,
        info: FieldInfo,
        overrides: Overrides,
        index: int,
    ) -> Any:
        """
        Resolve one field.

        Args:
            schema: Schema of the record being generated
            info: Field to resolve
            overrides: Custom generators and defaults
            index: Instance index (0-based)

        Returns:
            Field value

        Raises:
            TypeMismatchError: If an override value is not assignable
        """
        custom = overrides.custom_generators.get(info.name)
        if custom is not None:
            value = custom(index)
        elif info.name in overrides.default_values:
            value = overrides.default_values[info.name]
        else:
            return self.auto_value(info, index)

        self.check_assignable(schema, info, value)
        return value

    def resolve_all(
        self, schema: RecordSchema, overrides: Overrides, index: int
    ) -> dict[str, Any]:
        """
        Resolve every settable field of a record for one index.

        Non-settable fields without a declared default get their zero value;
        those with one are left to the record's constructor.

        Returns:
            Field name → value, ready for RecordSchema.build()
        """
        values = {}
        for info in schema.fields:
            if info.settable:
                values[info.name] = self.resolve(schema, info, overrides, index)
            elif not info.has_default:
                values[info.name] = self.introspector.zero_value(info)
        return values

    def auto_value(self, info: FieldInfo, index: int) -> Any:
        """Synthesize a value from the field kind and the index alone."""
        kind = info.kind
        if kind is FieldKind.TEXT:
            return self.settings.text_value(info.name, index)
        if kind in (FieldKind.INTEGER, FieldKind.UNSIGNED_INTEGER):
            return index + 1
        if kind is FieldKind.FLOAT:
            return self.settings.float_value(index)
        if kind is FieldKind.BOOLEAN:
            return index % 2 == 0
        if kind is FieldKind.TIMESTAMP:
            # Wall-clock, not index-derived
            return self.clock()
        # Nested records and unsupported kinds stay at their zero value
        return self.introspector.zero_value(info)

    def is_assignable(self, info: FieldInfo, value: Any) -> bool:
        """Check a value against a field's declared kind without coercion."""
        if value is None:
            return info.optional

        kind = info.kind
        is_int = isinstance(value, int) and not isinstance(value, bool)
        if kind is FieldKind.TEXT:
            return isinstance(value, str)
        if kind in (FieldKind.INTEGER, FieldKind.UNSIGNED_INTEGER):
            return is_int and (info.minimum is None or value >= info.minimum)
        if kind is FieldKind.FLOAT:
            return isinstance(value, float) or (is_int and self.settings.allow_int_for_float)
        if kind is FieldKind.BOOLEAN:
            return isinstance(value, bool)
        if kind is FieldKind.TIMESTAMP:
            return isinstance(value, info.annotation)
        if kind is FieldKind.RECORD:
            return isinstance(value, info.record_type)
        return _matches_annotation(info.annotation, value)

    def check_assignable(self, schema: RecordSchema, info: FieldInfo, value: Any) -> None:
        """
        Raise if a value cannot be assigned to a field.

        Raises:
            TypeMismatchError: With the record, field, expected and actual kinds
        """
        if self.is_assignable(info, value):
            return
        actual = kind_of_value(value)
        if actual == FieldKind.INTEGER.value and info.minimum is not None:
            sign = "negative " if value < 0 else ""
            actual = f"{sign}{actual} ({value})"
        raise TypeMismatchError(schema.name, info.name, describe_kind(info), actual)

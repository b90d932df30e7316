"""Record type introspection."""

import dataclasses
import inspect
import logging
import math
import sys
import types
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from recordgen.exceptions import MalformedRecordError
from recordgen.models import NO_DEFAULT, FieldInfo, FieldKind, RecordSchema

logger = logging.getLogger(__name__)

# Exact annotation → kind; bool must not fall through to int
SCALAR_KINDS = {
    str: FieldKind.TEXT,
    int: FieldKind.INTEGER,
    float: FieldKind.FLOAT,
    bool: FieldKind.BOOLEAN,
}

ZERO_VALUES = {
    FieldKind.TEXT: "",
    FieldKind.INTEGER: 0,
    FieldKind.UNSIGNED_INTEGER: 0,
    FieldKind.FLOAT: 0.0,
    FieldKind.BOOLEAN: False,
    FieldKind.TIMESTAMP: None,
}


def is_record_type(target: Any) -> bool:
    """Check whether a type is a dataclass or a pydantic model class."""
    if not isinstance(target, type):
        return False
    return dataclasses.is_dataclass(target) or issubclass(target, BaseModel)


def _lower_bound(metadata: tuple[Any, ...]) -> int | None:
    """Inclusive integer lower bound from annotated_types Ge, Gt and Interval."""
    bounds = []
    for meta in metadata:
        ge = getattr(meta, "ge", None)
        gt = getattr(meta, "gt", None)
        if ge is not None:
            bounds.append(math.ceil(ge))
        if gt is not None:
            bounds.append(math.floor(gt) + 1)
    return max(bounds) if bounds else None


def _unwrap(annotation: Any) -> tuple[Any, tuple[Any, ...], bool]:
    """
    Strip Annotated, Optional and NewType wrappers.

    Returns:
        (annotation, collected Annotated metadata, optional); unions of
        several types are returned as they are
    """
    optional = False
    metadata: tuple[Any, ...] = ()

    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            metadata += annotation.__metadata__
            annotation = get_args(annotation)[0]
        elif origin is Union or origin is types.UnionType:
            args = [a for a in get_args(annotation) if a is not type(None)]
            if len(args) != len(get_args(annotation)):
                optional = True
            if len(args) != 1:
                return annotation, metadata, optional
            annotation = args[0]
        elif hasattr(annotation, "__supertype__"):
            # typing.NewType
            annotation = annotation.__supertype__
        else:
            return annotation, metadata, optional


def integer_minimum(annotation: Any) -> int | None:
    """
    Get the inclusive lower bound declared on an int annotation.

    Examples:
        >>> integer_minimum(PositiveInt)
        1
        >>> integer_minimum(Annotated[int, Gt(-1)])
        0
        >>> integer_minimum(int) is None
        True
    """
    annotation, metadata, _ = _unwrap(annotation)
    if annotation is not int:
        return None
    return _lower_bound(metadata)


def classify(annotation: Any) -> tuple[FieldKind, Any, bool]:
    """
    Classify a field annotation.

    Args:
        annotation: Annotation as returned by get_type_hints(include_extras=True)

    Returns:
        (kind, unwrapped annotation, optional)

    Examples:
        >>> classify(Optional[str])
        (FieldKind.TEXT, str, True)
        >>> classify(NonNegativeInt)
        (FieldKind.UNSIGNED_INTEGER, int, False)
        >>> classify(list[int])
        (FieldKind.OTHER, list[int], False)
    """
    annotation, metadata, optional = _unwrap(annotation)

    if isinstance(annotation, type) and annotation in SCALAR_KINDS:
        kind = SCALAR_KINDS[annotation]
        if kind is FieldKind.INTEGER:
            minimum = _lower_bound(metadata)
            if minimum is not None and minimum >= 0:
                kind = FieldKind.UNSIGNED_INTEGER
        return kind, annotation, optional

    if isinstance(annotation, type):
        if issubclass(annotation, Enum):
            return FieldKind.OTHER, annotation, optional
        if issubclass(annotation, datetime):
            return FieldKind.TIMESTAMP, annotation, optional
        if is_record_type(annotation):
            return FieldKind.RECORD, annotation, optional

    return FieldKind.OTHER, annotation, optional


def kind_of_value(value: Any) -> str:
    """Describe the kind of a runtime value for error messages."""
    if value is None:
        return "None"
    if isinstance(value, bool):
        return FieldKind.BOOLEAN.value
    if isinstance(value, int):
        return FieldKind.INTEGER.value
    if isinstance(value, float):
        return FieldKind.FLOAT.value
    if isinstance(value, str):
        return FieldKind.TEXT.value
    if isinstance(value, datetime):
        return FieldKind.TIMESTAMP.value
    if is_record_type(type(value)):
        return f"{FieldKind.RECORD.value} {type(value).__name__}"
    return type(value).__name__


def _type_hints(record_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(record_type, include_extras=True)
    except (NameError, TypeError) as e:
        # Falls back to resolving field by field
        logger.debug(f"Could not resolve all type hints of {record_type.__name__}: {e}")
        return {}


def _declaring_class(record_type: type, name: str) -> type:
    for cls in record_type.__mro__:
        try:
            if name in inspect.get_annotations(cls):
                return cls
        except NameError:
            continue
    return record_type


def _resolve_annotation(record_type: type, name: str, annotation: Any) -> Any:
    """
    Evaluate the string annotation of a single field.

    The string is evaluated against the module and class namespace of the
    class declaring the field. An annotation that cannot be resolved is
    returned unchanged and later classified as OTHER.
    """
    if not isinstance(annotation, str):
        return annotation

    owner = _declaring_class(record_type, name)
    module = sys.modules.get(owner.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = {owner.__name__: owner, **vars(owner)}
    try:
        return eval(annotation, globalns, localns)
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        logger.warning(
            f"Could not resolve annotation {annotation!r} of field '{name}' "
            f"on {record_type.__name__} ({e}); the field will not be auto-synthesized"
        )
        return annotation


class SchemaIntrospector:
    """Discover and cache record schemas, one introspection per type."""

    def __init__(self):
        self._cache: dict[type, RecordSchema] = {}

    def get_schema(self, record_type: Any) -> RecordSchema:
        """
        Get the schema of a record type.

        Args:
            record_type: Dataclass or pydantic model class

        Returns:
            RecordSchema with fields in declaration order

        Raises:
            MalformedRecordError: If record_type is not a record class
        """
        schema = self._cache.get(record_type) if isinstance(record_type, type) else None
        if schema is not None:
            return schema

        if not is_record_type(record_type):
            raise MalformedRecordError(
                record_type, "not a dataclass or pydantic model class"
            )

        if issubclass(record_type, BaseModel):
            schema = self._introspect_pydantic(record_type)
        else:
            schema = self._introspect_dataclass(record_type)

        logger.debug(
            f"Discovered schema for {schema.name}: "
            f"{[(f.name, f.kind.value, f.settable) for f in schema.fields]}"
        )
        self._cache[record_type] = schema
        return schema

    def _introspect_dataclass(self, record_type: type) -> RecordSchema:
        hints = _type_hints(record_type)
        fields = []
        for dc_field in dataclasses.fields(record_type):
            if dc_field.name in hints:
                annotation = hints[dc_field.name]
            else:
                annotation = _resolve_annotation(record_type, dc_field.name, dc_field.type)
            kind, unwrapped, optional = classify(annotation)
            default = dc_field.default
            factory = dc_field.default_factory
            fields.append(
                FieldInfo(
                    name=dc_field.name,
                    kind=kind,
                    annotation=unwrapped,
                    settable=not dc_field.name.startswith("_"),
                    optional=optional,
                    record_type=unwrapped if kind is FieldKind.RECORD else None,
                    minimum=integer_minimum(annotation),
                    init=dc_field.init,
                    default=NO_DEFAULT if default is dataclasses.MISSING else default,
                    default_factory=None if factory is dataclasses.MISSING else factory,
                )
            )
        return RecordSchema(record_type, tuple(fields), "dataclass")

    def _introspect_pydantic(self, record_type: type[BaseModel]) -> RecordSchema:
        fields = []
        # Private attributes never appear in model_fields; constraint metadata
        # is split off the annotation by pydantic and re-attached here
        for name, field_info in record_type.model_fields.items():
            annotation = field_info.annotation
            if field_info.metadata:
                annotation = Annotated[(annotation, *field_info.metadata)]
            kind, unwrapped, optional = classify(annotation)
            has_value = not field_info.is_required() and field_info.default_factory is None
            fields.append(
                FieldInfo(
                    name=name,
                    kind=kind,
                    annotation=unwrapped,
                    settable=True,
                    optional=optional,
                    record_type=unwrapped if kind is FieldKind.RECORD else None,
                    minimum=integer_minimum(annotation),
                    default=field_info.default if has_value else NO_DEFAULT,
                    default_factory=field_info.default_factory,
                )
            )
        return RecordSchema(record_type, tuple(fields), "pydantic")

    def zero_value(self, info: FieldInfo, _building: frozenset[type] = frozenset()) -> Any:
        """
        Get the zero value of a field.

        Optional fields are None; scalar kinds use their empty value; nested
        records get a zero instance; other kinds use the declared default or
        None.
        """
        if info.optional:
            return None
        if info.kind in ZERO_VALUES:
            return ZERO_VALUES[info.kind]
        if info.kind is FieldKind.RECORD:
            return self.zero_instance(info.record_type, _building)
        if info.has_default:
            return info.declared_default()
        return None

    def is_zero(self, info: FieldInfo, value: Any) -> bool:
        """Check whether a value counts as "not specified" for a field."""
        if value is None:
            return True
        if info.kind is FieldKind.OTHER and info.has_default:
            return value == info.declared_default()
        if info.optional:
            return False
        zero = self.zero_value(info)
        return type(value) is type(zero) and value == zero

    def zero_instance(self, record_type: type, _building: frozenset[type] = frozenset()) -> Any:
        """
        Build an instance with every field at its zero value.

        Raises:
            MalformedRecordError: If the record nests itself through a
                non-optional field
        """
        if record_type in _building:
            raise MalformedRecordError(
                record_type, "it contains itself through a non-optional field"
            )
        schema = self.get_schema(record_type)
        building = _building | {record_type}
        values = {}
        for info in schema.fields:
            if not info.settable and info.has_default:
                continue
            values[info.name] = self.zero_value(info, building)
        return schema.build(values)


# Global introspector instance
_introspector = SchemaIntrospector()


def get_introspector() -> SchemaIntrospector:
    """Get the shared introspector."""
    return _introspector


def get_schema(record_type: Any) -> RecordSchema:
    """
    Get the cached schema of a record type (user-facing API).

    Example:
        >>> @dataclass
        ... class User:
        ...     name: str
        ...     age: int
        >>> [f.name for f in get_schema(User).settable_fields]
        ['name', 'age']
    """
    return _introspector.get_schema(record_type)


def zero_instance(record_type: Any) -> Any:
    """
    Build a blank instance of a record type (user-facing API).

    Useful as a starting point for Builder.with_defaults() prototypes of
    records whose fields are all required.
    """
    return _introspector.zero_instance(record_type)

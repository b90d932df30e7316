"""Data models and type definitions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

# Sentinel for fields without a declared default
NO_DEFAULT: Any = object()


class FieldKind(str, Enum):
    """Declared kind of a record field, as far as auto-synthesis is concerned."""

    TEXT = "text"
    INTEGER = "integer"
    UNSIGNED_INTEGER = "unsigned integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    RECORD = "record"
    OTHER = "other"


@dataclass(frozen=True)
class FieldInfo:
    """
    Field metadata from record introspection.

    Attributes:
        name: Attribute name
        kind: Classified kind of the declared annotation
        annotation: Declared annotation with Optional/Annotated/NewType unwrapped
        settable: Whether the engine may assign the field (public name)
        optional: Whether the annotation admits None
        record_type: Nested record class for RECORD fields
        minimum: Inclusive lower bound declared on int fields, or None
        init: Whether the field is a constructor parameter
        default: Declared default value, or NO_DEFAULT
        default_factory: Declared default factory, or None
    """

    name: str
    kind: FieldKind
    annotation: Any
    settable: bool
    optional: bool = False
    record_type: type | None = None
    minimum: int | None = None
    init: bool = True
    default: Any = NO_DEFAULT
    default_factory: Callable[[], Any] | None = None

    @property
    def has_default(self) -> bool:
        """Whether the record declares a default for this field."""
        return self.default is not NO_DEFAULT or self.default_factory is not None

    def declared_default(self) -> Any:
        """
        Get the declared default, calling the factory if there is one.

        Raises:
            LookupError: If no default is declared
        """
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not NO_DEFAULT:
            return self.default
        raise LookupError(f"Field '{self.name}' declares no default")


@dataclass(frozen=True)
class RecordSchema:
    """
    Ordered field descriptors of a record type.

    Attributes:
        record_type: The record class
        fields: Field descriptors in declaration order
        flavour: "dataclass" or "pydantic"
    """

    record_type: type
    fields: tuple[FieldInfo, ...]
    flavour: str

    @property
    def name(self) -> str:
        return self.record_type.__name__

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def settable_fields(self) -> list[FieldInfo]:
        """Fields the engine resolves; private fields are excluded."""
        return [f for f in self.fields if f.settable]

    def field(self, name: str) -> FieldInfo | None:
        for info in self.fields:
            if info.name == name:
                return info
        return None

    def build(self, values: dict[str, Any]) -> Any:
        """
        Construct an instance from per-field values without validation.

        Fields missing from ``values`` are left to the record's own
        construction (declared defaults). Pydantic models are built with
        ``model_construct`` so values are stored as given.

        Args:
            values: Field name → value

        Returns:
            New record instance
        """
        if self.flavour == "pydantic":
            return self.record_type.model_construct(**values)

        init_kwargs = {}
        late = {}
        for name, value in values.items():
            info = self.field(name)
            if info is not None and info.init:
                init_kwargs[name] = value
            else:
                late[name] = value

        instance = self.record_type(**init_kwargs)
        # object.__setattr__ also covers frozen dataclasses
        for name, value in late.items():
            object.__setattr__(instance, name, value)
        return instance


@dataclass
class Overrides:
    """
    Per-field override state owned by one Generator.

    Attributes:
        custom_generators: Field name → callable taking the instance index
        default_values: Field name → value used verbatim
    """

    custom_generators: dict[str, Callable[[int], Any]] = field(default_factory=dict)
    default_values: dict[str, Any] = field(default_factory=dict)

    def keys(self) -> set[str]:
        return set(self.custom_generators) | set(self.default_values)

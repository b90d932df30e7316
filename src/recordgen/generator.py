"""Generator API for filling records with deterministic test data."""

import inspect
import logging
from datetime import datetime
from typing import Any, Callable, Generic, TypeVar

from recordgen.config import GenerationSettings
from recordgen.exceptions import InvalidCountError
from recordgen.generators.registry import create_generator
from recordgen.introspection import get_schema
from recordgen.models import Overrides, RecordSchema
from recordgen.resolver import FieldResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


def checked_count(count: int, settings: GenerationSettings) -> int:
    """
    Apply the negative count policy.

    Returns:
        count, or 0 for a negative count under negative_count="empty"

    Raises:
        InvalidCountError: For a negative count under negative_count="error"
    """
    if count >= 0:
        return count
    if settings.negative_count == "error":
        raise InvalidCountError(count)
    logger.warning(f"Negative count {count} requested, generating nothing")
    return 0


def _takes_index(fn: Callable[..., Any]) -> bool:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins): assume fn(index)
        return True
    return len(sig.parameters) > 0


def bind_generator(field_name: str, generator: Any) -> Callable[[int], Any]:
    """
    Normalize a custom generator to a callable taking the instance index.

    Args:
        field_name: Field the generator is bound to
        generator: Callable taking the index, zero-argument callable,
            object with generate(field_name, index), generator class
            constructible without arguments, or registered name

    Raises:
        UnknownGeneratorError: If a name is not registered
        TypeError: If generator is none of the above, or a generator class
            that needs constructor arguments
    """
    if isinstance(generator, str):
        generator = create_generator(generator)
    elif isinstance(generator, type) and hasattr(generator, "generate"):
        # Generator classes are instantiated like registered ones
        try:
            generator = generator()
        except TypeError as e:
            raise TypeError(
                f"Generator class {generator.__name__} for '{field_name}' cannot be "
                f"instantiated without arguments ({e}); pass an instance instead"
            ) from e

    if hasattr(generator, "generate"):
        plugin = generator
        return lambda index: plugin.generate(field_name, index)

    if not callable(generator):
        raise TypeError(
            f"Custom generator for '{field_name}' must be callable, "
            f"a generator object or a registered name, got {type(generator).__name__}"
        )

    if _takes_index(generator):
        return generator
    return lambda index: generator()


class Generator(Generic[T]):
    """
    Generate populated instances of a record type.

    Each field of each instance is resolved by FieldResolver: a custom
    generator registered for the field wins, then a registered default, then
    a value synthesized from the field kind and the instance index.

    Override maps are not synchronized. Concurrent generate() calls on one
    Generator are safe only while no set_default()/set_custom() call runs;
    callers sharing a Generator across threads must serialize those calls
    themselves (e.g. with a threading.Lock).

    Example:
        >>> users = (
        ...     Generator(User)
        ...     .set_default("country", "NL")
        ...     .set_custom("email", lambda i: f"user{i}@example.com")
        ...     .generate(3)
        ... )
        >>> [u.name for u in users]
        ['name_1', 'name_2', 'name_3']
    """

    def __init__(
        self,
        record_type: type[T],
        settings: GenerationSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize Generator.

        Args:
            record_type: Dataclass or pydantic model class
            settings: Synthesis settings (default: GenerationSettings())
            clock: Current-time source for timestamp fields

        Raises:
            MalformedRecordError: If record_type is not a record class
        """
        self.record_type = record_type
        self.settings = settings or GenerationSettings()
        self._schema = get_schema(record_type)
        self._overrides = Overrides()
        self._resolver = FieldResolver(self.settings, clock)

    @property
    def schema(self) -> RecordSchema:
        return self._schema

    @property
    def overrides(self) -> Overrides:
        return self._overrides

    def set_default(self, field_name: str, value: Any) -> "Generator[T]":
        """
        Use a fixed value for a field in every instance.

        Args:
            field_name: Field name; names matching no settable field are ignored
            value: Value assigned as-is, the same object in every instance

        Returns:
            Self for chaining
        """
        self._overrides.default_values[field_name] = value
        return self

    def set_custom(self, field_name: str, generator: Any) -> "Generator[T]":
        """
        Compute a field from the instance index.

        Args:
            field_name: Field name; names matching no settable field are ignored
            generator: Callable taking the index (or no argument), a
                BaseGenerator instance or class, or the name of a registered
                generator

        Returns:
            Self for chaining

        Raises:
            UnknownGeneratorError: If generator names an unregistered generator
            TypeError: If generator is not usable as a custom generator
        """
        self._overrides.custom_generators[field_name] = bind_generator(field_name, generator)
        return self

    def generate(self, count: int) -> list[T]:
        """
        Generate count instances, indexes 0..count-1.

        Args:
            count: Number of instances

        Returns:
            List of instances (empty for count 0, and for negative counts
            unless negative_count="error")

        Raises:
            TypeMismatchError: If an override value doesn't fit its field
            InvalidCountError: If count is negative and negative_count="error"
        """
        count = checked_count(count, self.settings)
        self.log_batch(count)
        return [self.build(index) for index in range(count)]

    def generate_one(self) -> T:
        """Generate a single instance at index 0."""
        self.log_batch(1)
        return self.build(0)

    def build(self, index: int) -> T:
        """Generate the instance for one index."""
        values = self._resolver.resolve_all(self._schema, self._overrides, index)
        return self._schema.build(values)

    def log_batch(self, count: int) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug(f"Generating {count} {self._schema.name} instance(s)")
        settable = {f.name for f in self._schema.settable_fields}
        inert = sorted(self._overrides.keys() - settable)
        if inert:
            logger.debug(
                f"Overrides {inert} match no settable field of {self._schema.name} "
                f"and are ignored"
            )

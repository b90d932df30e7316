"""Custom exceptions with helpful error messages."""

from typing import Any


class RecordGenError(Exception):
    """Base exception for recordgen errors."""

    pass


class TypeMismatchError(RecordGenError):
    """Override value cannot be assigned to the field's declared type."""

    def __init__(self, record: str, field: str, expected: str, actual: str):
        self.record = record
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cannot assign {actual} value to field '{field}' "
            f"(expected {expected}) on record '{record}'.\n\n"
            f"Suggestions:\n"
            f"1. Return a {expected} value from the custom generator:\n"
            f"   gen.set_custom('{field}', lambda i: <{expected} value>)\n"
            f"2. Check the default registered for '{field}':\n"
            f"   gen.set_default('{field}', <{expected} value>)"
        )


class MalformedRecordError(RecordGenError):
    """Target type cannot be generated as a record."""

    def __init__(self, target: Any, reason: str):
        self.target = target
        name = getattr(target, "__name__", repr(target))
        super().__init__(
            f"Cannot generate records of type '{name}': {reason}.\n\n"
            f"Suggestions:\n"
            f"1. Use a @dataclass or a pydantic BaseModel subclass\n"
            f"2. For primitive types use generate_list({name}, count)\n"
            f"3. Mark recursive fields Optional so they can stay None"
        )


class InvalidCountError(RecordGenError):
    """Requested instance count is negative."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Cannot generate {count} instances: count must be >= 0.\n\n"
            f"Suggestions:\n"
            f"1. Check the arithmetic producing the count\n"
            f"2. Set negative_count='empty' to get an empty list instead"
        )


class UnknownGeneratorError(RecordGenError):
    """Named generator is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        listed = ", ".join(available)
        super().__init__(
            f"Unknown generator '{name}'. Available: {listed}.\n\n"
            f"Suggestions:\n"
            f"1. Register it first: register_generator('{name}', MyGenerator)\n"
            f"2. Pass a callable instead: gen.set_custom(field, lambda i: ...)"
        )


class PrototypeTypeError(RecordGenError):
    """Prototype passed to with_defaults() is not an instance of the record type."""

    def __init__(self, record: str, prototype: Any):
        self.record = record
        super().__init__(
            f"Prototype of type '{type(prototype).__name__}' cannot seed defaults "
            f"for record '{record}'.\n\n"
            f"Suggestions:\n"
            f"1. Pass an instance of '{record}'\n"
            f"2. Start from zero_instance({record}) and set the fields you need"
        )

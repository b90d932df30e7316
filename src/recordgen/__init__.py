"""
recordgen - Deterministic Test Record Generation

Fills dataclass and pydantic model instances for use as test fixtures:
per-field custom generators, then per-field defaults, then values derived
from the field type and the instance index.
"""

from recordgen.builder import Builder
from recordgen.config import GenerationSettings
from recordgen.exceptions import (
    InvalidCountError,
    MalformedRecordError,
    PrototypeTypeError,
    RecordGenError,
    TypeMismatchError,
    UnknownGeneratorError,
)
from recordgen.generator import Generator
from recordgen.generators import BaseGenerator, CycleGenerator, FakerGenerator, SequenceGenerator
from recordgen.generators.registry import (
    clear_generators,
    list_generators,
    register_generator,
)
from recordgen.introspection import get_schema, zero_instance
from recordgen.models import FieldInfo, FieldKind, RecordSchema
from recordgen.resolver import FieldResolver
from recordgen.slices import generate_list, generate_list_with

__version__ = "0.1.0"

__all__ = [
    "Generator",
    "Builder",
    "FieldResolver",
    "GenerationSettings",
    "FieldInfo",
    "FieldKind",
    "RecordSchema",
    "get_schema",
    "zero_instance",
    "generate_list",
    "generate_list_with",
    "BaseGenerator",
    "CycleGenerator",
    "FakerGenerator",
    "SequenceGenerator",
    "register_generator",
    "list_generators",
    "clear_generators",
    "RecordGenError",
    "TypeMismatchError",
    "MalformedRecordError",
    "InvalidCountError",
    "UnknownGeneratorError",
    "PrototypeTypeError",
]

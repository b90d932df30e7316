"""Reusable custom generators for record fields."""

from recordgen.generators.base import BaseGenerator
from recordgen.generators.faker_generator import FakerGenerator
from recordgen.generators.sequence import CycleGenerator, SequenceGenerator

__all__ = ["BaseGenerator", "CycleGenerator", "FakerGenerator", "SequenceGenerator"]

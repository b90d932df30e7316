"""Index-driven sequence generators."""

from collections.abc import Sequence
from typing import Any

from recordgen.generators.base import BaseGenerator


class SequenceGenerator(BaseGenerator):
    """
    Format a template with the instance number.

    Template placeholders:
        number: index + start
        index: raw 0-based index
        field: field name

    Examples:
        >>> gen = SequenceGenerator("SKU-{number:06d}")
        >>> gen.generate("sku", 0)
        'SKU-000001'
        >>> SequenceGenerator("{field}-{index}", start=0).generate("code", 4)
        'code-4'
    """

    def __init__(self, template: str, start: int = 1):
        self.template = template
        self.start = start

    def generate(self, field_name: str, index: int) -> str:
        return self.template.format(number=index + self.start, index=index, field=field_name)


class CycleGenerator(BaseGenerator):
    """
    Cycle through a fixed list of values by index.

    Example:
        >>> gen = CycleGenerator(["ELEC", "FOOD", "TOOLS"])
        >>> [gen.generate("category", i) for i in range(4)]
        ['ELEC', 'FOOD', 'TOOLS', 'ELEC']
    """

    def __init__(self, values: Sequence[Any]):
        if not values:
            raise ValueError("CycleGenerator needs at least one value")
        self.values = list(values)

    def generate(self, field_name: str, index: int) -> Any:
        return self.values[index % len(self.values)]

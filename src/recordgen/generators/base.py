"""Base generator interface."""

from abc import ABC, abstractmethod
from typing import Any


class BaseGenerator(ABC):
    """
    Base class for custom generators.

    Subclass this to create reusable field generators that can be passed to
    set_custom() directly or registered by name.

    Example:
        >>> class SKUGenerator(BaseGenerator):
        ...     def generate(self, field_name, index):
        ...         return f"SKU-{index + 1:06d}"
        >>>
        >>> register_generator("sku", SKUGenerator)
        >>> Generator(Product).set_custom("sku", "sku").generate(3)
    """

    @abstractmethod
    def generate(self, field_name: str, index: int) -> Any:
        """
        Generate a value for a field.

        Args:
            field_name: Name of the field being generated
            index: Instance index (0-based)

        Returns:
            Value assignable to the field
        """
        pass

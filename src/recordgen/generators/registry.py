"""Name → generator class lookup for set_custom(field, "<name>")."""

import logging

from recordgen.exceptions import UnknownGeneratorError
from recordgen.generators.base import BaseGenerator
from recordgen.generators.faker_generator import FakerGenerator

logger = logging.getLogger(__name__)

# Available without registration; survive clear()
BUILTIN_GENERATORS: dict[str, type] = {"faker": FakerGenerator}


class GeneratorRegistry:
    """
    Generator classes addressable by name.

    Names registered by the user shadow built-in names. Classes are stored,
    not instances; create_generator() builds a fresh instance per binding.
    """

    def __init__(self):
        self._generators: dict[str, type] = {}

    def register(self, name: str, generator_class: type) -> None:
        """
        Make a generator class available under a name.

        Raises:
            ValueError: If the class defines no generate(field_name, index)
        """
        if not hasattr(generator_class, "generate"):
            raise ValueError(
                f"Generator class must have 'generate' method. "
                f"Class {generator_class.__name__} is missing it."
            )
        if name in self._generators or name in BUILTIN_GENERATORS:
            logger.debug(f"Generator '{name}' re-registered as {generator_class.__name__}")
        else:
            logger.debug(f"Registering generator '{name}': {generator_class.__name__}")
        self._generators[name] = generator_class

    def get(self, name: str) -> type | None:
        """Look up a class by name, falling back to the built-ins."""
        return self._generators.get(name) or BUILTIN_GENERATORS.get(name)

    def list_generators(self) -> list[str]:
        """Names accepted by get(): built-ins first, then registrations."""
        names = list(BUILTIN_GENERATORS)
        names += [name for name in self._generators if name not in BUILTIN_GENERATORS]
        return names

    def clear(self) -> None:
        """Forget every registration; built-ins stay available."""
        self._generators.clear()


# Global registry instance
_registry = GeneratorRegistry()


def register_generator(name: str, generator_class: type) -> None:
    """
    Register a generator class for use by name in set_custom().

    Example:
        >>> from recordgen import BaseGenerator, Generator, register_generator
        >>>
        >>> class SKUGenerator(BaseGenerator):
        ...     def generate(self, field_name, index):
        ...         return f"SKU-{index + 1:06d}"
        >>>
        >>> register_generator("sku", SKUGenerator)
        >>> Generator(Product).set_custom("sku", "sku").generate_one().sku
        'SKU-000001'
    """
    _registry.register(name, generator_class)


def get_generator(name: str) -> type | None:
    """Get the class registered (or built in) under a name, or None."""
    return _registry.get(name)


def create_generator(name: str) -> BaseGenerator:
    """
    Instantiate the generator class known under a name.

    Raises:
        UnknownGeneratorError: If no class is known under name
    """
    generator_class = get_generator(name)
    if generator_class is None:
        raise UnknownGeneratorError(name, list_generators())
    return generator_class()


def list_generators() -> list[str]:
    """Every name create_generator() accepts, "faker" included."""
    return _registry.list_generators()


def clear_generators() -> None:
    """Drop user registrations (test teardown)."""
    _registry.clear()

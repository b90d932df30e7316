"""Faker-based data generator."""

from typing import Any

from faker import Faker

from recordgen.generators.base import BaseGenerator


class FakerGenerator(BaseGenerator):
    """
    Generate realistic values using the Faker library.

    Faker is reseeded with ``seed + index`` before every value, so the same
    index always yields the same value.

    Example:
        >>> gen = FakerGenerator("email")
        >>> gen.generate("contact", 0) == gen.generate("contact", 0)
        True
    """

    # Field name → Faker method
    FIELD_MAPPINGS = {
        "email": "email",
        "first_name": "first_name",
        "last_name": "last_name",
        "name": "name",
        "username": "user_name",
        "company": "company",
        "phone": "phone_number",
        "phone_number": "phone_number",
        "address": "address",
        "street": "street_address",
        "city": "city",
        "state": "state",
        "country": "country",
        "zip": "zipcode",
        "zipcode": "zipcode",
        "url": "url",
        "title": "sentence",
        "description": "paragraph",
        "bio": "paragraph",
    }

    FALLBACK_METHOD = "word"

    def __init__(
        self,
        method: str | None = None,
        locale: str | None = None,
        seed: int = 0,
        **kwargs: Any,
    ):
        """
        Initialize Faker generator.

        Args:
            method: Faker provider method (e.g. "email"); derived from the
                field name when omitted
            locale: Faker locale (default: Faker's default)
            seed: Base seed added to the index
            **kwargs: Arguments passed to the provider method
        """
        self.method = method
        self.seed = seed
        self.kwargs = kwargs
        self.fake = Faker(locale)

        if method is not None and not hasattr(self.fake, method):
            raise ValueError(f"Faker has no provider method '{method}'")

    def method_for(self, field_name: str) -> str:
        """Pick the Faker method for a field."""
        if self.method is not None:
            return self.method
        return self.FIELD_MAPPINGS.get(field_name.lower(), self.FALLBACK_METHOD)

    def generate(self, field_name: str, index: int) -> Any:
        self.fake.seed_instance(self.seed + index)
        return getattr(self.fake, self.method_for(field_name))(**self.kwargs)

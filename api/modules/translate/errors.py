"""
Errors raised by ingredient translation and its cache stores.
"""


class ValidationError(ValueError):
    """The request did not carry a usable ingredient name."""


class MissingInput(ValidationError):
    def __init__(self, field: str = "ingredient_name"):
        self.field = field
        super().__init__(f"{field} is required")


class CacheStoreError(RuntimeError):
    """A cache lookup or insert could not be completed."""


class DictionaryError(RuntimeError):
    """The ingredient dictionary file is missing, unreadable or empty."""

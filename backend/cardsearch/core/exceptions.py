"""
Application-level exceptions.
"""


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing."""
    pass


class UnsupportedFilterError(ValueError):
    """Raised when a pill filter cannot be expressed in the index filter syntax."""

    def __init__(self, attribute: str, value, operator: str):
        self.attribute = attribute
        self.value = value
        self.operator = operator
        super().__init__(
            f"Unsupported filter: {operator} on {attribute} with value {value!r}"
        )

"""Exceptions raised while compiling component tags."""

from typing import Optional


class BladewireError(Exception):
    """Base class for all compiler errors."""


class UnresolvedComponentError(BladewireError):
    """Raised when a tag name cannot be resolved to a class or a view."""

    def __init__(self, component: str, alias: Optional[str] = None):
        self.component = component
        self.alias = alias
        if alias is not None:
            message = (
                f"Unable to locate class or view [{alias}] for component [{component}]."
            )
        else:
            message = f"Unable to locate a class or view for component [{component}]."
        super().__init__(message)


class RegistryLookupError(BladewireError):
    """Raised by a view finder when it is asked about a malformed view name."""


class MalformedAttributeError(BladewireError):
    """Raised in strict mode when an attribute string yields no attributes."""

    def __init__(self, attribute_string: str):
        self.attribute_string = attribute_string
        super().__init__(f"Unable to parse attributes [{attribute_string.strip()}].")

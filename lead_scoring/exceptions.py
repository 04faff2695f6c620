"""
Error types shared by the lead rules components.

Every component is a pure function of its inputs, so errors are raised to
the immediate caller and no partial result is ever returned.
"""

from typing import Any

from pydantic import ValidationError


class LeadRulesError(ValueError):
    """Base class for all lead rules errors."""
    pass


class InvalidInput(LeadRulesError):
    """A present field could not be coerced to its expected type."""
    pass


class EmptyInput(LeadRulesError):
    """An operation that needs at least one record received none."""
    pass


class InvalidConfig(LeadRulesError):
    """A configuration value makes the calculation undefined."""
    pass


def invalid_input_from(error: ValidationError, what: str) -> InvalidInput:
    """Translate a pydantic ValidationError into InvalidInput."""
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        problems.append(f"{location}: {item.get('msg')}")
    return InvalidInput(f"Invalid {what}: {'; '.join(problems)}")


def describe(value: Any) -> str:
    """Short type description used in error messages."""
    return type(value).__name__

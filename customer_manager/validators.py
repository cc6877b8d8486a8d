"""Caller-side input checks applied before the directory service is invoked."""

from typing import Any


class CustomerInputError(ValueError):
    """Raised for caller input errors; `message` is returned to the caller verbatim."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def validate_customer_id(customer_id: Any) -> int:
    # bool is an int subclass; `True` is not an id.
    if isinstance(customer_id, bool) or not isinstance(customer_id, int) or customer_id <= 0:
        raise CustomerInputError("Invalid customer ID")
    return customer_id


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_customer_fields(name: Any, email: Any) -> tuple[str, str]:
    """Return stripped `(name, email)`; anything missing, blank or not a string is rejected."""
    name, email = _text(name), _text(email)
    if not name or not email:
        raise CustomerInputError("Name and email are required")
    return name, email


def validate_search_name(name: Any) -> str:
    if not _text(name):
        raise CustomerInputError("Customer name is required")
    return name

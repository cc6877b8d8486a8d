"""
Customer Directory Service
==========================

Purpose:
- Own the canonical in-memory customer collection and provide lookup, name search
  and create/update/delete operations on it.

Dependencies:
- `customer_manager.models.Customer`
- Standard library `threading` for the mutation lock

Notes:
- Collection order is insertion order; nothing is sorted.
- New ids are `max(id) + 1` (or 1 when empty). This is only collision-free because
  every mutation runs under `self._lock`; an id can be reused after the record
  holding the highest id is deleted.
- State lives for the life of the service instance; there is no persistence.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from .models import Customer

logger = logging.getLogger(__name__)

SEED_CUSTOMERS = [
    ("John Doe", "john@example.com"),
    ("Jane Smith", "jane@example.com"),
    ("Bob Wilson", "bob@example.com"),
]


class CustomerService(ABC):
    """Read/search/CRUD contract consumed by the HTTP API and the agent tools."""

    @abstractmethod
    def get_all(self) -> list[Customer]:
        ...

    @abstractmethod
    def get_by_id(self, customer_id: int) -> Customer | None:
        ...

    @abstractmethod
    def search_by_name(self, name: str | None) -> Customer | None:
        ...

    @abstractmethod
    def create(self, name: str, email: str) -> Customer:
        ...

    @abstractmethod
    def update(self, customer_id: int, name: str, email: str) -> Customer | None:
        ...

    @abstractmethod
    def delete(self, customer_id: int) -> bool:
        ...


class InMemoryCustomerService(CustomerService):
    """
    List-backed implementation of `CustomerService`.

    Parameters:
    - seed: `bool` populate the three example customers (ids 1-3) on construction.

    Example:
    ```python
    service = InMemoryCustomerService()
    service.search_by_name("DOE").name  # "John Doe"
    ```
    """

    def __init__(self, *, seed: bool = True) -> None:
        self._customers: list[Customer] = []
        self._lock = threading.Lock()
        if seed:
            started_at = datetime.now(timezone.utc)
            for index, (name, email) in enumerate(SEED_CUSTOMERS, start=1):
                self._customers.append(Customer(id=index, name=name, email=email, created_at=started_at))

    def get_all(self) -> list[Customer]:
        """Return a snapshot of all customers in insertion order."""
        with self._lock:
            return list(self._customers)

    def get_by_id(self, customer_id: int) -> Customer | None:
        with self._lock:
            return self._find(customer_id)

    def search_by_name(self, name: str | None) -> Customer | None:
        """
        Return the first customer whose name contains `name`, ignoring case.

        Parameters:
        - name: `str | None` substring to look for.

        Returns:
        - `Customer | None`: first match in collection order; `None` for a blank
          query or when nothing matches.
        """
        if name is None or not name.strip():
            return None

        needle = name.casefold()
        with self._lock:
            for customer in self._customers:
                if customer.name is not None and needle in customer.name.casefold():
                    return customer
        return None

    def create(self, name: str, email: str) -> Customer:
        """Append a new customer with the next id and the current UTC time."""
        with self._lock:
            next_id = max((c.id for c in self._customers), default=0) + 1
            customer = Customer(
                id=next_id,
                name=name,
                email=email,
                created_at=datetime.now(timezone.utc),
            )
            self._customers.append(customer)
        logger.info("Created customer %s", customer.id)
        return customer

    def update(self, customer_id: int, name: str, email: str) -> Customer | None:
        """Overwrite name and email in place; `id` and `created_at` never change."""
        with self._lock:
            existing = self._find(customer_id)
            if existing is None:
                logger.debug("Update skipped, customer %s not found", customer_id)
                return None
            existing.name = name
            existing.email = email
        logger.info("Updated customer %s", customer_id)
        return existing

    def delete(self, customer_id: int) -> bool:
        with self._lock:
            existing = self._find(customer_id)
            if existing is None:
                return False
            self._customers.remove(existing)
        logger.info("Deleted customer %s", customer_id)
        return True

    def _find(self, customer_id: int) -> Customer | None:
        # Caller holds the lock.
        for customer in self._customers:
            if customer.id == customer_id:
                return customer
        return None

"""Shared fixtures: a fresh seeded service and an app/test client per test."""

import pytest
from fastapi.testclient import TestClient

from customer_manager.config import Settings
from customer_manager.main import create_app
from customer_manager.service import InMemoryCustomerService


@pytest.fixture
def service() -> InMemoryCustomerService:
    return InMemoryCustomerService()


@pytest.fixture
def settings() -> Settings:
    # No API key: the chat endpoint starts disabled unless a test injects an agent.
    return Settings(log_level="WARNING")


@pytest.fixture
def client(settings, service) -> TestClient:
    return TestClient(create_app(settings=settings, service=service))

"""Shared fixtures for the application-layer tests."""

from datetime import datetime, timezone

import pytest

from printshop.application.create_order import CreateOrderHandler
from printshop.application.dto import OrderItemRequest
from printshop.domain.model.actor import Actor, Role
from tests.fakes import (
    FakeOrderNumberSequence,
    FakeOrderRepository,
    FakeServiceRepository,
    RecordingNotificationSink,
    card_service,
    flyer_service,
)


@pytest.fixture
def admin() -> Actor:
    return Actor("boss", Role.ADMIN)


@pytest.fixture
def alice() -> Actor:
    return Actor("alice", Role.CLIENT)


@pytest.fixture
def bob() -> Actor:
    return Actor("bob", Role.CLIENT)


@pytest.fixture
def order_repo() -> FakeOrderRepository:
    return FakeOrderRepository()


@pytest.fixture
def service_repo() -> FakeServiceRepository:
    return FakeServiceRepository([flyer_service(), card_service()])


@pytest.fixture
def sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture
def place_order(order_repo, service_repo):
    """Create an order through the real use case; returns the stored Order."""
    handler = CreateOrderHandler(
        order_repo,
        service_repo,
        FakeOrderNumberSequence(),
        RecordingNotificationSink(),
        clock=lambda: datetime(2024, 6, 12, tzinfo=timezone.utc),
    )

    def _place(client_id: str = "alice", draft: bool = False, quantity: int = 5):
        dto = handler.handle(
            client_id, [OrderItemRequest("1", quantity, {"glossy": True})], draft=draft
        )
        return order_repo.get_by_id(dto.id)

    return _place

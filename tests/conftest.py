"""
Shared pytest fixtures for the support intake tests.

This module provides fixtures for:
- A mocked Redis client with the RedisClient interface
- Repositories and services wired on top of it
- Test data factories
"""

import fnmatch
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pytest

from infrastructure.persistence import RedisConversationRepository, RedisTicketRepository
from models.states import CollectedData, ConversationState, ConversationStep
from models.tickets import Ticket, TicketCategory, TicketPriority, TicketStatus
from services.conversation_service import ConversationService
from services.ticket_events import TicketEventPublisher
from services.ticket_service import TicketService


# ============================================================
# MOCK REDIS
# ============================================================


class MockRedis:
    """Mock Redis client for testing that mimics RedisClient behavior."""

    def __init__(self):
        self._data: Dict[str, Any] = {}
        self._sets: Dict[str, set] = {}
        self.expirations: Dict[str, Optional[int]] = {}
        self.published: List[tuple] = []
        self.set_called = False

    async def get(self, key: str):
        """Get returns parsed JSON like RedisClient does."""
        value = self._data.get(key)
        if value is None:
            return None
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value

    async def set(self, key: str, value, expire: Optional[int] = None):
        """Set stores dicts as JSON strings like RedisClient does."""
        self.set_called = True
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        self._data[key] = value
        self.expirations[key] = expire

    async def get_many(self, keys: List[str]) -> Dict[str, Any]:
        return {key: await self.get(key) for key in keys if key in self._data}

    async def delete(self, key: str):
        self._data.pop(key, None)
        self._sets.pop(key, None)

    async def keys(self, pattern: str) -> List[str]:
        return [key for key in self._data if fnmatch.fnmatchcase(key, pattern)]

    async def sadd(self, key: str, *members: str):
        self._sets.setdefault(key, set()).update(members)

    async def srem(self, key: str, *members: str):
        self._sets.get(key, set()).difference_update(members)

    async def smembers(self, key: str) -> set:
        return set(self._sets.get(key, set()))

    async def publish(self, channel: str, message: Dict[str, Any]) -> bool:
        self.published.append((channel, message))
        return True

    def events(self, channel: str) -> List[str]:
        """Names of the events published on a channel, in order."""
        return [msg["event"] for ch, msg in self.published if ch == channel]


# ============================================================
# TEST DATA FACTORIES
# ============================================================


@dataclass
class ConversationFactory:
    """Factory for creating test ConversationState instances."""

    @staticmethod
    def crear(
        id: str = "conv-1",
        step: ConversationStep = ConversationStep.GREETING,
        **data,
    ) -> ConversationState:
        """Creates a ConversationState with defaults."""
        return ConversationState(
            id=id,
            current_step=step,
            collected_data=CollectedData(**data),
        )

    @staticmethod
    def en_detalles(id: str = "conv-1") -> ConversationState:
        """Creates a conversation waiting for additional details."""
        return ConversationFactory.crear(
            id=id,
            step=ConversationStep.CLARIFY_DETAILS,
            user_name="Alice",
            issue_description="The dashboard shows a blank page every morning",
            issue_title="The dashboard shows a blank page every morning",
        )

    @staticmethod
    def en_categoria(
        id: str = "conv-1",
        suggested_category: str = "billing",
        user_email: Optional[str] = None,
    ) -> ConversationState:
        """Creates a conversation waiting for the category confirmation."""
        return ConversationFactory.crear(
            id=id,
            step=ConversationStep.SUGGEST_CATEGORY,
            user_name="Alice",
            user_email=user_email,
            issue_description="I was charged twice for my subscription",
            issue_title="I was charged twice for my subscription",
            suggested_category=suggested_category,
        )

    @staticmethod
    def en_confirmacion_final(
        id: str = "conv-1",
        user_email: Optional[str] = "alice@example.com",
        issue_title: Optional[str] = "I was charged twice",
    ) -> ConversationState:
        """Creates a conversation waiting for the final confirmation."""
        return ConversationFactory.crear(
            id=id,
            step=ConversationStep.FINAL_CONFIRMATION,
            user_name="Alice",
            user_email=user_email,
            issue_description="I was charged twice for my subscription",
            issue_title=issue_title,
            suggested_category="billing",
            confirmed_category="billing",
        )


@dataclass
class TicketFactory:
    """Factory for creating test Ticket instances."""

    @staticmethod
    def crear(
        id: str = "ticket-1",
        title: str = "Cannot open the dashboard",
        description: str = "The dashboard shows a blank page",
        category: TicketCategory = TicketCategory.TECHNICAL,
        status: TicketStatus = TicketStatus.OPEN,
        priority: TicketPriority = TicketPriority.MEDIUM,
        created_at: str = "2024-01-01T10:00:00+00:00",
        **kwargs,
    ) -> Ticket:
        """Creates a Ticket with defaults."""
        kwargs.setdefault("user_name", "Alice")
        kwargs.setdefault("updated_at", created_at)
        return Ticket(
            id=id,
            title=title,
            description=description,
            category=category,
            status=status,
            priority=priority,
            created_at=created_at,
            **kwargs,
        )


# ============================================================
# FIXTURES
# ============================================================


@pytest.fixture
def conversation_factory():
    return ConversationFactory


@pytest.fixture
def ticket_factory():
    return TicketFactory


@pytest.fixture
def mock_redis():
    """Provides a mock Redis client."""
    return MockRedis()


@pytest.fixture
def conversation_repository(mock_redis):
    return RedisConversationRepository(mock_redis, ttl_seconds=3600)


@pytest.fixture
def ticket_repository(mock_redis):
    return RedisTicketRepository(mock_redis, ttl_seconds=0)


@pytest.fixture
def event_publisher(mock_redis):
    return TicketEventPublisher(mock_redis, channel_prefix="test")


@pytest.fixture
def ticket_service(ticket_repository, event_publisher):
    return TicketService(ticket_repository, events=event_publisher, default_priority="medium")


@pytest.fixture
def conversation_service(conversation_repository, ticket_service, event_publisher):
    return ConversationService(
        conversation_repository,
        ticket_service,
        events=event_publisher,
    )

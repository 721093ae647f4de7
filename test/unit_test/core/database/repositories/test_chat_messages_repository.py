"""Unit tests for the chat message repository."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from moolaegis.core.database.entities.chat_messages import ChatMessage, MessageRole
from moolaegis.core.database.repositories.chat_messages import ChatMessageRepository


async def _seed(repository: ChatMessageRepository, user_id: int, count: int) -> None:
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    for i in range(count):
        role = MessageRole.USER if i % 2 == 0 else MessageRole.ASSISTANT
        await repository.create(
            ChatMessage(user_id=user_id, role=role, content=f"m{i}", created_at=start + timedelta(minutes=i))
        )


class TestChatMessageRepository:
    """Tests for ChatMessageRepository against in-memory SQLite."""

    async def test_get_recent_chronological(self, in_memory_session, two_users):
        alice, bob = two_users
        repository = ChatMessageRepository(in_memory_session)
        await _seed(repository, alice.id, 5)
        await _seed(repository, bob.id, 2)

        recent = await repository.get_recent(alice.id, limit=3)
        assert [m.content for m in recent] == ["m2", "m3", "m4"]
        assert all(m.user_id == alice.id for m in recent)

    async def test_roles_round_trip(self, in_memory_session, two_users):
        alice, _ = two_users
        repository = ChatMessageRepository(in_memory_session)
        await _seed(repository, alice.id, 2)
        in_memory_session.expunge_all()

        messages = await repository.list(filters={"user_id": alice.id})
        assert [m.role for m in messages] == [MessageRole.USER, MessageRole.ASSISTANT]

    async def test_delete(self, in_memory_session, two_users):
        alice, _ = two_users
        repository = ChatMessageRepository(in_memory_session)
        message = await repository.create(ChatMessage(user_id=alice.id, role=MessageRole.USER, content="hi"))
        assert await repository.delete(message.id) is True
        assert await repository.delete(message.id) is False

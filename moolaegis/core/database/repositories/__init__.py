"""
Database repository layer using SQLModel.

Modules:
- base: AsyncBaseRepository interface and QueryBuilder utilities
- users: User account repository operations
- feedback: Feedback repository operations
- reports: Stored report repository operations
- chat_messages: Chat history repository operations
"""

from . import chat_messages, feedback, reports, users

__all__ = [
    "chat_messages",
    "feedback",
    "reports",
    "users",
]

"""
Database entity models.

Modules:
- users: User accounts and password hashes
- feedback: Feedback comments
- reports: Stored report PDFs and their metadata
- chat_messages: Assistant conversation history
"""

from . import chat_messages, feedback, reports, users

__all__ = [
    "chat_messages",
    "feedback",
    "reports",
    "users",
]

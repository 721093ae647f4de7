"""Unit tests for the database layer in moolaegis/core/database.

- Entity model validation tests (SQLModel)
- Repository tests against mocked sessions and in-memory SQLite
- Engine and session factory helpers

No external database service is required.
"""

from typing import AsyncGenerator, Callable, Dict
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from moolaegis.core.database import Base, create_sessionmaker
from moolaegis.core.models.io.ocr import ReceiptItem, ReceiptSummary

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

API = "/api/v1"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database with all tables for each test."""
    import moolaegis.core.database.entities  # noqa: F401

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def chat_assistant():
    """Stand-in for the pydantic-ai chat assistant."""
    assistant = AsyncMock()
    assistant.reply = AsyncMock(return_value="Cash flow is the movement of money in and out of the business.")
    return assistant


@pytest.fixture
def receipt_reader():
    """Stand-in for the receipt OCR reader."""
    reader = AsyncMock()
    reader.read = AsyncMock(
        return_value=ReceiptSummary(
            vendor="Corner Cafe",
            date="2025-03-01",
            items=[ReceiptItem(name="Latte", price=4.5), ReceiptItem(name="Bagel", price=3.25)],
            total=7.75,
        )
    )
    return reader


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, chat_assistant, receipt_reader) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from moolaegis.core.database import get_session
    from moolaegis.server.main import app
    from moolaegis.server.services.chat import ChatAssistant, get_chat_assistant
    from moolaegis.server.services.ocr import get_receipt_reader

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    # Real conversation handling around a mocked model call
    assistant = ChatAssistant(agent=AsyncMock(), model_name="test:model")
    assistant.reply = chat_assistant.reply

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_chat_assistant] = lambda: assistant
    app.dependency_overrides[get_receipt_reader] = lambda: receipt_reader

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("moolaegis.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client: AsyncClient) -> Callable:
    """Register an account and return its JSON body."""

    async def _register(username: str = "alice", email: str = "alice@example.com", password: str = "secret1"):
        response = await client.post(
            f"{API}/auth/register", json={"username": username, "email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def login(client: AsyncClient) -> Callable:
    """Log in and return bearer headers."""

    async def _login(username: str = "alice", password: str = "secret1") -> Dict[str, str]:
        response = await client.post(f"{API}/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest_asyncio.fixture
async def auth_headers(register_user, login) -> Dict[str, str]:
    """Bearer headers of a freshly registered user."""
    await register_user()
    return await login()


@pytest.fixture
def base_payload() -> dict:
    """Base-year actuals that balance (assets == liabilities + equity)."""
    return {
        "period_start": "2024-01-01",
        "period_end": "2024-12-31",
        "revenue": 1000.0,
        "cogs": 600.0,
        "op_expense": 200.0,
        "interest_expense": 10.0,
        "tax_expense": 38.0,
        "cash_begin": 100.0,
        "cash_end": 150.0,
        "ar_begin": 80.0,
        "ar_end": 100.0,
        "inventory_begin": 90.0,
        "inventory_end": 90.0,
        "ppe_begin": 500.0,
        "ppe_end": 520.0,
        "ap_begin": 60.0,
        "ap_end": 60.0,
        "debt_begin": 300.0,
        "debt_end": 300.0,
        "capital_begin": 200.0,
        "capital_end": 200.0,
        "re_begin": 148.0,
    }

"""
Unit tests for Logfire middleware.

This test suite covers:
- Request/response processing
- Performance metrics collection
- Error handling
- Slow request detection
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from moolaegis.server.middleware.logfire_middleware import LogfireMiddleware


@pytest.fixture
def mock_request():
    request = MagicMock(spec=Request)
    request.method = "POST"
    request.url.path = "/api/v1/forecast"
    request.state = MagicMock()
    return request


class TestLogfireMiddlewareDispatch:
    """Test LogfireMiddleware.dispatch method."""

    async def test_successful_request(self, mock_request):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("moolaegis.server.middleware.logfire_middleware.log_api_request") as mock_log:
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
        assert float(response.headers["X-Process-Time"]) >= 0
        kwargs = mock_log.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["path"] == "/api/v1/forecast"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0

    async def test_exception_logged_and_reraised(self, mock_request):
        async def call_next(request):
            raise RuntimeError("boom")

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("moolaegis.server.middleware.logfire_middleware.log_api_request") as mock_log:
            with pytest.raises(RuntimeError, match="boom"):
                await middleware.dispatch(mock_request, call_next)

        assert mock_log.call_args.kwargs["status_code"] == 500

    async def test_slow_request_warning(self, mock_request):
        async def call_next(request):
            return Response(status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())
        with (
            patch("moolaegis.server.middleware.logfire_middleware.SLOW_REQUEST_MS", -1),
            patch("moolaegis.server.middleware.logfire_middleware.log_api_request"),
            patch("moolaegis.server.middleware.logfire_middleware.logger") as mock_logger,
        ):
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args.args[0]

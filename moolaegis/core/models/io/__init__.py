"""
I/O models for API requests and responses.

These models are separate from database entities to allow independent
evolution of API contracts.

Modules:
- auth: Registration, login and token models
- feedback: Feedback models
- reports: Stored report metadata
- forecast: Forecast request and response models
- chat: Chat message models
- ocr: Receipt extraction models
"""

from .auth import (
    AccessToken,
    ForgetPasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    StatusResponse,
    TokenPair,
    UserRead,
)
from .chat import ChatMessageRead, ChatReply, ChatRequest
from .feedback import FeedbackCreate, FeedbackRead
from .forecast import ForecastPdfRequest, ForecastRequest, ForecastResponse
from .ocr import OcrResponse, ReceiptItem, ReceiptSummary
from .reports import ReportRead

__all__ = [
    "AccessToken",
    "ChatMessageRead",
    "ChatReply",
    "ChatRequest",
    "FeedbackCreate",
    "FeedbackRead",
    "ForecastPdfRequest",
    "ForecastRequest",
    "ForecastResponse",
    "ForgetPasswordRequest",
    "LoginRequest",
    "OcrResponse",
    "ReceiptItem",
    "ReceiptSummary",
    "RefreshRequest",
    "RegisterRequest",
    "ReportRead",
    "StatusResponse",
    "TokenPair",
    "UserRead",
]

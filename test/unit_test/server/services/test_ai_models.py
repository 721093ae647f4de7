"""Unit tests for pydantic-ai model construction."""

from pydantic_ai.models.openai import OpenAIResponsesModel

from moolaegis.server.core.config import AIModelConfig
from moolaegis.server.services.ai_models import build_model, model_settings


def test_openai_model_with_key():
    model = build_model("openai:gpt-4o-mini", AIModelConfig(openai_api_key="sk-test"))
    assert isinstance(model, OpenAIResponsesModel)
    assert model.model_name == "gpt-4o-mini"


def test_name_returned_without_key():
    assert build_model("openai:gpt-4o-mini", AIModelConfig(openai_api_key=None)) == "openai:gpt-4o-mini"


def test_other_providers_resolved_by_name():
    config = AIModelConfig(openai_api_key="sk-test")
    assert build_model("anthropic:claude-3-5-haiku-latest", config) == "anthropic:claude-3-5-haiku-latest"
    assert build_model("test", config) == "test"


def test_model_settings_timeout():
    assert model_settings(AIModelConfig(timeout=15)) == {"timeout": 15}

"""
Model construction for the pydantic-ai agents.

Model names use pydantic-ai's ``provider:model`` notation. OpenAI models get an
explicit provider when ``OPENAI_API_KEY`` is configured in the settings, other
providers read their credentials from the environment.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic_ai import ModelSettings
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIResponsesModel
from pydantic_ai.providers.openai import OpenAIProvider

from moolaegis.core.logging_config import get_logger
from moolaegis.server.core.config import AIModelConfig, settings

logger = get_logger(__name__)


def model_settings(config: Optional[AIModelConfig] = None) -> ModelSettings:
    cfg = config or settings.ai
    return ModelSettings(timeout=cfg.timeout)


def build_model(name: str, config: Optional[AIModelConfig] = None) -> Union[Model, str]:
    """Return a model object, or the model name when pydantic-ai can infer it.

    Args:
        name: ``provider:model`` name such as ``openai:gpt-4o-mini``
        config: Model configuration, defaults to the application settings
    """
    cfg = config or settings.ai
    provider, _, model_name = name.partition(":")
    if provider == "openai" and model_name and cfg.openai_api_key:
        logger.debug(f"Creating OpenAI model: {model_name}")
        return OpenAIResponsesModel(model_name, provider=OpenAIProvider(api_key=cfg.openai_api_key))
    return name

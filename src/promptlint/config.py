from __future__ import annotations

import logging
import os
from typing import Mapping

from promptlint.errors import ConfigurationError
from promptlint.models import ValidatorConfig

logger = logging.getLogger(__name__)

API_KEY_ENV = "PROMPTLINT_API_KEY"
API_ENDPOINT_ENV = "PROMPTLINT_API_ENDPOINT"
MODEL_NAME_ENV = "PROMPTLINT_MODEL_NAME"

DEFAULT_API_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL_NAME = "o3-mini"
DEFAULT_TIMEOUT_SECONDS = 300.0


def load_config(environ: Mapping[str, str] | None = None) -> ValidatorConfig:
    env = os.environ if environ is None else environ
    logger.info("Setting up LLM API configuration")

    api_key = _optional_str(env.get(API_KEY_ENV))
    if not api_key:
        raise ConfigurationError(f"API key not specified, set {API_KEY_ENV} environment variable")

    api_endpoint = _optional_str(env.get(API_ENDPOINT_ENV))
    if not api_endpoint:
        api_endpoint = DEFAULT_API_ENDPOINT
        logger.info("Using default API endpoint: %s", api_endpoint)

    model_name = _optional_str(env.get(MODEL_NAME_ENV))
    if not model_name:
        model_name = DEFAULT_MODEL_NAME
        logger.info("Using default model: %s", model_name)

    logger.info("Configuration completed")
    return ValidatorConfig(
        api_key=api_key,
        api_endpoint=api_endpoint,
        model_name=model_name,
        timeout=DEFAULT_TIMEOUT_SECONDS,
    )


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None

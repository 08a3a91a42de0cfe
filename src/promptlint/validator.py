from __future__ import annotations

import json
import logging
from typing import Sequence

from promptlint.errors import ConfigurationError, ResponseFormatError, TransportError
from promptlint.extractor import extract
from promptlint.http import post_json
from promptlint.models import Issue, Rule, ValidatorConfig
from promptlint.request import build_request

logger = logging.getLogger(__name__)


class RemoteValidator:
    """Send one prompt to the chat-completion endpoint and collect the issues it reports."""

    def __init__(self, config: ValidatorConfig):
        self.config = config

    def validate(self, prompt: str, rules: Sequence[Rule]) -> list[Issue]:
        logger.info("Starting LLM-based prompt validation")

        if not self.config.api_key:
            raise ConfigurationError("API key is missing, set PROMPTLINT_API_KEY")
        if not self.config.api_endpoint:
            raise ConfigurationError("API endpoint is missing, set PROMPTLINT_API_ENDPOINT")

        payload = build_request(prompt, rules, self.config.model_name)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

        logger.info("Sending request to %s with timeout %ss", self.config.api_endpoint, self.config.timeout)
        response = post_json(
            self.config.api_endpoint,
            payload,
            headers=headers,
            timeout=self.config.timeout,
        )
        logger.info("Received response with status code: %d", response.status)

        if not 200 <= response.status < 300:
            raise TransportError(
                f"API returned error {response.status}: {response.body}",
                status=response.status,
                body=response.body,
            )

        logger.info("Decoding API response")
        try:
            envelope = json.loads(response.body)
        except json.JSONDecodeError as exc:
            raise ResponseFormatError(f"error decoding response: {exc}", raw=response.body) from exc

        extraction = extract(envelope)
        logger.info("Validation completed successfully (%s, %d issues)", extraction.source, len(extraction.issues))
        return list(extraction.issues)

"""Sprachmodell-Anbindung über die OpenAI-kompatible Chat-API.

Standardmäßig Groq (https://api.groq.com/openai/v1); jeder andere
OpenAI-kompatible Endpunkt funktioniert über api_base_url.
"""

import json
import logging
import os
from typing import Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from config.schema import ModelConfig, SmartGenerateConfig
from smart.schema import SmartResponse

logger = logging.getLogger(__name__)


class ModelInvocationError(Exception):
    """Ein einzelner Modellaufruf ist gescheitert (Transport, API, JSON, Schema)."""

    def __init__(self, model: str, reason: str):
        super().__init__(f"{model}: {reason}")
        self.model = model
        self.reason = reason


class OpenAIModelClient:
    """ModelClient für ein konkretes Modell mit JSON-Antwortformat."""

    def __init__(self, config: ModelConfig, client: AsyncOpenAI) -> None:
        self.config = config
        self.name = config.model
        self._client = client

    async def invoke(self, system_prompt: str, user_prompt: str) -> SmartResponse:
        try:
            completion = await self._client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                timeout=self.config.timeout_seconds,
            )
        except OpenAIError as e:
            raise ModelInvocationError(self.name, f"API-Fehler: {e}") from e

        if not completion.choices:
            raise ModelInvocationError(self.name, "Antwort ohne choices")
        message = completion.choices[0].message
        refusal = getattr(message, "refusal", None)
        if refusal:
            raise ModelInvocationError(self.name, f"Ablehnung: {refusal}")

        content = message.content or ""
        logger.info(f"{self.name}: {len(content)} Zeichen Antwort")
        return parse_response(self.name, content)


def parse_response(model: str, content: str) -> SmartResponse:
    """JSON-Text → SmartResponse; jeder Formfehler wird zu ModelInvocationError."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ModelInvocationError(model, f"kein gültiges JSON ({e})") from e
    try:
        return SmartResponse.model_validate(data)
    except ValidationError as e:
        raise ModelInvocationError(model, f"Antwort passt nicht zum Schema: {e}") from e


def build_model_clients(
    config: SmartGenerateConfig, api_key: Optional[str] = None
) -> tuple[OpenAIModelClient, OpenAIModelClient]:
    """Erzeugt (primär, fallback) mit gemeinsamem HTTP-Client.

    Raises:
        ValueError: wenn kein API-Schlüssel gesetzt ist.
    """
    api_key = api_key or os.environ.get(config.api_key_env)
    if not api_key:
        raise ValueError(
            f"Kein API-Schlüssel gefunden. Umgebungsvariable {config.api_key_env} setzen."
        )
    client = AsyncOpenAI(api_key=api_key, base_url=config.api_base_url, max_retries=0)
    return (
        OpenAIModelClient(config.primary, client),
        OpenAIModelClient(config.fallback, client),
    )

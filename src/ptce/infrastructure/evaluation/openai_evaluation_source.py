"""Evaluation source backed by the OpenAI chat completions API."""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from ...domain.tournament.exceptions import EvaluationSourceError, ValidationError
from ...domain.tournament.interfaces.evaluation_source import (
    EvaluationFailure,
    EvaluationOutcome,
    EvaluationRequest,
    EvaluationSource,
    EvaluationSuccess,
)
from ...domain.tournament.value_objects.evaluation import Evaluation
from ..config import PTCESettings
from .prompts import system_prompt, user_prompt

logger = logging.getLogger(__name__)


class OpenAIEvaluationSource(EvaluationSource):
    """Asks a chat model for a JSON {score, confidence, reasoning} per request.

    Every problem (transport, HTTP status, empty or malformed content) is
    returned as an EvaluationFailure; nothing is raised to the caller.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        temperature: float = 0.7,
        max_tokens: int = 500,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ValidationError("OpenAI API key is required", field_name="api_key")

        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout,
        )
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    @classmethod
    def from_settings(cls, settings: PTCESettings) -> "OpenAIEvaluationSource":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
            timeout=settings.evaluation_timeout,
        )

    @property
    def name(self) -> str:
        return f"openai:{self.model}"

    def build_payload(self, request: EvaluationRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt(request.criterion)},
                {
                    "role": "user",
                    "content": user_prompt(
                        request.contender_id,
                        request.contender_name,
                        request.attributes,
                        request.criterion,
                    ),
                },
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "response_format": {"type": "json_object"},
        }

    async def evaluate(self, request: EvaluationRequest) -> EvaluationOutcome:
        try:
            response = await self._client.post(
                "chat/completions", json=self.build_payload(request), headers=self._headers
            )
        except httpx.TimeoutException as e:
            logger.warning(f"OpenAI request timed out for {request.contender_id}: {e}")
            return EvaluationFailure(error=f"OpenAI request timed out: {e}", error_type="timeout")
        except httpx.HTTPError as e:
            logger.warning(f"OpenAI request failed for {request.contender_id}: {e}")
            return EvaluationFailure(error=f"OpenAI request failed: {e}", error_type="transport")

        if response.status_code != 200:
            logger.error(f"OpenAI API error: {response.status_code} - {response.text[:200]}")
            return EvaluationFailure(
                error=f"OpenAI API error: {response.status_code}",
                error_type="http_status",
                details={"status_code": response.status_code},
            )

        try:
            evaluation = self.parse_response(response.json())
        except (EvaluationSourceError, ValidationError, ValueError) as e:
            logger.warning(f"Invalid response format from OpenAI for {request.contender_id}: {e}")
            return EvaluationFailure(error=str(e), error_type="malformed_response")

        logger.debug(
            f"OpenAI evaluated {request.contender_id} on {request.criterion.value}: "
            f"score={evaluation.score}, confidence={evaluation.confidence}"
        )
        return EvaluationSuccess(evaluation)

    @staticmethod
    def parse_response(data: Dict[str, Any]) -> Evaluation:
        """Extract the evaluation from a chat completions response body.

        Raises:
            EvaluationSourceError: If the body has no usable message content
            ValidationError: If the content lacks a numeric score or confidence
        """
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise EvaluationSourceError("Response has no message content")

        if not content or not content.strip():
            raise EvaluationSourceError("Empty response from OpenAI")

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            raise EvaluationSourceError(f"Response content is not JSON: {e}")

        return Evaluation.from_payload(payload)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any

import vertexai
from google.api_core import exceptions as google_exceptions
from vertexai.generative_models import GenerationConfig, GenerativeModel

from .errors import UpstreamCapacityError, UpstreamError, UpstreamParseError

logger = logging.getLogger(__name__)

# Quota, rate limit, overload and deadline signals: worth falling back, not failing.
CAPACITY_ERRORS = (
    google_exceptions.ResourceExhausted,
    google_exceptions.TooManyRequests,
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
)


class VertexAIAdapter:
    """Adapter for Vertex AI Gemini models."""

    def __init__(
        self,
        *,
        project_id: str,
        location: str = "us-central1",
        model_name: str = "gemini-1.5-pro",
        timeout: float = 30.0,
        temperature: float = 0.7,
        max_output_tokens: int = 8192,
        model: Any | None = None,
    ) -> None:
        """Initialize Vertex AI adapter.

        Args:
            project_id: GCP project ID
            location: Vertex AI location
            model_name: Model name (e.g., "gemini-1.5-pro")
            timeout: Seconds to wait for one generation call
            temperature: Default sampling temperature
            max_output_tokens: Default maximum output tokens
            model: Pre-built model object; skips ``vertexai.init`` when given
        """
        self.project_id = project_id
        self.location = location
        self.model_name = model_name
        self.timeout = timeout
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

        if model is None:
            vertexai.init(project=project_id, location=location)
            model = GenerativeModel(model_name)
        self.model = model

        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="vertex-ai")

    def generate_content(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        response_format: str | None = None,
    ) -> str:
        """Generate content using Vertex AI.

        Args:
            prompt: Input prompt
            temperature: Sampling temperature (0.0 - 1.0)
            max_output_tokens: Maximum output tokens
            response_format: Optional response format ("json" for JSON mode)

        Returns:
            Generated text

        Raises:
            UpstreamCapacityError: quota exhausted, overloaded or timed out
            UpstreamParseError: the response carries no usable text
            UpstreamError: any other failure
        """
        generation_config = GenerationConfig(
            temperature=self.temperature if temperature is None else temperature,
            max_output_tokens=max_output_tokens or self.max_output_tokens,
        )

        # Add JSON mode instruction if requested
        if response_format == "json":
            prompt = f"{prompt}\n\nPlease respond with valid JSON only."

        future = self._executor.submit(
            self.model.generate_content,
            prompt,
            generation_config=generation_config,
        )
        try:
            response = future.result(timeout=self.timeout)
        except FuturesTimeoutError as exc:
            future.cancel()
            logger.warning(
                "Vertex AI call timed out",
                extra={"model": self.model_name, "timeout": self.timeout},
            )
            raise UpstreamCapacityError(
                f"Vertex AI did not answer within {self.timeout:g}s"
            ) from exc
        except CAPACITY_ERRORS as exc:
            logger.warning(
                "Vertex AI capacity exceeded",
                extra={"model": self.model_name, "error": str(exc)},
            )
            raise UpstreamCapacityError(str(exc)) from exc
        except Exception as exc:
            logger.error(
                "Vertex AI call failed",
                exc_info=True,
                extra={"model": self.model_name},
            )
            raise UpstreamError(f"Vertex AI call failed: {exc}") from exc

        try:
            generated_text = response.text
        except (AttributeError, ValueError) as exc:
            # Blocked or empty candidates surface as a ValueError from ``.text``.
            raise UpstreamParseError(f"Vertex AI returned no text: {exc}") from exc

        logger.info(
            "Generated content with Vertex AI",
            extra={
                "model": self.model_name,
                "input_length": len(prompt),
                "output_length": len(generated_text),
            },
        )

        return generated_text

    def generate_json(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
    ) -> Any:
        """Generate structured JSON response.

        Args:
            prompt: Input prompt
            temperature: Sampling temperature
            max_output_tokens: Maximum output tokens

        Returns:
            Parsed JSON response
        """
        response = self.generate_content(
            prompt,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            response_format="json",
        )
        return parse_json_payload(response)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


def parse_json_payload(text: str) -> Any:
    # Strip markdown code blocks if present
    payload = text.strip()
    if payload.startswith("```json"):
        payload = payload[7:]
    elif payload.startswith("```"):
        payload = payload[3:]
    if payload.endswith("```"):
        payload = payload[:-3]

    try:
        return json.loads(payload.strip())
    except json.JSONDecodeError as exc:
        logger.error(
            "Failed to parse JSON response",
            extra={"response": text[:500]},
        )
        raise UpstreamParseError(f"Invalid JSON response: {exc}") from exc


__all__ = ["VertexAIAdapter", "parse_json_payload", "CAPACITY_ERRORS"]

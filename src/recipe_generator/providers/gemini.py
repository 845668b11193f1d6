"""Gemini generation provider.

GeminiProvider is constructed once at process start and injected into the
orchestrator. The underlying genai.Client is created on first use, exactly
once, and then shared by every generation run in the process.
"""

import asyncio
import threading
from typing import Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from recipe_generator.generation.errors import ProviderError, ProviderUnavailable
from recipe_generator.models.generation import GenerationConfig
from recipe_generator.utils.config import config
from recipe_generator.utils.logger import logger


# Status codes meaning the credential itself was rejected
_CREDENTIAL_REJECTED = (401, 403)


def _is_credential_rejection(error: genai_errors.APIError) -> bool:
    """True when the API refused the key itself (Gemini reports a bad key as 400 API_KEY_INVALID)."""
    if error.code in _CREDENTIAL_REJECTED:
        return True
    details = f"{error.status or ''} {error.message or ''}"
    return error.code == 400 and ("API_KEY_INVALID" in details or "API key not valid" in details)


class GeminiProvider:
    """Send prompts to Gemini and return the raw response text.

    Safe to share across concurrent runs: the only mutable state is the lazily
    created client, guarded by a lock so concurrent first calls (each running
    in an asyncio.to_thread worker) build it once.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
    ) -> None:
        """Initialize provider settings. No network call or client creation happens here.

        Args:
            api_key: Gemini API key. Defaults to GEMINI_API_KEY.
            model: Model id. Defaults to GEMINI_MODEL.
            timeout_seconds: Per-request timeout. Defaults to REQUEST_TIMEOUT_SECONDS.
        """
        self.api_key = config.GEMINI_API_KEY if api_key is None else api_key
        self.model_name = model or config.GEMINI_MODEL
        self.timeout_seconds = timeout_seconds or config.REQUEST_TIMEOUT_SECONDS
        self._client: Optional[genai.Client] = None
        self._client_lock = threading.Lock()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def _get_client(self) -> genai.Client:
        """Return the shared client, creating it on first use.

        Raises:
            ProviderUnavailable: If no API key is configured.
        """
        if not self.is_configured:
            raise ProviderUnavailable("GEMINI_API_KEY environment variable is required")

        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    logger.info(f"Initializing Gemini client (model={self.model_name})...")
                    self._client = genai.Client(
                        api_key=self.api_key,
                        http_options=types.HttpOptions(timeout=self.timeout_seconds * 1000),
                    )
                    logger.info("✓ Gemini client initialized")
        return self._client

    async def generate(self, prompt: str, generation_config: GenerationConfig) -> str:
        """Generate raw text for a prompt.

        Args:
            prompt: Full prompt text.
            generation_config: Sampling parameters for this call.

        Returns:
            str: Raw response text (may still be wrapped in a code fence).

        Raises:
            ProviderUnavailable: API key missing, or rejected by the API (401/403).
            ProviderError: Any other API, transport or timeout failure, or empty content.
        """
        client = self._get_client()

        content_config = types.GenerateContentConfig(
            temperature=generation_config.temperature,
            top_p=generation_config.top_p,
            top_k=generation_config.top_k,
            max_output_tokens=generation_config.max_output_tokens,
        )

        try:
            # Sync SDK call runs in a worker thread so other runs keep the event loop
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.model_name,
                contents=prompt,
                config=content_config,
            )
        except genai_errors.APIError as e:
            if _is_credential_rejection(e):
                raise ProviderUnavailable(f"Gemini rejected the API key ({e.code}): {e.message}") from e
            raise ProviderError(f"Gemini API error {e.code}: {e.message}", status_code=e.code) from e
        except Exception as e:
            raise ProviderError(f"Gemini request failed: {type(e).__name__}: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            raise ProviderError("Gemini returned empty content")

        usage = getattr(response, "usage_metadata", None)
        if usage:
            logger.debug(
                f"Gemini usage: prompt_tokens={usage.prompt_token_count} "
                f"output_tokens={usage.candidates_token_count} total_tokens={usage.total_token_count}"
            )
        return text

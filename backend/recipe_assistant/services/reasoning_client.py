"""
Clients for the external reasoning (text-generation) service.

Each client sends one prompt and returns the raw reply text. Transport
failures and non-success responses raise AIServiceUnavailable; nothing here
retries. Interpreting the reply is the substitution agent's job.
"""

import logging
from typing import Optional

import requests
from google import genai
from google.genai import types

from recipe_assistant.config import Settings
from recipe_assistant.exceptions import AIServiceUnavailable, ConfigurationError

logger = logging.getLogger(__name__)

# Reply used when the service answers without any text
EMPTY_REPLY = "{}"


class ReasoningClient:
    """Interface of a text-generation backend."""

    provider: str = "unknown"

    def complete(self, prompt: str) -> str:
        """
        Send a single user prompt and return the reply text.

        Raises:
            AIServiceUnavailable: If the service cannot be reached or
                                  answers with an error
        """
        raise NotImplementedError


class OpenRouterClient(ReasoningClient):
    """
    OpenRouter chat-completions client.

    Attributes:
        base_url: API base URL (without trailing slash)
        model: Model identifier requested from OpenRouter
        timeout: Request timeout in seconds
        max_tokens: Maximum tokens in the reply
    """

    provider = "openrouter"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        model: str = "anthropic/claude-3.5-sonnet",
        timeout: int = 60,
        max_tokens: int = 4096,
        temperature: float = 0.3,
    ):
        if not api_key:
            raise ConfigurationError("OpenRouter API key not configured")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature

    def complete(self, prompt: str) -> str:
        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info(f"Calling OpenRouter model {self.model}")
        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error(f"OpenRouter request timed out after {self.timeout}s")
            raise AIServiceUnavailable("AI service error")
        except requests.exceptions.RequestException as e:
            logger.error(f"OpenRouter request failed: {e}")
            raise AIServiceUnavailable("AI service error")

        if not response.ok:
            logger.error(f"OpenRouter returned HTTP {response.status_code}: {response.text[:200]}")
            raise AIServiceUnavailable("AI service error")

        return self._reply_text(response)

    def _reply_text(self, response: requests.Response) -> str:
        """Pull choices[0].message.content out of the response envelope."""
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Unexpected OpenRouter response envelope: {e}")
            return EMPTY_REPLY
        if not isinstance(content, str) or not content:
            return EMPTY_REPLY
        return content


class GeminiClient(ReasoningClient):
    """Google Gemini client built on google-genai."""

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        max_tokens: int = 4096,
        temperature: float = 0.3,
    ):
        if not api_key:
            raise ConfigurationError("Gemini API key not configured")
        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def complete(self, prompt: str) -> str:
        logger.info(f"Calling Gemini model {self.model}")
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    max_output_tokens=self.max_tokens,
                ),
            )
        except Exception as e:
            logger.error(f"Gemini API call failed: {e}")
            raise AIServiceUnavailable("AI service error")

        text: Optional[str] = response.text if response else None
        return text or EMPTY_REPLY


def build_reasoning_client(settings: Settings) -> ReasoningClient:
    """
    Build the client for the configured provider.

    Credentials are checked here, before any call is attempted.

    Raises:
        ConfigurationError: If the provider is unknown or its key is missing
    """
    provider = settings.REASONING_PROVIDER
    if provider == "openrouter":
        return OpenRouterClient(
            api_key=settings.OPENROUTER_API_KEY or "",
            base_url=settings.OPENROUTER_BASE_URL,
            model=settings.OPENROUTER_MODEL,
            timeout=settings.API_TIMEOUT,
            max_tokens=settings.LLM_MAX_TOKENS,
            temperature=settings.LLM_TEMPERATURE,
        )
    if provider == "gemini":
        return GeminiClient(
            api_key=settings.GEMINI_API_KEY or "",
            model=settings.GEMINI_MODEL,
            max_tokens=settings.LLM_MAX_TOKENS,
            temperature=settings.LLM_TEMPERATURE,
        )
    raise ConfigurationError(f"Unknown reasoning provider: {provider}")

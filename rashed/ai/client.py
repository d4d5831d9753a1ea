"""
Chat-completion client for Rashed.

Wraps ``openai.AsyncOpenAI``. Provider failures are re-raised as
``AIServiceError`` so the API layer can report them uniformly, and every
request is logged through ``log_ai_request``.
"""

import time
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError
from openai.types.chat import ChatCompletion
from pydantic import ValidationError

from ..core.config import get_config
from ..core.errors import AIConfigurationError, AIServiceError
from ..core.logging import get_logger, log_ai_request
from . import prompts
from .parsing import parse_json_object
from .schemas import CodeAnalysis, TechnicalRequirements

logger = get_logger("ai.client")

JSON_OBJECT_FORMAT = {"type": "json_object"}


def completion_text(response: ChatCompletion) -> str:
    """Text of the first choice, or an empty string."""
    if not response.choices:
        return ""
    return response.choices[0].message.content or ""


class AIClient:
    """Client for the chat-completion provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        config = get_config().ai
        self.api_key = api_key or config.api_key
        self.model = model or config.model
        self.base_url = base_url or config.base_url
        self.timeout = timeout or config.timeout
        self._client: Optional[AsyncOpenAI] = None

    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self.api_key)

    def with_api_key(self, api_key: str) -> "AIClient":
        """A client with the same settings that authenticates with ``api_key``."""
        return AIClient(
            api_key=api_key,
            model=self.model,
            base_url=self.base_url,
            timeout=self.timeout,
        )

    @property
    def client(self) -> AsyncOpenAI:
        """The underlying SDK client, created on first use."""
        if not self.is_configured():
            raise AIConfigurationError("OpenAI API key not configured")
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key, base_url=self.base_url, timeout=self.timeout
            )
        return self._client

    async def create_chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        response_format: Optional[Dict[str, str]] = None,
        operation: str = "chat",
    ) -> ChatCompletion:
        """
        Send role-tagged messages to the provider.

        Args:
            messages: ``[{"role": ..., "content": ...}]``
            model: Model override, defaults to the configured model
            temperature: Sampling temperature, provider default when None
            max_tokens: Completion token cap, provider default when None
            response_format: e.g. ``{"type": "json_object"}``
            operation: Name used in request logs

        Returns:
            The provider's chat completion

        Raises:
            AIConfigurationError: If no API key is configured
            AIServiceError: If the provider call fails
        """
        client = self.client
        model_name = model or self.model

        kwargs: Dict[str, Any] = {"model": model_name, "messages": messages}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if response_format is not None:
            kwargs["response_format"] = response_format

        log_ai_request(operation, model_name, details={"message_count": len(messages)})
        started = time.monotonic()
        try:
            response = await client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            log_ai_request(operation, model_name, status="failed", details={"error": str(e)})
            raise AIServiceError(f"OpenAI API error: {e}") from e

        log_ai_request(
            operation,
            model_name,
            status="completed",
            details={"duration_ms": round((time.monotonic() - started) * 1000, 1)},
        )
        return response

    async def generate_code(
        self,
        prompt: str,
        language: Optional[str] = None,
        additional_instructions: Optional[str] = None,
    ) -> str:
        """Generate a code file for ``prompt``."""
        try:
            response = await self.create_chat_completion(
                messages=[
                    {
                        "role": "system",
                        "content": prompts.code_generation_system_prompt(
                            additional_instructions
                        ),
                    },
                    {
                        "role": "user",
                        "content": prompts.code_generation_user_prompt(prompt, language),
                    },
                ],
                temperature=0.2,
                operation="generate_code",
            )
        except (AIConfigurationError, AIServiceError) as e:
            raise type(e)(f"Failed to generate code: {e.error}") from e
        return completion_text(response)

    async def analyze_code(self, code: str, language: str) -> CodeAnalysis:
        """Review ``code`` and return structured findings."""
        try:
            response = await self.create_chat_completion(
                messages=[
                    {
                        "role": "system",
                        "content": prompts.code_analysis_system_prompt(language),
                    },
                    {
                        "role": "user",
                        "content": prompts.code_analysis_user_prompt(code, language),
                    },
                ],
                temperature=0.1,
                response_format=JSON_OBJECT_FORMAT,
                operation="analyze_code",
            )
            return CodeAnalysis.model_validate(
                parse_json_object(completion_text(response))
            )
        except (AIConfigurationError, AIServiceError) as e:
            raise type(e)(f"Failed to analyze code: {e.error}") from e
        except (ValueError, ValidationError) as e:
            logger.error("Unusable code analysis response", error=str(e))
            raise AIServiceError(f"Failed to analyze code: {e}") from e

    async def generate_documentation(self, code: str, language: str) -> str:
        """Write documentation for ``code``."""
        try:
            response = await self.create_chat_completion(
                messages=[
                    {
                        "role": "system",
                        "content": prompts.documentation_system_prompt(language),
                    },
                    {
                        "role": "user",
                        "content": prompts.documentation_user_prompt(code, language),
                    },
                ],
                temperature=0.3,
                operation="generate_documentation",
            )
        except (AIConfigurationError, AIServiceError) as e:
            raise type(e)(f"Failed to generate documentation: {e.error}") from e
        return completion_text(response)

    async def natural_language_to_requirements(
        self, description: str
    ) -> TechnicalRequirements:
        """Turn a project description into structured technical requirements."""
        try:
            response = await self.create_chat_completion(
                messages=[
                    {"role": "system", "content": prompts.REQUIREMENTS_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": prompts.requirements_user_prompt(description),
                    },
                ],
                temperature=0.2,
                response_format=JSON_OBJECT_FORMAT,
                operation="requirements",
            )
            return TechnicalRequirements.model_validate(
                parse_json_object(completion_text(response))
            )
        except (AIConfigurationError, AIServiceError) as e:
            raise type(e)(f"Failed to generate requirements: {e.error}") from e
        except (ValueError, ValidationError) as e:
            logger.error("Unusable requirements response", error=str(e))
            raise AIServiceError(f"Failed to generate requirements: {e}") from e


_ai_client: Optional[AIClient] = None


def get_ai_client() -> AIClient:
    """Get the process-wide AI client, creating it from configuration."""
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client


def set_ai_client(client: Optional[AIClient]) -> None:
    """Replace the process-wide AI client (``None`` resets it)."""
    global _ai_client
    _ai_client = client

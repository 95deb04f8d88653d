"""Chat-completion client for the coaching features."""

import logging

from openai import OpenAI, OpenAIError

from app.config import Settings, get_settings

logger = logging.getLogger("hipo_coach")


class LLMError(Exception):
    """Raised when the provider is unavailable or returns nothing usable."""


class LLMClient:
    """Thin wrapper around an OpenAI-compatible chat completions endpoint."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.model = settings.OPENAI_MODEL
        self._client: OpenAI | None = None
        if settings.OPENAI_API_KEY:
            self._client = OpenAI(
                api_key=settings.OPENAI_API_KEY,
                base_url=settings.OPENAI_BASE_URL,
                timeout=settings.LLM_TIMEOUT_SECONDS,
                max_retries=1,
            )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_tokens: int = 500,
        temperature: float = 0.7,
        json_mode: bool = False,
    ) -> str:
        """Return the model's reply text. Raises LLMError on any provider failure."""
        if self._client is None:
            raise LLMError("LLM provider is not configured")

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
                **kwargs,
            )
        except OpenAIError as e:
            raise LLMError(str(e)) from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise LLMError("Empty response from model")
        return content.strip()


_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """Get the shared LLM client (the underlying HTTP pool is reused across requests)."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client

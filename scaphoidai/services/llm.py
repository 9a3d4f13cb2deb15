import json
import logging
import re
from typing import Protocol

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from scaphoidai.errors import ConfigurationError

logger = logging.getLogger(__name__)

_DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-haiku-20240307",
}


class GenerationBackend(Protocol):
    """Remote text generation constrained to a JSON schema."""

    async def generate(self, prompt: str, schema: dict, temperature: float) -> str:
        ...

    async def close(self) -> None:
        ...


def _strip_json(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\s*", "", text)
        text = re.sub(r"\s*```$", "", text)
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        return text[start:end + 1]
    return text


class OpenAIBackend:
    def __init__(
        self,
        api_key: str,
        model: str = "",
        base_url: str = "",
        timeout: float = 30.0,
        schema_name: str = "prediction_result",
    ) -> None:
        self.model = model or _DEFAULT_MODELS["openai"]
        self.schema_name = schema_name
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url or None, timeout=timeout)

    async def generate(self, prompt: str, schema: dict, temperature: float) -> str:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": self.schema_name, "schema": schema},
            },
            temperature=temperature,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        await self._client.close()


class AnthropicBackend:
    """Anthropic has no response-format switch; the schema goes in the system prompt."""

    def __init__(
        self,
        api_key: str,
        model: str = "",
        timeout: float = 30.0,
        max_tokens: int = 1024,
    ) -> None:
        self.model = model or _DEFAULT_MODELS["anthropic"]
        self.max_tokens = max_tokens
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout)

    async def generate(self, prompt: str, schema: dict, temperature: float) -> str:
        system = (
            "Respond with a single JSON object and nothing else. "
            "It must validate against this JSON schema:\n"
            f"{json.dumps(schema, indent=2)}"
        )
        message = await self._client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
        raw = ""
        for block in message.content:
            if hasattr(block, "text"):
                raw += block.text
        if not raw.strip():
            return ""
        return _strip_json(raw)

    async def close(self) -> None:
        await self._client.close()


def build_backend(
    provider: str,
    api_key: str,
    *,
    model: str = "",
    base_url: str = "",
    timeout: float = 30.0,
) -> GenerationBackend:
    provider = (provider or "openai").lower()
    if provider == "openai":
        return OpenAIBackend(api_key, model=model, base_url=base_url, timeout=timeout)
    if provider == "anthropic":
        if base_url:
            logger.warning("LLM_BASE_URL is ignored for the anthropic provider")
        return AnthropicBackend(api_key, model=model, timeout=timeout)
    raise ConfigurationError(f"Unknown LLM provider '{provider}'. Use 'openai' or 'anthropic'.")

"""Tests for the generation backends (scaphoidai/services/llm.py)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from scaphoidai.errors import ConfigurationError
from scaphoidai.services import llm
from scaphoidai.services.prediction import PREDICTION_SCHEMA


class TestStripJson:
    """Test the markdown fence stripping helper."""

    def test_strips_json_fence(self):
        raw = '```json\n{"key": "value"}\n```'
        assert llm._strip_json(raw) == '{"key": "value"}'

    def test_strips_plain_fence(self):
        raw = '```\n{"key": "value"}\n```'
        assert llm._strip_json(raw) == '{"key": "value"}'

    def test_strips_surrounding_prose(self):
        raw = 'Here is the result: {"key": "value"} Hope this helps.'
        assert llm._strip_json(raw) == '{"key": "value"}'

    def test_no_fence_unchanged(self):
        raw = '{"key": "value"}'
        assert llm._strip_json(raw) == '{"key": "value"}'


class TestBuildBackend:
    def test_openai(self):
        backend = llm.build_backend("openai", "sk-test")
        assert isinstance(backend, llm.OpenAIBackend)
        assert backend.model == "gpt-4o-mini"

    def test_anthropic_case_insensitive(self):
        backend = llm.build_backend("Anthropic", "sk-ant-test", model="claude-sonnet-4-5")
        assert isinstance(backend, llm.AnthropicBackend)
        assert backend.model == "claude-sonnet-4-5"

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError):
            llm.build_backend("gemini", "key")


class TestOpenAIBackend:
    """Test that the OpenAI path sends a JSON schema response format."""

    @pytest.mark.asyncio
    async def test_generate_sends_schema_and_temperature(self):
        mock_response = MagicMock()
        mock_response.choices = [MagicMock()]
        mock_response.choices[0].message.content = '{"key": "value"}'

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=mock_response)

        backend = llm.OpenAIBackend("sk-test", model="gpt-4o")
        backend._client = mock_client

        result = await backend.generate("prompt text", PREDICTION_SCHEMA, 0.2)

        assert result == '{"key": "value"}'
        call_kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert call_kwargs["model"] == "gpt-4o"
        assert call_kwargs["temperature"] == 0.2
        assert call_kwargs["messages"] == [{"role": "user", "content": "prompt text"}]
        rf = call_kwargs["response_format"]
        assert rf["type"] == "json_schema"
        assert rf["json_schema"]["schema"] is PREDICTION_SCHEMA

    @pytest.mark.asyncio
    async def test_generate_none_content_is_empty(self):
        mock_response = MagicMock()
        mock_response.choices = [MagicMock()]
        mock_response.choices[0].message.content = None

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=mock_response)

        backend = llm.OpenAIBackend("sk-test")
        backend._client = mock_client

        assert await backend.generate("p", PREDICTION_SCHEMA, 0.2) == ""

    @pytest.mark.asyncio
    async def test_close(self):
        backend = llm.OpenAIBackend("sk-test")
        backend._client = AsyncMock()
        await backend.close()
        backend._client.close.assert_awaited_once()


class TestAnthropicBackend:
    """Test that the Anthropic path puts the schema in the system prompt."""

    @pytest.mark.asyncio
    async def test_generate_joins_text_blocks(self):
        first = MagicMock()
        first.text = '```json\n{"riskLevel": '
        second = MagicMock()
        second.text = '"Low"}\n```'

        mock_response = MagicMock()
        mock_response.content = [first, second]

        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=mock_response)

        backend = llm.AnthropicBackend("sk-ant-test", model="claude-sonnet-4-5")
        backend._client = mock_client

        result = await backend.generate("prompt text", PREDICTION_SCHEMA, 0.2)

        assert result == '{"riskLevel": "Low"}'
        call_kwargs = mock_client.messages.create.call_args.kwargs
        assert call_kwargs["model"] == "claude-sonnet-4-5"
        assert call_kwargs["temperature"] == 0.2
        assert '"riskLevel"' in call_kwargs["system"]
        assert call_kwargs["messages"][0]["content"] == "prompt text"

    @pytest.mark.asyncio
    async def test_generate_no_text_is_empty(self):
        mock_response = MagicMock()
        mock_response.content = []

        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=mock_response)

        backend = llm.AnthropicBackend("sk-ant-test")
        backend._client = mock_client

        assert await backend.generate("p", PREDICTION_SCHEMA, 0.2) == ""

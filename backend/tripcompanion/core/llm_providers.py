"""
LLM Provider Implementations
Gemini and OpenAI chat providers behind a unified interface.
"""
import httpx
import logging
from abc import ABC, abstractmethod
from tripcompanion.core.errors import (
    UpstreamContractError,
    UpstreamTransportError,
    upstream_error_message,
)
from tripcompanion.core.logger import logs

class BaseLLMProvider(ABC):
    """Base class for all LLM providers"""

    #: value reported as `source` in chat replies
    source: str = ""
    #: user-facing apology when the provider call fails
    failure_reply: str = "I'm having trouble connecting right now. Please try again."

    def __init__(self, client: httpx.AsyncClient, api_key: str, model: str):
        self.client = client
        self.api_key = api_key
        self.model = model

    @abstractmethod
    async def generate(self, messages: list, temperature: float = 0.7) -> str:
        """Generate a reply for a role-structured message list"""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of the provider"""
        pass

    def _failure(self, exc: Exception) -> UpstreamTransportError:
        return UpstreamTransportError(
            f"Failed to get AI response from {self.get_provider_name()}",
            reply=self.failure_reply,
            details=upstream_error_message(exc),
        )

    def _contract_failure(self) -> UpstreamContractError:
        return UpstreamContractError(
            f"Failed to get AI response from {self.get_provider_name()}",
            reply=self.failure_reply,
            details=f"Invalid response from {self.get_provider_name()} API",
        )


class GeminiProvider(BaseLLMProvider):
    """Google Gemini Provider (generateContent, key in the query string)"""

    source = "gemini"
    failure_reply = (
        "I'm having trouble connecting to my AI service. "
        "Please check your API key configuration."
    )
    max_output_tokens = 1024

    def __init__(self, client: httpx.AsyncClient, api_key: str, model: str, api_version: str = "v1"):
        super().__init__(client, api_key, model)
        self.base_url = (
            f"https://generativelanguage.googleapis.com/{api_version}/models/{model}:generateContent"
        )

    async def generate_content(self, prompt: str, generation_config: dict | None = None) -> dict:
        """
        Single generateContent call; returns the raw payload.
        Raises httpx errors untouched so callers choose the error body.
        """
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        if generation_config:
            payload["generationConfig"] = generation_config

        response = await self.client.post(
            self.base_url,
            params={"key": self.api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
        )
        logs.log(logging.INFO, f"Gemini API Response Status: {response.status_code}")
        response.raise_for_status()
        return response.json()

    @staticmethod
    def extract_text(data: dict) -> str | None:
        """First candidate's first text part, or None if the path is missing."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text or None

    async def generate(self, messages: list, temperature: float = 0.7) -> str:
        # Gemini takes one prompt: fold the system instruction and user turns together
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
        user = "\n\n".join(m["content"] for m in messages if m["role"] != "system")
        prompt = f"{system}\n\nUser question: {user}\n\n" + (
            "Provide helpful, accurate, and engaging travel information. "
            "Be concise but informative. Format your response clearly with line breaks where appropriate."
        )

        try:
            data = await self.generate_content(
                prompt,
                {"temperature": temperature, "maxOutputTokens": self.max_output_tokens},
            )
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.ERROR, f"Gemini API error: {upstream_error_message(e)}")
            raise self._failure(e) from e

        reply = self.extract_text(data)
        if reply is None:
            logs.log(logging.ERROR, "Unexpected Gemini response structure", extra={"data": data})
            raise self._contract_failure()
        return reply

    def get_provider_name(self) -> str:
        return "Gemini"


class OpenAIProvider(BaseLLMProvider):
    """OpenAI Provider (chat completions, bearer token)"""

    source = "openai"
    max_tokens = 800

    def __init__(self, client: httpx.AsyncClient, api_key: str, model: str):
        super().__init__(client, api_key, model)
        self.base_url = "https://api.openai.com/v1/chat/completions"
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    async def generate(self, messages: list, temperature: float = 0.7) -> str:
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": self.max_tokens,
        }

        try:
            response = await self.client.post(
                self.base_url,
                json=payload,
                headers=self.headers,
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.ERROR, f"OpenAI API error: {upstream_error_message(e)}")
            raise self._failure(e) from e

        try:
            reply = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            reply = None
        if not isinstance(reply, str):
            logs.log(logging.ERROR, "Unexpected OpenAI response structure", extra={"data": data})
            raise self._contract_failure()
        return reply

    def get_provider_name(self) -> str:
        return "OpenAI"

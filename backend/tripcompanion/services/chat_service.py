import httpx
import logging
from tripcompanion.core.config import Settings
from tripcompanion.core.errors import (
    ConfigurationError,
    UpstreamContractError,
    UpstreamTransportError,
    ValidationError,
    upstream_error_body,
    upstream_error_message,
)
from tripcompanion.core.llm_connection import select_chat_provider
from tripcompanion.core.llm_providers import GeminiProvider
from tripcompanion.core.logger import logs
from tripcompanion.models.base_model import ChatRequest, ChatResponse, GeminiTestResponse

TRAVEL_ASSISTANT_PROMPT = (
    "You are TripCompanion, an expert AI travel assistant. You help users with:\n"
    "- Detailed information about destinations, cities, and countries\n"
    "- Hotel and accommodation recommendations\n"
    "- Tourist attractions and activities\n"
    "- Local cuisine and restaurants\n"
    "- Travel tips and cultural insights\n"
    "- Budget planning and cost estimates\n"
    "- Best times to visit places\n"
    "- Transportation options\n"
    "- Safety and travel advisories\n\n"
    "Provide helpful, accurate, and engaging travel information. Be concise but informative."
)

GEMINI_ASSISTANT_PROMPT = (
    "You are TripCompanion, an expert AI travel assistant. You help users with travel information, "
    "destination details, hotel recommendations, tourist attractions, local cuisine, travel tips, and more."
)

# System instruction per provider source
SYSTEM_PROMPTS = {
    "gemini": GEMINI_ASSISTANT_PROMPT,
    "openai": TRAVEL_ASSISTANT_PROMPT,
}

GEMINI_TEST_PROMPT = "Say 'Hello, TripCompanion is working!' in one sentence."

NOT_CONFIGURED_REPLY = (
    "The AI service is not configured. "
    "Please add GEMINI_API_KEY or OPENAI_API_KEY to your .env file."
)

class ChatService:
    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """
        Relays one user message to the highest-priority configured provider.
        Provider failures are reported as-is; there is no fallback to the next provider.
        """
        if not request.message:
            raise ValidationError("Message is required")

        logs.log(logging.INFO, f"Chat request from user: {request.userId}")
        logs.log(logging.INFO, f"Message: {request.message}")

        provider = select_chat_provider(self.settings, self.client)
        if provider is None:
            logs.log(logging.ERROR, "No AI service configured!")
            raise ConfigurationError("No AI service configured", reply=NOT_CONFIGURED_REPLY)

        messages = [
            {"role": "system", "content": SYSTEM_PROMPTS[provider.source]},
            {"role": "user", "content": request.message},
        ]

        logs.log(logging.INFO, f"Calling {provider.get_provider_name()} API...")
        reply = await provider.generate(messages, temperature=0.7)
        logs.log(logging.INFO, f"{provider.get_provider_name()} reply generated successfully")

        return ChatResponse(reply=reply, source=provider.source)

    async def test_gemini(self) -> GeminiTestResponse:
        """Fixed-prompt connectivity check against Gemini."""
        api_key = self.settings.GEMINI_API_KEY
        logs.log(logging.INFO, "Testing Gemini API...")
        logs.log(logging.INFO, f"API Key present: {bool(api_key)}")
        if not api_key:
            raise UpstreamTransportError("GEMINI_API_KEY is not configured", success=False)
        logs.log(logging.INFO, f"API Key prefix: {api_key[:10]}...")

        gemini = GeminiProvider(
            self.client,
            api_key=api_key,
            model=self.settings.GEMINI_MODEL,
            api_version=self.settings.GEMINI_API_VERSION,
        )
        try:
            data = await gemini.generate_content(GEMINI_TEST_PROMPT)
        except (httpx.HTTPError, ValueError) as e:
            error = upstream_error_body(e) or upstream_error_message(e)
            logs.log(logging.ERROR, f"Gemini test failed: {error}")
            raise UpstreamTransportError(error, success=False) from e

        reply = GeminiProvider.extract_text(data)
        if reply is None:
            logs.log(logging.ERROR, "Gemini test returned no text", extra={"data": data})
            raise UpstreamContractError("Invalid response from Gemini API", success=False)

        logs.log(logging.INFO, "Gemini test successful!")
        return GeminiTestResponse(success=True, response=data, reply=reply)

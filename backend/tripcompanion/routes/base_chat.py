import httpx
from fastapi import APIRouter, Depends

from tripcompanion.models.base_model import ChatRequest, ChatResponse, ChatErrorResponse
from tripcompanion.services.chat_service import ChatService
from tripcompanion.core.config import Settings, get_settings
from tripcompanion.core.http_client import get_http_client

router = APIRouter(prefix="/api")

# --- Dependency Injection Helper ---
def get_chat_service(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> ChatService:
    return ChatService(settings, client)

# --- The Endpoint ---
@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ChatErrorResponse}, 500: {"model": ChatErrorResponse}},
)
async def chat_endpoint(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service)
):
    """
    Receives the message from the mobile app, relays it to the configured
    AI provider, and returns its reply.
    """
    return await service.chat(request)

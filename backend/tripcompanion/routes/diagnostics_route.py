from fastapi import APIRouter, Depends

from tripcompanion.models.base_model import GeminiTestResponse, HealthResponse, ServicesStatus
from tripcompanion.services.chat_service import ChatService
from tripcompanion.routes.base_chat import get_chat_service
from tripcompanion.core.config import Settings, get_settings

router = APIRouter()

@router.post("/api/test-gemini", response_model=GeminiTestResponse)
async def test_gemini_endpoint(service: ChatService = Depends(get_chat_service)):
    return await service.test_gemini()

# --- Health Check ---
@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    return HealthResponse(services=ServicesStatus(**settings.services))

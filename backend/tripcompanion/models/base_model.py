from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, Literal

# --- API Request/Response Models ---
class ChatRequest(BaseModel):
    message: Optional[str] = Field(None, description="User's input message")
    userId: Optional[str] = Field(None, description="Caller's user id, used for logging only")

class ChatResponse(BaseModel):
    reply: str
    source: Literal["gemini", "openai"]

class ChatErrorResponse(BaseModel):
    error: str
    reply: str
    details: Optional[str] = None

class GeminiTestResponse(BaseModel):
    success: bool
    response: Dict[str, Any]
    reply: str

class ServicesStatus(BaseModel):
    googleMaps: bool
    openai: bool
    gemini: bool

class HealthResponse(BaseModel):
    status: str = "OK"
    message: str = "Backend server is running"
    services: ServicesStatus

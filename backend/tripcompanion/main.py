import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripcompanion.core.config import get_settings
from tripcompanion.core.errors import register_exception_handlers
from tripcompanion.core.http_client import http_client_lifespan
from tripcompanion.core.logger import logs
from tripcompanion.routes.base_chat import router
from tripcompanion.routes.places_route import router as places_router
from tripcompanion.routes.diagnostics_route import router as diagnostics_router

def log_configured_services() -> None:
    settings = get_settings()
    services = settings.services
    mark = lambda ok: "Configured" if ok else "Not configured"
    logs.log(logging.INFO, f"Server running on http://localhost:{settings.PORT}")
    logs.log(logging.INFO, f"Google Maps API: {mark(services['googleMaps'])}")
    logs.log(logging.INFO, f"OpenAI API: {mark(services['openai'])}")
    logs.log(logging.INFO, f"Gemini API: {mark(services['gemini'])}")
    if not services["openai"] and not services["gemini"]:
        logs.log(logging.WARNING, "No AI service configured! Please add an API key to .env")

@asynccontextmanager
async def lifespan(app: FastAPI):
    async with http_client_lifespan(app):
        log_configured_services()
        yield

app = FastAPI(title="TripCompanion Relay", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(router)
app.include_router(places_router)
app.include_router(diagnostics_router)

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to TripCompanion Relay API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "chat": "/api/chat",
            "places": "/api/places",
            "placeDetails": "/api/place-details",
            "photoUrl": "/get-photo-url",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

def run():
    import uvicorn
    uvicorn.run("tripcompanion.main:app", host="0.0.0.0", port=get_settings().PORT)

if __name__ == "__main__":
    run()

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from tripcompanion.core.config import get_settings
from tripcompanion.core.logger import logs

@asynccontextmanager
async def http_client_lifespan(app: FastAPI):
    """
    Opens the one outbound httpx client shared by every request
    and closes it when the server shuts down.
    """
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        app.state.http_client = client
        logs.log(logging.DEBUG, f"Outbound HTTP client opened (timeout={settings.HTTP_TIMEOUT}s)")
        yield
    logs.log(logging.DEBUG, "Outbound HTTP client closed")

# Dependency for FastAPI
async def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client

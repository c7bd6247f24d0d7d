"""
FastAPI application for the YouTube Video Analyzer.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from video_analyzer.config import config
from video_analyzer.api.routes import router
from video_analyzer.core.conversations import ConversationStore
from video_analyzer.core.gemini_client import GeminiChatClient
from video_analyzer.utils.logger import logging


def create_app(chat_client: Optional[GeminiChatClient] = None, store: Optional[ConversationStore] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        chat_client: Chat client to use (if None, a Gemini client is created at startup)
        store: Conversation store to use (if None, an empty one is created)

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create shared components on startup and drop conversations on shutdown."""
        if app.state.chat_client is None:
            # A missing key stops the server before it accepts requests.
            config.validate()
            app.state.chat_client = GeminiChatClient()
        logging.info(f"{config.APP_NAME} API ready (model {app.state.chat_client.model})")
        yield
        dropped = app.state.store.clear()
        logging.info(f"Shutdown: dropped {dropped} conversation(s)")

    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description="An API for summarizing YouTube videos with Gemini and chatting about them",
        lifespan=lifespan,
    )
    app.state.chat_client = chat_client
    app.state.store = store or ConversationStore()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Middleware to add processing time header to responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled exceptions."""
        logging.error(f"Unhandled error on {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"detail": f"An unexpected error occurred: {str(exc)}"},
        )

    # Include API router
    app.include_router(router)

    # Root
    @app.get("/")
    async def root():
        """Root endpoint returning basic API information."""
        return {
            "name": config.APP_NAME,
            "version": config.APP_VERSION,
            "description": "YouTube Video Analyzer API",
        }

    return app


app = create_app()
